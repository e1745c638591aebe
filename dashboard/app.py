"""
Grid dashboard: open orders per level, recent fills and retired orders.
Run from repo root: streamlit run dashboard/app.py
Or with data dir: GRID_DASHBOARD_DATA_DIR=/path/to/data streamlit run dashboard/app.py
"""

import streamlit as st

from data_reader import (
    _data_dir,
    get_open_orders,
    get_recent_journal_events,
    journal_path,
    total_realized_pnl,
)

st.set_page_config(page_title="Grid Dashboard", layout="wide")
st.title("Grid Paper Trading Dashboard")

data_dir = _data_dir()
if not journal_path(data_dir).exists():
    st.warning(f"No journal found under: `{data_dir}`")
    st.caption("Run `grid run --chart` with log_file_path and data_file_path pointing into this directory.")
    st.stop()

col_refresh, col_auto = st.columns([1, 3])
with col_refresh:
    if st.button("Refresh"):
        st.rerun()
with col_auto:
    auto_refresh = st.checkbox("Auto-refresh every 60s", value=False)

orders = get_open_orders(data_dir)
fills = get_recent_journal_events(event_type="fill", limit=20, data_dir=data_dir)

c1, c2, c3 = st.columns(3)
with c1:
    st.metric("Open orders", len(orders))
with c2:
    st.metric("Realized P&L", f"{total_realized_pnl(data_dir):+.4f}")
with c3:
    st.metric("Recent fills", len(fills))

st.subheader("Open orders by grid level")
if orders:
    st.line_chart(
        {"level": [o["level"] for o in orders], "price": [o["price"] for o in orders]},
        x="level",
        y="price",
    )
    st.dataframe(orders, use_container_width=True)
else:
    st.caption("No open orders (or no chart data written yet).")

with st.expander("Recent fills", expanded=True):
    if not fills:
        st.caption("No fills yet.")
    for f in fills:
        ts = (f.get("ts_utc") or "")[:19]
        pnl = f.get("realized_pnl")
        pnl_str = f"  pnl {pnl:+.4f}" if pnl is not None else ""
        st.text(f"{ts}  {f.get('order_id')}  {f.get('side')}  {f.get('quantity')} @ {f.get('price')}{pnl_str}")

with st.expander("Retired orders", expanded=False):
    closed = get_recent_journal_events(event_type="order_closed", limit=20, data_dir=data_dir)
    if not closed:
        st.caption("No orders retired yet.")
    for e in closed:
        ts = (e.get("ts_utc") or "")[:19]
        st.text(f"{ts}  {e.get('order_id')}  {e.get('side')} at level {e.get('level')}")

with st.expander("Risk rejections", expanded=False):
    rejected = get_recent_journal_events(event_type="order_rejected", limit=20, data_dir=data_dir)
    if not rejected:
        st.caption("No rejections.")
    for e in rejected:
        ts = (e.get("ts_utc") or "")[:19]
        st.text(f"{ts}  {e.get('side')} at {e.get('level')}: {e.get('reason')}")

if auto_refresh:
    import time
    time.sleep(60)
    st.rerun()
