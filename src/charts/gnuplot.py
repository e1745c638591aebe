"""
Write the open-order snapshot as a whitespace-separated data file and hand
it to gnuplot.

Data file: one line per open order, ``<grid level> <order price> <quantity>``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable

from grid_core.contracts import OrderSnapshot

logger = logging.getLogger("grid.charts")


def write_chart_data(snapshots: Iterable[OrderSnapshot], path: str | Path) -> int:
    """Overwrite *path* with the snapshot. Returns the number of rows written."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with open(out, "w") as f:
        for snap in snapshots:
            f.write(f"{snap.level_price:g} {snap.price:g} {snap.quantity:g}\n")
            rows += 1
    return rows


def gnuplot_script(data_path: str | Path, output_path: str | Path) -> str:
    return (
        f"set terminal png; set output '{output_path}'; "
        f"plot '{data_path}' using 1:2 with linespoints"
    )


def render_chart(data_path: str | Path, output_path: str | Path, gnuplot: str = "gnuplot") -> bool:
    """Render *data_path* to a PNG at *output_path*.

    Returns False (and logs a warning) when gnuplot is not installed or exits
    non-zero. Chart failures never affect trading.
    """
    exe = shutil.which(gnuplot)
    if exe is None:
        logger.warning("gnuplot not found (%s); skipping chart", gnuplot)
        return False
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    try:
        subprocess.run([exe, "-e", gnuplot_script(data_path, output_path)], check=True, capture_output=True, timeout=30)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as exc:
        logger.warning("gnuplot failed: %s", exc)
        return False
    return True
