"""
Chart output: open-order snapshot -> gnuplot data file -> PNG.

Rendering is delegated to the external gnuplot binary; the engine never draws.
"""

from charts.gnuplot import render_chart, write_chart_data

__all__ = ["render_chart", "write_chart_data"]
