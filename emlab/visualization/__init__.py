"""Plotly figures for curves, grids, Smith charts and radiation patterns."""

from .plotly_viz import plot_curve, plot_smith, plot_field_heatmap, plot_field_arrows, plot_polar_pattern, plot_result
