"""
Volcano plots for differential expression results

This module provides:
- Cleaning of DESeq2-style result tables (missing and zero p-values)
- Up/down/non-significant classification by padj and log2 fold change
- Top-N gene selection for labelling
- Outlier-aware, symmetric axis ranges
- matplotlib rendering with repelled gene labels
"""

from .plot import draw_volcano, plot_volcano_data
from .prepare import (AxisScaling, VolcanoData, VolcanoPlotPreparer,
                      classify_genes, compute_x_limit, compute_y_limit,
                      prepare_volcano_data, replace_zero_pvalues)
from .styles import (CATEGORY_ORDER, DEFAULT_PLOT_COLORS, DOWN_REGULATED,
                     NOT_SIGNIFICANT, UP_REGULATED, validate_plot_colors)

__all__ = [
    "VolcanoPlotPreparer",
    "VolcanoData",
    "AxisScaling",
    "prepare_volcano_data",
    "replace_zero_pvalues",
    "classify_genes",
    "compute_x_limit",
    "compute_y_limit",
    "draw_volcano",
    "plot_volcano_data",
    "UP_REGULATED",
    "DOWN_REGULATED",
    "NOT_SIGNIFICANT",
    "CATEGORY_ORDER",
    "DEFAULT_PLOT_COLORS",
    "validate_plot_colors",
]
