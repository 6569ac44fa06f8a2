"""
Venn diagrams of gene sets with a custom legend panel
"""

from .plot import build_legend_table, draw_venn_with_legend

__all__ = ["draw_venn_with_legend", "build_legend_table"]
