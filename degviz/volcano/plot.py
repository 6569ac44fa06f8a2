"""
Volcano plot rendering

Draws the output of :class:`~degviz.volcano.prepare.VolcanoPlotPreparer`
with matplotlib, using seaborn styling and adjustText for label repulsion.
"""

from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from adjustText import adjust_text
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import MaxNLocator

from ..utils import get_logger, log_execution_time, save_figure
from .prepare import (GROUP_COL, LFC_COL, NEG_LOG10_PADJ_COL, AxisScaling,
                      VolcanoData, VolcanoPlotPreparer)
from .styles import (CATEGORY_ORDER, DEFAULT_PLOT_COLORS, DOWN_REGULATED,
                     NOT_SIGNIFICANT, UP_REGULATED, validate_plot_colors)

logger = get_logger(__name__)

REFERENCE_LINE_STYLE = {"linestyle": "--", "color": "black", "linewidth": 0.4}


def _add_gene_labels(
    ax: Axes,
    data: VolcanoData,
    label_size: float,
    label_force: float,
) -> list:
    """Label the top up/down genes and push labels apart"""
    labelled = pd.concat([data.top_up, data.top_down])
    if labelled.empty:
        return []

    texts = [
        ax.text(
            row[LFC_COL],
            row[NEG_LOG10_PADJ_COL],
            str(row[data.symbol_col]),
            fontsize=label_size,
            fontweight="bold",
            fontstyle="italic",
            color="black",
        )
        for _, row in labelled.iterrows()
    ]

    adjust_text(
        texts,
        x=labelled[LFC_COL].to_numpy(dtype=float),
        y=labelled[NEG_LOG10_PADJ_COL].to_numpy(dtype=float),
        ax=ax,
        force_text=(label_force, label_force),
        iter_lim=3000,
        arrowprops=dict(arrowstyle="->", color="black", lw=0.3, alpha=0.5),
    )
    return texts


def plot_volcano_data(
    data: VolcanoData,
    exp_name: str = "Volcano",
    label_size: float = 6,
    label_force: float = 0.5,
    point_size: float = 4,
    point_alpha: float = 0.3,
    plot_colors: Mapping[str, str] = DEFAULT_PLOT_COLORS,
    figsize: Tuple[float, float] = (6, 6),
    ax: Optional[Axes] = None,
) -> Figure:
    """
    Render prepared volcano data

    Args:
        data: Output of the volcano preparer
        exp_name: Experiment name used in the title and X label
        label_size: Font size of gene labels
        label_force: Repulsion force passed to adjustText
        point_size: Marker area
        point_alpha: Marker transparency
        plot_colors: Category -> colour mapping (all three categories)
        figsize: Figure size when a new figure is created
        ax: Existing axes to draw on

    Returns:
        The matplotlib Figure holding the plot
    """
    colors = validate_plot_colors(plot_colors)

    sns.set_style("ticks")
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    table = data.table
    for category in CATEGORY_ORDER:
        subset = table[table[GROUP_COL] == category]
        ax.scatter(
            subset[LFC_COL],
            subset[NEG_LOG10_PADJ_COL],
            s=point_size,
            alpha=point_alpha,
            facecolors=colors[category],
            edgecolors=colors[category],
            linewidths=0.3,
            marker="o",
            label=category,
            rasterized=len(subset) > 5000,
        )

    ax.axhline(-np.log10(data.pval_cutoff), **REFERENCE_LINE_STYLE)
    ax.axvline(data.lfc_cutoff, **REFERENCE_LINE_STYLE)
    ax.axvline(-data.lfc_cutoff, **REFERENCE_LINE_STYLE)

    ax.set_xlim(-data.x_limit, data.x_limit)
    ax.set_ylim(0, data.y_limit)
    ax.xaxis.set_major_locator(MaxNLocator(nbins=8))
    ax.yaxis.set_major_locator(MaxNLocator(nbins=6))

    ax.set_xlabel(rf"RNA-seq $\log_2$ fold change {exp_name}")
    ax.set_ylabel(r"$-\log_{10}$ (Adjusted P-value)")
    ax.set_title(f"{exp_name} Volcano Plot", loc="center")
    sns.despine(ax=ax)

    legend = ax.legend(
        title="Group",
        loc="upper center",
        bbox_to_anchor=(0.5, -0.12),
        ncol=len(CATEGORY_ORDER),
        frameon=False,
        markerscale=2,
    )
    for handle in legend.legend_handles:
        handle.set_alpha(0.5)

    _add_gene_labels(ax, data, label_size, label_force)

    return fig


@log_execution_time
def draw_volcano(
    deg_result: pd.DataFrame,
    pval_cutoff: float,
    lfc_cutoff: float,
    exp_name: str = "Volcano",
    y_limit: Optional[float] = None,
    label_n_top: int = 15,
    label_size: float = 6,
    label_force: float = 0.5,
    point_size: float = 4,
    point_alpha: float = 0.3,
    plot_colors: Mapping[str, str] = DEFAULT_PLOT_COLORS,
    symbol_col: str = "Symbol",
    scaling: Optional[AxisScaling] = None,
    figsize: Tuple[float, float] = (6, 6),
    ax: Optional[Axes] = None,
    output_path: Optional[Union[str, Path]] = None,
    formats: Optional[Iterable[str]] = None,
    dpi: int = 300,
) -> Figure:
    """
    Draw a volcano plot from a DESeq2-style results table

    Uses ``padj`` both for significance and for the Y axis. The ``label_n_top``
    most significant up- and down-regulated genes are labelled.

    Args:
        deg_result: Table with ``Symbol``, ``log2FoldChange``, ``pvalue``
            and ``padj`` columns
        pval_cutoff: Adjusted p-value threshold (e.g. 0.05)
        lfc_cutoff: log2 fold change threshold (e.g. 1)
        exp_name: Experiment name for the title and X label
        y_limit: Fixed Y-axis maximum, auto-calculated if None
        label_n_top: Number of genes to label per direction
        output_path: If given, the figure is also written there
        formats: Image formats to write (suffix of ``output_path`` if None)
        dpi: Resolution of written images

    Returns:
        The matplotlib Figure holding the plot

    Raises:
        ConfigError: If ``plot_colors`` does not define exactly the three categories
        SchemaError: If a required column is missing
        EmptyInputError: If no row has both pvalue and padj
    """
    # Fail on a bad colour mapping before touching the data
    validate_plot_colors(plot_colors)

    preparer = VolcanoPlotPreparer(
        pval_cutoff=pval_cutoff,
        lfc_cutoff=lfc_cutoff,
        top_n=label_n_top,
        symbol_col=symbol_col,
        scaling=scaling,
    )
    data = preparer.prepare(deg_result, y_limit=y_limit)

    counts = data.group_counts
    logger.info(
        f"{exp_name}: {counts[UP_REGULATED]} up, "
        f"{counts[DOWN_REGULATED]} down, "
        f"{counts[NOT_SIGNIFICANT]} non-significant"
    )

    fig = plot_volcano_data(
        data,
        exp_name=exp_name,
        label_size=label_size,
        label_force=label_force,
        point_size=point_size,
        point_alpha=point_alpha,
        plot_colors=plot_colors,
        figsize=figsize,
        ax=ax,
    )

    if output_path is not None:
        save_figure(fig, output_path, formats=formats, dpi=dpi)

    return fig
