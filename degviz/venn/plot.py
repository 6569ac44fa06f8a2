"""
Venn diagram of gene sets with a custom legend panel

The diagram labels each set with a short name (A, B, ...) and a separate
panel spells out the full name behind every short label.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from venn import draw_venn, generate_petal_labels

from ..exceptions import ConfigError
from ..utils import get_logger, log_execution_time, save_figure

logger = get_logger(__name__)

DEFAULT_SET_COLORS = ("#9b5de5", "#f15bb5", "#fee440", "#00bbf9")
DEFAULT_SHORT_NAMES = ("A", "B", "C", "D")
DEFAULT_LEGEND_ORDER = ("D", "C", "B", "A")

MIN_SETS = 2
MAX_SETS = 6

LABEL_FORMATS = {
    "count": "{size}",
    "percent": "{percentage:.1f}%",
    "both": "{size}\n({percentage:.1f}%)",
}


def _validate_venn_inputs(
    gene_sets: Mapping[str, Iterable[str]],
    set_colors: Sequence[str],
    short_names: Sequence[str],
    legend_order: Sequence[str],
    label: str,
) -> Dict[str, Set[str]]:
    if not isinstance(gene_sets, Mapping):
        raise ConfigError("gene_sets must be a mapping of set name to genes")

    n_sets = len(gene_sets)
    if not MIN_SETS <= n_sets <= MAX_SETS:
        raise ConfigError(
            f"gene_sets must contain between {MIN_SETS} and {MAX_SETS} sets, got {n_sets}"
        )

    for name in gene_sets:
        if not isinstance(name, str) or not name.strip():
            raise ConfigError("Every gene set must have a non-empty name")

    for arg_name, values in (
        ("set_colors", set_colors),
        ("short_names", short_names),
        ("legend_order", legend_order),
    ):
        if len(values) != n_sets:
            raise ConfigError(
                f"{arg_name} must have {n_sets} elements (one per set), got {len(values)}"
            )

    if len(set(short_names)) != n_sets:
        raise ConfigError(f"short_names must be unique: {list(short_names)}")
    if sorted(legend_order) != sorted(short_names):
        raise ConfigError(
            f"legend_order {list(legend_order)} must be a permutation of "
            f"short_names {list(short_names)}"
        )

    if label not in LABEL_FORMATS:
        raise ConfigError(f"label must be one of {sorted(LABEL_FORMATS)}, got {label!r}")

    return {name: set(genes) for name, genes in gene_sets.items()}


def build_legend_table(
    long_names: Sequence[str],
    short_names: Sequence[str],
    legend_order: Sequence[str],
) -> List[Tuple[str, str, int]]:
    """
    Rows of the legend panel

    Returns:
        ``(short_name, "short: long", y_position)`` per set, in set order.
        The first entry of ``legend_order`` sits at the bottom (y=0).
    """
    positions = {short: i for i, short in enumerate(legend_order)}
    return [
        (short, f"{short}: {long}", positions[short])
        for short, long in zip(short_names, long_names)
    ]


def _draw_legend_panel(
    ax: Axes,
    rows: List[Tuple[str, str, int]],
    colors: Dict[str, str],
    legend_title: str,
    fontsize: float = 10,
) -> None:
    for short, text, y in rows:
        ax.scatter(0.1, y, s=120, color=colors[short], marker="o")
        ax.text(0.2, y, text, ha="left", va="center", fontsize=fontsize)

    ax.set_xlim(0, 1)
    ax.set_ylim(-0.5, len(rows) - 0.5)
    ax.set_axis_off()
    ax.set_title(legend_title, loc="left", fontweight="bold", fontsize=12, pad=5)


@log_execution_time
def draw_venn_with_legend(
    gene_sets: Mapping[str, Iterable[str]],
    title: str = "Venn Diagram of Root DEGs",
    set_colors: Sequence[str] = DEFAULT_SET_COLORS,
    short_names: Sequence[str] = DEFAULT_SHORT_NAMES,
    legend_order: Sequence[str] = DEFAULT_LEGEND_ORDER,
    legend_title: str = "Groups",
    layout_widths: Sequence[float] = (3, 1.5),
    label: str = "both",
    fill_alpha: float = 0.25,
    label_fontsize: float = 10,
    set_key_loc: Optional[str] = "upper left",
    figsize: Tuple[float, float] = (9, 5),
    output_path: Optional[Union[str, Path]] = None,
    formats: Optional[Iterable[str]] = None,
    dpi: int = 300,
) -> Figure:
    """
    Draw a Venn diagram of named gene sets next to a custom legend

    Args:
        gene_sets: Ordered mapping of full set name -> gene identifiers.
            The full names are shown in the legend panel.
        title: Title of the Venn panel
        set_colors: One colour per set
        short_names: One short label per set, shown in the Venn panel key
        legend_order: Short names in bottom-to-top legend order
        legend_title: Title of the legend panel
        layout_widths: Width ratio of the Venn panel to the legend panel
        label: Region labels, ``"count"``, ``"percent"`` or ``"both"``
        output_path: If given, the figure is also written there

    Returns:
        Figure with the Venn panel and the legend panel side by side

    Raises:
        ConfigError: If the sets or the per-set arguments are inconsistent
    """
    sets = _validate_venn_inputs(gene_sets, set_colors, short_names, legend_order, label)
    long_names = list(sets)

    logger.info(
        "Drawing Venn diagram for "
        + ", ".join(f"{s}={len(sets[n])}" for s, n in zip(short_names, long_names))
    )

    fig, (ax_venn, ax_legend) = plt.subplots(
        1, 2, figsize=figsize, gridspec_kw={"width_ratios": list(layout_widths)}
    )

    petal_labels = generate_petal_labels(list(sets.values()), fmt=LABEL_FORMATS[label])
    draw_venn(
        petal_labels=petal_labels,
        dataset_labels=list(short_names),
        hint_hidden=False,
        colors=[to_rgba(c, alpha=fill_alpha) for c in set_colors],
        figsize=figsize,
        fontsize=label_fontsize,
        legend_loc=set_key_loc,
        ax=ax_venn,
    )
    # Shapes are drawn in set order; outline each in its own colour
    for patch, color in zip(ax_venn.patches, set_colors):
        patch.set_edgecolor(color)
        patch.set_linewidth(1.0)
    ax_venn.set_axis_off()
    ax_venn.set_title(title, loc="center")

    rows = build_legend_table(long_names, short_names, legend_order)
    _draw_legend_panel(
        ax_legend, rows, dict(zip(short_names, set_colors)), legend_title
    )

    if output_path is not None:
        save_figure(fig, output_path, formats=formats, dpi=dpi)

    return fig
