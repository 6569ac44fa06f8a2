"""
UpSet plot of genomic annotation overlap for ATAC-seq peaks
"""

from pathlib import Path
from typing import Dict, Optional, Union

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure
from upsetplot import UpSet, from_memberships

from ..exceptions import ConfigError
from ..utils import get_logger, log_execution_time, save_figure
from .annotation import (MEMBERSHIP_COL, build_annotation_memberships,
                         count_intersections, upset_y_limit)

logger = get_logger(__name__)

# ggplot-style text sizes are given in mm
MM_TO_PT = 72.27 / 25.4

UPSET_SORT = {"freq": "cardinality", "degree": "degree"}

TITLE_TEMPLATE = "Genomic Annotation Overlap: {sample_name}"
SUBTITLE = "Genes with peaks in multiple genomic features"


def _keep_top_intersections(memberships: pd.DataFrame, counts: pd.Series) -> pd.DataFrame:
    keep = set(counts.index)
    mask = memberships[MEMBERSHIP_COL].map(lambda cats: tuple(sorted(set(cats))) in keep)
    return memberships[mask]


def _style_axes(
    axes: Dict[str, plt.Axes],
    y_limit: float,
    bar_text_angle: float,
    bar_text_size: float,
) -> None:
    bars = axes["intersections"]
    bars.set_ylim(0, y_limit)
    bars.set_ylabel("Number of Genes", fontsize=7)
    bars.grid(False, axis="x")
    # upsetplot's show_counts labels fail to render with numpy>=2.3
    for container in bars.containers:
        bars.bar_label(
            container,
            fmt="%d",
            rotation=bar_text_angle,
            fontsize=bar_text_size * MM_TO_PT,
            padding=1,
        )

    matrix = axes["matrix"]
    matrix.set_xlabel("Genomic Features Intersection", fontsize=7)
    for label in matrix.get_yticklabels():
        label.set_fontsize(6)
        label.set_color("black")


@log_execution_time
def draw_atac_upset(
    data: pd.DataFrame,
    fill_color: str = "#56B4E9",
    bar_text_angle: float = 90,
    bar_text_size: float = 2.7,
    upset_top_n: int = 20,
    upset_order_by: str = "freq",
    img_width: float = 5,
    img_height: float = 4,
    sample_name: str = "atac_upset",
    save_dir: Union[str, Path] = ".",
    dpi: int = 1000,
    save: bool = True,
) -> Figure:
    """
    Draw an UpSet plot of the genomic features each gene has peaks in

    Annotations from a ChIPseeker ``annotatePeak`` table are collapsed into
    Promoter / Intron / Exon / Distal Intergenic / Downstream / UTR / Others,
    and every gene is counted once per combination of features. The figure
    is written to ``{save_dir}/{sample_name}_atac_ann.png`` and ``.pdf``.

    Args:
        data: Annotation table with ``geneId`` and ``annotation`` columns
        fill_color: Colour of the intersection bars
        bar_text_angle: Rotation of the count labels on top of the bars
        bar_text_size: Font size of the count labels, in mm
        upset_top_n: Number of most frequent combinations to show
        upset_order_by: ``"freq"`` (count, descending) or ``"degree"``
        img_width: Saved image width in inches
        img_height: Saved image height in inches
        sample_name: Used in the title and the output file names
        save_dir: Output directory, created if missing
        dpi: Resolution of the saved images
        save: Set to False to skip writing files

    Returns:
        The matplotlib Figure holding the UpSet plot

    Raises:
        SchemaError: If ``geneId`` or ``annotation`` is missing
        EmptyInputError: If no row has a gene id
        ConfigError: If ``upset_order_by`` is not recognised or
            ``upset_top_n`` is below 1
    """
    logger.info(f"Processing sample: {sample_name} ...")

    if upset_top_n < 1:
        raise ConfigError(f"upset_top_n must be at least 1, got {upset_top_n}")

    memberships = build_annotation_memberships(data)
    all_counts = count_intersections(memberships, order_by=upset_order_by)
    y_limit = upset_y_limit(all_counts)

    top_counts = all_counts.head(upset_top_n)
    shown = _keep_top_intersections(memberships, top_counts)
    logger.info(
        f"{len(memberships)} genes in {len(all_counts)} combinations, "
        f"showing {len(top_counts)}"
    )

    upset_data = from_memberships(shown[MEMBERSHIP_COL].tolist())
    upset = UpSet(
        upset_data,
        subset_size="count",
        sort_by=UPSET_SORT[upset_order_by],
        facecolor=fill_color,
        show_counts=False,
        element_size=None,
    )

    fig = plt.figure(figsize=(img_width, img_height))
    axes = upset.plot(fig=fig)
    _style_axes(axes, y_limit, bar_text_angle, bar_text_size)

    fig.suptitle(TITLE_TEMPLATE.format(sample_name=sample_name), fontweight="bold", fontsize=8)
    axes["intersections"].set_title(SUBTITLE, fontsize=7, loc="left")

    if save:
        file_base = Path(save_dir) / f"{sample_name}_atac_ann"
        save_figure(
            fig,
            file_base,
            formats=["png", "pdf"],
            dpi=dpi,
            width=img_width,
            height=img_height,
        )
        logger.info(f"Plot finished, saved to: {save_dir}")

    return fig
