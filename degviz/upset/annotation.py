"""
Genomic annotation bucketing for ChIPseeker peak tables

ChIPseeker ``annotatePeak`` reports detailed annotations such as
``"Intron (ENST00000381578.6/6535, intron 2 of 7)"`` or
``"Promoter (<=1kb)"``. These helpers collapse them into a handful of
feature categories and gather, per gene, every category it has a peak in.
"""

from typing import Dict, Iterable, List, Tuple, Union

import pandas as pd

from ..exceptions import ConfigError, EmptyInputError
from ..utils import get_logger, validate_columns

logger = get_logger(__name__)

GENE_COL = "geneId"
ANNOTATION_COL = "annotation"
SIMPLE_COL = "annotation_simple"
MEMBERSHIP_COL = "annot_list"

# Checked in order, first substring match wins
ANNOTATION_RULES: List[Tuple[str, str]] = [
    ("Promoter", "Promoter"),
    ("Intron", "Intron"),
    ("Exon", "Exon"),
    ("Distal Intergenic", "Distal Intergenic"),
    ("Downstream", "Downstream"),
    ("UTR", "5' or 3' UTR"),
]
OTHER_CATEGORY = "Others"

ORDER_BY_OPTIONS = ("freq", "degree")


def simplify_annotation(annotation) -> str:
    """Map a detailed ChIPseeker annotation onto a feature category"""
    if annotation is None or (not isinstance(annotation, str) and pd.isna(annotation)):
        return OTHER_CATEGORY

    text = str(annotation)
    for pattern, category in ANNOTATION_RULES:
        if pattern in text:
            return category
    return OTHER_CATEGORY


def build_annotation_memberships(data: pd.DataFrame) -> pd.DataFrame:
    """
    One row per gene with the list of categories it has peaks in

    Args:
        data: ChIPseeker annotation table with ``geneId`` and ``annotation``

    Returns:
        DataFrame with columns ``geneId`` and ``annot_list``

    Raises:
        SchemaError: If ``geneId`` or ``annotation`` is missing
        EmptyInputError: If the table has no rows with a gene id
    """
    validate_columns(data, [GENE_COL, ANNOTATION_COL], table_name="annotation table")

    plot_data = data[[GENE_COL, ANNOTATION_COL]].copy()
    plot_data = plot_data[plot_data[GENE_COL].notna()]
    if plot_data.empty:
        raise EmptyInputError("Annotation table has no rows with a geneId")

    plot_data[SIMPLE_COL] = plot_data[ANNOTATION_COL].map(simplify_annotation)
    plot_data = plot_data.drop_duplicates(subset=[GENE_COL, SIMPLE_COL])

    memberships = (
        plot_data.groupby(GENE_COL, sort=False)[SIMPLE_COL]
        .agg(list)
        .reset_index()
        .rename(columns={SIMPLE_COL: MEMBERSHIP_COL})
    )

    logger.debug(
        f"{len(data)} peaks collapsed to {len(memberships)} genes "
        f"across {plot_data[SIMPLE_COL].nunique()} categories"
    )
    return memberships


def count_intersections(
    memberships: Union[pd.DataFrame, Iterable[Iterable[str]]],
    order_by: str = "freq",
) -> pd.Series:
    """
    Number of genes per category combination

    Args:
        memberships: Output of :func:`build_annotation_memberships` or an
            iterable of per-gene category lists
        order_by: ``"freq"`` for largest first, ``"degree"`` for fewest
            categories first (then largest first)

    Returns:
        Series indexed by sorted category tuples
    """
    if order_by not in ORDER_BY_OPTIONS:
        raise ConfigError(f"order_by must be one of {ORDER_BY_OPTIONS}, got {order_by!r}")

    if isinstance(memberships, pd.DataFrame):
        lists = memberships[MEMBERSHIP_COL]
    else:
        lists = memberships

    counts: Dict[Tuple[str, ...], int] = {}
    for categories in lists:
        key = tuple(sorted(set(categories)))
        counts[key] = counts.get(key, 0) + 1

    if order_by == "freq":
        ordered = sorted(counts.items(), key=lambda kv: -kv[1])
    else:
        ordered = sorted(counts.items(), key=lambda kv: (len(kv[0]), -kv[1]))

    return pd.Series(
        [n for _, n in ordered],
        index=pd.Index([k for k, _ in ordered], tupleize_cols=False),
        name="count",
        dtype=int,
    )


def upset_y_limit(counts: pd.Series, headroom: float = 1.2) -> float:
    """Upper limit of the intersection-size axis"""
    if counts.empty:
        return headroom
    return float(counts.max()) * headroom
