"""
Data preparation for volcano plots

Cleans a differential-expression table, classifies each gene as up-,
down- or non-regulated, picks the genes to label and derives symmetric
axis ranges. Nothing here draws; the result is consumed by
:func:`degviz.volcano.plot.draw_volcano`.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import numpy as np
import pandas as pd

from ..exceptions import EmptyInputError
from ..utils import get_logger, validate_columns
from .styles import (CATEGORY_ORDER, DOWN_REGULATED, NOT_SIGNIFICANT,
                     UP_REGULATED)

logger = get_logger(__name__)

LFC_COL = "log2FoldChange"
PVALUE_COL = "pvalue"
PADJ_COL = "padj"
NEG_LOG10_PADJ_COL = "neg_log10_padj"
GROUP_COL = "group"

# Smallest positive normal double, used in place of p-values reported as 0
MIN_POSITIVE_FLOAT = float(np.finfo(float).tiny)


@dataclass(frozen=True)
class AxisScaling:
    """Empirically tuned constants for volcano axis ranges"""

    default_y_limit: float = 10.0
    y_extreme_cutoff: float = 300.0
    y_extreme_limit: float = 250.0
    y_outlier_ratio: float = 1.4
    y_padding: float = 1.1
    x_clamp: float = 7.5
    x_scale: float = 1.7
    x_floor: float = 3.0

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> "AxisScaling":
        """Build from a config section, ignoring unknown keys"""
        if not values:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in values.items() if k in known})


@dataclass
class VolcanoData:
    """Everything the volcano renderer needs"""

    table: pd.DataFrame
    top_up: pd.DataFrame
    top_down: pd.DataFrame
    x_limit: float
    y_limit: float
    pval_cutoff: float
    lfc_cutoff: float
    symbol_col: str = "Symbol"

    @property
    def group_counts(self) -> Dict[str, int]:
        """Number of genes per regulation category"""
        counts = self.table[GROUP_COL].value_counts()
        return {cat: int(counts.get(cat, 0)) for cat in CATEGORY_ORDER}


def _to_frame(records: Union[pd.DataFrame, Iterable[Mapping[str, Any]]]) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return records.copy()
    return pd.DataFrame(list(records))


def replace_zero_pvalues(df: pd.DataFrame) -> pd.DataFrame:
    """
    Substitute zero p-values so that -log10 stays finite

    Zero ``pvalue`` entries become the smallest positive double. Zero
    ``padj`` entries become a tenth of the smallest non-zero ``padj``, or
    the smallest positive double when every ``padj`` is zero.
    """
    df = df.copy()

    if df[PVALUE_COL].min() == 0:
        logger.info("Converting pvalue == 0 to the smallest possible non-zero value.")
        df[PVALUE_COL] = df[PVALUE_COL].astype(float)
        df.loc[df[PVALUE_COL] == 0, PVALUE_COL] = MIN_POSITIVE_FLOAT

    if df[PADJ_COL].min() == 0:
        logger.info(
            "Converting padj == 0 to a very small value "
            "(0.1x min non-zero padj) for plotting."
        )
        positive = df.loc[df[PADJ_COL] > 0, PADJ_COL]
        if positive.empty:
            replacement = MIN_POSITIVE_FLOAT
        else:
            replacement = float(positive.min()) * 0.1
        df[PADJ_COL] = df[PADJ_COL].astype(float)
        df.loc[df[PADJ_COL] == 0, PADJ_COL] = replacement

    return df


def classify_genes(
    padj: pd.Series, log2fc: pd.Series, pval_cutoff: float, lfc_cutoff: float
) -> pd.Series:
    """Assign each gene to Up-regulated, Down-regulated or Non-significant"""
    significant = padj < pval_cutoff
    conditions = [
        significant & (log2fc > lfc_cutoff),
        significant & (log2fc < -lfc_cutoff),
    ]
    groups = np.select(
        conditions, [UP_REGULATED, DOWN_REGULATED], NOT_SIGNIFICANT
    )
    return pd.Series(
        pd.Categorical(groups, categories=CATEGORY_ORDER), index=padj.index
    )


def select_top_genes(df: pd.DataFrame, group: str, top_n: int) -> pd.DataFrame:
    """Most significant ``top_n`` genes of a group, ties kept in input order"""
    subset = df[df[GROUP_COL] == group]
    return subset.sort_values(PADJ_COL, kind="mergesort").head(max(int(top_n), 0))


def compute_y_limit(
    neg_log10_padj: Iterable[float], scaling: AxisScaling = AxisScaling()
) -> float:
    """
    Upper Y limit for -log10(padj)

    A lone point far above the rest is clipped by placing the limit halfway
    between the two largest values, and extreme datasets are capped outright.
    """
    values = np.asarray(list(neg_log10_padj), dtype=float)
    values = values[np.isfinite(values)]

    if values.size == 0:
        return scaling.default_y_limit

    ordered = np.sort(values)[::-1]
    y1 = float(ordered[0])
    y2 = float(ordered[1]) if ordered.size > 1 else None

    if y1 > scaling.y_extreme_cutoff:
        limit = scaling.y_extreme_limit
    elif y2 is None:
        limit = y1 * scaling.y_padding
    elif _ratio(y1, y2) > scaling.y_outlier_ratio:
        limit = (y1 + y2) / 2
    else:
        limit = y1 * scaling.y_padding

    if not limit > 0:
        logger.debug(f"Degenerate Y limit {limit}, using {scaling.default_y_limit}")
        limit = scaling.default_y_limit
    return float(limit)


def _ratio(y1: float, y2: float) -> float:
    if y2 == 0:
        return np.inf if y1 > 0 else np.nan
    return y1 / y2


def compute_x_limit(
    log2fc: Iterable[float], scaling: AxisScaling = AxisScaling()
) -> float:
    """Half-width of the symmetric X range ``[-limit, limit]``"""
    values = np.abs(np.asarray(list(log2fc), dtype=float))
    values = values[np.isfinite(values)]

    max_abs = float(values.max()) if values.size else 0.0
    limit = min(max_abs, scaling.x_clamp) * scaling.x_scale
    return float(max(limit, scaling.x_floor))


class VolcanoPlotPreparer:
    """Turns a differential-expression table into plot-ready data"""

    def __init__(
        self,
        pval_cutoff: float,
        lfc_cutoff: float,
        top_n: int = 15,
        symbol_col: str = "Symbol",
        scaling: Optional[AxisScaling] = None,
    ):
        self.pval_cutoff = pval_cutoff
        self.lfc_cutoff = lfc_cutoff
        self.top_n = top_n
        self.symbol_col = symbol_col
        self.scaling = scaling or AxisScaling()

    @property
    def required_columns(self):
        return [self.symbol_col, LFC_COL, PVALUE_COL, PADJ_COL]

    def clean(self, records: Union[pd.DataFrame, Iterable[Mapping[str, Any]]]) -> pd.DataFrame:
        """Validate columns, drop rows without p-values and replace zeros"""
        df = _to_frame(records)
        if len(df) == 0:
            raise EmptyInputError("deg_result has no rows")
        validate_columns(df, self.required_columns, table_name="deg_result")

        n_input = len(df)
        df = df[df[PADJ_COL].notna() & df[PVALUE_COL].notna()]
        if df.empty:
            raise EmptyInputError(
                f"No rows with both pvalue and padj out of {n_input} input rows"
            )
        if len(df) < n_input:
            logger.info(f"Dropped {n_input - len(df)} rows with missing pvalue/padj")

        return replace_zero_pvalues(df)

    def prepare(
        self,
        records: Union[pd.DataFrame, Iterable[Mapping[str, Any]]],
        y_limit: Optional[float] = None,
    ) -> VolcanoData:
        """
        Clean, classify and scale a differential-expression table

        Args:
            records: DataFrame (or list of row mappings) with symbol,
                log2FoldChange, pvalue and padj columns
            y_limit: Fixed Y-axis maximum; computed from the data if None

        Returns:
            VolcanoData with the classified table, label subsets and axis limits

        Raises:
            SchemaError: If a required column is missing
            EmptyInputError: If no row has both pvalue and padj
        """
        df = self.clean(records)

        df[NEG_LOG10_PADJ_COL] = -np.log10(df[PADJ_COL].astype(float))
        df[GROUP_COL] = classify_genes(
            df[PADJ_COL], df[LFC_COL], self.pval_cutoff, self.lfc_cutoff
        )

        top_up = select_top_genes(df, UP_REGULATED, self.top_n)
        top_down = select_top_genes(df, DOWN_REGULATED, self.top_n)

        if y_limit is None:
            y_limit = compute_y_limit(df[NEG_LOG10_PADJ_COL], self.scaling)
        x_limit = compute_x_limit(df[LFC_COL], self.scaling)

        data = VolcanoData(
            table=df,
            top_up=top_up,
            top_down=top_down,
            x_limit=x_limit,
            y_limit=float(y_limit),
            pval_cutoff=self.pval_cutoff,
            lfc_cutoff=self.lfc_cutoff,
            symbol_col=self.symbol_col,
        )
        logger.debug(
            f"Volcano data: {data.group_counts}, x_limit={x_limit:.2f}, "
            f"y_limit={data.y_limit:.2f}"
        )
        return data


def prepare_volcano_data(
    records: Union[pd.DataFrame, Iterable[Mapping[str, Any]]],
    pval_cutoff: float,
    lfc_cutoff: float,
    top_n: int = 15,
    y_limit: Optional[float] = None,
    symbol_col: str = "Symbol",
    scaling: Optional[AxisScaling] = None,
) -> VolcanoData:
    """
    Convenience function to prepare volcano plot data

    See :meth:`VolcanoPlotPreparer.prepare`.
    """
    preparer = VolcanoPlotPreparer(
        pval_cutoff=pval_cutoff,
        lfc_cutoff=lfc_cutoff,
        top_n=top_n,
        symbol_col=symbol_col,
        scaling=scaling,
    )
    return preparer.prepare(records, y_limit=y_limit)
