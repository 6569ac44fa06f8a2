"""
Figure export and table loading helpers
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

_TAB_SUFFIXES = {".tsv", ".tab", ".txt"}
IMAGE_FORMATS = {"png", "pdf", "svg", "jpg", "jpeg", "tif", "tiff", "eps", "ps"}


def save_figure(
    fig: Figure,
    output_path: Union[str, Path],
    formats: Optional[Iterable[str]] = None,
    dpi: int = 300,
    width: Optional[float] = None,
    height: Optional[float] = None,
    close: bool = False,
) -> Dict[str, Path]:
    """
    Save a figure to one or more image files

    Args:
        fig: Figure to save
        output_path: Target path. An image suffix (.png, .pdf, ...) is
            replaced by each requested format, any other name is extended.
        formats: Image formats to write (e.g. ``["png", "pdf"]``)
        dpi: Pixel density
        width: Figure width in inches (keeps current size if None)
        height: Figure height in inches (keeps current size if None)
        close: Close the figure after writing

    Returns:
        Dictionary mapping format to written path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if width is not None or height is not None:
        cur_width, cur_height = fig.get_size_inches()
        fig.set_size_inches(
            width if width is not None else cur_width,
            height if height is not None else cur_height,
        )

    # Only a recognised image suffix is treated as an extension
    suffix = output_path.suffix.lstrip(".").lower()
    stem = output_path.stem if suffix in IMAGE_FORMATS else output_path.name

    if formats is None:
        formats = [suffix if suffix in IMAGE_FORMATS else "png"]
    targets = {fmt: output_path.parent / f"{stem}.{fmt}" for fmt in formats}

    for fmt, path in targets.items():
        fig.savefig(path, dpi=dpi, bbox_inches="tight", format=fmt)
        logger.info(f"Figure saved to {path}")

    if close:
        plt.close(fig)

    return targets


def read_table(path: Union[str, Path]) -> pd.DataFrame:
    """Read a CSV or tab-separated results table"""
    path = Path(path)
    sep = "\t" if path.suffix.lower() in _TAB_SUFFIXES else ","
    logger.info(f"Loading table from {path}")
    return pd.read_csv(path, sep=sep)


def read_gene_list(path: Union[str, Path]) -> List[str]:
    """Read one gene identifier per line, skipping blanks and duplicates"""
    genes = []
    seen = set()
    with open(path, "r") as f:
        for line in f:
            gene = line.strip()
            if gene and gene not in seen:
                seen.add(gene)
                genes.append(gene)
    return genes
