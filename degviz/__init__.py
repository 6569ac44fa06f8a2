"""
degviz: plotting helpers for differential expression and peak annotation

degviz wraps matplotlib-based plotting libraries into a few ready-made
figures for bulk RNA-seq and ATAC-seq results.

Main Components:
- Volcano plots of DESeq2 results with Top-N gene labelling
- Venn diagrams of gene sets with a custom legend panel
- UpSet plots of ChIPseeker genomic annotation overlap

Example:
    >>> from degviz import draw_volcano
    >>> fig = draw_volcano(deg_result, pval_cutoff=0.05, lfc_cutoff=1)
"""

import logging
import sys
from importlib import metadata
from typing import Any, Dict

try:
    __version__ = metadata.version("degviz")
except metadata.PackageNotFoundError:
    __version__ = "0.1.0-dev"

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)

from . import upset, utils, venn, volcano
from .config import Config, load_config
from .exceptions import ConfigError, DegvizError, EmptyInputError, SchemaError
from .upset import draw_atac_upset
from .utils import setup_logging
from .venn import draw_venn_with_legend
from .volcano import VolcanoPlotPreparer, draw_volcano, prepare_volcano_data

__all__ = [
    "__version__",
    "draw_volcano",
    "draw_venn_with_legend",
    "draw_atac_upset",
    "prepare_volcano_data",
    "VolcanoPlotPreparer",
    "Config",
    "load_config",
    "setup_logging",
    "DegvizError",
    "SchemaError",
    "EmptyInputError",
    "ConfigError",
    "volcano",
    "venn",
    "upset",
    "utils",
]

PLOTTING_DEPENDENCIES = ["matplotlib", "seaborn", "adjustText", "venn", "upsetplot"]


def get_info() -> Dict[str, Any]:
    """Get package information."""
    return {
        "name": "degviz",
        "version": __version__,
        "description": "Volcano, Venn and UpSet plotting helpers for omics results",
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "modules": ["volcano", "venn", "upset"],
    }


def check_dependencies() -> Dict[str, bool]:
    """Check if key dependencies are available."""
    from .utils import validate_python_packages

    return validate_python_packages(["numpy", "pandas"] + PLOTTING_DEPENDENCIES)


logger = logging.getLogger(__name__)
logger.debug(f"degviz v{__version__} initialized")
