"""
Utility functions for degviz
"""

from .io import read_gene_list, read_table, save_figure
from .logging import get_logger, log_execution_time, setup_logging
from .validation import (validate_columns, validate_directory_exists,
                         validate_python_packages)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_execution_time",
    "validate_columns",
    "validate_directory_exists",
    "validate_python_packages",
    "save_figure",
    "read_table",
    "read_gene_list",
]
