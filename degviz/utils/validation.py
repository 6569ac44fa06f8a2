"""
Validation utilities for degviz
"""

import importlib
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

import pandas as pd

from ..exceptions import SchemaError

logger = logging.getLogger(__name__)


def validate_columns(
    df: pd.DataFrame, required: Iterable[str], table_name: str = "input table"
) -> None:
    """
    Check that all required columns are present

    Args:
        df: Table to check
        required: Column names that must be present
        table_name: Name used in the error message

    Raises:
        SchemaError: If any required column is absent
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        logger.error(f"{table_name} is missing columns: {missing}")
        raise SchemaError(missing, table_name=table_name)


def validate_directory_exists(
    dir_path: Union[str, Path], create_if_missing: bool = False
) -> bool:
    """
    Validate that a directory exists

    Args:
        dir_path: Path to directory
        create_if_missing: Whether to create directory if missing

    Returns:
        True if directory exists or was created, False otherwise
    """
    path = Path(dir_path)

    if not path.exists():
        if create_if_missing:
            try:
                path.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created directory: {path}")
                return True
            except OSError as e:
                logger.error(f"Could not create directory {path}: {e}")
                return False
        else:
            logger.error(f"Directory not found: {path}")
            return False

    if not path.is_dir():
        logger.error(f"Path is not a directory: {path}")
        return False

    return True


def validate_python_packages(packages: List[str]) -> Dict[str, bool]:
    """
    Check if Python packages are importable

    Args:
        packages: List of import names

    Returns:
        Dictionary mapping package names to availability status
    """
    results = {}

    for package in packages:
        try:
            importlib.import_module(package)
            results[package] = True
            logger.debug(f"Package {package}: available")
        except ImportError:
            results[package] = False
            logger.debug(f"Package {package}: not available")

    return results
