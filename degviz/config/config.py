"""
Core configuration management for degviz
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..exceptions import ConfigError
from ..utils import validate_directory_exists
from ..volcano.styles import DEFAULT_PLOT_COLORS, validate_plot_colors

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Main configuration class for degviz plotting"""

    project_name: str = "degviz_plots"
    output_dir: Optional[str] = None

    # Plot parameters
    volcano: Dict[str, Any] = field(default_factory=dict)
    venn: Dict[str, Any] = field(default_factory=dict)
    upset: Dict[str, Any] = field(default_factory=dict)

    # Export parameters
    output: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Fill in defaults for any section or key not given"""
        self.volcano = {**self._get_default_volcano(), **(self.volcano or {})}
        self.venn = {**self._get_default_venn(), **(self.venn or {})}
        self.upset = {**self._get_default_upset(), **(self.upset or {})}
        self.output = {**self._get_default_output(), **(self.output or {})}

    def _get_default_volcano(self) -> Dict[str, Any]:
        """Default volcano plot configuration"""
        return {
            "pval_cutoff": 0.05,
            "lfc_cutoff": 1.0,
            "symbol_col": "Symbol",
            "label_n_top": 15,
            "label_size": 6,
            "label_force": 0.5,
            "point_size": 4,
            "point_alpha": 0.3,
            "plot_colors": dict(DEFAULT_PLOT_COLORS),
            "axis_scaling": {
                "default_y_limit": 10.0,
                "y_extreme_cutoff": 300.0,
                "y_extreme_limit": 250.0,
                "y_outlier_ratio": 1.4,
                "y_padding": 1.1,
                "x_clamp": 7.5,
                "x_scale": 1.7,
                "x_floor": 3.0,
            },
        }

    def _get_default_venn(self) -> Dict[str, Any]:
        """Default Venn diagram configuration"""
        return {
            "title": "Venn Diagram of Root DEGs",
            "set_colors": ["#9b5de5", "#f15bb5", "#fee440", "#00bbf9"],
            "short_names": ["A", "B", "C", "D"],
            "legend_order": ["D", "C", "B", "A"],
            "legend_title": "Groups",
            "layout_widths": [3, 1.5],
            "label": "both",
        }

    def _get_default_upset(self) -> Dict[str, Any]:
        """Default UpSet plot configuration"""
        return {
            "fill_color": "#56B4E9",
            "bar_text_angle": 90,
            "bar_text_size": 2.7,
            "upset_top_n": 20,
            "upset_order_by": "freq",
            "img_width": 5,
            "img_height": 4,
            "dpi": 1000,
        }

    def _get_default_output(self) -> Dict[str, Any]:
        """Default figure export configuration"""
        return {
            "dpi": 300,
            "formats": ["png", "pdf"],
            "width": 6,
            "height": 6,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary view, suitable for YAML/JSON dumping"""
        return asdict(self)


def load_config(config_file: Union[str, Path]) -> Config:
    """Load configuration from YAML or JSON file"""
    config_path = Path(config_file)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, "r") as f:
        if config_path.suffix.lower() in [".yaml", ".yml"]:
            config_dict = yaml.safe_load(f)
        elif config_path.suffix.lower() == ".json":
            config_dict = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {config_path}")

    try:
        return Config(**config_dict)
    except TypeError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def save_config(config: Config, output_file: Union[str, Path]) -> None:
    """Save configuration to YAML or JSON file (chosen by suffix)"""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.to_dict()

    with open(output_path, "w") as f:
        if output_path.suffix.lower() == ".json":
            json.dump(config_dict, f, indent=2)
        else:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)

    logger.info(f"Configuration saved to {output_path}")


def validate_config(config: Config) -> List[str]:
    """Validate configuration and return list of issues"""
    issues = []

    volcano = config.volcano
    for key in ("pval_cutoff", "lfc_cutoff"):
        value = volcano.get(key)
        if not isinstance(value, (int, float)) or value <= 0:
            issues.append(f"volcano.{key} must be a positive number")

    label_n_top = volcano.get("label_n_top", 0)
    if not isinstance(label_n_top, int) or label_n_top < 0:
        issues.append("volcano.label_n_top must be a non-negative integer")

    try:
        validate_plot_colors(volcano.get("plot_colors", {}))
    except ConfigError as e:
        issues.append(f"volcano.plot_colors: {e}")

    venn = config.venn
    n_sets = len(venn.get("short_names", []))
    for key in ("set_colors", "legend_order"):
        if len(venn.get(key, [])) != n_sets:
            issues.append(f"venn.{key} must have one entry per short name")
    if sorted(venn.get("legend_order", [])) != sorted(venn.get("short_names", [])):
        issues.append("venn.legend_order must be a permutation of venn.short_names")

    if config.upset.get("upset_order_by") not in ("freq", "degree"):
        issues.append("upset.upset_order_by must be 'freq' or 'degree'")
    if config.upset.get("upset_top_n", 1) <= 0:
        issues.append("upset.upset_top_n must be positive")

    for section in (config.output, config.upset):
        if section.get("dpi", 1) <= 0:
            issues.append("dpi must be positive")

    if config.output_dir and not validate_directory_exists(
        config.output_dir, create_if_missing=True
    ):
        issues.append(f"Cannot create output directory: {config.output_dir}")

    return issues


def get_default_config() -> Config:
    """Get default configuration object"""
    return Config()
