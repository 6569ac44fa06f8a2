"""
Regulation categories and their colour mapping
"""

from typing import Dict, Mapping

from ..exceptions import ConfigError


UP_REGULATED = "Up-regulated"
DOWN_REGULATED = "Down-regulated"
NOT_SIGNIFICANT = "Non-significant"

# Legend and drawing order
CATEGORY_ORDER = [UP_REGULATED, DOWN_REGULATED, NOT_SIGNIFICANT]

DEFAULT_PLOT_COLORS = {
    UP_REGULATED: "#ff3b30",
    DOWN_REGULATED: "#56B4E9",
    NOT_SIGNIFICANT: "#d3d3d3",
}


def validate_plot_colors(plot_colors: Mapping[str, str]) -> Dict[str, str]:
    """
    Check a category -> colour mapping

    Args:
        plot_colors: Mapping with exactly the three category names as keys

    Returns:
        Plain dict in legend order

    Raises:
        ConfigError: If a category is missing or an unknown key is present
    """
    if not isinstance(plot_colors, Mapping):
        raise ConfigError("plot_colors must be a mapping of category to colour")

    keys = set(plot_colors)
    missing = [cat for cat in CATEGORY_ORDER if cat not in keys]
    unknown = sorted(str(k) for k in keys - set(CATEGORY_ORDER))

    if missing or unknown:
        parts = []
        if missing:
            parts.append(f"missing {missing}")
        if unknown:
            parts.append(f"unrecognized {unknown}")
        raise ConfigError(
            f"plot_colors must define exactly {CATEGORY_ORDER}: " + ", ".join(parts)
        )

    return {cat: plot_colors[cat] for cat in CATEGORY_ORDER}
