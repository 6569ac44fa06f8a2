"""
UpSet plots of ChIPseeker genomic annotation overlap
"""

from .annotation import (ANNOTATION_RULES, build_annotation_memberships,
                         count_intersections, simplify_annotation,
                         upset_y_limit)
from .plot import draw_atac_upset

__all__ = [
    "ANNOTATION_RULES",
    "simplify_annotation",
    "build_annotation_memberships",
    "count_intersections",
    "upset_y_limit",
    "draw_atac_upset",
]
