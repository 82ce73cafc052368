"""Inspection package - Entry/exit comparison of AI detections."""

from .diff_engine import (
    compare_room,
    compare_inspections,
    summarize_totals,
    count_critical_issues,
)
from .parsing import (
    detection_from_dict,
    detections_from_analysis,
    photo_from_dict,
    inspection_from_dict,
)

__all__ = [
    # Diff engine
    'compare_room',
    'compare_inspections',
    'summarize_totals',
    'count_critical_issues',

    # Payload parsing
    'detection_from_dict',
    'detections_from_analysis',
    'photo_from_dict',
    'inspection_from_dict',
]
