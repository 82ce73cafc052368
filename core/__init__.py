"""Core package - Domain models, constants and exceptions."""

from .models import (
    Detection,
    ItemPair,
    NewItem,
    MissingItem,
    RoomComparison,
    ComparisonTotals,
    InspectionComparison,
    InspectionPhoto,
    InspectionData,
    PropertyInfo,
    RoomSectionConfig,
    SectionConfig,
    ProtectedBlock,
    PageLayout,
    PagedDocument,
)
from .constants import (
    CONDITION_NOT_FOUND,
    KNOWN_CONDITIONS,
    MIN_FILL_RATIO,
    BUCKET_ORDER,
)
from .exceptions import RenderError, ReportGenerationError

__all__ = [
    'Detection',
    'ItemPair',
    'NewItem',
    'MissingItem',
    'RoomComparison',
    'ComparisonTotals',
    'InspectionComparison',
    'InspectionPhoto',
    'InspectionData',
    'PropertyInfo',
    'RoomSectionConfig',
    'SectionConfig',
    'ProtectedBlock',
    'PageLayout',
    'PagedDocument',
    'CONDITION_NOT_FOUND',
    'KNOWN_CONDITIONS',
    'MIN_FILL_RATIO',
    'BUCKET_ORDER',
    'RenderError',
    'ReportGenerationError',
]
