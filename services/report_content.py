"""
Report Content Builder

Projects an inspection comparison through the user's section configuration
into the structured content the renderer draws. No layout happens here.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from core.constants import BUCKET_ORDER, INSPECTION_NOTES, REPORT_LABELS
from core.models import (
    ComparisonTotals,
    InspectionComparison,
    InspectionData,
    ItemPair,
    MissingItem,
    NewItem,
    PropertyInfo,
    RoomComparison,
    SectionConfig,
)
from utils.text_utils import condition_label, describe_detection


@dataclass
class ItemLine:
    """One listed item; detail holds the condition transition for changed items."""
    text: str
    detail: str = ""


@dataclass
class ItemGroup:
    """A visible comparison bucket of one room."""
    bucket: str
    title: str
    lines: List[ItemLine] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.lines)


@dataclass
class RoomSection:
    """Everything shown for one room."""
    room: str
    entry_photo_url: Optional[str] = None
    exit_photo_url: Optional[str] = None
    groups: List[ItemGroup] = field(default_factory=list)


@dataclass
class ReportHeader:
    title: str
    property_name: str
    address: str = ""
    company_name: Optional[str] = None
    company_logo_url: Optional[str] = None
    inspector_name: Optional[str] = None
    entry_date: Optional[datetime] = None
    exit_date: Optional[datetime] = None


@dataclass
class ReportContent:
    """Structured comparison report, ready to render."""
    header: ReportHeader
    notes: Tuple[str, ...] = INSPECTION_NOTES
    summary: Optional[ComparisonTotals] = None
    rooms: List[RoomSection] = field(default_factory=list)

    def photo_urls(self) -> List[str]:
        """Distinct photo URLs referenced by the content, in drawing order."""
        urls = []
        if self.header.company_logo_url:
            urls.append(self.header.company_logo_url)
        for section in self.rooms:
            urls.extend(u for u in (section.entry_photo_url, section.exit_photo_url) if u)
        return list(dict.fromkeys(urls))


def _line_for(bucket: str, entry) -> ItemLine:
    if isinstance(entry, ItemPair):
        if bucket == 'changed':
            detail = f"{condition_label(entry.entry.condition)} -> {condition_label(entry.exit.condition)}"
            return ItemLine(text=describe_detection(entry.entry), detail=detail)
        return ItemLine(text=describe_detection(entry.entry), detail=condition_label(entry.exit.condition))
    if isinstance(entry, NewItem):
        return ItemLine(text=describe_detection(entry.exit), detail=condition_label(entry.exit.condition))
    if isinstance(entry, MissingItem):
        return ItemLine(text=describe_detection(entry.entry), detail=condition_label(entry.entry.condition))
    raise TypeError(f"Unexpected comparison entry: {entry!r}")


def build_room_section(
    comparison: RoomComparison,
    section_config: SectionConfig,
    entry_photo_url: Optional[str] = None,
    exit_photo_url: Optional[str] = None
) -> Optional[RoomSection]:
    """
    Build the section for one room.

    Only buckets that are enabled and non-empty are included; a room without
    any such bucket is left out of the report.

    Returns:
        RoomSection, or None if nothing in the room is visible
    """
    toggles = section_config.for_room(comparison.room)

    groups = []
    for bucket in BUCKET_ORDER:
        entries = comparison.bucket(bucket)
        if not entries or not toggles.is_visible(bucket):
            continue
        groups.append(ItemGroup(
            bucket=bucket,
            title=REPORT_LABELS[bucket],
            lines=[_line_for(bucket, e) for e in entries],
        ))

    if not groups:
        return None

    return RoomSection(
        room=comparison.room,
        entry_photo_url=entry_photo_url,
        exit_photo_url=exit_photo_url,
        groups=groups,
    )


def build_report_content(
    property_info: PropertyInfo,
    entry_inspection: InspectionData,
    exit_inspection: InspectionData,
    comparison: InspectionComparison,
    section_config: SectionConfig,
    inspector_name: Optional[str] = None
) -> ReportContent:
    """
    Build the structured report for a compared pair of inspections.

    Args:
        property_info: Property shown in the header
        entry_inspection: Move-in inspection
        exit_inspection: Move-out inspection
        comparison: Result of compare_inspections for the pair
        section_config: Visibility toggles
        inspector_name: Name printed as inspector

    Returns:
        ReportContent
    """
    header = ReportHeader(
        title=REPORT_LABELS['title'],
        property_name=property_info.name,
        address=property_info.address,
        company_name=property_info.company_name,
        company_logo_url=property_info.company_logo_url,
        inspector_name=inspector_name or property_info.responsible_name,
        entry_date=entry_inspection.inspection_date,
        exit_date=exit_inspection.inspection_date,
    )

    rooms = []
    for room_comparison in comparison.rooms:
        section = build_room_section(
            room_comparison,
            section_config,
            entry_photo_url=entry_inspection.first_photo_url(room_comparison.room),
            exit_photo_url=exit_inspection.first_photo_url(room_comparison.room),
        )
        if section is not None:
            rooms.append(section)

    return ReportContent(
        header=header,
        summary=comparison.totals if section_config.show_summary else None,
        rooms=rooms,
    )
