"""
Core domain models for inspection comparison.

These are pure data structures without business logic. They are built fresh
for each report request and discarded afterwards.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Detection:
    """One AI-identified object instance in one photo."""
    item: str
    condition: str
    room: str
    source_photo_url: Optional[str] = None
    material: str = ""
    color: str = ""
    confidence: Optional[float] = None
    detection_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.detection_id,
            'item': self.item,
            'condition': self.condition,
            'room': self.room,
            'source_photo_url': self.source_photo_url,
            'material': self.material,
            'color': self.color,
            'confidence': self.confidence,
        }


@dataclass(frozen=True)
class ItemPair:
    """An entry detection matched by name with an exit detection."""
    entry: Detection
    exit: Detection

    @property
    def condition_changed(self) -> bool:
        return self.entry.condition != self.exit.condition

    def to_dict(self) -> dict:
        return {'entry': self.entry.to_dict(), 'exit': self.exit.to_dict()}


@dataclass(frozen=True)
class NewItem:
    """Exit detection without entry counterpart, with the entry room photo."""
    exit: Detection
    entry_photo_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {'exit': self.exit.to_dict(), 'entry_photo_url': self.entry_photo_url}


@dataclass(frozen=True)
class MissingItem:
    """Entry detection without exit counterpart, with the exit room photo."""
    entry: Detection
    exit_photo_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {'entry': self.entry.to_dict(), 'exit_photo_url': self.exit_photo_url}


@dataclass
class RoomComparison:
    """Per-room diff result."""
    room: str
    changed: List[ItemPair] = field(default_factory=list)
    unchanged: List[ItemPair] = field(default_factory=list)
    new: List[NewItem] = field(default_factory=list)
    missing: List[MissingItem] = field(default_factory=list)

    @property
    def has_differences(self) -> bool:
        """True when anything changed, appeared or disappeared."""
        return bool(self.changed or self.new or self.missing)

    @property
    def is_empty(self) -> bool:
        return not (self.has_differences or self.unchanged)

    def bucket(self, name: str) -> list:
        """Get a bucket by name ('changed', 'unchanged', 'new', 'missing')."""
        return getattr(self, name)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            'room': self.room,
            'changed': [p.to_dict() for p in self.changed],
            'unchanged': [p.to_dict() for p in self.unchanged],
            'new': [n.to_dict() for n in self.new],
            'missing': [m.to_dict() for m in self.missing],
        }


@dataclass(frozen=True)
class ComparisonTotals:
    """Report-level counts folded over all rooms."""
    changed: int = 0
    new: int = 0
    missing: int = 0
    unchanged: int = 0

    @classmethod
    def from_rooms(cls, rooms: List[RoomComparison]) -> 'ComparisonTotals':
        totals = cls()
        for room in rooms:
            totals = cls(
                changed=totals.changed + len(room.changed),
                new=totals.new + len(room.new),
                missing=totals.missing + len(room.missing),
                unchanged=totals.unchanged + len(room.unchanged),
            )
        return totals

    def to_dict(self) -> dict:
        return {
            'changed': self.changed,
            'new': self.new,
            'missing': self.missing,
            'unchanged': self.unchanged,
        }


@dataclass
class InspectionComparison:
    """All room comparisons between one entry and one exit inspection."""
    rooms: List[RoomComparison] = field(default_factory=list)
    totals: ComparisonTotals = field(default_factory=ComparisonTotals)

    def get_room(self, room: str) -> Optional[RoomComparison]:
        for comparison in self.rooms:
            if comparison.room == room:
                return comparison
        return None

    def to_dict(self) -> dict:
        return {
            'rooms': [r.to_dict() for r in self.rooms],
            'totals': self.totals.to_dict(),
        }


@dataclass(frozen=True)
class InspectionPhoto:
    """A room photo and the detections the AI step produced for it."""
    url: str
    room: str
    detections: Tuple[Detection, ...] = ()
    photo_id: Optional[str] = None


@dataclass
class InspectionData:
    """One inspection (entry or exit) with its photos in capture order."""
    inspection_id: str
    inspection_type: str
    inspection_date: Optional[datetime] = None
    photos: List[InspectionPhoto] = field(default_factory=list)

    def rooms(self) -> List[str]:
        """Room labels in first-seen photo order."""
        return list(dict.fromkeys(photo.room for photo in self.photos))

    def detections_for_room(self, room: str) -> List[Detection]:
        """All detections of a room, flattened in photo order."""
        return [
            detection
            for photo in self.photos
            if photo.room == room
            for detection in photo.detections
        ]

    def first_photo_url(self, room: str) -> Optional[str]:
        for photo in self.photos:
            if photo.room == room:
                return photo.url
        return None


@dataclass
class PropertyInfo:
    """Property details shown in the report header."""
    name: str
    address: str = ""
    company_name: Optional[str] = None
    company_logo_url: Optional[str] = None
    responsible_name: Optional[str] = None
    property_id: Optional[str] = None


@dataclass(frozen=True)
class RoomSectionConfig:
    """Visibility toggles for the buckets of one room."""
    changed: bool = True
    new: bool = True
    missing: bool = True
    unchanged: bool = True

    def is_visible(self, bucket: str) -> bool:
        return bool(getattr(self, bucket))


@dataclass(frozen=True)
class SectionConfig:
    """
    Immutable report section visibility chosen by the user.

    Rooms without an explicit entry show every bucket.
    """
    show_summary: bool = True
    rooms: Mapping[str, RoomSectionConfig] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'rooms', MappingProxyType(dict(self.rooms)))

    def for_room(self, room: str) -> RoomSectionConfig:
        return self.rooms.get(room, RoomSectionConfig())

    def with_room(self, room: str, **toggles: bool) -> 'SectionConfig':
        """Return a copy with the toggles of one room replaced."""
        rooms = dict(self.rooms)
        rooms[room] = replace(self.for_room(room), **toggles)
        return SectionConfig(show_summary=self.show_summary, rooms=rooms)


@dataclass(frozen=True)
class ProtectedBlock:
    """A content interval of the rendered surface that must not be cut."""
    top: float
    bottom: float
    label: str = ""

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def straddles(self, offset: float) -> bool:
        """True if a cut at offset would slice through this block."""
        return self.top < offset < self.bottom

    def to_dict(self) -> dict:
        return {'top': self.top, 'bottom': self.bottom, 'label': self.label}


@dataclass(frozen=True)
class PageLayout:
    """Physical page geometry in PDF points."""
    page_width: float
    page_height: float
    margin: float = 0.0

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self.margin

    def scale_for(self, surface_width: int) -> float:
        """Surface pixels per point when the surface spans the content width."""
        return surface_width / self.content_width

    def max_page_height_px(self, surface_width: int) -> float:
        """Usable page content height expressed in surface pixels."""
        return self.content_height * self.scale_for(surface_width)


@dataclass
class PagedDocument:
    """Finished report: break offsets, page images and the written document."""
    breaks: List[float]
    page_images: List[Any]
    layout: PageLayout
    content: bytes = b""
    media_type: str = "application/pdf"

    @property
    def page_count(self) -> int:
        return len(self.page_images)

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the binary payload."""
        return {
            'breaks': list(self.breaks),
            'page_count': self.page_count,
            'media_type': self.media_type,
            'size_bytes': len(self.content),
        }
