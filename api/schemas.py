"""
Pydantic schemas for API request/response validation.
"""
from typing import Optional, Dict, List
from pydantic import BaseModel, Field, FiniteFloat, model_validator

from core.constants import MAX_PAGE_COUNT
from core.models import Detection, RoomSectionConfig, SectionConfig


class DetectionSchema(BaseModel):
    """One detected object as sent by clients."""
    item: str = ""
    condition: str = ""
    room: str = ""
    source_photo_url: Optional[str] = None
    material: str = ""
    color: str = ""
    confidence: Optional[float] = None
    id: Optional[str] = None

    def to_detection(self) -> Detection:
        return Detection(
            item=self.item,
            condition=self.condition,
            room=self.room,
            source_photo_url=self.source_photo_url,
            material=self.material,
            color=self.color,
            confidence=self.confidence,
            detection_id=self.id,
        )


class RoomCompareRequest(BaseModel):
    """Request body for comparing one room."""
    room: str = ""
    entry: List[DetectionSchema] = Field(default_factory=list)
    exit: List[DetectionSchema] = Field(default_factory=list)
    entry_photo_url: Optional[str] = None
    exit_photo_url: Optional[str] = None


class PageBreakRequest(BaseModel):
    """Request body for planning page breaks."""
    content_height: float = Field(ge=0, allow_inf_nan=False)
    max_page_height: float = Field(gt=0, allow_inf_nan=False)
    protected_blocks: List[List[FiniteFloat]] = Field(default_factory=list)
    min_fill_ratio: Optional[FiniteFloat] = None

    @model_validator(mode='after')
    def check_page_count(self):
        if self.content_height / self.max_page_height > MAX_PAGE_COUNT:
            raise ValueError(f'content needs more than {MAX_PAGE_COUNT} pages')
        return self


class PageBreakResponse(BaseModel):
    """Response for planned page breaks."""
    breaks: List[float]
    page_count: int


class RoomToggles(BaseModel):
    """Bucket visibility of one room."""
    changed: bool = True
    new: bool = True
    missing: bool = True
    unchanged: bool = True


class SectionConfigRequest(BaseModel):
    """Report section visibility."""
    show_summary: bool = True
    rooms: Dict[str, RoomToggles] = Field(default_factory=dict)

    def to_section_config(self) -> SectionConfig:
        return SectionConfig(
            show_summary=self.show_summary,
            rooms={
                room: RoomSectionConfig(**toggles.model_dump())
                for room, toggles in self.rooms.items()
            },
        )


class ReportRequest(BaseModel):
    """Request body for generating the comparison report."""
    inspector_name: Optional[str] = None
    sections: SectionConfigRequest = Field(default_factory=SectionConfigRequest)


class CriticalIssuesResponse(BaseModel):
    """Dashboard counter for a property."""
    property_id: str
    entry_inspection_id: Optional[str] = None
    exit_inspection_id: Optional[str] = None
    critical_issues: int = 0
