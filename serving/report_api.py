"""
Comparison Report API for entry/exit inspections.

Provides endpoints for:
- Room and inspection comparison
- Page break planning over a rendered surface
- Comparison report generation (PDF)
- Dashboard critical issue counter
"""
import logging

from fastapi import FastAPI, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_report_assembler
from api.schemas import (
    CriticalIssuesResponse,
    PageBreakRequest,
    PageBreakResponse,
    ReportRequest,
    RoomCompareRequest,
)
from config.settings import settings
from core.exceptions import InspectionPairError, ReportGenerationError
from data.database import init_database
from data.repositories import InspectionRepository, PropertyRepository
from inspection.diff_engine import compare_inspections, compare_room, count_critical_issues
from layout.page_breaks import plan_breaks
from services.report_service import ReportAssembler

logger = logging.getLogger(__name__)


# Create FastAPI app
report_app = FastAPI(
    title="Inspection Comparison API",
    description="Entry/exit inspection comparison with paginated PDF reports",
    version="1.0.0"
)


# Initialize database on startup
@report_app.on_event("startup")
async def startup_event():
    """Initialize database tables on startup."""
    init_database()
    logger.info("Inspection comparison API initialized")


@report_app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


@report_app.post("/compare/room")
async def compare_room_endpoint(request: RoomCompareRequest):
    """
    Compare the entry and exit detections of a single room.

    Args:
        request: Room label, detections and optional room photos

    Returns:
        Changed / unchanged / new / missing buckets
    """
    result = compare_room(
        [d.to_detection() for d in request.entry],
        [d.to_detection() for d in request.exit],
        room=request.room,
        entry_photo_url=request.entry_photo_url,
        exit_photo_url=request.exit_photo_url
    )
    return result.to_dict()


@report_app.post("/layout/page-breaks", response_model=PageBreakResponse)
async def plan_page_breaks(request: PageBreakRequest):
    """
    Plan page cut offsets for a rendered surface.

    Args:
        request: Surface height, page height and protected (top, bottom) blocks

    Returns:
        Break offsets and page count
    """
    for block in request.protected_blocks:
        if len(block) != 2:
            raise HTTPException(
                status_code=422,
                detail=f"Protected block must be [top, bottom], got {block}"
            )

    min_fill_ratio = request.min_fill_ratio
    if min_fill_ratio is None:
        min_fill_ratio = settings.min_fill_ratio

    breaks = plan_breaks(
        request.content_height,
        request.max_page_height,
        [tuple(block) for block in request.protected_blocks],
        min_fill_ratio=min_fill_ratio
    )
    return PageBreakResponse(breaks=breaks, page_count=max(len(breaks) - 1, 0))


@report_app.get("/inspections/{entry_id}/compare/{exit_id}")
async def compare_inspection_pair(
    entry_id: str,
    exit_id: str,
    db: Session = Depends(get_db)
):
    """
    Compare two stored inspections room by room.

    Args:
        entry_id: Entry inspection ID
        exit_id: Exit inspection ID
        db: Database session

    Returns:
        Per-room buckets and totals
    """
    repo = InspectionRepository(db)
    try:
        repo.get_comparison_pair(entry_id, exit_id)
        entry = repo.load_inspection_data(entry_id)
        exit_ = repo.load_inspection_data(exit_id)
    except InspectionPairError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    comparison = compare_inspections(entry, exit_)
    return {
        "entry_inspection_id": entry_id,
        "exit_inspection_id": exit_id,
        **comparison.to_dict()
    }


@report_app.post("/inspections/{entry_id}/compare/{exit_id}/report")
async def generate_report(
    entry_id: str,
    exit_id: str,
    request: ReportRequest,
    db: Session = Depends(get_db),
    assembler: ReportAssembler = Depends(get_report_assembler)
):
    """
    Generate the paginated comparison report as PDF.

    Args:
        entry_id: Entry inspection ID
        exit_id: Exit inspection ID
        request: Inspector name and section visibility
        db: Database session
        assembler: Report assembler

    Returns:
        PDF document
    """
    inspections = InspectionRepository(db)
    try:
        entry_record, _ = inspections.get_comparison_pair(entry_id, exit_id)
        property_info = PropertyRepository(db).get_property_info(entry_record.property_id)
        entry = inspections.load_inspection_data(entry_id)
        exit_ = inspections.load_inspection_data(exit_id)
    except InspectionPairError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        document = await assembler.assemble_report(
            property_info,
            entry,
            exit_,
            section_config=request.sections.to_section_config(),
            inspector_name=request.inspector_name
        )
    except ReportGenerationError as e:
        raise HTTPException(status_code=500, detail=e.message)

    filename = f"comparison_{entry_id}_{exit_id}.pdf"
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Page-Count": str(document.page_count)
        }
    )


@report_app.get("/properties/{property_id}/critical-issues", response_model=CriticalIssuesResponse)
async def get_critical_issues(
    property_id: str,
    db: Session = Depends(get_db)
):
    """
    Count items missing at the latest completed exit inspection of a property.

    Returns zero when the property has no completed entry/exit pair.
    """
    if PropertyRepository(db).get_by_id(property_id) is None:
        raise HTTPException(status_code=404, detail=f"Property not found: {property_id}")

    repo = InspectionRepository(db)
    pair = repo.find_latest_completed_pair(property_id)
    if pair is None:
        return CriticalIssuesResponse(property_id=property_id)

    entry_record, exit_record = pair
    comparison = compare_inspections(
        repo.load_inspection_data(entry_record.id),
        repo.load_inspection_data(exit_record.id)
    )
    return CriticalIssuesResponse(
        property_id=property_id,
        entry_inspection_id=entry_record.id,
        exit_inspection_id=exit_record.id,
        critical_issues=count_critical_issues(comparison)
    )


@report_app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "Inspection Comparison API",
        "version": "1.0.0",
        "endpoints": {
            "compare_room": "POST /compare/room",
            "page_breaks": "POST /layout/page-breaks",
            "compare_inspections": "GET /inspections/{entry_id}/compare/{exit_id}",
            "report": "POST /inspections/{entry_id}/compare/{exit_id}/report",
            "critical_issues": "GET /properties/{property_id}/critical-issues"
        }
    }


# Export app for uvicorn
app = report_app
