"""
Build detections and inspections from raw AI analysis payloads.

The AI step stores its result per photo as a JSON document; detected objects
are listed under ``objectsDetected``. Only that key is read, for both the
report and the dashboard counters.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.constants import ANALYSIS_OBJECTS_KEY
from core.models import Detection, InspectionData, InspectionPhoto


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        return None


def detection_from_dict(obj: Dict[str, Any], room: str, photo_url: Optional[str] = None) -> Detection:
    """
    Convert one detected object dict into a Detection.

    A missing ``item`` becomes the empty string and a missing condition the
    empty string; neither is an error.
    """
    confidence = obj.get('confidence')
    return Detection(
        item=_as_text(obj.get('item')),
        condition=_as_text(obj.get('condition')),
        room=room,
        source_photo_url=photo_url or obj.get('photoUrl') or obj.get('source_photo_url'),
        material=_as_text(obj.get('material')),
        color=_as_text(obj.get('color')),
        confidence=float(confidence) if isinstance(confidence, (int, float)) else None,
        detection_id=_as_text(obj['id']) if obj.get('id') is not None else None,
    )


def detections_from_analysis(
    analysis_result: Optional[Dict[str, Any]],
    room: str,
    photo_url: Optional[str] = None
) -> List[Detection]:
    """
    Extract detections from one photo's AI analysis result.

    Args:
        analysis_result: Analysis JSON (may be None for unanalyzed photos)
        room: Room label of the photo
        photo_url: URL of the photo that produced the analysis

    Returns:
        Detections in payload order
    """
    if not analysis_result:
        return []
    objects = analysis_result.get(ANALYSIS_OBJECTS_KEY) or []
    return [
        detection_from_dict(obj, room, photo_url)
        for obj in objects
        if isinstance(obj, dict)
    ]


def photo_from_dict(data: Dict[str, Any]) -> InspectionPhoto:
    """Convert a photo dict (``url``, ``room``, ``analysis_result``) into an InspectionPhoto."""
    url = _as_text(data.get('url') or data.get('photo_url'))
    room = _as_text(data.get('room'))
    analysis = data.get('analysis_result') or data.get('analysisResult')
    return InspectionPhoto(
        url=url,
        room=room,
        detections=tuple(detections_from_analysis(analysis, room, url or None)),
        photo_id=data.get('id'),
    )


def inspection_from_dict(data: Dict[str, Any]) -> InspectionData:
    """
    Build an InspectionData from a JSON-like dict.

    Expected keys: ``id``, ``inspection_type``, ``created_at`` (ISO date) and
    ``photos`` (list of photo dicts in capture order).
    """
    return InspectionData(
        inspection_id=_as_text(data.get('id') or data.get('inspection_id')),
        inspection_type=_as_text(data.get('inspection_type')),
        inspection_date=_parse_datetime(data.get('created_at') or data.get('inspection_date')),
        photos=[photo_from_dict(p) for p in data.get('photos', [])],
    )
