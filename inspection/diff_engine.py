"""
Inspection Diff Engine

Reconciles the object inventories of an entry and an exit inspection, room
by room, into changed / unchanged / new / missing buckets.

Matching is greedy and order-dependent: exit detections are processed in
their own order and each one consumes the first entry detection with the same
normalized name. Entry and exit photo sets are analyzed independently, so no
stable identifier exists across them; duplicate names are treated as
fungible units and matched by count.
"""
from typing import Iterable, List, Optional

from core.constants import CONDITION_NOT_FOUND
from core.models import (
    ComparisonTotals,
    Detection,
    InspectionComparison,
    InspectionData,
    ItemPair,
    MissingItem,
    NewItem,
    RoomComparison,
)
from utils.text_utils import normalize_item_name


def _first_photo_url(detections: Iterable[Detection]) -> Optional[str]:
    for detection in detections:
        if detection.source_photo_url:
            return detection.source_photo_url
    return None


def compare_room(
    entry_detections: List[Detection],
    exit_detections: List[Detection],
    room: str = "",
    entry_photo_url: Optional[str] = None,
    exit_photo_url: Optional[str] = None
) -> RoomComparison:
    """
    Compare the entry and exit detections of one room.

    Every entry detection ends up in exactly one of changed, unchanged or
    missing. Every exit detection whose condition is not ``not_found`` ends
    up in exactly one of changed, unchanged or new. ``not_found`` exit
    detections are dropped: they neither consume an entry match nor appear
    as new.

    Args:
        entry_detections: Detections of the room at entry
        exit_detections: Detections of the room at exit
        room: Room label for the result (defaults to the first detection's room)
        entry_photo_url: Entry room photo attached to new items
        exit_photo_url: Exit room photo attached to missing items

    Returns:
        RoomComparison with the four buckets
    """
    if not room:
        for detection in list(entry_detections) + list(exit_detections):
            if detection.room:
                room = detection.room
                break

    if entry_photo_url is None:
        entry_photo_url = _first_photo_url(entry_detections)
    if exit_photo_url is None:
        exit_photo_url = _first_photo_url(exit_detections)

    pool = list(entry_detections)
    pool_keys = [normalize_item_name(d.item) for d in pool]
    result = RoomComparison(room=room)

    for exit_detection in exit_detections:
        if exit_detection.condition == CONDITION_NOT_FOUND:
            continue

        key = normalize_item_name(exit_detection.item)
        try:
            index = pool_keys.index(key)
        except ValueError:
            result.new.append(NewItem(exit=exit_detection, entry_photo_url=entry_photo_url))
            continue

        entry_detection = pool.pop(index)
        pool_keys.pop(index)
        pair = ItemPair(entry=entry_detection, exit=exit_detection)
        if pair.condition_changed:
            result.changed.append(pair)
        else:
            result.unchanged.append(pair)

    result.missing = [MissingItem(entry=d, exit_photo_url=exit_photo_url) for d in pool]
    return result


def summarize_totals(rooms: Iterable[RoomComparison]) -> ComparisonTotals:
    """Fold room comparisons into report-level counts."""
    return ComparisonTotals.from_rooms(list(rooms))


def compare_inspections(
    entry_inspection: InspectionData,
    exit_inspection: InspectionData
) -> InspectionComparison:
    """
    Compare every room present in either inspection.

    Rooms are ordered as first seen in the entry inspection, followed by
    rooms that only appear at exit. Room labels are compared verbatim.

    Args:
        entry_inspection: Move-in inspection
        exit_inspection: Move-out inspection

    Returns:
        InspectionComparison with per-room results and totals
    """
    rooms = list(dict.fromkeys(entry_inspection.rooms() + exit_inspection.rooms()))

    comparisons = [
        compare_room(
            entry_inspection.detections_for_room(room),
            exit_inspection.detections_for_room(room),
            room=room,
            entry_photo_url=entry_inspection.first_photo_url(room),
            exit_photo_url=exit_inspection.first_photo_url(room),
        )
        for room in rooms
    ]

    return InspectionComparison(rooms=comparisons, totals=summarize_totals(comparisons))


def count_critical_issues(comparison: InspectionComparison) -> int:
    """
    Dashboard counter of critical issues.

    Counts entry items missing at exit, read from the same comparison the
    report uses.
    """
    return comparison.totals.missing
