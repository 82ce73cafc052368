"""
Text utilities for inspection reports.

Handles item name normalization, display strings and line wrapping.
"""
from datetime import datetime
from typing import List, Optional

from core.constants import CONDITION_LABELS
from core.models import Detection


def normalize_item_name(name: Optional[str]) -> str:
    """
    Build the match key for an item name.

    Matching is case-insensitive and ignores surrounding whitespace. A missing
    or blank name becomes the empty key, so blank names match each other.

    Args:
        name: Free-text item name from the AI detection

    Returns:
        Normalized match key
    """
    if name is None:
        return ""
    return str(name).strip().lower()


def condition_label(condition: Optional[str]) -> str:
    """Display label for a condition; unknown values are shown as-is."""
    if not condition:
        return "-"
    return CONDITION_LABELS.get(condition, condition.replace('_', ' '))


def describe_detection(detection: Detection) -> str:
    """
    Describe a detection as ``item (material, color)``.

    Empty attributes are left out; the parenthesis is dropped when both are.
    """
    name = detection.item.strip() if detection.item else ""
    attributes = [a.strip() for a in (detection.material, detection.color) if a and a.strip()]
    if attributes:
        return f"{name} ({', '.join(attributes)})"
    return name


def format_date(value: Optional[datetime]) -> str:
    """Format inspection dates as dd/mm/yyyy."""
    if value is None:
        return "-"
    return value.strftime('%d/%m/%Y')


def wrap_text(text: str, font, max_width: float) -> List[str]:
    """
    Greedy word wrap using the font's rendered width.

    Words wider than ``max_width`` are split by character.

    Args:
        text: Text to wrap (newlines start new paragraphs)
        font: PIL ImageFont with ``getlength``
        max_width: Maximum line width in pixels

    Returns:
        List of lines (at least one, possibly empty)
    """
    lines: List[str] = []

    for paragraph in (text or "").split('\n'):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if font.getlength(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = ""

            # Break words that do not fit on a line of their own
            while font.getlength(word) > max_width and len(word) > 1:
                cut = len(word) - 1
                while cut > 1 and font.getlength(word[:cut]) > max_width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current = word

        lines.append(current)

    return lines or [""]
