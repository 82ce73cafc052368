#!/usr/bin/env python3
"""
CLI for entry/exit inspection comparison.

Works on JSON exports of inspections (``id``, ``inspection_type``,
``created_at``, ``photos`` with ``url``, ``room`` and ``analysis_result``).
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from core.constants import BUCKET_ORDER, REPORT_LABELS
from core.exceptions import ReportGenerationError
from core.models import PropertyInfo, SectionConfig
from inspection.diff_engine import compare_inspections
from inspection.parsing import inspection_from_dict
from layout.page_breaks import page_ranges, plan_breaks
from services.document_writer import PdfDocumentWriter
from services.photo_loader import PhotoLoader
from services.render_service import ReportRenderer
from services.report_service import ReportAssembler
from utils.text_utils import describe_detection


def load_json(path: str) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def compare_cli(entry_path: str, exit_path: str, as_json: bool = False):
    """Print the room-by-room comparison of two inspection exports."""
    entry = inspection_from_dict(load_json(entry_path))
    exit_ = inspection_from_dict(load_json(exit_path))
    comparison = compare_inspections(entry, exit_)

    if as_json:
        print(json.dumps(comparison.to_dict(), indent=2, ensure_ascii=False))
        return

    print("=" * 60)
    print(f"Entry: {entry.inspection_id}  Exit: {exit_.inspection_id}")
    print("=" * 60)

    for room in comparison.rooms:
        print(f"\n{room.room or '-'}")
        for bucket in BUCKET_ORDER:
            entries = room.bucket(bucket)
            if not entries:
                continue
            print(f"  {REPORT_LABELS[bucket]} ({len(entries)})")
            for e in entries:
                if bucket in ('changed', 'unchanged'):
                    print(f"    - {describe_detection(e.entry)}: {e.entry.condition} -> {e.exit.condition}")
                elif bucket == 'new':
                    print(f"    - {describe_detection(e.exit)}: {e.exit.condition}")
                else:
                    print(f"    - {describe_detection(e.entry)}: {e.entry.condition}")

    totals = comparison.totals
    print()
    print(f"Changed: {totals.changed}  New: {totals.new}  Missing: {totals.missing}  Unchanged: {totals.unchanged}")


def parse_block(text: str):
    """Parse a ``top:bottom`` block argument."""
    top, sep, bottom = text.partition(':')
    if not sep:
        raise argparse.ArgumentTypeError(f"Block must be TOP:BOTTOM, got {text!r}")
    try:
        return float(top), float(bottom)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Block must be numeric TOP:BOTTOM, got {text!r}")


def plan_cli(content_height: float, max_page_height: float, blocks, min_fill_ratio: float):
    """Print planned page breaks."""
    breaks = plan_breaks(content_height, max_page_height, blocks, min_fill_ratio=min_fill_ratio)
    print(f"Breaks: {breaks}")
    for number, (top, bottom) in enumerate(page_ranges(breaks), start=1):
        print(f"  Page {number}: {top} - {bottom} ({bottom - top})")


async def report_cli(
    property_path: str,
    entry_path: str,
    exit_path: str,
    output: str,
    inspector_name: str = None,
    hide_summary: bool = False,
    hide_unchanged: bool = False
):
    """Generate the comparison PDF from JSON exports."""
    property_data = load_json(property_path)
    property_info = PropertyInfo(
        name=property_data.get('name', ''),
        address=property_data.get('address', ''),
        company_name=property_data.get('company_name'),
        company_logo_url=property_data.get('company_logo_url'),
        responsible_name=property_data.get('responsible_name'),
        property_id=property_data.get('id'),
    )
    entry = inspection_from_dict(load_json(entry_path))
    exit_ = inspection_from_dict(load_json(exit_path))

    section_config = SectionConfig(show_summary=not hide_summary)
    if hide_unchanged:
        for room in dict.fromkeys(entry.rooms() + exit_.rooms()):
            section_config = section_config.with_room(room, unchanged=False)

    renderer = ReportRenderer(
        width=settings.get_surface_width(),
        scale=settings.render_scale,
        photo_loader=PhotoLoader(timeout=settings.photo_timeout),
        photo_height=settings.photo_height_px,
        font_path=settings.font_path,
        bold_font_path=settings.font_bold_path
    )
    assembler = ReportAssembler(
        renderer=renderer,
        writer=PdfDocumentWriter(title=property_info.name),
        layout=settings.get_page_layout(),
        min_fill_ratio=settings.min_fill_ratio
    )

    print(f"Generating report for {property_info.name or '-'}...")
    try:
        document = await assembler.assemble_report(
            property_info, entry, exit_,
            section_config=section_config,
            inspector_name=inspector_name
        )
    except ReportGenerationError as e:
        print(f"❌ Error: {e.message} ({e.__cause__})")
        return None

    Path(output).write_bytes(document.content)
    print(f"✓ Report written to: {output} ({document.page_count} pages)")
    return document


def main():
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s %(name)s: %(message)s')

    parser = argparse.ArgumentParser(
        description='Entry/exit inspection comparison CLI'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Compare two inspection exports')
    compare_parser.add_argument('entry', type=str, help='Entry inspection JSON')
    compare_parser.add_argument('exit', type=str, help='Exit inspection JSON')
    compare_parser.add_argument('--json', action='store_true', help='Print raw JSON result')

    # Plan command
    plan_parser = subparsers.add_parser('plan', help='Plan page breaks for a surface height')
    plan_parser.add_argument('content_height', type=float, help='Surface height')
    plan_parser.add_argument('max_page_height', type=float, help='Usable page height')
    plan_parser.add_argument('-b', '--block', type=parse_block, action='append', default=[], help='Protected block TOP:BOTTOM (repeatable)')
    plan_parser.add_argument('--min-fill', type=float, default=settings.min_fill_ratio, help='Minimum page fill ratio')

    # Report command
    report_parser = subparsers.add_parser('report', help='Generate comparison PDF')
    report_parser.add_argument('property', type=str, help='Property JSON')
    report_parser.add_argument('entry', type=str, help='Entry inspection JSON')
    report_parser.add_argument('exit', type=str, help='Exit inspection JSON')
    report_parser.add_argument('-o', '--output', type=str, default='comparison_report.pdf', help='Output PDF path')
    report_parser.add_argument('--inspector', type=str, default=None, help='Inspector name')
    report_parser.add_argument('--hide-summary', action='store_true', help='Leave out the summary section')
    report_parser.add_argument('--hide-unchanged', action='store_true', help='Leave out unchanged items')

    args = parser.parse_args()

    if args.command == 'compare':
        compare_cli(args.entry, args.exit, as_json=args.json)
    elif args.command == 'plan':
        plan_cli(args.content_height, args.max_page_height, args.block, args.min_fill)
    elif args.command == 'report':
        document = asyncio.run(report_cli(
            property_path=args.property,
            entry_path=args.entry,
            exit_path=args.exit,
            output=args.output,
            inspector_name=args.inspector,
            hide_summary=args.hide_summary,
            hide_unchanged=args.hide_unchanged
        ))
        if document is None:
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
