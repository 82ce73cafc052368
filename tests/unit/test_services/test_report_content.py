"""
Unit tests for services.report_content module.
"""
import pytest
from core.models import Detection, SectionConfig
from inspection.diff_engine import compare_inspections, compare_room
from services.report_content import build_report_content, build_room_section


def make_detection(item, condition="good", room="Sala", **fields):
    return Detection(item=item, condition=condition, room=room, **fields)


class TestBuildRoomSection:
    """Tests for build_room_section function."""

    def test_buckets_in_display_order(self):
        """Test visible groups follow changed, new, missing, unchanged."""
        comparison = compare_room(
            [make_detection("Sofá"), make_detection("Mesa"), make_detection("Cadeira")],
            [make_detection("Sofá", "damaged"), make_detection("Mesa"), make_detection("Luminária")],
            room="Sala"
        )

        section = build_room_section(comparison, SectionConfig())

        assert [g.bucket for g in section.groups] == ['changed', 'new', 'missing', 'unchanged']

    def test_changed_line_shows_transition(self):
        """Test changed items show entry and exit conditions."""
        comparison = compare_room(
            [make_detection("Sofá", "good", material="couro")],
            [make_detection("sofá", "damaged")],
            room="Sala"
        )

        line = build_room_section(comparison, SectionConfig()).groups[0].lines[0]

        assert line.text == "Sofá (couro)"
        assert line.detail == "Good -> Damaged"

    def test_empty_buckets_left_out(self):
        """Test only non-empty buckets become groups."""
        comparison = compare_room([make_detection("Mesa")], [], room="Sala")

        section = build_room_section(comparison, SectionConfig())

        assert [g.bucket for g in section.groups] == ['missing']

    def test_disabled_bucket_hidden(self):
        """Test toggled-off buckets are hidden."""
        comparison = compare_room(
            [make_detection("Mesa"), make_detection("Cadeira")],
            [make_detection("Mesa")],
            room="Sala"
        )
        config = SectionConfig().with_room("Sala", unchanged=False)

        section = build_room_section(comparison, config)

        assert [g.bucket for g in section.groups] == ['missing']

    def test_room_without_visible_content(self):
        """Test a room whose visible buckets are all empty is dropped."""
        comparison = compare_room([make_detection("Mesa")], [make_detection("Mesa")], room="Sala")
        config = SectionConfig().with_room("Sala", unchanged=False)

        assert build_room_section(comparison, config) is None

    def test_empty_room_dropped(self):
        """Test rooms without detections are not shown."""
        assert build_room_section(compare_room([], [], room="Sala"), SectionConfig()) is None


class TestBuildReportContent:
    """Tests for build_report_content function."""

    def test_header(self, property_info, entry_inspection, exit_inspection):
        """Test header fields come from property and inspections."""
        comparison = compare_inspections(entry_inspection, exit_inspection)

        content = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison, SectionConfig()
        )

        assert content.header.property_name == "Apartamento Centro"
        assert content.header.inspector_name == "Ana Souza"
        assert content.header.entry_date == entry_inspection.inspection_date
        assert content.header.exit_date == exit_inspection.inspection_date

    def test_inspector_override(self, property_info, entry_inspection, exit_inspection):
        """Test an explicit inspector name wins over the property responsible."""
        comparison = compare_inspections(entry_inspection, exit_inspection)

        content = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison,
            SectionConfig(), inspector_name="Carlos"
        )

        assert content.header.inspector_name == "Carlos"

    def test_summary_toggle(self, property_info, entry_inspection, exit_inspection):
        """Test the summary can be hidden."""
        comparison = compare_inspections(entry_inspection, exit_inspection)

        shown = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison, SectionConfig()
        )
        hidden = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison,
            SectionConfig(show_summary=False)
        )

        assert shown.summary == comparison.totals
        assert hidden.summary is None

    def test_rooms_and_photos(self, property_info, entry_inspection, exit_inspection):
        """Test every room with visible content is listed with its photos."""
        comparison = compare_inspections(entry_inspection, exit_inspection)

        content = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison, SectionConfig()
        )

        assert [r.room for r in content.rooms] == ["Sala", "Cozinha", "Banheiro"]
        assert content.rooms[0].entry_photo_url == "entry-sala.jpg"
        assert content.rooms[2].entry_photo_url is None
        assert content.photo_urls() == [
            "entry-sala.jpg", "exit-sala.jpg",
            "entry-cozinha.jpg", "exit-cozinha.jpg",
            "exit-banheiro.jpg",
        ]

    def test_hidden_room(self, property_info, entry_inspection, exit_inspection):
        """Test a room is left out when all of its buckets are disabled."""
        comparison = compare_inspections(entry_inspection, exit_inspection)
        config = SectionConfig().with_room(
            "Cozinha", changed=False, new=False, missing=False, unchanged=False
        )

        content = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison, config
        )

        assert [r.room for r in content.rooms] == ["Sala", "Banheiro"]
