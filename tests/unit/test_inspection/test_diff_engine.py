"""
Unit tests for inspection.diff_engine module.
"""
import random

import pytest
from core.models import Detection, InspectionData, InspectionPhoto
from inspection.diff_engine import (
    compare_inspections,
    compare_room,
    count_critical_issues,
    summarize_totals
)


def d(item, condition="good", room="Sala", **fields):
    return Detection(item=item, condition=condition, room=room, **fields)


class TestCompareRoomEmpty:
    """Tests for degenerate room inputs."""

    def test_both_empty(self):
        """Test no detections gives all-empty buckets."""
        result = compare_room([], [])

        assert result.changed == []
        assert result.unchanged == []
        assert result.new == []
        assert result.missing == []
        assert result.is_empty

    def test_no_exit_detections(self):
        """Test every entry detection is missing when the exit is empty."""
        entries = [d("Sofá"), d("Mesa")]

        result = compare_room(entries, [])

        assert [m.entry for m in result.missing] == entries
        assert result.changed == [] and result.unchanged == [] and result.new == []

    def test_no_entry_detections(self):
        """Test every exit detection is new when the entry is empty."""
        exits = [d("Sofá"), d("Mesa", "damaged")]

        result = compare_room([], exits)

        assert [n.exit for n in result.new] == exits
        assert result.changed == [] and result.unchanged == [] and result.missing == []


class TestCompareRoomMatching:
    """Tests for name matching rules."""

    def test_case_and_whitespace_insensitive(self):
        """Test 'Sofá' matches ' sofá '."""
        result = compare_room([d("Sofá")], [d(" sofá ")])

        assert len(result.unchanged) == 1
        assert result.new == []
        assert result.missing == []

    def test_condition_change_routes_to_changed(self):
        """Test differing conditions produce a changed pair."""
        entry = d("Sofá", "good")
        exit_ = d("sofá", "damaged")

        result = compare_room([entry], [exit_])

        assert len(result.changed) == 1
        assert result.changed[0].entry is entry
        assert result.changed[0].exit is exit_

    def test_condition_case_is_significant(self):
        """Test conditions are compared verbatim."""
        result = compare_room([d("Mesa", "good")], [d("Mesa", "Good")])

        assert len(result.changed) == 1

    def test_no_fuzzy_matching(self):
        """Test differently worded items are unrelated."""
        result = compare_room([d("sofá")], [d("sofá de 3 lugares")])

        assert len(result.missing) == 1
        assert len(result.new) == 1
        assert result.changed == [] and result.unchanged == []

    def test_attributes_ignored_for_matching(self):
        """Test material and color do not affect matching."""
        result = compare_room(
            [d("Mesa", material="madeira", color="marrom")],
            [d("Mesa", material="vidro", color="branca")]
        )

        assert len(result.unchanged) == 1

    def test_blank_names_match_each_other(self):
        """Test empty and whitespace names share the empty key."""
        result = compare_room([d("")], [d("   ", "damaged")])

        assert len(result.changed) == 1


class TestCompareRoomDuplicates:
    """Tests for duplicate-named items."""

    def test_two_entries_one_exit(self):
        """Test two 'Cadeira' against one yields one pair and one missing."""
        first = d("Cadeira", "good", detection_id="c1")
        second = d("Cadeira", "good", detection_id="c2")

        result = compare_room([first, second], [d("Cadeira", "good")])

        assert len(result.unchanged) == 1
        assert len(result.missing) == 1
        assert result.unchanged[0].entry is first
        assert result.missing[0].entry is second

    def test_pool_order_consumption(self):
        """Test exits consume duplicate entries in pool order."""
        first = d("Cadeira", "good", detection_id="c1")
        second = d("Cadeira", "worn", detection_id="c2")

        result = compare_room([first, second], [d("Cadeira", "worn"), d("Cadeira", "worn")])

        # First exit takes the first entry even though the second has the same condition
        assert result.changed[0].entry is first
        assert result.unchanged[0].entry is second
        assert result.missing == []

    def test_more_exits_than_entries(self):
        """Test surplus duplicates are new."""
        result = compare_room([d("Cadeira")], [d("Cadeira"), d("Cadeira")])

        assert len(result.unchanged) == 1
        assert len(result.new) == 1


class TestCompareRoomNotFound:
    """Tests for not_found exit detections."""

    def test_not_found_does_not_consume_match(self):
        """Test a not_found Mesa leaves the entry Mesa missing."""
        entry = d("Mesa", "used")

        result = compare_room([entry], [d("Mesa", "not_found")])

        assert [m.entry for m in result.missing] == [entry]
        assert result.new == []
        assert result.changed == [] and result.unchanged == []

    def test_not_found_never_new(self):
        """Test not_found detections without a counterpart are dropped."""
        result = compare_room([], [d("Quadro", "not_found")])

        assert result.is_empty

    def test_not_found_case_sensitive(self):
        """Test only the exact sentinel is skipped."""
        result = compare_room([], [d("Quadro", "NOT_FOUND")])

        assert len(result.new) == 1


class TestCompareRoomPhotos:
    """Tests for room photo attachment."""

    def test_new_carries_entry_photo_and_missing_exit_photo(self):
        """Test new items show the entry room photo and missing items the exit one."""
        result = compare_room(
            [d("Sofá")],
            [d("Luminária")],
            room="Sala",
            entry_photo_url="entry.jpg",
            exit_photo_url="exit.jpg"
        )

        assert result.new[0].entry_photo_url == "entry.jpg"
        assert result.missing[0].exit_photo_url == "exit.jpg"

    def test_photo_defaults_from_detections(self):
        """Test photos default to the first detection photo of each side."""
        result = compare_room(
            [d("Sofá", source_photo_url="e1.jpg")],
            [d("Luminária", source_photo_url="x1.jpg")]
        )

        assert result.new[0].entry_photo_url == "e1.jpg"
        assert result.missing[0].exit_photo_url == "x1.jpg"
        assert result.room == "Sala"


class TestCompareRoomPartition:
    """Partition property over generated inputs."""

    NAMES = ["Sofá", " sofá", "MESA", "mesa ", "Cadeira", "Quadro", ""]
    CONDITIONS = ["new", "good", "used", "worn", "damaged", "not_found"]

    @pytest.mark.parametrize("seed", range(25))
    def test_every_detection_in_exactly_one_bucket(self, seed):
        """Test entries and non-not_found exits are each routed exactly once."""
        rng = random.Random(seed)
        entries = [
            d(rng.choice(self.NAMES), rng.choice(self.CONDITIONS), detection_id=f"e{i}")
            for i in range(rng.randint(0, 8))
        ]
        exits = [
            d(rng.choice(self.NAMES), rng.choice(self.CONDITIONS), detection_id=f"x{i}")
            for i in range(rng.randint(0, 8))
        ]

        result = compare_room(entries, exits)

        entry_ids = (
            [p.entry.detection_id for p in result.changed]
            + [p.entry.detection_id for p in result.unchanged]
            + [m.entry.detection_id for m in result.missing]
        )
        exit_ids = (
            [p.exit.detection_id for p in result.changed]
            + [p.exit.detection_id for p in result.unchanged]
            + [n.exit.detection_id for n in result.new]
        )

        assert sorted(entry_ids) == sorted(e.detection_id for e in entries)
        assert sorted(exit_ids) == sorted(
            x.detection_id for x in exits if x.condition != "not_found"
        )
        for pair in result.changed:
            assert pair.entry.condition != pair.exit.condition
        for pair in result.unchanged:
            assert pair.entry.condition == pair.exit.condition

    def test_deterministic(self):
        """Test identical inputs give identical results."""
        entries = [d("Cadeira"), d("Cadeira", "worn"), d("Mesa")]
        exits = [d("cadeira", "worn"), d("Sofá")]

        assert compare_room(entries, exits) == compare_room(entries, exits)

    def test_inputs_not_modified(self):
        """Test the caller's lists are left untouched."""
        entries = [d("Cadeira"), d("Mesa")]
        exits = [d("Cadeira")]

        compare_room(entries, exits)

        assert len(entries) == 2
        assert len(exits) == 1


class TestCompareInspections:
    """Tests for compare_inspections."""

    def test_room_union_in_order(self, entry_inspection, exit_inspection):
        """Test rooms from both inspections, entry order first."""
        comparison = compare_inspections(entry_inspection, exit_inspection)

        assert [r.room for r in comparison.rooms] == ["Sala", "Cozinha", "Banheiro"]

    def test_buckets_and_totals(self, entry_inspection, exit_inspection):
        """Test the sample pair produces the expected differences."""
        comparison = compare_inspections(entry_inspection, exit_inspection)
        sala = comparison.get_room("Sala")

        assert [p.entry.item for p in sala.changed] == ["Sofá"]
        assert [p.entry.item for p in sala.unchanged] == ["Mesa"]
        assert [n.exit.item for n in sala.new] == ["Luminária"]
        assert [m.entry.item for m in sala.missing] == ["Cadeira"]
        assert comparison.get_room("Banheiro").new[0].entry_photo_url is None
        assert comparison.totals.to_dict() == {
            'changed': 1, 'new': 2, 'missing': 1, 'unchanged': 2
        }

    def test_room_photos_from_inspections(self, entry_inspection, exit_inspection):
        """Test room photos come from each inspection's first photo of the room."""
        sala = compare_inspections(entry_inspection, exit_inspection).get_room("Sala")

        assert sala.new[0].entry_photo_url == "entry-sala.jpg"
        assert sala.missing[0].exit_photo_url == "exit-sala.jpg"

    def test_room_labels_verbatim(self):
        """Test room labels differing in case are separate rooms."""
        entry = InspectionData("e", "entry", photos=[
            InspectionPhoto(url="1.jpg", room="Sala", detections=(d("Sofá", room="Sala"),))
        ])
        exit_ = InspectionData("x", "exit", photos=[
            InspectionPhoto(url="2.jpg", room="sala", detections=(d("Sofá", room="sala"),))
        ])

        comparison = compare_inspections(entry, exit_)

        assert [r.room for r in comparison.rooms] == ["Sala", "sala"]
        assert comparison.totals.missing == 1
        assert comparison.totals.new == 1


class TestCounters:
    """Tests for summarize_totals and count_critical_issues."""

    def test_critical_issues_equal_missing(self, entry_inspection, exit_inspection):
        """Test the dashboard counter agrees with the report totals."""
        comparison = compare_inspections(entry_inspection, exit_inspection)

        assert count_critical_issues(comparison) == comparison.totals.missing == 1

    def test_summarize_totals(self):
        """Test totals fold over rooms."""
        rooms = [compare_room([d("A")], []), compare_room([], [d("B")])]

        totals = summarize_totals(rooms)

        assert totals.missing == 1
        assert totals.new == 1
