#!/usr/bin/env python3
"""
Tests for standard schedule selection.
"""

import pytest

from pressure_design.exceptions import InvalidInputError, NotFoundError
from pressure_design.schedules import EXCEEDS_MAX_SCHEDULE_WARNING, ScheduleSelector
from pressure_design.tables import ScheduleRecord, ScheduleTable
from utils.reference_data import default_tables


def make_table():
    walls = {"10": 0.134, "40": 0.280, "40S": 0.280, "80": 0.432, "XS": 0.432, "160": 0.719}
    return ScheduleTable(
        ScheduleRecord(nps="6", schedule=sch, wall_thickness_in=wall, outside_diameter_in=6.625, nb_mm=150)
        for sch, wall in walls.items()
    )


class TestThinnestAdequate:
    """The thinnest schedule at or above the requirement is chosen."""

    def test_picks_thinnest_adequate(self):
        rec = ScheduleSelector(make_table()).select("6", 0.2)
        assert rec.schedule == "40"
        assert rec.wall_thickness_in == 0.280
        assert rec.warning is None
        assert rec.is_adequate

    def test_exact_wall_is_adequate(self):
        rec = ScheduleSelector(make_table()).select("6", 0.134)
        assert rec.schedule == "10"

    def test_no_thinner_schedule_qualifies(self):
        table = make_table()
        required = 0.3
        rec = ScheduleSelector(table).select("6", required)
        assert rec.wall_thickness_in >= required
        for record in table.records("6"):
            if record.wall_thickness_in < rec.wall_thickness_in:
                assert record.wall_thickness_in < required

    def test_equal_walls_ordered_by_designation(self):
        rec = ScheduleSelector(make_table()).select("6", 0.3)
        assert rec.schedule == "80"

    def test_margin_added_to_requirement(self):
        rec = ScheduleSelector(make_table()).select("6", 0.2, margin_in=0.1)
        assert rec.schedule == "80"
        assert rec.required_thickness_in == 0.2
        assert rec.margin_in == 0.1

    def test_bundled_data_mm_property(self):
        rec = ScheduleSelector(default_tables().schedules).select("2", 0.1)
        assert rec.schedule == "10S"
        assert rec.wall_thickness_mm == pytest.approx(0.109 * 25.4)


class TestExceedsThickest:
    """Requirement above every schedule returns the thickest with a warning."""

    def test_returns_thickest_with_warning(self):
        rec = ScheduleSelector(make_table()).select("6", 1.0)
        assert rec.schedule == "160"
        assert rec.wall_thickness_in == 0.719
        assert rec.warning == EXCEEDS_MAX_SCHEDULE_WARNING
        assert not rec.is_adequate

    def test_tied_thickest_uses_first_designation(self):
        table = ScheduleTable([
            ScheduleRecord(nps="2", schedule="XXS", wall_thickness_in=0.436, outside_diameter_in=2.375),
            ScheduleRecord(nps="2", schedule="160", wall_thickness_in=0.436, outside_diameter_in=2.375),
            ScheduleRecord(nps="2", schedule="40", wall_thickness_in=0.154, outside_diameter_in=2.375),
        ])
        rec = ScheduleSelector(table).select("2", 0.5)
        assert rec.schedule == "160"
        assert rec.warning


class TestLookups:
    """Candidate listing, lookups by designation and by bore."""

    def test_unknown_size_raises_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            ScheduleSelector(make_table()).select("8", 0.1)
        assert exc_info.value.lookup == "schedule"

    def test_candidates_sorted(self):
        walls = [r.wall_thickness_in for r in ScheduleSelector(make_table()).candidates("6")]
        assert walls == sorted(walls)

    def test_find_is_case_insensitive(self):
        selector = ScheduleSelector(make_table())
        assert selector.find("6", "xs").schedule == "XS"
        assert selector.find("NPS 6", " 40s ").wall_thickness_in == 0.280
        assert selector.find("6", "STD") is None

    def test_for_bore(self):
        records = default_tables().schedules.for_bore(50)
        assert records
        assert all(r.nps == "2" for r in records)
        assert [r.wall_thickness_in for r in records] == sorted(r.wall_thickness_in for r in records)

    def test_duplicate_schedule_rejected(self):
        with pytest.raises(InvalidInputError):
            ScheduleTable([
                ScheduleRecord(nps="6", schedule="40", wall_thickness_in=0.28, outside_diameter_in=6.625),
                ScheduleRecord(nps="6", schedule="40 ", wall_thickness_in=0.28, outside_diameter_in=6.625),
            ])
