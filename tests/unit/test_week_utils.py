"""Unit tests for ISO week boundaries."""

from datetime import date, datetime, timezone

from boli.competition.week_utils import get_monday, get_week_dates, get_week_iso


class TestWeeklyBoundaries:

    def test_monday_is_start_of_week(self):
        monday, sunday = get_week_dates(date(2026, 2, 25))  # Wednesday
        assert monday == date(2026, 2, 23)
        assert monday.weekday() == 0
        assert sunday == date(2026, 3, 1)
        assert sunday.weekday() == 6

    def test_monday_maps_to_itself(self):
        assert get_monday(date(2026, 2, 23)) == date(2026, 2, 23)

    def test_sunday_belongs_to_current_week(self):
        assert get_week_iso(date(2026, 2, 23)) == get_week_iso(date(2026, 3, 1))

    def test_next_monday_is_new_week(self):
        assert get_week_iso(date(2026, 3, 1)) != get_week_iso(date(2026, 3, 2))

    def test_accepts_datetime(self):
        dt = datetime(2026, 2, 27, 22, 15, tzinfo=timezone.utc)
        assert get_monday(dt) == date(2026, 2, 23)

    def test_week_iso_format(self):
        assert get_week_iso(date(2026, 2, 25)) == "2026-W09"

    def test_year_boundary_uses_iso_year(self):
        # 2027-01-01 is a Friday in ISO week 53 of 2026.
        assert get_week_iso(date(2027, 1, 1)) == "2026-W53"
        assert get_monday(date(2027, 1, 1)) == date(2026, 12, 28)

    def test_default_is_current_week(self):
        monday, sunday = get_week_dates()
        today = datetime.now(timezone.utc).date()
        assert monday <= today <= sunday
