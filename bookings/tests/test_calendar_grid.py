import datetime

from django.test import SimpleTestCase

from bookings.calendar_grid import build_month_grid, can_go_prev, parse_month, resolve_view_month
from bookings.utils.formatting import add_months

TODAY = datetime.date(2026, 10, 19)  # lunes


class MonthGridLayoutTests(SimpleTestCase):

    def test_october_2026_layout(self):
        grid = build_month_grid(datetime.date(2026, 10, 1), today=TODAY)

        # Oct 1st 2026 is a Thursday: three leading filler cells
        self.assertEqual(len(grid.cells), 35)
        self.assertEqual([c.in_current_month for c in grid.cells[:4]], [False, False, False, True])
        self.assertEqual(grid.cells[3].day, 1)
        self.assertEqual(grid.cells[0].date, datetime.date(2026, 9, 28))
        self.assertIsNone(grid.cells[0].day)

        # One trailing filler cell for Nov 1st
        last = grid.cells[-1]
        self.assertFalse(last.in_current_month)
        self.assertTrue(last.is_disabled)
        self.assertEqual(last.date, datetime.date(2026, 11, 1))

    def test_month_starting_on_monday_has_no_leading_cells(self):
        grid = build_month_grid(datetime.date(2027, 2, 1), today=TODAY)
        self.assertEqual(len(grid.cells), 28)
        self.assertTrue(all(c.in_current_month for c in grid.cells))

    def test_six_week_month(self):
        grid = build_month_grid(datetime.date(2026, 3, 1), today=TODAY)
        self.assertEqual(len(grid.cells), 42)
        self.assertEqual(len(grid.weeks), 6)

    def test_cell_count_is_always_a_multiple_of_seven(self):
        month = datetime.date(2024, 1, 1)
        for _ in range(60):
            grid = build_month_grid(month, today=TODAY)
            self.assertEqual(len(grid.cells) % 7, 0, month)
            in_month = [c for c in grid.cells if c.in_current_month]
            self.assertEqual(in_month[0].day, 1)
            self.assertEqual(in_month[-1].date, add_months(month, 1) - datetime.timedelta(days=1))
            self.assertTrue(all(len(week) == 7 for week in grid.weeks))
            month = add_months(month, 1)

    def test_any_day_of_month_can_be_passed_as_view_month(self):
        grid = build_month_grid(datetime.date(2026, 10, 23), today=TODAY)
        self.assertEqual(grid.view_month, datetime.date(2026, 10, 1))


class MonthGridStateTests(SimpleTestCase):

    def test_days_before_min_date_are_disabled(self):
        grid = build_month_grid(datetime.date(2026, 10, 1), today=TODAY, min_date=TODAY)
        by_day = {c.day: c for c in grid.cells if c.in_current_month}

        self.assertTrue(by_day[18].is_disabled)
        self.assertFalse(by_day[19].is_disabled)
        self.assertFalse(by_day[31].is_disabled)

    def test_min_date_compared_by_day(self):
        late_evening = datetime.datetime(2026, 10, 19, 22, 30)
        grid = build_month_grid(datetime.date(2026, 10, 1), today=TODAY, min_date=late_evening)
        by_day = {c.day: c for c in grid.cells if c.in_current_month}
        self.assertFalse(by_day[19].is_disabled)

    def test_disabled_days_are_monotonic(self):
        min_dates = [
            datetime.date(2026, 1, 1),
            datetime.date(2026, 2, 28),
            datetime.date(2026, 10, 19),
            datetime.date(2026, 12, 31),
        ]
        for min_date in min_dates:
            month = datetime.date(2025, 11, 1)
            for _ in range(16):
                grid = build_month_grid(month, today=TODAY, min_date=min_date)
                days = [c for c in grid.cells if c.in_current_month]
                for i, cell in enumerate(days):
                    if cell.is_disabled:
                        self.assertTrue(all(d.is_disabled for d in days[:i]), (month, min_date, cell.date))
                month = add_months(month, 1)

    def test_selected_and_today_markers(self):
        selected = datetime.date(2026, 10, 24)
        grid = build_month_grid(datetime.date(2026, 10, 1), today=TODAY, selected_date=selected)

        self.assertEqual([c.date for c in grid.cells if c.is_selected], [selected])
        self.assertEqual([c.date for c in grid.cells if c.is_today], [TODAY])

    def test_today_marker_suppressed_when_selected(self):
        grid = build_month_grid(datetime.date(2026, 10, 1), today=TODAY, selected_date=TODAY)
        cell = next(c for c in grid.cells if c.date == TODAY)
        self.assertTrue(cell.is_selected)
        self.assertFalse(cell.is_today)

    def test_selection_in_another_month_is_not_highlighted(self):
        grid = build_month_grid(
            datetime.date(2026, 11, 1),
            today=TODAY,
            selected_date=datetime.date(2026, 10, 31),
        )
        self.assertFalse(any(c.is_selected for c in grid.cells))
        self.assertFalse(any(c.is_today for c in grid.cells))


class MonthNavigationTests(SimpleTestCase):

    def test_prev_disabled_when_previous_month_ends_before_min_date(self):
        self.assertFalse(can_go_prev(datetime.date(2026, 10, 1), TODAY))
        self.assertTrue(can_go_prev(datetime.date(2026, 11, 1), TODAY))
        self.assertTrue(can_go_prev(datetime.date(2026, 10, 1), None))

    def test_prev_allowed_when_min_date_is_last_day_of_previous_month(self):
        self.assertTrue(can_go_prev(datetime.date(2026, 11, 1), datetime.date(2026, 10, 31)))

    def test_next_is_always_enabled(self):
        grid = build_month_grid(datetime.date(2030, 12, 1), today=TODAY, min_date=TODAY)
        self.assertTrue(grid.can_go_next)
        self.assertEqual(grid.next_month, datetime.date(2031, 1, 1))
        self.assertEqual(grid.prev_month, datetime.date(2030, 11, 1))

    def test_parse_month(self):
        self.assertEqual(parse_month('2026-11'), datetime.date(2026, 11, 1))
        self.assertIsNone(parse_month('2026-13'))
        self.assertIsNone(parse_month('noviembre'))
        self.assertIsNone(parse_month(None))

    def test_view_month_follows_selected_date(self):
        month = resolve_view_month(selected_date=datetime.date(2026, 12, 5), min_date=TODAY, today=TODAY)
        self.assertEqual(month, datetime.date(2026, 12, 1))

    def test_explicit_month_wins_over_selection(self):
        month = resolve_view_month(
            requested=datetime.date(2027, 1, 1),
            selected_date=datetime.date(2026, 12, 5),
            min_date=TODAY,
            today=TODAY,
        )
        self.assertEqual(month, datetime.date(2027, 1, 1))

    def test_explicit_month_clamped_to_min_date(self):
        month = resolve_view_month(requested=datetime.date(2026, 1, 1), min_date=TODAY, today=TODAY)
        self.assertEqual(month, datetime.date(2026, 10, 1))

    def test_defaults_to_current_month(self):
        self.assertEqual(resolve_view_month(today=TODAY), datetime.date(2026, 10, 1))
