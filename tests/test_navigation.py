import unittest
from datetime import date

from edunexus.navigation import MONTH, WEEK, ViewCursor


def cursor_on(day: date) -> ViewCursor:
    return ViewCursor(today_fn=lambda: day)


class TestViewCursor(unittest.TestCase):
    def test_starts_on_current_week_and_month(self) -> None:
        cursor = cursor_on(date(2026, 10, 20))
        self.assertEqual(cursor.active_view, WEEK)
        self.assertEqual(cursor.week_offset, 0)
        self.assertEqual((cursor.display_year, cursor.display_month), (2026, 9))

    def test_twelve_months_forward_is_next_year(self) -> None:
        cursor = cursor_on(date(2026, 10, 20))
        for _ in range(12):
            cursor.next_month()
        self.assertEqual((cursor.display_year, cursor.display_month), (2027, 9))

    def test_month_wraps_both_ways(self) -> None:
        cursor = cursor_on(date(2026, 1, 15))
        cursor.prev_month()
        self.assertEqual((cursor.display_year, cursor.display_month), (2025, 11))
        cursor.next_month()
        cursor.next_month()
        self.assertEqual((cursor.display_year, cursor.display_month), (2026, 1))

    def test_entering_month_view_resets_to_today(self) -> None:
        cursor = cursor_on(date(2026, 10, 20))
        cursor.switch_to(MONTH)
        cursor.next_month()
        cursor.next_month()
        cursor.switch_to(WEEK)
        cursor.switch_to(MONTH)
        self.assertEqual((cursor.display_year, cursor.display_month), (2026, 9))

    def test_week_offset_survives_view_switches(self) -> None:
        cursor = cursor_on(date(2026, 10, 20))
        cursor.next_week()
        cursor.next_week()
        cursor.switch_to(MONTH)
        cursor.prev_month()
        self.assertEqual(cursor.switch_to(WEEK), WEEK)
        self.assertEqual(cursor.week_offset, 2)
        cursor.this_week()
        self.assertEqual(cursor.week_offset, 0)

    def test_unknown_view_falls_back_to_week(self) -> None:
        cursor = cursor_on(date(2026, 10, 20))
        cursor.switch_to(MONTH)
        self.assertEqual(cursor.switch_to("agenda"), WEEK)

    def test_header(self) -> None:
        cursor = cursor_on(date(2026, 10, 20))
        self.assertEqual(cursor.header(), "Oct 18 - 24, 2026")
        cursor.prev_week()
        self.assertEqual(cursor.header(), "Oct 11 - 17, 2026")
        cursor.switch_to(MONTH)
        cursor.next_month()
        cursor.next_month()
        cursor.next_month()
        self.assertEqual(cursor.header(), "January 2027")


if __name__ == "__main__":
    unittest.main()
