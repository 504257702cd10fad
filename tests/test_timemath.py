"""
Unit tests for time and calendar math.

Conventions: months are 0-indexed, weekdays are 0 = Sunday,
the default day window is 07:00-22:00 (15 hours).
"""

import unittest
from datetime import date

from edunexus.timemath import (
    days_in_month,
    duration_to_percent,
    first_weekday_of_month,
    js_weekday,
    normalize_month,
    shift_month,
    time_to_minutes,
    time_to_percent,
)


class TestTimeToMinutes(unittest.TestCase):
    def test_valid_times(self) -> None:
        self.assertEqual(time_to_minutes("00:00"), 0)
        self.assertEqual(time_to_minutes("09:00"), 540)
        self.assertEqual(time_to_minutes("23:59"), 1439)

    def test_monotonic_in_clock_order(self) -> None:
        clock = [f"{h:02d}:{m:02d}" for h in range(24) for m in range(0, 60, 7)]
        values = [time_to_minutes(t) for t in clock]
        self.assertEqual(values, sorted(values))

    def test_malformed_input_is_zero(self) -> None:
        for bad in ("", None, "0900", "ab:cd", "9:", "10:30:00"):
            self.assertEqual(time_to_minutes(bad), 0, bad)


class TestPercentages(unittest.TestCase):
    def test_start_of_window_is_zero(self) -> None:
        self.assertEqual(time_to_percent("07:00"), 0)
        self.assertEqual(time_to_percent("06:15"), 0)

    def test_end_of_window_clamps_to_hundred(self) -> None:
        self.assertEqual(time_to_percent("22:00"), 100)
        self.assertEqual(time_to_percent("23:30"), 100)

    def test_inside_window(self) -> None:
        self.assertAlmostEqual(time_to_percent("09:00"), 13.333, places=2)
        self.assertAlmostEqual(time_to_percent("14:30"), 50.0)

    def test_zero_length_window(self) -> None:
        for t in ("00:00", "09:00", "23:00", ""):
            self.assertEqual(time_to_percent(t, 7, 0), 0)
        self.assertEqual(duration_to_percent("09:00", "10:00", 0), 0)

    def test_duration(self) -> None:
        self.assertAlmostEqual(duration_to_percent("09:00", "10:30"), 10.0)

    def test_duration_has_fifteen_minute_floor(self) -> None:
        floor = 15 / 900 * 100
        self.assertAlmostEqual(duration_to_percent("10:00", "10:00"), floor)
        self.assertAlmostEqual(duration_to_percent("11:00", "10:00"), floor)
        self.assertAlmostEqual(duration_to_percent("10:00", "10:05"), floor)
        self.assertAlmostEqual(duration_to_percent("", ""), floor)


class TestCalendarMath(unittest.TestCase):
    def test_days_in_month(self) -> None:
        self.assertEqual(days_in_month(2026, 0), 31)
        self.assertEqual(days_in_month(2026, 1), 28)
        self.assertEqual(days_in_month(2024, 1), 29)
        self.assertEqual(days_in_month(1900, 1), 28)
        self.assertEqual(days_in_month(2000, 1), 29)
        self.assertEqual(days_in_month(2026, 10), 30)

    def test_first_weekday(self) -> None:
        # 2026-10-01 is a Thursday, 2026-02-01 a Sunday
        self.assertEqual(first_weekday_of_month(2026, 9), 4)
        self.assertEqual(first_weekday_of_month(2026, 1), 0)

    def test_out_of_range_months_cross_years(self) -> None:
        self.assertEqual(normalize_month(2026, -1), (2025, 11))
        self.assertEqual(normalize_month(2026, 12), (2027, 0))
        self.assertEqual(days_in_month(2026, -1), 31)
        self.assertEqual(first_weekday_of_month(2026, 12), first_weekday_of_month(2027, 0))

    def test_shift_month(self) -> None:
        self.assertEqual(shift_month(2026, 11, 1), (2027, 0))
        self.assertEqual(shift_month(2026, 0, -1), (2025, 11))
        self.assertEqual(shift_month(2026, 9, 12), (2027, 9))

    def test_js_weekday(self) -> None:
        self.assertEqual(js_weekday(date(2026, 10, 18)), 0)  # Sunday
        self.assertEqual(js_weekday(date(2026, 10, 20)), 2)  # Tuesday


if __name__ == "__main__":
    unittest.main()
