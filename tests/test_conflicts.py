"""
Unit tests for overlap detection.

Definition used here:
- Two courses overlap if they share a weekday and their times intersect.
- Touching endpoints (end == start) is NOT an overlap.
"""

import unittest

from edunexus.conflicts import find_conflicts, overlap_index
from edunexus.model import Course


def course(cid: str, start: str, end: str, day: int = 1) -> Course:
    return Course(id=cid, name=cid, start_time=start, end_time=end, day_of_week=day)


class TestConflicts(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        confs = find_conflicts([course("A", "10:00", "11:00"), course("B", "10:30", "12:00")])
        self.assertEqual([(a.id, b.id) for a, b in confs], [("A", "B")])

    def test_no_overlap_touching_end(self) -> None:
        # end == start is allowed (no overlap)
        self.assertEqual(find_conflicts([course("A", "10:00", "11:00"), course("B", "11:00", "12:00")]), [])

    def test_different_days_never_overlap(self) -> None:
        self.assertEqual(find_conflicts([course("A", "10:00", "11:00", 1), course("B", "10:00", "11:00", 2)]), [])

    def test_backwards_course_is_ignored(self) -> None:
        self.assertEqual(find_conflicts([course("A", "12:00", "10:00"), course("B", "10:30", "11:00")]), [])

    def test_overlap_index(self) -> None:
        index = overlap_index(
            [course("A", "09:00", "12:00"), course("B", "10:00", "10:30"), course("C", "11:00", "13:00")]
        )
        self.assertEqual(index, {"A": ["B", "C"], "B": ["A"], "C": ["A"]})


if __name__ == "__main__":
    unittest.main()
