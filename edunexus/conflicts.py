"""
Overlap detection for weekly courses.

Two courses overlap when they share a weekday and:
    start < other_end AND end > other_start

The week view still stacks overlapping blocks (it never splits widths);
this only tells the painter which blocks are partly hidden.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from edunexus.model import Course
from edunexus.timemath import time_to_minutes


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def find_conflicts(courses: Iterable[Course]) -> list[tuple[Course, Course]]:
    """
    Find overlapping course pairs (A, B), each pair once, in input order.
    Courses with end <= start are skipped.
    """
    conflicts: list[tuple[Course, Course]] = []

    parsed: list[tuple[int, int, int, Course]] = []
    for c in courses:
        start = time_to_minutes(c.start_time)
        end = time_to_minutes(c.end_time)
        if end <= start:
            continue
        parsed.append((c.day_of_week, start, end, c))

    # O(n^2) is fine for one person's week
    for i in range(len(parsed)):
        d1, s1, e1, c1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            d2, s2, e2, c2 = parsed[j]
            if d1 != d2:
                continue
            if _overlaps(s1, e1, s2, e2):
                conflicts.append((c1, c2))

    return conflicts


def overlap_index(courses: Iterable[Course]) -> dict[str, list[str]]:
    """
    Map course id -> ids of the courses it overlaps with.
    """
    index: dict[str, list[str]] = defaultdict(list)
    for a, b in find_conflicts(courses):
        index[a.id].append(b.id)
        index[b.id].append(a.id)
    return dict(index)
