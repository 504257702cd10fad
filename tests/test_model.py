import unittest

from edunexus.errors import ValidationError
from edunexus.model import Course, generate_course_id, validate_course_fields, validate_partial_fields


class TestCourseModel(unittest.TestCase):
    def test_from_api_maps_wire_fields(self) -> None:
        c = Course.from_api(
            {
                "id": "abc",
                "name": "Algorithms",
                "startTime": "09:00",
                "endTime": "10:30",
                "dayOfWeek": 2,
                "color": None,
                "instructor": "",
                "location": "HS 8",
                "userId": "u1",
            }
        )
        self.assertEqual(c.start_time, "09:00")
        self.assertEqual(c.day_of_week, 2)
        self.assertEqual(c.color, "")
        self.assertIsNone(c.instructor)
        self.assertEqual(c.location, "HS 8")
        self.assertEqual(c.user_id, "u1")

    def test_payload_never_carries_user_id(self) -> None:
        c = Course(id="x", name="A", start_time="08:00", end_time="09:00", day_of_week=1, user_id="u1")
        payload = c.to_payload()
        self.assertNotIn("userId", payload)
        self.assertEqual(payload["id"], "x")
        self.assertEqual(payload["dayOfWeek"], 1)

    def test_with_changes_keeps_unset_fields(self) -> None:
        c = Course(id="x", name="A", start_time="08:00", end_time="09:00", day_of_week=1)
        changed = c.with_changes(name="B", start_time=None)
        self.assertEqual(changed.name, "B")
        self.assertEqual(changed.start_time, "08:00")


class TestCourseIds(unittest.TestCase):
    def test_ids_are_unique_and_base36(self) -> None:
        ids = {generate_course_id() for _ in range(500)}
        self.assertEqual(len(ids), 500)
        for cid in ids:
            self.assertRegex(cid, r"^[0-9a-z]{10,}$")


class TestValidation(unittest.TestCase):
    def test_required_fields(self) -> None:
        with self.assertRaises(ValidationError):
            validate_course_fields("", "09:00", "10:00", 1)
        with self.assertRaises(ValidationError):
            validate_course_fields("A", "", "10:00", 1)
        with self.assertRaises(ValidationError):
            validate_course_fields("A", "09:00", None, 1)

    def test_end_must_be_after_start(self) -> None:
        with self.assertRaises(ValidationError):
            validate_course_fields("A", "10:00", "10:00", 1)
        with self.assertRaises(ValidationError):
            validate_course_fields("A", "10:00", "09:59", 1)
        validate_course_fields("A", "09:59", "10:00", 1)

    def test_day_range(self) -> None:
        with self.assertRaises(ValidationError):
            validate_course_fields("A", "09:00", "10:00", 7)
        with self.assertRaises(ValidationError):
            validate_course_fields("A", "09:00", "10:00", -1)
        validate_course_fields("A", "09:00", "10:00", 0)
        validate_course_fields("A", "09:00", "10:00", 6)

    def test_partial_checks_only_given_fields(self) -> None:
        validate_partial_fields()
        validate_partial_fields(name="B", day_of_week=0)
        validate_partial_fields(start_time="11:00")
        for kwargs in (
            {"name": "  "},
            {"start_time": ""},
            {"day_of_week": 7},
            {"day_of_week": True},
            {"start_time": "10:00", "end_time": "09:00"},
        ):
            with self.assertRaises(ValidationError, msg=kwargs):
                validate_partial_fields(**kwargs)


if __name__ == "__main__":
    unittest.main()
