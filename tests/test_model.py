"""
Unit tests for the entity model.

Covers validation on construction and the duplicate predicates
(value equality, not object identity).
"""

import dataclasses
import unittest
from datetime import date, datetime

from interntrack.model import Event, Internship, normalize_status, parse_date, parse_datetime
from typical_data import acme, acme_deadline, acme_interview


class TestInternship(unittest.TestCase):
    def test_fields_are_normalized(self) -> None:
        it = Internship(company="  Acme ", role="SWE ", status="APPLIED", applied_on=date(2026, 3, 1), notes="  ")
        self.assertEqual(it.company, "Acme")
        self.assertEqual(it.role, "SWE")
        self.assertEqual(it.status, "applied")
        self.assertIsNone(it.notes)

    def test_blank_company_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Internship(company=" ", role="SWE", status="new", applied_on=date(2026, 3, 1))

    def test_unknown_status_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Internship(company="Acme", role="SWE", status="ghosted", applied_on=date(2026, 3, 1))

    def test_duplicate_ignores_case_of_names(self) -> None:
        other = Internship(company="ACME", role="swe", status="applied", applied_on=date(2026, 3, 1))
        self.assertTrue(acme().is_same_internship(other))

    def test_different_status_is_not_duplicate(self) -> None:
        other = dataclasses.replace(acme(), status="offered")
        self.assertFalse(acme().is_same_internship(other))
        self.assertFalse(acme().is_same_internship(None))

    def test_replace_keeps_id(self) -> None:
        edited = dataclasses.replace(acme(), role="Backend SWE")
        self.assertEqual(edited.internship_id, "acme")

    def test_equality_ignores_id(self) -> None:
        a = acme()
        b = dataclasses.replace(a, internship_id="other")
        self.assertEqual(a, b)


class TestEvent(unittest.TestCase):
    def test_start_after_end_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Event(
                name="Bad",
                start=datetime(2026, 4, 2, 15, 0),
                end=datetime(2026, 4, 2, 14, 0),
                internship_id="acme",
            )

    def test_start_equal_end_allowed(self) -> None:
        ev = Event(name="Call", start=datetime(2026, 4, 2, 15, 0), end=datetime(2026, 4, 2, 15, 0), internship_id="x")
        self.assertFalse(ev.is_deadline)

    def test_deadline_has_no_end(self) -> None:
        ev = acme_deadline()
        self.assertTrue(ev.is_deadline)
        self.assertEqual(ev.effective_end, ev.start)

    def test_duplicate_ignores_case_of_name(self) -> None:
        other = dataclasses.replace(acme_interview(), name="TECHNICAL INTERVIEW", description="other")
        self.assertTrue(acme_interview().is_same_event(other))

    def test_same_name_other_internship_is_not_duplicate(self) -> None:
        other = dataclasses.replace(acme_interview(), internship_id="beta")
        self.assertFalse(acme_interview().is_same_event(other))

    def test_is_between(self) -> None:
        ev = acme_interview()
        self.assertTrue(ev.is_between(datetime(2026, 4, 2, 0, 0), datetime(2026, 4, 2, 15, 0)))
        self.assertFalse(ev.is_between(datetime(2026, 4, 2, 0, 0), datetime(2026, 4, 2, 14, 59)))
        self.assertFalse(ev.is_between(datetime(2026, 4, 2, 14, 1), datetime(2026, 4, 3, 0, 0)))

    def test_is_after_or_equals(self) -> None:
        ev = acme_interview()
        self.assertTrue(ev.is_after_or_equals(datetime(2026, 4, 2, 14, 0)))
        self.assertFalse(ev.is_after_or_equals(datetime(2026, 4, 2, 14, 1)))


class TestParsers(unittest.TestCase):
    def test_parse_date(self) -> None:
        self.assertEqual(parse_date(" 2026-03-01 "), date(2026, 3, 1))
        with self.assertRaises(ValueError):
            parse_date("01.03.2026")

    def test_parse_datetime_collapses_whitespace(self) -> None:
        self.assertEqual(parse_datetime("2026-04-02   14:00"), datetime(2026, 4, 2, 14, 0))
        with self.assertRaises(ValueError):
            parse_datetime("2026-04-02")

    def test_normalize_status(self) -> None:
        self.assertEqual(normalize_status(" Interview "), "interview")
        with self.assertRaises(ValueError):
            normalize_status("")


if __name__ == "__main__":
    unittest.main()
