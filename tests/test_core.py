import logging
import unittest
from datetime import date, datetime, timezone

from fakes import id_sequence

from homestock.core.dates import add_days, current_timestamp, normalize_date, today_string
from homestock.core.errors import IdSpaceExhaustedError
from homestock.core.ids import format_name_template, generate_unique_id, random_uint32
from homestock.core.logging import JsonFormatter, resolve_level


class IdsTest(unittest.TestCase):
    def test_retries_until_free(self):
        self.assertEqual(generate_unique_id({1, 2}, id_source=id_sequence(1, 2, 1, 3)), 3)

    def test_gives_up_after_max_attempts(self):
        with self.assertRaises(IdSpaceExhaustedError):
            generate_unique_id({1}, id_source=lambda: 1, max_attempts=5)

    def test_random_ids_are_unsigned_32_bit(self):
        for _ in range(100):
            self.assertTrue(0 <= random_uint32() <= 0xFFFFFFFF)

    def test_name_template_only_replaces_placeholder(self):
        self.assertEqual(format_name_template("Article #%1$d", 17), "Article #17")
        self.assertEqual(format_name_template("%s 100%", 3), "%s 100%")


class DatesTest(unittest.TestCase):
    def test_normalize_date(self):
        self.assertEqual(normalize_date("2024-01-02"), date(2024, 1, 2))
        self.assertEqual(normalize_date("2024-01-02T10:00:00"), date(2024, 1, 2))
        self.assertIsNone(normalize_date("soon"))
        self.assertIsNone(normalize_date(""))

    def test_add_days_across_month(self):
        self.assertEqual(add_days("2024-01-28", 7), "2024-02-04")
        self.assertIsNone(add_days(None, 3))

    def test_add_days_past_calendar_end_is_none(self):
        self.assertIsNone(add_days("2024-01-01", 4294967295))
        self.assertIsNone(add_days("9999-12-31", 1))

    def test_clock_based_helpers(self):
        clock = lambda: datetime(2024, 1, 1, 23, 59, 59, tzinfo=timezone.utc)  # noqa: E731
        self.assertEqual(today_string(clock), "2024-01-01")
        self.assertEqual(current_timestamp(clock), "2024-01-01T23:59:59+00:00")


class LoggingTest(unittest.TestCase):
    def test_resolve_level(self):
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level("nonsense"), logging.INFO)
        self.assertEqual(resolve_level(None), logging.INFO)

    def test_json_formatter(self):
        record = logging.LogRecord("homestock", logging.WARNING, __file__, 1, "hi %s", ("there",), None)
        self.assertIn('"message": "hi there"', JsonFormatter().format(record))


if __name__ == "__main__":
    unittest.main()
