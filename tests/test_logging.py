"""Tests for the in-memory log buffer and its flight/station tags."""

import logging
import unittest
from datetime import datetime, timedelta, timezone

from flightwx.core import logging_config
from flightwx.core.logging_config import get_log_buffer
from flightwx.services.flights import FlightRecord
from flightwx.services.forecast import ForecastOrchestrator
from flightwx.services.stations import StationResolver

from tests.fakes import METAR_KBOS, FakeGrid, FakeReports


class BufferTestCase(unittest.TestCase):

    def setUp(self):
        logging_config._LOG_BUFFER.clear()
        self.addCleanup(logging_config._LOG_BUFFER.clear)
        self.handler = logging_config._BufferHandler()

    def attach(self, name):
        logger = logging.getLogger(name)
        logger.addHandler(self.handler)
        self.addCleanup(logger.removeHandler, self.handler)
        return logger


class TestLogBuffer(BufferTestCase):

    def setUp(self):
        super().setUp()
        self.logger = self.attach("flightwx.tests.buffer")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False
        self.addCleanup(setattr, self.logger, "propagate", True)

    def test_entries_carry_context_fields(self):
        self.logger.info("snapshot stored", extra={"flight_id": "f1"})
        self.logger.warning("metar failed", extra={"station": "KJFK"})
        self.logger.info("no context")

        newest = get_log_buffer()[0]
        self.assertEqual(newest["message"], "no context")
        self.assertNotIn("flight_id", newest)

        by_flight = get_log_buffer(flight_id="f1")
        self.assertEqual([entry["message"] for entry in by_flight], ["snapshot stored"])
        self.assertEqual(by_flight[0]["level"], "INFO")

        by_station = get_log_buffer(station="kjfk")
        self.assertEqual([entry["message"] for entry in by_station], ["metar failed"])
        self.assertEqual(by_station[0]["station"], "KJFK")

    def test_limit_applies_after_filtering(self):
        for index in range(5):
            self.logger.info("entry %d", index, extra={"flight_id": "f2"})
            self.logger.info("other")
        entries = get_log_buffer(limit=2, flight_id="f2")
        self.assertEqual([entry["message"] for entry in entries], ["entry 4", "entry 3"])


class TestForecastFailureLogging(BufferTestCase):

    def test_failed_station_fetch_is_tagged_with_station(self):
        self.attach("flightwx.services.forecast")
        now = datetime(2025, 3, 1, tzinfo=timezone.utc)
        departure = now + timedelta(hours=3)
        reports = FakeReports(current={"KBOS": METAR_KBOS}, failing={("taf", "KJFK")})
        orchestrator = ForecastOrchestrator(
            resolver=StationResolver(),
            reports=reports,
            grid=FakeGrid(),
            coordinates=lambda station: None,
            max_workers=2,
        )
        orchestrator.forecast(
            FlightRecord(
                id="f3",
                origin="KJFK",
                destination="KBOS",
                start_time=departure,
                end_time=None,
                planned_start_time=departure,
                planned_end_time=None,
                origin_station_hint=None,
                destination_station_hint=None,
                existing_snapshot=None,
            ),
            now=now,
        )

        entries = get_log_buffer(station="KJFK")
        self.assertTrue(entries)
        self.assertTrue(all(entry["level"] == "WARNING" for entry in entries))
        self.assertIn("503", entries[0]["message"])
        self.assertEqual(get_log_buffer(station="KBOS"), [])


if __name__ == "__main__":
    unittest.main()
