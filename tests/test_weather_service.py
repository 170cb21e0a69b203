"""Tests for FlightWeatherService.get_weather mode selection."""

import unittest
from datetime import datetime, timedelta, timezone

from pydantic import TypeAdapter

from flightwx.models import (
    Airport,
    Flight,
    ForecastResponse,
    ForecastTier,
    SnapshotResponse,
    UnavailableResponse,
    WeatherResponse,
)
from flightwx.services.weather import FlightWeatherService

from tests.fakes import METAR_KBOS, METAR_KJFK, TAF_KJFK, FakeGrid, FakeReports, make_session

NOW = datetime(2025, 3, 1, 0, 0, tzinfo=timezone.utc)


class TestGetWeather(unittest.TestCase):

    def setUp(self):
        self.session = make_session()
        self.session.add(Airport(id=1, icao="KJFK", iata="JFK", name="John F Kennedy Intl"))
        self.session.commit()
        self.reports = FakeReports(
            current={"KJFK": METAR_KJFK, "KBOS": METAR_KBOS},
            forecasts={"KJFK": TAF_KJFK},
            historical={"KJFK": METAR_KJFK, "KBOS": METAR_KBOS},
        )
        self.grid = FakeGrid()
        self.service = FlightWeatherService(self.session, reports=self.reports, grid=self.grid)

    def tearDown(self):
        self.session.close()

    def add_flight(self, flight_id, start, planned=None, origin="New York", destination="BOS"):
        self.session.add(
            Flight(
                id=flight_id,
                origin=origin,
                destination=destination,
                origin_airport_id=1,
                start_time=start,
                end_time=start + timedelta(hours=1),
                planned_start_time=planned,
            )
        )
        self.session.commit()

    def test_unknown_flight(self):
        self.assertIsNone(self.service.get_weather("nope", now=NOW))

    def test_planned_future_flight_gets_forecast(self):
        departure = NOW + timedelta(hours=10)
        self.add_flight("upcoming", departure, planned=departure)
        result = self.service.get_weather("upcoming", now=NOW)
        self.assertIsInstance(result, ForecastResponse)
        self.assertEqual(result.mode, "forecast")
        self.assertEqual(result.tier, ForecastTier.NEAR_TERM)
        self.assertEqual(result.origin.station, "KJFK")
        self.assertNotIn("historical", {kind for kind, _ in self.reports.calls})

    def test_past_flight_gets_snapshot_once(self):
        departed = NOW - timedelta(days=1)
        self.add_flight("done", departed)
        first = self.service.get_weather("done", now=NOW)
        self.assertIsInstance(first, SnapshotResponse)
        self.assertIsNone(first.notice)
        self.assertEqual(first.snapshot.origin.station, "KJFK")

        self.reports.calls.clear()
        second = self.service.get_weather("done", now=NOW + timedelta(days=1))
        self.assertIsInstance(second, SnapshotResponse)
        self.assertEqual(self.reports.calls, [])
        self.assertEqual(second.snapshot.model_dump(), first.snapshot.model_dump())

    def test_stored_snapshot_wins_over_planned_time(self):
        departed = NOW - timedelta(days=1)
        self.add_flight("rescheduled", departed)
        self.service.get_weather("rescheduled", now=NOW)
        flight = self.session.get(Flight, "rescheduled")
        flight.planned_start_time = NOW + timedelta(hours=5)
        self.session.commit()

        self.reports.calls.clear()
        result = self.service.get_weather("rescheduled", now=NOW)
        self.assertIsInstance(result, SnapshotResponse)
        self.assertEqual(self.reports.calls, [])

    def test_unavailable_history_carries_a_notice(self):
        self.reports.historical = {}
        self.add_flight("quiet", NOW - timedelta(hours=6))
        result = self.service.get_weather("quiet", now=NOW)
        self.assertIsInstance(result, SnapshotResponse)
        self.assertTrue(result.snapshot.unavailable)
        self.assertIsNotNone(result.notice)

    def test_not_yet_departed_without_plan_is_unavailable(self):
        self.add_flight("later", NOW + timedelta(hours=3))
        result = self.service.get_weather("later", now=NOW)
        self.assertIsInstance(result, UnavailableResponse)
        self.assertEqual(self.reports.calls, [])

    def test_response_union_discriminates_on_mode(self):
        self.add_flight("done", NOW - timedelta(days=1))
        result = self.service.get_weather("done", now=NOW)
        parsed = TypeAdapter(WeatherResponse).validate_python(result.model_dump(mode="json"))
        self.assertIsInstance(parsed, SnapshotResponse)

    def test_debug_info(self):
        self.add_flight("done", NOW - timedelta(days=1), origin="Somewhere")
        info = self.service.debug_info("done")
        self.assertEqual(info["origin_resolved"], "KJFK")
        self.assertEqual(info["destination_resolved"], "KBOS")
        self.assertIsNone(info["used_times"]["planned_start_time"])
        self.assertIsNone(self.service.debug_info("nope"))


if __name__ == "__main__":
    unittest.main()
