"""Tests for the METAR/TAF token decoder."""

import unittest
from datetime import datetime, timezone

from flightwx.models import SkyCover, WxKind
from flightwx.services.decoder import decode_report, decode_sky, decode_wind, decode_wx

from tests.fakes import METAR_KBOS, METAR_KJFK


class TestWindDecoding(unittest.TestCase):

    def test_plain_direction_and_speed(self):
        for token, direction, speed in (
            ("00000KT", 0, 0),
            ("09005KT", 90, 5),
            ("27015KT", 270, 15),
            ("36099KT", 360, 99),
            ("240105KT", 240, 105),
        ):
            with self.subTest(token=token):
                wind = decode_wind([token])
                self.assertEqual(wind.direction_deg, direction)
                self.assertEqual(wind.speed_kt, speed)
                self.assertIsNone(wind.gust_kt)
                self.assertFalse(wind.variable)

    def test_variable_wind(self):
        wind = decode_wind(["VRB08KT"])
        self.assertTrue(wind.variable)
        self.assertIsNone(wind.direction_deg)
        self.assertEqual(wind.speed_kt, 8)

    def test_gusts(self):
        wind = decode_wind(["18022G35KT"])
        self.assertEqual((wind.direction_deg, wind.speed_kt, wind.gust_kt), (180, 22, 35))

    def test_metric_wind_is_not_matched(self):
        wind = decode_wind(["18010MPS"])
        self.assertIsNone(wind.speed_kt)
        self.assertFalse(wind.variable)


class TestSkyDecoding(unittest.TestCase):

    def test_broken_outranks_few_regardless_of_order(self):
        for tokens in (["FEW020", "BKN045"], ["BKN045", "FEW020"]):
            with self.subTest(tokens=tokens):
                sky = decode_sky(tokens)
                self.assertEqual(sky.cover, SkyCover.BROKEN)
                self.assertEqual(sky.ceiling_ft, 4500)

    def test_equal_cover_keeps_first_layer(self):
        sky = decode_sky(["BKN030", "BKN050"])
        self.assertEqual(sky.ceiling_ft, 3000)

    def test_clear_without_height(self):
        for token in ("SKC", "CLR"):
            sky = decode_sky([token])
            self.assertEqual(sky.cover, SkyCover.CLEAR)
            self.assertIsNone(sky.ceiling_ft)

    def test_layer_without_height(self):
        sky = decode_sky(["OVC"])
        self.assertEqual(sky.cover, SkyCover.OVERCAST)
        self.assertIsNone(sky.ceiling_ft)

    def test_convective_suffix(self):
        sky = decode_sky(["SCT015", "BKN020CB"])
        self.assertEqual(sky.cover, SkyCover.BROKEN)
        self.assertEqual(sky.ceiling_ft, 2000)

    def test_no_sky_group(self):
        sky = decode_sky(["18010KT", "10SM"])
        self.assertEqual(sky.cover, SkyCover.UNKNOWN)
        self.assertIsNone(sky.ceiling_ft)


class TestWeatherPhenomenon(unittest.TestCase):

    def test_priority_within_token(self):
        cases = {
            "+TSRA": WxKind.THUNDERSTORM,
            "-SNRA": WxKind.SNOW,
            "-RA": WxKind.RAIN,
            "DZ": WxKind.RAIN,
            "FG": WxKind.FOG,
            "BR": WxKind.MIST,
            "HZ": WxKind.OTHER,
            "GR": WxKind.OTHER,
        }
        for token, kind in cases.items():
            with self.subTest(token=token):
                wx = decode_wx([token])
                self.assertEqual(wx.kind, kind)
                self.assertEqual(wx.token, token)

    def test_first_matching_token_wins(self):
        wx = decode_wx(["BR", "-SN"])
        self.assertEqual(wx.kind, WxKind.MIST)
        self.assertEqual(wx.token, "BR")

    def test_none_when_absent(self):
        wx = decode_wx(["10SM", "FEW250"])
        self.assertEqual(wx.kind, WxKind.NONE)
        self.assertIsNone(wx.token)


class TestDecodeReport(unittest.TestCase):

    def test_full_metar(self):
        observed = datetime(2025, 3, 1, 17, 51, tzinfo=timezone.utc)
        obs = decode_report(METAR_KBOS, "KBOS", observed)
        self.assertEqual(obs.station, "KBOS")
        self.assertEqual(obs.observed_at, observed)
        self.assertEqual(obs.raw_text, METAR_KBOS)
        self.assertEqual(obs.wind.direction_deg, 270)
        self.assertEqual(obs.wind.gust_kt, 25)
        self.assertEqual(obs.temperature_c, 18)
        self.assertEqual(obs.sky.cover, SkyCover.OVERCAST)
        self.assertEqual(obs.sky.ceiling_ft, 8000)
        self.assertEqual(obs.wx.kind, WxKind.RAIN)

    def test_negative_temperature(self):
        obs = decode_report("CYUL 011800Z 31012KT 15SM FEW030 M05/M10 A3021", "CYUL")
        self.assertEqual(obs.temperature_c, -5)

    def test_remarks_are_decoded_like_the_body(self):
        obs = decode_report("KJFK 011751Z 18010KT 10SM 24/14 A3002 RMK AO2 TSB05 OVC030", "KJFK")
        self.assertEqual(obs.wx.kind, WxKind.THUNDERSTORM)
        self.assertEqual(obs.wx.token, "TSB05")
        self.assertEqual(obs.sky.cover, SkyCover.OVERCAST)
        self.assertEqual(obs.sky.ceiling_ft, 3000)

    def test_sea_level_pressure_remark_is_not_weather(self):
        obs = decode_report(METAR_KJFK, "KJFK")
        self.assertEqual(obs.wx.kind, WxKind.NONE)
        self.assertEqual(obs.sky.cover, SkyCover.FEW)
        self.assertEqual(obs.sky.ceiling_ft, 25000)

    def test_station_identifier_is_not_weather(self):
        obs = decode_report("KGRB 011753Z 21008KT 10SM CLR 02/M04 A3010", "KGRB")
        self.assertEqual(obs.wx.kind, WxKind.NONE)
        self.assertEqual(obs.temperature_c, 2)

    def test_sparse_report_yields_absent_values(self):
        obs = decode_report("KXYZ 011800Z AUTO", "KXYZ")
        self.assertIsNone(obs.observed_at)
        self.assertIsNone(obs.wind.speed_kt)
        self.assertIsNone(obs.temperature_c)
        self.assertEqual(obs.sky.cover, SkyCover.UNKNOWN)
        self.assertEqual(obs.wx.kind, WxKind.NONE)

    def test_empty_text(self):
        obs = decode_report("", "KXYZ")
        self.assertEqual(obs.raw_text, "")
        self.assertIsNone(obs.wind.direction_deg)


if __name__ == "__main__":
    unittest.main()
