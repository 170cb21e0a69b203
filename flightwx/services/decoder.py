"""Token decoder for METAR observations and TAF forecast segments.

Only wind, temperature, sky cover and the leading weather phenomenon are
decoded. Each field takes the first token matching its pattern anywhere in
the report, remarks included; a field with no matching token gets its
absent value (None, ``unknown`` or ``none``).
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Sequence

from flightwx.models import (
    Sky,
    SkyCover,
    StructuredObservation,
    WeatherPhenomenon,
    Wind,
    WxKind,
)

WIND_RE = re.compile(r"^(VRB|\d{3})(\d{2,3})(?:G(\d{2,3}))?KT$")
TEMPERATURE_RE = re.compile(r"^(M?\d{1,2})/(M?\d{1,2})$")
WX_RE = re.compile(r"TS|RA|SN|DZ|PL|GR|GS|FG|BR|HZ")
SKY_RE = re.compile(r"^(SKC|CLR|FEW|SCT|BKN|OVC)(\d{3})?(?:CB|TCU)?$")

SKY_ORDER = {"SKC": 0, "CLR": 0, "FEW": 1, "SCT": 2, "BKN": 3, "OVC": 4}
SKY_COVER = {
    "SKC": SkyCover.CLEAR,
    "CLR": SkyCover.CLEAR,
    "FEW": SkyCover.FEW,
    "SCT": SkyCover.SCATTERED,
    "BKN": SkyCover.BROKEN,
    "OVC": SkyCover.OVERCAST,
}

def tokenize(raw_text: str) -> list[str]:
    return raw_text.split()


def decode_wind(tokens: Sequence[str]) -> Wind:
    for token in tokens:
        match = WIND_RE.match(token)
        if not match:
            continue
        direction, speed, gust = match.groups()
        variable = direction == "VRB"
        return Wind(
            direction_deg=None if variable else int(direction),
            speed_kt=int(speed),
            gust_kt=int(gust) if gust else None,
            variable=variable,
        )
    return Wind()


def decode_temperature(tokens: Sequence[str]) -> int | None:
    for token in tokens:
        match = TEMPERATURE_RE.match(token)
        if not match:
            continue
        temp = match.group(1)
        if temp.startswith("M"):
            return -int(temp[1:])
        return int(temp)
    return None


def classify_wx(token: str) -> WxKind:
    if "TS" in token:
        return WxKind.THUNDERSTORM
    if "SN" in token:
        return WxKind.SNOW
    if "RA" in token or "DZ" in token:
        return WxKind.RAIN
    if "FG" in token:
        return WxKind.FOG
    if "BR" in token:
        return WxKind.MIST
    return WxKind.OTHER


def decode_wx(tokens: Sequence[str]) -> WeatherPhenomenon:
    for token in tokens:
        if WX_RE.search(token):
            return WeatherPhenomenon(kind=classify_wx(token), token=token)
    return WeatherPhenomenon()


def decode_sky(tokens: Sequence[str]) -> Sky:
    """Pick the highest-coverage layer; ties keep the first occurrence."""

    best: re.Match[str] | None = None
    for token in tokens:
        match = SKY_RE.match(token)
        if not match:
            continue
        if best is None or SKY_ORDER[match.group(1)] > SKY_ORDER[best.group(1)]:
            best = match
    if best is None:
        return Sky()
    code, hundreds = best.group(1), best.group(2)
    return Sky(
        cover=SKY_COVER[code],
        ceiling_ft=int(hundreds) * 100 if hundreds else None,
    )


def _body_tokens(tokens: Sequence[str], station: str) -> list[str]:
    # The station identifier itself can look like a phenomenon (KBRO, KGRB).
    return [token for token in tokens if token != station]


def decode_tokens(
    tokens: Sequence[str],
    station: str,
    raw_text: str,
    observed_at: datetime | None = None,
) -> StructuredObservation:
    body = _body_tokens(tokens, station)
    return StructuredObservation(
        station=station,
        observed_at=observed_at,
        raw_text=raw_text,
        wind=decode_wind(body),
        temperature_c=decode_temperature(body),
        sky=decode_sky(body),
        wx=decode_wx(body),
    )


def decode_report(
    raw_text: str, station: str, observed_at: datetime | None = None
) -> StructuredObservation:
    """Decode one whitespace-separated report into a StructuredObservation.

    ``observed_at`` is passed through as given; it is never inferred from the text.
    """

    return decode_tokens(tokenize(raw_text), station, raw_text, observed_at)


__all__ = [
    "decode_report",
    "decode_tokens",
    "decode_wind",
    "decode_temperature",
    "decode_sky",
    "decode_wx",
    "classify_wx",
    "tokenize",
]
