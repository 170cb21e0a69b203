"""Select the TAF ``FM`` segment covering a target time."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from flightwx.models import StructuredObservation

from .decoder import decode_tokens, tokenize

logger = logging.getLogger(__name__)

FROM_GROUP_RE = re.compile(r"^FM(\d{2})(\d{2})(\d{2})$")


@dataclass(frozen=True)
class FromGroup:
    index: int
    starts_at: datetime | None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def find_from_groups(tokens: list[str], target: datetime) -> list[FromGroup]:
    """Locate ``FMddhhmm`` markers, dating each in the target's month and year.

    A marker that does not form a valid date in that month (e.g. FM310600 in
    April) keeps its place as a boundary but never qualifies as a start.
    """

    target = _as_utc(target)
    groups: list[FromGroup] = []
    for index, token in enumerate(tokens):
        match = FROM_GROUP_RE.match(token)
        if not match:
            continue
        day, hour, minute = (int(part) for part in match.groups())
        try:
            starts_at = datetime(target.year, target.month, day, hour, minute, tzinfo=timezone.utc)
        except ValueError:
            logger.debug("Ignoring undatable TAF group %s", token)
            starts_at = None
        groups.append(FromGroup(index=index, starts_at=starts_at))
    return groups


def select_segment_tokens(raw_text: str, target: datetime) -> list[str]:
    """Return the tokens of the forecast period in force at ``target``.

    That is every token after the latest marker at or before ``target`` up to
    the next marker. When no marker qualifies, the tokens before the first
    marker are returned (the whole text if there are no markers).
    """

    tokens = tokenize(raw_text)
    target = _as_utc(target)
    groups = find_from_groups(tokens, target)

    eligible = [g for g in groups if g.starts_at is not None and g.starts_at <= target]
    if not eligible:
        end = groups[0].index if groups else len(tokens)
        return tokens[:end]

    chosen = max(eligible, key=lambda g: (g.starts_at, g.index))
    following = [g.index for g in groups if g.index > chosen.index]
    end = following[0] if following else len(tokens)
    return tokens[chosen.index + 1 : end]


def decode_forecast_for_time(
    raw_text: str,
    station: str,
    target: datetime,
    temperature_c: int | None = None,
) -> StructuredObservation:
    """Decode the segment in force at ``target``.

    TAFs carry no temperature group, so ``temperature_c`` (usually from the
    station's current METAR) fills the gap when the segment has none. The
    result keeps the full forecast text as ``raw_text`` and no ``observed_at``.
    """

    segment = select_segment_tokens(raw_text, target)
    observation = decode_tokens(segment, station, raw_text, observed_at=None)
    if observation.temperature_c is None and temperature_c is not None:
        observation.temperature_c = temperature_c
    return observation


__all__ = ["FromGroup", "find_from_groups", "select_segment_tokens", "decode_forecast_for_time"]
