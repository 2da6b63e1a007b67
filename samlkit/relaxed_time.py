"""Timestamps in the relaxed form found in SAML documents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_DATE_TIME = r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
_WITH_ZONE = re.compile(_DATE_TIME + r"(Z|[+-]\d{2}:\d{2})")
_WITHOUT_ZONE = re.compile(_DATE_TIME)

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _zone(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _build(match: re.Match, tz: timezone) -> datetime:
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7) or ""
    nanoseconds = int(fraction[:9].ljust(9, "0"))
    milliseconds = (nanoseconds + 500_000) // 1_000_000
    moment = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    return moment + timedelta(milliseconds=milliseconds)


@dataclass(frozen=True)
class RelaxedTime:
    """A point in time, formatted in UTC with at most millisecond precision."""

    time: datetime

    @classmethod
    def parse(cls, text: str | bytes) -> "RelaxedTime":
        """Parse RFC 3339 text, or a zone-less timestamp taken as UTC.

        Empty text gives the zero time. Results are rounded to the millisecond.
        """
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")
        if not text:
            return cls(ZERO_TIME)

        match = _WITH_ZONE.match(text)
        if match is not None and match.end() == len(text):
            try:
                return cls(_build(match, _zone(match.group(8))))
            except ValueError as exc:
                raise ValueError(f'parsing time "{text}": {exc}') from None

        local = _WITHOUT_ZONE.fullmatch(text)
        if local is not None:
            try:
                return cls(_build(local, timezone.utc))
            except ValueError as exc:
                raise ValueError(f'parsing time "{text}": {exc}') from None

        if match is not None:
            raise ValueError(
                f'parsing time "{text}": extra text: "{text[match.end():]}"'
            )
        raise ValueError(f'parsing time "{text}": not in RFC 3339 format')

    def format(self) -> str:
        """Return the time in UTC, rounded to the millisecond, trailing zeros dropped."""
        moment = self.time
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        moment = moment.astimezone(timezone.utc)
        milliseconds = (moment.microsecond + 500) // 1000
        moment = moment.replace(microsecond=0) + timedelta(milliseconds=milliseconds)

        text = (
            f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
            f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        )
        if moment.microsecond:
            text += "." + f"{moment.microsecond // 1000:03d}".rstrip("0")
        return text + "Z"

    def __str__(self) -> str:
        return self.format()