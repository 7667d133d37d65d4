"""Sunrise-to-sunrise day resolution.

A civil moment belongs to the Vedic day whose sunrise most recently
preceded it. Anything before the civil date's sunrise is still part of the
previous Vedic day, whose night arc ends at that very sunrise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple, Protocol

from .errors import InvalidQueryMomentError, NonMonotonicTriadError


logger = logging.getLogger(__name__)


class SunriseProvider(Protocol):
    """Civil sunrise/sunset for a date, as naive local wall-clock datetimes.

    Implementations raise ``SunEventUnavailableError`` when the event does
    not occur (polar day or night) instead of returning a placeholder.
    """

    def sunrise(self, day: date, latitude: float, longitude: float, tz_offset_hours: float) -> datetime:
        ...

    def sunset(self, day: date, latitude: float, longitude: float, tz_offset_hours: float) -> datetime:
        ...


@dataclass(frozen=True)
class QueryMoment:
    timestamp: datetime
    latitude: float
    longitude: float
    tz_offset_hours: float

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is not None:
            raise InvalidQueryMomentError("timestamp must be a naive local wall-clock datetime")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidQueryMomentError(f"latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidQueryMomentError(f"longitude {self.longitude} outside [-180, 180]")

    @property
    def civil_date(self) -> date:
        return self.timestamp.date()

    def utc(self) -> datetime:
        offset = timezone(timedelta(hours=self.tz_offset_hours))
        return self.timestamp.replace(tzinfo=offset).astimezone(timezone.utc)


@dataclass(frozen=True)
class SunTimesTriad:
    today_sunrise: datetime
    today_sunset: datetime
    tomorrow_sunrise: datetime

    def __post_init__(self) -> None:
        if not (self.today_sunrise < self.today_sunset < self.tomorrow_sunrise):
            raise NonMonotonicTriadError(
                "expected sunrise < sunset < next sunrise, got "
                f"{self.today_sunrise.isoformat()} / {self.today_sunset.isoformat()} / "
                f"{self.tomorrow_sunrise.isoformat()}"
            )

    @property
    def day_length(self) -> timedelta:
        return self.today_sunset - self.today_sunrise

    @property
    def night_length(self) -> timedelta:
        return self.tomorrow_sunrise - self.today_sunset

    def contains(self, moment: datetime) -> bool:
        return self.today_sunrise <= moment < self.tomorrow_sunrise


class VedicDay(NamedTuple):
    vedic_date: date
    triad: SunTimesTriad


class VedicDayResolver:
    """Resolve the Vedic date and sunrise triad for a :class:`QueryMoment`."""

    def __init__(self, provider: SunriseProvider) -> None:
        self._provider = provider

    def _sunrise(self, day: date, moment: QueryMoment) -> datetime:
        return self._provider.sunrise(day, moment.latitude, moment.longitude, moment.tz_offset_hours)

    def _sunset(self, day: date, moment: QueryMoment) -> datetime:
        return self._provider.sunset(day, moment.latitude, moment.longitude, moment.tz_offset_hours)

    def resolve(self, moment: QueryMoment) -> VedicDay:
        civil_date = moment.civil_date
        civil_sunrise = self._sunrise(civil_date, moment)

        if moment.timestamp < civil_sunrise:
            vedic_date = civil_date - timedelta(days=1)
            triad = SunTimesTriad(
                today_sunrise=self._sunrise(vedic_date, moment),
                today_sunset=self._sunset(vedic_date, moment),
                # the civil sunrise closes the previous Vedic day's night arc
                tomorrow_sunrise=civil_sunrise,
            )
        else:
            vedic_date = civil_date
            triad = SunTimesTriad(
                today_sunrise=civil_sunrise,
                today_sunset=self._sunset(vedic_date, moment),
                tomorrow_sunrise=self._sunrise(vedic_date + timedelta(days=1), moment),
            )

        logger.debug(
            "Resolved %s at (%.4f, %.4f) to vedic date %s (sunrise %s)",
            moment.timestamp.isoformat(),
            moment.latitude,
            moment.longitude,
            vedic_date.isoformat(),
            triad.today_sunrise.isoformat(),
        )
        return VedicDay(vedic_date, triad)
