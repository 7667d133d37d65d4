"""Udaya Lagna (Udayam) interpolation across unequal day and night arcs.

Udayam starts on the Sun at sunrise and sweeps one full circle by sunset,
then a second full circle during the night until the next sunrise. The two
arcs generally differ in length, so the angular rate differs between them.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from .errors import DegenerateArcError, MomentOutOfRangeError
from .points import UDAYAM, SpecialPoint
from .vedic_day import SunTimesTriad
from .zodiac import normalize

DAY_ARC = "day"
NIGHT_ARC = "night"


class UdayaLagnaInterpolator:
    def __init__(
        self,
        today_sunrise: datetime,
        today_sunset: datetime,
        tomorrow_sunrise: datetime,
        sunrise_anchor_longitude: float,
        sunset_anchor_longitude: float,
    ) -> None:
        day = today_sunset - today_sunrise
        night = tomorrow_sunrise - today_sunset
        if day <= timedelta(0):
            raise DegenerateArcError(
                f"day arc from {today_sunrise.isoformat()} to {today_sunset.isoformat()} has no length"
            )
        if night <= timedelta(0):
            raise DegenerateArcError(
                f"night arc from {today_sunset.isoformat()} to {tomorrow_sunrise.isoformat()} has no length"
            )

        self._today_sunrise = today_sunrise
        self._today_sunset = today_sunset
        self._tomorrow_sunrise = tomorrow_sunrise
        self._sunrise_anchor = normalize(sunrise_anchor_longitude)
        self._sunset_anchor = normalize(sunset_anchor_longitude)
        self._day = day
        self._night = night

    @classmethod
    def from_triad(cls, triad: SunTimesTriad, sun_longitude: float) -> "UdayaLagnaInterpolator":
        # The Sun's own motion over one day is ignored: it anchors both arcs.
        return cls(
            triad.today_sunrise,
            triad.today_sunset,
            triad.tomorrow_sunrise,
            sun_longitude,
            sun_longitude,
        )

    @property
    def day_hours(self) -> float:
        return self._day.total_seconds() / 3600.0

    @property
    def night_hours(self) -> float:
        return self._night.total_seconds() / 3600.0

    def arc_at(self, moment: datetime) -> str:
        if self._today_sunrise <= moment < self._today_sunset:
            return DAY_ARC
        if self._today_sunset <= moment < self._tomorrow_sunrise:
            return NIGHT_ARC
        raise MomentOutOfRangeError(
            f"{moment.isoformat()} outside [{self._today_sunrise.isoformat()}, "
            f"{self._tomorrow_sunrise.isoformat()})"
        )

    def longitude_at(self, moment: datetime) -> float:
        if self.arc_at(moment) == DAY_ARC:
            fraction = (moment - self._today_sunrise) / self._day
            return normalize(self._sunrise_anchor + 360.0 * fraction)
        fraction = (moment - self._today_sunset) / self._night
        return normalize(self._sunset_anchor + 360.0 * fraction)

    def at_moment(self, moment: datetime) -> SpecialPoint:
        return SpecialPoint.at(UDAYAM, self.longitude_at(moment))
