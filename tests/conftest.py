import os
from datetime import date, datetime, time
from typing import Dict, Optional

import pytest

os.environ.setdefault("EPHEMERIS_BACKEND", "moseph")

from jamakol.services.errors import SunEventUnavailableError  # noqa: E402


class ClockSunriseProvider:
    """Sunrise and sunset at fixed wall-clock times, with per-date overrides."""

    def __init__(
        self,
        sunrise: time = time(6, 0),
        sunset: time = time(18, 0),
        sunrise_overrides: Optional[Dict[date, time]] = None,
        sunset_overrides: Optional[Dict[date, time]] = None,
    ) -> None:
        self._sunrise = sunrise
        self._sunset = sunset
        self._sunrise_overrides = sunrise_overrides or {}
        self._sunset_overrides = sunset_overrides or {}
        self.calls = []

    def sunrise(self, day, latitude, longitude, tz_offset_hours):
        self.calls.append(("sunrise", day))
        return datetime.combine(day, self._sunrise_overrides.get(day, self._sunrise))

    def sunset(self, day, latitude, longitude, tz_offset_hours):
        self.calls.append(("sunset", day))
        return datetime.combine(day, self._sunset_overrides.get(day, self._sunset))


class PolarSunriseProvider:
    def sunrise(self, day, latitude, longitude, tz_offset_hours):
        raise SunEventUnavailableError(f"No sunrise on {day.isoformat()} at latitude {latitude}")

    def sunset(self, day, latitude, longitude, tz_offset_hours):
        raise SunEventUnavailableError(f"No sunset on {day.isoformat()} at latitude {latitude}")


class FixedSunEphemeris:
    def __init__(self, longitude: float = 100.0, planets: Optional[Dict[str, float]] = None) -> None:
        self.longitude = longitude
        self.planets = planets or {}
        self.requests = []
        self.planet_requests = []

    def sun_longitude(self, moment_utc, ayanamsha="lahiri"):
        self.requests.append((moment_utc, ayanamsha))
        return self.longitude

    def planet_longitude(self, planet, moment_utc, ayanamsha="lahiri"):
        self.planet_requests.append((planet, moment_utc, ayanamsha))
        return self.planets.get(planet, self.longitude)


@pytest.fixture
def clock_provider():
    return ClockSunriseProvider


@pytest.fixture
def polar_provider():
    return PolarSunriseProvider()


@pytest.fixture
def fixed_sun():
    return FixedSunEphemeris
