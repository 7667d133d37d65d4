"""Swiss Ephemeris backed sunrise and sidereal-longitude providers."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Optional, Protocol

import swisseph as swe

from .errors import SunEventUnavailableError
from .zodiac import normalize


logger = logging.getLogger(__name__)


# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"

BODIES: Dict[str, int] = {
    "Sun": swe.SUN,
    "Moon": swe.MOON,
    "Mercury": swe.MERCURY,
    "Venus": swe.VENUS,
    "Mars": swe.MARS,
    "Jupiter": swe.JUPITER,
    "Saturn": swe.SATURN,
    "Rahu": swe.TRUE_NODE,
}

# Chart order of the nine grahas; Ketu is derived from Rahu.
GRAHAS = ["Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn", "Rahu", "Ketu"]

GRAHA_SYMBOLS = {
    "Sun": "Su",
    "Moon": "Mo",
    "Mars": "Ma",
    "Mercury": "Me",
    "Jupiter": "Ju",
    "Venus": "Ve",
    "Saturn": "Sa",
    "Rahu": "Ra",
    "Ketu": "Ke",
}

AYANAMSHA_MAP = {
    "lahiri": swe.SIDM_LAHIRI,
    "krishnamurti": swe.SIDM_KRISHNAMURTI,
    "raman": swe.SIDM_RAMAN,
    "fagan_bradley": swe.SIDM_FAGAN_BRADLEY,
    "true_chitra": swe.SIDM_TRUE_CITRA,
}

# Disc reference point and refraction handling for rise/set searches.
SUNRISE_MODES = {
    "center_true": swe.BIT_DISC_CENTER | swe.BIT_NO_REFRACTION,
    "tip_true": swe.BIT_NO_REFRACTION,
    "center_apparent": swe.BIT_DISC_CENTER,
    "tip_apparent": 0,
}

# An event found later than this after the search start belongs to another day.
MAX_EVENT_LAG = timedelta(days=1, hours=12)


class EphemerisProvider(Protocol):
    def sun_longitude(self, moment_utc: datetime, ayanamsha: str) -> float:
        ...

    def planet_longitude(self, planet: str, moment_utc: datetime, ayanamsha: str) -> float:
        ...


def _backend_flag() -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "swieph"
    return swe.FLG_MOSEPH if backend == "moseph" else swe.FLG_SWIEPH


def backend_name() -> str:
    return "moseph" if _backend_flag() == swe.FLG_MOSEPH else "swieph"


def default_sunrise_mode() -> str:
    return os.getenv("SUNRISE_MODE", "tip_apparent").strip().lower()


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)
    else:
        logger.warning("EPHEMERIS_DIR %s does not exist; using built-in search path", path)


def _to_jd(moment: datetime) -> float:
    """Convert a timezone-aware datetime into Julian Day (UT)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment_utc = moment.astimezone(timezone.utc)
    return moment_utc.timestamp() / 86400.0 + 2440587.5


def _jd_to_datetime(jd: float) -> datetime:
    seconds = (jd - 2440587.5) * 86400.0
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _local_to_utc(local: datetime, tz_offset_hours: float) -> datetime:
    return local.replace(tzinfo=timezone(timedelta(hours=tz_offset_hours))).astimezone(timezone.utc)


def _utc_to_local(moment_utc: datetime, tz_offset_hours: float) -> datetime:
    return moment_utc.astimezone(timezone(timedelta(hours=tz_offset_hours))).replace(tzinfo=None)


def _local_midnight_jd(day: date, tz_offset_hours: float) -> float:
    return _to_jd(_local_to_utc(datetime.combine(day, time(0, 0)), tz_offset_hours))


class SwissSunriseProvider:
    """Sunrise and sunset for a local civil date via ``swe.rise_trans``.

    Sunrise is searched from local midnight. Sunset is searched from that
    sunrise, so at high latitudes the sunset closing the date's daylight may
    fall after the following midnight.
    """

    def __init__(self, mode: Optional[str] = None) -> None:
        mode = (mode or default_sunrise_mode()).strip().lower()
        if mode not in SUNRISE_MODES:
            raise ValueError(f"Unknown sunrise mode {mode!r}; expected one of {sorted(SUNRISE_MODES)}")
        self.mode = mode
        self._mode_bits = SUNRISE_MODES[mode]

    def sunrise(self, day: date, latitude: float, longitude: float, tz_offset_hours: float) -> datetime:
        jd = self._search(_local_midnight_jd(day, tz_offset_hours), day, latitude, longitude, swe.CALC_RISE, "sunrise")
        return self._local(jd, day, latitude, longitude, tz_offset_hours, "sunrise")

    def sunset(self, day: date, latitude: float, longitude: float, tz_offset_hours: float) -> datetime:
        try:
            jd_rise = self._search(
                _local_midnight_jd(day, tz_offset_hours), day, latitude, longitude, swe.CALC_RISE, "sunrise"
            )
        except SunEventUnavailableError as exc:
            raise SunEventUnavailableError(
                f"No sunset on {day.isoformat()} at latitude {latitude:.4f}: {exc}"
            ) from exc
        jd = self._search(jd_rise, day, latitude, longitude, swe.CALC_SET, "sunset")
        return self._local(jd, day, latitude, longitude, tz_offset_hours, "sunset")

    def _search(self, jd_start: float, day: date, latitude: float, longitude: float, rsmi: int, label: str) -> float:
        geopos = (longitude, latitude, 0.0)
        try:
            result, times = swe.rise_trans(
                jd_start, swe.SUN, rsmi | self._mode_bits, geopos, 0.0, 0.0, _backend_flag()
            )
        except swe.Error as exc:
            raise SunEventUnavailableError(
                f"No {label} on {day.isoformat()} at latitude {latitude:.4f}: {exc}"
            ) from exc
        if result < 0 or not times or times[0] <= 0.0:
            raise SunEventUnavailableError(
                f"No {label} on {day.isoformat()} at latitude {latitude:.4f} (circumpolar Sun)"
            )
        if times[0] - jd_start > MAX_EVENT_LAG / timedelta(days=1):
            raise SunEventUnavailableError(
                f"No {label} on {day.isoformat()} at latitude {latitude:.4f}; "
                f"next one is {_jd_to_datetime(times[0]).isoformat()}"
            )
        return times[0]

    @staticmethod
    def _local(jd: float, day: date, latitude: float, longitude: float, tz_offset_hours: float, label: str) -> datetime:
        local = _utc_to_local(_jd_to_datetime(jd), tz_offset_hours)
        logger.debug("%s for %s at (%.4f, %.4f): %s", label, day.isoformat(), latitude, longitude, local.isoformat())
        return local


class SwissEphemeris:
    """Sidereal longitudes for the classical planets and the lunar nodes."""

    def planet_longitude(self, planet: str, moment_utc: datetime, ayanamsha: str = "lahiri") -> float:
        key = ayanamsha.lower()
        if key not in AYANAMSHA_MAP:
            raise ValueError(f"Unsupported ayanamsha {ayanamsha!r}")
        if planet == "Ketu":
            return normalize(self.planet_longitude("Rahu", moment_utc, ayanamsha) + 180.0)
        if planet not in BODIES:
            raise ValueError(f"Unsupported planet {planet!r}")

        swe.set_sid_mode(AYANAMSHA_MAP[key])
        flag = _backend_flag() | swe.FLG_SIDEREAL
        values, _ = swe.calc_ut(_to_jd(moment_utc), BODIES[planet], flag)
        return normalize(values[0])

    def sun_longitude(self, moment_utc: datetime, ayanamsha: str = "lahiri") -> float:
        return self.planet_longitude("Sun", moment_utc, ayanamsha)
