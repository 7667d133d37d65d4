"""Sign, nakshatra and pada classification for absolute ecliptic longitudes.

Every computed point (planets, Aarudam, Udayam, Kavippu) goes through
:func:`classify` so the boundary rules live in exactly one place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

SIGN_NAMES = [
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
]

NAKSHATRA_NAMES = [
    "Ashwini",
    "Bharani",
    "Krittika",
    "Rohini",
    "Mrigashira",
    "Ardra",
    "Punarvasu",
    "Pushya",
    "Ashlesha",
    "Magha",
    "Purva Phalguni",
    "Uttara Phalguni",
    "Hasta",
    "Chitra",
    "Swati",
    "Vishakha",
    "Anuradha",
    "Jyeshtha",
    "Mula",
    "Purva Ashadha",
    "Uttara Ashadha",
    "Shravana",
    "Dhanishtha",
    "Shatabhisha",
    "Purva Bhadrapada",
    "Uttara Bhadrapada",
    "Revati",
]

SIGN_SPAN = 30.0
NAKSHATRA_SPAN = 360.0 / 27.0  # 13°20′
PADA_SPAN = NAKSHATRA_SPAN / 4.0  # 3°20′

# Quotients closer than this (in degrees) to a boundary land on the boundary.
BOUNDARY_EPSILON = 1e-9


@dataclass(frozen=True)
class ZodiacPosition:
    longitude: float
    sign: int
    degree_in_sign: float
    nakshatra: int
    pada: int

    @property
    def sign_name(self) -> str:
        return SIGN_NAMES[self.sign - 1]

    @property
    def nakshatra_name(self) -> str:
        return NAKSHATRA_NAMES[self.nakshatra - 1]

    @property
    def house(self) -> int:
        return self.sign


def normalize(longitude: float) -> float:
    """Map any finite longitude into ``[0, 360)``."""

    value = float(longitude)
    if not math.isfinite(value):
        raise ValueError(f"longitude must be finite, got {longitude!r}")
    value %= 360.0
    # tiny negatives come back as exactly 360.0
    if value >= 360.0:
        value = 0.0
    return value


def _span_index(value: float, span: float) -> int:
    """Half-open ``[k*span, (k+1)*span)`` index with boundary snapping."""

    quotient = value / span
    nearest = round(quotient)
    if abs(quotient - nearest) * span < BOUNDARY_EPSILON:
        return int(nearest)
    return int(math.floor(quotient))


def classify(longitude: float) -> ZodiacPosition:
    lon = normalize(longitude)
    if 360.0 - lon < BOUNDARY_EPSILON:
        lon = 0.0

    sign_idx = min(_span_index(lon, SIGN_SPAN), 11)
    degree_in_sign = max(lon - sign_idx * SIGN_SPAN, 0.0)

    nak_idx = min(_span_index(lon, NAKSHATRA_SPAN), 26)
    offset_in_nak = max(lon - nak_idx * NAKSHATRA_SPAN, 0.0)
    pada_idx = min(_span_index(offset_in_nak, PADA_SPAN), 3)

    return ZodiacPosition(
        longitude=lon,
        sign=sign_idx + 1,
        degree_in_sign=degree_in_sign,
        nakshatra=nak_idx + 1,
        pada=pada_idx + 1,
    )


def sign_name_from_lon(lon: float) -> str:
    return classify(lon).sign_name


def fmt_degree_in_sign(degree_in_sign: float) -> str:
    """Compact ``D:MM`` rendering used in grid displays."""

    deg = int(degree_in_sign)
    mins = int((degree_in_sign - deg) * 60)
    return f"{deg}:{mins:02d}"


def fmt_deg(lon: float) -> str:
    # 0..360 to "sign 12°34′56″"
    pos = classify(lon)
    within = pos.degree_in_sign
    deg = int(within)
    minutes_float = (within - deg) * 60
    mins = int(minutes_float)
    secs = int((minutes_float - mins) * 60)
    return f"{pos.sign_name} {deg:02d}°{mins:02d}′{secs:02d}″"
