"""Build Jamakol chart viewmodels.

A chart request carries a birth moment and, optionally, a query (horary)
moment. Each is resolved on its own: its own civil sunrise, its own Vedic
day, its own triad. Nothing is shared or cached between the two.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from ...schemas.jamakol import (
    ChartMetaOut,
    DayLordsOut,
    JamakolChartViewModel,
    PlanetOut,
    SpecialPointOut,
    SunTimesOut,
    ZodiacPositionOut,
)
from ..day_lord import resolve_day_lords, weekday_name
from ..ephem import ENGINE_VERSION, GRAHA_SYMBOLS, GRAHAS, EphemerisProvider, backend_name
from ..points import SpecialPoint
from ..special_points import SpecialPointAggregator
from ..util.place_defaults import normalize_place
from ..vedic_day import QueryMoment, SunriseProvider, VedicDayResolver
from ..zodiac import ZodiacPosition, classify, fmt_deg, fmt_degree_in_sign


logger = logging.getLogger(__name__)

SunriseProviderFactory = Callable[[Optional[str]], SunriseProvider]


def _default_ayanamsha() -> str:
    return os.getenv("DEFAULT_AYANAMSHA", "lahiri").lower()


def _format_duration(delta: timedelta) -> str:
    seconds = int(delta.total_seconds())
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def parse_local_moment(date_str: str, time_str: str) -> datetime:
    """Parse ``YYYY-MM-DD`` and ``HH:MM[:SS]`` into a naive local datetime."""

    moment = datetime.fromisoformat(f"{date_str}T{time_str}")
    if moment.tzinfo is not None:
        raise ValueError("time must be a local wall-clock value without an offset")
    return moment


def position_out(pos: ZodiacPosition) -> ZodiacPositionOut:
    return ZodiacPositionOut(
        longitude=round(pos.longitude, 6),
        sign=pos.sign,
        sign_name=pos.sign_name,
        degree_in_sign=round(pos.degree_in_sign, 6),
        degree_display=fmt_degree_in_sign(pos.degree_in_sign),
        nakshatra=pos.nakshatra,
        nakshatra_name=pos.nakshatra_name,
        pada=pos.pada,
    )


def planet_positions(
    ephemeris: EphemerisProvider,
    moment_utc: datetime,
    ayanamsha: str,
    sun: Optional[ZodiacPosition] = None,
) -> List[PlanetOut]:
    """Classify the nine grahas at one instant, in chart order."""

    planets = []
    for name in GRAHAS:
        if name == "Sun" and sun is not None:
            pos = sun
        else:
            pos = classify(ephemeris.planet_longitude(name, moment_utc, ayanamsha))
        planets.append(
            PlanetOut(name=name, symbol=GRAHA_SYMBOLS[name], house=pos.house, **position_out(pos).model_dump())
        )
    return planets


def _point_out(point: SpecialPoint) -> SpecialPointOut:
    return SpecialPointOut(
        name=point.name,
        symbol=point.symbol,
        house=point.house,
        **position_out(point.position).model_dump(),
    )


def build_chart(
    label: str,
    moment: QueryMoment,
    *,
    sunrise_provider: SunriseProvider,
    ephemeris: EphemerisProvider,
    ayanamsha: str,
    aggregator: Optional[SpecialPointAggregator] = None,
    meta_extra: Optional[Dict[str, Any]] = None,
) -> JamakolChartViewModel:
    vedic_day = VedicDayResolver(sunrise_provider).resolve(moment)
    triad = vedic_day.triad

    sun = classify(ephemeris.sun_longitude(moment.utc(), ayanamsha))
    points = (aggregator or SpecialPointAggregator()).compute(moment, sun.longitude, sun.sign, triad)
    lords = resolve_day_lords(vedic_day, moment.timestamp)
    logger.debug(
        "%s chart: Sun %s, %s",
        label,
        fmt_deg(sun.longitude),
        ", ".join(f"{p.symbol} {fmt_deg(p.longitude)}" for p in points),
    )

    if lords.sunrise != lords.fixed_clock:
        logger.info(
            "%s chart at %s: sunrise day lord %s differs from fixed-clock day lord %s",
            label,
            moment.timestamp.isoformat(),
            lords.sunrise,
            lords.fixed_clock,
        )

    extra = dict(meta_extra or {})
    meta = ChartMetaOut(
        engine_version=ENGINE_VERSION,
        ayanamsha=ayanamsha,
        sunrise_mode=extra.get("sunrise_mode"),
        backend=backend_name(),
        place_label=extra.get("place_label"),
        place_defaults_used=bool(extra.get("place_defaults_used", False)),
        tz_source=extra.get("tz_source"),
    )

    return JamakolChartViewModel(
        label=label,
        moment_local=moment.timestamp.isoformat(),
        tz_offset=moment.tz_offset_hours,
        lat=moment.latitude,
        lon=moment.longitude,
        vedic_date=vedic_day.vedic_date.isoformat(),
        vedic_weekday=weekday_name(vedic_day.vedic_date),
        sun=position_out(sun),
        planets=planet_positions(ephemeris, moment.utc(), ayanamsha, sun),
        sun_times=SunTimesOut(
            sunrise=triad.today_sunrise.isoformat(),
            sunset=triad.today_sunset.isoformat(),
            next_sunrise=triad.tomorrow_sunrise.isoformat(),
            day_length=_format_duration(triad.day_length),
            night_length=_format_duration(triad.night_length),
        ),
        day_lords=DayLordsOut(sunrise=lords.sunrise, fixed_clock=lords.fixed_clock),
        special_points=[_point_out(p) for p in points],
        meta=meta,
    )


def _chart_from_input(
    label: str,
    moment_in: Dict[str, Any],
    *,
    sunrise_provider: SunriseProvider,
    sunrise_mode: Optional[str],
    ephemeris: EphemerisProvider,
    ayanamsha: str,
) -> JamakolChartViewModel:
    local = parse_local_moment(moment_in["date"], moment_in["time"])
    place, flags = normalize_place(moment_in.get("place"), local)
    if flags["default_reason"]:
        logger.info("%s chart: place defaults applied (%s)", label, flags["default_reason"])

    moment = QueryMoment(
        timestamp=local,
        latitude=place["lat"],
        longitude=place["lon"],
        tz_offset_hours=place["tz_offset"],
    )
    return build_chart(
        label,
        moment,
        sunrise_provider=sunrise_provider,
        ephemeris=ephemeris,
        ayanamsha=ayanamsha,
        meta_extra={
            "sunrise_mode": sunrise_mode,
            "place_label": place.get("query"),
            "place_defaults_used": flags["place_defaults_used"],
            "tz_source": flags["tz_source"],
        },
    )


def build_viewmodel(
    birth: Dict[str, Any],
    query: Optional[Dict[str, Any]],
    options: Optional[Dict[str, Any]],
    *,
    sunrise_provider_factory: SunriseProviderFactory,
    ephemeris: EphemerisProvider,
) -> Dict[str, Optional[JamakolChartViewModel]]:
    opts = dict(options or {})
    ayanamsha = (opts.get("ayanamsha") or _default_ayanamsha()).lower()
    sunrise_mode = opts.get("sunrise_mode")
    provider = sunrise_provider_factory(sunrise_mode)
    sunrise_mode = getattr(provider, "mode", sunrise_mode)

    common = dict(
        sunrise_provider=provider,
        sunrise_mode=sunrise_mode,
        ephemeris=ephemeris,
        ayanamsha=ayanamsha,
    )
    birth_vm = _chart_from_input("birth", birth, **common)
    query_vm = _chart_from_input("query", query, **common) if query else None
    return {"birth": birth_vm, "query": query_vm}
