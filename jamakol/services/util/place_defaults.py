"""Helpers for normalising chart place inputs."""

import os
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from zoneinfo import ZoneInfo


DEF_LAT = float(os.getenv("DEFAULT_PLACE_LAT", "13.0827"))
DEF_LON = float(os.getenv("DEFAULT_PLACE_LON", "80.2707"))
DEF_TZ = os.getenv("DEFAULT_PLACE_TZ", "Asia/Kolkata")
DEF_LBL = os.getenv("DEFAULT_PLACE_LABEL", "Chennai, India")


def tz_offset_hours(tz_name: str, local_moment: datetime) -> float:
    """UTC offset in hours of an IANA zone at a naive local moment."""

    offset = local_moment.replace(tzinfo=ZoneInfo(tz_name)).utcoffset()
    return offset.total_seconds() / 3600.0 if offset is not None else 0.0


def normalize_place(
    place: Optional[Dict[str, Any]],
    local_moment: datetime,
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Resolve coordinates and tz offset for a chart, recording what was defaulted.

    The offset comes from an explicit ``tz_offset`` first, then from the IANA
    ``tz`` evaluated at the local moment, then from the default zone.
    """

    flags: Dict[str, Any] = {
        "place_defaults_used": False,
        "default_reason": None,
        "tz_source": None,
    }

    if not place:
        flags.update({"place_defaults_used": True, "default_reason": "missing_place", "tz_source": "default_tz"})
        return {
            "lat": DEF_LAT,
            "lon": DEF_LON,
            "tz": DEF_TZ,
            "tz_offset": tz_offset_hours(DEF_TZ, local_moment),
            "query": DEF_LBL,
        }, flags

    lat = place.get("lat")
    lon = place.get("lon")
    tz = place.get("tz")
    offset = place.get("tz_offset")
    lbl = place.get("query") or None

    if lat is None or lon is None:
        flags.update({"place_defaults_used": True, "default_reason": "missing_latlon"})
        lat, lon = DEF_LAT, DEF_LON
        lbl = lbl or DEF_LBL

    if offset is not None:
        flags["tz_source"] = "explicit_offset"
    elif tz:
        offset = tz_offset_hours(tz, local_moment)
        flags["tz_source"] = "tz_name"
    else:
        tz = DEF_TZ
        offset = tz_offset_hours(DEF_TZ, local_moment)
        flags["tz_source"] = "default_tz"

    return {
        "lat": float(lat),
        "lon": float(lon),
        "tz": tz,
        "tz_offset": float(offset),
        "query": lbl,
    }, flags
