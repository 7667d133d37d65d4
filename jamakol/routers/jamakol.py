"""Jamakol chart API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from zoneinfo import ZoneInfoNotFoundError

from ..schemas.jamakol import JamakolComputeRequest, JamakolComputeResponse, ZodiacPositionOut
from ..services.ephem import EphemerisProvider, SwissEphemeris, SwissSunriseProvider
from ..services.errors import VedicEngineError
from ..services.orchestrators.jamakol_full import SunriseProviderFactory, build_viewmodel, position_out
from ..services.zodiac import classify


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/jamakol", tags=["jamakol"])


def get_sunrise_provider_factory() -> SunriseProviderFactory:
    return SwissSunriseProvider


def get_ephemeris() -> EphemerisProvider:
    return SwissEphemeris()


def _engine_error(exc: VedicEngineError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "message": str(exc)},
    )


@router.post(
    "/compute",
    response_model=JamakolComputeResponse,
    summary="Compute Jamakol special points for a birth moment and an optional query moment",
)
def jamakol_compute(
    req: JamakolComputeRequest = Body(
        ...,
        examples={
            "hyderabad": {
                "summary": "Birth chart with a horary query",
                "value": {
                    "birth": {
                        "date": "1990-08-15",
                        "time": "14:30",
                        "place": {"lat": 17.385, "lon": 78.4867, "tz": "Asia/Kolkata", "query": "Hyderabad, India"},
                    },
                    "query": {
                        "date": "2024-06-02",
                        "time": "05:30",
                        "place": {"lat": 13.0827, "lon": 80.2707, "tz_offset": 5.5},
                    },
                    "options": {"ayanamsha": "lahiri", "sunrise_mode": "tip_apparent"},
                },
            },
            "defaults": {
                "summary": "No place provided",
                "description": "Uses configured defaults when place is omitted",
                "value": {"birth": {"date": "2024-06-02", "time": "12:00"}},
            },
        },
    ),
    provider_factory: SunriseProviderFactory = Depends(get_sunrise_provider_factory),
    ephemeris: EphemerisProvider = Depends(get_ephemeris),
):
    birth = req.birth.model_dump(exclude_none=True)
    query = req.query.model_dump(exclude_none=True) if req.query else None
    try:
        result = build_viewmodel(
            birth,
            query,
            req.options.model_dump(),
            sunrise_provider_factory=provider_factory,
            ephemeris=ephemeris,
        )
    except VedicEngineError as exc:
        logger.info("jamakol compute failed: %s: %s", type(exc).__name__, exc)
        return _engine_error(exc)
    except (ValueError, ZoneInfoNotFoundError) as exc:
        logger.info("jamakol compute rejected input: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return JamakolComputeResponse(**result)


@router.get(
    "/classify",
    response_model=ZodiacPositionOut,
    summary="Classify a sidereal longitude into sign, nakshatra and pada",
)
def jamakol_classify(lon: float = Query(..., description="Sidereal ecliptic longitude in degrees")):
    try:
        pos = classify(lon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return position_out(pos)
