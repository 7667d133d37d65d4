from pydantic import BaseModel, Field
from typing import Optional, List


class PlaceIn(BaseModel):
    lat: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    lon: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    tz_offset: Optional[float] = Field(default=None, ge=-14.0, le=14.0, description="UTC offset in hours")
    tz: Optional[str] = Field(default=None, description="IANA timezone, e.g. Asia/Kolkata")
    query: Optional[str] = None


class MomentIn(BaseModel):
    date: str  # YYYY-MM-DD
    time: str  # HH:MM or HH:MM:SS, local wall clock
    place: Optional[PlaceIn] = None


class JamakolOptions(BaseModel):
    ayanamsha: Optional[str] = None
    sunrise_mode: Optional[str] = None


class JamakolComputeRequest(BaseModel):
    birth: MomentIn
    query: Optional[MomentIn] = None
    options: JamakolOptions = Field(default_factory=JamakolOptions)


class ZodiacPositionOut(BaseModel):
    longitude: float
    sign: int
    sign_name: str
    degree_in_sign: float
    degree_display: str
    nakshatra: int
    nakshatra_name: str
    pada: int


class SpecialPointOut(ZodiacPositionOut):
    name: str
    symbol: str
    house: int


class PlanetOut(ZodiacPositionOut):
    name: str
    symbol: str
    house: int


class SunTimesOut(BaseModel):
    sunrise: str
    sunset: str
    next_sunrise: str
    day_length: str
    night_length: str


class DayLordsOut(BaseModel):
    sunrise: str
    fixed_clock: str


class ChartMetaOut(BaseModel):
    engine: str = "jamakol-engine"
    engine_version: str
    ayanamsha: str
    sunrise_mode: Optional[str] = None
    backend: Optional[str] = None
    place_label: Optional[str] = None
    place_defaults_used: bool = False
    tz_source: Optional[str] = None


class JamakolChartViewModel(BaseModel):
    label: str
    moment_local: str
    tz_offset: float
    lat: float
    lon: float
    vedic_date: str
    vedic_weekday: str
    sun: ZodiacPositionOut
    planets: List[PlanetOut]
    sun_times: SunTimesOut
    day_lords: DayLordsOut
    special_points: List[SpecialPointOut]
    meta: ChartMetaOut


class JamakolComputeResponse(BaseModel):
    birth: JamakolChartViewModel
    query: Optional[JamakolChartViewModel] = None
