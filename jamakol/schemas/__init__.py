from .jamakol import (
    PlaceIn,
    MomentIn,
    JamakolOptions,
    JamakolComputeRequest,
    JamakolComputeResponse,
    JamakolChartViewModel,
    ZodiacPositionOut,
    SpecialPointOut,
    PlanetOut,
    SunTimesOut,
    DayLordsOut,
    ChartMetaOut,
)
