from datetime import datetime

import pytest

from jamakol.services.points import AARUDAM, KAVIPPU, SpecialPoint
from jamakol.services.special_points import (
    SpecialPointAggregator,
    minute_aarudam,
    veethi_for,
    veethi_kavippu,
)
from jamakol.services.vedic_day import QueryMoment, SunTimesTriad


TRIAD = SunTimesTriad(
    datetime(2024, 6, 2, 6, 0),
    datetime(2024, 6, 2, 18, 0),
    datetime(2024, 6, 3, 6, 0),
)


def _moment(ts):
    return QueryMoment(timestamp=ts, latitude=13.0827, longitude=80.2707, tz_offset_hours=5.5)


def test_minute_aarudam_walks_one_sign_per_five_minutes():
    assert minute_aarudam(datetime(2024, 6, 2, 14, 0, 0)).longitude == 0.0

    mid = minute_aarudam(datetime(2024, 6, 2, 14, 7, 30))
    assert mid.longitude == pytest.approx(45.0)
    assert mid.sign_name == "Taurus"
    assert mid.degree_in_sign == pytest.approx(15.0)

    last = minute_aarudam(datetime(2024, 6, 2, 14, 59, 59))
    assert last.sign_name == "Pisces"
    assert last.longitude == pytest.approx(359.9)


def test_veethi_lanes():
    assert [veethi_for(sign) for sign in range(1, 13)] == [2, 1, 1, 1, 1, 2, 2, 3, 3, 3, 3, 2]
    with pytest.raises(ValueError):
        veethi_for(0)
    with pytest.raises(ValueError):
        veethi_for(13)


def test_veethi_kavippu_counts_from_udayam():
    # Aries Sun (veethi 2), Aarudam Taurus 15°, Udayam in Capricorn
    point = veethi_kavippu(1, 280.0, 45.0)
    assert point.name == KAVIPPU
    assert point.longitude == pytest.approx(285.0)
    assert point.sign_name == "Capricorn"

    # Scorpio Sun (veethi 3), Aarudam Aries 6°, Udayam in Cancer
    point = veethi_kavippu(8, 100.0, 6.0)
    assert point.longitude == pytest.approx(174.0)
    assert point.sign_name == "Virgo"


def test_aggregator_returns_points_in_display_order():
    points = SpecialPointAggregator().compute(_moment(datetime(2024, 6, 2, 12, 7, 30)), 100.0, 4, TRIAD)

    assert [p.name for p in points] == ["Aarudam", "Udayam", "Kavippu"]
    assert [p.symbol for p in points] == ["AR", "UD", "KV"]
    aarudam, udayam, kavippu = points
    assert aarudam.longitude == pytest.approx(45.0)
    assert udayam.longitude == pytest.approx(283.75)
    assert kavippu.longitude == pytest.approx(255.0)
    assert kavippu.sign_name == "Sagittarius"


def test_aggregator_accepts_alternative_formulas():
    seen = {}

    def fixed_aarudam(ts):
        return SpecialPoint.at(AARUDAM, 200.0)

    def opposite_kavippu(sun_sign, udayam_lon, aarudam_lon):
        seen["args"] = (sun_sign, udayam_lon, aarudam_lon)
        return SpecialPoint.at(KAVIPPU, udayam_lon + 180.0)

    aggregator = SpecialPointAggregator(aarudam_formula=fixed_aarudam, kavippu_formula=opposite_kavippu)
    aarudam, udayam, kavippu = aggregator.compute(_moment(datetime(2024, 6, 2, 12, 0)), 100.0, 4, TRIAD)

    assert aarudam.longitude == 200.0
    assert udayam.longitude == pytest.approx(280.0)
    assert kavippu.longitude == pytest.approx(100.0)
    assert seen["args"][0] == 4
    assert seen["args"][2] == 200.0


def test_point_exposes_classification():
    point = SpecialPoint.at(AARUDAM, 132.5)
    assert (point.sign, point.house, point.pada) == (5, 5, 4)
    assert point.nakshatra_name == "Magha"
    assert point.degree_display == "12:30"


def test_point_names_are_restricted():
    with pytest.raises(ValueError):
        SpecialPoint.at("Mandi", 10.0)
