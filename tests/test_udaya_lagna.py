from datetime import datetime, timedelta

import pytest

from jamakol.services.errors import DegenerateArcError, MomentOutOfRangeError
from jamakol.services.udaya_lagna import DAY_ARC, NIGHT_ARC, UdayaLagnaInterpolator
from jamakol.services.vedic_day import SunTimesTriad


SUNRISE = datetime(2024, 6, 2, 6, 0)
SUNSET = datetime(2024, 6, 2, 18, 0)
NEXT_SUNRISE = datetime(2024, 6, 3, 6, 0)


def _equal_arcs(sun_longitude=100.0):
    triad = SunTimesTriad(SUNRISE, SUNSET, NEXT_SUNRISE)
    return UdayaLagnaInterpolator.from_triad(triad, sun_longitude)


def test_arc_midpoints_are_opposite_the_sun():
    interp = _equal_arcs()
    assert interp.longitude_at(datetime(2024, 6, 2, 12, 0)) == pytest.approx(280.0)
    assert interp.longitude_at(datetime(2024, 6, 3, 0, 0)) == pytest.approx(280.0)


def test_arcs_start_on_the_sun():
    interp = _equal_arcs()
    assert interp.longitude_at(SUNRISE) == pytest.approx(100.0)
    assert interp.longitude_at(SUNSET) == pytest.approx(100.0)
    assert interp.arc_at(SUNRISE) == DAY_ARC
    assert interp.arc_at(SUNSET) == NIGHT_ARC


def test_unequal_arcs_use_their_own_rate():
    interp = UdayaLagnaInterpolator(
        datetime(2024, 6, 2, 5, 0),
        datetime(2024, 6, 2, 19, 0),
        datetime(2024, 6, 3, 5, 0),
        sunrise_anchor_longitude=40.0,
        sunset_anchor_longitude=40.0,
    )
    assert interp.day_hours == pytest.approx(14.0)
    assert interp.night_hours == pytest.approx(10.0)
    assert interp.longitude_at(datetime(2024, 6, 2, 12, 0)) == pytest.approx(220.0)
    assert interp.longitude_at(datetime(2024, 6, 3, 0, 0)) == pytest.approx(220.0)
    assert interp.longitude_at(datetime(2024, 6, 2, 8, 30)) == pytest.approx(130.0)


@pytest.mark.parametrize("start,end", [(SUNRISE, SUNSET), (SUNSET, NEXT_SUNRISE)])
def test_longitude_increases_through_each_arc(start, end):
    interp = _equal_arcs(sun_longitude=350.0)
    step = timedelta(minutes=17)
    previous = interp.longitude_at(start)
    travelled = 0.0
    t = start + step
    while t < end:
        current = interp.longitude_at(t)
        delta = (current - previous) % 360.0
        assert 0.0 < delta < 180.0
        travelled += delta
        previous = current
        t += step
    assert travelled < 360.0


def test_moments_outside_the_triad_are_rejected():
    interp = _equal_arcs()
    with pytest.raises(MomentOutOfRangeError):
        interp.longitude_at(SUNRISE - timedelta(seconds=1))
    with pytest.raises(MomentOutOfRangeError):
        interp.longitude_at(NEXT_SUNRISE)


def test_degenerate_arcs():
    with pytest.raises(DegenerateArcError):
        UdayaLagnaInterpolator(SUNRISE, SUNRISE, NEXT_SUNRISE, 100.0, 100.0)
    with pytest.raises(DegenerateArcError):
        UdayaLagnaInterpolator(SUNRISE, SUNSET, SUNSET, 100.0, 100.0)


def test_at_moment_returns_classified_point():
    point = _equal_arcs().at_moment(datetime(2024, 6, 2, 12, 0))
    assert point.name == "Udayam"
    assert point.symbol == "UD"
    assert point.sign_name == "Capricorn"
    assert point.house == 10
