"""Aarudam, Udayam and Kavippu, computed together in display order.

Aarudam and Kavippu are pluggable formulas. The defaults follow the
traditional Jamakol rules:

* Aarudam walks through the zodiac once per hour, one sign for every five
  clock minutes (minute 00-04 is Aries, 55-59 is Pisces).
* Kavippu counts from Aarudam to the Sun's veethi and projects that count
  forward from Udayam.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List

from .points import AARUDAM, KAVIPPU, SpecialPoint
from .udaya_lagna import UdayaLagnaInterpolator
from .vedic_day import QueryMoment, SunTimesTriad
from .zodiac import SIGN_SPAN, classify, normalize

AarudamFormula = Callable[[datetime], SpecialPoint]
KavippuFormula = Callable[[int, float, float], SpecialPoint]

MINUTES_PER_SIGN = 5


def minute_aarudam(birth_moment: datetime) -> SpecialPoint:
    sign_idx = birth_moment.minute // MINUTES_PER_SIGN
    seconds_into_sign = (birth_moment.minute % MINUTES_PER_SIGN) * 60 + birth_moment.second
    degree_in_sign = seconds_into_sign / (MINUTES_PER_SIGN * 60.0) * SIGN_SPAN
    return SpecialPoint.at(AARUDAM, sign_idx * SIGN_SPAN + degree_in_sign)


def veethi_for(sun_sign: int) -> int:
    """Solar lane (1-3) for a Sun sign (1-12)."""

    if not 1 <= sun_sign <= 12:
        raise ValueError(f"sun_sign must be within 1..12, got {sun_sign}")
    if 2 <= sun_sign <= 5:
        return 1
    if 8 <= sun_sign <= 11:
        return 3
    return 2


def _count_houses(start: int, end: int) -> int:
    # inclusive count going forward through the zodiac
    return (end - start) % 12 + 1


def _count_to_house(start: int, count: int) -> int:
    return (start + count - 2) % 12 + 1


def veethi_kavippu(sun_sign: int, udayam_longitude: float, aarudam_longitude: float) -> SpecialPoint:
    veethi = veethi_for(sun_sign)
    udayam = classify(udayam_longitude)
    aarudam = classify(aarudam_longitude)

    steps = _count_houses(aarudam.sign, veethi)
    kavippu_house = _count_to_house(udayam.sign, steps)
    longitude = normalize(kavippu_house * SIGN_SPAN - aarudam.degree_in_sign)
    return SpecialPoint.at(KAVIPPU, longitude)


class SpecialPointAggregator:
    """Compute ``[Aarudam, Udayam, Kavippu]`` for one query.

    Nothing is cached; each :meth:`compute` call starts from its inputs.
    """

    def __init__(
        self,
        aarudam_formula: AarudamFormula = minute_aarudam,
        kavippu_formula: KavippuFormula = veethi_kavippu,
    ) -> None:
        self._aarudam_formula = aarudam_formula
        self._kavippu_formula = kavippu_formula

    def compute(
        self,
        moment: QueryMoment,
        sun_longitude: float,
        sun_sign: int,
        triad: SunTimesTriad,
    ) -> List[SpecialPoint]:
        aarudam = self._aarudam_formula(moment.timestamp)
        udayam = UdayaLagnaInterpolator.from_triad(triad, sun_longitude).at_moment(moment.timestamp)
        kavippu = self._kavippu_formula(sun_sign, udayam.longitude, aarudam.longitude)
        return [aarudam, udayam, kavippu]
