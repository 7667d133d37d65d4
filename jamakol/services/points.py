"""Immutable special-point value object shared by every point formula."""

from __future__ import annotations

from dataclasses import dataclass

from .zodiac import ZodiacPosition, classify, fmt_degree_in_sign

AARUDAM = "Aarudam"
UDAYAM = "Udayam"
KAVIPPU = "Kavippu"

SYMBOLS = {
    AARUDAM: "AR",
    UDAYAM: "UD",
    KAVIPPU: "KV",
}


@dataclass(frozen=True)
class SpecialPoint:
    name: str
    symbol: str
    position: ZodiacPosition

    @classmethod
    def at(cls, name: str, longitude: float) -> "SpecialPoint":
        """Build the named point at ``longitude`` via the shared classifier."""

        if name not in SYMBOLS:
            raise ValueError(f"Unknown special point {name!r}; expected one of {sorted(SYMBOLS)}")
        return cls(name=name, symbol=SYMBOLS[name], position=classify(longitude))

    @property
    def longitude(self) -> float:
        return self.position.longitude

    @property
    def sign(self) -> int:
        return self.position.sign

    @property
    def sign_name(self) -> str:
        return self.position.sign_name

    @property
    def house(self) -> int:
        return self.position.house

    @property
    def degree_in_sign(self) -> float:
        return self.position.degree_in_sign

    @property
    def nakshatra(self) -> int:
        return self.position.nakshatra

    @property
    def nakshatra_name(self) -> str:
        return self.position.nakshatra_name

    @property
    def pada(self) -> int:
        return self.position.pada

    @property
    def degree_display(self) -> str:
        return fmt_degree_in_sign(self.position.degree_in_sign)
