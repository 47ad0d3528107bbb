"""Letter-to-digit tables for the supported number systems."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .errors import SearchValidationError

# Characters that commonly appear in names but carry no value.
_ZERO_VALUE = {" ": 0, ".": 0, "-": 0}
_DIGITS = {str(d): d for d in range(10)}


@dataclass(frozen=True, eq=False)
class NumberSystem:
    name: str
    mapping: Mapping[str, int]
    valid_numbers: tuple[int, ...]

    @property
    def prefix(self) -> str:
        """First letter of the lowercase name; used for the per-digit count columns (p1, c1...)."""
        return self.name.lower()[0]

    def value(self, char: str) -> int | None:
        return self.mapping.get(char.lower())

    def to_json(self) -> str:
        return self.name.lower()

    def __repr__(self) -> str:
        return f"NumberSystem({self.name})"


def _table(letters: dict[str, int]) -> Mapping[str, int]:
    return MappingProxyType({**letters, **_DIGITS, **_ZERO_VALUE})


# Chaldean does not assign 9 to any letter.
# A=1 B=2 C=3 D=4 E=5 F=8 G=3 H=5 I=1 J=1 K=2 L=3 M=4
# N=5 O=7 P=8 Q=1 R=2 S=3 T=4 U=6 V=6 W=6 X=5 Y=1 Z=7
CHALDEAN = NumberSystem(
    name="Chaldean",
    mapping=_table({
        "a": 1, "i": 1, "j": 1, "q": 1, "y": 1,
        "b": 2, "k": 2, "r": 2,
        "c": 3, "g": 3, "l": 3, "s": 3,
        "d": 4, "m": 4, "t": 4,
        "e": 5, "h": 5, "n": 5, "x": 5,
        "u": 6, "v": 6, "w": 6,
        "o": 7, "z": 7,
        "f": 8, "p": 8,
    }),
    valid_numbers=(1, 2, 3, 4, 5, 6, 7, 8),
)

# A=1 B=2 C=3 D=4 E=5 F=6 G=7 H=8 I=9
# J=1 K=2 L=3 M=4 N=5 O=6 P=7 Q=8 R=9
# S=1 T=2 U=3 V=4 W=5 X=6 Y=7 Z=8
PYTHAGOREAN = NumberSystem(
    name="Pythagorean",
    mapping=_table({
        "a": 1, "j": 1, "s": 1,
        "b": 2, "k": 2, "t": 2,
        "c": 3, "l": 3, "u": 3,
        "d": 4, "m": 4, "v": 4,
        "e": 5, "n": 5, "w": 5,
        "f": 6, "o": 6, "x": 6,
        "g": 7, "p": 7, "y": 7,
        "h": 8, "q": 8, "z": 8,
        "i": 9, "r": 9,
    }),
    valid_numbers=(1, 2, 3, 4, 5, 6, 7, 8, 9),
)

NUMBER_SYSTEMS: dict[str, NumberSystem] = {
    PYTHAGOREAN.to_json(): PYTHAGOREAN,
    CHALDEAN.to_json(): CHALDEAN,
}


def get_number_system(name: str | NumberSystem) -> NumberSystem:
    if isinstance(name, NumberSystem):
        return name
    system = NUMBER_SYSTEMS.get(name.strip().lower())
    if system is None:
        raise SearchValidationError(f"unknown number system: {name}")
    return system
