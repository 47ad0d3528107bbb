"""Pure Python numerology calculations: reduction, vowel masks, scoring and digit counts."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from .number_systems import NumberSystem


DEFAULT_MASTER_NUMBERS: tuple[int, ...] = (11, 22, 33)

VOWELS: frozenset[str] = frozenset("aeiou")

# Characters that are expected in names even though they carry no value:
# dashes (Hernandez-Johnson), periods (Jr.), apostrophes and whitespace.
ACCEPTABLE_UNKNOWN_CHARACTERS = re.compile(r"[-\s.']")

LetterMask = tuple[bool, ...]


# ── Core reduction logic ─────────────────────────────────────────────

def reduce_steps(n: int, master_numbers: Iterable[int] = DEFAULT_MASTER_NUMBERS) -> list[int]:
    """Digit-sum n until a single digit or a master number remains.

    Every intermediate value is kept, so reduce_steps(59338273) == [59338273, 40, 4].
    The last element is always < 10 or a member of master_numbers.
    """
    masters = frozenset(master_numbers)
    steps = [n]
    while n >= 10 and n not in masters:
        n = sum(split_number(n))
        steps.append(n)
    return steps


def reduce_number(n: int, master_numbers: Iterable[int] = DEFAULT_MASTER_NUMBERS) -> int:
    return reduce_steps(n, master_numbers)[-1]


def split_number(n: int) -> list[int]:
    """1234 -> [1, 2, 3, 4]"""
    return [int(d) for d in str(n)]


# ── Vowel / consonant classification ─────────────────────────────────

def _is_vowel(char: str) -> bool:
    return char.lower() in VOWELS


def _y_is_vowel(word: str, i: int) -> bool:
    # Rules from https://www.worldnumerology.com/numerology-Y-vowel-consonant.htm
    if len(word) == 1:
        return True
    # Yvonne, Ylsa -> vowel; Yolanda -> consonant
    if i == 0:
        return not _is_vowel(word[1])
    # Barry, Tommy -> vowel; Mickey -> consonant
    if i == len(word) - 1:
        return not _is_vowel(word[i - 1])
    before, after = _is_vowel(word[i - 1]), _is_vowel(word[i + 1])
    # Kyle, Tyson -> vowel; Eyarta -> consonant
    if before == after:
        return not before
    return after


def vowel_mask(name: str) -> LetterMask:
    """True for every position of name that counts as a vowel.

    Each space-delimited word is classified on its own so that a word scores the
    same inside a full name as it does alone. Spaces are never vowels.
    """
    mask: list[bool] = []
    for idx, word in enumerate(name.split(" ")):
        if idx:
            mask.append(False)
        for i, char in enumerate(word):
            if char in ("y", "Y"):
                mask.append(_y_is_vowel(word, i))
            else:
                mask.append(_is_vowel(char))
    return tuple(mask)


def full_mask(mask: LetterMask) -> LetterMask:
    return tuple(True for _ in mask)


def consonant_mask(mask: LetterMask) -> LetterMask:
    return tuple(not m for m in mask)


# ── Result types ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class LetterValue:
    letter: str
    value: int

    def to_dict(self) -> dict:
        return {"letter": self.letter, "value": self.value}


@dataclass(frozen=True)
class Breakdown:
    """Conversion of a single word (or date component) to its numerological value."""

    letter_values: tuple[LetterValue, ...]
    reduce_steps: tuple[int, ...]

    @property
    def value(self) -> int:
        return self.reduce_steps[-1]

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "reduce_steps": list(self.reduce_steps),
            "letter_values": [lv.to_dict() for lv in self.letter_values],
        }


@dataclass(frozen=True)
class NumerologicalResult:
    reduce_steps: tuple[int, ...]
    breakdown: tuple[Breakdown, ...] = ()

    @property
    def value(self) -> int:
        return self.reduce_steps[-1]

    @property
    def unreduced(self) -> int:
        return self.reduce_steps[0]

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "reduce_steps": list(self.reduce_steps),
            "breakdown": [b.to_dict() for b in self.breakdown],
        }


class UnknownCharacters:
    """Set of characters that had no value in the number system.

    Not an error: this only signals that a conversion may be inaccurate.
    """

    def __init__(self, chars: Iterable[str] = ()):
        self._chars: set[str] = {c.lower() for c in chars}

    def add(self, char: str) -> None:
        self._chars.add(char.lower())

    def union(self, other: UnknownCharacters) -> UnknownCharacters:
        return UnknownCharacters(self._chars | other._chars)

    def unacceptable(self) -> UnknownCharacters:
        return UnknownCharacters(c for c in self._chars if not ACCEPTABLE_UNKNOWN_CHARACTERS.match(c))

    def to_list(self) -> list[str]:
        return sorted(self._chars)

    def __contains__(self, char: str) -> bool:
        return char.lower() in self._chars

    def __len__(self) -> int:
        return len(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnknownCharacters):
            return NotImplemented
        return self._chars == other._chars

    def __repr__(self) -> str:
        return f"UnknownCharacters({self.to_list()!r})"


@dataclass(frozen=True)
class DigitCounts:
    """Occurrences of every valid digit among the letters of a name."""

    counts: Mapping[int, int]
    max_count: int
    unknown_characters: UnknownCharacters = field(default_factory=UnknownCharacters, compare=False)

    def __getitem__(self, digit: int) -> int:
        return self.counts.get(digit, 0)


@dataclass(frozen=True)
class HiddenPassionResult:
    numbers: tuple[int, ...]
    max_count: int

    def to_dict(self) -> dict:
        return {"numbers": list(self.numbers), "max_count": self.max_count}


@dataclass(frozen=True)
class KarmicLessonResult:
    numbers: tuple[int, ...]

    def to_dict(self) -> dict:
        return {"karmic_lessons": list(self.numbers)}


# ── Calculations ─────────────────────────────────────────────────────

def calculate_breakdown(
    word: str,
    master_numbers: Sequence[int],
    number_system: NumberSystem,
    reduce: bool,
    mask: Sequence[bool],
) -> Breakdown:
    total = 0
    letters: list[LetterValue] = []
    for char, include in zip(word, mask):
        value = number_system.value(char)
        if value is not None and include:
            total += value
            letters.append(LetterValue(char, value))
        else:
            letters.append(LetterValue(char, 0))
    steps = reduce_steps(total, master_numbers) if reduce else [total]
    return Breakdown(letter_values=tuple(letters), reduce_steps=tuple(steps))


def calculate_core_number(
    name: str,
    master_numbers: Sequence[int],
    reduce_words: bool,
    number_system: NumberSystem,
    mask: Sequence[bool],
) -> NumerologicalResult:
    """Score name with only the letters selected by mask.

    With reduce_words every word is reduced on its own and the word values are
    summed and reduced again; otherwise all letters are summed first.
    """
    breakdown: list[Breakdown] = []
    total = 0
    start = 0
    for word in name.split(" "):
        end = start + len(word)
        if word:
            calc = calculate_breakdown(word, master_numbers, number_system, reduce_words, mask[start:end])
            breakdown.append(calc)
            total += calc.value
        start = end + 1

    if len(breakdown) == 1 and reduce_words:
        steps = breakdown[0].reduce_steps
    else:
        steps = tuple(reduce_steps(total, master_numbers))
    return NumerologicalResult(reduce_steps=tuple(steps), breakdown=tuple(breakdown))


def count_numerological_numbers(name: str, number_system: NumberSystem) -> DigitCounts:
    counts = {digit: 0 for digit in number_system.valid_numbers}
    unknowns = UnknownCharacters()
    max_count = 0
    for char in name:
        value = number_system.value(char)
        if value is None or value not in counts:
            # Usually a space or a '0'.
            unknowns.add(char)
            continue
        counts[value] += 1
        max_count = max(max_count, counts[value])
    return DigitCounts(counts=counts, max_count=max_count, unknown_characters=unknowns)


def hidden_passions(counts: DigitCounts) -> HiddenPassionResult:
    max_count = max(counts.counts.values(), default=0)
    numbers = sorted(d for d, c in counts.counts.items() if c == max_count)
    return HiddenPassionResult(numbers=tuple(numbers), max_count=max_count)


def karmic_lessons(counts: DigitCounts) -> KarmicLessonResult:
    return KarmicLessonResult(numbers=tuple(sorted(d for d, c in counts.counts.items() if c == 0)))
