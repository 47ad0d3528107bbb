"""Numerology of names: full, vowel and consonant values plus digit statistics."""
from __future__ import annotations

import re
from typing import Iterable, Sequence

from .number_systems import NumberSystem
from .numerology_engine import (
    DigitCounts,
    HiddenPassionResult,
    KarmicLessonResult,
    LetterMask,
    NumerologicalResult,
    calculate_core_number,
    consonant_mask,
    count_numerological_numbers,
    full_mask,
    hidden_passions,
    karmic_lessons,
    vowel_mask,
)
from .schemas import NameOptions, NameResult, NameSearchOptions

_DUPLICATE_SPACES = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Collapse runs of whitespace (including newlines and tabs) into single spaces."""
    return _DUPLICATE_SPACES.sub(" ", name).strip()


class NameNumerology:
    """A name together with the options used to score it.

    The vowel mask and digit counts are computed on first use and cached on
    the instance; every calculation reuses them.
    """

    def __init__(
        self,
        name: str,
        options: NameOptions,
        search_options: NameSearchOptions | None = None,
    ):
        self.name = name
        self.options = options
        self.search_options = search_options
        self._mask: LetterMask | None = None
        self._counts: DigitCounts | None = None

    @property
    def number_system(self) -> NumberSystem:
        return self.options.number_system

    @property
    def mask(self) -> LetterMask:
        if self._mask is None:
            self._mask = vowel_mask(self.name)
        return self._mask

    def _calculate(self, mask: Sequence[bool]) -> NumerologicalResult:
        return calculate_core_number(
            self.name,
            self.options.master_numbers,
            self.options.reduce_words,
            self.options.number_system,
            mask,
        )

    def full(self) -> NumerologicalResult:
        return self._calculate(full_mask(self.mask))

    def vowels(self) -> NumerologicalResult:
        return self._calculate(self.mask)

    def consonants(self) -> NumerologicalResult:
        return self._calculate(consonant_mask(self.mask))

    # Common names for the same calculations.
    def destiny(self) -> NumerologicalResult:
        return self.full()

    def expression(self) -> NumerologicalResult:
        return self.full()

    def souls_urge(self) -> NumerologicalResult:
        return self.vowels()

    def hearts_desire(self) -> NumerologicalResult:
        return self.vowels()

    def personality(self) -> NumerologicalResult:
        return self.consonants()

    def counts(self) -> DigitCounts:
        if self._counts is None:
            self._counts = count_numerological_numbers(self.name, self.options.number_system)
        return self._counts

    def hidden_passions(self) -> HiddenPassionResult:
        return hidden_passions(self.counts())

    def karmic_lessons(self) -> KarmicLessonResult:
        return karmic_lessons(self.counts())

    def search(self, service, options: NameSearchOptions):
        """Use this name as the search template of service (a NameSearchService)."""
        return service.search(self.name, self.options, options)

    def unknown_characters(self) -> list[str]:
        """Characters without a value, minus the ones that are normal in names."""
        return self.counts().unknown_characters.unacceptable().to_list()

    def to_result(self) -> NameResult:
        return NameResult(
            name=self.name,
            full=self.full().value,
            vowels=self.vowels().value,
            consonants=self.consonants().value,
            hidden_passions=list(self.hidden_passions().numbers),
            karmic_lessons=list(self.karmic_lessons().numbers),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NameNumerology):
            return NotImplemented
        return self.name == other.name and self.options == other.options

    def __hash__(self) -> int:
        return hash((self.name, self.options))

    def __repr__(self) -> str:
        return f"NameNumerology({self.name!r}, {self.options.number_system.name})"


def name(
    value: str,
    number_system: NumberSystem | str,
    master_numbers: Iterable[int],
    reduce_words: bool,
) -> NameNumerology:
    options = NameOptions(
        number_system=number_system,
        master_numbers=tuple(master_numbers),
        reduce_words=reduce_words,
    )
    return NameNumerology(normalize_name(value), options)


def names(
    values: Iterable[str],
    number_system: NumberSystem | str,
    master_numbers: Iterable[int],
    reduce_words: bool,
) -> list[NameNumerology]:
    options = NameOptions(
        number_system=number_system,
        master_numbers=tuple(master_numbers),
        reduce_words=reduce_words,
    )
    return [NameNumerology(normalize_name(v), options) for v in values]
