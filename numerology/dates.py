"""Numerology of dates: event and life path numbers, and a forward date search."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Sequence

from .numerology_engine import (
    DEFAULT_MASTER_NUMBERS,
    Breakdown,
    LetterValue,
    NumerologicalResult,
    reduce_steps,
    split_number,
)
from .schemas import DateSearchOptions


def _letter_values_from_number(n: int, master_numbers: Sequence[int]) -> tuple[LetterValue, ...]:
    # A master number is shown whole instead of as its digits.
    if n in master_numbers:
        return (LetterValue(str(n), n),)
    return tuple(LetterValue(str(d), d) for d in split_number(n))


def calculate_date(day: date, master_numbers: Sequence[int], life_path: bool) -> NumerologicalResult:
    """Reduce year, month and day separately, then reduce their sum.

    Only a life path keeps master numbers in the final step; an event date is
    always reduced to a single digit.
    """
    breakdown = []
    total = 0
    for component in (day.year, day.month, day.day):
        steps = reduce_steps(component, master_numbers)
        calc = Breakdown(
            letter_values=_letter_values_from_number(component, master_numbers),
            reduce_steps=tuple(steps),
        )
        breakdown.append(calc)
        total += calc.value
    final_masters = master_numbers if life_path else ()
    return NumerologicalResult(reduce_steps=tuple(reduce_steps(total, final_masters)), breakdown=tuple(breakdown))


def add_months(start: date, months: int) -> date:
    """Shift start by whole months; overflowing days roll into the next month (Jan 31 + 1 -> Mar 3)."""
    years, month_index = divmod(start.month - 1 + months, 12)
    first = date(start.year + years, month_index + 1, 1)
    return first + timedelta(days=start.day - 1)


def sunday_weekday(day: date) -> int:
    """Weekday number with Sunday as 0."""
    return (day.weekday() + 1) % 7


class DateNumerology:
    def __init__(
        self,
        day: date,
        master_numbers: Iterable[int] = DEFAULT_MASTER_NUMBERS,
        search_options: DateSearchOptions | None = None,
    ):
        self.date = day
        self.master_numbers = tuple(master_numbers)
        self.search_options = search_options

    def event(self) -> NumerologicalResult:
        return calculate_date(self.date, self.master_numbers, life_path=False)

    def life_path(self) -> NumerologicalResult:
        return calculate_date(self.date, self.master_numbers, life_path=True)

    def search(self, options: DateSearchOptions) -> tuple[list[DateNumerology], int]:
        return date_search(self.date, self.master_numbers, options)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateNumerology):
            return NotImplemented
        return self.date == other.date and self.master_numbers == other.master_numbers

    def __hash__(self) -> int:
        return hash((self.date, self.master_numbers))

    def __repr__(self) -> str:
        return f"DateNumerology({self.date.isoformat()})"


def dates(days: Iterable[date], master_numbers: Iterable[int]) -> list[DateNumerology]:
    masters = tuple(master_numbers)
    return [DateNumerology(d, masters) for d in days]


def date_search(
    start: date,
    master_numbers: Sequence[int],
    options: DateSearchOptions,
) -> tuple[list[DateNumerology], int]:
    """Walk forward from start looking for dates whose value is in options.match.

    Returns the matches and the offset in days to continue from (0 when the
    window is exhausted).
    """
    end = add_months(start, options.months_forward)
    results: list[DateNumerology] = []
    offset = 0
    current = start + timedelta(days=options.offset)
    while current < end:
        if options.dow and sunday_weekday(current) not in options.dow:
            current += timedelta(days=1)
            continue
        calc = calculate_date(current, master_numbers, options.life_path)
        if not options.match or calc.value in options.match:
            if len(results) == options.count:
                offset = (current - start).days
                break
            results.append(DateNumerology(current, master_numbers, options))
        current += timedelta(days=1)
    return results, offset
