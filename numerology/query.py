"""SQL predicates that select names by numerological constraints.

Every predicate combines the known part of a name with the row of the name
table that would fill the placeholder, since constraints apply to the whole
name.
"""
from __future__ import annotations

import logging
import random
from typing import Sequence

from sqlalchemy import BigInteger, Table, cast, false, func, or_
from sqlalchemy.sql import ColumnElement, Select

from .lookup import generate_lookup_numbers, split_targets
from .models import count_column_name, value_column_name
from .names import NameNumerology
from .number_systems import NumberSystem
from .numerology_engine import DigitCounts

logger = logging.getLogger("numerology.query")

COMMON_SORT = "common"
UNCOMMON_SORT = "uncommon"
RANDOM_SORT = "random"

# Modulus of the per-row pseudorandom ordering (largest 32-bit prime).
_RANDOM_MODULUS = 2_147_483_647


def _total(column: ColumnElement, known: int) -> ColumnElement:
    return column if known == 0 else column + known


def lookup_predicate(column: ColumnElement, lookup_numbers: Sequence[int]) -> ColumnElement:
    # An empty lookup means nothing can match; it must not drop the constraint.
    if not lookup_numbers:
        return false()
    return column.in_(lookup_numbers)


def value_predicates(
    table: Table,
    known: NameNumerology,
    full: Sequence[int],
    vowels: Sequence[int],
    consonants: Sequence[int],
    largest_value: int,
    standalone: bool = False,
) -> list[ColumnElement]:
    """IN predicates on the unreduced full/vowel/consonant columns of the active number system."""
    options = known.options
    predicates = []
    for kind, targets, result in (
        ("full", full, known.full),
        ("vowels", vowels, known.vowels),
        ("consonants", consonants, known.consonants),
    ):
        if not targets:
            continue
        min_search_number = result().unreduced
        lookup_numbers = generate_lookup_numbers(
            min_search_number,
            min_search_number + largest_value,
            targets,
            options.master_numbers,
            options.reduce_words,
            standalone=standalone,
        )
        logger.debug(
            "Value lookup | kind=%s | targets=%s | min=%s | matches=%s",
            kind,
            list(targets),
            min_search_number,
            len(lookup_numbers),
        )
        column = table.c[value_column_name(options.number_system, kind)]
        predicates.append(lookup_predicate(column, lookup_numbers))
    return predicates


def hidden_passion_predicates(
    table: Table,
    number_system: NumberSystem,
    counts: DigitCounts,
    targets: Sequence[int],
) -> list[ColumnElement]:
    """Predicates making the wanted digits the most frequent ones of the whole name.

    The largest wanted digit is the "prime": every other digit must not exceed
    its total, wanted digits must tie with it and excluded digits must stay
    strictly below it. When only exclusions are given, each excluded digit must
    be beaten by at least one digit that is not excluded.
    """
    if not targets:
        return []
    valid = set(number_system.valid_numbers)

    def total(digit: int) -> ColumnElement:
        return _total(table.c[count_column_name(number_system, digit)], counts[digit])

    wanted, excluded = split_targets(targets)
    # A digit outside the number system never occurs, so it can never be a hidden passion.
    if wanted - valid:
        return [false()]
    # Asked for and excluded at the same time.
    if wanted & excluded:
        return [false()]
    excluded &= valid

    if not wanted:
        predicates = []
        for digit in sorted(excluded):
            beaten_by = [total(other) > total(digit) for other in sorted(valid - excluded)]
            predicates.append(or_(*beaten_by) if beaten_by else false())
        return predicates

    prime = max(wanted)
    predicates = [total(prime) >= counts.max_count]
    for digit in sorted(valid - {prime}):
        if digit in wanted:
            predicates.append(total(digit) == total(prime))
        elif digit in excluded:
            predicates.append(total(digit) < total(prime))
        else:
            predicates.append(total(digit) <= total(prime))
    return predicates


def karmic_lesson_predicates(
    table: Table,
    number_system: NumberSystem,
    counts: DigitCounts,
    targets: Sequence[int],
) -> list[ColumnElement]:
    """A wanted digit may not occur anywhere in the name; an excluded digit must occur at least once."""
    valid = set(number_system.valid_numbers)
    predicates = []
    for target in targets:
        digit = abs(target)
        if digit not in valid:
            # Digits outside the number system are never karmic lessons.
            if target >= 0:
                predicates.append(false())
            continue
        column = table.c[count_column_name(number_system, digit)]
        if target >= 0:
            # A negative bound is impossible and excludes every row.
            predicates.append(column <= -counts[digit])
        else:
            predicates.append(_total(column, counts[digit]) > 0)
    return predicates


def gender_predicates(table: Table, gender: str | None) -> list[ColumnElement]:
    code = (gender or "").strip().upper()[:1]
    if code in ("M", "F"):
        return [table.c.gender == code]
    return []


def pattern_predicates(table: Table, word: str) -> list[ColumnElement]:
    """Case-insensitive LIKE for a placeholder with letters around it (Jo?n -> jo%n)."""
    if len(word) <= 1:
        return []
    return [func.lower(table.c.name).like(word.lower().replace("?", "%"))]


def random_order_expression(min_id: ColumnElement, seed: int) -> ColumnElement:
    """Per-row pseudorandom sort key; the same seed always gives the same order."""
    rng = random.Random(seed)
    multiplier = rng.randrange(1, _RANDOM_MODULUS)
    increment = rng.randrange(_RANDOM_MODULUS)
    return (cast(min_id, BigInteger) * multiplier + increment) % _RANDOM_MODULUS


def apply_sort(
    stmt: Select,
    min_id: ColumnElement,
    sort: str,
    offset: int,
    seed: int,
    uncommon_threshold: int,
) -> Select:
    """Order grouped rows and skip to offset.

    common/uncommon page by row id (uncommon never starts before the
    threshold); random pages with a plain OFFSET because ids are shuffled.
    """
    sort = (sort or COMMON_SORT).lower()
    if sort == UNCOMMON_SORT:
        return stmt.having(min_id >= max(uncommon_threshold, offset)).order_by(min_id.asc())
    if sort == RANDOM_SORT:
        return stmt.order_by(random_order_expression(min_id, seed), min_id.asc()).offset(offset)
    return stmt.having(min_id >= offset).order_by(min_id.asc())
