"""Turn wanted/excluded reduced values into the unreduced values to look up.

The name tables only store unreduced sums. To find a missing name that makes
the whole name reduce to a wanted value, every unreduced value the missing
name could have is tried against the fixed value of the known part of the name.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from sqlalchemy import Table, func, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from .models import NUMBER_SYSTEMS, value_column_name
from .numerology_engine import reduce_steps

logger = logging.getLogger("numerology.lookup")


def split_targets(target_numbers: Iterable[int]) -> tuple[set[int], set[int]]:
    """Positive numbers are wanted, negative numbers are excluded (as their absolute value)."""
    wanted: set[int] = set()
    excluded: set[int] = set()
    for n in target_numbers:
        if n >= 0:
            wanted.add(n)
        else:
            excluded.add(-n)
    return wanted, excluded


def satisfies(steps: Sequence[int], wanted: set[int], excluded: set[int]) -> bool:
    """The first reduction step found in either set decides.

    Without wanted numbers anything that never hits an excluded number passes.
    """
    for value in steps:
        if value in excluded:
            return False
        if value in wanted:
            return True
    return not wanted


def generate_lookup_numbers(
    min_search_number: int,
    max_search_number: int,
    target_numbers: Sequence[int],
    master_numbers: Sequence[int],
    reduce_words: bool,
    standalone: bool = False,
) -> list[int]:
    """Unreduced values i in [1, max - min] that give an acceptable name.

    min_search_number is the unreduced value of the known part of the name.
    With reduce_words the missing word reduces on its own before it is added.
    A standalone missing word is the whole name, so its own reduction is the
    name's reduction.
    """
    wanted, excluded = split_targets(target_numbers)
    nums = []
    for i in range(1, max_search_number - min_search_number + 1):
        fragment = reduce_steps(i, master_numbers)
        if standalone:
            steps = fragment
        else:
            contribution = fragment[-1] if reduce_words else fragment[0]
            steps = reduce_steps(min_search_number + contribution, master_numbers)
        if satisfies(steps, wanted, excluded):
            nums.append(i)
    return nums


class LargestValueCache:
    """Largest unreduced value stored in each table.

    Bounds the candidate range of generate_lookup_numbers. A stale value only
    widens or narrows that range slightly.
    """

    def __init__(self, fallback: int):
        self.fallback = fallback
        self._values: dict[str, int] = {}

    def get(self, conn: Connection, table: Table) -> int:
        if table.name in self._values:
            return self._values[table.name]
        try:
            row = conn.execute(
                select(*(func.max(table.c[value_column_name(ns, "full")]) for ns in NUMBER_SYSTEMS))
            ).one()
            largest = max((v for v in row if v is not None), default=None)
        except SQLAlchemyError as exc:
            logger.warning("Largest value lookup failed | table=%s | fallback=%s | error=%s", table.name, self.fallback, exc)
            largest = None
        if largest is None:
            largest = self.fallback
        self._values[table.name] = largest
        return largest

    def clear(self) -> None:
        self._values.clear()
