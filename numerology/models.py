"""Schema of the precomputed name tables.

One table per name source (dictionary). Each row holds one name with its
unreduced full/vowel/consonant values for both number systems and how often
each digit occurs among its letters. Row ids follow popularity: a lower id is
a more common name.
"""
from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, SmallInteger, String, Table

from .names import NameNumerology
from .number_systems import CHALDEAN, PYTHAGOREAN, NumberSystem
from .schemas import NameOptions

NUMBER_SYSTEMS: tuple[NumberSystem, ...] = (PYTHAGOREAN, CHALDEAN)
VALUE_KINDS: tuple[str, ...] = ("full", "vowels", "consonants")

metadata = MetaData()


def value_column_name(number_system: NumberSystem, kind: str) -> str:
    """pythagorean_full, chaldean_vowels, ..."""
    return f"{number_system.name.lower()}_{kind}"


def count_column_name(number_system: NumberSystem, digit: int) -> str:
    """p1..p9 for Pythagorean, c1..c8 for Chaldean."""
    return f"{number_system.prefix}{digit}"


def name_table(table_name: str, table_metadata: MetaData | None = None) -> Table:
    table_metadata = metadata if table_metadata is None else table_metadata
    table_name = table_name.lower()
    if table_name in table_metadata.tables:
        return table_metadata.tables[table_name]

    columns = [
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(64), nullable=False),
        Column("gender", String(1), index=True),
    ]
    for system in NUMBER_SYSTEMS:
        for kind in VALUE_KINDS:
            columns.append(Column(value_column_name(system, kind), SmallInteger, nullable=False, index=True))
    for system in NUMBER_SYSTEMS:
        for digit in system.valid_numbers:
            columns.append(Column(count_column_name(system, digit), SmallInteger, nullable=False, default=0))
    return Table(table_name, table_metadata, *columns)


def precalculate(name: str, gender: str) -> dict | None:
    """Row values for one name, or None when it holds characters with no value.

    Values are stored unreduced, summed over the whole name, so that any
    reduction policy can be applied at search time.
    """
    row: dict = {"name": name, "gender": gender.strip().upper()[:1]}
    for system in NUMBER_SYSTEMS:
        numerology = NameNumerology(name, NameOptions(number_system=system, master_numbers=(), reduce_words=False))
        if numerology.unknown_characters():
            return None
        row[value_column_name(system, "full")] = numerology.full().unreduced
        row[value_column_name(system, "vowels")] = numerology.vowels().unreduced
        row[value_column_name(system, "consonants")] = numerology.consonants().unreduced
        counts = numerology.counts()
        for digit in system.valid_numbers:
            row[count_column_name(system, digit)] = counts[digit]
    return row
