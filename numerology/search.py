"""Search a precomputed name table for names with given numerological properties."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import MetaData, Table, func, inspect, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import OperationalError

from .config import settings
from .database import create_db_engine
from .errors import DatabaseConnectionError, EmptyTableError
from .lookup import LargestValueCache
from .models import name_table
from .names import NameNumerology, normalize_name
from .query import (
    RANDOM_SORT,
    apply_sort,
    gender_predicates,
    hidden_passion_predicates,
    karmic_lesson_predicates,
    pattern_predicates,
    value_predicates,
)
from .schemas import NameOptions, NameSearchOptions, NameSearchResponse, split_template

logger = logging.getLogger("numerology.search")


@dataclass
class NameSearchResult:
    names: list[NameNumerology] = field(default_factory=list)
    # Where the next page starts; 0 when there is nothing more.
    offset: int = 0

    def to_response(self) -> NameSearchResponse:
        return NameSearchResponse(results=[n.to_result() for n in self.names], offset=self.offset)


class NameSearchService:
    """Searches one database of name tables.

    Owns the engine and the per-table cache of the largest stored value. The
    tables are only read, so one service can be shared by concurrent callers.
    """

    def __init__(
        self,
        engine: Engine,
        default_table: str | None = None,
        uncommon_threshold: int | None = None,
        fallback_max_search_number: int | None = None,
    ):
        self.engine = engine
        self.default_table = (default_table or settings.name_table).lower()
        self.uncommon_threshold = (
            settings.uncommon_sort_threshold if uncommon_threshold is None else uncommon_threshold
        )
        self.largest_values = LargestValueCache(
            settings.fallback_max_search_number if fallback_max_search_number is None else fallback_max_search_number
        )
        self._metadata = MetaData()

    @classmethod
    def from_url(cls, database_url: str | None = None, default_table: str | None = None) -> NameSearchService:
        return cls(create_db_engine(database_url or settings.database_url), default_table=default_table)

    def table(self, table_name: str | None = None) -> Table:
        return name_table(table_name or self.default_table, self._metadata)

    def _connect(self) -> Connection:
        try:
            return self.engine.connect()
        except OperationalError as exc:
            raise DatabaseConnectionError(f"unable to connect to database: {exc}") from exc

    def _ensure_populated(self, conn: Connection, table: Table) -> None:
        if not inspect(conn).has_table(table.name):
            raise EmptyTableError(table.name)
        count = conn.execute(select(func.count()).select_from(table)).scalar_one()
        if count == 0:
            raise EmptyTableError(table.name)

    def search(self, template: str, options: NameOptions, search: NameSearchOptions) -> NameSearchResult:
        """Fill the single '?' of template with names from the table.

        "John ? Doe" searches for middle names, "Jo?n" for names that start
        with "jo" and end with "n".
        """
        words, index = split_template(normalize_name(template))
        placeholder = words[index]
        words[index] = "?"
        # The whole placeholder word is replaced so "Da?" never ends up as "DaDavid".
        reconstructed = " ".join(words)
        known = NameNumerology(reconstructed, options)
        standalone = len(words) == 1
        count = search.page_size()

        logger.info(
            "Name search | table=%s | template=%s | system=%s | sort=%s | count=%s | offset=%s",
            search.dictionary or self.default_table,
            template,
            options.number_system.name,
            search.sort,
            count,
            search.offset,
        )

        with self._connect() as conn:
            table = self.table(search.dictionary)
            self._ensure_populated(conn, table)
            largest = self.largest_values.get(conn, table)

            min_id = func.min(table.c.id)
            predicates = [
                *pattern_predicates(table, placeholder),
                *gender_predicates(table, search.gender),
                *hidden_passion_predicates(table, options.number_system, known.counts(), search.hidden_passions),
                *karmic_lesson_predicates(table, options.number_system, known.counts(), search.karmic_lessons),
                *value_predicates(
                    table,
                    known,
                    search.full,
                    search.vowels,
                    search.consonants,
                    largest,
                    standalone=standalone,
                ),
            ]
            # One extra row tells whether another page exists.
            stmt = select(min_id.label("id"), table.c.name).group_by(table.c.name).limit(count + 1)
            if predicates:
                stmt = stmt.where(*predicates)
            stmt = apply_sort(stmt, min_id, search.sort, search.offset, search.seed, self.uncommon_threshold)
            rows = conn.execute(stmt).all()

        results = [
            NameNumerology(reconstructed.replace("?", row.name, 1), options, search)
            for row in rows[:count]
        ]
        offset = 0
        if len(rows) > count:
            # Row ids mean nothing under random order; page by position instead.
            offset = search.offset + count if search.sort == RANDOM_SORT else rows[count].id

        logger.info("Name search done | results=%s | next_offset=%s", len(results), offset)
        return NameSearchResult(names=results, offset=offset)
