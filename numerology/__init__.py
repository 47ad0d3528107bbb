"""Numerology of names and dates, and search of precomputed name tables.

Full (expression/destiny), vowel (soul's urge/heart's desire) and consonant
(personality) numbers, hidden passions, karmic lessons, event and life path
numbers, with Pythagorean and Chaldean number systems, custom master numbers
and per-word or whole-name reduction.

Name search looks up names that satisfy numerological constraints in a table
of precomputed, unreduced values instead of scoring every candidate.
"""
from .dates import DateNumerology, date_search, dates
from .errors import DatabaseConnectionError, EmptyTableError, NumerologyError, SearchValidationError
from .names import NameNumerology, name, names
from .number_systems import CHALDEAN, PYTHAGOREAN, NumberSystem, get_number_system
from .numerology_engine import reduce_number, reduce_steps
from .schemas import DateSearchOptions, NameOptions, NameSearchOptions
from .search import NameSearchResult, NameSearchService

__all__ = [
    "CHALDEAN",
    "PYTHAGOREAN",
    "DatabaseConnectionError",
    "DateNumerology",
    "DateSearchOptions",
    "EmptyTableError",
    "NameNumerology",
    "NameOptions",
    "NameSearchOptions",
    "NameSearchResult",
    "NameSearchService",
    "NumberSystem",
    "NumerologyError",
    "SearchValidationError",
    "date_search",
    "dates",
    "get_number_system",
    "name",
    "names",
    "reduce_number",
    "reduce_steps",
]
