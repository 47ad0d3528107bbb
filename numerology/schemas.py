from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .config import settings
from .errors import SearchValidationError
from .number_systems import PYTHAGOREAN, NumberSystem, get_number_system

SortMode = Literal["common", "uncommon", "random"]
GenderCode = Literal["M", "F", "B"]

_SORT_MODES = ("common", "uncommon", "random")


class NameOptions(BaseModel):
    """Options required to get a numerological value from a name."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    number_system: NumberSystem = PYTHAGOREAN
    # Multi-digit values that are never reduced further, e.g. 11, 22, 33.
    master_numbers: tuple[int, ...] = Field(default_factory=settings.master_numbers)
    # Reduce every word on its own before combining them.
    reduce_words: bool = True

    @field_validator("number_system", mode="before")
    @classmethod
    def resolve_number_system(cls, v):
        if isinstance(v, str):
            return get_number_system(v)
        return v

    @field_validator("master_numbers", mode="before")
    @classmethod
    def unique_master_numbers(cls, v):
        if v is None:
            return ()
        return tuple(sorted(set(int(n) for n in v)))

    @field_serializer("number_system")
    def serialize_number_system(self, v: NumberSystem) -> str:
        return v.to_json()


class NameSearchOptions(BaseModel):
    """Search options specific to looking up names in a precomputed table.

    Full, vowels and consonants hold the reduced values wanted for all the
    letters, just the vowels, and just the consonants of the name. Hidden
    passions and karmic lessons hold digits. In every list a positive number
    is required and a negative number is excluded.
    """

    count: int = Field(default=0, ge=0)
    offset: int = Field(default=0, ge=0)
    # Keeps "random" ordering stable while paging.
    seed: int = 0
    dictionary: str | None = None
    gender: GenderCode = "B"
    sort: SortMode = "common"

    full: list[int] = Field(default_factory=list)
    vowels: list[int] = Field(default_factory=list)
    consonants: list[int] = Field(default_factory=list)
    hidden_passions: list[int] = Field(default_factory=list)
    karmic_lessons: list[int] = Field(default_factory=list)

    @field_validator("gender", mode="before")
    @classmethod
    def gender_code(cls, v):
        if v is None or v == "":
            return "B"
        code = str(v).strip()[:1].upper()
        if code not in ("M", "F", "B"):
            raise ValueError(f"unknown gender code: '{v}'")
        return code

    @field_validator("sort", mode="before")
    @classmethod
    def sort_mode(cls, v):
        # Anything unrecognised falls back to the popularity order.
        value = str(v or "").strip().lower()
        return value if value in _SORT_MODES else "common"

    def page_size(self) -> int:
        return self.count or settings.default_search_count


class NameResult(BaseModel):
    name: str
    full: int
    vowels: int
    consonants: int
    hidden_passions: list[int]
    karmic_lessons: list[int]


class NameSearchResponse(BaseModel):
    results: list[NameResult]
    # 0 means there are no more results.
    offset: int = 0


class DateSearchOptions(BaseModel):
    count: int = Field(default=25, ge=1)
    # Number of days to skip from the start date.
    offset: int = Field(default=0, ge=0)
    match: list[int] = Field(default_factory=list)
    months_forward: int = Field(default=12, ge=0)
    # 0=Sun 1=Mon 2=Tue 3=Wed 4=Thu 5=Fri 6=Sat
    dow: list[int] = Field(default_factory=list)
    life_path: bool = False

    @field_validator("dow")
    @classmethod
    def weekdays_in_range(cls, v: list[int]) -> list[int]:
        for day in v:
            if day < 0 or day > 6:
                raise ValueError("dow values must be between 0 (Sunday) and 6 (Saturday)")
        return v


def split_template(template: str) -> tuple[list[str], int]:
    """Split a search template into words and return the index of the placeholder word."""
    placeholders = template.count("?")
    if placeholders == 0:
        raise SearchValidationError("missing '?' in name")
    if placeholders > 1:
        raise SearchValidationError("too many '?' (only able to search for one '?' at a time)")
    words = template.split(" ")
    index = next(i for i, word in enumerate(words) if "?" in word)
    return words, index
