import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite:///./names.db"
    name_table: str = "usa_census"

    # Comma separated, e.g. "11,22,33,44"
    master_numbers_raw: str = "11,22,33"

    default_search_count: int = 25
    # Rows below this id are the most popular names; "uncommon" sort skips them.
    uncommon_sort_threshold: int = 5000
    # Used when the largest unreduced value cannot be read from the table.
    fallback_max_search_number: int = 100

    log_level: str = "INFO"
    log_format: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    def master_numbers(self) -> tuple[int, ...]:
        raw = self.master_numbers_raw.strip()
        if not raw:
            return ()
        return tuple(int(item.strip()) for item in raw.split(",") if item.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
        force=True,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


settings = get_settings()
