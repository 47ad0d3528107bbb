import os

import pytest
from sqlalchemy import MetaData

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from numerology.database import create_db_engine  # noqa: E402
from numerology.models import name_table, precalculate  # noqa: E402
from numerology.search import NameSearchService  # noqa: E402

# Ordered by popularity: the first row gets id 1.
CORPUS = [
    ("James", "M"), ("Mary", "F"), ("John", "M"), ("Patricia", "F"), ("Robert", "M"),
    ("Jennifer", "F"), ("Michael", "M"), ("Linda", "F"), ("William", "M"), ("Elizabeth", "F"),
    ("David", "M"), ("Barbara", "F"), ("Richard", "M"), ("Susan", "F"), ("Joseph", "M"),
    ("Jessica", "F"), ("Thomas", "M"), ("Sarah", "F"), ("Charles", "M"), ("Karen", "F"),
    ("Christopher", "M"), ("Nancy", "F"), ("Daniel", "M"), ("Lisa", "F"), ("Matthew", "M"),
    ("Betty", "F"), ("Anthony", "M"), ("Margaret", "F"), ("Mark", "M"), ("Sandra", "F"),
    ("Donald", "M"), ("Ashley", "F"), ("Steven", "M"), ("Kimberly", "F"), ("Paul", "M"),
    ("Emily", "F"), ("Andrew", "M"), ("Donna", "F"), ("Joshua", "M"), ("Michelle", "F"),
    ("Kevin", "M"), ("Joan", "F"), ("Brian", "M"), ("Jean", "F"), ("George", "M"),
    ("Joyce", "F"), ("Timothy", "M"), ("Yvonne", "F"), ("Jordan", "M"), ("Jordan", "F"),
    ("Jason", "M"), ("Lynn", "F"), ("Ryan", "M"), ("Taylor", "F"), ("Jacob", "M"),
    ("John", "F"), ("Zo$e", "F"), ("Nicholas", "M"), ("D'Angelo", "M"), ("Jonathan", "M"),
    ("Taylor", "M"), ("Justin", "M"), ("Yolanda", "F"), ("Scott", "M"), ("Benjamin", "M"),
]


def corpus_rows() -> list[dict]:
    rows = []
    for name, gender in CORPUS:
        row = precalculate(name, gender)
        if row is not None:
            rows.append(row)
    return rows


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite+pysqlite:///:memory:")
    yield engine
    engine.dispose()


@pytest.fixture()
def name_rows() -> list[dict]:
    """Stored rows with the ids the database assigns to them."""
    return [{**row, "id": i} for i, row in enumerate(corpus_rows(), start=1)]


@pytest.fixture()
def populated_engine(engine):
    metadata = MetaData()
    table = name_table("usa_census", metadata)
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(table.insert(), corpus_rows())
    return engine


@pytest.fixture()
def service(populated_engine):
    return NameSearchService(populated_engine, default_table="usa_census", uncommon_threshold=20)
