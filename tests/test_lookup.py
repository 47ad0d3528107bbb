import logging

from sqlalchemy import MetaData

from numerology.lookup import LargestValueCache, generate_lookup_numbers, satisfies, split_targets
from numerology.models import name_table, precalculate
from numerology.numerology_engine import reduce_steps

MASTERS = (11, 22, 33)
KARMIC_DEBT = [-13, -14, -16, -19]


def test_split_targets():
    assert split_targets([3, -4, 11, -13]) == ({3, 11}, {4, 13})


def test_first_hit_decides():
    assert satisfies([13, 4], {4}, {13}) is False
    assert satisfies([31, 4], {4}, {13}) is True
    assert satisfies([40, 4], {40}, {4}) is True


def test_no_hit():
    assert satisfies([27, 9], {4}, set()) is False
    assert satisfies([27, 9], set(), {4}) is True


def test_lookup_summing_letters():
    # Known part adds 5: 5 + 6 = 11 and 5 + 24 = 29 -> 11.
    assert generate_lookup_numbers(5, 30, [11], MASTERS, False) == [6, 24]


def test_lookup_reducing_words():
    # The missing word must reduce to 6 on its own.
    assert generate_lookup_numbers(5, 30, [11], MASTERS, True) == [6, 15, 24]


def test_lookup_standalone_word():
    assert generate_lookup_numbers(0, 30, [11], MASTERS, True, standalone=True) == [11, 29]


def test_lookup_range_starts_at_one():
    numbers = generate_lookup_numbers(0, 9, [], MASTERS, False)
    assert numbers == list(range(1, 10))


def test_lookup_empty_range():
    assert generate_lookup_numbers(50, 40, [1], MASTERS, False) == []


def test_karmic_debt_exclusion():
    numbers = generate_lookup_numbers(0, 100, KARMIC_DEBT, MASTERS, False)
    for i in numbers:
        assert not set(reduce_steps(i, MASTERS)) & {13, 14, 16, 19}
    assert {13, 14, 16, 19, 49, 68} & set(numbers) == set()
    assert 40 in numbers


def test_largest_value_cache(populated_engine, name_rows):
    cache = LargestValueCache(fallback=100)
    table = name_table("usa_census", MetaData())
    expected = max(max(r["pythagorean_full"], r["chaldean_full"]) for r in name_rows)
    with populated_engine.connect() as conn:
        assert cache.get(conn, table) == expected


def test_largest_value_refreshes_after_clear(populated_engine):
    cache = LargestValueCache(fallback=100)
    table = name_table("usa_census", MetaData())
    with populated_engine.connect() as conn:
        stale = cache.get(conn, table)
    with populated_engine.begin() as conn:
        conn.execute(table.insert(), [{**precalculate("Al", "M"), "pythagorean_full": stale + 50}])

    with populated_engine.connect() as conn:
        assert cache.get(conn, table) == stale
        cache.clear()
        assert cache.get(conn, table) == stale + 50


def test_largest_value_falls_back_on_missing_table(engine, caplog):
    cache = LargestValueCache(fallback=77)
    table = name_table("missing", MetaData())
    with caplog.at_level(logging.WARNING, logger="numerology.lookup"):
        with engine.connect() as conn:
            assert cache.get(conn, table) == 77
    assert "Largest value lookup failed" in caplog.text


def test_largest_value_falls_back_on_empty_table(engine):
    metadata = MetaData()
    table = name_table("empty", metadata)
    metadata.create_all(engine)
    with engine.connect() as conn:
        assert LargestValueCache(fallback=42).get(conn, table) == 42
