import random
from itertools import cycle

import pytest

from billing.bill_numbers import generate_bill_number, next_bill_number
from billing.validators import validate_bill_number


class FakeRandom:
    """Replays a fixed sequence of draws."""

    def __init__(self, values):
        self.values = cycle(values)
        self.calls = 0

    def randint(self, low, high):
        self.calls += 1
        return next(self.values)


class RecordingStore:
    """Answers lookups from a set of used numbers and counts them."""

    def __init__(self, used, max_lookups=None):
        self.used = set(used)
        self.lookups = 0
        self.max_lookups = max_lookups

    def get_by_number(self, number):
        self.lookups += 1
        if self.max_lookups is not None and self.lookups > self.max_lookups:
            raise RuntimeError("still searching")
        return object() if number in self.used else None


def test_generated_numbers_are_well_formed():
    rng = random.Random(7)
    for _ in range(500):
        number = generate_bill_number(rng)
        assert validate_bill_number(number) == (True, "")
        assert 1000 <= int(number[4:]) <= 9999


def test_range_edges():
    assert generate_bill_number(FakeRandom([1000])) == "INV-1000"
    assert generate_bill_number(FakeRandom([9999])) == "INV-9999"


def test_retries_until_unused(store, make_bill):
    store.create(make_bill("INV-1234"))
    store.create(make_bill("INV-2345"))
    rng = FakeRandom([1234, 2345, 1234, 3456])

    assert next_bill_number(store, rng) == "INV-3456"
    assert rng.calls == 4


def test_distinct_numbers_against_growing_store(store, make_bill):
    rng = random.Random(11)
    seen = set()
    for _ in range(50):
        number = next_bill_number(store, rng)
        assert number not in seen
        seen.add(number)
        store.create(make_bill(number))
    assert len(store) == 50


def test_empty_store_gives_free_numbers(store):
    numbers = [next_bill_number(store) for _ in range(20)]
    assert all(store.get_by_number(n) is None for n in numbers)


def test_full_number_space_never_returns():
    """
    With every number from INV-1000 to INV-9999 taken there is no free
    number, so the generator keeps drawing. The store stops it here.
    """
    full = RecordingStore(f"INV-{n}" for n in range(1000, 10000))
    full.max_lookups = 20000
    with pytest.raises(RuntimeError, match="still searching"):
        next_bill_number(full, random.Random(3))
    assert full.lookups == 20001


def test_one_free_number_is_found():
    used = {f"INV-{n}" for n in range(1000, 10000)} - {"INV-5000"}
    store = RecordingStore(used)
    assert next_bill_number(store, FakeRandom([1000, 9999, 5000])) == "INV-5000"
