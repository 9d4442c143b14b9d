"""Invariant checks over random action sequences."""

import random
from collections import Counter

import pytest

from vfit.models import Category


def id_multiset(engine):
    return Counter([g.id for g in engine.staging] + [g.id for g in engine.worn.values()])


def assert_invariants(engine):
    worn = engine.worn
    categories = [g.category for g in worn.values()]
    assert len(categories) == len(set(categories))
    assert all(g.category == c for c, g in worn.items())

    staged = [g.id for g in engine.staging]
    assert len(staged) == len(set(staged))
    assert not set(staged) & {g.id for g in worn.values()}

    if engine.selected is not None:
        assert engine.selected in {g.id for g in worn.values()}


@pytest.mark.parametrize("seed", range(25))
def test_random_sequences_keep_invariants(engine, garments, seed):
    """Category exclusivity, no duplication and a valid selection at every step."""
    rng = random.Random(seed)
    ids = list(garments) + ["ghost"]

    for _ in range(60):
        action = rng.choice(["enqueue", "dequeue", "wear", "unwear", "clear", "select"])
        item_id = rng.choice(ids)
        if action == "clear":
            engine.clear_all()
        else:
            getattr(engine, action)(item_id)
        assert_invariants(engine)


@pytest.mark.parametrize("seed", range(25))
def test_moves_conserve_garments(engine, garments, seed):
    """wear/unwear/clear_all on staged garments move items and never create or drop them."""
    rng = random.Random(seed)
    for garment_id in garments:
        engine.enqueue(garment_id)
    expected = id_multiset(engine)

    for _ in range(60):
        action = rng.choice(["wear", "unwear", "clear"])
        if action == "clear":
            engine.clear_all()
        else:
            getattr(engine, action)(rng.choice(list(garments)))
        assert id_multiset(engine) == expected


def test_failed_operations_leave_state_unchanged(engine):
    engine.enqueue("B1")
    engine.wear("T1")
    before = engine.state()

    engine.wear("ghost")
    engine.unwear("B1")
    engine.unwear("ghost")
    engine.dequeue("T1")
    engine.select("B1")

    assert engine.state() == before


def test_every_category_can_be_worn_at_once(engine, garments):
    for garment in garments.values():
        engine.wear(garment.id)

    assert list(engine.worn) == list(Category)
