import random
from collections import Counter

import pytest

from practest.exceptions import InvalidSampleCount
from practest.quiz import (
    BalancedSelection,
    RandomSelection,
    SelectionFactory,
    shuffle,
)

from conftest import make_bank, make_question


def ids(questions):
    return [id(q) for q in questions]


@pytest.mark.parametrize("strategy_cls", [RandomSelection, BalancedSelection])
@pytest.mark.parametrize("count", [1, 4, 7, 18])
def test_selection_size_and_distinct(strategy_cls, count, uneven_bank, rng):
    selected = strategy_cls(rng).select(uneven_bank.questions, count)

    assert len(selected) == count
    assert len(set(ids(selected))) == count
    bank_ids = set(ids(uneven_bank.questions))
    assert set(ids(selected)) <= bank_ids


@pytest.mark.parametrize("strategy_cls", [RandomSelection, BalancedSelection])
def test_count_larger_than_bank_is_clamped(strategy_cls, small_bank, rng):
    selected = strategy_cls(rng).select(small_bank.questions, 50)
    assert len(selected) == len(small_bank)
    assert set(ids(selected)) == set(ids(small_bank.questions))


@pytest.mark.parametrize("strategy_cls", [RandomSelection, BalancedSelection])
@pytest.mark.parametrize("count", [0, -3])
def test_non_positive_count_is_rejected(strategy_cls, count, small_bank):
    with pytest.raises(InvalidSampleCount):
        strategy_cls().select(small_bank.questions, count)


def test_balanced_empty_bank_returns_empty():
    assert BalancedSelection().select([], 5) == []


def test_balanced_three_topics_of_two(small_bank, rng):
    selected = BalancedSelection(rng).select(small_bank.questions, 4)

    assert len(selected) == 4
    assert len(set(ids(selected))) == 4
    topics = Counter(q.topic for q in selected)
    assert set(topics) == {"rights", "history", "law"}
    assert all(n >= 1 for n in topics.values())


def test_balanced_meets_per_topic_floor(uneven_bank):
    for seed in range(50):
        selected = BalancedSelection(random.Random(seed)).select(uneven_bank.questions, 12)
        topics = Counter(q.topic for q in selected)
        # per_topic = 12 // 3 = 4; symbols only has 2
        assert topics["history"] >= 4
        assert topics["law"] >= 4
        assert topics["symbols"] == 2


def test_balanced_keeps_identical_questions_apart():
    twins = [make_question("law", 0), make_question("law", 0)]
    assert twins[0] == twins[1]
    selected = BalancedSelection().select(twins, 2)
    assert len(selected) == 2
    assert set(ids(selected)) == set(ids(twins))


def test_balanced_order_not_grouped_by_topic():
    bank = make_bank(["a", "b", "c", "d"], 5)
    rng = random.Random(7)
    first_topics = Counter(
        BalancedSelection(rng).select(bank.questions, 8)[0].topic for _ in range(400)
    )
    # With the final shuffle every topic shows up first.
    assert set(first_topics) == {"a", "b", "c", "d"}


def test_random_selection_is_uniform():
    bank = make_bank(["a", "b"], 5)
    rng = random.Random(2024)
    trials, count = 6000, 3
    counts = Counter()
    for _ in range(trials):
        for q in RandomSelection(rng).select(bank.questions, count):
            counts[id(q)] += 1

    expected = trials * count / len(bank)
    chi_square = sum((counts[id(q)] - expected) ** 2 / expected for q in bank)
    # 9 degrees of freedom; 33.7 is the p=0.0001 critical value.
    assert chi_square < 33.7


def test_shuffle_returns_copy():
    bank = make_bank(["a"], 6)
    original = list(bank.questions)
    shuffled = shuffle(original, random.Random(3))
    assert original == list(bank.questions)
    assert sorted(ids(shuffled)) == sorted(ids(original))


def test_factory_picks_strategy():
    assert isinstance(SelectionFactory.create(True), BalancedSelection)
    assert isinstance(SelectionFactory.create(False), RandomSelection)
