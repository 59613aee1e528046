import json
import random

import pytest

from humanbench.services.benchmarks import Category, MemoryBackend, PersistenceUnavailable, ScoreStore


class BrokenBackend:
    def get(self, key):
        raise PersistenceUnavailable('read failed')

    def set(self, key, value):
        raise PersistenceUnavailable('write failed')

    def delete(self, key):
        raise PersistenceUnavailable('delete failed')


@pytest.mark.parametrize('category, pick', [
    (Category.REACTION, min),
    (Category.CHIMP, max),
    (Category.TYPING, max),
])
def test_best_follows_category_rule(store, category, pick):
    rnd = random.Random(7)
    values = [rnd.randint(0, 500) for _ in range(25)]
    for v in values:
        store.record_score(category, v)
    assert store.get_best(category) == pick(values)


def test_categories_are_independent(store):
    store.record_score('reaction', 300)
    store.record_score('chimp', 4)
    assert store.get_best('reaction') == 300
    assert store.get_best('chimp') == 4
    assert store.get_best('typing') is None


def test_reaction_never_regresses(store):
    store.record_score(Category.REACTION, 250)
    store.record_score(Category.REACTION, 400)
    assert store.get_best(Category.REACTION) == 250
    store.record_score(Category.REACTION, 180)
    assert store.get_best(Category.REACTION) == 180


def test_zero_is_a_real_best(store):
    # failing the first chimp level stores 0; a later 0 is not an improvement
    store.record_score(Category.CHIMP, 0)
    assert store.get_best(Category.CHIMP) == 0
    store.record_score(Category.CHIMP, 2)
    assert store.get_best(Category.CHIMP) == 2


def test_persisted_format_is_single_json_object():
    backend = MemoryBackend()
    store = ScoreStore(backend, key='scores')
    store.record_score(Category.TYPING, 55)
    store.record_score(Category.REACTION, 210)
    assert json.loads(backend.get('scores')) == {'typing': 55, 'reaction': 210}


def test_clear_all_is_idempotent(store):
    store.record_score(Category.REACTION, 200)
    store.record_score(Category.CHIMP, 3)
    store.record_score(Category.TYPING, 70)
    store.clear_all()
    store.clear_all()
    assert store.bests() == {'reaction': None, 'chimp': None, 'typing': None}


@pytest.mark.parametrize('raw', ['not json', '[1, 2]', '"text"', 'null'])
def test_corrupt_data_reads_as_empty(raw):
    store = ScoreStore(MemoryBackend({'k': raw}), key='k')
    assert store.get_best(Category.CHIMP) is None
    store.record_score(Category.CHIMP, 5)
    assert store.get_best(Category.CHIMP) == 5


def test_non_numeric_entries_are_ignored():
    raw = json.dumps({'reaction': 'fast', 'chimp': 6, 'typing': True})
    store = ScoreStore(MemoryBackend({'k': raw}), key='k')
    assert store.bests() == {'reaction': None, 'chimp': 6, 'typing': None}


def test_failing_backend_never_raises():
    store = ScoreStore(BrokenBackend())
    store.record_score(Category.REACTION, 200)
    store.clear_all()
    assert store.get_best(Category.REACTION) is None


def test_invalid_input_is_ignored(store):
    store.record_score('memory', 10)
    store.record_score(Category.TYPING, 'sixty')
    store.record_score(Category.TYPING, float('nan'))
    assert store.get_best('memory') is None
    assert store.get_best(Category.TYPING) is None
