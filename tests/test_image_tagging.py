"""Tests for the classifier handle and tag suggestions."""
from types import SimpleNamespace

import pytest

from lombok_heritage.services.image_tagging import (
    ClassifierHandle, ClassifierUnavailable, suggest_tags
)


class CountingLoader:
    """Loader stub that records how often the classifier is built"""

    def __init__(self, predictions):
        self.predictions = predictions
        self.loads = 0

    def __call__(self):
        self.loads += 1
        return lambda image: list(self.predictions)


class TestClassifierHandle:

    def test_loads_lazily_once(self):
        loader = CountingLoader([])
        handle = ClassifierHandle(loader)
        assert not handle.loaded
        assert loader.loads == 0

        handle.acquire()
        handle.acquire()

        assert handle.loaded
        assert handle.refcount == 2
        assert loader.loads == 1

    def test_unloads_when_last_user_releases(self):
        loader = CountingLoader([])
        handle = ClassifierHandle(loader)
        handle.acquire()
        handle.acquire()

        handle.release()
        assert handle.loaded
        handle.release()
        assert not handle.loaded
        assert handle.refcount == 0

        # Next acquire loads again
        handle.acquire()
        assert loader.loads == 2

    def test_release_without_acquire(self):
        with pytest.raises(RuntimeError):
            ClassifierHandle(CountingLoader([])).release()

    def test_unconfigured(self):
        handle = ClassifierHandle()
        assert not handle.configured
        with pytest.raises(ClassifierUnavailable):
            handle.acquire()

    def test_classify_requires_acquire(self):
        with pytest.raises(ClassifierUnavailable):
            ClassifierHandle(CountingLoader([])).classify(b'img')

    def test_context_manager_classifies_and_releases(self):
        handle = ClassifierHandle(CountingLoader([
            {'label': 'stupa', 'score': 0.3},
            SimpleNamespace(label='palace', score=0.6),
            {'label': None, 'score': 0.9},
        ]))

        with handle:
            predictions = handle.classify(b'img')

        assert predictions == [{'label': 'palace', 'score': 0.6},
                               {'label': 'stupa', 'score': 0.3}]
        assert handle.refcount == 0
        assert not handle.loaded

    def test_non_list_output_yields_nothing(self):
        handle = ClassifierHandle(lambda: (lambda image: {'label': 'x'}))
        with handle:
            assert handle.classify(b'img') == []


class TestSuggestTags:

    def test_splits_lowercases_and_dedupes(self):
        predictions = [
            {'label': 'Palace, Castle', 'score': 0.7},
            {'label': 'castle', 'score': 0.5},
            {'label': 'Monastery', 'score': 0.4},
        ]
        assert suggest_tags(predictions) == ['palace', 'castle', 'monastery']

    def test_min_score_and_limit(self):
        predictions = [
            {'label': 'a', 'score': 0.9},
            {'label': 'b', 'score': 0.8},
            {'label': 'c', 'score': 0.1},
        ]
        assert suggest_tags(predictions, min_score=0.5) == ['a', 'b']
        assert suggest_tags(predictions, min_score=0.0, limit=1) == ['a']
