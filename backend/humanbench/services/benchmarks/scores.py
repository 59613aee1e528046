import json
import logging
import math
from enum import Enum
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

STORAGE_KEY = 'human-benchmark-scores'

Number = Union[int, float]


class Category(str, Enum):
    REACTION = 'reaction'
    CHIMP = 'chimp'
    TYPING = 'typing'

    @property
    def lower_is_better(self) -> bool:
        return self is Category.REACTION

    def is_better(self, new: Number, old: Number) -> bool:
        """Strict comparison: reaction lower wins, chimp/typing higher wins."""
        if self.lower_is_better:
            return new < old
        return new > old


class PersistenceUnavailable(Exception):
    """Raised by a key-value backend when it cannot read or write."""


class MemoryBackend:
    """Process-local key-value backend."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _coerce_category(category) -> Optional[Category]:
    try:
        return Category(category)
    except ValueError:
        return None


class ScoreStore:
    """Best score per category, persisted as one JSON object under one key.

    The stored object is re-read on every access so that the backend stays the
    single source of truth. Backend failures never propagate: a failed read
    behaves like an empty store and a failed write is dropped.
    """

    def __init__(self, backend, key: str = STORAGE_KEY):
        self.backend = backend
        self.key = key

    def _load(self) -> Dict[str, Number]:
        try:
            raw = self.backend.get(self.key)
        except PersistenceUnavailable as exc:
            logger.warning(f"[store-read-failed] key={self.key} error={exc}")
            return {}
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"[store-corrupt] key={self.key} treating as empty")
            return {}
        if not isinstance(data, dict):
            return {}
        return {c.value: data[c.value] for c in Category if _is_number(data.get(c.value))}

    def _save(self, scores: Dict[str, Number]) -> bool:
        try:
            self.backend.set(self.key, json.dumps(scores))
        except PersistenceUnavailable as exc:
            logger.warning(f"[store-write-failed] key={self.key} error={exc}")
            return False
        return True

    def get_best(self, category) -> Optional[Number]:
        cat = _coerce_category(category)
        if cat is None:
            return None
        return self._load().get(cat.value)

    def bests(self) -> Dict[str, Optional[Number]]:
        scores = self._load()
        return {c.value: scores.get(c.value) for c in Category}

    def record_score(self, category, value) -> None:
        cat = _coerce_category(category)
        if cat is None or not _is_number(value):
            logger.debug(f"[score-ignored] category={category!r} value={value!r}")
            return
        scores = self._load()
        prior = scores.get(cat.value)
        if prior is not None and not cat.is_better(value, prior):
            return
        scores[cat.value] = value
        if self._save(scores):
            logger.info(f"[score-best] category={cat.value} value={value} previous={prior}")

    def clear_all(self) -> None:
        try:
            self.backend.delete(self.key)
        except PersistenceUnavailable as exc:
            logger.warning(f"[store-clear-failed] key={self.key} error={exc}")
            return
        logger.info(f"[store-cleared] key={self.key}")
