# response_cache.py
from __future__ import annotations

from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ResponseCache(Generic[T]):
    """
    Parsed results keyed by the raw report text.

    When full, everything is dropped before the next insert. A size limit of 0
    turns caching off.
    """

    def __init__(self, size_limit: int = 1000, record_hit_rate: bool = False) -> None:
        self.size_limit = size_limit
        self.record_hit_rate = record_hit_rate
        self._data: Dict[str, T] = {}
        self._accesses = 0
        self._hits = 0

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> Optional[T]:
        value = self._data.get(key)
        if self.record_hit_rate:
            self._accesses += 1
            if value is not None:
                self._hits += 1
        return value

    def put(self, key: str, value: T) -> None:
        if self.size_limit <= 0:
            return
        if len(self._data) >= self.size_limit:
            self._data.clear()
        self._data.setdefault(key, value)

    def hit_rate(self) -> float:
        if not self._accesses:
            return 0.0
        return self._hits / self._accesses
