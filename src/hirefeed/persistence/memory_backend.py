"""In-memory key-value backend: the default store and the unit-test fake."""

from __future__ import annotations


class MemoryKeyValueStore:
    """Dict-backed IKeyValueStore."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._store)
