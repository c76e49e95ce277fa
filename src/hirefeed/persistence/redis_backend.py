"""Redis key-value backend implementing IKeyValueStore."""

from __future__ import annotations

import redis

from hirefeed.core.exceptions import StorageError


class RedisKeyValueStore:
    """Production IKeyValueStore backed by Redis strings."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 key_prefix: str = "hirefeed:") -> None:
        self._prefix = key_prefix
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(self._key(key))
        except Exception as exc:
            raise StorageError(f"Redis GET failed for key={key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except Exception as exc:
            raise StorageError(f"Redis SET failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as exc:
            raise StorageError(f"Redis DELETE failed for key={key!r}: {exc}") from exc

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except Exception as exc:
            raise StorageError(f"Redis PING failed: {exc}") from exc
