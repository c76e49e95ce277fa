"""Pluggable key-value backends behind the IKeyValueStore protocol."""

from __future__ import annotations

from hirefeed.core.config import AppSettings
from hirefeed.core.protocols import IKeyValueStore
from hirefeed.persistence.memory_backend import MemoryKeyValueStore
from hirefeed.persistence.redis_backend import RedisKeyValueStore
from hirefeed.persistence.s3_backend import S3KeyValueStore


def create_persistence(settings: AppSettings | None = None) -> IKeyValueStore:
    """Create the key-value store selected by ``settings.storage.backend``."""
    if settings is None:
        settings = AppSettings()

    backend = settings.storage.backend
    if backend == "redis":
        return RedisKeyValueStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            key_prefix=settings.redis.key_prefix,
        )
    if backend == "s3":
        return S3KeyValueStore(
            bucket=settings.s3.bucket,
            prefix=settings.s3.prefix,
            region=settings.s3.region,
            endpoint_url=settings.s3.endpoint_url,
        )
    return MemoryKeyValueStore()
