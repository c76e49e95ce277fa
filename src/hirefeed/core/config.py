"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class PipelineConfig(BaseSettings):
    """Batch file conventions and processing knobs."""

    model_config = {"env_prefix": "HIREFEED_PIPELINE_"}

    detail_marker: str = "DET"
    header_marker: str = "HDR"
    footer_marker: str = "FTR"
    delimiter: str = ","
    progress_log_window: int = 5  # logs attached to each progress event
    providers: list[str] = ["ADP", "QuickBooks"]


class StorageConfig(BaseSettings):
    """Which key-value backend holds mappings and ledger history."""

    model_config = {"env_prefix": "HIREFEED_STORAGE_"}

    backend: Literal["memory", "redis", "s3"] = "memory"
    persist_ledger: bool = False


class RedisConfig(BaseSettings):
    """Redis key-value configuration."""

    model_config = {"env_prefix": "HIREFEED_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "hirefeed:"


class S3Config(BaseSettings):
    """S3 key-value configuration."""

    model_config = {"env_prefix": "HIREFEED_S3_"}

    bucket: str = "hirefeed-state"
    prefix: str = "kv/"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "HIREFEED_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    pipeline: PipelineConfig = PipelineConfig()
    storage: StorageConfig = StorageConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
