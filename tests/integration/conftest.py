"""Integration test fixtures: LocalStack S3 and a live Redis."""

from __future__ import annotations

import os
import sys
import uuid

import boto3
import pytest
import redis

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
BUCKET = "hirefeed-state-inttest"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client("s3", region_name="us-east-1", endpoint_url=LOCALSTACK_URL)
        client.list_buckets()
        return True
    except Exception:
        return False


def _redis_available() -> bool:
    try:
        return bool(redis.Redis(host=REDIS_HOST, socket_connect_timeout=1).ping())
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)

skip_no_redis = pytest.mark.skipif(
    not _redis_available(),
    reason="Redis not available",
)


@pytest.fixture(scope="session")
def localstack_s3():
    """S3 client pointing at LocalStack."""
    return boto3.client("s3", region_name="us-east-1", endpoint_url=LOCALSTACK_URL)


@pytest.fixture(scope="session")
def seeded_bucket(localstack_s3):
    """Create the state bucket and seed default mappings via the seed script."""
    sys.path.insert(0, str(os.path.join(os.path.dirname(__file__), "..", "..", "scripts")))
    from seed_mappings import create_bucket, seed_mappings

    from hirefeed.persistence.s3_backend import S3KeyValueStore

    create_bucket(localstack_s3, BUCKET)
    store = S3KeyValueStore(bucket=BUCKET, region="us-east-1", endpoint_url=LOCALSTACK_URL)
    seed_mappings(store, overwrite=True)
    return BUCKET


@pytest.fixture
def redis_prefix():
    """Unique key prefix per test so runs never collide."""
    return f"hirefeed-inttest-{uuid.uuid4().hex[:8]}:"
