"""Seed the state bucket with the built-in provider mappings.

Usage:
    python scripts/seed_mappings.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

from hirefeed.core.logging_setup import configure_logging
from hirefeed.core.protocols import IKeyValueStore
from hirefeed.persistence.mapping_store import MappingRepository
from hirefeed.persistence.s3_backend import S3KeyValueStore
from hirefeed.stages.transform.default_mappings import DEFAULT_MAPPINGS


def create_bucket(s3: Any, bucket: str, region: str = "us-east-1") -> None:
    """Create the state bucket. Skips if it already exists."""
    existing = [b["Name"] for b in s3.list_buckets().get("Buckets", [])]
    if bucket in existing:
        print(f"  Bucket {bucket} already exists, skipping")
        return
    kwargs: dict[str, Any] = {"Bucket": bucket}
    if region != "us-east-1":
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
    s3.create_bucket(**kwargs)
    print(f"  Created bucket {bucket}")


def seed_mappings(store: IKeyValueStore, overwrite: bool = False) -> list[str]:
    """Store every built-in mapping; existing replacements survive unless ``overwrite``."""
    repo = MappingRepository(store)
    seeded: list[str] = []
    for provider, mapping in DEFAULT_MAPPINGS.items():
        if repo.is_customized(provider) and not overwrite:
            print(f"  Mapping for {provider} already customized, skipping")
            continue
        repo.save(provider, mapping)
        seeded.append(provider)
        print(f"  Seeded {provider} mapping ({len(mapping.field_mappings)} fields)")
    return seeded


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed provider mappings for HireFeed")
    parser.add_argument("--endpoint-url", default=None, help="S3 endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--bucket", default="hirefeed-state", help="State bucket name")
    parser.add_argument("--prefix", default="kv/", help="Key prefix inside the bucket")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--overwrite", action="store_true", help="Replace customized mappings")
    args = parser.parse_args()
    configure_logging()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    print("Creating bucket...")
    create_bucket(boto3.client("s3", **kwargs), args.bucket, region=args.region)

    print("Seeding mappings...")
    store = S3KeyValueStore(
        bucket=args.bucket, prefix=args.prefix, region=args.region, endpoint_url=args.endpoint_url,
    )
    seed_mappings(store, overwrite=args.overwrite)

    print("Done!")


if __name__ == "__main__":
    main()
