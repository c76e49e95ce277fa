"""S3 key-value backend implementing IKeyValueStore: one object per key."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from hirefeed.core.exceptions import StorageError

_MISSING_CODES = {"NoSuchKey", "404"}


class S3KeyValueStore:
    """Production IKeyValueStore backed by S3 objects under a prefix."""

    def __init__(self, bucket: str, prefix: str = "kv/", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        self._prefix = prefix
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}.json"

    def get(self, key: str) -> str | None:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=self._key(key))
            return resp["Body"].read().decode("utf-8")
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return None
            raise StorageError(f"S3 read failed for key={key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=self._key(key),
                Body=value.encode("utf-8"),
                ContentType="application/json",
            )
        except ClientError as exc:
            raise StorageError(f"S3 write failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=self._key(key))
        except ClientError as exc:
            raise StorageError(f"S3 delete failed for key={key!r}: {exc}") from exc

    def list_keys(self) -> list[str]:
        """Stored keys with prefix and suffix stripped."""
        try:
            keys: list[str] = []
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=self._prefix):
                for obj in page.get("Contents", []):
                    name = obj["Key"][len(self._prefix):]
                    keys.append(name.removesuffix(".json"))
            return keys
        except ClientError as exc:
            raise StorageError(f"S3 list failed for prefix={self._prefix!r}: {exc}") from exc
