# vidtube/utils/aws.py
from __future__ import annotations

"""
🧊 VidTube • Object storage client
==================================

The boto3 side of the Media Relay (`vidtube.services.media_service`).
Avatars, cover images, thumbnails and video files all land under one bucket;
the relay only ever needs three things from it:

- `upload_file(path, key)` → public URL
- `delete_prefix(prefix)` → number of objects removed
- `public_url(key)`

Every call blocks. The relay runs them in a worker thread.
"""

from typing import Any, Dict, Iterator, List, Optional
import logging
import re

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from vidtube.core.config import settings

logger = logging.getLogger(__name__)

# S3 caps DeleteObjects at 1000 keys per request
_DELETE_BATCH = 1000
_SAFE_KEY = re.compile(r"[A-Za-z0-9._\-/]+")


class S3StorageError(RuntimeError):
    """A storage call failed or was given an unusable key."""


def clean_key(key: str) -> str:
    """`/media//abc.png` → `media/abc.png`; rejects traversal and odd characters."""
    k = re.sub(r"/{2,}", "/", str(key or "").strip().lstrip("/"))
    if not k or ".." in k or not _SAFE_KEY.fullmatch(k):
        raise S3StorageError(f"Unusable storage key: {key!r}")
    return k


class S3Client:
    """
    Bucket-bound boto3 client.

    Credentials come from `AWS_ACCESS_KEY_ID` / `AWS_SECRET_ACCESS_KEY` when
    both are set, otherwise from the default AWS chain. `AWS_S3_ENDPOINT_URL`
    points it at MinIO or LocalStack; `CDN_BASE_URL` rewrites public links.
    """

    def __init__(self, bucket: Optional[str] = None, *, endpoint_url: Optional[str] = None) -> None:
        self.bucket = bucket or settings.AWS_BUCKET_NAME
        if not self.bucket:
            raise S3StorageError("AWS_BUCKET_NAME not configured")
        self.region = settings.AWS_REGION
        self.endpoint_url = endpoint_url or settings.AWS_S3_ENDPOINT_URL
        self.cdn_base = (settings.CDN_BASE_URL or "").rstrip("/")

        kwargs: Dict[str, Any] = {
            "region_name": self.region,
            "config": BotoConfig(
                signature_version="s3v4",
                retries={"max_attempts": 5, "mode": "standard"},
                connect_timeout=3,
                read_timeout=60,
            ),
        }
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        secret = settings.AWS_SECRET_ACCESS_KEY
        if settings.AWS_ACCESS_KEY_ID and secret is not None:
            kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
            kwargs["aws_secret_access_key"] = secret.get_secret_value()

        try:
            self.client = boto3.client("s3", **kwargs)
        except (BotoCoreError, ValueError) as e:
            raise S3StorageError(f"Could not create S3 client: {e}") from e

    def public_url(self, key: str) -> str:
        k = clean_key(key)
        if self.cdn_base:
            return f"{self.cdn_base}/{k}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{k}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{k}"

    def upload_file(self, path: str, key: str, *, content_type: Optional[str] = None) -> str:
        """Upload a local file (boto3 switches to multipart for large bodies)."""
        k = clean_key(key)
        extra = {"ContentType": content_type} if content_type else None
        try:
            self.client.upload_file(path, self.bucket, k, ExtraArgs=extra)
        except (BotoCoreError, ClientError) as e:
            raise S3StorageError(f"Upload of {k} failed: {e}") from e
        return self.public_url(k)

    def _keys_under(self, prefix: str) -> Iterator[str]:
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for obj in page.get("Contents", []) or []:
                yield obj["Key"]

    def delete_prefix(self, prefix: str) -> int:
        """Delete every object whose key starts with `prefix`."""
        p = clean_key(prefix)
        removed = 0
        try:
            keys: List[str] = list(self._keys_under(p))
            for i in range(0, len(keys), _DELETE_BATCH):
                batch = [{"Key": k} for k in keys[i : i + _DELETE_BATCH]]
                resp = self.client.delete_objects(
                    Bucket=self.bucket, Delete={"Objects": batch, "Quiet": True}
                )
                errors = resp.get("Errors") or []
                for err in errors:
                    logger.warning("Could not delete %s: %s", err.get("Key"), err.get("Message"))
                removed += len(batch) - len(errors)
        except (BotoCoreError, ClientError) as e:
            raise S3StorageError(f"Delete under {p} failed: {e}") from e
        return removed

    def __repr__(self) -> str:  # pragma: no cover
        return f"S3Client(bucket={self.bucket!r}, endpoint={self.endpoint_url or 'aws'})"


__all__ = ["S3Client", "S3StorageError", "clean_key"]
