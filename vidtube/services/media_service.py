# vidtube/services/media_service.py
from __future__ import annotations

"""
VidTube — Media Relay
=====================

Moves uploaded binaries from a request to object storage and back out again.

Flow
----
1) `save_upload()` spools the multipart body to `settings.UPLOAD_TMP_DIR`.
2) `store()` uploads the local file (worker thread), probes its duration
   when asked, and **always** unlinks the local copy.
3) `remove(url)` derives the public id from the URL's last path segment
   (minus the extension) and deletes `media/{public_id}*`. Only ids minted by
   `store()` (32 hex chars) are touched. Failures are logged, never raised.

The relay is a FastAPI dependency (`get_media_relay`) so tests can swap in an
in-memory storage client.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import urlparse
import json
import logging
import mimetypes
import os
import re
import shutil
import uuid

import anyio
import anyio.to_thread
from fastapi import UploadFile, status

from vidtube.core.config import settings
from vidtube.core.exceptions import ApiError
from vidtube.utils.aws import S3Client, S3StorageError

logger = logging.getLogger(__name__)

MEDIA_PREFIX = "media"
_PUBLIC_ID = re.compile(r"[0-9a-f]{32}")


class StorageBackend(Protocol):
    def upload_file(self, path: str, key: str, *, content_type: Optional[str] = None) -> str: ...

    def delete_prefix(self, prefix: str) -> int: ...


@dataclass(frozen=True)
class StoredMedia:
    url: str
    public_id: str
    duration: Optional[float] = None


def public_id_from_url(url: str) -> str:
    """`https://cdn/x/media/abc123.mp4` → `abc123`."""
    last = urlparse(url or "").path.rstrip("/").split("/")[-1]
    return last.split(".")[0]


async def probe_duration(path: Path) -> Optional[float]:
    """Duration in seconds via `ffprobe`, or None when it cannot be read."""
    binary = shutil.which(settings.FFPROBE_BINARY)
    if binary is None:
        return None
    cmd = [
        binary,
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "json",
        str(path),
    ]
    try:
        result = await anyio.run_process(cmd, check=False)
    except OSError as e:
        logger.warning("ffprobe could not run: %s", e)
        return None
    if result.returncode != 0:
        return None
    try:
        duration = float(json.loads(result.stdout or b"{}").get("format", {}).get("duration", 0.0))
    except (ValueError, TypeError):
        return None
    return duration if duration > 0 else None


class MediaRelay:
    """Upload/delete media through a storage backend (S3 by default)."""

    def __init__(self, storage: Optional[StorageBackend] = None, *, tmp_dir: Optional[Path] = None) -> None:
        self._storage = storage
        self.tmp_dir = Path(tmp_dir or settings.UPLOAD_TMP_DIR)

    @property
    def storage(self) -> StorageBackend:
        if self._storage is None:
            try:
                self._storage = S3Client()
            except S3StorageError as e:
                logger.error("Object storage unavailable: %s", e)
                raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Media storage is not configured") from e
        return self._storage

    # ── Local spool ──────────────────────────────────────────────────────────
    async def save_upload(self, upload: UploadFile) -> Path:
        """Write the multipart body to a unique temp file and return its path."""
        self.tmp_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(upload.filename or "").suffix.lower()
        dest = self.tmp_dir / f"{uuid.uuid4().hex}{suffix}"

        def _copy() -> None:
            upload.file.seek(0)
            with open(dest, "wb") as fh:
                shutil.copyfileobj(upload.file, fh)

        await anyio.to_thread.run_sync(_copy)
        return dest

    # ── Store ────────────────────────────────────────────────────────────────
    async def store(self, local_path: Path, *, probe: bool = False) -> StoredMedia:
        """
        Upload `local_path` and return its public URL.

        The local file is removed on success and on failure.

        Raises
        ------
        ApiError(500)
            When the upload fails.
        """
        try:
            public_id = uuid.uuid4().hex
            key = f"{MEDIA_PREFIX}/{public_id}{local_path.suffix.lower()}"
            content_type = mimetypes.guess_type(local_path.name)[0]
            duration = await probe_duration(local_path) if probe else None
            try:
                url = await anyio.to_thread.run_sync(
                    lambda: self.storage.upload_file(str(local_path), key, content_type=content_type)
                )
            except S3StorageError as e:
                logger.error("Media upload failed for %s: %s", local_path.name, e)
                raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to upload media") from e
            logger.info("Stored media %s", key)
            return StoredMedia(url=url, public_id=public_id, duration=duration)
        finally:
            try:
                os.unlink(local_path)
            except FileNotFoundError:
                pass

    async def store_upload(self, upload: UploadFile, *, probe: bool = False) -> StoredMedia:
        """Spool then store an `UploadFile`."""
        path = await self.save_upload(upload)
        return await self.store(path, probe=probe)

    # ── Remove (best-effort) ─────────────────────────────────────────────────
    async def remove(self, url: Optional[str]) -> None:
        """Delete the object behind `url`. Never raises."""
        if not url:
            return
        public_id = public_id_from_url(url)
        if not _PUBLIC_ID.fullmatch(public_id):
            logger.warning("Skipping media delete for foreign url %s", url)
            return
        try:
            removed = await anyio.to_thread.run_sync(
                lambda: self.storage.delete_prefix(f"{MEDIA_PREFIX}/{public_id}")
            )
            logger.info("Removed %d object(s) for %s", removed, public_id)
        except (ApiError, S3StorageError) as e:
            logger.warning("Media delete failed for %s (non-fatal): %s", public_id, e)


_relay: Optional[MediaRelay] = None


def get_media_relay() -> MediaRelay:
    """FastAPI dependency returning the process-wide relay."""
    global _relay
    if _relay is None:
        _relay = MediaRelay()
    return _relay


__all__ = [
    "MediaRelay",
    "StoredMedia",
    "StorageBackend",
    "get_media_relay",
    "public_id_from_url",
    "probe_duration",
]
