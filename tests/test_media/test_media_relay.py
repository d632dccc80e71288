# tests/test_media/test_media_relay.py
"""Media relay against the in-memory storage double."""

from io import BytesIO
from typing import Optional

import pytest
from fastapi import UploadFile

from tests.fixtures.mocks.storage import CDN
from vidtube.core.config import settings
from vidtube.core.exceptions import ApiError
from vidtube.services.media_service import MediaRelay, probe_duration, public_id_from_url
from vidtube.utils.aws import S3StorageError, clean_key

PUBLIC_ID = "0123456789abcdef0123456789abcdef"


class _BrokenStorage:
    def upload_file(self, path: str, key: str, *, content_type: Optional[str] = None) -> str:
        raise S3StorageError("nope")

    def delete_prefix(self, prefix: str) -> int:
        raise S3StorageError("nope")


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://cdn.example.com/media/abc123.mp4", "abc123"),
        ("https://cdn.example.com/media/abc123", "abc123"),
        ("https://cdn.example.com/media/abc123.tar.gz?sig=1", "abc123"),
        ("", ""),
    ],
)
def test_public_id_from_url(url, expected):
    assert public_id_from_url(url) == expected


@pytest.mark.anyio
async def test_store_upload_uploads_and_cleans_spool(media_relay: MediaRelay, mock_storage):
    upload = UploadFile(file=BytesIO(b"frames"), filename="Clip.MP4")

    stored = await media_relay.store_upload(upload)

    key = f"media/{stored.public_id}.mp4"
    assert stored.url == f"{CDN}/{key}"
    assert mock_storage.objects[key] == b"frames"
    assert stored.duration is None
    assert list(media_relay.tmp_dir.iterdir()) == []


@pytest.mark.anyio
async def test_store_failure_raises_and_still_unlinks(tmp_path):
    relay = MediaRelay(storage=_BrokenStorage(), tmp_dir=tmp_path)
    spooled = tmp_path / "thumb.png"
    spooled.write_bytes(b"png")

    with pytest.raises(ApiError) as exc:
        await relay.store(spooled)

    assert exc.value.status_code == 500
    assert not spooled.exists()


@pytest.mark.anyio
async def test_remove_deletes_by_public_id(media_relay: MediaRelay, mock_storage):
    mock_storage.objects[f"media/{PUBLIC_ID}.png"] = b"x"
    mock_storage.objects["media/other.png"] = b"y"

    await media_relay.remove(f"{CDN}/media/{PUBLIC_ID}.png")
    await media_relay.remove(None)

    assert mock_storage.deleted_prefixes == [f"media/{PUBLIC_ID}"]
    assert list(mock_storage.objects) == ["media/other.png"]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "url",
    [
        f"{CDN}/media/a.png",
        f"{CDN}/media/abc123.png",
        "https://avatars.example.org/u/42",
        f"{CDN}/media/{PUBLIC_ID.upper()}.png",
    ],
)
async def test_remove_ignores_foreign_urls(media_relay: MediaRelay, mock_storage, url):
    mock_storage.objects["media/a1.png"] = b"x"
    mock_storage.objects["media/abc123.png"] = b"y"

    await media_relay.remove(url)

    assert mock_storage.deleted_prefixes == []
    assert len(mock_storage.objects) == 2


@pytest.mark.anyio
async def test_remove_is_best_effort(tmp_path):
    relay = MediaRelay(storage=_BrokenStorage(), tmp_dir=tmp_path)
    await relay.remove(f"{CDN}/media/{PUBLIC_ID}.png")


@pytest.mark.anyio
async def test_probe_without_ffprobe_returns_none(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "FFPROBE_BINARY", "ffprobe-missing-for-tests")
    clip = tmp_path / "clip.mp4"
    clip.write_bytes(b"\x00")
    assert await probe_duration(clip) is None


@pytest.mark.parametrize(
    "key, expected",
    [
        ("/media//abc.png", "media/abc.png"),
        ("media/abc_123-x.mp4", "media/abc_123-x.mp4"),
    ],
)
def test_clean_key_normalizes(key, expected):
    assert clean_key(key) == expected


@pytest.mark.parametrize("key", ["", "   ", "media/../secrets", "media/a b.png"])
def test_clean_key_rejects_unusable(key):
    with pytest.raises(S3StorageError):
        clean_key(key)
