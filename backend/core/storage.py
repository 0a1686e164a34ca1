# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Media storage for uploaded files.

Two back-ends share one interface:

* ``LocalMediaStorage``  – writes under ``settings.media_root``; main.py
  serves that directory at ``settings.media_url_prefix``.
* ``CloudinaryStorage``  – uploads through the Cloudinary SDK, which signs
  each request with the API secret.

Routers receive the configured back-end through the :func:`get_storage`
dependency so tests can swap it out.
"""

import io
import re
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from core.config import settings

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class StorageError(RuntimeError):
    pass


@dataclass(frozen=True)
class UploadResult:
    url: str
    public_id: str


def _safe_folder(folder: str) -> str:
    parts = [_UNSAFE_CHARS.sub("-", p) for p in folder.replace("\\", "/").split("/")]
    return "/".join(p for p in parts if p and p not in (".", ".."))


class MediaStorage(ABC):
    @abstractmethod
    def upload(self, data: bytes, folder: str, filename: str, content_type: str) -> UploadResult:
        """Store *data* under *folder* and return its public URL and id."""


@dataclass(frozen=True)
class LocalMediaStorage(MediaStorage):
    root: Path
    url_prefix: str

    def upload(self, data: bytes, folder: str, filename: str, content_type: str) -> UploadResult:
        suffix = Path(filename).suffix.lower()
        key = f"{_safe_folder(folder)}/{uuid.uuid4().hex}{_UNSAFE_CHARS.sub('', suffix)}".lstrip("/")
        path = self.root / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Local media write failed: {exc}") from exc
        return UploadResult(url=f"{self.url_prefix.rstrip('/')}/{key}", public_id=key)


@dataclass(frozen=True)
class CloudinaryStorage(MediaStorage):
    cloud_name: str
    api_key: str
    api_secret: str
    timeout: float = 30.0

    def upload(self, data: bytes, folder: str, filename: str, content_type: str) -> UploadResult:
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise StorageError("Cloudinary credentials are not configured")
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )
        stream = io.BytesIO(data)
        stream.name = filename
        try:
            body = cloudinary.uploader.upload(
                stream,
                folder=_safe_folder(folder),
                resource_type="auto",
                timeout=self.timeout,
            )
        except cloudinary.exceptions.Error as exc:
            raise StorageError(f"Cloudinary upload failed: {exc}") from exc
        if "secure_url" not in body or "public_id" not in body:
            raise StorageError("Cloudinary upload failed: unexpected response")
        return UploadResult(url=body["secure_url"], public_id=body["public_id"])


def get_storage() -> MediaStorage:
    """FastAPI dependency returning the configured media back-end."""
    if settings.media_backend == "cloudinary":
        return CloudinaryStorage(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return LocalMediaStorage(root=Path(settings.media_root), url_prefix=settings.media_url_prefix)
