"""Cloudinary adapter for archiving reviewer-uploaded reference images."""
from __future__ import annotations

import hashlib
import logging
import re
import time
from typing import Callable, Optional

import httpx

from src.config import CloudinaryConfig
from src.exceptions import UploadFailedError
from src.models import UploadedImage

logger = logging.getLogger(__name__)

_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


def reviewer_slug(reviewer_name: str) -> str:
    """``"Jane  Doe"`` -> ``"jane-doe"``; used for folders and filenames."""
    return re.sub(r"\s+", "-", reviewer_name.strip()).lower()


def sign_upload(folder: str, timestamp: int, api_secret: str) -> str:
    """Return the SHA-1 request signature Cloudinary expects for a signed upload."""
    to_sign = f"folder={folder}&timestamp={timestamp}{api_secret}"
    return hashlib.sha1(to_sign.encode("utf-8")).hexdigest()


class CloudinaryImageHost:
    """Uploads one image per call and returns its public ``secure_url``."""

    def __init__(
        self,
        config: CloudinaryConfig,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._client = client or httpx.Client(timeout=timeout)
        self._clock = clock

    def upload(self, image: UploadedImage, folder: str) -> str:
        """Upload *image* into *folder*.

        Raises
        ------
        UploadFailedError
            On transport errors, a non-2xx status, or a response without URL.
        """
        timestamp = int(self._clock())
        form = {
            "file": image.data,
            "api_key": self._config.api_key,
            "timestamp": str(timestamp),
            "signature": sign_upload(folder, timestamp, self._config.api_secret),
            "folder": folder,
        }
        url = _UPLOAD_URL.format(cloud_name=self._config.cloud_name)
        try:
            resp = self._client.post(url, data=form)
        except httpx.HTTPError as exc:
            raise UploadFailedError(f"Upload of '{image.name}' failed: {exc}") from exc

        if resp.is_error:
            raise UploadFailedError(
                f"Upload of '{image.name}' failed: {resp.status_code} {resp.reason_phrase}"
            )
        try:
            body = resp.json()
        except ValueError as exc:
            raise UploadFailedError(f"Upload of '{image.name}' returned invalid JSON") from exc
        secure_url = body.get("secure_url") if isinstance(body, dict) else None
        if not secure_url:
            raise UploadFailedError(f"Upload of '{image.name}' returned no URL")

        logger.debug("Uploaded %s to %s", image.name, secure_url)
        return secure_url

    def close(self) -> None:
        self._client.close()
