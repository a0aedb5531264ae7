"""Best-effort, order-preserving fan-out of image uploads.

Each image is uploaded by its own task which always returns an
:class:`UploadOutcome` instead of raising. Outcomes are written into a slot
list indexed by submission position, so completion order never leaks into
the result; failures are then compacted out.
"""
from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import List, Optional, Protocol, Sequence

from src.exceptions import UploadFailedError
from src.models import UploadedImage, UploadOutcome

logger = logging.getLogger(__name__)


class ImageHost(Protocol):
    def upload(self, image: UploadedImage, folder: str) -> str: ...


def _upload_one(host: ImageHost, image: UploadedImage, folder: str, index: int) -> UploadOutcome:
    try:
        url = host.upload(image, folder)
    except UploadFailedError as exc:
        return UploadOutcome(index=index, name=image.name, error=str(exc))
    except Exception as exc:  # noqa: BLE001 – one bad image must not sink the batch
        logger.exception("Unexpected error uploading %s", image.name)
        return UploadOutcome(index=index, name=image.name, error=f"{type(exc).__name__}: {exc}")
    return UploadOutcome(index=index, name=image.name, url=url)


def upload_all(
    images: Sequence[UploadedImage],
    host: Optional[ImageHost],
    folder: str,
    *,
    executor: Optional[Executor] = None,
    max_workers: int = 4,
) -> List[UploadOutcome]:
    """Upload *images* concurrently; return one outcome per image, in order.

    With no *host* configured every image is reported as failed without any
    network call. A caller-supplied *executor* is used as-is and not shut
    down; otherwise a short-lived pool of *max_workers* threads is created.
    """
    if not images:
        return []
    if host is None:
        logger.warning("Image host not configured; skipping %d upload(s)", len(images))
        return [
            UploadOutcome(index=i, name=img.name, error="image host not configured")
            for i, img in enumerate(images)
        ]

    slots: List[Optional[UploadOutcome]] = [None] * len(images)

    def _collect(pool: Executor) -> None:
        futures = {
            pool.submit(_upload_one, host, image, folder, idx): idx
            for idx, image in enumerate(images)
        }
        for fut in as_completed(futures):
            slots[futures[fut]] = fut.result()

    if executor is not None:
        _collect(executor)
    else:
        with ThreadPoolExecutor(
            max_workers=min(max_workers, len(images)), thread_name_prefix="upload"
        ) as pool:
            _collect(pool)

    outcomes = [slot for slot in slots if slot is not None]
    for outcome in outcomes:
        if not outcome.ok:
            logger.warning(
                "image_upload_failed",
                extra={"image_name": outcome.name, "index": outcome.index, "error": outcome.error},
            )
    return outcomes


def successful_urls(outcomes: Sequence[UploadOutcome]) -> List[str]:
    """Compact *outcomes* to the URLs of successful uploads, keeping order."""
    return [o.url for o in sorted(outcomes, key=lambda o: o.index) if o.url is not None]
