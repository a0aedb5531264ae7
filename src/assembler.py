"""Assemble a :class:`SubmissionPayload` (or a local CSV export) from a reviewer's state."""
from __future__ import annotations

import base64
import csv
import datetime
import io
import logging
import mimetypes
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from src.catalog import category_for_id
from src.exceptions import MissingFieldError
from src.models import SubmissionPayload, UploadedImage
from src.reporting.csv_export import flatten
from src.response_store import ResponseStore
from src.services.image_host import reviewer_slug

logger = logging.getLogger(__name__)


def encode_attachment(name: str, content: bytes, mime_type: Optional[str] = None) -> UploadedImage:
    """Return *content* as a ``data:`` URI attachment, the form the browser sends."""
    mime = mime_type or mimetypes.guess_type(name)[0] or "application/octet-stream"
    encoded = base64.b64encode(content).decode("ascii")
    return UploadedImage(name=name, mime_type=mime, data=f"data:{mime};base64,{encoded}")


def encode_file(path: Union[str, Path]) -> UploadedImage:
    file_path = Path(path)
    return encode_attachment(file_path.name, file_path.read_bytes())


def build_submission_payload(
    store: ResponseStore,
    *,
    attachments: Iterable[UploadedImage] = (),
    reviewer_email: Optional[str] = None,
    submitted_at: Optional[datetime.datetime] = None,
) -> SubmissionPayload:
    """Collect identity, responses, feedback and attachments into one payload.

    Raises
    ------
    MissingFieldError
        If the store has no reviewer name yet.
    """
    reviewer_name = store.reviewer_name
    if not reviewer_name:
        raise MissingFieldError("Missing required fields")

    images: List[UploadedImage] = list(attachments)
    stamp = (submitted_at or datetime.datetime.now(datetime.timezone.utc)).isoformat()
    payload = SubmissionPayload(
        reviewer_name=reviewer_name,
        responses=store.snapshot(),
        reviewer_email=reviewer_email or None,
        additional_feedback=store.feedback,
        uploaded_images=images,
        submitted_at=stamp,
    )
    payload.raw = payload.to_dict()
    logger.debug(
        "Assembled submission for %s: %d response(s), %d attachment(s)",
        reviewer_name,
        len(payload.responses),
        len(images),
    )
    return payload


EXPORT_HEADER = "Category,ID,Rating,Comment,Timestamp"
EXPORT_UNKNOWN_CATEGORY = "Unknown"


def export_responses_csv(
    store: ResponseStore, *, today: Optional[datetime.date] = None
) -> Tuple[str, str]:
    """Return ``(filename, csv_text)`` for the reviewer's own download.

    One quoted row per stored response in entry order, then, if a feedback
    draft exists, a blank line and an ``Additional Feedback`` row whose line
    breaks are joined with `` | `` and which carries the draft's last edit time.
    """
    day = today or datetime.datetime.now(datetime.timezone.utc).date()
    filename = f"art-review-{reviewer_slug(store.reviewer_name)}-{day.isoformat()}.csv"

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buf.write(EXPORT_HEADER + "\n")
    for artwork_id, response in store.snapshot().items():
        writer.writerow(
            [
                category_for_id(artwork_id, EXPORT_UNKNOWN_CATEGORY),
                artwork_id,
                response.rating.value,
                flatten(response.comment),
                response.timestamp or "",
            ]
        )

    feedback = store.feedback
    if feedback:
        buf.write("\n")
        writer.writerow(
            ["Additional Feedback", "", "", flatten(feedback, " | "), store.feedback_updated_at or ""]
        )

    return filename, buf.getvalue()
