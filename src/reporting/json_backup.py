"""Lossless JSON backup attached to every notification."""
from __future__ import annotations

import json
from typing import Any, Dict, Sequence

from src.models import SubmissionPayload


def build_backup(
    payload: SubmissionPayload, image_urls: Sequence[str], processed_at: str
) -> Dict[str, Any]:
    """Return the request body as received plus archive URLs and a processing stamp."""
    source = payload.raw or payload.to_dict()
    return {
        **source,
        "uploadedImageUrls": list(image_urls),
        "processedAt": processed_at,
    }


def render_json_backup(
    payload: SubmissionPayload, image_urls: Sequence[str], processed_at: str
) -> str:
    """Serialize :func:`build_backup`; identical inputs give identical bytes."""
    return json.dumps(build_backup(payload, image_urls, processed_at), indent=2, ensure_ascii=False)
