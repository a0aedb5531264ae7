"""Reviewer-side helper that posts an assembled payload to the service.

Mirrors what the browser does: in development mode the payload is only
logged, in production it is POSTed as JSON to the submission endpoint.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from src.exceptions import SubmissionClientError
from src.models import SubmissionPayload

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "/.netlify/functions/submit-review"


def submit_review(
    payload: SubmissionPayload,
    endpoint: str = DEFAULT_ENDPOINT,
    *,
    production: bool = True,
    client: Optional[httpx.Client] = None,
    timeout: float = 60.0,
) -> Dict[str, Any]:
    """Send *payload* and return the decoded JSON response.

    Raises
    ------
    SubmissionClientError
        If the server answers with a non-2xx status or is unreachable.
    """
    body = payload.to_dict()

    if not production:
        logger.info(
            "DEV MODE - would submit %d response(s) for %s",
            len(payload.responses),
            payload.reviewer_name,
        )
        return {"success": True, "message": "Saved locally (dev mode)"}

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        resp = http.post(endpoint, json=body)
    except httpx.HTTPError as exc:
        raise SubmissionClientError(f"Could not reach submission endpoint: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    if resp.is_error:
        raise SubmissionClientError(f"Server error: {resp.status_code} {resp.reason_phrase}")
    return resp.json()
