"""Unit tests for the JSON backup attachment."""
from __future__ import annotations

import json

from src.models import SubmissionPayload
from src.reporting.json_backup import build_backup, render_json_backup

BODY = {
    "reviewerName": "Jane Doe",
    "responses": {"impr-3": {"rating": "yes", "comment": "Love the light"}},
    "uploadedImages": [{"name": "a.png", "type": "image/png", "data": "data:image/png;base64,AA=="}],
    "submittedAt": "2024-05-01T12:00:00.000Z",
    "clientVersion": "v3",
}


def test_backup_preserves_body_and_adds_fields():
    payload = SubmissionPayload.from_dict(BODY)
    backup = build_backup(payload, ["https://img/a.png"], "2024-05-01T12:00:05+00:00")

    assert backup["clientVersion"] == "v3"
    assert backup["uploadedImages"] == BODY["uploadedImages"]
    assert backup["uploadedImageUrls"] == ["https://img/a.png"]
    assert backup["processedAt"] == "2024-05-01T12:00:05+00:00"


def test_render_is_deterministic_and_parseable():
    payload = SubmissionPayload.from_dict(BODY)
    first = render_json_backup(payload, [], "2024-05-01T12:00:05+00:00")
    second = render_json_backup(payload, [], "2024-05-01T12:00:05+00:00")

    assert first == second
    assert json.loads(first)["responses"]["impr-3"]["comment"] == "Love the light"


def test_non_ascii_kept_verbatim():
    payload = SubmissionPayload.from_dict({**BODY, "reviewerName": "Zoë"})
    assert "Zoë" in render_json_backup(payload, [], "t")


def test_payload_without_raw_uses_wire_form():
    payload = SubmissionPayload(reviewer_name="Jane", responses={}, submitted_at="t0")
    backup = build_backup(payload, [], "t1")
    assert backup["reviewerName"] == "Jane"
    assert backup["submittedAt"] == "t0"
