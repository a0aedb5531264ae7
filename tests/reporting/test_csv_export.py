"""Unit tests for the CSV attachment."""
from __future__ import annotations

import csv
import io

from src.models import ArtworkResponse, Rating, SubmissionPayload
from src.reporting.csv_export import flatten, render_csv


def _payload(**overrides) -> SubmissionPayload:
    fields = dict(
        reviewer_name="Jane Doe",
        responses={
            "surr-10": ArtworkResponse("surr-10", Rating.NO),
            "impr-3": ArtworkResponse("impr-3", Rating.YES, "Love the light"),
        },
        submitted_at="2024-05-01T12:00:00.000Z",
    )
    fields.update(overrides)
    return SubmissionPayload(**fields)


def test_layout_for_simple_submission():
    text = render_csv(_payload(), [])
    lines = text.split("\n")

    assert lines[0] == "Category,Image ID,Rating,Comment,Timestamp"
    assert lines[1] == '"Impressionist","impr-3","yes","Love the light",""'
    assert lines[2] == '"Surrealism","surr-10","no","",""'
    assert "\n\n\n--- SUMMARY ---\n" in text
    assert "Reviewer,Jane Doe\n" in text
    assert "Submitted,2024-05-01T12:00:00.000Z\n" in text
    assert "Total Responses,2\n" in text
    assert "Thumbs Up (Yes),1\n" in text
    assert "Maybe,0\n" in text
    assert "Thumbs Down (No),1\n" in text
    assert "ADDITIONAL FEEDBACK" not in text
    assert "UPLOADED REFERENCE IMAGES" not in text


def test_quotes_are_doubled_and_newlines_flattened():
    payload = _payload(
        responses={
            "abs-1": ArtworkResponse("abs-1", Rating.MAYBE, 'She said "wow"\nthen left'),
        }
    )
    text = render_csv(payload, [])

    assert '"She said ""wow"" then left"' in text
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[1] == ["Abstract Paintings", "abs-1", "maybe", 'She said "wow" then left', ""]


def test_every_entry_listed_but_unreviewed_not_counted():
    payload = _payload(
        responses={
            "de-1": ArtworkResponse("de-1", Rating.YES),
            "de-2": ArtworkResponse("de-2"),
        }
    )
    text = render_csv(payload, [])

    assert '"Delaware Artists","de-2","","",""' in text
    assert "Total Responses,1\n" in text


def test_feedback_and_image_sections():
    payload = _payload(additional_feedback="Line one\r\nLine two, with comma")
    text = render_csv(payload, ["https://img/a.png", "https://img/c.png"])

    assert '--- ADDITIONAL FEEDBACK ---\n"Line one Line two, with comma"\n' in text
    assert "--- UPLOADED REFERENCE IMAGES ---\n" in text
    assert "Image 1,https://img/a.png\n" in text
    assert "Image 2,https://img/c.png\n" in text
    assert text.index("SUMMARY") < text.index("ADDITIONAL FEEDBACK") < text.index("UPLOADED")


def test_reviewer_name_with_comma_is_quoted():
    text = render_csv(_payload(reviewer_name="Doe, Jane"), [])
    assert 'Reviewer,"Doe, Jane"\n' in text


def test_flatten():
    assert flatten("a\r\nb\rc\nd") == "a b c d"
    assert flatten("a\n\nb") == "a  b"
