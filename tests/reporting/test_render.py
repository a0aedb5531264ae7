"""Unit tests for notification rendering."""
from __future__ import annotations

import pytest

from src.models import ArtworkResponse, Rating, SubmissionPayload
from src.reporting.context import build_notification_context
from src.reporting.render import render_notification_html, render_slack_summary


def _context(responses=None, **overrides):
    payload = SubmissionPayload(
        reviewer_name=overrides.pop("reviewer_name", "Jane Doe"),
        responses=responses
        if responses is not None
        else {
            "impr-3": ArtworkResponse("impr-3", Rating.YES, "Love the light"),
            "surr-10": ArtworkResponse("surr-10", Rating.NO),
        },
        submitted_at="2024-05-01T12:00:00Z",
        **overrides,
    )
    return build_notification_context(payload, [], received_at="2024-05-01T12:00:05+00:00")


@pytest.fixture()
def context():
    return _context()


def test_html_contains_summary_and_breakdown(context):
    html = render_notification_html(context)

    assert "<strong>Reviewer:</strong> Jane Doe" in html
    assert "<strong>Total Responses:</strong> 2" in html
    assert "👍 1" in html and "👎 1" in html
    assert html.index("Impressionist") < html.index("Surrealism")
    assert "Love the light" in html
    assert "No comments in this category" in html
    assert "Email:" not in html
    assert "Additional Feedback" not in html
    assert "Uploaded Reference Images" not in html
    assert "Submission received 2024-05-01T12:00:05+00:00" in html


def test_html_escapes_reviewer_text():
    ctx = _context(
        responses={"abs-1": ArtworkResponse("abs-1", Rating.MAYBE, "<script>x</script>")},
        reviewer_name="Tom & Jerry",
    )
    html = render_notification_html(ctx)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Tom &amp; Jerry" in html


def test_html_optional_sections():
    ctx = _context(reviewer_email="jane@example.com", additional_feedback="More bronze")
    ctx.image_urls = ["https://img.example/1.png", "https://img.example/2.png"]
    html = render_notification_html(ctx)

    assert 'href="mailto:jane@example.com"' in html
    assert "More bronze" in html
    assert 'alt="Reference 2"' in html


def test_html_with_nothing_rated():
    html = render_notification_html(_context(responses={}))
    assert "No artworks were rated." in html


def test_slack_summary_is_not_escaped():
    ctx = _context(
        responses={"abs-1": ArtworkResponse("abs-1", Rating.YES, "It's great")},
        additional_feedback="line one\nline two",
    )
    text = render_slack_summary(ctx)

    assert "*Reviewer:* Jane Doe" in text
    assert "It's great" in text
    assert "> line one\n> line two" in text
    assert "&#39;" not in text
