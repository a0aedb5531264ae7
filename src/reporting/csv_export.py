"""Render a submission as the spreadsheet-friendly CSV attachment.

Layout::

    Category,Image ID,Rating,Comment,Timestamp
    "Impressionist","impr-3","yes","Love the light","2024-..."
    ...
    <blank>
    <blank>
    --- SUMMARY ---
    Reviewer,Jane Doe
    ...

Data rows quote every cell. Free text never spans physical lines: embedded
newlines become a single space and quotes are doubled by :mod:`csv`.
"""
from __future__ import annotations

import csv
import io
import re
from typing import Sequence

from src.models import SubmissionPayload
from src.reporting import config
from src.reporting.aggregator import sorted_by_category, tally_ratings

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def flatten(text: str, replacement: str = " ") -> str:
    """Replace every line break in *text* with *replacement* (default a space)."""
    return _NEWLINE_RE.sub(replacement, text)


def render_csv(payload: SubmissionPayload, image_urls: Sequence[str]) -> str:
    """Return the CSV document for *payload* and the archived *image_urls*."""
    buf = io.StringIO()
    quoted = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    plain = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")

    plain.writerow(config.CSV_HEADER)
    for category, response in sorted_by_category(payload.responses):
        quoted.writerow(
            [
                category,
                flatten(response.artwork_id),
                response.rating.value,
                flatten(response.comment),
                flatten(response.timestamp or ""),
            ]
        )

    reviewed = payload.reviewed_responses
    counts = tally_ratings(reviewed.values())

    buf.write("\n\n")
    buf.write(config.CSV_SUMMARY_TITLE + "\n")
    plain.writerow(["Reviewer", flatten(payload.reviewer_name)])
    plain.writerow(["Submitted", flatten(payload.submitted_at)])
    plain.writerow(["Total Responses", len(reviewed)])
    plain.writerow(["Thumbs Up (Yes)", counts.yes])
    plain.writerow(["Maybe", counts.maybe])
    plain.writerow(["Thumbs Down (No)", counts.no])

    if payload.additional_feedback.strip():
        buf.write("\n\n")
        buf.write(config.CSV_FEEDBACK_TITLE + "\n")
        quoted.writerow([flatten(payload.additional_feedback)])

    if image_urls:
        buf.write("\n\n")
        buf.write(config.CSV_IMAGES_TITLE + "\n")
        for idx, url in enumerate(image_urls, start=1):
            plain.writerow([f"Image {idx}", url])

    return buf.getvalue()
