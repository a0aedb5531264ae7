"""Configuration constants for the reporting pipeline."""
from __future__ import annotations

import os

# Product name shown in the notification footer and Slack header
TOOL_NAME: str = os.getenv("REPORT_TOOL_NAME", "PA Art Collection Review Tool")

# Slack rejects long chat messages; above this the summary is uploaded as a file
MAX_SLACK_MESSAGE_CHARS: int = int(os.getenv("REPORT_MAX_SLACK_CHARS", "2800"))

# Thumbnail grid width in the HTML email
THUMBNAIL_COLUMNS: int = int(os.getenv("REPORT_THUMBNAIL_COLUMNS", "2"))

CSV_HEADER = ("Category", "Image ID", "Rating", "Comment", "Timestamp")
CSV_SUMMARY_TITLE = "--- SUMMARY ---"
CSV_FEEDBACK_TITLE = "--- ADDITIONAL FEEDBACK ---"
CSV_IMAGES_TITLE = "--- UPLOADED REFERENCE IMAGES ---"
