"""Optional Slack mirror of each submission notification."""
from __future__ import annotations

import logging
from typing import Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from src.config import SlackConfig
from src.reporting import config as report_config
from src.reporting.context import NotificationContext
from src.reporting.render import render_slack_summary

logger = logging.getLogger(__name__)


class SlackNotifier:
    """Posts a short parent message and a threaded summary to one channel."""

    def __init__(self, config: SlackConfig, *, client: Optional[WebClient] = None) -> None:
        self._channel = config.channel
        self._client = client or WebClient(token=config.bot_token)

    def post_submission(
        self, *, context: NotificationContext, csv_text: str, csv_filename: str
    ) -> bool:
        """Mirror the notification to Slack. Returns False (and logs) on failure."""
        try:
            parent_resp = self._client.chat_postMessage(
                channel=self._channel,
                text=f"*Art Review Submission from {context.reviewer_name}*",
            )
            parent_ts = parent_resp["ts"]

            summary = render_slack_summary(context)
            if len(summary) < report_config.MAX_SLACK_MESSAGE_CHARS:
                logger.debug("Posting summary as chat message (len=%d)", len(summary))
                self._client.chat_postMessage(
                    channel=self._channel,
                    text=summary,
                    thread_ts=parent_ts,
                )
            else:
                logger.debug("Uploading CSV instead of long summary (len=%d)", len(summary))
                self._client.files_upload_v2(
                    channel=self._channel,
                    title=f"Art review from {context.reviewer_name}",
                    content=csv_text,
                    filename=csv_filename,
                    thread_ts=parent_ts,
                )
        except SlackApiError as exc:
            logger.warning(
                "Slack mirror failed for %s: %s",
                context.reviewer_name,
                exc.response.get("error"),
            )
            return False
        return True
