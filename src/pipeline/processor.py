"""The submission pipeline: validate, archive, render, notify, report.

One call to :meth:`SubmissionPipeline.process_submission` handles one
reviewer submission end to end. Only validation errors escape to the caller
as a client error; image and notification problems degrade to log records so
the reviewer's input is never lost because a downstream service misbehaved.
"""
from __future__ import annotations

import datetime
import logging
from concurrent.futures import Executor
from typing import Any, Callable, List, Mapping, Optional

from src.config import AppConfig
from src.exceptions import NotificationDispatchError
from src.models import ProcessResult, SubmissionPayload
from src.pipeline.uploads import ImageHost, successful_urls, upload_all
from src.reporting.context import build_notification_context
from src.reporting.csv_export import render_csv
from src.reporting.json_backup import render_json_backup
from src.reporting.render import render_notification_html
from src.services.image_host import CloudinaryImageHost, reviewer_slug
from src.services.mailer import EmailAttachment, EmailMessage, SendGridMailer
from src.services.slack_notifier import SlackNotifier

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Review submitted successfully"


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def attachment_basename(reviewer_name: str, when: datetime.datetime) -> str:
    """``art-review-jane-doe-2024-05-01``."""
    return f"art-review-{reviewer_slug(reviewer_name)}-{when.date().isoformat()}"


class SubmissionPipeline:
    """Processes one :class:`SubmissionPayload` per call; holds no per-request state."""

    def __init__(
        self,
        config: AppConfig,
        *,
        image_host: Optional[ImageHost] = None,
        mailer: Optional[SendGridMailer] = None,
        slack: Optional[SlackNotifier] = None,
        executor: Optional[Executor] = None,
        clock: Callable[[], datetime.datetime] = _utc_now,
    ) -> None:
        self._config = config
        self._image_host = image_host
        self._mailer = mailer
        self._slack = slack
        self._executor = executor
        self._clock = clock

    @classmethod
    def from_config(
        cls, config: AppConfig, *, executor: Optional[Executor] = None
    ) -> "SubmissionPipeline":
        """Wire up the real collaborators that *config* enables."""
        image_host = (
            CloudinaryImageHost(config.cloudinary, timeout=config.http_timeout_seconds)
            if config.cloudinary
            else None
        )
        mailer = (
            SendGridMailer(config.sendgrid, timeout=config.http_timeout_seconds)
            if config.sendgrid
            else None
        )
        slack = SlackNotifier(config.slack) if config.slack else None
        return cls(config, image_host=image_host, mailer=mailer, slack=slack, executor=executor)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process_submission(self, raw: Mapping[str, Any]) -> ProcessResult:
        """Validate the decoded request body *raw*, then :meth:`process` it.

        Raises
        ------
        SubmissionValidationError
            Before any upload, rendering or dispatch happens.
        """
        payload = SubmissionPayload.from_dict(raw)
        return self.process(payload)

    def process(self, payload: SubmissionPayload) -> ProcessResult:
        logger.info(
            "submission_received",
            extra={
                "reviewer": payload.reviewer_name,
                "responses": len(payload.responses),
                "images": len(payload.uploaded_images),
            },
        )
        now = self._clock()
        processed_at = now.isoformat()

        image_urls = self._archive_images(payload)

        csv_text = render_csv(payload, image_urls)
        json_text = render_json_backup(payload, image_urls, processed_at)
        context = build_notification_context(payload, image_urls, received_at=processed_at)
        html = render_notification_html(context)

        basename = attachment_basename(payload.reviewer_name, now)
        notified = self._dispatch(payload, html, csv_text, json_text, basename)

        self._mirror_to_slack(context, csv_text, basename)

        logger.info(
            "Submission from %s processed: %d/%d image(s) archived, notified=%s",
            payload.reviewer_name,
            len(image_urls),
            len(payload.uploaded_images),
            notified,
        )
        return ProcessResult(
            success=True,
            message=SUCCESS_MESSAGE,
            uploaded_count=len(image_urls),
            image_urls=image_urls,
            notified=notified,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _archive_images(self, payload: SubmissionPayload) -> List[str]:
        if not payload.uploaded_images:
            return []
        folder = f"{self._config.upload_folder}/{reviewer_slug(payload.reviewer_name)}"
        outcomes = upload_all(
            payload.uploaded_images,
            self._image_host,
            folder,
            executor=self._executor,
            max_workers=self._config.upload_max_workers,
        )
        return successful_urls(outcomes)

    def _dispatch(
        self,
        payload: SubmissionPayload,
        html: str,
        csv_text: str,
        json_text: str,
        basename: str,
    ) -> bool:
        """Email the notification; fall back to the log. Returns True if sent."""
        if self._mailer is None:
            logger.info("Email provider not configured, logging submission instead")
            self._log_fallback(payload, json_text)
            return False

        message = EmailMessage(
            to_email=self._config.notification_email,
            from_email=self._config.from_email,
            from_name=self._config.from_name,
            subject=f"Art Review Submission from {payload.reviewer_name}",
            html=html,
            attachments=[
                EmailAttachment.from_text(f"{basename}.csv", "text/csv", csv_text),
                EmailAttachment.from_text(f"{basename}.json", "application/json", json_text),
            ],
            reply_to=payload.reviewer_email,
        )
        try:
            self._mailer.send(message)
        except NotificationDispatchError as exc:
            logger.error("Notification dispatch failed for %s: %s", payload.reviewer_name, exc)
            self._log_fallback(payload, json_text)
            return False
        return True

    def _mirror_to_slack(self, context, csv_text: str, basename: str) -> None:
        if self._slack is None:
            return
        try:
            self._slack.post_submission(
                context=context, csv_text=csv_text, csv_filename=f"{basename}.csv"
            )
        except Exception:  # noqa: BLE001 – best-effort mirror
            logger.exception("Unexpected error mirroring submission to Slack")

    @staticmethod
    def _log_fallback(payload: SubmissionPayload, json_text: str) -> None:
        """Write the submission to the operational log in place of the email."""
        separator = "=" * 50
        # Single WARNING record carrying the whole submission.
        logger.warning(
            "notification_fallback\n%s\nReviewer: %s\nSubmitted: %s\nResponses: %d\n"
            "Additional Feedback: %s\n%s\nFULL DATA: %s",
            separator,
            payload.reviewer_name,
            payload.submitted_at,
            len(payload.responses),
            payload.additional_feedback or "(none)",
            separator,
            json_text,
            extra={"reviewer": payload.reviewer_name, "submitted_at": payload.submitted_at},
        )
