"""Service configuration, resolved once at startup.

Credentials are read from the process environment (optionally seeded from a
``.env`` file by :mod:`src.app`) into an immutable :class:`AppConfig` that is
handed to the pipeline. Nothing downstream reads ``os.environ`` mid-request.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_EMAIL = "alex@pearhaus.com"
DEFAULT_FROM_EMAIL = "noreply@pearhaus.com"
DEFAULT_FROM_NAME = "PA Art Review"
DEFAULT_UPLOAD_FOLDER = "pa-art-review-submissions"


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: str
    api_key: str
    api_secret: str


@dataclass(frozen=True)
class SendGridConfig:
    api_key: str


@dataclass(frozen=True)
class SlackConfig:
    bot_token: str
    channel: str


@dataclass(frozen=True)
class AppConfig:
    """Everything the submission pipeline needs to talk to its collaborators."""

    notification_email: str = DEFAULT_NOTIFICATION_EMAIL
    from_email: str = DEFAULT_FROM_EMAIL
    from_name: str = DEFAULT_FROM_NAME
    upload_folder: str = DEFAULT_UPLOAD_FOLDER
    cloudinary: Optional[CloudinaryConfig] = None
    sendgrid: Optional[SendGridConfig] = None
    slack: Optional[SlackConfig] = None
    upload_max_workers: int = 4
    http_timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build and validate a config from *environ* (default ``os.environ``).

        Raises
        ------
        ConfigurationError
            On partial credential sets or out-of-range numeric values.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(name)
            return value.strip() if value and value.strip() else None

        folder = _get("CLOUDINARY_FOLDER") or DEFAULT_UPLOAD_FOLDER

        cloudinary_parts = {
            "CLOUDINARY_CLOUD_NAME": _get("CLOUDINARY_CLOUD_NAME"),
            "CLOUDINARY_API_KEY": _get("CLOUDINARY_API_KEY"),
            "CLOUDINARY_API_SECRET": _get("CLOUDINARY_API_SECRET"),
        }
        cloudinary = None
        if all(cloudinary_parts.values()):
            cloudinary = CloudinaryConfig(
                cloud_name=cloudinary_parts["CLOUDINARY_CLOUD_NAME"],
                api_key=cloudinary_parts["CLOUDINARY_API_KEY"],
                api_secret=cloudinary_parts["CLOUDINARY_API_SECRET"],
            )
        elif any(cloudinary_parts.values()):
            missing = sorted(k for k, v in cloudinary_parts.items() if not v)
            raise ConfigurationError(
                f"Incomplete Cloudinary credentials; missing {', '.join(missing)}"
            )

        sendgrid_key = _get("SENDGRID_API_KEY")
        sendgrid = SendGridConfig(api_key=sendgrid_key) if sendgrid_key else None

        slack_token = _get("SLACK_BOT_TOKEN")
        slack_channel = _get("SLACK_NOTIFY_CHANNEL")
        slack = None
        if slack_token and slack_channel:
            slack = SlackConfig(bot_token=slack_token, channel=slack_channel)
        elif slack_channel and not slack_token:
            raise ConfigurationError("SLACK_NOTIFY_CHANNEL is set but SLACK_BOT_TOKEN is not")

        config = cls(
            notification_email=_get("NOTIFICATION_EMAIL") or DEFAULT_NOTIFICATION_EMAIL,
            from_email=_get("NOTIFICATION_FROM_EMAIL") or DEFAULT_FROM_EMAIL,
            from_name=_get("NOTIFICATION_FROM_NAME") or DEFAULT_FROM_NAME,
            upload_folder=folder,
            cloudinary=cloudinary,
            sendgrid=sendgrid,
            slack=slack,
            upload_max_workers=_parse_positive(
                "UPLOAD_MAX_WORKERS", _get("UPLOAD_MAX_WORKERS"), 4, int
            ),
            http_timeout_seconds=_parse_positive(
                "HTTP_TIMEOUT_SECONDS", _get("HTTP_TIMEOUT_SECONDS"), 30.0, float
            ),
        )
        config.validate()
        return config

    def validate(self) -> None:
        for label, address in (
            ("NOTIFICATION_EMAIL", self.notification_email),
            ("NOTIFICATION_FROM_EMAIL", self.from_email),
        ):
            if "@" not in address:
                raise ConfigurationError(f"{label} '{address}' is not an email address")
        if self.upload_max_workers <= 0:
            raise ConfigurationError("upload_max_workers must be positive")
        if self.http_timeout_seconds <= 0:
            raise ConfigurationError("http_timeout_seconds must be positive")

    def log_summary(self) -> None:
        """Log which collaborators are configured (never the secrets)."""
        logger.info(
            "Configuration loaded: image_host=%s email=%s slack=%s recipient=%s",
            "cloudinary" if self.cloudinary else "disabled",
            "sendgrid" if self.sendgrid else "disabled (log fallback)",
            self.slack.channel if self.slack else "disabled",
            self.notification_email,
        )


def _parse_positive(name: str, raw: Optional[str], default, cast):
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got '{raw}'")
    return value
