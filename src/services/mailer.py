"""SendGrid adapter for the submission notification email."""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from src.config import SendGridConfig
from src.exceptions import NotificationDispatchError

logger = logging.getLogger(__name__)

_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


@dataclass(slots=True)
class EmailAttachment:
    filename: str
    mime_type: str
    content: str  # base64

    @classmethod
    def from_text(cls, filename: str, mime_type: str, text: str) -> "EmailAttachment":
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        return cls(filename=filename, mime_type=mime_type, content=encoded)


@dataclass(slots=True)
class EmailMessage:
    to_email: str
    from_email: str
    from_name: str
    subject: str
    html: str
    attachments: List[EmailAttachment] = field(default_factory=list)
    reply_to: Optional[str] = None

    def to_sendgrid(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": self.to_email}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": self.subject,
            "content": [{"type": "text/html", "value": self.html}],
            "attachments": [
                {
                    "content": a.content,
                    "filename": a.filename,
                    "type": a.mime_type,
                    "disposition": "attachment",
                }
                for a in self.attachments
            ],
        }
        if self.reply_to:
            body["reply_to"] = {"email": self.reply_to}
        return body


class SendGridMailer:
    """Sends one :class:`EmailMessage` through the SendGrid v3 API."""

    def __init__(
        self,
        config: SendGridConfig,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ) -> None:
        self._config = config
        self._client = client or httpx.Client(timeout=timeout)

    def send(self, message: EmailMessage) -> None:
        """Deliver *message*.

        Raises
        ------
        NotificationDispatchError
            If SendGrid is unreachable or rejects the request. The provider's
            response body is logged here and kept out of the exception text.
        """
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        try:
            resp = self._client.post(_SEND_URL, json=message.to_sendgrid(), headers=headers)
        except httpx.HTTPError as exc:
            raise NotificationDispatchError(f"SendGrid unreachable: {type(exc).__name__}") from exc

        if resp.is_error:
            logger.error("SendGrid error %s: %s", resp.status_code, resp.text)
            raise NotificationDispatchError(f"SendGrid error: {resp.status_code}")

        logger.info(
            "notification_sent",
            extra={"recipient": message.to_email, "attachments": len(message.attachments)},
        )

    def close(self) -> None:
        self._client.close()
