"""Render submission notifications using Jinja2 templates."""
from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.reporting.context import NotificationContext

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Reviewer text lands in the email body, so HTML templates are escaped.
# Slack markdown must not be: escaping breaks apostrophes etc.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html.j2",), default=False),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_notification_html(context: NotificationContext) -> str:
    """Render the HTML email body for *context*."""
    template = _env.get_template("notification.html.j2")
    html = template.render(**context.to_dict())
    logger.debug("Rendered notification for %s (len=%d)", context.reviewer_name, len(html))
    return html


def render_slack_summary(context: NotificationContext) -> str:
    """Render the Slack-flavoured markdown summary for *context*."""
    template = _env.get_template("slack_summary.md.j2")
    return template.render(**context.to_dict()).strip()
