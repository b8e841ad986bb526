"""Outgoing email over SMTP and HTML template rendering."""

from __future__ import annotations

import html
import logging
import re
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Mapping

from ..core.config import (
    SMTP_FROM,
    SMTP_HOST,
    SMTP_PASS,
    SMTP_PORT,
    SMTP_STARTTLS,
    SMTP_USER,
)

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")


class MailError(RuntimeError):
    """Raised when a message could not be handed to the SMTP relay."""


def render_template(name: str, values: Mapping[str, str]) -> str:
    """Fill ``{{PLACEHOLDER}}`` markers with HTML-escaped values.

    Unknown markers are left untouched.
    """

    def fill(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        return html.escape(str(values[key]))

    template = (TEMPLATE_DIR / name).read_text(encoding="utf-8")
    return _PLACEHOLDER_RE.sub(fill, template)


class Mailer:
    def __init__(
        self,
        host: str = SMTP_HOST,
        port: int = SMTP_PORT,
        user: str = SMTP_USER,
        password: str = SMTP_PASS,
        sender: str = SMTP_FROM,
        starttls: bool = SMTP_STARTTLS,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.starttls = starttls

    def send(self, to: str, subject: str, body: str) -> None:
        if not self.host:
            raise MailError("SMTP_HOST is not configured")

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=30) as smtp:
                if self.starttls:
                    smtp.starttls()
                if self.user:
                    smtp.login(self.user, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailError(f"Failed to send mail to {to}: {exc}") from exc
        logger.info("Sent %r to %s", subject, to)


def get_mailer() -> Mailer:
    """FastAPI dependency returning the configured mailer."""

    return Mailer()


__all__ = ["MailError", "Mailer", "TEMPLATE_DIR", "get_mailer", "render_template"]
