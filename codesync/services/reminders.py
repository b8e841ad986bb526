"""Contest email reminders."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session, select

from ..core.config import REMINDER_WINDOW_MINUTES
from ..core.time import parse_iso, time_until, utcnow
from ..models import Reminder
from .mail import MailError, Mailer, render_template

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "name",
    "email",
    "contest_name",
    "start_time",
    "start_time_iso",
    "duration",
    "platform_name",
    "contest_link",
)

CONFIRMATION_TEMPLATE = "reminder_email.html"
DUE_TEMPLATE = "ten_minute_reminder_email.html"

_DISPLAY_RE = re.compile(r"(\w+ \d+, \d+), (.+)")


class ReminderValidationError(ValueError):
    pass


def split_display_time(start_time: str) -> Tuple[str, str]:
    """Split ``"Jan 5, 2025, 2:30 PM UTC"`` into its date and time halves."""

    match = _DISPLAY_RE.match(start_time)
    if match:
        return match.group(1), match.group(2)
    parts = [part.strip() for part in start_time.split(",")]
    return ", ".join(parts[:2]), parts[-1]


def create_reminder(
    session: Session,
    mailer: Mailer,
    payload: Dict[str, Any],
    now: Optional[datetime] = None,
) -> Reminder:
    """Send the confirmation mail and persist the reminder.

    Nothing is stored if the mail cannot be sent.
    """

    values = {field: str(payload.get(field) or "").strip() for field in REQUIRED_FIELDS}
    if not all(values.values()):
        raise ReminderValidationError("Missing required fields")
    starts_at = parse_iso(values["start_time_iso"])
    if starts_at is None:
        raise ReminderValidationError("Invalid start_time_iso")

    start_date, start_clock = split_display_time(values["start_time"])
    html = render_template(
        CONFIRMATION_TEMPLATE,
        {
            "CONTEST_NAME": values["contest_name"],
            "START_DATE": start_date,
            "START_TIME": start_clock,
            "DURATION": values["duration"],
            "PLATFORM_NAME": values["platform_name"],
            "PLATFORM_CLASS": values["platform_name"].lower(),
            "CONTEST_URL": values["contest_link"],
            "PLATFORM_URL": values["contest_link"],
            "TIME_UNTIL": time_until(starts_at, now) or "less than a minute",
        },
    )
    mailer.send(
        values["email"], f"Reminder Setup for Contest: {values['contest_name']}", html
    )

    reminder = Reminder(starts_at=starts_at, **values)
    session.add(reminder)
    session.commit()
    session.refresh(reminder)
    return reminder


def due_reminders(session: Session, now: datetime) -> List[Reminder]:
    horizon = now + timedelta(minutes=REMINDER_WINDOW_MINUTES)
    return list(
        session.exec(
            select(Reminder)
            .where(
                Reminder.starts_at > now,
                Reminder.starts_at <= horizon,
                Reminder.notified_at == None,  # noqa: E711
            )
            .order_by(Reminder.starts_at)
        ).all()
    )


def send_due_reminders(
    session: Session, mailer: Mailer, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Mail every reminder whose contest starts within the reminder window."""

    now = now or utcnow()
    reminders = due_reminders(session, now)
    details = [
        {
            "email": r.email,
            "contest_name": r.contest_name,
            "platform": r.platform_name,
            "start_time": r.start_time,
            "duration": r.duration,
            "contest_url": r.contest_link,
        }
        for r in reminders
    ]
    if not reminders:
        return {"message": "No contests to send reminders for", "contests": []}

    sent = 0
    for reminder in reminders:
        html = render_template(
            DUE_TEMPLATE,
            {
                "CONTEST_NAME": reminder.contest_name,
                "PLATFORM_NAME": reminder.platform_name,
                "CONTEST_URL": reminder.contest_link,
                "START_TIME": reminder.start_time,
                "DURATION": reminder.duration,
            },
        )
        try:
            mailer.send(
                reminder.email, f"Urgent: {reminder.contest_name} starts in 10 mins!", html
            )
        except MailError as exc:
            logger.error("Reminder %s not delivered: %s", reminder.id, exc)
            continue
        reminder.notified_at = now
        session.add(reminder)
        sent += 1
    session.commit()

    return {
        "message": "Reminders processed",
        "total_processed": len(reminders),
        "sent": sent,
        "failed": len(reminders) - sent,
        "contests": details,
    }


__all__ = [
    "REQUIRED_FIELDS",
    "ReminderValidationError",
    "create_reminder",
    "due_reminders",
    "send_due_reminders",
    "split_display_time",
]
