"""Contest email reminder endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ...core import get_session
from ...services.mail import MailError, Mailer, get_mailer
from ...services.reminders import (
    ReminderValidationError,
    create_reminder,
    send_due_reminders,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reminders"])


@router.post("/reminder")
def set_reminder(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    mailer: Mailer = Depends(get_mailer),
):
    """Register a reminder and send the confirmation email."""

    try:
        reminder = create_reminder(session, mailer, body)
    except ReminderValidationError as exc:
        raise HTTPException(400, str(exc)) from exc
    except MailError as exc:
        logger.error("Email sending error: %s", exc)
        raise HTTPException(500, "Failed to send email") from exc
    return {"message": "Email sent successfully", "id": reminder.id}


@router.get("/send-contest-reminders")
def dispatch_reminders(
    session: Session = Depends(get_session),
    mailer: Mailer = Depends(get_mailer),
):
    """Mail everyone whose contest starts within the reminder window.

    Meant to be hit by an external scheduler every few minutes.
    """

    return send_due_reminders(session, mailer)


__all__ = ["router"]
