from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import select

from codesync.core.time import format_display, to_utc_iso
from codesync.models import Reminder
from codesync.services.mail import MailError, render_template
from codesync.services.reminders import (
    ReminderValidationError,
    create_reminder,
    send_due_reminders,
    split_display_time,
)

from .conftest import FakeMailer

NOW = datetime(2025, 1, 5, 14, 0, tzinfo=timezone.utc)


def reminder_payload(starts_at, email="dev@example.com", **overrides):
    payload = {
        "name": "Dev",
        "email": email,
        "contest_name": "Weekly Contest 430",
        "start_time": format_display(starts_at),
        "start_time_iso": to_utc_iso(starts_at),
        "duration": "1.5 hours",
        "platform_name": "LeetCode",
        "contest_link": "https://leetcode.com/contest/weekly-contest-430",
    }
    payload.update(overrides)
    return payload


def test_split_display_time():
    assert split_display_time("Jan 5, 2025, 2:30 PM UTC") == ("Jan 5, 2025", "2:30 PM UTC")


def test_render_template_leaves_unknown_markers():
    html = render_template("ten_minute_reminder_email.html", {"CONTEST_NAME": "Starters 170"})
    assert "Starters 170" in html
    assert "{{CONTEST_URL}}" in html


def test_create_reminder_sends_confirmation(session, mailer):
    starts_at = NOW + timedelta(days=1, hours=2)
    reminder = create_reminder(session, mailer, reminder_payload(starts_at), now=NOW)

    assert reminder.id is not None
    assert len(mailer.sent) == 1
    sent = mailer.sent[0]
    assert sent["to"] == "dev@example.com"
    assert sent["subject"] == "Reminder Setup for Contest: Weekly Contest 430"
    assert "1 days 2 hours" in sent["html"]
    assert "{{" not in sent["html"]


def test_create_reminder_requires_every_field(session, mailer):
    payload = reminder_payload(NOW + timedelta(days=1), contest_link="")
    with pytest.raises(ReminderValidationError, match="Missing required fields"):
        create_reminder(session, mailer, payload, now=NOW)
    assert mailer.sent == []


def test_create_reminder_rejects_bad_iso(session, mailer):
    payload = reminder_payload(NOW + timedelta(days=1), start_time_iso="tomorrow")
    with pytest.raises(ReminderValidationError, match="Invalid start_time_iso"):
        create_reminder(session, mailer, payload, now=NOW)


def test_nothing_stored_when_mail_fails(session):
    mailer = FakeMailer(fail_for=("dev@example.com",))
    with pytest.raises(MailError):
        create_reminder(session, mailer, reminder_payload(NOW + timedelta(days=1)), now=NOW)
    assert session.exec(select(Reminder)).all() == []


def test_send_due_reminders_only_in_window(session, mailer):
    create_reminder(
        session, mailer, reminder_payload(NOW + timedelta(minutes=10), email="soon@x.io"), now=NOW
    )
    create_reminder(
        session, mailer, reminder_payload(NOW + timedelta(hours=2), email="later@x.io"), now=NOW
    )
    create_reminder(
        session, mailer, reminder_payload(NOW - timedelta(minutes=5), email="past@x.io"), now=NOW
    )
    mailer.sent.clear()

    result = send_due_reminders(session, mailer, now=NOW)

    assert result["message"] == "Reminders processed"
    assert result["total_processed"] == 1
    assert result["sent"] == 1
    assert result["failed"] == 0
    assert [c["email"] for c in result["contests"]] == ["soon@x.io"]
    assert mailer.sent[0]["subject"] == "Urgent: Weekly Contest 430 starts in 10 mins!"


def test_due_reminders_are_not_sent_twice(session, mailer):
    create_reminder(session, mailer, reminder_payload(NOW + timedelta(minutes=10)), now=NOW)

    send_due_reminders(session, mailer, now=NOW)
    second = send_due_reminders(session, mailer, now=NOW + timedelta(minutes=1))

    assert second == {"message": "No contests to send reminders for", "contests": []}


def test_failed_delivery_is_retried(session, mailer):
    create_reminder(session, mailer, reminder_payload(NOW + timedelta(minutes=10)), now=NOW)

    flaky = FakeMailer(fail_for=("dev@example.com",))
    first = send_due_reminders(session, flaky, now=NOW)
    assert (first["sent"], first["failed"]) == (0, 1)

    second = send_due_reminders(session, mailer, now=NOW + timedelta(minutes=1))
    assert second["sent"] == 1
