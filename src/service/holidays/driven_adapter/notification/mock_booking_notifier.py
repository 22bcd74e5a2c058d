"""Mock notifier that logs instead of sending real e-mails."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_booking_notifier import IBookingNotifier
from src.service.holidays.driven_adapter.notification.booking_email_template import (
    BOOKING_RECEIVED_SUBJECT,
    PASSWORD_RESET_SUBJECT,
    render_booking_received,
    render_password_reset,
)


class MockBookingNotifier(IBookingNotifier):
    def __init__(self) -> None:
        self.sent_emails: List[Dict[str, Any]] = []  # Store sent emails for testing

    def _record(self, *, email: str, subject: str, body: str) -> None:
        self.sent_emails.append(
            {'to': email, 'subject': subject, 'body': body, 'sent_at': datetime.now(timezone.utc)}
        )
        Logger.base.info(f'📧 [MOCK-MAIL] {subject} -> {email}')

    @Logger.io
    async def notify_booking_received(self, *, email: str, display_name: str) -> None:
        self._record(
            email=email,
            subject=BOOKING_RECEIVED_SUBJECT,
            body=render_booking_received(display_name=display_name),
        )

    @Logger.io
    async def notify_password_reset(self, *, email: str, display_name: str, reset_url: str) -> None:
        self._record(
            email=email,
            subject=PASSWORD_RESET_SUBJECT,
            body=render_password_reset(display_name=display_name, reset_url=reset_url),
        )
