from email.message import EmailMessage
import smtplib

import anyio.to_thread
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_booking_notifier import IBookingNotifier
from src.service.holidays.driven_adapter.notification.booking_email_template import (
    BOOKING_RECEIVED_SUBJECT,
    PASSWORD_RESET_SUBJECT,
    render_booking_received,
    render_password_reset,
)


class SmtpBookingNotifier(IBookingNotifier):
    """
    Sends the booking and account e-mails over SMTP.

    smtplib is blocking, so the send runs in a worker thread.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: SecretStr,
        sender: str,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, *, email: str, subject: str, text: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message['From'] = self.sender
        message['To'] = email
        message['Subject'] = subject
        message.set_content(text)
        message.add_alternative(html, subtype='html')
        return message

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
            if self.use_tls:
                client.starttls()
            if self.username:
                client.login(self.username, self.password.get_secret_value())
            client.send_message(message)

    @Logger.io
    async def notify_booking_received(self, *, email: str, display_name: str) -> None:
        message = self._build_message(
            email=email,
            subject=BOOKING_RECEIVED_SUBJECT,
            text='Your tour request reservation is received.',
            html=render_booking_received(display_name=display_name),
        )
        await anyio.to_thread.run_sync(self._send, message)
        Logger.base.info(f'📧 [SMTP] Booking-received mail sent to {email}')

    @Logger.io
    async def notify_password_reset(self, *, email: str, display_name: str, reset_url: str) -> None:
        message = self._build_message(
            email=email,
            subject=PASSWORD_RESET_SUBJECT,
            text=f'Reset your password: {reset_url}',
            html=render_password_reset(display_name=display_name, reset_url=reset_url),
        )
        await anyio.to_thread.run_sync(self._send, message)
        Logger.base.info(f'📧 [SMTP] Password-reset mail sent to {email}')
