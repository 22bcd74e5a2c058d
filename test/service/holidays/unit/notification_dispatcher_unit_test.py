"""
Unit tests for booking-received notifications

Test Coverage:
1. Mock notifier content (subject, greeting by first name, escaping)
2. Background dispatch on a real task group
3. Delivery failures are swallowed and never reach the caller
4. No task group installed
5. Password-reset mail content and dispatch
"""

from unittest.mock import AsyncMock, MagicMock

import anyio
import pytest
from pydantic import SecretStr

from src.service.holidays.driven_adapter.notification.background_notification_dispatcher import (
    BackgroundNotificationDispatcher,
)
from src.service.holidays.driven_adapter.notification.booking_email_template import (
    BOOKING_RECEIVED_SUBJECT,
    PASSWORD_RESET_SUBJECT,
    greeting_name,
    render_booking_received,
    render_password_reset,
)
from src.service.holidays.driven_adapter.notification.mock_booking_notifier import (
    MockBookingNotifier,
)
from src.service.holidays.driven_adapter.notification.smtp_booking_notifier import (
    SmtpBookingNotifier,
)


pytestmark = pytest.mark.unit


class TestBookingEmailTemplate:
    @pytest.mark.parametrize(
        'display_name,expected',
        [
            ('Jane Traveller', 'Jane'),
            ('Cher', 'Cher'),
            ('  Ada   Lovelace ', 'Ada'),
            ('', ''),
        ],
    )
    def test_greeting_uses_first_word(self, display_name, expected):
        assert greeting_name(display_name) == expected

    def test_body_greets_by_first_name_and_escapes(self):
        body = render_booking_received(display_name='<b>Eve</b> Hacker')

        assert 'Dear &lt;b&gt;Eve&lt;/b&gt;,' in body
        assert '<b>Eve</b>' not in body


class TestMockBookingNotifier:
    async def test_records_sent_email(self):
        notifier = MockBookingNotifier()

        await notifier.notify_booking_received(
            email='jane@holidays-planner.com', display_name='Jane Traveller'
        )

        assert len(notifier.sent_emails) == 1
        sent = notifier.sent_emails[0]
        assert sent['to'] == 'jane@holidays-planner.com'
        assert sent['subject'] == BOOKING_RECEIVED_SUBJECT
        assert 'Dear Jane,' in sent['body']


class TestSmtpBookingNotifier:
    def test_builds_html_message(self):
        notifier = SmtpBookingNotifier(
            host='smtp.holidays-planner.com',
            port=587,
            username='mailer@holidays-planner.com',
            password=SecretStr('secret'),
            sender='',
        )

        message = notifier._build_message(
            email='jane@holidays-planner.com',
            subject=BOOKING_RECEIVED_SUBJECT,
            text='Your tour request reservation is received.',
            html=render_booking_received(display_name='Jane Traveller'),
        )

        assert message['From'] == 'mailer@holidays-planner.com'
        assert message['To'] == 'jane@holidays-planner.com'
        assert message['Subject'] == BOOKING_RECEIVED_SUBJECT
        html = message.get_body(preferencelist=('html',))
        assert 'Dear Jane,' in html.get_content()

    async def test_send_runs_off_the_event_loop(self):
        notifier = SmtpBookingNotifier(
            host='smtp.holidays-planner.com',
            port=587,
            username='',
            password=SecretStr(''),
            sender='bookings@holidays-planner.com',
        )
        notifier._send = MagicMock()

        await notifier.notify_booking_received(
            email='jane@holidays-planner.com', display_name='Jane'
        )

        notifier._send.assert_called_once()
        message = notifier._send.call_args.args[0]
        assert message['To'] == 'jane@holidays-planner.com'


class TestBackgroundNotificationDispatcher:
    async def test_delivers_on_task_group(self):
        # Given: a dispatcher bound to a live task group
        notifier = MockBookingNotifier()

        async with anyio.create_task_group() as tg:
            dispatcher = BackgroundNotificationDispatcher(
                notifier=notifier, task_group_provider=lambda: tg
            )

            # When: dispatching (synchronous call, returns immediately)
            result = dispatcher.dispatch_booking_received(
                email='jane@holidays-planner.com', display_name='Jane Traveller'
            )
            assert result is None

        # Then: the task group has drained and the mail went out once
        assert [e['to'] for e in notifier.sent_emails] == ['jane@holidays-planner.com']

    async def test_failing_notifier_does_not_propagate(self):
        # Given: a notifier whose transport is down
        notifier = AsyncMock()
        notifier.notify_booking_received.side_effect = ConnectionError('smtp down')

        # When: dispatching inside a task group
        async with anyio.create_task_group() as tg:
            dispatcher = BackgroundNotificationDispatcher(
                notifier=notifier, task_group_provider=lambda: tg
            )
            dispatcher.dispatch_booking_received(
                email='jane@holidays-planner.com', display_name='Jane'
            )

        # Then: the task group exits cleanly; delivery was attempted once
        notifier.notify_booking_received.assert_awaited_once_with(
            email='jane@holidays-planner.com', display_name='Jane'
        )

    def test_without_task_group_nothing_is_sent(self):
        notifier = AsyncMock()
        dispatcher = BackgroundNotificationDispatcher(
            notifier=notifier, task_group_provider=lambda: None
        )

        dispatcher.dispatch_booking_received(email='jane@holidays-planner.com', display_name='J')

        notifier.notify_booking_received.assert_not_called()

    def test_schedules_exactly_one_task(self):
        task_group = MagicMock()
        dispatcher = BackgroundNotificationDispatcher(
            notifier=MockBookingNotifier(), task_group_provider=lambda: task_group
        )

        dispatcher.dispatch_booking_received(email='jane@holidays-planner.com', display_name='J')

        task_group.start_soon.assert_called_once_with(
            dispatcher._deliver, 'jane@holidays-planner.com', 'J'
        )


RESET_URL = 'http://localhost:3000/reset-password/abc.def.ghi'


class TestPasswordResetMail:
    def test_body_links_to_reset_url(self):
        body = render_password_reset(display_name='Jane Traveller', reset_url=RESET_URL)

        assert 'Dear Jane,' in body
        assert f'href="{RESET_URL}"' in body

    def test_reset_url_is_escaped(self):
        body = render_password_reset(display_name='Jane', reset_url='http://x.test/"><script>')

        assert '<script>' not in body
        assert '&quot;&gt;&lt;script&gt;' in body

    async def test_mock_notifier_records_reset_mail(self):
        notifier = MockBookingNotifier()

        await notifier.notify_password_reset(
            email='jane@holidays-planner.com', display_name='Jane Traveller', reset_url=RESET_URL
        )

        sent = notifier.sent_emails[0]
        assert sent['subject'] == PASSWORD_RESET_SUBJECT
        assert RESET_URL in sent['body']

    async def test_smtp_notifier_sends_reset_mail(self):
        notifier = SmtpBookingNotifier(
            host='smtp.holidays-planner.com',
            port=587,
            username='',
            password=SecretStr(''),
            sender='accounts@holidays-planner.com',
        )
        notifier._send = MagicMock()

        await notifier.notify_password_reset(
            email='jane@holidays-planner.com', display_name='Jane', reset_url=RESET_URL
        )

        message = notifier._send.call_args.args[0]
        assert message['Subject'] == PASSWORD_RESET_SUBJECT
        assert RESET_URL in message.get_body(preferencelist=('plain',)).get_content()

    def test_dispatch_schedules_reset_delivery(self):
        task_group = MagicMock()
        dispatcher = BackgroundNotificationDispatcher(
            notifier=MockBookingNotifier(), task_group_provider=lambda: task_group
        )

        dispatcher.dispatch_password_reset(
            email='jane@holidays-planner.com', display_name='J', reset_url=RESET_URL
        )

        task_group.start_soon.assert_called_once_with(
            dispatcher._deliver_password_reset, 'jane@holidays-planner.com', 'J', RESET_URL
        )

    async def test_failing_reset_delivery_does_not_propagate(self):
        notifier = AsyncMock()
        notifier.notify_password_reset.side_effect = ConnectionError('smtp down')

        async with anyio.create_task_group() as tg:
            dispatcher = BackgroundNotificationDispatcher(
                notifier=notifier, task_group_provider=lambda: tg
            )
            dispatcher.dispatch_password_reset(
                email='jane@holidays-planner.com', display_name='J', reset_url=RESET_URL
            )

        notifier.notify_password_reset.assert_awaited_once()
