from typing import Any, Awaitable, Callable, Optional

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.holidays_metrics import metrics
from src.service.holidays.app.interface.i_booking_notifier import (
    IBookingNotifier,
    INotificationDispatcher,
)


class BackgroundNotificationDispatcher(INotificationDispatcher):
    """
    Fire-and-forget delivery on the application task group.

    The task group is resolved lazily because the lifespan installs it after
    the container is built. Without one (CLI, unit tests) nothing is sent.
    """

    def __init__(
        self,
        *,
        notifier: IBookingNotifier,
        task_group_provider: Callable[[], Optional[Any]],
    ) -> None:
        self.notifier = notifier
        self.task_group_provider = task_group_provider

    async def _guarded(self, kind: str, email: str, send: Callable[[], Awaitable[None]]) -> None:
        try:
            await send()
        except Exception as e:
            metrics.record_notification(sent=False)
            Logger.base.warning(f'⚠️ [NOTIFY] {kind} mail to {email} failed: {e}')
            return
        metrics.record_notification(sent=True)

    async def _deliver(self, email: str, display_name: str) -> None:
        await self._guarded(
            'Booking-received',
            email,
            lambda: self.notifier.notify_booking_received(email=email, display_name=display_name),
        )

    async def _deliver_password_reset(self, email: str, display_name: str, reset_url: str) -> None:
        await self._guarded(
            'Password-reset',
            email,
            lambda: self.notifier.notify_password_reset(
                email=email, display_name=display_name, reset_url=reset_url
            ),
        )

    def _schedule(self, deliver: Callable[..., Awaitable[None]], *args: str) -> None:
        task_group = self.task_group_provider()
        if task_group is None:
            Logger.base.warning('⚠️ [NOTIFY] No background task group, notification skipped')
            return
        task_group.start_soon(deliver, *args)

    def dispatch_booking_received(self, *, email: str, display_name: str) -> None:
        self._schedule(self._deliver, email, display_name)

    def dispatch_password_reset(self, *, email: str, display_name: str, reset_url: str) -> None:
        self._schedule(self._deliver_password_reset, email, display_name, reset_url)
