from abc import ABC, abstractmethod


class IBookingNotifier(ABC):
    """Transport that delivers the booking and account e-mails."""

    @abstractmethod
    async def notify_booking_received(self, *, email: str, display_name: str) -> None:
        pass

    @abstractmethod
    async def notify_password_reset(self, *, email: str, display_name: str, reset_url: str) -> None:
        pass


class INotificationDispatcher(ABC):
    """
    Schedules notifications off the request path.

    Dispatch methods must return immediately and never raise because a send failed.
    """

    @abstractmethod
    def dispatch_booking_received(self, *, email: str, display_name: str) -> None:
        pass

    @abstractmethod
    def dispatch_password_reset(self, *, email: str, display_name: str, reset_url: str) -> None:
        pass
