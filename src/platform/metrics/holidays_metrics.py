from typing import Optional

from prometheus_client import Counter, Histogram


# Label values for the client-supplied payment method; anything else is `other`
PAYMENT_METHOD_LABELS = frozenset({'card', 'cash', 'paypal', 'bank_transfer'})


def payment_method_label(payment_method: Optional[str]) -> str:
    if not payment_method or not payment_method.strip():
        return 'none'
    normalized = '_'.join(payment_method.strip().lower().replace('-', ' ').split())
    if normalized.endswith('card'):
        return 'card'
    return normalized if normalized in PAYMENT_METHOD_LABELS else 'other'


class HolidaysMetrics:
    """
    Booking pipeline metrics

    Tracks booking writes, the notification side channel and checkout handoffs
    """

    def __init__(self) -> None:
        self.bookings_created = Counter(
            'holidays_bookings_created_total',
            'Bookings created',
            ['payment_method'],  # payment_method: card/cash/paypal/bank_transfer/other/none
        )

        self.booking_writes = Counter(
            'holidays_booking_writes_total',
            'Booking replace/patch/delete operations',
            ['operation', 'result'],  # operation: replace/patch/delete
        )

        self.notifications = Counter(
            'holidays_booking_notifications_total',
            'Booking confirmation e-mails dispatched',
            ['result'],  # result: sent/failed
        )

        self.checkout_sessions = Counter(
            'holidays_checkout_sessions_total',
            'Checkout sessions requested from the payment provider',
            ['result'],
        )

        self.checkout_duration = Histogram(
            'holidays_checkout_session_duration_seconds',
            'Payment provider round trip for checkout sessions',
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

    def record_booking_created(self, *, payment_method: str | None) -> None:
        self.bookings_created.labels(payment_method=payment_method_label(payment_method)).inc()

    def record_booking_write(self, *, operation: str, result: str) -> None:
        self.booking_writes.labels(operation=operation, result=result).inc()

    def record_notification(self, *, sent: bool) -> None:
        self.notifications.labels(result='sent' if sent else 'failed').inc()

    def record_checkout_session(self, *, result: str) -> None:
        self.checkout_sessions.labels(result=result).inc()


# Global metrics instance (prometheus collectors are process-wide)
metrics = HolidaysMetrics()
