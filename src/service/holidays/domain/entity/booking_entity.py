from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Mapping, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger


class BookingStatus(StrEnum):
    REQUESTED = 'requested'
    CONFIRMED = 'confirmed'
    PLAYED = 'played'
    CANCELLED = 'cancelled'

    @classmethod
    def for_fields(cls, *, is_played: bool, payment_method: Optional[str]) -> 'BookingStatus':
        if is_played:
            return cls.PLAYED
        if payment_method:
            return cls.CONFIRMED
        return cls.REQUESTED


ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.REQUESTED: frozenset(
        {
            BookingStatus.REQUESTED,
            BookingStatus.CONFIRMED,
            BookingStatus.PLAYED,
            BookingStatus.CANCELLED,
        }
    ),
    # A full replace without a payment method drops a confirmed booking back to requested
    BookingStatus.CONFIRMED: frozenset(
        {
            BookingStatus.REQUESTED,
            BookingStatus.CONFIRMED,
            BookingStatus.PLAYED,
            BookingStatus.CANCELLED,
        }
    ),
    BookingStatus.PLAYED: frozenset({BookingStatus.PLAYED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
}

# Fields a client may write; status and timestamps are owned by the lifecycle
WRITABLE_FIELDS = frozenset(
    {'tour_id', 'user_id', 'number_of_tickets', 'is_played', 'payment_method'}
)


def _validate_ticket_count(instance: 'Booking', attribute: 'attrs.Attribute[int]', value: int) -> None:
    if value < 1:
        raise DomainError('Number of tickets must be at least 1')


@attrs.define
class Booking:
    tour_id: str
    user_id: str
    number_of_tickets: int = attrs.field(validator=_validate_ticket_count)
    is_played: bool = False
    payment_method: Optional[str] = None
    status: BookingStatus = BookingStatus.REQUESTED
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        tour_id: str,
        user_id: str,
        number_of_tickets: int,
        payment_method: Optional[str] = None,
        is_played: bool = False,
    ) -> 'Booking':
        if is_played:
            raise DomainError('A new booking cannot be marked as played')

        now = datetime.now(timezone.utc)
        return cls(
            tour_id=tour_id,
            user_id=user_id,
            number_of_tickets=number_of_tickets,
            payment_method=payment_method or None,
            status=BookingStatus.for_fields(is_played=False, payment_method=payment_method),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return user_id is not None and self.user_id == user_id

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: BookingStatus) -> 'Booking':
        if not self.can_transition_to(target):
            raise DomainError(f'Booking cannot move from {self.status} to {target}')
        return attrs.evolve(self, status=target, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def replaced_with(
        self,
        *,
        tour_id: str,
        user_id: str,
        number_of_tickets: int,
        is_played: bool = False,
        payment_method: Optional[str] = None,
    ) -> 'Booking':
        """
        Full replace: every writable field takes the given value, omitted ones their
        default. Identity and creation time are kept.
        """
        target = BookingStatus.for_fields(is_played=is_played, payment_method=payment_method)
        if not self.can_transition_to(target):
            raise DomainError(f'Booking cannot move from {self.status} to {target}')

        return Booking(
            id=self.id,
            tour_id=tour_id,
            user_id=user_id,
            number_of_tickets=number_of_tickets,
            is_played=is_played,
            payment_method=payment_method or None,
            status=target,
            created_at=self.created_at,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def patched_with(self, fields: Mapping[str, Any]) -> 'Booking':
        """Partial patch: only the given writable fields change."""
        unknown = set(fields) - WRITABLE_FIELDS
        if unknown:
            raise DomainError(f'Unknown booking fields: {", ".join(sorted(unknown))}')

        patched = attrs.evolve(self, **dict(fields))
        target = BookingStatus.for_fields(
            is_played=patched.is_played, payment_method=patched.payment_method
        )
        if not self.can_transition_to(target):
            raise DomainError(f'Booking cannot move from {self.status} to {target}')

        return attrs.evolve(patched, status=target, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def cancel(self) -> 'Booking':
        if self.status == BookingStatus.CANCELLED:
            raise DomainError('Booking already cancelled')
        return self.transition_to(BookingStatus.CANCELLED)
