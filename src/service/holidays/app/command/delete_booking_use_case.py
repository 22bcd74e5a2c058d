from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.holidays_metrics import metrics
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.domain.entity.booking_entity import Booking
from src.service.holidays.domain.entity.user_entity import UserEntity


class DeleteBookingUseCase:
    def __init__(self, *, booking_repo: IBookingRepo) -> None:
        self.booking_repo = booking_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
    ) -> Self:
        return cls(booking_repo=booking_repo)

    @Logger.io
    async def delete_booking(self, *, actor: UserEntity, booking_id: str) -> Booking:
        """Remove the booking; the returned copy carries the cancelled status."""
        existing = await self.booking_repo.get_by_id(booking_id=booking_id)
        if not existing:
            raise NotFoundError('Booking not found')

        if not (actor.is_admin or existing.is_owned_by(actor.id)):
            raise ForbiddenError('Not authorized to delete this booking')

        deleted = await self.booking_repo.delete(booking_id=booking_id)
        if not deleted:
            metrics.record_booking_write(operation='delete', result='not_found')
            raise NotFoundError('Booking not found')

        metrics.record_booking_write(operation='delete', result='ok')
        return deleted if deleted.is_terminal else deleted.cancel()
