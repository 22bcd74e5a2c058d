from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.domain.entity.booking_entity import Booking


class GetBookingUseCase:
    def __init__(self, booking_repo: IBookingRepo):
        self.booking_repo = booking_repo

    @classmethod
    @inject
    def depends(
        cls, booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo])
    ) -> Self:
        return cls(booking_repo=booking_repo)

    @Logger.io
    async def get_booking(self, booking_id: str) -> Booking:
        booking = await self.booking_repo.get_by_id(booking_id=booking_id)

        if not booking:
            raise NotFoundError('Booking not found')

        return booking
