from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.pagination.paginator import Page, PageRequest, paginate
from src.service.holidays.app.interface.i_booking_repo import IBookingRepo
from src.service.holidays.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    def __init__(self, booking_repo: IBookingRepo):
        self.booking_repo = booking_repo

    @classmethod
    @inject
    def depends(
        cls, booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo])
    ) -> Self:
        return cls(booking_repo=booking_repo)

    @Logger.io
    async def list_bookings(self, request: PageRequest) -> Page[Booking]:
        total = await self.booking_repo.count()
        bookings = await self.booking_repo.list_page(skip=request.skip, limit=request.limit)
        return paginate(bookings, total_count=total, request=request)
