from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.pagination.paginator import Page, PageRequest, paginate
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.domain.entity.tour_entity import Tour


class ListToursUseCase:
    def __init__(self, tour_repo: ITourRepo):
        self.tour_repo = tour_repo

    @classmethod
    @inject
    def depends(cls, tour_repo: ITourRepo = Depends(Provide[Container.tour_repo])) -> Self:
        return cls(tour_repo=tour_repo)

    @Logger.io
    async def list_tours(self, request: PageRequest) -> Page[Tour]:
        total = await self.tour_repo.count()
        tours = await self.tour_repo.list_page(skip=request.skip, limit=request.limit)
        return paginate(tours, total_count=total, request=request)
