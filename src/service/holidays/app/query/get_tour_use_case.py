from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.domain.entity.tour_entity import Tour


class GetTourUseCase:
    def __init__(self, tour_repo: ITourRepo):
        self.tour_repo = tour_repo

    @classmethod
    @inject
    def depends(cls, tour_repo: ITourRepo = Depends(Provide[Container.tour_repo])) -> Self:
        return cls(tour_repo=tour_repo)

    @Logger.io
    async def get_tour(self, tour_id: str) -> Tour:
        tour = await self.tour_repo.get_by_id(tour_id=tour_id)
        if not tour:
            raise NotFoundError('Tour not found')
        return tour
