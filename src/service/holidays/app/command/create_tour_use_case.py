from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.domain.entity.tour_entity import Tour


class CreateTourUseCase:
    def __init__(self, *, tour_repo: ITourRepo) -> None:
        self.tour_repo = tour_repo

    @classmethod
    @inject
    def depends(cls, tour_repo: ITourRepo = Depends(Provide[Container.tour_repo])) -> Self:
        return cls(tour_repo=tour_repo)

    @Logger.io
    async def create_tour(self, **fields: Any) -> Tour:
        tour = Tour.create(**fields)
        return await self.tour_repo.create(tour=tour)
