from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.domain.entity.tour_entity import Tour


class ReplaceTourUseCase:
    """PUT on a tour: the stored field set becomes exactly the given one."""

    def __init__(self, *, tour_repo: ITourRepo) -> None:
        self.tour_repo = tour_repo

    @classmethod
    @inject
    def depends(cls, tour_repo: ITourRepo = Depends(Provide[Container.tour_repo])) -> Self:
        return cls(tour_repo=tour_repo)

    @Logger.io
    async def replace_tour(self, *, tour_id: str, **fields: Any) -> Tour:
        existing = await self.tour_repo.get_by_id(tour_id=tour_id)
        if not existing:
            raise NotFoundError('Tour not found')

        replaced = await self.tour_repo.replace(tour=existing.replaced_with(**fields))
        if not replaced:
            raise NotFoundError('Tour not found')
        return replaced
