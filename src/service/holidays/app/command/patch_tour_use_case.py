from typing import Any, Mapping, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.domain.entity.tour_entity import Tour


class PatchTourUseCase:
    def __init__(self, *, tour_repo: ITourRepo) -> None:
        self.tour_repo = tour_repo

    @classmethod
    @inject
    def depends(cls, tour_repo: ITourRepo = Depends(Provide[Container.tour_repo])) -> Self:
        return cls(tour_repo=tour_repo)

    @Logger.io
    async def patch_tour(self, *, tour_id: str, fields: Mapping[str, Any]) -> Tour:
        existing = await self.tour_repo.get_by_id(tour_id=tour_id)
        if not existing:
            raise NotFoundError('Tour not found')

        # Validates the merged tour before anything is written
        patched = existing.patched_with(fields)

        written = await self.tour_repo.patch(
            tour_id=tour_id, fields={**fields, 'updated_at': patched.updated_at}
        )
        if not written:
            raise NotFoundError('Tour not found')
        return written
