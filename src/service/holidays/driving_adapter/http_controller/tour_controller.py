from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.platform.pagination.paginator import PageRequest
from src.service.holidays.app.command.create_tour_use_case import CreateTourUseCase
from src.service.holidays.app.command.delete_tour_use_case import DeleteTourUseCase
from src.service.holidays.app.command.patch_tour_use_case import PatchTourUseCase
from src.service.holidays.app.command.replace_tour_use_case import ReplaceTourUseCase
from src.service.holidays.app.query.get_tour_use_case import GetTourUseCase
from src.service.holidays.app.query.list_tours_use_case import ListToursUseCase
from src.service.holidays.domain.entity.user_entity import UserEntity
from src.service.holidays.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.holidays.driving_adapter.http_controller.schema.common_schema import (
    PaginatedResponse,
)
from src.service.holidays.driving_adapter.http_controller.schema.tour_schema import (
    TourEnvelope,
    TourFields,
    TourPatchRequest,
    TourResponse,
)


router = APIRouter()


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=TourEnvelope,
    response_model_exclude_none=True,
)
@Logger.io
async def create_tour(
    request: TourFields,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateTourUseCase = Depends(CreateTourUseCase.depends),
) -> TourEnvelope:
    tour = await use_case.create_tour(**request.to_fields())
    return TourEnvelope(message='Tour created successfully', tour=TourResponse.from_entity(tour))


@router.get(
    '', response_model=PaginatedResponse[TourResponse], response_model_exclude_none=True
)
@Logger.io
async def list_tours(
    page: Optional[str] = Query(default=None),
    page_size: Optional[str] = Query(default=None, alias='pageSize'),
    use_case: ListToursUseCase = Depends(ListToursUseCase.depends),
) -> PaginatedResponse[TourResponse]:
    result = await use_case.list_tours(PageRequest.from_query(page, page_size))
    return PaginatedResponse[TourResponse].from_page(
        result, [TourResponse.from_entity(t) for t in result.items]
    )


@router.get('/{tour_id}', response_model=TourEnvelope, response_model_exclude_none=True)
@Logger.io
async def get_tour(
    tour_id: str,
    use_case: GetTourUseCase = Depends(GetTourUseCase.depends),
) -> TourEnvelope:
    tour = await use_case.get_tour(tour_id)
    return TourEnvelope(message='Tour retrieved successfully', tour=TourResponse.from_entity(tour))


@router.put('/{tour_id}', response_model=TourEnvelope, response_model_exclude_none=True)
@Logger.io
async def replace_tour(
    tour_id: str,
    request: TourFields,
    current_user: UserEntity = Depends(require_admin),
    use_case: ReplaceTourUseCase = Depends(ReplaceTourUseCase.depends),
) -> TourEnvelope:
    tour = await use_case.replace_tour(tour_id=tour_id, **request.to_fields())
    return TourEnvelope(message='Tour updated successfully', tour=TourResponse.from_entity(tour))


@router.patch('/{tour_id}', response_model=TourEnvelope, response_model_exclude_none=True)
@Logger.io
async def patch_tour(
    tour_id: str,
    request: TourPatchRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: PatchTourUseCase = Depends(PatchTourUseCase.depends),
) -> TourEnvelope:
    tour = await use_case.patch_tour(tour_id=tour_id, fields=request.to_fields())
    return TourEnvelope(message='Tour modified successfully', tour=TourResponse.from_entity(tour))


@router.delete('/{tour_id}', response_model=TourEnvelope, response_model_exclude_none=True)
@Logger.io
async def delete_tour(
    tour_id: str,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteTourUseCase = Depends(DeleteTourUseCase.depends),
) -> TourEnvelope:
    tour = await use_case.delete_tour(tour_id=tour_id)
    return TourEnvelope(message='Tour deleted successfully', tour=TourResponse.from_entity(tour))
