from src.platform.exception.exceptions import NotFoundError
from src.service.holidays.app.interface.i_tour_repo import ITourRepo
from src.service.holidays.app.interface.i_user_repo import IUserRepo
from src.service.holidays.domain.entity.tour_entity import Tour
from src.service.holidays.domain.entity.user_entity import UserEntity


async def load_tour(tour_repo: ITourRepo, tour_id: str) -> Tour:
    tour = await tour_repo.get_by_id(tour_id=tour_id)
    if not tour:
        raise NotFoundError('Tour not found')
    return tour


async def load_user(user_repo: IUserRepo, user_id: str) -> UserEntity:
    user = await user_repo.get_by_id(user_id=user_id)
    if not user:
        raise NotFoundError('User not found')
    return user
