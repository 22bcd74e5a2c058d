"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.holidays.app.command import (
    book_tour_use_case,
    change_password_use_case,
    create_checkout_session_use_case,
    create_tour_use_case,
    delete_booking_use_case,
    delete_tour_use_case,
    login_user_use_case,
    patch_booking_use_case,
    patch_tour_use_case,
    register_user_use_case,
    replace_booking_use_case,
    replace_tour_use_case,
    reset_password_use_case,
)
from src.service.holidays.app.query import (
    get_booking_use_case,
    get_current_user_use_case,
    get_tour_use_case,
    list_bookings_use_case,
    list_tours_use_case,
)
from src.service.holidays.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    book_tour_use_case,
    replace_booking_use_case,
    patch_booking_use_case,
    delete_booking_use_case,
    create_checkout_session_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    create_tour_use_case,
    replace_tour_use_case,
    patch_tour_use_case,
    delete_tour_use_case,
    get_tour_use_case,
    list_tours_use_case,
    register_user_use_case,
    login_user_use_case,
    change_password_use_case,
    reset_password_use_case,
    get_current_user_use_case,
    role_auth,
]
