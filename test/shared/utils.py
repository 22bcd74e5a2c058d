from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    BOOKING_CREATE,
    TOUR_CREATE,
    USER_CREATE,
    USER_LOGIN,
)
from test.util_constant import DEFAULT_TOUR


def auth_header(token: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_user(client: TestClient, email: str, password: str, name: str) -> Dict[str, Any]:
    response = client.post(USER_CREATE, json={'email': email, 'password': password, 'name': name})
    assert_response_status(response, 201, f'Failed to create user {email}')
    return response.json()['user']


def login_user(client: TestClient, email: str, password: str) -> Dict[str, Any]:
    response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert_response_status(response, 200, f'Login failed: {response.text}')
    return response.json()


def create_tour(
    client: TestClient, headers: Dict[str, str], **overrides: Any
) -> Dict[str, Any]:
    response = client.post(TOUR_CREATE, json={**DEFAULT_TOUR, **overrides}, headers=headers)
    assert_response_status(response, 201, 'Failed to create tour')
    return response.json()['tour']


def book_tour(
    client: TestClient,
    headers: Dict[str, str],
    *,
    tour_id: str,
    tickets: int = 2,
    user_id: Optional[str] = None,
    payment_method: Optional[str] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {'tourID': tour_id, 'NumberOfTicket': tickets}
    if user_id is not None:
        payload['userID'] = user_id
    if payment_method is not None:
        payload['paymentMethod'] = payment_method
    response = client.post(BOOKING_CREATE, json=payload, headers=headers)
    assert_response_status(response, 201, 'Failed to book tour')
    return response.json()['booking']
