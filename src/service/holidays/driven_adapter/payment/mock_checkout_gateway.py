from typing import List

import uuid_utils

from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.dto.checkout_session import CheckoutRequest, CheckoutSession
from src.service.holidays.app.interface.i_checkout_gateway import ICheckoutGateway


class MockCheckoutGateway(ICheckoutGateway):
    """Local checkout gateway; sessions point at a fake hosted page."""

    def __init__(self, *, base_url: str = 'https://checkout.example.test/pay') -> None:
        self.base_url = base_url.rstrip('/')
        self.requests: List[CheckoutRequest] = []

    @Logger.io
    async def create_session(self, *, request: CheckoutRequest) -> CheckoutSession:
        self.requests.append(request)
        session_id = f'cs_mock_{uuid_utils.uuid7().hex}'
        return CheckoutSession(
            session_id=session_id,
            url=f'{self.base_url}/{session_id}',
            amount_total=request.total_amount,
            currency=request.currency,
        )
