from abc import ABC, abstractmethod

from src.service.holidays.app.dto.checkout_session import CheckoutRequest, CheckoutSession


class ICheckoutGateway(ABC):
    @abstractmethod
    async def create_session(self, *, request: CheckoutRequest) -> CheckoutSession:
        pass
