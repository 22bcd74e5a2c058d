from typing import Dict, Optional

import httpx
from pydantic import SecretStr

from src.platform.exception.exceptions import PaymentGatewayError
from src.platform.logging.loguru_io import Logger
from src.service.holidays.app.dto.checkout_session import CheckoutRequest, CheckoutSession
from src.service.holidays.app.interface.i_checkout_gateway import ICheckoutGateway


class HttpCheckoutGateway(ICheckoutGateway):
    """
    Hosted checkout over a Stripe-compatible REST API.

    POST {api_base}/checkout/sessions with form-encoded line items, bearer auth.
    """

    def __init__(
        self,
        *,
        api_base: str,
        api_key: SecretStr,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_base = api_base.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    @staticmethod
    def _form(request: CheckoutRequest) -> Dict[str, str]:
        return {
            'mode': 'payment',
            'payment_method_types[0]': 'card',
            'customer_email': request.customer_email,
            'client_reference_id': request.booking_id,
            'success_url': request.success_url,
            'cancel_url': request.cancel_url,
            'line_items[0][quantity]': str(request.quantity),
            'line_items[0][price_data][currency]': request.currency,
            'line_items[0][price_data][unit_amount]': str(request.unit_amount),
            'line_items[0][price_data][product_data][name]': request.product_name,
            **{f'metadata[{k}]': v for k, v in request.metadata.items()},
        }

    @Logger.io
    async def create_session(self, *, request: CheckoutRequest) -> CheckoutSession:
        headers = {'Authorization': f'Bearer {self.api_key.get_secret_value()}'}
        try:
            async with httpx.AsyncClient(
                base_url=self.api_base, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    '/checkout/sessions', data=self._form(request), headers=headers
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise PaymentGatewayError(
                f'Payment provider rejected the checkout session ({e.response.status_code})'
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise PaymentGatewayError(f'Payment provider unavailable: {e}') from e

        try:
            return CheckoutSession(
                session_id=str(payload['id']),
                url=str(payload['url']),
                amount_total=int(payload.get('amount_total', request.total_amount)),
                currency=str(payload.get('currency', request.currency)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PaymentGatewayError('Malformed checkout session from payment provider') from e
