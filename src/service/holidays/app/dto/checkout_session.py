from typing import Dict

import attrs


@attrs.frozen
class CheckoutRequest:
    booking_id: str
    product_name: str
    unit_amount: int  # minor currency units
    quantity: int
    currency: str
    customer_email: str
    success_url: str
    cancel_url: str

    @property
    def total_amount(self) -> int:
        return self.unit_amount * self.quantity

    @property
    def metadata(self) -> Dict[str, str]:
        return {'booking_id': self.booking_id}


@attrs.frozen
class CheckoutSession:
    session_id: str
    url: str
    amount_total: int
    currency: str
