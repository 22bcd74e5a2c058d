from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.service.holidays.domain.entity.booking_entity import Booking


class BookingCreateRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'tourID': '0192f0c4-6c1e-7b9a-8d3e-2f1a4b5c6d7e',
                'NumberOfTicket': 2,
                'paymentMethod': 'card',
            }
        },
    )

    tour_id: str = Field(..., alias='tourID', min_length=1)
    user_id: Optional[str] = Field(default=None, alias='userID')  # defaults to the caller
    number_of_tickets: int = Field(..., alias='NumberOfTicket', gt=0)
    payment_method: Optional[str] = Field(default=None, alias='paymentMethod')


class BookingReplaceRequest(BaseModel):
    """Full document for PUT; omitted optional fields are dropped from the booking."""

    model_config = ConfigDict(populate_by_name=True)

    tour_id: str = Field(..., alias='tourID', min_length=1)
    user_id: str = Field(..., alias='userID', min_length=1)
    number_of_tickets: int = Field(..., alias='NumberOfTicket', gt=0)
    is_played: bool = Field(default=False, alias='isPlayed')
    payment_method: Optional[str] = Field(default=None, alias='paymentMethod')


class BookingPatchRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={'example': {'isPlayed': True}},
    )

    tour_id: Optional[str] = Field(default=None, alias='tourID', min_length=1)
    user_id: Optional[str] = Field(default=None, alias='userID', min_length=1)
    number_of_tickets: Optional[int] = Field(default=None, alias='NumberOfTicket', gt=0)
    is_played: Optional[bool] = Field(default=None, alias='isPlayed')
    payment_method: Optional[str] = Field(default=None, alias='paymentMethod')

    @model_validator(mode='after')
    def reject_null_required_fields(self) -> 'BookingPatchRequest':
        nulled = [
            name
            for name in self.model_fields_set
            if name != 'payment_method' and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f'Fields cannot be null: {", ".join(sorted(nulled))}')
        return self

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class BookingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    tour_id: str = Field(..., alias='tourID')
    user_id: str = Field(..., alias='userID')
    number_of_tickets: int = Field(..., alias='NumberOfTicket')
    is_played: bool = Field(..., alias='isPlayed')
    payment_method: Optional[str] = Field(default=None, alias='paymentMethod')
    status: str
    created_at: Optional[datetime] = Field(default=None, alias='createdAt')
    updated_at: Optional[datetime] = Field(default=None, alias='updatedAt')

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id or '',
            tour_id=booking.tour_id,
            user_id=booking.user_id,
            number_of_tickets=booking.number_of_tickets,
            is_played=booking.is_played,
            payment_method=booking.payment_method,
            status=booking.status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingEnvelope(BaseModel):
    message: str
    booking: BookingResponse


class CheckoutSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias='sessionId')
    url: str
    amount_total: int = Field(..., alias='amountTotal')
    currency: str


class CheckoutSessionEnvelope(BaseModel):
    message: str
    session: CheckoutSessionResponse
