from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from src.service.holidays.domain.entity.tour_entity import MAX_GALLERY_IMAGES, Tour


class TourFields(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'destination': 'Zanzibar',
                'title': 'Spice Island Escape',
                'price': 450.5,
                'seats': 20,
                'duration': '5 days',
                'groupSize': 12,
                'gallery': ['https://cdn.example.com/tours/zanzibar-1.jpg'],
            }
        },
    )

    destination: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    seats: int = Field(..., ge=0)
    backdrop_image: Optional[str] = Field(default=None, alias='backDropImage')
    description: Optional[str] = None
    duration: Optional[str] = None
    group_size: Optional[int] = Field(default=None, ge=0)
    discount: Optional[str] = None
    tour_type: Optional[str] = None
    departure: Optional[str] = None
    from_month: Optional[str] = None
    to_month: Optional[str] = None
    departure_time: Optional[str] = None
    return_time: Optional[str] = None
    gallery: List[str] = Field(default_factory=list, max_length=MAX_GALLERY_IMAGES)
    price_included: List[str] = Field(default_factory=list)
    price_not_included: List[str] = Field(default_factory=list)

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump()


class TourPatchRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    destination: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    seats: Optional[int] = Field(default=None, ge=0)
    backdrop_image: Optional[str] = Field(default=None, alias='backDropImage')
    description: Optional[str] = None
    duration: Optional[str] = None
    group_size: Optional[int] = Field(default=None, ge=0)
    discount: Optional[str] = None
    tour_type: Optional[str] = None
    departure: Optional[str] = None
    from_month: Optional[str] = None
    to_month: Optional[str] = None
    departure_time: Optional[str] = None
    return_time: Optional[str] = None
    gallery: Optional[List[str]] = Field(default=None, max_length=MAX_GALLERY_IMAGES)
    price_included: Optional[List[str]] = None
    price_not_included: Optional[List[str]] = None

    @model_validator(mode='after')
    def reject_null_required_fields(self) -> 'TourPatchRequest':
        required = {'destination', 'title', 'price', 'seats'}
        nulled = [n for n in self.model_fields_set & required if getattr(self, n) is None]
        if nulled:
            raise ValueError(f'Fields cannot be null: {", ".join(sorted(nulled))}')
        return self

    def to_fields(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        # Null lists mean "empty", the stored tour always carries a list
        for name in ('gallery', 'price_included', 'price_not_included'):
            if name in fields and fields[name] is None:
                fields[name] = []
        return fields


class TourResponse(TourFields):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, tour: Tour) -> 'TourResponse':
        return cls(
            id=tour.id or '',
            destination=tour.destination,
            title=tour.title,
            price=tour.price,
            seats=tour.seats,
            backdrop_image=tour.backdrop_image,
            description=tour.description,
            duration=tour.duration,
            group_size=tour.group_size,
            discount=tour.discount,
            tour_type=tour.tour_type,
            departure=tour.departure,
            from_month=tour.from_month,
            to_month=tour.to_month,
            departure_time=tour.departure_time,
            return_time=tour.return_time,
            gallery=list(tour.gallery),
            price_included=list(tour.price_included),
            price_not_included=list(tour.price_not_included),
            created_at=tour.created_at,
            updated_at=tour.updated_at,
        )


class TourEnvelope(BaseModel):
    message: str
    tour: TourResponse
