from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import attrs

from src.platform.exception.exceptions import DomainError


MAX_GALLERY_IMAGES = 15


def _non_negative(instance: Any, attribute: 'attrs.Attribute[Any]', value: Any) -> None:
    if value is not None and value < 0:
        raise DomainError(f'{attribute.name} must not be negative')


def _gallery_size(instance: Any, attribute: 'attrs.Attribute[List[str]]', value: List[str]) -> None:
    if len(value) > MAX_GALLERY_IMAGES:
        raise DomainError(f'A tour gallery holds at most {MAX_GALLERY_IMAGES} images')


@attrs.define
class Tour:
    destination: str
    title: str
    price: float = attrs.field(validator=_non_negative)
    seats: int = attrs.field(validator=_non_negative)
    backdrop_image: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    group_size: Optional[int] = attrs.field(default=None, validator=_non_negative)
    discount: Optional[str] = None
    tour_type: Optional[str] = None
    departure: Optional[str] = None
    from_month: Optional[str] = None
    to_month: Optional[str] = None
    departure_time: Optional[str] = None
    return_time: Optional[str] = None
    gallery: List[str] = attrs.field(factory=list, validator=_gallery_size)
    price_included: List[str] = attrs.field(factory=list)
    price_not_included: List[str] = attrs.field(factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, **fields: Any) -> 'Tour':
        now = datetime.now(timezone.utc)
        return cls(**fields, created_at=now, updated_at=now)

    def replaced_with(self, **fields: Any) -> 'Tour':
        return Tour(
            **fields,
            id=self.id,
            created_at=self.created_at,
            updated_at=datetime.now(timezone.utc),
        )

    def patched_with(self, fields: Mapping[str, Any]) -> 'Tour':
        protected = {'id', 'created_at', 'updated_at'} & set(fields)
        if protected:
            raise DomainError(f'Read-only tour fields: {", ".join(sorted(protected))}')
        return attrs.evolve(self, **dict(fields), updated_at=datetime.now(timezone.utc))

    @property
    def unit_amount(self) -> int:
        """Price per ticket in minor currency units."""
        return int(round(self.price * 100))
