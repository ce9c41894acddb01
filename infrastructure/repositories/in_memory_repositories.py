"""In-Memory Repository Implementations"""
from typing import Optional, List, Dict, Sequence, Tuple
from uuid import UUID
from datetime import date

from domain.repositories import (
    AccommodationSpotRepository, AccommodationTypeRepository, AvailabilityRepository,
    BookingRepository, DiscountCodeRepository, SeasonalPricingRepository
)
from domain.entities import (
    AccommodationSpot, AccommodationType, AvailabilityRecord, Booking, DiscountCode,
    SeasonalPricingRule
)
from domain.enums import BookingStatus
from domain.value_objects import AccommodationSpotId, AccommodationTypeId, CampsiteId, GuestId

LedgerKey = Tuple[CampsiteId, AccommodationTypeId, date]


def _copy(model):
    """Detach stored state from the caller, like a load from a real store"""
    return model.model_copy(deep=True) if model is not None else None


class InMemoryBookingRepository(BookingRepository):
    """In-memory implementation of BookingRepository"""

    def __init__(self):
        self._storage: Dict[UUID, Booking] = {}

    async def save(self, booking: Booking) -> Booking:
        """Save booking to memory"""
        self._storage[booking.booking_id] = _copy(booking)
        return booking

    async def find_by_id(self, booking_id: UUID) -> Optional[Booking]:
        """Find booking by ID"""
        return _copy(self._storage.get(booking_id))

    async def find_by_guest_id(self, guest_id: GuestId) -> List[Booking]:
        """Find bookings by guest ID"""
        return [_copy(b) for b in self._storage.values() if b.guest_id == guest_id]

    async def find_confirmed_by_spot(self, spot_id: AccommodationSpotId) -> List[Booking]:
        """Find confirmed bookings holding a spot"""
        return [
            _copy(b) for b in self._storage.values()
            if b.spot_id == spot_id and b.status == BookingStatus.CONFIRMED
        ]

    async def find_all(self) -> List[Booking]:
        """Find all bookings"""
        return [_copy(m) for m in self._storage.values()]

    async def update(self, booking: Booking) -> Booking:
        """Update booking"""
        if booking.booking_id in self._storage:
            self._storage[booking.booking_id] = _copy(booking)
            return booking
        raise ValueError("Booking not found")

    async def delete(self, booking_id: UUID) -> bool:
        """Delete booking"""
        if booking_id in self._storage:
            del self._storage[booking_id]
            return True
        return False


class InMemoryAvailabilityRepository(AvailabilityRepository):
    """In-memory implementation of AvailabilityRepository"""

    def __init__(self):
        self._storage: Dict[LedgerKey, AvailabilityRecord] = {}

    async def save(self, record: AvailabilityRecord) -> AvailabilityRecord:
        """Save record to memory"""
        self._storage[record.key] = _copy(record)
        return record

    async def save_all(self, records: Sequence[AvailabilityRecord]) -> List[AvailabilityRecord]:
        """Replace all records in one step"""
        staged = {record.key: _copy(record) for record in records}
        self._storage.update(staged)
        return list(records)

    async def find_by_key(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date
    ) -> Optional[AvailabilityRecord]:
        """Find record for specific type and date"""
        return _copy(self._storage.get((campsite_id, accommodation_type_id, availability_date)))

    async def find_range(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        start_date: date,
        end_date: date
    ) -> List[AvailabilityRecord]:
        """Find records for date range"""
        results = [
            _copy(record) for (c_id, t_id, d), record in self._storage.items()
            if c_id == campsite_id and t_id == accommodation_type_id and start_date <= d < end_date
        ]
        return sorted(results, key=lambda r: r.availability_date)

    async def find_all_by_type(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId
    ) -> List[AvailabilityRecord]:
        """Find all records for an accommodation type"""
        results = [
            _copy(record) for (c_id, t_id, _), record in self._storage.items()
            if c_id == campsite_id and t_id == accommodation_type_id
        ]
        return sorted(results, key=lambda r: r.availability_date)


class InMemorySeasonalPricingRepository(SeasonalPricingRepository):
    """In-memory implementation of SeasonalPricingRepository"""

    def __init__(self):
        self._storage: Dict[UUID, SeasonalPricingRule] = {}

    async def save(self, rule: SeasonalPricingRule) -> SeasonalPricingRule:
        self._storage[rule.rule_id] = _copy(rule)
        return rule

    async def find_by_id(self, rule_id: UUID) -> Optional[SeasonalPricingRule]:
        return _copy(self._storage.get(rule_id))

    async def find_for_type(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId
    ) -> List[SeasonalPricingRule]:
        return [
            _copy(r) for r in self._storage.values()
            if r.campsite_id == campsite_id and r.accommodation_type_id == accommodation_type_id
        ]

    async def update(self, rule: SeasonalPricingRule) -> SeasonalPricingRule:
        if rule.rule_id in self._storage:
            self._storage[rule.rule_id] = _copy(rule)
            return rule
        raise ValueError("Seasonal pricing rule not found")

    async def delete(self, rule_id: UUID) -> bool:
        return self._storage.pop(rule_id, None) is not None


class InMemoryDiscountCodeRepository(DiscountCodeRepository):
    """In-memory implementation of DiscountCodeRepository"""

    def __init__(self):
        self._storage: Dict[str, DiscountCode] = {}

    async def save(self, discount: DiscountCode) -> DiscountCode:
        self._storage[discount.code.upper()] = _copy(discount)
        return discount

    async def find_by_code(self, code: str) -> Optional[DiscountCode]:
        return _copy(self._storage.get((code or "").strip().upper()))

    async def find_all(self) -> List[DiscountCode]:
        return [_copy(m) for m in self._storage.values()]

    async def update(self, discount: DiscountCode) -> DiscountCode:
        key = discount.code.upper()
        if key in self._storage:
            self._storage[key] = _copy(discount)
            return discount
        raise ValueError("Discount code not found")


class InMemoryAccommodationTypeRepository(AccommodationTypeRepository):
    """In-memory implementation of AccommodationTypeRepository"""

    def __init__(self):
        self._storage: Dict[AccommodationTypeId, AccommodationType] = {}

    async def save(self, accommodation_type: AccommodationType) -> AccommodationType:
        self._storage[accommodation_type.accommodation_type_id] = _copy(accommodation_type)
        return accommodation_type

    async def find_by_id(self, accommodation_type_id: AccommodationTypeId) -> Optional[AccommodationType]:
        return _copy(self._storage.get(accommodation_type_id))

    async def find_by_campsite(self, campsite_id: CampsiteId) -> List[AccommodationType]:
        return [_copy(t) for t in self._storage.values() if t.campsite_id == campsite_id]

    async def update(self, accommodation_type: AccommodationType) -> AccommodationType:
        if accommodation_type.accommodation_type_id in self._storage:
            self._storage[accommodation_type.accommodation_type_id] = _copy(accommodation_type)
            return accommodation_type
        raise ValueError("Accommodation type not found")


class InMemoryAccommodationSpotRepository(AccommodationSpotRepository):
    """In-memory implementation of AccommodationSpotRepository"""

    def __init__(self):
        self._storage: Dict[AccommodationSpotId, AccommodationSpot] = {}

    async def save(self, spot: AccommodationSpot) -> AccommodationSpot:
        self._storage[spot.spot_id] = _copy(spot)
        return spot

    async def find_by_id(self, spot_id: AccommodationSpotId) -> Optional[AccommodationSpot]:
        return _copy(self._storage.get(spot_id))

    async def find_by_type(self, accommodation_type_id: AccommodationTypeId) -> List[AccommodationSpot]:
        return [_copy(s) for s in self._storage.values() if s.accommodation_type_id == accommodation_type_id]

    async def update(self, spot: AccommodationSpot) -> AccommodationSpot:
        if spot.spot_id in self._storage:
            self._storage[spot.spot_id] = _copy(spot)
            return spot
        raise ValueError("Accommodation spot not found")
