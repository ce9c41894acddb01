"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List, Sequence
from uuid import UUID
from datetime import date

from domain.entities import (
    AccommodationSpot, AccommodationType, AvailabilityRecord, Booking, DiscountCode,
    SeasonalPricingRule
)
from domain.value_objects import AccommodationSpotId, AccommodationTypeId, CampsiteId, GuestId


class BookingRepository(ABC):
    """Repository interface for Booking Aggregate"""

    @abstractmethod
    async def save(self, booking: Booking) -> Booking:
        """Save booking"""
        pass

    @abstractmethod
    async def find_by_id(self, booking_id: UUID) -> Optional[Booking]:
        """Find booking by ID"""
        pass

    @abstractmethod
    async def find_by_guest_id(self, guest_id: GuestId) -> List[Booking]:
        """Find bookings by guest ID"""
        pass

    @abstractmethod
    async def find_confirmed_by_spot(self, spot_id: AccommodationSpotId) -> List[Booking]:
        """Find confirmed bookings holding a spot"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Booking]:
        """Find all bookings"""
        pass

    @abstractmethod
    async def update(self, booking: Booking) -> Booking:
        """Update booking"""
        pass

    @abstractmethod
    async def delete(self, booking_id: UUID) -> bool:
        """Delete booking"""
        pass


class AvailabilityRepository(ABC):
    """Repository interface for the availability ledger"""

    @abstractmethod
    async def save(self, record: AvailabilityRecord) -> AvailabilityRecord:
        """Save a single day's record"""
        pass

    @abstractmethod
    async def save_all(self, records: Sequence[AvailabilityRecord]) -> List[AvailabilityRecord]:
        """Save several records as one unit: all are stored or none are"""
        pass

    @abstractmethod
    async def find_by_key(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date
    ) -> Optional[AvailabilityRecord]:
        """Find the record for a type on a date"""
        pass

    @abstractmethod
    async def find_range(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        start_date: date,
        end_date: date
    ) -> List[AvailabilityRecord]:
        """Find records with start_date <= date < end_date, ordered by date"""
        pass

    @abstractmethod
    async def find_all_by_type(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId
    ) -> List[AvailabilityRecord]:
        """Find all records for an accommodation type"""
        pass


class SeasonalPricingRepository(ABC):
    """Repository interface for seasonal pricing rules"""

    @abstractmethod
    async def save(self, rule: SeasonalPricingRule) -> SeasonalPricingRule:
        pass

    @abstractmethod
    async def find_by_id(self, rule_id: UUID) -> Optional[SeasonalPricingRule]:
        pass

    @abstractmethod
    async def find_for_type(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId
    ) -> List[SeasonalPricingRule]:
        """Find every rule (active or not) for an accommodation type"""
        pass

    @abstractmethod
    async def update(self, rule: SeasonalPricingRule) -> SeasonalPricingRule:
        pass

    @abstractmethod
    async def delete(self, rule_id: UUID) -> bool:
        pass


class DiscountCodeRepository(ABC):
    """Repository interface for discount codes"""

    @abstractmethod
    async def save(self, discount: DiscountCode) -> DiscountCode:
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[DiscountCode]:
        """Find by code, case-insensitive"""
        pass

    @abstractmethod
    async def find_all(self) -> List[DiscountCode]:
        pass

    @abstractmethod
    async def update(self, discount: DiscountCode) -> DiscountCode:
        pass


class AccommodationTypeRepository(ABC):
    """Repository interface for accommodation types"""

    @abstractmethod
    async def save(self, accommodation_type: AccommodationType) -> AccommodationType:
        pass

    @abstractmethod
    async def find_by_id(self, accommodation_type_id: AccommodationTypeId) -> Optional[AccommodationType]:
        pass

    @abstractmethod
    async def find_by_campsite(self, campsite_id: CampsiteId) -> List[AccommodationType]:
        pass

    @abstractmethod
    async def update(self, accommodation_type: AccommodationType) -> AccommodationType:
        pass


class AccommodationSpotRepository(ABC):
    """Repository interface for accommodation spots"""

    @abstractmethod
    async def save(self, spot: AccommodationSpot) -> AccommodationSpot:
        pass

    @abstractmethod
    async def find_by_id(self, spot_id: AccommodationSpotId) -> Optional[AccommodationSpot]:
        pass

    @abstractmethod
    async def find_by_type(self, accommodation_type_id: AccommodationTypeId) -> List[AccommodationSpot]:
        pass

    @abstractmethod
    async def update(self, spot: AccommodationSpot) -> AccommodationSpot:
        pass
