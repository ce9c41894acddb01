"""API Dependencies - Service wiring"""
from domain.clock import system_clock
from application.locks import KeyedLocks
from application.services import (
    AvailabilityService, BookingService, CatalogService, DiscountService, PricingService
)
from infrastructure.event_sink import InMemoryEventSink
from infrastructure.repositories.in_memory_repositories import (
    InMemoryAccommodationSpotRepository, InMemoryAccommodationTypeRepository,
    InMemoryAvailabilityRepository, InMemoryBookingRepository, InMemoryDiscountCodeRepository,
    InMemorySeasonalPricingRepository
)

# Initialize repositories
booking_repo = InMemoryBookingRepository()
availability_repo = InMemoryAvailabilityRepository()
pricing_repo = InMemorySeasonalPricingRepository()
discount_repo = InMemoryDiscountCodeRepository()
type_repo = InMemoryAccommodationTypeRepository()
spot_repo = InMemoryAccommodationSpotRepository()

event_sink = InMemoryEventSink()

# Lock registries live as long as the repositories they guard
_ledger_locks = KeyedLocks()
_discount_locks = KeyedLocks()
_booking_locks = KeyedLocks()


# Dependency injection
def get_catalog_service() -> CatalogService:
    return CatalogService(type_repo, spot_repo, system_clock)


def get_availability_service() -> AvailabilityService:
    return AvailabilityService(availability_repo, system_clock, _ledger_locks)


def get_pricing_service() -> PricingService:
    return PricingService(pricing_repo, get_catalog_service(), system_clock)


def get_discount_service() -> DiscountService:
    return DiscountService(discount_repo, system_clock, _discount_locks)


def get_booking_service() -> BookingService:
    return BookingService(
        booking_repo,
        get_catalog_service(),
        get_availability_service(),
        get_pricing_service(),
        get_discount_service(),
        event_sink,
        system_clock,
        _booking_locks
    )
