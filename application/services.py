"""Application Services - Business use cases"""
import logging
from uuid import UUID
from datetime import date
from decimal import Decimal
from typing import List, Optional

from application.locks import KeyedLocks
from domain.clock import Clock, system_clock
from domain.entities import (
    AccommodationSpot, AccommodationType, AvailabilityRecord, Booking, DiscountCode,
    SeasonalPricingRule
)
from domain.enums import AccommodationCategory, BookingStatus, DiscountType, SpotStatus
from domain.errors import (
    DiscountNotApplicableError, DiscountNotFoundError, DomainError, InsufficientAvailabilityError,
    InvalidCountError, InvalidPartySizeError, NotFoundError, SpotUnavailableError,
    UnderMaintenanceError, UsageExhaustedError, ValidationError
)
from domain.events import EventSink
from domain.pricing import PricingBreakdown, calculate_price
from domain.repositories import (
    AccommodationSpotRepository, AccommodationTypeRepository, AvailabilityRepository,
    BookingRepository, DiscountCodeRepository, SeasonalPricingRepository
)
from domain.value_objects import (
    AccommodationSpotId, AccommodationTypeId, CampsiteId, DateRange, GuestId, Money, Number
)

logger = logging.getLogger(__name__)

UNITS_PER_BOOKING = 1


class CatalogService:
    """Service for accommodation types and spots"""

    def __init__(self,
                 type_repo: AccommodationTypeRepository,
                 spot_repo: AccommodationSpotRepository,
                 clock: Clock = system_clock):
        self.type_repo = type_repo
        self.spot_repo = spot_repo
        self.clock = clock

    async def create_accommodation_type(
        self,
        accommodation_type_id: AccommodationTypeId,
        campsite_id: CampsiteId,
        category: AccommodationCategory,
        max_occupancy: int,
        base_price: Money,
        total_units: int,
        description: str = ""
    ) -> AccommodationType:
        """Register an accommodation type at a campsite"""
        accommodation_type = AccommodationType.create(
            accommodation_type_id=accommodation_type_id,
            campsite_id=campsite_id,
            category=category,
            max_occupancy=max_occupancy,
            base_price=base_price,
            total_units=total_units,
            description=description,
            clock=self.clock
        )
        logger.info("Created accommodation type %s at campsite %s", accommodation_type_id, campsite_id)
        return await self.type_repo.save(accommodation_type)

    async def get_accommodation_type(self, accommodation_type_id: AccommodationTypeId) -> Optional[AccommodationType]:
        return await self.type_repo.find_by_id(accommodation_type_id)

    async def require_accommodation_type(self, accommodation_type_id: AccommodationTypeId) -> AccommodationType:
        accommodation_type = await self.type_repo.find_by_id(accommodation_type_id)
        if not accommodation_type:
            raise NotFoundError(f"Accommodation type {accommodation_type_id} not found")
        return accommodation_type

    async def get_types_by_campsite(self, campsite_id: CampsiteId) -> List[AccommodationType]:
        return await self.type_repo.find_by_campsite(campsite_id)

    async def update_base_price(self, accommodation_type_id: AccommodationTypeId, new_price: Money) -> AccommodationType:
        accommodation_type = await self.require_accommodation_type(accommodation_type_id)
        accommodation_type.update_base_price(new_price)
        return await self.type_repo.update(accommodation_type)

    async def set_type_active(self, accommodation_type_id: AccommodationTypeId, active: bool) -> AccommodationType:
        accommodation_type = await self.require_accommodation_type(accommodation_type_id)
        if active:
            accommodation_type.activate()
        else:
            accommodation_type.deactivate()
        return await self.type_repo.update(accommodation_type)

    async def reprovision_type(self, accommodation_type_id: AccommodationTypeId, total_units: int) -> AccommodationType:
        """Change the unit count used when provisioning new ledger days"""
        accommodation_type = await self.require_accommodation_type(accommodation_type_id)
        accommodation_type.reprovision(total_units)
        return await self.type_repo.update(accommodation_type)

    async def create_spot(
        self,
        spot_id: AccommodationSpotId,
        accommodation_type_id: AccommodationTypeId,
        label: str,
        price_modifier: Number = Decimal("1.0")
    ) -> AccommodationSpot:
        """Add a physical spot to an existing accommodation type"""
        accommodation_type = await self.require_accommodation_type(accommodation_type_id)
        spot = AccommodationSpot.create(
            spot_id=spot_id,
            campsite_id=accommodation_type.campsite_id,
            accommodation_type_id=accommodation_type_id,
            label=label,
            price_modifier=price_modifier,
            clock=self.clock
        )
        return await self.spot_repo.save(spot)

    async def get_spot(self, spot_id: AccommodationSpotId) -> Optional[AccommodationSpot]:
        return await self.spot_repo.find_by_id(spot_id)

    async def require_spot(self, spot_id: AccommodationSpotId) -> AccommodationSpot:
        spot = await self.spot_repo.find_by_id(spot_id)
        if not spot:
            raise NotFoundError(f"Accommodation spot {spot_id} not found")
        return spot

    async def get_spots_by_type(self, accommodation_type_id: AccommodationTypeId) -> List[AccommodationSpot]:
        return await self.spot_repo.find_by_type(accommodation_type_id)

    async def set_spot_status(self, spot_id: AccommodationSpotId, status: SpotStatus) -> AccommodationSpot:
        """Move a spot to a new occupancy status"""
        spot = await self.require_spot(spot_id)
        transitions = {
            SpotStatus.AVAILABLE: spot.mark_available,
            SpotStatus.OCCUPIED: spot.mark_occupied,
            SpotStatus.RESERVED: spot.mark_reserved,
            SpotStatus.MAINTENANCE: spot.mark_maintenance,
        }
        transitions[status]()
        return await self.spot_repo.update(spot)

    async def update_spot_modifier(self, spot_id: AccommodationSpotId, modifier: Number) -> AccommodationSpot:
        spot = await self.require_spot(spot_id)
        spot.update_price_modifier(modifier)
        return await self.spot_repo.update(spot)


class AvailabilityService:
    """Service for the per-day availability ledger"""

    def __init__(self,
                 repository: AvailabilityRepository,
                 clock: Clock = system_clock,
                 locks: Optional[KeyedLocks] = None):
        self.repository = repository
        self.clock = clock
        self._locks = locks or KeyedLocks()

    @staticmethod
    def _key(campsite_id: CampsiteId, accommodation_type_id: AccommodationTypeId, day: date):
        return (int(campsite_id), int(accommodation_type_id), day)

    async def ensure_day(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date,
        total_units: int
    ) -> AvailabilityRecord:
        """Provision a day; an existing record is returned unchanged"""
        key = self._key(campsite_id, accommodation_type_id, availability_date)
        async with self._locks.hold([key]):
            existing = await self.repository.find_by_key(campsite_id, accommodation_type_id, availability_date)
            if existing:
                return existing

            record = AvailabilityRecord.provision(
                campsite_id=campsite_id,
                accommodation_type_id=accommodation_type_id,
                availability_date=availability_date,
                total_units=total_units,
                clock=self.clock
            )
            return await self.repository.save(record)

    async def provision_range(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        start_date: date,
        end_date: date,
        total_units: int
    ) -> List[AvailabilityRecord]:
        """Provision every day in [start_date, end_date)"""
        period = DateRange.create(start_date, end_date)
        return [
            await self.ensure_day(campsite_id, accommodation_type_id, day, total_units)
            for day in period.dates()
        ]

    async def reprovision_day(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date,
        total_units: int
    ) -> AvailabilityRecord:
        """Change a provisioned day's total capacity"""
        key = self._key(campsite_id, accommodation_type_id, availability_date)
        async with self._locks.hold([key]):
            record = await self.repository.find_by_key(campsite_id, accommodation_type_id, availability_date)
            if not record:
                raise NotFoundError(f"No availability provisioned for {availability_date}")
            record.reprovision(total_units, self.clock)
            logger.info(
                "Reprovisioned %s/%s on %s to %d unit(s)",
                campsite_id, accommodation_type_id, availability_date, total_units
            )
            return await self.repository.save(record)

    async def get_availability(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date
    ) -> Optional[AvailabilityRecord]:
        return await self.repository.find_by_key(campsite_id, accommodation_type_id, availability_date)

    async def get_range(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        start_date: date,
        end_date: date
    ) -> List[AvailabilityRecord]:
        return await self.repository.find_range(campsite_id, accommodation_type_id, start_date, end_date)

    async def units_available_on(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date
    ) -> int:
        """Free units of a type on a date; 0 when the day is not provisioned"""
        record = await self.repository.find_by_key(campsite_id, accommodation_type_id, availability_date)
        return record.available_units if record else 0

    async def check_availability(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        period: DateRange,
        required_count: int
    ) -> bool:
        """Check every night of the period has required_count free units"""
        records = await self.repository.find_range(
            campsite_id, accommodation_type_id, period.start, period.end
        )
        if len(records) != period.nights():
            return False
        return all(record.has_availability(required_count) for record in records)

    async def reserve_range(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        period: DateRange,
        count: int
    ) -> List[AvailabilityRecord]:
        """Reserve count units on every night of the period, all or nothing"""
        return await self._apply_range(
            campsite_id, accommodation_type_id, period, count,
            lambda record: record.reserve(count, self.clock), "reserve"
        )

    async def release_range(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        period: DateRange,
        count: int
    ) -> List[AvailabilityRecord]:
        """Release count units on every night of the period, all or nothing"""
        return await self._apply_range(
            campsite_id, accommodation_type_id, period, count,
            lambda record: record.release(count, self.clock), "release"
        )

    async def _apply_range(self, campsite_id, accommodation_type_id, period, count, operation, action):
        if count <= 0:
            raise InvalidCountError("Count must be positive")

        keys = [self._key(campsite_id, accommodation_type_id, day) for day in period.dates()]
        async with self._locks.hold(keys):
            records = await self.repository.find_range(
                campsite_id, accommodation_type_id, period.start, period.end
            )
            by_date = {record.availability_date: record for record in records}

            # Records are detached copies: nothing reaches the store unless every night succeeds
            try:
                for day in period.dates():
                    record = by_date.get(day)
                    if record is None:
                        raise InsufficientAvailabilityError(f"No availability provisioned for {day}")
                    operation(record)
            except DomainError as e:
                logger.warning(
                    "Could not %s %d unit(s) of %s/%s for %s: %s",
                    action, count, campsite_id, accommodation_type_id, period, e
                )
                raise

            saved = await self.repository.save_all([by_date[day] for day in period.dates()])
            logger.info(
                "Ledger %s of %d unit(s) for %s/%s over %s",
                action, count, campsite_id, accommodation_type_id, period
            )
            return saved


class PricingService:
    """Service for seasonal rules and price quotes"""

    def __init__(self,
                 rule_repo: SeasonalPricingRepository,
                 catalog: CatalogService,
                 clock: Clock = system_clock):
        self.rule_repo = rule_repo
        self.catalog = catalog
        self.clock = clock

    async def add_rule(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        season_name: str,
        start_date: date,
        end_date: date,
        multiplier: Number
    ) -> SeasonalPricingRule:
        """Add a named seasonal multiplier"""
        rule = SeasonalPricingRule.create(
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            season_name=season_name,
            start_date=start_date,
            end_date=end_date,
            multiplier=multiplier,
            clock=self.clock
        )
        logger.info(
            "Added season '%s' x%s for %s/%s (%s to %s)",
            rule.season_name, rule.multiplier, campsite_id, accommodation_type_id, start_date, end_date
        )
        return await self.rule_repo.save(rule)

    async def get_rule(self, rule_id: UUID) -> Optional[SeasonalPricingRule]:
        return await self.rule_repo.find_by_id(rule_id)

    async def get_rules(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId
    ) -> List[SeasonalPricingRule]:
        rules = await self.rule_repo.find_for_type(campsite_id, accommodation_type_id)
        return sorted(rules, key=lambda r: (r.start_date, r.season_name))

    async def set_rule_active(self, rule_id: UUID, active: bool) -> Optional[SeasonalPricingRule]:
        rule = await self.rule_repo.find_by_id(rule_id)
        if not rule:
            return None
        if active:
            rule.activate(self.clock)
        else:
            rule.deactivate(self.clock)
        return await self.rule_repo.update(rule)

    async def delete_rule(self, rule_id: UUID) -> bool:
        return await self.rule_repo.delete(rule_id)

    async def quote(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        check_in: date,
        check_out: date,
        spot_id: Optional[AccommodationSpotId] = None
    ) -> PricingBreakdown:
        """Price a stay from the type's base price, the spot modifier and seasonal rules"""
        accommodation_type = await self.catalog.require_accommodation_type(accommodation_type_id)
        if accommodation_type.campsite_id != campsite_id:
            raise ValidationError(
                f"Accommodation type {accommodation_type_id} does not belong to campsite {campsite_id}"
            )

        modifier = Decimal("1.0")
        if spot_id is not None:
            spot = await self.catalog.require_spot(spot_id)
            modifier = spot.price_modifier

        rules = await self.rule_repo.find_for_type(campsite_id, accommodation_type_id)
        breakdown = calculate_price(
            rules=rules,
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            base_price_per_night=accommodation_type.base_price,
            check_in=check_in,
            check_out=check_out,
            spot_modifier=modifier
        )
        logger.debug(
            "Quoted %d night(s) for %s/%s: total=%s avg_multiplier=%s multiple_seasons=%s",
            breakdown.nights, campsite_id, accommodation_type_id, breakdown.total_price,
            breakdown.average_multiplier, breakdown.spans_multiple_seasons
        )
        return breakdown


class DiscountService:
    """Service for promotional codes"""

    def __init__(self,
                 repository: DiscountCodeRepository,
                 clock: Clock = system_clock,
                 locks: Optional[KeyedLocks] = None):
        self.repository = repository
        self.clock = clock
        self._locks = locks or KeyedLocks()

    async def create_code(
        self,
        code: str,
        discount_type: DiscountType,
        value: Number,
        valid_from: date,
        valid_until: date,
        max_uses: int = 0,
        minimum_booking_amount: Number = Decimal("0"),
        description: str = "",
        applicable_campsite_ids: Optional[List[CampsiteId]] = None,
        applicable_type_ids: Optional[List[AccommodationTypeId]] = None
    ) -> DiscountCode:
        """Create a discount code; codes are unique case-insensitively"""
        if await self.repository.find_by_code(code):
            raise ValidationError(f"Discount code {code.strip().upper()} already exists")

        discount = DiscountCode.create(
            code=code,
            discount_type=discount_type,
            value=value,
            valid_from=valid_from,
            valid_until=valid_until,
            max_uses=max_uses,
            minimum_booking_amount=minimum_booking_amount,
            description=description,
            applicable_campsite_ids=applicable_campsite_ids,
            applicable_type_ids=applicable_type_ids,
            clock=self.clock
        )
        return await self.repository.save(discount)

    async def get_code(self, code: str) -> Optional[DiscountCode]:
        return await self.repository.find_by_code(code)

    async def get_all_codes(self) -> List[DiscountCode]:
        return await self.repository.find_all()

    async def set_active(self, code: str, active: bool) -> Optional[DiscountCode]:
        discount = await self.repository.find_by_code(code)
        if not discount:
            return None
        if active:
            discount.activate()
        else:
            discount.deactivate()
        return await self.repository.update(discount)

    async def preview(
        self,
        code: str,
        booking_amount: Money,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        on_date: Optional[date] = None
    ) -> Money:
        """Discount the code would give, without using it up"""
        discount = await self._require_code(code)
        self._ensure_applicable(discount, campsite_id, accommodation_type_id, on_date)
        return discount.calculate_discount(booking_amount)

    async def redeem(
        self,
        code: str,
        booking_amount: Money,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        on_date: Optional[date] = None
    ) -> Money:
        """Validate, calculate and count one use of the code as a single step"""
        key = (code or "").strip().upper()
        async with self._locks.hold([key]):
            discount = await self._require_code(key)
            self._ensure_applicable(discount, campsite_id, accommodation_type_id, on_date)
            amount = discount.calculate_discount(booking_amount)
            discount.increment_usage()
            await self.repository.update(discount)

        logger.info(
            "Redeemed discount %s for %s (use %d of %s)",
            discount.code, amount, discount.used_count, discount.max_uses or "unlimited"
        )
        return amount

    async def release(self, code: str) -> DiscountCode:
        """Return one use of the code after the booking it was redeemed for failed"""
        key = (code or "").strip().upper()
        async with self._locks.hold([key]):
            discount = await self._require_code(key)
            discount.decrement_usage()
            saved = await self.repository.update(discount)

        logger.info("Released one use of discount %s (now %d used)", discount.code, discount.used_count)
        return saved

    async def _require_code(self, code: str) -> DiscountCode:
        discount = await self.repository.find_by_code(code)
        if not discount:
            raise DiscountNotFoundError(f"Discount code {code} not found")
        return discount

    def _ensure_applicable(
        self,
        discount: DiscountCode,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        on_date: Optional[date] = None
    ) -> None:
        if discount.remaining_uses == 0:
            raise UsageExhaustedError(f"Discount code {discount.code} has reached its usage limit")
        on_date = on_date or self.clock.today()
        if not discount.is_valid(on_date):
            raise DiscountNotApplicableError(
                f"Discount code {discount.code} is not valid on {on_date}"
            )
        if not discount.applies_to(campsite_id, accommodation_type_id):
            raise DiscountNotApplicableError(
                f"Discount code {discount.code} does not apply to this accommodation"
            )


class BookingService:
    """Service for Booking business use cases"""

    def __init__(self,
                 repository: BookingRepository,
                 catalog: CatalogService,
                 availability: AvailabilityService,
                 pricing: PricingService,
                 discounts: DiscountService,
                 event_sink: EventSink,
                 clock: Clock = system_clock,
                 locks: Optional[KeyedLocks] = None):
        self.repository = repository
        self.catalog = catalog
        self.availability = availability
        self.pricing = pricing
        self.discounts = discounts
        self.event_sink = event_sink
        self.clock = clock
        self._locks = locks or KeyedLocks()

    @staticmethod
    def _booking_key(booking_id: UUID):
        return ("booking", str(booking_id))

    @staticmethod
    def _spot_key(spot_id: AccommodationSpotId):
        return ("spot", str(int(spot_id)))

    async def create_booking(
        self,
        guest_id: GuestId,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        check_in: date,
        check_out: date,
        adults: int,
        children: int = 0,
        special_requests: str = ""
    ) -> Booking:
        """Create a pending booking priced at the regular spot rate"""
        accommodation_type = await self.catalog.require_accommodation_type(accommodation_type_id)
        if not accommodation_type.is_active:
            raise ValidationError(f"Accommodation type {accommodation_type_id} is not bookable")
        if not accommodation_type.accommodates(adults + children):
            raise InvalidPartySizeError(
                f"Party of {adults + children} exceeds max occupancy of {accommodation_type.max_occupancy}"
            )

        period = DateRange.create(check_in, check_out)
        quote = await self.pricing.quote(campsite_id, accommodation_type_id, check_in, check_out)

        booking, events = Booking.create(
            guest_id=guest_id,
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            period=period,
            base_price=quote.total_price,
            adults=adults,
            children=children,
            special_requests=special_requests,
            clock=self.clock
        )
        saved = await self.repository.save(booking)
        logger.info("Created booking %s for guest %s (%s)", booking.booking_id, guest_id, period)
        await self.event_sink.publish(events)
        return saved

    async def get_booking(self, booking_id: UUID) -> Optional[Booking]:
        """Get booking by ID"""
        return await self.repository.find_by_id(booking_id)

    async def get_bookings_by_guest(self, guest_id: GuestId) -> List[Booking]:
        """Get all bookings for a guest"""
        return await self.repository.find_by_guest_id(guest_id)

    async def get_all_bookings(self) -> List[Booking]:
        """Get all bookings"""
        return await self.repository.find_all()

    async def confirm_booking(
        self,
        booking_id: UUID,
        spot_id: AccommodationSpotId,
        discount_code: Optional[str] = None
    ) -> Optional[Booking]:
        """Assign a spot, reserve the ledger, price, discount and confirm as one unit.

        If any step fails the ledger reservation and any discount use are
        given back, and the stored booking stays pending and unassigned.
        """
        async with self._locks.hold([self._booking_key(booking_id), self._spot_key(spot_id)]):
            booking = await self.repository.find_by_id(booking_id)
            if not booking:
                return None

            spot = await self.catalog.require_spot(spot_id)
            self._ensure_spot_matches(booking, spot)
            await self._ensure_spot_free(booking, spot)

            booking.assign_spot(spot.spot_id, self.clock)
            await self.availability.reserve_range(
                booking.campsite_id, booking.accommodation_type_id, booking.period, UNITS_PER_BOOKING
            )

            redeemed = False
            try:
                quote = await self.pricing.quote(
                    booking.campsite_id, booking.accommodation_type_id,
                    booking.period.start, booking.period.end, spot.spot_id
                )
                total = quote.total_price
                if discount_code:
                    discount = await self.discounts.redeem(
                        discount_code, total, booking.campsite_id, booking.accommodation_type_id
                    )
                    redeemed = True
                    total = total.subtract(discount)

                booking.reprice(total, self.clock)
                events = booking.confirm(self.clock)
                saved = await self.repository.update(booking)
            except Exception:
                logger.warning("Confirmation of booking %s failed, releasing ledger and discount", booking_id)
                await self.availability.release_range(
                    booking.campsite_id, booking.accommodation_type_id, booking.period, UNITS_PER_BOOKING
                )
                if redeemed:
                    await self.discounts.release(discount_code)
                raise

            logger.info(
                "Confirmed booking %s on spot %s, total %s", booking_id, spot.label, saved.total_price
            )
            await self.event_sink.publish(events)
            return saved

    async def cancel_booking(self, booking_id: UUID, reason: str = "") -> Optional[Booking]:
        """Cancel booking and give back any reserved ledger units"""
        async with self._locks.hold([self._booking_key(booking_id)]):
            booking = await self.repository.find_by_id(booking_id)
            if not booking:
                return None

            held_units = booking.status == BookingStatus.CONFIRMED
            events = booking.cancel(reason, self.clock)
            if held_units:
                await self.availability.release_range(
                    booking.campsite_id, booking.accommodation_type_id, booking.period, UNITS_PER_BOOKING
                )

            saved = await self.repository.update(booking)
            logger.info("Cancelled booking %s (%s)", booking_id, reason or "no reason given")
            await self.event_sink.publish(events)
            return saved

    async def complete_booking(self, booking_id: UUID) -> Optional[Booking]:
        """Mark a confirmed stay as completed"""
        async with self._locks.hold([self._booking_key(booking_id)]):
            booking = await self.repository.find_by_id(booking_id)
            if not booking:
                return None

            events = booking.complete(self.clock)
            saved = await self.repository.update(booking)
            logger.info("Completed booking %s", booking_id)
            await self.event_sink.publish(events)
            return saved

    async def reprice_booking(self, booking_id: UUID, new_total: Money) -> Optional[Booking]:
        async with self._locks.hold([self._booking_key(booking_id)]):
            booking = await self.repository.find_by_id(booking_id)
            if not booking:
                return None

            booking.reprice(new_total, self.clock)
            return await self.repository.update(booking)

    async def update_special_requests(self, booking_id: UUID, text: str) -> Optional[Booking]:
        async with self._locks.hold([self._booking_key(booking_id)]):
            booking = await self.repository.find_by_id(booking_id)
            if not booking:
                return None

            booking.update_notes(text, self.clock)
            return await self.repository.update(booking)

    async def delete_booking(self, booking_id: UUID) -> bool:
        """Delete the aggregate, first releasing units a confirmed booking holds"""
        async with self._locks.hold([self._booking_key(booking_id)]):
            booking = await self.repository.find_by_id(booking_id)
            if not booking:
                return False

            if booking.status == BookingStatus.CONFIRMED:
                await self.availability.release_range(
                    booking.campsite_id, booking.accommodation_type_id, booking.period, UNITS_PER_BOOKING
                )
            deleted = await self.repository.delete(booking_id)
            logger.info("Deleted booking %s", booking_id)
            return deleted

    # ==================== PRIVATE HELPERS ====================
    @staticmethod
    def _ensure_spot_matches(booking: Booking, spot: AccommodationSpot) -> None:
        if (spot.accommodation_type_id != booking.accommodation_type_id
                or spot.campsite_id != booking.campsite_id):
            raise ValidationError(
                f"Spot {spot.label} does not belong to the booked accommodation type"
            )
        if spot.status == SpotStatus.MAINTENANCE:
            raise UnderMaintenanceError(f"Spot {spot.label} is under maintenance")

    async def _ensure_spot_free(self, booking: Booking, spot: AccommodationSpot) -> None:
        holders = await self.repository.find_confirmed_by_spot(spot.spot_id)
        for other in holders:
            if other.booking_id != booking.booking_id and other.period.overlaps(booking.period):
                raise SpotUnavailableError(
                    f"Spot {spot.label} is already booked for an overlapping period"
                )
