"""Domain Entities - Aggregates"""
from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID, uuid4
from datetime import datetime, date, timezone
from typing import Optional, List, Tuple
from decimal import Decimal

from domain.clock import Clock, system_clock
from domain.enums import BookingStatus, SpotStatus, DiscountType, AccommodationCategory
from domain.errors import (
    BelowMinimumError, InsufficientAvailabilityError, InvalidCountError, InvalidPartySizeError,
    InvalidRangeError, InvalidStayPeriodError, InvalidTransitionError, MissingAssignmentError,
    NegativeAmountError, NegativeCapacityError, NonPositiveModifierError, NonPositivePriceError,
    OverReleaseError, PastDateError, UnderMaintenanceError, UsageExhaustedError, ValidationError
)
from domain.events import (
    BookingCancelled, BookingConfirmed, BookingCreated, Events, NO_EVENTS
)
from domain.value_objects import (
    AccommodationSpotId, AccommodationTypeId, CampsiteId, DateRange, GuestId, Money, Number,
    to_decimal
)

MIN_ADULTS = 1
MAX_ADULTS = 10
MIN_CHILDREN = 0
MAX_CHILDREN = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(BaseModel):
    """Booking Aggregate Root Entity"""

    # Identity
    booking_id: UUID = Field(default_factory=uuid4)

    # References to other aggregates
    guest_id: GuestId
    campsite_id: CampsiteId
    accommodation_type_id: AccommodationTypeId
    spot_id: Optional[AccommodationSpotId] = None

    # Value Objects
    period: DateRange
    base_price: Money
    total_price: Money

    # Status
    status: BookingStatus = BookingStatus.PENDING

    # Party
    adults: int = Field(ge=MIN_ADULTS, le=MAX_ADULTS)
    children: int = Field(ge=MIN_CHILDREN, le=MAX_CHILDREN, default=0)
    special_requests: str = ""

    # Metadata
    created_at: datetime = Field(default_factory=_utcnow)
    modified_at: datetime = Field(default_factory=_utcnow)
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    version: int = 1

    model_config = ConfigDict(from_attributes=True)

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        guest_id: GuestId,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        period: DateRange,
        base_price: Money,
        adults: int,
        children: int = 0,
        special_requests: str = "",
        clock: Clock = system_clock
    ) -> Tuple["Booking", Events]:
        """Create new pending booking with validation.

        Every invariant is checked before the instance is built, so a
        partially-invalid booking never exists. Returns the booking together
        with the BookingCreated event.
        """
        Booking._validate_period(period, clock.today())
        Booking._validate_party(adults, children)
        if base_price.amount < 0:
            raise NegativeAmountError("Base price cannot be negative")

        now = clock.now()
        booking = Booking(
            guest_id=guest_id,
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            period=period,
            base_price=base_price,
            total_price=base_price,
            adults=adults,
            children=children,
            special_requests=(special_requests or "").strip(),
            status=BookingStatus.PENDING,
            created_at=now,
            modified_at=now
        )
        event = BookingCreated(
            booking_id=booking.booking_id,
            guest_id=guest_id,
            campsite_id=campsite_id,
            check_in=period.start,
            check_out=period.end,
            occurred_on=now
        )
        return booking, (event,)

    # ==================== STATE TRANSITION METHODS ====================
    def assign_spot(self, spot_id: AccommodationSpotId, clock: Clock = system_clock) -> Events:
        """Record which physical spot the guest will get"""
        if self.status != BookingStatus.PENDING:
            raise InvalidTransitionError(
                f"Cannot assign a spot to a booking with status {self.status.value}"
            )

        self.spot_id = spot_id
        self._touch(clock)
        return NO_EVENTS

    def confirm(self, clock: Clock = system_clock) -> Events:
        """Confirm a pending booking that has a spot assigned"""
        self._ensure_transition(BookingStatus.CONFIRMED)
        if self.spot_id is None:
            raise MissingAssignmentError("A spot must be assigned before confirming")

        self.status = BookingStatus.CONFIRMED
        self._touch(clock)
        return (BookingConfirmed(
            booking_id=self.booking_id,
            guest_id=self.guest_id,
            spot_id=self.spot_id,
            check_in=self.period.start,
            check_out=self.period.end,
            occurred_on=self.modified_at
        ),)

    def cancel(self, reason: str = "", clock: Clock = system_clock) -> Events:
        """Cancel a pending or confirmed booking"""
        self._ensure_transition(BookingStatus.CANCELLED)

        was_confirmed = self.status == BookingStatus.CONFIRMED
        self.status = BookingStatus.CANCELLED
        self.cancellation_reason = reason or None
        self._touch(clock)
        self.cancelled_at = self.modified_at
        return (BookingCancelled(
            booking_id=self.booking_id,
            guest_id=self.guest_id,
            reason=reason or "",
            was_confirmed=was_confirmed,
            occurred_on=self.modified_at
        ),)

    def complete(self, clock: Clock = system_clock) -> Events:
        """Mark a confirmed stay as completed"""
        self._ensure_transition(BookingStatus.COMPLETED)

        self.status = BookingStatus.COMPLETED
        self._touch(clock)
        return NO_EVENTS

    # ==================== MODIFICATION METHODS ====================
    def reprice(self, new_total: Money, clock: Clock = system_clock) -> Events:
        """Replace the total price"""
        self._ensure_modifiable("reprice")
        if new_total.amount < 0:
            raise NegativeAmountError("Total price cannot be negative")

        self.total_price = new_total
        self._touch(clock)
        return NO_EVENTS

    def update_notes(self, text: str, clock: Clock = system_clock) -> Events:
        """Replace the special-requests text"""
        self._ensure_modifiable("update special requests of")

        self.special_requests = (text or "").strip()
        self._touch(clock)
        return NO_EVENTS

    # ==================== QUERY METHODS ====================
    def is_active(self) -> bool:
        return self.status.is_active

    def can_be_modified(self) -> bool:
        return self.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED)

    def nights(self) -> int:
        """Get number of nights"""
        return self.period.nights()

    def total_guests(self) -> int:
        return self.adults + self.children

    # ==================== PRIVATE METHODS ====================
    def _ensure_transition(self, target: BookingStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(
                f"Cannot move booking from {self.status.value} to {target.value}"
            )

    def _ensure_modifiable(self, action: str) -> None:
        if not self.can_be_modified():
            raise InvalidTransitionError(
                f"Cannot {action} a booking with status {self.status.value}"
            )

    def _touch(self, clock: Clock) -> None:
        self.modified_at = clock.now()
        self.version += 1

    @staticmethod
    def _validate_period(period: DateRange, today: date) -> None:
        if period.start < today:
            raise InvalidStayPeriodError("Check-in date must be today or later")

    @staticmethod
    def _validate_party(adults: int, children: int) -> None:
        if not MIN_ADULTS <= adults <= MAX_ADULTS:
            raise InvalidPartySizeError(
                f"Number of adults must be between {MIN_ADULTS} and {MAX_ADULTS}"
            )
        if not MIN_CHILDREN <= children <= MAX_CHILDREN:
            raise InvalidPartySizeError(
                f"Number of children must be between {MIN_CHILDREN} and {MAX_CHILDREN}"
            )


class AvailabilityRecord(BaseModel):
    """Availability Ledger entry for one type on one date"""

    # Identity
    availability_id: UUID = Field(default_factory=uuid4)
    campsite_id: CampsiteId
    accommodation_type_id: AccommodationTypeId
    availability_date: date

    # Capacity Tracking
    available_units: int = Field(ge=0)
    reserved_units: int = Field(ge=0, default=0)

    # Metadata
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    version: int = 1

    model_config = ConfigDict(from_attributes=True)

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def provision(
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        availability_date: date,
        total_units: int,
        clock: Clock = system_clock
    ) -> "AvailabilityRecord":
        """Create the ledger entry for a day with every unit free"""
        if availability_date < clock.today():
            raise PastDateError("Availability date cannot be in the past")
        if total_units < 0:
            raise NegativeCapacityError("Total units cannot be negative")

        now = clock.now()
        return AvailabilityRecord(
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            availability_date=availability_date,
            available_units=total_units,
            reserved_units=0,
            created_at=now,
            updated_at=now
        )

    # ==================== COMPUTED PROPERTIES ====================
    @property
    def key(self) -> Tuple[CampsiteId, AccommodationTypeId, date]:
        return (self.campsite_id, self.accommodation_type_id, self.availability_date)

    @property
    def total_capacity(self) -> int:
        return self.available_units + self.reserved_units

    @property
    def is_fully_reserved(self) -> bool:
        return self.available_units == 0

    # ==================== KEY METHODS ====================
    def has_availability(self, count: int) -> bool:
        """Check if count units are free"""
        return self.available_units >= count

    def reserve(self, count: int, clock: Clock = system_clock) -> None:
        """Move count units from available to reserved"""
        if count <= 0:
            raise InvalidCountError("Count must be positive")
        if count > self.available_units:
            raise InsufficientAvailabilityError(
                f"Only {self.available_units} unit(s) available on {self.availability_date}"
            )

        self.available_units -= count
        self.reserved_units += count
        self._touch(clock)

    def release(self, count: int, clock: Clock = system_clock) -> None:
        """Move count units from reserved back to available"""
        if count <= 0:
            raise InvalidCountError("Count must be positive")
        if count > self.reserved_units:
            raise OverReleaseError(
                f"Cannot release {count} unit(s); only {self.reserved_units} reserved "
                f"on {self.availability_date}"
            )

        self.reserved_units -= count
        self.available_units += count
        self._touch(clock)

    def reprovision(self, total_units: int, clock: Clock = system_clock) -> None:
        """Change the day's total capacity, keeping current reservations"""
        if total_units < 0:
            raise NegativeCapacityError("Total units cannot be negative")
        if total_units < self.reserved_units:
            raise InsufficientAvailabilityError(
                f"Cannot shrink capacity below the {self.reserved_units} reserved unit(s)"
            )

        self.available_units = total_units - self.reserved_units
        self._touch(clock)

    def _touch(self, clock: Clock) -> None:
        self.updated_at = clock.now()
        self.version += 1


class AccommodationType(BaseModel):
    """A bookable category at a campsite.

    total_units is provisioning capacity only. How many units are free on a
    given date is answered by the availability ledger.
    """

    accommodation_type_id: AccommodationTypeId
    campsite_id: CampsiteId
    category: AccommodationCategory
    description: str = ""
    max_occupancy: int = Field(gt=0)
    base_price: Money
    total_units: int = Field(ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(from_attributes=True)

    @staticmethod
    def create(
        accommodation_type_id: AccommodationTypeId,
        campsite_id: CampsiteId,
        category: AccommodationCategory,
        max_occupancy: int,
        base_price: Money,
        total_units: int,
        description: str = "",
        clock: Clock = system_clock
    ) -> "AccommodationType":
        if max_occupancy <= 0:
            raise ValidationError("Max occupancy must be greater than 0")
        if base_price.amount <= 0:
            raise NonPositivePriceError("Base price must be positive")
        if total_units < 0:
            raise NegativeCapacityError("Total units cannot be negative")

        return AccommodationType(
            accommodation_type_id=accommodation_type_id,
            campsite_id=campsite_id,
            category=category,
            description=description,
            max_occupancy=max_occupancy,
            base_price=base_price,
            total_units=total_units,
            created_at=clock.now()
        )

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def update_base_price(self, new_price: Money) -> None:
        if new_price.amount <= 0:
            raise NonPositivePriceError("Base price must be positive")
        self.base_price = new_price

    def reprovision(self, total_units: int) -> None:
        if total_units < 0:
            raise NegativeCapacityError("Total units cannot be negative")
        self.total_units = total_units

    def accommodates(self, guests: int) -> bool:
        return guests <= self.max_occupancy


class AccommodationSpot(BaseModel):
    """One physical unit of an accommodation type"""

    spot_id: AccommodationSpotId
    campsite_id: CampsiteId
    accommodation_type_id: AccommodationTypeId
    label: str = Field(min_length=1)
    price_modifier: Decimal = Field(gt=0, default=Decimal("1.0"))
    status: SpotStatus = SpotStatus.AVAILABLE
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(from_attributes=True)

    @staticmethod
    def create(
        spot_id: AccommodationSpotId,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        label: str,
        price_modifier: Number = Decimal("1.0"),
        clock: Clock = system_clock
    ) -> "AccommodationSpot":
        if not label or not label.strip():
            raise ValidationError("Spot label cannot be empty")
        modifier = to_decimal(price_modifier)
        if modifier <= 0:
            raise NonPositiveModifierError("Price modifier must be positive")

        return AccommodationSpot(
            spot_id=spot_id,
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            label=label.strip(),
            price_modifier=modifier,
            created_at=clock.now()
        )

    def mark_available(self) -> None:
        self.status = SpotStatus.AVAILABLE

    def mark_occupied(self) -> None:
        self._ensure_not_in_maintenance(SpotStatus.OCCUPIED)
        self.status = SpotStatus.OCCUPIED

    def mark_reserved(self) -> None:
        self._ensure_not_in_maintenance(SpotStatus.RESERVED)
        self.status = SpotStatus.RESERVED

    def mark_maintenance(self) -> None:
        self.status = SpotStatus.MAINTENANCE

    def update_price_modifier(self, modifier: Number) -> None:
        modifier = to_decimal(modifier)
        if modifier <= 0:
            raise NonPositiveModifierError("Price modifier must be positive")
        self.price_modifier = modifier

    def is_available_for_booking(self) -> bool:
        return self.status == SpotStatus.AVAILABLE

    def _ensure_not_in_maintenance(self, target: SpotStatus) -> None:
        if self.status == SpotStatus.MAINTENANCE:
            raise UnderMaintenanceError(
                f"Spot {self.label} is under maintenance and cannot become {target.value}"
            )


class SeasonalPricingRule(BaseModel):
    """Named date window with a price multiplier"""

    rule_id: UUID = Field(default_factory=uuid4)
    campsite_id: CampsiteId
    accommodation_type_id: AccommodationTypeId
    season_name: str = Field(min_length=1)
    start_date: date
    end_date: date
    multiplier: Decimal = Field(gt=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(from_attributes=True)

    @staticmethod
    def create(
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        season_name: str,
        start_date: date,
        end_date: date,
        multiplier: Number,
        clock: Clock = system_clock
    ) -> "SeasonalPricingRule":
        if not season_name or not season_name.strip():
            raise ValidationError("Season name cannot be empty")
        if end_date < start_date:
            raise InvalidRangeError("Season end date cannot be before its start date")
        multiplier = to_decimal(multiplier)
        if multiplier <= 0:
            raise NonPositiveModifierError("Price multiplier must be greater than 0")

        now = clock.now()
        return SeasonalPricingRule(
            campsite_id=campsite_id,
            accommodation_type_id=accommodation_type_id,
            season_name=season_name.strip(),
            start_date=start_date,
            end_date=end_date,
            multiplier=multiplier,
            created_at=now,
            updated_at=now
        )

    def is_date_in_season(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def applies_to(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId,
        day: date
    ) -> bool:
        return (
            self.is_active
            and self.campsite_id == campsite_id
            and self.accommodation_type_id == accommodation_type_id
            and self.is_date_in_season(day)
        )

    def calculate_price(self, base_price: Money) -> Money:
        if base_price.amount <= 0:
            raise NonPositivePriceError("Base price must be positive")
        return base_price.multiply(self.multiplier)

    def duration_days(self) -> int:
        """Days in the window, both ends included"""
        return (self.end_date - self.start_date).days + 1

    def activate(self, clock: Clock = system_clock) -> None:
        self.is_active = True
        self.updated_at = clock.now()

    def deactivate(self, clock: Clock = system_clock) -> None:
        self.is_active = False
        self.updated_at = clock.now()


class DiscountCode(BaseModel):
    """Promotional code reducing a booking's total"""

    discount_id: UUID = Field(default_factory=uuid4)
    code: str = Field(min_length=1)
    description: str = ""
    discount_type: DiscountType = DiscountType.PERCENTAGE
    value: Decimal = Field(gt=0)
    valid_from: date
    valid_until: date
    used_count: int = Field(ge=0, default=0)
    max_uses: int = Field(ge=0, default=0)
    minimum_booking_amount: Decimal = Field(ge=0, default=Decimal("0"))
    is_active: bool = True

    # Empty means the code applies everywhere
    applicable_campsite_ids: List[CampsiteId] = []
    applicable_type_ids: List[AccommodationTypeId] = []

    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(from_attributes=True)

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        code: str,
        discount_type: DiscountType,
        value: Number,
        valid_from: date,
        valid_until: date,
        max_uses: int = 0,
        minimum_booking_amount: Number = Decimal("0"),
        description: str = "",
        applicable_campsite_ids: Optional[List[CampsiteId]] = None,
        applicable_type_ids: Optional[List[AccommodationTypeId]] = None,
        clock: Clock = system_clock
    ) -> "DiscountCode":
        """Create discount code with validation"""
        if not code or not code.strip():
            raise ValidationError("Code cannot be empty")
        value = to_decimal(value)
        if value <= 0:
            raise ValidationError("Value must be greater than 0")
        if discount_type == DiscountType.PERCENTAGE and value > 100:
            raise ValidationError("Percentage value cannot exceed 100")
        if valid_until < valid_from:
            raise InvalidRangeError("Valid-until must be on or after valid-from")
        if max_uses < 0:
            raise ValidationError("Max uses cannot be negative (use 0 for unlimited)")
        minimum = to_decimal(minimum_booking_amount)
        if minimum < 0:
            raise NegativeAmountError("Minimum booking amount cannot be negative")

        return DiscountCode(
            code=code.strip().upper(),
            description=description,
            discount_type=discount_type,
            value=value,
            valid_from=valid_from,
            valid_until=valid_until,
            max_uses=max_uses,
            minimum_booking_amount=minimum,
            applicable_campsite_ids=list(applicable_campsite_ids or []),
            applicable_type_ids=list(applicable_type_ids or []),
            created_at=clock.now()
        )

    # ==================== QUERY METHODS ====================
    def is_valid(self, on_date: date) -> bool:
        """Check active flag, validity window and usage cap"""
        return (
            self.is_active
            and self.valid_from <= on_date <= self.valid_until
            and (self.max_uses == 0 or self.used_count < self.max_uses)
        )

    def applies_to(
        self,
        campsite_id: CampsiteId,
        accommodation_type_id: AccommodationTypeId
    ) -> bool:
        if self.applicable_campsite_ids and campsite_id not in self.applicable_campsite_ids:
            return False
        if self.applicable_type_ids and accommodation_type_id not in self.applicable_type_ids:
            return False
        return True

    @property
    def remaining_uses(self) -> Optional[int]:
        """None when unlimited"""
        if self.max_uses == 0:
            return None
        return max(0, self.max_uses - self.used_count)

    def calculate_discount(self, booking_amount: Money) -> Money:
        """Amount to subtract from booking_amount"""
        if booking_amount.amount < self.minimum_booking_amount:
            raise BelowMinimumError(
                f"Booking amount must be at least {self.minimum_booking_amount}"
            )

        if self.discount_type == DiscountType.PERCENTAGE:
            amount = booking_amount.amount * self.value / Decimal(100)
        else:
            amount = min(self.value, booking_amount.amount)
        return Money(amount=amount, currency=booking_amount.currency)

    # ==================== STATE METHODS ====================
    def increment_usage(self) -> None:
        if self.max_uses > 0 and self.used_count >= self.max_uses:
            raise UsageExhaustedError("Discount has reached maximum usage limit")

        self.used_count += 1
        if self.max_uses > 0 and self.used_count >= self.max_uses:
            self.is_active = False

    def decrement_usage(self) -> None:
        """Give back one use; a code closed by its cap opens again"""
        if self.used_count == 0:
            raise ValidationError("Discount has no recorded usage to give back")

        was_capped = self.max_uses > 0 and self.used_count >= self.max_uses
        self.used_count -= 1
        if was_capped and not self.is_active:
            self.is_active = True

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False
