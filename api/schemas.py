"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from typing import List, Optional

from domain.enums import AccommodationCategory, DiscountType, SpotStatus
from infrastructure.config import DEFAULT_CURRENCY


# ============================================================================
# SHARED SCHEMAS
# ============================================================================

class MoneyRequest(BaseModel):
    """Money request DTO"""
    amount: Decimal = Field(ge=0)
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=3)


class MoneyResponse(BaseModel):
    """Money response DTO"""
    amount: Decimal
    currency: str


class ErrorResponse(BaseModel):
    """Error body for domain failures"""
    code: str
    detail: str


# ============================================================================
# CATALOG SCHEMAS
# ============================================================================

class CreateAccommodationTypeRequest(BaseModel):
    """Create accommodation type request DTO"""
    accommodation_type_id: int = Field(gt=0)
    campsite_id: int = Field(gt=0)
    category: AccommodationCategory
    max_occupancy: int = Field(gt=0)
    base_price: MoneyRequest
    total_units: int = Field(ge=0)
    description: str = ""


class AccommodationTypeResponse(BaseModel):
    """Accommodation type response DTO"""
    accommodation_type_id: int
    campsite_id: int
    category: str
    description: str
    max_occupancy: int
    base_price: MoneyResponse
    total_units: int
    is_active: bool


class UpdateBasePriceRequest(BaseModel):
    base_price: MoneyRequest


class CreateSpotRequest(BaseModel):
    """Create accommodation spot request DTO"""
    spot_id: int = Field(gt=0)
    label: str = Field(min_length=1)
    price_modifier: Decimal = Field(gt=0, default=Decimal("1.0"))


class SpotResponse(BaseModel):
    """Accommodation spot response DTO"""
    spot_id: int
    campsite_id: int
    accommodation_type_id: int
    label: str
    price_modifier: Decimal
    status: str


class UpdateSpotStatusRequest(BaseModel):
    status: SpotStatus


class UpdateSpotModifierRequest(BaseModel):
    price_modifier: Decimal


# ============================================================================
# AVAILABILITY SCHEMAS
# ============================================================================

class ProvisionAvailabilityRequest(BaseModel):
    """Provision ledger days in [start_date, end_date)"""
    campsite_id: int = Field(gt=0)
    accommodation_type_id: int = Field(gt=0)
    start_date: date
    end_date: date
    total_units: int = Field(ge=0)


class ReprovisionRequest(BaseModel):
    total_units: int


class AvailabilityRangeRequest(BaseModel):
    """Check, reserve or release units over [start_date, end_date)"""
    campsite_id: int = Field(gt=0)
    accommodation_type_id: int = Field(gt=0)
    start_date: date
    end_date: date
    count: int = 1


class AvailabilityResponse(BaseModel):
    """Availability ledger day response DTO"""
    availability_id: UUID
    campsite_id: int
    accommodation_type_id: int
    availability_date: date
    available_units: int
    reserved_units: int
    total_capacity: int
    version: int


# ============================================================================
# PRICING SCHEMAS
# ============================================================================

class CreateSeasonalRuleRequest(BaseModel):
    """Create seasonal pricing rule request DTO"""
    campsite_id: int = Field(gt=0)
    accommodation_type_id: int = Field(gt=0)
    season_name: str
    start_date: date
    end_date: date
    multiplier: Decimal


class SeasonalRuleResponse(BaseModel):
    """Seasonal pricing rule response DTO"""
    rule_id: UUID
    campsite_id: int
    accommodation_type_id: int
    season_name: str
    start_date: date
    end_date: date
    multiplier: Decimal
    is_active: bool


class QuoteRequest(BaseModel):
    """Price quote request DTO"""
    campsite_id: int = Field(gt=0)
    accommodation_type_id: int = Field(gt=0)
    check_in: date
    check_out: date
    spot_id: Optional[int] = Field(None, gt=0)


class NightPriceResponse(BaseModel):
    night_date: date
    season_name: str
    multiplier: Decimal
    price: MoneyResponse


class QuoteResponse(BaseModel):
    """Per-night price breakdown response DTO"""
    base_price_per_night: MoneyResponse
    spot_modifier: Decimal
    nights: int
    nightly: List[NightPriceResponse]
    total_price: MoneyResponse
    average_multiplier: Decimal
    season_names: List[str]
    spans_multiple_seasons: bool


# ============================================================================
# DISCOUNT SCHEMAS
# ============================================================================

class CreateDiscountRequest(BaseModel):
    """Create discount code request DTO"""
    code: str
    discount_type: DiscountType
    value: Decimal
    valid_from: date
    valid_until: date
    max_uses: int = 0
    minimum_booking_amount: Decimal = Decimal("0")
    description: str = ""
    applicable_campsite_ids: List[int] = []
    applicable_type_ids: List[int] = []


class DiscountResponse(BaseModel):
    """Discount code response DTO"""
    discount_id: UUID
    code: str
    description: str
    discount_type: str
    value: Decimal
    valid_from: date
    valid_until: date
    used_count: int
    max_uses: int
    remaining_uses: Optional[int]
    minimum_booking_amount: Decimal
    is_active: bool
    applicable_campsite_ids: List[int]
    applicable_type_ids: List[int]


class DiscountPreviewRequest(BaseModel):
    """Preview what a code would take off an amount"""
    booking_amount: MoneyRequest
    campsite_id: int = Field(gt=0)
    accommodation_type_id: int = Field(gt=0)


# ============================================================================
# BOOKING SCHEMAS
# ============================================================================

class CreateBookingRequest(BaseModel):
    """Create booking request DTO"""
    guest_id: int = Field(gt=0)
    campsite_id: int = Field(gt=0)
    accommodation_type_id: int = Field(gt=0)
    check_in: date
    check_out: date
    adults: int
    children: int = 0
    special_requests: str = ""


class ConfirmBookingRequest(BaseModel):
    """Confirm booking request DTO"""
    spot_id: int = Field(gt=0)
    discount_code: Optional[str] = None


class CancelBookingRequest(BaseModel):
    """Cancel booking request DTO"""
    reason: str = ""


class RepriceBookingRequest(BaseModel):
    total_price: MoneyRequest


class UpdateSpecialRequestsRequest(BaseModel):
    special_requests: str


class BookingResponse(BaseModel):
    """Booking response DTO"""
    booking_id: UUID
    guest_id: int
    campsite_id: int
    accommodation_type_id: int
    spot_id: Optional[int] = None
    check_in: date
    check_out: date
    nights: int
    adults: int
    children: int
    special_requests: str
    base_price: MoneyResponse
    total_price: MoneyResponse
    status: str
    created_at: datetime
    modified_at: datetime
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    version: int
