from fastapi import FastAPI, HTTPException, Depends, Path
from uuid import UUID
from datetime import date
from typing import Annotated, List

from api.schemas import (
    # Shared
    MoneyRequest, MoneyResponse,
    # Catalog
    CreateAccommodationTypeRequest, AccommodationTypeResponse, UpdateBasePriceRequest,
    CreateSpotRequest, SpotResponse, UpdateSpotStatusRequest, UpdateSpotModifierRequest,
    # Availability
    ProvisionAvailabilityRequest, ReprovisionRequest, AvailabilityRangeRequest, AvailabilityResponse,
    # Pricing
    CreateSeasonalRuleRequest, SeasonalRuleResponse, QuoteRequest, QuoteResponse, NightPriceResponse,
    # Discounts
    CreateDiscountRequest, DiscountResponse, DiscountPreviewRequest,
    # Bookings
    CreateBookingRequest, ConfirmBookingRequest, CancelBookingRequest, RepriceBookingRequest,
    UpdateSpecialRequestsRequest, BookingResponse
)
from api.dependencies import (
    get_availability_service, get_booking_service, get_catalog_service, get_discount_service,
    get_pricing_service
)
from application.services import (
    AvailabilityService, BookingService, CatalogService, DiscountService, PricingService
)
from domain.enums import AccommodationCategory, BookingStatus, DiscountType, SpotStatus
from domain.errors import (
    CapacityError, DomainError, ErrorCode, InvalidTransitionError, NotFoundError, PolicyError
)
from domain.value_objects import (
    AccommodationSpotId, AccommodationTypeId, CampsiteId, DateRange, GuestId, Money
)
from infrastructure import config

config.configure_logging()

PositiveId = Annotated[int, Path(gt=0)]

app = FastAPI(
    title=config.APP_TITLE,
    description="Campsite booking, availability and pricing API",
    version=config.APP_VERSION
)

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/booking-status", tags=["Enum Reference"])
async def get_booking_statuses():
    """Get all BookingStatus enum values"""
    return {
        "values": [item.value for item in BookingStatus],
        "description": "Booking status values: PENDING, CONFIRMED, CANCELLED, COMPLETED"
    }

@app.get("/api/enums/spot-status", tags=["Enum Reference"])
async def get_spot_statuses():
    """Get all SpotStatus enum values"""
    return {"values": [item.value for item in SpotStatus]}

@app.get("/api/enums/discount-type", tags=["Enum Reference"])
async def get_discount_types():
    """Get all DiscountType enum values"""
    return {"values": [item.value for item in DiscountType]}

@app.get("/api/enums/accommodation-category", tags=["Enum Reference"])
async def get_accommodation_categories():
    """Get all AccommodationCategory enum values"""
    return {"values": [item.value for item in AccommodationCategory]}

@app.get("/api/enums/error-codes", tags=["Enum Reference"])
async def get_error_codes():
    """Get all machine-readable error codes"""
    return {"values": [item.value for item in ErrorCode]}

# ============================================================================
# CATALOG ENDPOINTS
# ============================================================================

@app.post("/api/accommodation-types", response_model=AccommodationTypeResponse, status_code=201, tags=["Catalog"])
async def create_accommodation_type(
    request: CreateAccommodationTypeRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Register an accommodation type at a campsite"""
    try:
        accommodation_type = await service.create_accommodation_type(
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            campsite_id=CampsiteId(request.campsite_id),
            category=request.category,
            max_occupancy=request.max_occupancy,
            base_price=_to_money(request.base_price),
            total_units=request.total_units,
            description=request.description
        )
        return _type_to_response(accommodation_type)
    except ValueError as e:
        raise _http_error(e)

@app.get("/api/accommodation-types/{accommodation_type_id}", response_model=AccommodationTypeResponse, tags=["Catalog"])
async def get_accommodation_type(
    accommodation_type_id: PositiveId,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get accommodation type by ID"""
    accommodation_type = await service.get_accommodation_type(AccommodationTypeId(accommodation_type_id))
    if not accommodation_type:
        raise HTTPException(status_code=404, detail="Accommodation type not found")
    return _type_to_response(accommodation_type)

@app.get("/api/campsites/{campsite_id}/accommodation-types", response_model=List[AccommodationTypeResponse], tags=["Catalog"])
async def get_campsite_accommodation_types(
    campsite_id: PositiveId,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get all accommodation types of a campsite"""
    types = await service.get_types_by_campsite(CampsiteId(campsite_id))
    return [_type_to_response(t) for t in types]

@app.put("/api/accommodation-types/{accommodation_type_id}/base-price", response_model=AccommodationTypeResponse, tags=["Catalog"])
async def update_base_price(
    accommodation_type_id: PositiveId,
    request: UpdateBasePriceRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Change the nightly base price"""
    try:
        accommodation_type = await service.update_base_price(
            AccommodationTypeId(accommodation_type_id), _to_money(request.base_price)
        )
        return _type_to_response(accommodation_type)
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/accommodation-types/{accommodation_type_id}/activate", response_model=AccommodationTypeResponse, tags=["Catalog"])
async def activate_accommodation_type(
    accommodation_type_id: PositiveId,
    service: CatalogService = Depends(get_catalog_service)
):
    """Make an accommodation type bookable"""
    try:
        return _type_to_response(await service.set_type_active(AccommodationTypeId(accommodation_type_id), True))
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/accommodation-types/{accommodation_type_id}/deactivate", response_model=AccommodationTypeResponse, tags=["Catalog"])
async def deactivate_accommodation_type(
    accommodation_type_id: PositiveId,
    service: CatalogService = Depends(get_catalog_service)
):
    """Stop new bookings for an accommodation type"""
    try:
        return _type_to_response(await service.set_type_active(AccommodationTypeId(accommodation_type_id), False))
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/accommodation-types/{accommodation_type_id}/spots", response_model=SpotResponse, status_code=201, tags=["Catalog"])
async def create_spot(
    accommodation_type_id: PositiveId,
    request: CreateSpotRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Add a physical spot to an accommodation type"""
    try:
        spot = await service.create_spot(
            spot_id=AccommodationSpotId(request.spot_id),
            accommodation_type_id=AccommodationTypeId(accommodation_type_id),
            label=request.label,
            price_modifier=request.price_modifier
        )
        return _spot_to_response(spot)
    except ValueError as e:
        raise _http_error(e)

@app.get("/api/accommodation-types/{accommodation_type_id}/spots", response_model=List[SpotResponse], tags=["Catalog"])
async def get_spots(
    accommodation_type_id: PositiveId,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get all spots of an accommodation type"""
    spots = await service.get_spots_by_type(AccommodationTypeId(accommodation_type_id))
    return [_spot_to_response(s) for s in spots]

@app.get("/api/spots/{spot_id}", response_model=SpotResponse, tags=["Catalog"])
async def get_spot(
    spot_id: PositiveId,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get spot by ID"""
    spot = await service.get_spot(AccommodationSpotId(spot_id))
    if not spot:
        raise HTTPException(status_code=404, detail="Accommodation spot not found")
    return _spot_to_response(spot)

@app.put("/api/spots/{spot_id}/status", response_model=SpotResponse, tags=["Catalog"])
async def update_spot_status(
    spot_id: PositiveId,
    request: UpdateSpotStatusRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Move a spot to a new status"""
    try:
        return _spot_to_response(await service.set_spot_status(AccommodationSpotId(spot_id), request.status))
    except ValueError as e:
        raise _http_error(e)

@app.put("/api/spots/{spot_id}/price-modifier", response_model=SpotResponse, tags=["Catalog"])
async def update_spot_modifier(
    spot_id: PositiveId,
    request: UpdateSpotModifierRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Change a spot's price modifier"""
    try:
        return _spot_to_response(
            await service.update_spot_modifier(AccommodationSpotId(spot_id), request.price_modifier)
        )
    except ValueError as e:
        raise _http_error(e)

# ============================================================================
# AVAILABILITY ENDPOINTS
# ============================================================================

@app.post("/api/availability", response_model=List[AvailabilityResponse], status_code=201, tags=["Availability"])
async def provision_availability(
    request: ProvisionAvailabilityRequest,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Provision ledger days for a date range"""
    try:
        records = await service.provision_range(
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            start_date=request.start_date,
            end_date=request.end_date,
            total_units=request.total_units
        )
        return [_availability_to_response(r) for r in records]
    except ValueError as e:
        raise _http_error(e)

@app.get("/api/availability/{campsite_id}/{accommodation_type_id}/{availability_date}", response_model=AvailabilityResponse, tags=["Availability"])
async def get_availability(
    campsite_id: PositiveId,
    accommodation_type_id: PositiveId,
    availability_date: date,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Get the ledger entry for a type on a date"""
    record = await service.get_availability(
        CampsiteId(campsite_id), AccommodationTypeId(accommodation_type_id), availability_date
    )
    if not record:
        raise HTTPException(status_code=404, detail="Availability not found")
    return _availability_to_response(record)

@app.put("/api/availability/{campsite_id}/{accommodation_type_id}/{availability_date}", response_model=AvailabilityResponse, tags=["Availability"])
async def reprovision_availability(
    campsite_id: PositiveId,
    accommodation_type_id: PositiveId,
    availability_date: date,
    request: ReprovisionRequest,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Change a day's total capacity"""
    try:
        record = await service.reprovision_day(
            CampsiteId(campsite_id), AccommodationTypeId(accommodation_type_id),
            availability_date, request.total_units
        )
        return _availability_to_response(record)
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/availability/check", tags=["Availability"])
async def check_availability(
    request: AvailabilityRangeRequest,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Check if units are free on every night of a date range"""
    try:
        available = await service.check_availability(
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            period=DateRange.create(request.start_date, request.end_date),
            required_count=request.count
        )
        return {"available": available}
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/availability/reserve", tags=["Availability"])
async def reserve_units(
    request: AvailabilityRangeRequest,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Reserve units for a date range"""
    try:
        await service.reserve_range(
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            period=DateRange.create(request.start_date, request.end_date),
            count=request.count
        )
        return {"success": True, "message": "Units reserved successfully"}
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/availability/release", tags=["Availability"])
async def release_units(
    request: AvailabilityRangeRequest,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Release units for a date range"""
    try:
        await service.release_range(
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            period=DateRange.create(request.start_date, request.end_date),
            count=request.count
        )
        return {"success": True, "message": "Units released successfully"}
    except ValueError as e:
        raise _http_error(e)

# ============================================================================
# PRICING ENDPOINTS
# ============================================================================

@app.post("/api/seasonal-rules", response_model=SeasonalRuleResponse, status_code=201, tags=["Pricing"])
async def create_seasonal_rule(
    request: CreateSeasonalRuleRequest,
    service: PricingService = Depends(get_pricing_service)
):
    """Add a seasonal price multiplier"""
    try:
        rule = await service.add_rule(
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            season_name=request.season_name,
            start_date=request.start_date,
            end_date=request.end_date,
            multiplier=request.multiplier
        )
        return _rule_to_response(rule)
    except ValueError as e:
        raise _http_error(e)

@app.get("/api/seasonal-rules/{campsite_id}/{accommodation_type_id}", response_model=List[SeasonalRuleResponse], tags=["Pricing"])
async def get_seasonal_rules(
    campsite_id: PositiveId,
    accommodation_type_id: PositiveId,
    service: PricingService = Depends(get_pricing_service)
):
    """Get the seasonal rules of an accommodation type"""
    rules = await service.get_rules(CampsiteId(campsite_id), AccommodationTypeId(accommodation_type_id))
    return [_rule_to_response(r) for r in rules]

@app.post("/api/seasonal-rules/{rule_id}/activate", response_model=SeasonalRuleResponse, tags=["Pricing"])
async def activate_seasonal_rule(
    rule_id: UUID,
    service: PricingService = Depends(get_pricing_service)
):
    """Activate a seasonal rule"""
    rule = await service.set_rule_active(rule_id, True)
    if not rule:
        raise HTTPException(status_code=404, detail="Seasonal rule not found")
    return _rule_to_response(rule)

@app.post("/api/seasonal-rules/{rule_id}/deactivate", response_model=SeasonalRuleResponse, tags=["Pricing"])
async def deactivate_seasonal_rule(
    rule_id: UUID,
    service: PricingService = Depends(get_pricing_service)
):
    """Deactivate a seasonal rule"""
    rule = await service.set_rule_active(rule_id, False)
    if not rule:
        raise HTTPException(status_code=404, detail="Seasonal rule not found")
    return _rule_to_response(rule)

@app.delete("/api/seasonal-rules/{rule_id}", status_code=204, tags=["Pricing"])
async def delete_seasonal_rule(
    rule_id: UUID,
    service: PricingService = Depends(get_pricing_service)
):
    """Delete a seasonal rule"""
    if not await service.delete_rule(rule_id):
        raise HTTPException(status_code=404, detail="Seasonal rule not found")

@app.post("/api/quotes", response_model=QuoteResponse, tags=["Pricing"])
async def quote_stay(
    request: QuoteRequest,
    service: PricingService = Depends(get_pricing_service)
):
    """Price a stay night by night"""
    try:
        breakdown = await service.quote(
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            check_in=request.check_in,
            check_out=request.check_out,
            spot_id=AccommodationSpotId(request.spot_id) if request.spot_id else None
        )
        return _quote_to_response(breakdown)
    except ValueError as e:
        raise _http_error(e)

# ============================================================================
# DISCOUNT ENDPOINTS
# ============================================================================

@app.post("/api/discounts", response_model=DiscountResponse, status_code=201, tags=["Discounts"])
async def create_discount(
    request: CreateDiscountRequest,
    service: DiscountService = Depends(get_discount_service)
):
    """Create a discount code"""
    try:
        discount = await service.create_code(
            code=request.code,
            discount_type=request.discount_type,
            value=request.value,
            valid_from=request.valid_from,
            valid_until=request.valid_until,
            max_uses=request.max_uses,
            minimum_booking_amount=request.minimum_booking_amount,
            description=request.description,
            applicable_campsite_ids=[CampsiteId(i) for i in request.applicable_campsite_ids],
            applicable_type_ids=[AccommodationTypeId(i) for i in request.applicable_type_ids]
        )
        return _discount_to_response(discount)
    except ValueError as e:
        raise _http_error(e)

@app.get("/api/discounts", response_model=List[DiscountResponse], tags=["Discounts"])
async def get_all_discounts(service: DiscountService = Depends(get_discount_service)):
    """Get all discount codes"""
    return [_discount_to_response(d) for d in await service.get_all_codes()]

@app.get("/api/discounts/{code}", response_model=DiscountResponse, tags=["Discounts"])
async def get_discount(code: str, service: DiscountService = Depends(get_discount_service)):
    """Get discount code (case-insensitive)"""
    discount = await service.get_code(code)
    if not discount:
        raise HTTPException(status_code=404, detail="Discount code not found")
    return _discount_to_response(discount)

@app.post("/api/discounts/{code}/preview", response_model=MoneyResponse, tags=["Discounts"])
async def preview_discount(
    code: str,
    request: DiscountPreviewRequest,
    service: DiscountService = Depends(get_discount_service)
):
    """Show the amount a code would take off without using it"""
    try:
        amount = await service.preview(
            code, _to_money(request.booking_amount),
            CampsiteId(request.campsite_id), AccommodationTypeId(request.accommodation_type_id)
        )
        return MoneyResponse(amount=amount.amount, currency=amount.currency)
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/discounts/{code}/activate", response_model=DiscountResponse, tags=["Discounts"])
async def activate_discount(code: str, service: DiscountService = Depends(get_discount_service)):
    """Activate a discount code"""
    discount = await service.set_active(code, True)
    if not discount:
        raise HTTPException(status_code=404, detail="Discount code not found")
    return _discount_to_response(discount)

@app.post("/api/discounts/{code}/deactivate", response_model=DiscountResponse, tags=["Discounts"])
async def deactivate_discount(code: str, service: DiscountService = Depends(get_discount_service)):
    """Deactivate a discount code"""
    discount = await service.set_active(code, False)
    if not discount:
        raise HTTPException(status_code=404, detail="Discount code not found")
    return _discount_to_response(discount)

# ============================================================================
# BOOKING ENDPOINTS
# ============================================================================

@app.post("/api/bookings", response_model=BookingResponse, status_code=201, tags=["Bookings"])
async def create_booking(
    request: CreateBookingRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Create new pending booking"""
    try:
        booking = await service.create_booking(
            guest_id=GuestId(request.guest_id),
            campsite_id=CampsiteId(request.campsite_id),
            accommodation_type_id=AccommodationTypeId(request.accommodation_type_id),
            check_in=request.check_in,
            check_out=request.check_out,
            adults=request.adults,
            children=request.children,
            special_requests=request.special_requests
        )
        return _booking_to_response(booking)
    except ValueError as e:
        raise _http_error(e)

@app.get("/api/bookings", response_model=List[BookingResponse], tags=["Bookings"])
async def get_all_bookings(service: BookingService = Depends(get_booking_service)):
    """Get all bookings"""
    bookings = await service.get_all_bookings()
    return [_booking_to_response(b) for b in bookings]

@app.get("/api/bookings/{booking_id}", response_model=BookingResponse, tags=["Bookings"])
async def get_booking(booking_id: UUID, service: BookingService = Depends(get_booking_service)):
    """Get booking by ID"""
    booking = await service.get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return _booking_to_response(booking)

@app.get("/api/bookings/guest/{guest_id}", response_model=List[BookingResponse], tags=["Bookings"])
async def get_guest_bookings(guest_id: PositiveId, service: BookingService = Depends(get_booking_service)):
    """Get all bookings for a guest"""
    bookings = await service.get_bookings_by_guest(GuestId(guest_id))
    return [_booking_to_response(b) for b in bookings]

@app.post("/api/bookings/{booking_id}/confirm", response_model=BookingResponse, tags=["Bookings"])
async def confirm_booking(
    booking_id: UUID,
    request: ConfirmBookingRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Assign a spot, reserve the ledger, apply pricing and discount, and confirm"""
    try:
        booking = await service.confirm_booking(
            booking_id, AccommodationSpotId(request.spot_id), request.discount_code
        )
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return _booking_to_response(booking)
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/bookings/{booking_id}/cancel", response_model=BookingResponse, tags=["Bookings"])
async def cancel_booking(
    booking_id: UUID,
    request: CancelBookingRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Cancel booking"""
    try:
        booking = await service.cancel_booking(booking_id, request.reason)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return _booking_to_response(booking)
    except ValueError as e:
        raise _http_error(e)

@app.post("/api/bookings/{booking_id}/complete", response_model=BookingResponse, tags=["Bookings"])
async def complete_booking(booking_id: UUID, service: BookingService = Depends(get_booking_service)):
    """Mark a confirmed stay as completed"""
    try:
        booking = await service.complete_booking(booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return _booking_to_response(booking)
    except ValueError as e:
        raise _http_error(e)

@app.put("/api/bookings/{booking_id}/price", response_model=BookingResponse, tags=["Bookings"])
async def reprice_booking(
    booking_id: UUID,
    request: RepriceBookingRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Replace a booking's total price"""
    try:
        booking = await service.reprice_booking(booking_id, _to_money(request.total_price))
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return _booking_to_response(booking)
    except ValueError as e:
        raise _http_error(e)

@app.put("/api/bookings/{booking_id}/special-requests", response_model=BookingResponse, tags=["Bookings"])
async def update_special_requests(
    booking_id: UUID,
    request: UpdateSpecialRequestsRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Replace a booking's special-requests text"""
    try:
        booking = await service.update_special_requests(booking_id, request.special_requests)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return _booking_to_response(booking)
    except ValueError as e:
        raise _http_error(e)

@app.delete("/api/bookings/{booking_id}", status_code=204, tags=["Bookings"])
async def delete_booking(booking_id: UUID, service: BookingService = Depends(get_booking_service)):
    """Delete a booking, releasing any units it holds"""
    try:
        if not await service.delete_booking(booking_id):
            raise HTTPException(status_code=404, detail="Booking not found")
    except ValueError as e:
        raise _http_error(e)

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _http_error(error: ValueError) -> HTTPException:
    """Map a domain error kind to an HTTP status"""
    if isinstance(error, NotFoundError):
        status_code = 404
    elif isinstance(error, (InvalidTransitionError, CapacityError, PolicyError)):
        status_code = 409
    else:
        status_code = 400

    code = error.code if isinstance(error, DomainError) else ErrorCode.INVALID_INPUT
    return HTTPException(status_code=status_code, detail=str(error), headers={"X-Error-Code": code.value})

def _to_money(money: MoneyRequest) -> Money:
    return Money.create(money.amount, money.currency)

def _money(money: Money) -> MoneyResponse:
    return MoneyResponse(amount=money.amount, currency=money.currency)

def _type_to_response(accommodation_type) -> AccommodationTypeResponse:
    """Convert AccommodationType entity to AccommodationTypeResponse"""
    return AccommodationTypeResponse(
        accommodation_type_id=int(accommodation_type.accommodation_type_id),
        campsite_id=int(accommodation_type.campsite_id),
        category=accommodation_type.category.value,
        description=accommodation_type.description,
        max_occupancy=accommodation_type.max_occupancy,
        base_price=_money(accommodation_type.base_price),
        total_units=accommodation_type.total_units,
        is_active=accommodation_type.is_active
    )

def _spot_to_response(spot) -> SpotResponse:
    """Convert AccommodationSpot entity to SpotResponse"""
    return SpotResponse(
        spot_id=int(spot.spot_id),
        campsite_id=int(spot.campsite_id),
        accommodation_type_id=int(spot.accommodation_type_id),
        label=spot.label,
        price_modifier=spot.price_modifier,
        status=spot.status.value
    )

def _availability_to_response(record) -> AvailabilityResponse:
    """Convert AvailabilityRecord entity to AvailabilityResponse"""
    return AvailabilityResponse(
        availability_id=record.availability_id,
        campsite_id=int(record.campsite_id),
        accommodation_type_id=int(record.accommodation_type_id),
        availability_date=record.availability_date,
        available_units=record.available_units,
        reserved_units=record.reserved_units,
        total_capacity=record.total_capacity,
        version=record.version
    )

def _rule_to_response(rule) -> SeasonalRuleResponse:
    """Convert SeasonalPricingRule entity to SeasonalRuleResponse"""
    return SeasonalRuleResponse(
        rule_id=rule.rule_id,
        campsite_id=int(rule.campsite_id),
        accommodation_type_id=int(rule.accommodation_type_id),
        season_name=rule.season_name,
        start_date=rule.start_date,
        end_date=rule.end_date,
        multiplier=rule.multiplier,
        is_active=rule.is_active
    )

def _quote_to_response(breakdown) -> QuoteResponse:
    """Convert PricingBreakdown to QuoteResponse"""
    return QuoteResponse(
        base_price_per_night=_money(breakdown.base_price_per_night),
        spot_modifier=breakdown.spot_modifier,
        nights=breakdown.nights,
        nightly=[
            NightPriceResponse(
                night_date=night.night_date,
                season_name=night.season_name,
                multiplier=night.multiplier,
                price=_money(night.price)
            )
            for night in breakdown.nightly
        ],
        total_price=_money(breakdown.total_price),
        average_multiplier=breakdown.average_multiplier,
        season_names=breakdown.season_names,
        spans_multiple_seasons=breakdown.spans_multiple_seasons
    )

def _discount_to_response(discount) -> DiscountResponse:
    """Convert DiscountCode entity to DiscountResponse"""
    return DiscountResponse(
        discount_id=discount.discount_id,
        code=discount.code,
        description=discount.description,
        discount_type=discount.discount_type.value,
        value=discount.value,
        valid_from=discount.valid_from,
        valid_until=discount.valid_until,
        used_count=discount.used_count,
        max_uses=discount.max_uses,
        remaining_uses=discount.remaining_uses,
        minimum_booking_amount=discount.minimum_booking_amount,
        is_active=discount.is_active,
        applicable_campsite_ids=[int(i) for i in discount.applicable_campsite_ids],
        applicable_type_ids=[int(i) for i in discount.applicable_type_ids]
    )

def _booking_to_response(booking) -> BookingResponse:
    """Convert Booking entity to BookingResponse"""
    return BookingResponse(
        booking_id=booking.booking_id,
        guest_id=int(booking.guest_id),
        campsite_id=int(booking.campsite_id),
        accommodation_type_id=int(booking.accommodation_type_id),
        spot_id=int(booking.spot_id) if booking.spot_id else None,
        check_in=booking.period.start,
        check_out=booking.period.end,
        nights=booking.nights(),
        adults=booking.adults,
        children=booking.children,
        special_requests=booking.special_requests,
        base_price=_money(booking.base_price),
        total_price=_money(booking.total_price),
        status=booking.status.value,
        created_at=booking.created_at,
        modified_at=booking.modified_at,
        cancelled_at=booking.cancelled_at,
        cancellation_reason=booking.cancellation_reason,
        version=booking.version
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
