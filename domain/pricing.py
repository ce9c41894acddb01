"""Seasonal pricing resolver.

Turns a stay into a per-night price breakdown. For every night the active
rules of the same campsite and accommodation type whose window contains the
date are candidates. When several overlap, the narrowest window wins; ties go
to the higher multiplier, then to the season name in alphabetical order. A
night with no candidate is priced at the regular rate (multiplier 1).
"""
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from domain.entities import SeasonalPricingRule
from domain.errors import InvalidRangeError, NonPositiveModifierError, NonPositivePriceError
from domain.value_objects import (
    AccommodationTypeId, CampsiteId, DateRange, Money, Number, to_decimal
)

REGULAR_SEASON = "Regular"
REGULAR_MULTIPLIER = Decimal("1.0")


class NightPricing(BaseModel):
    """Price of a single night"""
    night_date: date
    season_name: str = REGULAR_SEASON
    multiplier: Decimal = REGULAR_MULTIPLIER
    price: Money

    model_config = ConfigDict(frozen=True)


class PricingBreakdown(BaseModel):
    """Per-night prices and their total"""
    base_price_per_night: Money
    spot_modifier: Decimal
    nights: int
    nightly: List[NightPricing]
    total_price: Money
    average_multiplier: Decimal

    model_config = ConfigDict(frozen=True)

    @property
    def season_names(self) -> List[str]:
        seen = []
        for night in self.nightly:
            if night.season_name not in seen:
                seen.append(night.season_name)
        return seen

    @property
    def spans_multiple_seasons(self) -> bool:
        return len(self.season_names) > 1


def _precedence(rule: SeasonalPricingRule):
    return (rule.duration_days(), -rule.multiplier, rule.season_name)


def resolve_rule(
    rules: Iterable[SeasonalPricingRule],
    campsite_id: CampsiteId,
    accommodation_type_id: AccommodationTypeId,
    day: date
) -> Optional[SeasonalPricingRule]:
    """Pick the rule that prices the given night, or None for the regular rate"""
    candidates = [r for r in rules if r.applies_to(campsite_id, accommodation_type_id, day)]
    if not candidates:
        return None
    return min(candidates, key=_precedence)


def calculate_price(
    rules: Iterable[SeasonalPricingRule],
    campsite_id: CampsiteId,
    accommodation_type_id: AccommodationTypeId,
    base_price_per_night: Money,
    check_in: date,
    check_out: date,
    spot_modifier: Number = Decimal("1.0")
) -> PricingBreakdown:
    """Price every night in [check_in, check_out)"""
    if check_out <= check_in:
        raise InvalidRangeError("Check-out date must be after check-in date")
    if base_price_per_night.amount <= 0:
        raise NonPositivePriceError("Base price per night must be positive")
    modifier = to_decimal(spot_modifier)
    if modifier <= 0:
        raise NonPositiveModifierError("Spot price modifier must be positive")

    rules = list(rules)
    currency = base_price_per_night.currency
    nightly: List[NightPricing] = []
    total = Decimal("0")

    for day in DateRange(start=check_in, end=check_out).dates():
        rule = resolve_rule(rules, campsite_id, accommodation_type_id, day)
        season_name = rule.season_name if rule else REGULAR_SEASON
        multiplier = rule.multiplier if rule else REGULAR_MULTIPLIER

        price = base_price_per_night.amount * modifier * multiplier
        nightly.append(NightPricing(
            night_date=day,
            season_name=season_name,
            multiplier=multiplier,
            price=Money(amount=price, currency=currency)
        ))
        total += price

    average = sum((n.multiplier for n in nightly), Decimal("0")) / len(nightly)

    return PricingBreakdown(
        base_price_per_night=base_price_per_night,
        spot_modifier=modifier,
        nights=len(nightly),
        nightly=nightly,
        total_price=Money(amount=total, currency=currency),
        average_multiplier=average
    )
