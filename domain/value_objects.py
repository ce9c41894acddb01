"""Domain Value Objects"""
import os
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Union

from domain.errors import (
    CurrencyMismatchError, InvalidRangeError, NegativeAmountError, ValidationError
)

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "DKK").strip().upper()

Number = Union[Decimal, int, str, float]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal without binary float artifacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


class Money(BaseModel):
    """Value Object for monetary amounts"""
    amount: Decimal = Field(ge=0)
    currency: str = Field(default=DEFAULT_CURRENCY, pattern=r"^[A-Z]{3}$")

    model_config = ConfigDict(frozen=True)

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @staticmethod
    def create(amount: Number, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create money, raising domain errors for invalid input"""
        value = to_decimal(amount)
        if value < 0:
            raise NegativeAmountError("Amount cannot be negative")
        if not currency or len(currency.strip()) != 3:
            raise ValidationError("Currency must be a 3-letter ISO code (e.g., DKK, EUR)")
        return Money(amount=value, currency=currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> "Money":
        return Money(amount=Decimal("0"), currency=currency)

    def add(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._check_currency(other)
        if self.amount < other.amount:
            raise NegativeAmountError("Result would be negative")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def multiply(self, factor: Number) -> "Money":
        factor = to_decimal(factor)
        if factor < 0:
            raise NegativeAmountError("Multiplier cannot be negative")
        return Money(amount=self.amount * factor, currency=self.currency)

    def is_greater_than(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot combine {other.currency} with {self.currency}"
            )

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __mul__(self, factor: Number) -> "Money":
        return self.multiply(factor)

    def __lt__(self, other: "Money") -> bool:
        return self.is_less_than(other)

    def __gt__(self, other: "Money") -> bool:
        return self.is_greater_than(other)

    def __le__(self, other: "Money") -> bool:
        return not self.is_greater_than(other)

    def __ge__(self, other: "Money") -> bool:
        return not self.is_less_than(other)

    def __str__(self) -> str:
        return f"{self.amount:,.2f} {self.currency}"


class DateRange(BaseModel):
    """Value Object for a stay period: inclusive start, exclusive end"""
    start: date
    end: date

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end <= self.start:
            raise ValueError("End date must be after start date")
        return self

    @staticmethod
    def create(start: date, end: date) -> "DateRange":
        """Create range, raising InvalidRangeError when end <= start"""
        if end <= start:
            raise InvalidRangeError("End date must be after start date")
        return DateRange(start=start, end=end)

    def nights(self) -> int:
        """Calculate number of nights"""
        return (self.end - self.start).days

    def dates(self) -> List[date]:
        """Calendar date of every night in the range"""
        return [self.start + timedelta(days=i) for i in range(self.nights())]

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end

    def overlaps(self, other: "DateRange") -> bool:
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start:%Y-%m-%d} to {self.end:%Y-%m-%d} ({self.nights()} nights)"


class EntityId(BaseModel):
    """Base for strongly typed integer identifiers"""
    value: int = Field(gt=0)

    model_config = ConfigDict(frozen=True)

    def __init__(self, value: int = None, **data):
        if value is not None:
            data["value"] = value
        super().__init__(**data)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class CampsiteId(EntityId):
    """Identifier of a campsite"""


class AccommodationTypeId(EntityId):
    """Identifier of an accommodation type"""


class AccommodationSpotId(EntityId):
    """Identifier of a physical accommodation spot"""


class GuestId(EntityId):
    """Identifier of a guest"""
