"""Domain error codes and exceptions"""
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable error codes"""

    # Validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_STAY_PERIOD = "INVALID_STAY_PERIOD"
    INVALID_PARTY_SIZE = "INVALID_PARTY_SIZE"
    NEGATIVE_AMOUNT = "NEGATIVE_AMOUNT"
    PAST_DATE = "PAST_DATE"
    NEGATIVE_CAPACITY = "NEGATIVE_CAPACITY"
    INVALID_COUNT = "INVALID_COUNT"
    INVALID_RANGE = "INVALID_RANGE"
    NON_POSITIVE_PRICE = "NON_POSITIVE_PRICE"
    NON_POSITIVE_MODIFIER = "NON_POSITIVE_MODIFIER"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"

    # State machine
    INVALID_TRANSITION = "INVALID_TRANSITION"
    MISSING_ASSIGNMENT = "MISSING_ASSIGNMENT"
    UNDER_MAINTENANCE = "UNDER_MAINTENANCE"

    # Capacity
    INSUFFICIENT_AVAILABILITY = "INSUFFICIENT_AVAILABILITY"
    OVER_RELEASE = "OVER_RELEASE"
    SPOT_UNAVAILABLE = "SPOT_UNAVAILABLE"

    # Policy
    BELOW_MINIMUM = "BELOW_MINIMUM"
    USAGE_EXHAUSTED = "USAGE_EXHAUSTED"
    DISCOUNT_NOT_APPLICABLE = "DISCOUNT_NOT_APPLICABLE"

    # Lookup
    NOT_FOUND = "NOT_FOUND"


class DomainError(ValueError):
    """Base domain error with code and user-safe message"""

    default_code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, code: ErrorCode = None):
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message

    def __str__(self) -> str:
        return self.message


# ==================== ERROR KINDS ====================

class ValidationError(DomainError):
    """Malformed input: empty text, out-of-range number, bad enum value"""


class InvalidTransitionError(DomainError):
    """State machine guard violation; the aggregate is left unchanged"""

    default_code = ErrorCode.INVALID_TRANSITION


class CapacityError(DomainError):
    """Not enough units, or more units released than held"""


class PolicyError(DomainError):
    """Business policy refused the operation (discount rules)"""


class NotFoundError(DomainError):
    """Referenced aggregate does not exist"""

    default_code = ErrorCode.NOT_FOUND


# ==================== VALIDATION ====================

class InvalidStayPeriodError(ValidationError):
    default_code = ErrorCode.INVALID_STAY_PERIOD


class InvalidPartySizeError(ValidationError):
    default_code = ErrorCode.INVALID_PARTY_SIZE


class NegativeAmountError(ValidationError):
    default_code = ErrorCode.NEGATIVE_AMOUNT


class PastDateError(ValidationError):
    default_code = ErrorCode.PAST_DATE


class NegativeCapacityError(ValidationError):
    default_code = ErrorCode.NEGATIVE_CAPACITY


class InvalidCountError(ValidationError):
    default_code = ErrorCode.INVALID_COUNT


class InvalidRangeError(ValidationError):
    default_code = ErrorCode.INVALID_RANGE


class NonPositivePriceError(ValidationError):
    default_code = ErrorCode.NON_POSITIVE_PRICE


class NonPositiveModifierError(ValidationError):
    default_code = ErrorCode.NON_POSITIVE_MODIFIER


class CurrencyMismatchError(ValidationError):
    default_code = ErrorCode.CURRENCY_MISMATCH


# ==================== TRANSITIONS ====================

class MissingAssignmentError(InvalidTransitionError):
    default_code = ErrorCode.MISSING_ASSIGNMENT


class UnderMaintenanceError(InvalidTransitionError):
    default_code = ErrorCode.UNDER_MAINTENANCE


# ==================== CAPACITY ====================

class InsufficientAvailabilityError(CapacityError):
    default_code = ErrorCode.INSUFFICIENT_AVAILABILITY


class OverReleaseError(CapacityError):
    default_code = ErrorCode.OVER_RELEASE


class SpotUnavailableError(CapacityError):
    default_code = ErrorCode.SPOT_UNAVAILABLE


# ==================== POLICY ====================

class BelowMinimumError(PolicyError):
    default_code = ErrorCode.BELOW_MINIMUM


class UsageExhaustedError(PolicyError):
    default_code = ErrorCode.USAGE_EXHAUSTED


class DiscountNotApplicableError(PolicyError):
    default_code = ErrorCode.DISCOUNT_NOT_APPLICABLE


# ==================== LOOKUP ====================

class DiscountNotFoundError(NotFoundError):
    """No discount code with the given text"""
