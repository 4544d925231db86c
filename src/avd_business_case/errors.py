"""Exceptions raised by the estimation engine.

Every failure is an invalid-input condition; nothing here is retryable.
"""


class BusinessCaseError(Exception):
    """Base class for all calculator errors."""


class InvalidFactorValueError(BusinessCaseError, ValueError):
    """Raised when a complexity factor's scale value is outside 1-3."""

    def __init__(self, factor_id: str, value: object):
        self.factor_id = factor_id
        self.value = value
        super().__init__(
            f"Invalid value for complexity factor '{factor_id}': {value!r} (expected 1, 2 or 3)"
        )


class UnknownFactorError(BusinessCaseError, LookupError):
    """Raised when a complexity factor id is not in the factor catalog."""

    def __init__(self, factor_id: str):
        self.factor_id = factor_id
        super().__init__(f"Unknown complexity factor: {factor_id}")


class UnknownProfileError(BusinessCaseError, LookupError):
    """Raised when a user workload profile is not in the rate table."""

    def __init__(self, profile: str):
        self.profile = profile
        super().__init__(f"Invalid user profile: {profile}")


class UnknownStorageTypeError(BusinessCaseError, LookupError):
    """Raised when a storage type is not in the rate table."""

    def __init__(self, storage_type: str):
        self.storage_type = storage_type
        super().__init__(f"Invalid storage type: {storage_type}")


class UnknownPlatformError(BusinessCaseError, LookupError):
    """Raised when the current-state platform has no cost formula."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Invalid platform: {platform}")


class DegenerateTCOError(BusinessCaseError, ArithmeticError):
    """Raised when the current-state total cost is zero or negative."""

    def __init__(self, current_total: float):
        self.current_total = current_total
        super().__init__(
            f"Current state total cost must be positive to compare TCO, got {current_total}"
        )


class InvalidImplementationCostError(BusinessCaseError, ValueError):
    """Raised when the implementation cost is zero or negative."""

    def __init__(self, implementation_cost: float):
        self.implementation_cost = implementation_cost
        super().__init__(
            f"Implementation cost must be positive, got {implementation_cost}"
        )


class InvalidDateRangeError(BusinessCaseError, ValueError):
    """Raised when the go-live date is not after the project start date."""

    def __init__(self, start_date: object, go_live_date: object):
        self.start_date = start_date
        self.go_live_date = go_live_date
        super().__init__(
            f"Go-live date {go_live_date} must be after start date {start_date}"
        )


class NoTierMatchError(BusinessCaseError, LookupError):
    """Raised when a tiered rate table has no tier for a user count."""

    def __init__(self, table: str, user_count: float):
        self.table = table
        self.user_count = user_count
        super().__init__(f"No tier in '{table}' matches user count {user_count}")


class InvalidPhasePlanError(BusinessCaseError, ValueError):
    """Raised when a phase list does not match the overlap rule graph."""
