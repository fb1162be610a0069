"""Custom exceptions for PCP Tracker."""


class PCPError(Exception):
    """Base exception for all PCP Tracker errors."""


class ConfigError(PCPError):
    """Configuration-related errors."""


class DatabaseError(PCPError):
    """Database operation errors."""


class IntegrityViolationError(DatabaseError):
    """A write broke a UNIQUE or other table constraint."""


class RecordNotFoundError(PCPError):
    """A SKU, production order or demand does not exist."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} not found: {record_id}")


class ConflictError(PCPError):
    """A write would break a catalog or planning rule."""


class DuplicateSkuCodeError(ConflictError):
    """Another SKU already uses this code."""


class DuplicateDemandError(ConflictError):
    """A demand already exists for this SKU and month."""


class SkuInUseError(ConflictError):
    """SKU is referenced by production orders or demands."""


class InvalidTransitionError(ConflictError):
    """Production order status change not allowed."""


class OrderLockedError(ConflictError):
    """Production order fields can no longer be changed or removed."""


class InvalidMonthKeyError(PCPError, ValueError):
    """Month key is not in YYYY-MM format."""
