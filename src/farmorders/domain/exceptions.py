"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """The request is malformed or a value invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A business rule rejected an otherwise well-formed request."""


class InsufficientStockError(ConflictError):
    """The requested quantity exceeds what is on hand."""


class ItemNotAvailableError(ConflictError):
    """The listed item exists but is not currently sellable."""


class MultiSellerOrderError(ConflictError):
    """An order's line items resolve to more than one seller."""


class SelfPurchaseError(ConflictError):
    """A seller tried to buy their own listing."""


class ForbiddenError(DomainException):
    """The caller may not act on this entity."""


class InvalidStateError(DomainException):
    """The requested lifecycle transition is not allowed."""


class PersistenceError(DomainException):
    """The storage layer failed; the transaction was rolled back.

    The message is deliberately generic. Details go to the log.
    """

    def __init__(self, message: str = "Storage failure, nothing was changed") -> None:
        super().__init__(message)
