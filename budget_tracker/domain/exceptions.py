"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction record violates its invariants (non-positive amount, empty category)"""

    pass


class RecordNotFoundError(DomainException):
    """Store has no record with the requested id"""

    pass
