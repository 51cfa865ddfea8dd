"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class IncompleteTableError(DomainException):
    """A band lookup table does not cover every member of its enum"""

    pass


class UnknownCalculatorError(DomainException):
    """No calculator is registered under the requested key"""

    pass


class SnapshotNotFoundError(DomainException):
    """No saved calculation exists for the session and calculator"""

    pass


class LeadWebhookError(DomainException):
    """Lead webhook could not be delivered after all retries"""

    pass
