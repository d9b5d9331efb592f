"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Required purchase data is missing or out of range"""

    pass


class InvalidDateError(DomainException):
    """Malformed date string or out-of-range calendar value"""

    pass

