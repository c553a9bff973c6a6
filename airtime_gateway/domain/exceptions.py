"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Client supplied missing or malformed input"""

    pass


class MissingFieldError(ValidationError):
    """Network or mobile number was not supplied"""

    pass


class BadPhoneFormatError(ValidationError):
    """Mobile number is not an 11-digit Nigerian number"""

    pass


class UnknownNetworkError(ValidationError):
    """Network name is not one the provider supports"""

    pass


class ConfigurationError(DomainException):
    """Server is missing configuration needed to reach the provider"""

    pass


class ForbiddenError(DomainException):
    """Admin PIN missing or incorrect"""

    pass
