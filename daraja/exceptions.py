"""
Custom exceptions for Daraja API operations.
"""


class DarajaException(Exception):
    """Base exception for all Daraja-related errors."""

    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class AuthError(DarajaException):
    """Raised when an access token cannot be generated."""
    pass


class CryptoError(DarajaException):
    """Raised when the security credential cannot be derived."""
    pass


class ValidationError(DarajaException):
    """Raised when input validation fails."""
    pass


class ConfigurationError(DarajaException):
    """Raised when there's a configuration issue."""
    pass


class ProviderError(DarajaException):
    """Raised when the Daraja API rejects a request."""
    pass


class TransportError(DarajaException):
    """Raised when the API cannot be reached."""
    pass


class RequestTimeoutError(TransportError):
    """Raised when the API does not answer within the configured timeout."""
    pass


class InvalidPhoneNumberError(ValidationError):
    """Raised when phone number format is invalid."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when amount is invalid."""
    pass
