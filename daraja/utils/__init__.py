"""
Utility modules for Daraja API operations.
"""

from .http_client import HTTPClient
from .validators import (
    validate_phone_number,
    validate_amount,
    validate_url,
    validate_text,
    validate_choice,
    validate_shortcode
)
from .formatters import format_currency, mask_phone_number
from .security import derive_password, derive_security_credential, generate_timestamp

__all__ = [
    'HTTPClient',
    'validate_phone_number',
    'validate_amount',
    'validate_url',
    'validate_text',
    'validate_choice',
    'validate_shortcode',
    'format_currency',
    'mask_phone_number',
    'derive_password',
    'derive_security_credential',
    'generate_timestamp',
]
