"""
Validation utilities for Daraja request fields.
"""

import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Type, Union
from urllib.parse import urlparse

from ..constants import KENYA_COUNTRY_CODE, PHONE_NUMBER_LENGTH
from ..exceptions import InvalidPhoneNumberError, InvalidAmountError, ValidationError


def validate_phone_number(phone: Union[int, str], country_code: str = KENYA_COUNTRY_CODE) -> int:
    """
    Validate and format a Kenyan phone number.

    Args:
        phone: Phone number to validate (0712..., +254712..., 254712... or 712...)
        country_code: Expected country code (default: 254 for Kenya)

    Returns:
        Validated phone number as an integer: 2547XXXXXXXX

    Raises:
        InvalidPhoneNumberError: If phone number is invalid
    """
    if not phone:
        raise InvalidPhoneNumberError("Phone number is required")

    # Remove all non-digit characters, including a leading +
    phone = re.sub(r'\D', '', str(phone))

    if phone.startswith('0'):
        # Convert 0712345678 to 254712345678
        phone = country_code + phone[1:]
    elif not phone.startswith(country_code):
        # Assume it's missing country code
        phone = country_code + phone

    if len(phone) != PHONE_NUMBER_LENGTH:
        raise InvalidPhoneNumberError(
            f"Phone number must be {PHONE_NUMBER_LENGTH} digits including country code. "
            f"Got: {phone} ({len(phone)} digits)"
        )

    # Safaricom subscriber numbers start with 7 or 1
    if phone[len(country_code)] not in '71':
        raise InvalidPhoneNumberError(f"Not a mobile subscriber number: {phone}")

    return int(phone)


def validate_amount(amount: Union[int, float, str, Decimal], min_amount: int = 1) -> int:
    """
    Validate a transaction amount.
    M-Pesa only moves whole shillings.

    Args:
        amount: Amount to validate
        min_amount: Minimum allowed amount

    Returns:
        Validated amount as an integer

    Raises:
        InvalidAmountError: If amount is invalid
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Invalid amount format: {amount}")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(f"Invalid amount format: {amount}")

    if not value.is_finite() or value != value.to_integral_value():
        raise InvalidAmountError(f"Amount must be a whole number. Got: {amount}")

    if value < min_amount:
        raise InvalidAmountError(f"Amount must be at least {min_amount}. Got: {amount}")

    return int(value)


def validate_url(url: str, field_name: str = 'URL') -> str:
    """
    Validate a callback URL.

    Raises:
        ValidationError: If URL is not an absolute http(s) URL
    """
    if not url:
        raise ValidationError(f"{field_name} is required")

    url = str(url).strip()
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValidationError(f"{field_name} must be an absolute http(s) URL. Got: {url}")

    return url


def validate_text(value: str, field_name: str, max_length: int) -> str:
    """
    Validate a free text field against its provider length limit.

    Raises:
        ValidationError: If text is empty or too long
    """
    if value is None:
        raise ValidationError(f"{field_name} is required")

    value = str(value).strip()

    if not value:
        raise ValidationError(f"{field_name} cannot be empty")

    if len(value) > max_length:
        raise ValidationError(
            f"{field_name} too long. Maximum {max_length} characters. "
            f"Got: {len(value)} characters"
        )

    return value


def validate_choice(value, choices: Type[Enum], field_name: str):
    """
    Validate that a value belongs to an enum.

    Returns:
        The raw enum value to place in the payload

    Raises:
        ValidationError: If value is not one of the enum members
    """
    try:
        return choices(getattr(value, 'value', value)).value
    except ValueError:
        allowed = ', '.join(str(member.value) for member in choices)
        raise ValidationError(f"Invalid {field_name}: {value}. Allowed values: {allowed}")


def validate_shortcode(shortcode: Union[int, str], field_name: str = 'Shortcode') -> int:
    """
    Validate an organization shortcode or till number.

    Raises:
        ValidationError: If shortcode is not numeric
    """
    shortcode = str(shortcode).strip() if shortcode is not None else ''
    if not shortcode.isdigit():
        raise ValidationError(f"{field_name} must be numeric. Got: {shortcode!r}")
    return int(shortcode)
