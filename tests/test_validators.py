"""
Unit tests for request field validation and formatting.
"""
from decimal import Decimal

import pytest

from daraja.constants import ResponseType
from daraja.exceptions import InvalidAmountError, InvalidPhoneNumberError, ValidationError
from daraja.utils.formatters import format_currency, mask_phone_number
from daraja.utils.validators import (
    validate_amount, validate_choice, validate_phone_number,
    validate_shortcode, validate_text, validate_url
)


@pytest.mark.parametrize('phone', [
    '0712345678', '+254712345678', '254712345678', '712345678',
    '0712 345 678', 254712345678,
])
def test_phone_formats(phone):
    assert validate_phone_number(phone) == 254712345678


def test_new_prefix_numbers():
    assert validate_phone_number('0110345678') == 254110345678


@pytest.mark.parametrize('phone', ['', '07123', '07123456789', '0212345678'])
def test_invalid_phone(phone):
    with pytest.raises(InvalidPhoneNumberError):
        validate_phone_number(phone)


@pytest.mark.parametrize('amount, expected', [(1, 1), ('250', 250), (Decimal('10.00'), 10), (99.0, 99)])
def test_amounts(amount, expected):
    assert validate_amount(amount) == expected


@pytest.mark.parametrize('amount', [0, -5, '1.5', 'ten', None, True])
def test_invalid_amounts(amount):
    with pytest.raises(InvalidAmountError):
        validate_amount(amount)


def test_url():
    assert validate_url(' https://example.com/cb ') == 'https://example.com/cb'
    with pytest.raises(ValidationError):
        validate_url('ftp://example.com/cb')


def test_text_limits():
    assert validate_text(' INV001 ', 'Account reference', 12) == 'INV001'
    with pytest.raises(ValidationError, match='too long'):
        validate_text('x' * 13, 'Account reference', 12)
    with pytest.raises(ValidationError, match='empty'):
        validate_text('   ', 'Remarks', 100)


def test_choice():
    assert validate_choice('Completed', ResponseType, 'response type') == 'Completed'
    assert validate_choice(ResponseType.CANCELLED, ResponseType, 'response type') == 'Cancelled'
    with pytest.raises(ValidationError, match='Allowed values: Completed, Cancelled'):
        validate_choice('Canceled', ResponseType, 'response type')


def test_shortcode():
    assert validate_shortcode('600000') == 600000
    with pytest.raises(ValidationError):
        validate_shortcode('60-0000')


def test_formatters():
    assert format_currency(1500) == 'KES 1,500'
    assert mask_phone_number(254712345678) == '2547****5678'
    assert mask_phone_number('1234') == '****'
