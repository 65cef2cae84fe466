"""
Data formatting utilities for Daraja log and display output.
"""

from decimal import Decimal
from typing import Union


def format_currency(amount: Union[int, float, Decimal, str], currency: str = "KES") -> str:
    """
    Format amount with currency symbol.

    Args:
        amount: Amount to format
        currency: Currency code

    Returns:
        Formatted string (e.g., "KES 1,000")
    """
    try:
        amount = Decimal(str(amount))
        return f"{currency} {amount:,.0f}"
    except (ValueError, TypeError, ArithmeticError):
        return f"{currency} 0"


def mask_phone_number(phone: Union[int, str]) -> str:
    """
    Hide the middle digits of a phone number.

    Returns:
        Masked number (e.g., "2547****5678")
    """
    phone = str(phone)
    if len(phone) <= 8:
        return '*' * len(phone)
    return f"{phone[:4]}{'*' * (len(phone) - 8)}{phone[-4:]}"
