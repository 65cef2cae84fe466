"""
Constants and enums for Daraja (M-Pesa) API operations.
"""

from enum import Enum
from zoneinfo import ZoneInfo


class Environment(str, Enum):
    """Daraja API environments."""
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class TransactionType(str, Enum):
    """M-Pesa Express (STK push) transaction types."""
    PAYBILL = "CustomerPayBillOnline"
    BUY_GOODS = "CustomerBuyGoodsOnline"


class B2CCommand(str, Enum):
    """Business to customer payment commands."""
    SALARY_PAYMENT = "SalaryPayment"
    BUSINESS_PAYMENT = "BusinessPayment"
    PROMOTION_PAYMENT = "PromotionPayment"


class CommandID(str, Enum):
    """Fixed command IDs for the remaining operations."""
    CUSTOMER_PAYBILL_ONLINE = "CustomerPayBillOnline"
    ACCOUNT_BALANCE = "AccountBalance"
    TRANSACTION_STATUS_QUERY = "TransactionStatusQuery"
    TRANSACTION_REVERSAL = "TransactionReversal"


class ResponseType(str, Enum):
    """What M-Pesa does when the validation URL is unreachable."""
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class IdentifierType(int, Enum):
    """Type of organization receiving the transaction."""
    MSISDN = 1
    TILL_NUMBER = 2
    SHORTCODE = 4


# API Endpoints
class APIEndpoints:
    """Daraja API endpoints."""
    GENERATE_TOKEN = "/oauth/v1/generate"

    # M-Pesa Express
    STK_PUSH = "/mpesa/stkpush/v1/processrequest"
    STK_PUSH_QUERY = "/mpesa/stkpushquery/v1/query"

    # C2B
    C2B_REGISTER_URL = "/mpesa/c2b/v1/registerurl"
    C2B_SIMULATE = "/mpesa/c2b/v1/simulate"

    # B2C and account operations
    B2C_PAYMENT_REQUEST = "/mpesa/b2c/v1/paymentrequest"
    ACCOUNT_BALANCE = "/mpesa/accountbalance/v1/query"
    TRANSACTION_STATUS = "/mpesa/transactionstatus/v1/query"
    REVERSAL = "/mpesa/reversal/v1/request"


BASE_URLS = {
    Environment.SANDBOX: "https://sandbox.safaricom.co.ke",
    Environment.PRODUCTION: "https://api.safaricom.co.ke",
}

# Reversals are always addressed to an organization shortcode
REVERSAL_RECEIVER_IDENTIFIER_TYPE = 11

# Password timestamp settings
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
PROVIDER_TIMEZONE = ZoneInfo("Africa/Nairobi")

# Phone number settings
KENYA_COUNTRY_CODE = "254"
PHONE_NUMBER_LENGTH = 12  # Including country code (2547XXXXXXXX)

# Field limits enforced by M-Pesa Express
MAX_ACCOUNT_REFERENCE_LENGTH = 12
MAX_TRANSACTION_DESC_LENGTH = 13
MAX_REMARKS_LENGTH = 100

# Default settings
DEFAULT_ENVIRONMENT = Environment.SANDBOX
DEFAULT_TIMEOUT = 30  # seconds
