"""
M-Pesa Express (Lipa na M-Pesa Online) service.
Handles STK push requests and their status queries.
"""

import logging
from typing import Optional, Union

from ..constants import (
    APIEndpoints, TransactionType,
    MAX_ACCOUNT_REFERENCE_LENGTH, MAX_TRANSACTION_DESC_LENGTH
)
from ..responses import StkPushResult, StkQueryResult
from ..utils.formatters import format_currency, mask_phone_number
from ..utils.security import derive_password, generate_timestamp
from ..utils.validators import (
    validate_phone_number, validate_amount, validate_url,
    validate_text, validate_choice, validate_shortcode
)
from .base import DarajaService

logger = logging.getLogger(__name__)


class ExpressService(DarajaService):
    """
    Service for customer-initiated payments pushed to the customer's phone.
    """

    def _password(self):
        self.config.require('passkey', operation='M-Pesa Express')
        timestamp = generate_timestamp()
        return derive_password(self.config.shortcode, self.config.passkey, timestamp), timestamp

    def stk_push(
        self,
        phone_number: Union[int, str],
        amount: Union[int, str],
        account_reference: str,
        transaction_desc: str,
        callback_url: str,
        transaction_type: Union[TransactionType, str] = TransactionType.PAYBILL,
        recipient: Optional[Union[int, str]] = None
    ) -> StkPushResult:
        """
        Prompt a customer to pay by entering their M-Pesa PIN.

        Args:
            phone_number: Customer phone number sending the money
            amount: Whole shilling amount
            account_reference: Identifier shown to the customer (max 12 chars)
            transaction_desc: Additional description (max 13 chars)
            callback_url: URL M-Pesa POSTs the payment outcome to
            transaction_type: Paybill or Buy Goods
            recipient: Shortcode or till receiving the funds (default: configured shortcode)

        Returns:
            StkPushResult with the merchant and checkout request IDs. Store
            the checkout request ID to match the later callback.

        Raises:
            ValidationError: If input validation fails
            ConfigurationError: If the passkey is not configured
            ProviderError: If M-Pesa rejects the request
        """
        phone = validate_phone_number(phone_number)
        amount = validate_amount(amount)
        reference = validate_text(account_reference, 'Account reference', MAX_ACCOUNT_REFERENCE_LENGTH)
        description = validate_text(transaction_desc, 'Transaction description', MAX_TRANSACTION_DESC_LENGTH)
        callback_url = validate_url(callback_url, 'Callback URL')
        transaction_type = validate_choice(transaction_type, TransactionType, 'transaction type')
        party_b = self.config.shortcode if recipient is None else validate_shortcode(recipient, 'Recipient')

        logger.info(
            f"Initiating STK push of {format_currency(amount)} "
            f"from {mask_phone_number(phone)} for {reference}"
        )

        password, timestamp = self._password()
        payload = {
            'BusinessShortCode': self.config.shortcode,
            'Password': password,
            'Timestamp': timestamp,
            'TransactionType': transaction_type,
            'Amount': amount,
            'PartyA': phone,
            'PartyB': party_b,
            'PhoneNumber': phone,
            'CallBackURL': callback_url,
            'AccountReference': reference,
            'TransactionDesc': description,
        }

        response = self._post(APIEndpoints.STK_PUSH, payload, 'STK push')
        result = StkPushResult.from_response(response)

        logger.info(f"STK push accepted. Checkout request ID: {result.checkout_request_id}")
        return result

    def stk_push_query(self, checkout_request_id: str) -> StkQueryResult:
        """
        Query the outcome of an STK push.

        Args:
            checkout_request_id: ID returned by ``stk_push``

        Returns:
            StkQueryResult; result code "0" means the customer paid

        Raises:
            ValidationError: If the checkout request ID is empty
            ConfigurationError: If the passkey is not configured
            ProviderError: If M-Pesa rejects the query
        """
        checkout_request_id = validate_text(checkout_request_id, 'Checkout request ID', 100)
        logger.info(f"Querying STK push status for {checkout_request_id}")

        password, timestamp = self._password()
        payload = {
            'BusinessShortCode': self.config.shortcode,
            'Password': password,
            'Timestamp': timestamp,
            'CheckoutRequestID': checkout_request_id,
        }

        response = self._post(APIEndpoints.STK_PUSH_QUERY, payload, 'STK push query')
        result = StkQueryResult.from_response(response)

        logger.info(
            f"STK push status retrieved. Checkout: {checkout_request_id}, "
            f"Result: {result.result_code} {result.result_description}"
        )
        return result
