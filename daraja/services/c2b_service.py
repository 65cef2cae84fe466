"""
Customer to business (C2B) service.
Handles callback URL registration and sandbox payment simulation.
"""

import logging
from typing import Union

from ..constants import APIEndpoints, CommandID, ResponseType, MAX_ACCOUNT_REFERENCE_LENGTH
from ..exceptions import ValidationError
from ..responses import RegisterUrlsResult, TransactionResult
from ..utils.formatters import format_currency, mask_phone_number
from ..utils.validators import (
    validate_phone_number, validate_amount, validate_url,
    validate_text, validate_choice
)
from .base import DarajaService

logger = logging.getLogger(__name__)


class C2BService(DarajaService):
    """
    Service for payments customers make to the shortcode on their own.
    """

    def register_urls(
        self,
        validation_url: str,
        confirmation_url: str,
        response_type: Union[ResponseType, str] = ResponseType.COMPLETED
    ) -> RegisterUrlsResult:
        """
        Register the URLs M-Pesa calls when the shortcode receives a payment.

        Args:
            validation_url: URL asked to accept or reject each payment
            confirmation_url: URL notified of completed payments
            response_type: What M-Pesa does if the validation URL is unreachable

        Returns:
            RegisterUrlsResult

        Raises:
            ValidationError: If a URL or response type is invalid
            ProviderError: If M-Pesa rejects the registration
        """
        payload = {
            'ValidationURL': validate_url(validation_url, 'Validation URL'),
            'ConfirmationURL': validate_url(confirmation_url, 'Confirmation URL'),
            'ResponseType': validate_choice(response_type, ResponseType, 'response type'),
            'ShortCode': self.config.shortcode,
        }
        logger.info(f"Registering C2B URLs for shortcode {self.config.shortcode}")

        response = self._post(APIEndpoints.C2B_REGISTER_URL, payload, 'C2B URL registration')
        result = RegisterUrlsResult.from_response(response)

        logger.info(f"C2B URLs registered: {result.response_description}")
        return result

    def simulate_transaction(
        self,
        phone_number: Union[int, str],
        amount: Union[int, str],
        bill_reference: str
    ) -> TransactionResult:
        """
        Simulate a customer paying the shortcode.
        Only the sandbox supports simulation.

        Args:
            phone_number: Customer phone number sending the money
            amount: Whole shilling amount
            bill_reference: Account number the customer entered

        Returns:
            TransactionResult

        Raises:
            ValidationError: If called in production or input validation fails
            ProviderError: If M-Pesa rejects the request
        """
        if self.config.is_production:
            raise ValidationError("Cannot simulate transactions in the production environment")

        payload = {
            'Amount': validate_amount(amount),
            'BillRefNumber': validate_text(bill_reference, 'Bill reference', MAX_ACCOUNT_REFERENCE_LENGTH),
            'CommandID': CommandID.CUSTOMER_PAYBILL_ONLINE.value,
            'Msisdn': validate_phone_number(phone_number),
            'ShortCode': self.config.shortcode,
        }
        logger.info(
            f"Simulating C2B payment of {format_currency(payload['Amount'])} "
            f"from {mask_phone_number(payload['Msisdn'])}"
        )

        response = self._post(APIEndpoints.C2B_SIMULATE, payload, 'C2B simulation')
        result = TransactionResult.from_response(response)

        logger.info(f"C2B simulation accepted. Conversation ID: {result.conversation_id}")
        return result
