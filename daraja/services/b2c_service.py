"""
Business to customer (B2C) service.
Handles disbursements from the shortcode to customer phones.
"""

import logging
from typing import Union

from ..constants import APIEndpoints, B2CCommand, MAX_REMARKS_LENGTH
from ..responses import TransactionResult
from ..utils.formatters import format_currency, mask_phone_number
from ..utils.validators import (
    validate_phone_number, validate_amount, validate_url,
    validate_text, validate_choice
)
from .base import DarajaService

logger = logging.getLogger(__name__)


class B2CService(DarajaService):
    """
    Service for salary, business and promotion payments to customers.
    """

    def b2c_payment(
        self,
        phone_number: Union[int, str],
        amount: Union[int, str],
        remarks: str,
        timeout_url: str,
        result_url: str,
        command_id: Union[B2CCommand, str] = B2CCommand.BUSINESS_PAYMENT,
        occasion: str = ''
    ) -> TransactionResult:
        """
        Send money from the shortcode to a customer.

        Args:
            phone_number: Customer phone number receiving the money
            amount: Whole shilling amount
            remarks: Comment sent along with the transaction
            timeout_url: URL notified if the request times out in the queue
            result_url: URL the transaction outcome is POSTed to
            command_id: Salary, business or promotion payment
            occasion: Optional additional comment

        Returns:
            TransactionResult acknowledging the request. The payment outcome
            arrives later at ``result_url``.

        Raises:
            ValidationError: If input validation fails
            ConfigurationError: If initiator settings are missing
            CryptoError: If the security credential cannot be derived
            ProviderError: If M-Pesa rejects the request
        """
        self.config.require('initiator_name', operation='B2C payment')
        phone = validate_phone_number(phone_number)
        amount = validate_amount(amount)
        command_id = validate_choice(command_id, B2CCommand, 'B2C command')
        remarks = validate_text(remarks, 'Remarks', MAX_REMARKS_LENGTH)
        timeout_url = validate_url(timeout_url, 'Queue timeout URL')
        result_url = validate_url(result_url, 'Result URL')

        payload = {
            'InitiatorName': self.config.initiator_name,
            'SecurityCredential': self.auth_service.get_security_credential(),
            'CommandID': command_id,
            'Amount': amount,
            'PartyA': self.config.shortcode,
            'PartyB': phone,
            'Remarks': remarks,
            'QueueTimeOutURL': timeout_url,
            'ResultURL': result_url,
            # Field name spelling is fixed by the API
            'Occassion': occasion or '',
        }
        logger.info(f"Sending B2C payment of {format_currency(amount)} to {mask_phone_number(phone)}")

        response = self._post(APIEndpoints.B2C_PAYMENT_REQUEST, payload, 'B2C payment')
        result = TransactionResult.from_response(response)

        logger.info(f"B2C payment accepted. Conversation ID: {result.conversation_id}")
        return result
