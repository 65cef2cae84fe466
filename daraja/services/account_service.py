"""
Account service for Daraja account operations.
Handles balance queries, transaction status queries and reversals.
"""

import logging
from typing import Any, Dict, Union

from ..constants import (
    APIEndpoints, CommandID, IdentifierType,
    REVERSAL_RECEIVER_IDENTIFIER_TYPE, MAX_REMARKS_LENGTH
)
from ..responses import TransactionResult
from ..utils.validators import validate_url, validate_text, validate_choice
from .base import DarajaService

logger = logging.getLogger(__name__)


class AccountService(DarajaService):
    """
    Service for initiator-authorised account operations.
    All of them answer asynchronously through the result URL.
    """

    def _initiator_fields(self, remarks: str, timeout_url: str, result_url: str, operation: str) -> Dict[str, Any]:
        self.config.require('initiator_name', operation=operation)
        fields = {
            'Remarks': validate_text(remarks, 'Remarks', MAX_REMARKS_LENGTH),
            'Initiator': self.config.initiator_name,
            'QueueTimeOutURL': validate_url(timeout_url, 'Queue timeout URL'),
            'ResultURL': validate_url(result_url, 'Result URL'),
        }
        # Encrypt only once every input has passed validation
        fields['SecurityCredential'] = self.auth_service.get_security_credential()
        return fields

    def account_balance(
        self,
        remarks: str,
        timeout_url: str,
        result_url: str,
        identifier_type: Union[IdentifierType, int] = IdentifierType.SHORTCODE
    ) -> TransactionResult:
        """
        Request the balance of the shortcode.

        Args:
            remarks: Comment sent along with the request
            timeout_url: URL notified if the request times out in the queue
            result_url: URL the balance is POSTed to
            identifier_type: Type of the configured shortcode

        Returns:
            TransactionResult acknowledging the request

        Raises:
            ValidationError: If input validation fails
            ConfigurationError: If initiator settings are missing
            CryptoError: If the security credential cannot be derived
            ProviderError: If M-Pesa rejects the request
        """
        logger.info(f"Requesting account balance for shortcode {self.config.shortcode}")

        identifier_type = validate_choice(identifier_type, IdentifierType, 'identifier type')
        fields = self._initiator_fields(remarks, timeout_url, result_url, 'account balance')
        payload = {
            'CommandID': CommandID.ACCOUNT_BALANCE.value,
            'PartyA': self.config.shortcode,
            'IdentifierType': identifier_type,
            **fields,
        }

        response = self._post(APIEndpoints.ACCOUNT_BALANCE, payload, 'Account balance')
        result = TransactionResult.from_response(response)

        logger.info(f"Account balance request accepted. Conversation ID: {result.conversation_id}")
        return result

    def transaction_status(
        self,
        transaction_id: str,
        remarks: str,
        timeout_url: str,
        result_url: str,
        identifier_type: Union[IdentifierType, int] = IdentifierType.SHORTCODE,
        occasion: str = ''
    ) -> TransactionResult:
        """
        Query the status of any M-Pesa transaction.

        Args:
            transaction_id: M-Pesa transaction ID (e.g. "OEI2AK4Q16")
            remarks: Comment sent along with the request
            timeout_url: URL notified if the request times out in the queue
            result_url: URL the status is POSTed to
            identifier_type: Type of the configured shortcode
            occasion: Optional additional comment

        Returns:
            TransactionResult acknowledging the request
        """
        transaction_id = validate_text(transaction_id, 'Transaction ID', 20)
        logger.info(f"Querying transaction status for {transaction_id}")

        identifier_type = validate_choice(identifier_type, IdentifierType, 'identifier type')
        fields = self._initiator_fields(remarks, timeout_url, result_url, 'transaction status')
        payload = {
            'CommandID': CommandID.TRANSACTION_STATUS_QUERY.value,
            'PartyA': self.config.shortcode,
            'IdentifierType': identifier_type,
            **fields,
            'TransactionID': transaction_id,
            'Occasion': occasion or '',
        }

        response = self._post(APIEndpoints.TRANSACTION_STATUS, payload, 'Transaction status')
        result = TransactionResult.from_response(response)

        logger.info(f"Transaction status request accepted. Conversation ID: {result.conversation_id}")
        return result

    def reversal(
        self,
        transaction_id: str,
        remarks: str,
        timeout_url: str,
        result_url: str,
        occasion: str = ''
    ) -> TransactionResult:
        """
        Reverse a transaction received by the shortcode.

        Args:
            transaction_id: M-Pesa transaction ID to reverse
            remarks: Comment sent along with the request
            timeout_url: URL notified if the request times out in the queue
            result_url: URL the reversal outcome is POSTed to
            occasion: Optional additional comment

        Returns:
            TransactionResult acknowledging the request
        """
        transaction_id = validate_text(transaction_id, 'Transaction ID', 20)
        logger.info(f"Requesting reversal of {transaction_id}")

        fields = self._initiator_fields(remarks, timeout_url, result_url, 'reversal')
        payload = {
            'CommandID': CommandID.TRANSACTION_REVERSAL.value,
            'ReceiverParty': self.config.shortcode,
            'ReceiverIdentifierType': REVERSAL_RECEIVER_IDENTIFIER_TYPE,
            **fields,
            'TransactionID': transaction_id,
            'Occasion': occasion or '',
        }

        response = self._post(APIEndpoints.REVERSAL, payload, 'Reversal')
        result = TransactionResult.from_response(response)

        logger.info(f"Reversal request accepted. Conversation ID: {result.conversation_id}")
        return result
