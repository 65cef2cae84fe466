"""
Parsers for the notifications M-Pesa POSTs to callback and result URLs.

Every operation only acknowledges the request; the outcome arrives later
as one of these payloads. Match it to the stored checkout request ID or
conversation ID to reconcile.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def _flatten(items, key_name: str) -> Dict[str, Any]:
    """Turn [{"Name": k, "Value": v}, ...] into {k: v}."""
    if isinstance(items, dict):
        items = [items]
    return {item.get(key_name): item.get('Value') for item in items or [] if key_name in item}


@dataclass(frozen=True)
class StkCallback:
    """Outcome of an STK push, delivered to the CallBackURL."""

    merchant_request_id: Optional[str]
    checkout_request_id: Optional[str]
    result_code: int
    result_description: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_successful(self) -> bool:
        return self.result_code == 0

    @property
    def receipt_number(self) -> Optional[str]:
        return self.metadata.get('MpesaReceiptNumber')

    @property
    def amount(self):
        return self.metadata.get('Amount')

    @property
    def phone_number(self) -> Optional[int]:
        return self.metadata.get('PhoneNumber')

    @property
    def transaction_date(self) -> Optional[int]:
        return self.metadata.get('TransactionDate')


@dataclass(frozen=True)
class ResultCallback:
    """Outcome of a B2C, balance, status or reversal request, delivered to the ResultURL."""

    conversation_id: Optional[str]
    originator_conversation_id: Optional[str]
    result_type: Optional[int]
    result_code: int
    result_description: Optional[str]
    transaction_id: Optional[str]
    parameters: Dict[str, Any] = field(default_factory=dict)
    reference_data: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_successful(self) -> bool:
        return self.result_code == 0


def parse_stk_callback(payload: Dict[str, Any]) -> StkCallback:
    """
    Parse an STK push callback body (``{"Body": {"stkCallback": {...}}}``).

    Raises:
        ValidationError: If the payload is not an STK callback
    """
    body = payload.get('Body') if isinstance(payload, dict) else None
    stk = body.get('stkCallback') if isinstance(body, dict) else None
    if not stk or not isinstance(stk, dict):
        raise ValidationError("Payload is not an STK push callback", response_data=payload)

    try:
        result_code = int(stk.get('ResultCode'))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid ResultCode in STK callback: {stk.get('ResultCode')!r}", response_data=payload)

    callback = StkCallback(
        merchant_request_id=stk.get('MerchantRequestID'),
        checkout_request_id=stk.get('CheckoutRequestID'),
        result_code=result_code,
        result_description=stk.get('ResultDesc'),
        metadata=_flatten((stk.get('CallbackMetadata') or {}).get('Item'), 'Name'),
    )
    logger.info(f"STK callback for {callback.checkout_request_id}: {result_code} {callback.result_description}")
    return callback


def parse_result_callback(payload: Dict[str, Any]) -> ResultCallback:
    """
    Parse a result notification body (``{"Result": {...}}``).

    Raises:
        ValidationError: If the payload is not a result notification
    """
    result = payload.get('Result') if isinstance(payload, dict) else None
    if not result or not isinstance(result, dict):
        raise ValidationError("Payload is not a result notification", response_data=payload)

    try:
        result_code = int(result.get('ResultCode'))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid ResultCode in result: {result.get('ResultCode')!r}", response_data=payload)

    callback = ResultCallback(
        conversation_id=result.get('ConversationID'),
        originator_conversation_id=result.get('OriginatorConversationID'),
        result_type=result.get('ResultType'),
        result_code=result_code,
        result_description=result.get('ResultDesc'),
        transaction_id=result.get('TransactionID'),
        parameters=_flatten((result.get('ResultParameters') or {}).get('ResultParameter'), 'Key'),
        reference_data=_flatten((result.get('ReferenceData') or {}).get('ReferenceItem'), 'Key'),
    )
    logger.info(f"Result for conversation {callback.conversation_id}: {result_code} {callback.result_description}")
    return callback
