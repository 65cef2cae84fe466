"""
Result objects returned by Daraja operations.

Provider responses use PascalCase keys; results expose snake_case
attributes and ``to_dict()`` gives the camelCase shape for JSON output.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


def _camel_case(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part.title() for part in tail)


@dataclass(frozen=True)
class DarajaResult:
    """Base class for mapped responses."""

    raw_response: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False, kw_only=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            _camel_case(f.name): getattr(self, f.name)
            for f in fields(self)
            if f.name != 'raw_response'
        }


@dataclass(frozen=True)
class StkPushResult(DarajaResult):
    merchant_request_id: Optional[str]
    checkout_request_id: Optional[str]

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> 'StkPushResult':
        return cls(
            merchant_request_id=response.get('MerchantRequestID'),
            checkout_request_id=response.get('CheckoutRequestID'),
            raw_response=response,
        )


@dataclass(frozen=True)
class StkQueryResult(DarajaResult):
    result_code: Optional[str]
    result_description: Optional[str]

    @property
    def is_successful(self) -> bool:
        return str(self.result_code) == '0'

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> 'StkQueryResult':
        return cls(
            result_code=response.get('ResultCode'),
            result_description=response.get('ResultDesc'),
            raw_response=response,
        )


@dataclass(frozen=True)
class RegisterUrlsResult(DarajaResult):
    response_description: Optional[str]

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> 'RegisterUrlsResult':
        return cls(
            response_description=response.get('ResponseDescription'),
            raw_response=response,
        )


@dataclass(frozen=True)
class TransactionResult(DarajaResult):
    """
    Acknowledgement of an asynchronous request.
    The outcome itself is POSTed later to the ResultURL.
    """

    conversation_id: Optional[str]
    originator_conversation_id: Optional[str]
    response_description: Optional[str]

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> 'TransactionResult':
        # The C2B simulate endpoint spells it "OriginatorCoversationID"
        originator_id = response.get('OriginatorConversationID', response.get('OriginatorCoversationID'))
        return cls(
            conversation_id=response.get('ConversationID'),
            originator_conversation_id=originator_id,
            response_description=response.get('ResponseDescription'),
            raw_response=response,
        )
