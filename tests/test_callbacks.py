"""
Unit tests for callback and result notification parsing.
"""
import pytest

from daraja.callbacks import parse_result_callback, parse_stk_callback
from daraja.exceptions import ValidationError


STK_SUCCESS = {
    'Body': {
        'stkCallback': {
            'MerchantRequestID': '29115-34620561-1',
            'CheckoutRequestID': 'ws_CO_191220191020363925',
            'ResultCode': 0,
            'ResultDesc': 'The service request is processed successfully.',
            'CallbackMetadata': {
                'Item': [
                    {'Name': 'Amount', 'Value': 1.00},
                    {'Name': 'MpesaReceiptNumber', 'Value': 'NLJ7RT61SV'},
                    {'Name': 'TransactionDate', 'Value': 20191219102115},
                    {'Name': 'PhoneNumber', 'Value': 254708374149},
                ]
            },
        }
    }
}

STK_CANCELLED = {
    'Body': {
        'stkCallback': {
            'MerchantRequestID': '29115-34620561-1',
            'CheckoutRequestID': 'ws_CO_191220191020363925',
            'ResultCode': 1032,
            'ResultDesc': 'Request cancelled by user',
        }
    }
}

B2C_RESULT = {
    'Result': {
        'ResultType': 0,
        'ResultCode': 0,
        'ResultDesc': 'The service request is processed successfully.',
        'OriginatorConversationID': '10571-7910404-1',
        'ConversationID': 'AG_20191219_00004e48cf7e3533f581',
        'TransactionID': 'NLJ41HAY6Q',
        'ResultParameters': {
            'ResultParameter': [
                {'Key': 'TransactionAmount', 'Value': 10},
                {'Key': 'TransactionReceipt', 'Value': 'NLJ41HAY6Q'},
                {'Key': 'ReceiverPartyPublicName', 'Value': '254708374149 - John Doe'},
            ]
        },
        'ReferenceData': {
            'ReferenceItem': {'Key': 'QueueTimeoutURL', 'Value': 'https://internalsandbox.safaricom.co.ke/'}
        },
    }
}


def test_successful_stk_callback():
    callback = parse_stk_callback(STK_SUCCESS)

    assert callback.is_successful
    assert callback.checkout_request_id == 'ws_CO_191220191020363925'
    assert callback.receipt_number == 'NLJ7RT61SV'
    assert callback.amount == 1.00
    assert callback.phone_number == 254708374149
    assert callback.transaction_date == 20191219102115


def test_cancelled_stk_callback_has_no_metadata():
    callback = parse_stk_callback(STK_CANCELLED)

    assert not callback.is_successful
    assert callback.result_code == 1032
    assert callback.result_description == 'Request cancelled by user'
    assert callback.receipt_number is None


def test_result_callback():
    callback = parse_result_callback(B2C_RESULT)

    assert callback.is_successful
    assert callback.conversation_id == 'AG_20191219_00004e48cf7e3533f581'
    assert callback.transaction_id == 'NLJ41HAY6Q'
    assert callback.parameters['TransactionAmount'] == 10
    assert callback.parameters['ReceiverPartyPublicName'] == '254708374149 - John Doe'
    assert callback.reference_data == {'QueueTimeoutURL': 'https://internalsandbox.safaricom.co.ke/'}


def test_failed_result_without_parameters():
    callback = parse_result_callback({
        'Result': {
            'ResultType': 0,
            'ResultCode': '2001',
            'ResultDesc': 'The initiator information is invalid.',
            'ConversationID': 'AG_20191219_00006c6fddb15123addf',
        }
    })

    assert callback.result_code == 2001
    assert not callback.is_successful
    assert callback.parameters == {}


@pytest.mark.parametrize('parser, payload', [
    (parse_stk_callback, B2C_RESULT),
    (parse_result_callback, STK_SUCCESS),
    (parse_stk_callback, {'Body': {'stkCallback': {'ResultCode': 'x'}}}),
    (parse_result_callback, None),
    (parse_stk_callback, {'Body': None}),
    (parse_stk_callback, {'Body': 'stkCallback'}),
    (parse_stk_callback, [{'Body': {}}]),
    (parse_stk_callback, {'Body': {'stkCallback': ['ResultCode']}}),
    (parse_result_callback, [STK_SUCCESS]),
    (parse_result_callback, {'Result': 'done'}),
])
def test_wrong_payloads(parser, payload):
    with pytest.raises(ValidationError):
        parser(payload)
