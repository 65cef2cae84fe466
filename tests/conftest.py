"""
Pytest Configuration and Fixtures
"""
import datetime
import json
from unittest.mock import Mock

import django
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from django.conf import settings

if not settings.configured:
    settings.configure(USE_TZ=True, TIME_ZONE='UTC')
    django.setup()

from daraja.client import DarajaClient
from daraja.config import DarajaConfig


def mock_http_response(json_data=None, status_code=200, reason='OK', text=None):
    """Return a mock requests.Response whose .json() returns json_data."""
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
        resp.text = text or ''
    else:
        resp.json.return_value = json_data
        resp.text = json.dumps(json_data)
    return resp


def token_response(token='daraja_tok_abc', expires_in='3599'):
    """Valid Daraja OAuth token response."""
    return mock_http_response({'access_token': token, 'expires_in': expires_in})


@pytest.fixture(scope='session')
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope='session')
def certificate_pem(rsa_key):
    """Self-signed stand-in for the M-Pesa public certificate."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, 'sandbox.safaricom.co.ke')])
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(rsa_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(datetime.datetime(2020, 1, 1))
        .not_valid_after(datetime.datetime(2040, 1, 1))
        .sign(rsa_key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.PEM).decode('ascii')


@pytest.fixture
def config(certificate_pem):
    return DarajaConfig(
        consumer_key='test_consumer_key',
        consumer_secret='test_consumer_secret',
        shortcode=174379,
        environment='sandbox',
        passkey='test_passkey',
        initiator_name='testapi',
        initiator_password='Safaricom999!',
        sandbox_certificate=certificate_pem,
    )


@pytest.fixture
def client(config):
    """Client whose HTTP session is a mock; set session.request.side_effect per test."""
    client = DarajaClient(config)
    client.http_client.session = Mock()
    return client


def sent_requests(client):
    """(method, url, kwargs) for every request the client sent."""
    return [
        (call.args[0], call.args[1], call.kwargs)
        for call in client.http_client.session.request.call_args_list
    ]
