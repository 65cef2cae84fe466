"""
Unit tests for DarajaConfig.
"""
import pytest
from django.test import override_settings

from daraja.config import DarajaConfig
from daraja.constants import Environment
from daraja.exceptions import ConfigurationError


def make_config(**overrides):
    values = dict(consumer_key='key', consumer_secret='secret', shortcode=174379)
    values.update(overrides)
    return DarajaConfig(**values)


def test_defaults():
    config = make_config()

    assert config.environment is Environment.SANDBOX
    assert config.base_url == 'https://sandbox.safaricom.co.ke'
    assert config.timeout == 30
    assert not config.is_production


def test_values_are_normalised():
    config = make_config(shortcode=' 600000 ', environment='PRODUCTION', timeout='5')

    assert config.shortcode == 600000
    assert config.environment is Environment.PRODUCTION
    assert config.timeout == 5.0
    assert config.get_full_url('/mpesa/b2c/v1/paymentrequest') == \
        'https://api.safaricom.co.ke/mpesa/b2c/v1/paymentrequest'


def test_environment_enum_is_accepted():
    assert make_config(environment=Environment.PRODUCTION).is_production


@pytest.mark.parametrize('overrides, message', [
    ({'consumer_key': ''}, 'consumer key'),
    ({'consumer_secret': None}, 'consumer secret'),
    ({'shortcode': 'ABC123'}, 'Shortcode'),
    ({'environment': 'staging'}, 'Environment'),
    ({'timeout': 0}, 'Timeout'),
    ({'timeout': 'never'}, 'Timeout'),
])
def test_invalid_values(overrides, message):
    with pytest.raises(ConfigurationError, match=message):
        make_config(**overrides)


def test_require_lists_missing_settings():
    config = make_config(initiator_name='testapi')

    config.require('initiator_name')
    with pytest.raises(ConfigurationError) as exc_info:
        config.require('initiator_password', 'certificate', operation='reversal')

    assert exc_info.value.message == (
        'Missing Daraja configuration for reversal: DARAJA_INITIATOR_PASSWORD, DARAJA_SANDBOX_CERTIFICATE'
    )


@override_settings(
    DARAJA_CONSUMER_KEY='settings_key',
    DARAJA_CONSUMER_SECRET='settings_secret',
    DARAJA_SHORTCODE='174379',
    DARAJA_ENVIRONMENT='sandbox',
    DARAJA_PASSKEY='passkey',
    DARAJA_TIMEOUT=10,
)
def test_from_settings():
    config = DarajaConfig.from_settings(timeout=3)

    assert config.consumer_key == 'settings_key'
    assert config.consumer_secret == 'settings_secret'
    assert config.shortcode == 174379
    assert config.passkey == 'passkey'
    assert config.initiator_name == ''
    assert config.timeout == 3


@override_settings(DARAJA_CONSUMER_SECRET='settings_secret', DARAJA_SHORTCODE=174379)
def test_from_settings_requires_consumer_key():
    with pytest.raises(ConfigurationError, match='DARAJA_CONSUMER_KEY'):
        DarajaConfig.from_settings()


def test_certificate_is_chosen_by_environment():
    certificates = dict(sandbox_certificate='SANDBOX PEM', production_certificate='PRODUCTION PEM')
    sandbox = make_config(environment='sandbox', **certificates)
    production = make_config(environment='production', **certificates)

    assert sandbox.certificate == 'SANDBOX PEM'
    assert production.certificate == 'PRODUCTION PEM'


def test_require_reports_certificate_setting_for_environment():
    config = make_config(environment='production', sandbox_certificate='SANDBOX PEM')

    with pytest.raises(ConfigurationError, match='DARAJA_PRODUCTION_CERTIFICATE'):
        config.require('certificate', operation='B2C payment')


@override_settings(
    DARAJA_CONSUMER_KEY='settings_key',
    DARAJA_CONSUMER_SECRET='settings_secret',
    DARAJA_SHORTCODE=600000,
    DARAJA_ENVIRONMENT='production',
    DARAJA_SANDBOX_CERTIFICATE='SANDBOX PEM',
    DARAJA_PRODUCTION_CERTIFICATE='PRODUCTION PEM',
)
def test_from_settings_reads_both_certificates():
    assert DarajaConfig.from_settings().certificate == 'PRODUCTION PEM'
