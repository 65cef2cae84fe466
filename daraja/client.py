"""
High-level Daraja client.
One instance per app and shortcode; it owns the HTTP session and the token cache.
"""

import logging
from typing import Optional

from .config import DarajaConfig
from .services.account_service import AccountService
from .services.auth_service import AuthService
from .services.b2c_service import B2CService
from .services.c2b_service import C2BService
from .services.express_service import ExpressService
from .utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class DarajaClient:
    """
    Entry point for every Daraja operation.

    Example::

        client = DarajaClient()  # reads DARAJA_* from Django settings
        result = client.stk_push(
            phone_number='0712345678',
            amount=100,
            account_reference='INV001',
            transaction_desc='Invoice',
            callback_url='https://example.com/mpesa/callback',
        )
        store(result.checkout_request_id)
    """

    def __init__(self, config: Optional[DarajaConfig] = None):
        self.config = config or DarajaConfig.from_settings()
        self.http_client = HTTPClient(self.config.base_url, timeout=self.config.timeout)
        self.auth_service = AuthService(self.config, http_client=self.http_client)

        services = dict(config=self.config, auth_service=self.auth_service, http_client=self.http_client)
        self.express = ExpressService(**services)
        self.c2b = C2BService(**services)
        self.b2c = B2CService(**services)
        self.account = AccountService(**services)

        logger.debug(f"Created Daraja client for {self.config!r}")

    # M-Pesa Express

    def stk_push(self, phone_number, amount, account_reference, transaction_desc, callback_url, **kwargs):
        """See ExpressService.stk_push."""
        return self.express.stk_push(
            phone_number, amount, account_reference, transaction_desc, callback_url, **kwargs
        )

    def stk_push_query(self, checkout_request_id):
        """See ExpressService.stk_push_query."""
        return self.express.stk_push_query(checkout_request_id)

    # C2B

    def register_urls(self, validation_url, confirmation_url, **kwargs):
        """See C2BService.register_urls."""
        return self.c2b.register_urls(validation_url, confirmation_url, **kwargs)

    def simulate_transaction(self, phone_number, amount, bill_reference):
        """See C2BService.simulate_transaction."""
        return self.c2b.simulate_transaction(phone_number, amount, bill_reference)

    # B2C

    def b2c_payment(self, phone_number, amount, remarks, timeout_url, result_url, **kwargs):
        """See B2CService.b2c_payment."""
        return self.b2c.b2c_payment(phone_number, amount, remarks, timeout_url, result_url, **kwargs)

    # Account

    def account_balance(self, remarks, timeout_url, result_url, **kwargs):
        """See AccountService.account_balance."""
        return self.account.account_balance(remarks, timeout_url, result_url, **kwargs)

    def transaction_status(self, transaction_id, remarks, timeout_url, result_url, **kwargs):
        """See AccountService.transaction_status."""
        return self.account.transaction_status(transaction_id, remarks, timeout_url, result_url, **kwargs)

    def reversal(self, transaction_id, remarks, timeout_url, result_url, **kwargs):
        """See AccountService.reversal."""
        return self.account.reversal(transaction_id, remarks, timeout_url, result_url, **kwargs)

    def close(self):
        """Close the underlying HTTP session."""
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
