"""
Authentication service for the Daraja API.
Handles access token generation and caching.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from django.utils import timezone

from ..config import DarajaConfig
from ..constants import APIEndpoints
from ..exceptions import AuthError, ProviderError
from ..utils.http_client import HTTPClient
from ..utils.security import derive_security_credential

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    """An OAuth access token and the moment it stops being accepted."""

    token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


class AuthService:
    """
    Service for managing Daraja access tokens.

    The token is cached on the instance and reused until it expires.
    Refreshes are serialised so concurrent callers trigger a single
    request to the token endpoint.
    """

    def __init__(
        self,
        config: DarajaConfig,
        http_client: Optional[HTTPClient] = None,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.config = config
        self.http_client = http_client or HTTPClient(config.base_url, timeout=config.timeout)
        self.clock = clock
        self.token: Optional[AccessToken] = None
        self._security_credential: Optional[str] = None
        self._lock = threading.Lock()

    def generate_token(self, now: Optional[datetime] = None) -> AccessToken:
        """
        Generate a new access token from the Daraja API.

        Args:
            now: Moment the request is made (default: clock)

        Returns:
            AccessToken expiring ``expires_in`` seconds after ``now``

        Raises:
            AuthError: If token generation fails
        """
        logger.info("Generating new Daraja access token")
        now = now or self.clock()

        try:
            response = self.http_client.get(
                endpoint=APIEndpoints.GENERATE_TOKEN,
                params={'grant_type': 'client_credentials'},
                auth=(self.config.consumer_key, self.config.consumer_secret),
            )
        except ProviderError as e:
            logger.error(f"Failed to generate token: {e.message}")
            raise AuthError(
                f"Token generation failed: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

        access_token = response.get('access_token')
        if not access_token:
            raise AuthError(
                "Token generation failed: No access_token in response",
                response_data=response
            )

        try:
            expires_in = int(response.get('expires_in'))
        except (TypeError, ValueError):
            raise AuthError(
                f"Token generation failed: Invalid expires_in {response.get('expires_in')!r}",
                response_data=response
            )

        token = AccessToken(token=access_token, expires_at=now + timedelta(seconds=expires_in))
        logger.info(f"Successfully generated access token (expires in {expires_in}s)")
        return token

    def get_valid_token(self, now: Optional[datetime] = None, force_refresh: bool = False) -> str:
        """
        Get a valid access token.
        Returns cached token if still valid, otherwise generates a new one.

        Args:
            now: Moment to check validity against (default: clock)
            force_refresh: Force generation of new token even if cached token exists

        Returns:
            Access token string (without Bearer prefix)
        """
        now = now or self.clock()

        token = self.token
        if not force_refresh and token and token.is_valid(now):
            logger.debug("Using cached token")
            return token.token

        with self._lock:
            # Another caller may have refreshed while we waited
            token = self.token
            if not force_refresh and token and token.is_valid(now):
                return token.token

            if force_refresh:
                logger.info("Force refresh requested, generating new token")
            elif token:
                logger.info("Cached token expired, refreshing")
            else:
                logger.info("No cached token found")

            self.token = self.generate_token(now)
            return self.token.token

    def invalidate_token(self):
        """
        Drop the cached token.
        Useful when you know a token is invalid.
        """
        logger.info("Invalidating cached token")
        with self._lock:
            self.token = None

    def get_auth_header(self, force_refresh: bool = False) -> dict:
        """
        Get authorization header for API requests.

        Args:
            force_refresh: Force generation of new token

        Returns:
            Dictionary with Authorization header
        """
        token = self.get_valid_token(force_refresh=force_refresh)
        return {'Authorization': f'Bearer {token}'}

    def get_security_credential(self) -> str:
        """
        Get the encrypted initiator password for B2C-class requests.

        Computed once from the certificate for the configured environment
        and reused; any ciphertext of the password is accepted by M-Pesa.

        Raises:
            ConfigurationError: If initiator password or certificate is missing
            CryptoError: If encryption fails
        """
        if self._security_credential is None:
            self.config.require('initiator_password', 'certificate', operation='security credential')
            self._security_credential = derive_security_credential(
                self.config.initiator_password,
                self.config.certificate
            )
            logger.debug("Derived security credential for initiator")
        return self._security_credential
