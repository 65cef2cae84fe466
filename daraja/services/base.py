"""
Shared plumbing for Daraja operation services.
"""

import logging
from typing import Any, Dict, Optional

from ..config import DarajaConfig
from ..exceptions import DarajaException
from ..utils.http_client import HTTPClient
from .auth_service import AuthService

logger = logging.getLogger(__name__)


class DarajaService:
    """
    Base class for services calling authenticated Daraja endpoints.

    Services built by ``DarajaClient`` share one HTTP session and one
    AuthService so the cached token is reused across operations.
    """

    def __init__(
        self,
        config: DarajaConfig,
        auth_service: Optional[AuthService] = None,
        http_client: Optional[HTTPClient] = None,
    ):
        self.config = config
        self.http_client = http_client or HTTPClient(config.base_url, timeout=config.timeout)
        self.auth_service = auth_service or AuthService(config, http_client=self.http_client)

    def _post(self, endpoint: str, payload: Dict[str, Any], operation: str) -> Dict[str, Any]:
        """
        Send one authenticated POST request.

        Errors are logged and re-raised unchanged.
        """
        try:
            headers = self.auth_service.get_auth_header()
            return self.http_client.post(endpoint=endpoint, data=payload, headers=headers)
        except DarajaException as e:
            logger.error(f"{operation} failed: {e.message}")
            raise
