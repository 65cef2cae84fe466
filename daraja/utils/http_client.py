"""
HTTP client for Daraja API communication.
"""

import requests
import logging
from typing import Dict, Any, Optional, Tuple
from daraja.exceptions import ProviderError, TransportError, RequestTimeoutError
from daraja.constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# Body fields that must never reach the logs
SENSITIVE_FIELDS = ('Password', 'SecurityCredential', 'access_token')


class HTTPClient:
    """
    HTTP client wrapper for Daraja API requests.
    Handles request/response, error mapping and logging.
    Requests are sent once; nothing is retried.
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            timeout: Default request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, headers: Dict, data: Optional[Dict] = None):
        """Log API request details."""
        logger.info(f"Daraja API Request: {method} {url}")
        logger.debug(f"Headers: {self._sanitize_headers(headers)}")
        if data:
            logger.debug(f"Payload: {self._sanitize_payload(data)}")

    def _log_response(self, response: requests.Response):
        """Log API response details."""
        logger.info(f"Daraja API Response: {response.status_code}")
        try:
            body = response.json()
        except ValueError:
            body = response.text
        if isinstance(body, dict):
            body = self._sanitize_payload(body)
        logger.debug(f"Response: {body}")

    def _sanitize_headers(self, headers: Dict) -> Dict:
        """Remove sensitive data from headers for logging."""
        sanitized = headers.copy()
        if 'Authorization' in sanitized:
            sanitized['Authorization'] = 'Bearer ***'
        return sanitized

    def _sanitize_payload(self, data: Dict) -> Dict:
        """Mask secrets in a request or response body for logging."""
        return {
            key: '***' if key in SENSITIVE_FIELDS else value
            for key, value in data.items()
        }

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """
        Handle API response and extract data.

        Args:
            response: Response object from requests

        Returns:
            Response data as dictionary

        Raises:
            ProviderError: If response indicates an error
        """
        self._log_response(response)

        if response.status_code >= 400:
            error_message = response.reason or f"API request failed with status {response.status_code}"
            try:
                error_data = response.json()
                if isinstance(error_data, dict):
                    error_message = error_data.get('errorMessage', error_message)
            except ValueError:
                pass

            raise ProviderError(
                error_message,
                error_code=response.status_code,
                response_data=response.text
            )

        # Parse JSON response
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse API response: {str(e)}",
                error_code=response.status_code,
                response_data=response.text
            )

        if not isinstance(data, dict):
            raise ProviderError(
                f"Unexpected response format: expected a JSON object, got {type(data).__name__}",
                error_code=response.status_code,
                response_data=response.text
            )
        return data

    def _send(self, method: str, url: str, timeout: Optional[float], **kwargs) -> Dict[str, Any]:
        timeout = timeout or self.timeout
        try:
            response = self.session.request(method, url, timeout=timeout, **kwargs)
        except requests.Timeout as e:
            raise RequestTimeoutError(f"Request to {url} timed out after {timeout}s: {str(e)}")
        except requests.RequestException as e:
            raise TransportError(f"Connection to {url} failed: {str(e)}")
        return self._handle_response(response)

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Make POST request to API.

        Args:
            endpoint: API endpoint path
            data: Request payload
            headers: Request headers
            timeout: Override of the client timeout for this call

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})
        headers.setdefault('Content-Type', 'application/json')

        self._log_request('POST', url, headers, data)
        return self._send('POST', url, timeout, json=data, headers=headers)

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
        timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            headers: Request headers
            auth: HTTP Basic credentials
            timeout: Override of the client timeout for this call

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})

        self._log_request('GET', url, headers)
        return self._send('GET', url, timeout, params=params, headers=headers, auth=auth)

    def close(self):
        """Close the session."""
        self.session.close()
