"""
Configuration management for the Daraja client.
"""

from typing import Optional

from .constants import BASE_URLS, DEFAULT_ENVIRONMENT, DEFAULT_TIMEOUT, Environment
from .exceptions import ConfigurationError


class DarajaConfig:
    """
    Validated configuration for one Daraja app and shortcode.

    The consumer key/secret pair and shortcode are always required. The
    passkey is only needed for M-Pesa Express, and the initiator name,
    initiator password and certificate only for B2C, balance, status and
    reversal requests; those are checked per operation through ``require``.

    Sandbox and production encrypt the initiator password with different
    public certificates, so one is held per environment and ``certificate``
    resolves to the one for ``environment``.
    """

    # Django setting name for each attribute
    SETTINGS_MAP = {
        'consumer_key': 'DARAJA_CONSUMER_KEY',
        'consumer_secret': 'DARAJA_CONSUMER_SECRET',
        'shortcode': 'DARAJA_SHORTCODE',
        'environment': 'DARAJA_ENVIRONMENT',
        'passkey': 'DARAJA_PASSKEY',
        'initiator_name': 'DARAJA_INITIATOR_NAME',
        'initiator_password': 'DARAJA_INITIATOR_PASSWORD',
        'sandbox_certificate': 'DARAJA_SANDBOX_CERTIFICATE',
        'production_certificate': 'DARAJA_PRODUCTION_CERTIFICATE',
        'timeout': 'DARAJA_TIMEOUT',
    }

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        shortcode,
        environment=DEFAULT_ENVIRONMENT,
        passkey: str = '',
        initiator_name: str = '',
        initiator_password: str = '',
        sandbox_certificate: str = '',
        production_certificate: str = '',
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.shortcode = shortcode
        self.environment = environment
        self.passkey = passkey
        self.initiator_name = initiator_name
        self.initiator_password = initiator_password
        self.sandbox_certificate = sandbox_certificate
        self.production_certificate = production_certificate
        self.timeout = timeout
        self._validate_settings()

    @classmethod
    def from_settings(cls, **overrides) -> 'DarajaConfig':
        """
        Build a configuration from ``DARAJA_*`` entries in Django settings.

        Args:
            **overrides: Values that take precedence over settings

        Returns:
            DarajaConfig instance
        """
        from django.conf import settings

        values = {}
        for attr, setting_name in cls.SETTINGS_MAP.items():
            if hasattr(settings, setting_name):
                values[attr] = getattr(settings, setting_name)
        values.update(overrides)

        for attr in ('consumer_key', 'consumer_secret', 'shortcode'):
            if attr not in values:
                raise ConfigurationError(
                    f"{cls.SETTINGS_MAP[attr]} is not configured in Django settings. "
                    "Please add it to your settings.py or .env file."
                )
        return cls(**values)

    @property
    def base_url(self) -> str:
        """Get the API host for the configured environment."""
        return BASE_URLS[self.environment]

    @property
    def certificate(self) -> str:
        """Get the public certificate for the configured environment."""
        return getattr(self, self._resolve_field('certificate'))

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def get_full_url(self, endpoint: str) -> str:
        """
        Get full URL for an API endpoint.

        Args:
            endpoint: API endpoint path

        Returns:
            Full URL combining base URL and endpoint
        """
        base = self.base_url.rstrip('/')
        endpoint = endpoint.lstrip('/')
        return f"{base}/{endpoint}"

    def require(self, *fields: str, operation: Optional[str] = None):
        """
        Ensure optional settings needed by an operation are present.

        Raises:
            ConfigurationError: If any of the fields is empty
        """
        missing = [self._resolve_field(name) for name in fields if not getattr(self, name)]
        if missing:
            names = ', '.join(self.SETTINGS_MAP[name] for name in missing)
            target = f" for {operation}" if operation else ""
            raise ConfigurationError(f"Missing Daraja configuration{target}: {names}")

    def _resolve_field(self, name: str) -> str:
        if name == 'certificate':
            return f"{self.environment.value}_certificate"
        return name

    def _validate_settings(self):
        """
        Validate and normalise the required settings.
        Raises ConfigurationError if validation fails.
        """
        if not self.consumer_key or not self.consumer_secret:
            raise ConfigurationError("Daraja consumer key and consumer secret are required.")

        try:
            self.shortcode = int(str(self.shortcode).strip())
        except (TypeError, ValueError):
            raise ConfigurationError(f"Shortcode must be numeric. Got: {self.shortcode!r}")

        try:
            self.environment = Environment(str(getattr(self.environment, 'value', self.environment)).lower())
        except ValueError:
            raise ConfigurationError(
                f"Environment must be 'sandbox' or 'production'. Got: {self.environment!r}"
            )

        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Timeout must be a number of seconds. Got: {self.timeout!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive. Got: {self.timeout}")

    def __repr__(self):
        return f"<DarajaConfig shortcode={self.shortcode} environment={self.environment.value}>"
