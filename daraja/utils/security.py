"""
Request password and security credential generation.
"""

import base64
from datetime import datetime
from typing import Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from django.utils import timezone

from ..constants import PROVIDER_TIMEZONE, TIMESTAMP_FORMAT
from ..exceptions import CryptoError


def generate_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as the YYYYMMDDHHmmss timestamp M-Pesa expects.

    M-Pesa checks the timestamp against East Africa Time, so the moment is
    converted to Africa/Nairobi first. Naive datetimes are taken to be in
    the Django default timezone.

    Args:
        moment: Moment to format (default: now)

    Returns:
        Fixed width 14 digit timestamp
    """
    moment = moment or timezone.now()
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return moment.astimezone(PROVIDER_TIMEZONE).strftime(TIMESTAMP_FORMAT)


def derive_password(shortcode: Union[int, str], passkey: str, timestamp: str) -> str:
    """
    Generate the M-Pesa Express request password.

    Args:
        shortcode: Business shortcode
        passkey: Lipa na M-Pesa Online passkey
        timestamp: Timestamp sent alongside the password

    Returns:
        base64(shortcode + passkey + timestamp)
    """
    raw = f"{shortcode}{passkey}{timestamp}"
    return base64.b64encode(raw.encode('utf-8')).decode('ascii')


def _load_public_key(certificate_pem: Union[str, bytes]) -> rsa.RSAPublicKey:
    if isinstance(certificate_pem, str):
        certificate_pem = certificate_pem.encode('utf-8')
    if not certificate_pem or not certificate_pem.strip():
        raise CryptoError("No certificate configured for security credential generation")

    try:
        if b'PUBLIC KEY' in certificate_pem:
            public_key = serialization.load_pem_public_key(certificate_pem)
        else:
            public_key = x509.load_pem_x509_certificate(certificate_pem).public_key()
    except ValueError as e:
        raise CryptoError(f"Unable to load certificate: {str(e)}")

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise CryptoError(
            f"Certificate must hold an RSA public key. Got: {type(public_key).__name__}"
        )
    return public_key


def derive_security_credential(password: str, certificate_pem: Union[str, bytes]) -> str:
    """
    Encrypt the initiator password with the M-Pesa public certificate.

    Args:
        password: Plaintext initiator password
        certificate_pem: PEM encoded X.509 certificate (or bare public key)
            for the target environment

    Returns:
        Base64 encoded RSA PKCS#1 v1.5 ciphertext

    Raises:
        CryptoError: If the certificate is unusable or encryption fails
    """
    if not password:
        raise CryptoError("Initiator password is required to derive a security credential")

    public_key = _load_public_key(certificate_pem)
    try:
        encrypted = public_key.encrypt(password.encode('utf-8'), padding.PKCS1v15())
    except ValueError as e:
        raise CryptoError(f"Failed to encrypt initiator password: {str(e)}")

    return base64.b64encode(encrypted).decode('ascii')
