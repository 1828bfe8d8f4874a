"""
Callback Verifier
=================

Feieyun signs every asynchronous print result with its RSA key:

1. Build ``orderId=<id>&status=<status>&stime=<stime>``
2. base64-decode the ``sign`` field
3. Verify SHA256withRSA (PKCS#1 v1.5) against the vendor public key

The notification is attacker-controlled input, so a bad or garbled
signature yields ``verified=False`` rather than an exception.
"""

import base64
import binascii
import logging

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .exceptions import PublicKeyError
from .models.callback import CallbackNotification, VerificationResult

logger = logging.getLogger(__name__)

PEM_MARKER = b'-----BEGIN'


def load_public_key(public_key) -> rsa.RSAPublicKey:
    """
    Parse the vendor public key.

    Accepts PEM text, or the bare base64 DER (SubjectPublicKeyInfo) string
    the Feieyun console displays.

    Raises:
        PublicKeyError: Key is empty, unparsable, or not RSA
    """
    if isinstance(public_key, str):
        public_key = public_key.strip().encode('ascii', errors='replace')
    if not public_key:
        raise PublicKeyError('Public key is empty')

    try:
        if public_key.lstrip().startswith(PEM_MARKER):
            key = serialization.load_pem_public_key(public_key)
        else:
            der = base64.b64decode(b''.join(public_key.split()), validate=True)
            key = serialization.load_der_public_key(der)
    except (ValueError, binascii.Error, UnsupportedAlgorithm) as e:
        raise PublicKeyError(f'Cannot parse public key: {e}') from e

    if not isinstance(key, rsa.RSAPublicKey):
        raise PublicKeyError(f'Expected an RSA public key, got {type(key).__name__}')
    return key


class CallbackVerifier:
    """Verifies callbacks against one vendor public key."""

    def __init__(self, public_key):
        self._key = load_public_key(public_key)

    def verify_signature(self, message: bytes, sign: str) -> bool:
        """True if ``sign`` (base64) is a valid signature over ``message``."""
        try:
            signature = base64.b64decode(sign, validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Callback signature is not valid base64")
            return False
        try:
            self._key.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            return False
        return True

    def verify(self, notification: CallbackNotification) -> VerificationResult:
        """Verify one notification; never raises for a bad signature."""
        verified = self.verify_signature(
            notification.canonical_string().encode('utf-8'), notification.sign
        )
        if not verified:
            logger.warning("Callback signature rejected for order %s", notification.order_id)
        else:
            logger.debug("Callback verified for order %s status=%s",
                         notification.order_id, notification.status)
        return VerificationResult(
            order_id=notification.order_id,
            status=notification.status,
            stime=notification.stime,
            verified=verified,
        )
