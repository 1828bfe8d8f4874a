"""
Feie Print Exceptions
"""

from typing import Optional


class FeieError(Exception):
    """Base class for all errors raised by feie_print."""


class ConfigurationError(FeieError):
    """Client is missing credentials or a public key it needs."""


class TransportError(FeieError):
    """Gateway could not be reached (DNS, refused, TLS handshake, timeout)."""


class EmptyResponseError(FeieError):
    """Gateway answered with a zero-length body."""


class DecodeError(FeieError):
    """Response body is not a valid response envelope."""

    def __init__(self, message: str, body: bytes = b''):
        super().__init__(message)
        self.body = body


class PublicKeyError(FeieError):
    """Configured vendor public key cannot be parsed."""


class ApiError(FeieError):
    """Gateway returned a non-zero ``ret`` code."""

    def __init__(self, ret: int, msg: str, apiname: Optional[str] = None):
        super().__init__(f'{apiname or "feie"} failed (ret={ret}): {msg}')
        self.ret = ret
        self.msg = msg
        self.apiname = apiname
