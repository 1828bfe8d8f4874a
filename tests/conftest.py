"""
Pytest configuration and fixtures for feie_print tests.
"""
from __future__ import annotations

import base64
import json
import logging
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from feie_print import ClientConfig, FeieClient
from feie_print.log import LOGGER_NAME


TEST_USER = "test@example.com"
TEST_UKEY = "abcdefghijklmnop"


def make_response(payload: Any = None, content: Optional[bytes] = None, status_code: int = 200) -> Mock:
    """Stand-in for requests.Response."""
    if content is None:
        content = json.dumps(payload).encode("utf-8")
    response = Mock(spec=requests.Response)
    response.content = content
    response.status_code = status_code
    return response


def sign_callback(private_key: rsa.RSAPrivateKey, message: str) -> str:
    signature = private_key.sign(message.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(signature).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key) -> str:
    return rsa_private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture(scope="session")
def public_key_base64(rsa_private_key) -> str:
    """Bare base64 DER, the format shown in the Feieyun console."""
    der = rsa_private_key.public_key().public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


@pytest.fixture
def config(public_key_pem) -> ClientConfig:
    return ClientConfig(
        user=TEST_USER,
        ukey=TEST_UKEY,
        gateway="https://feie.test/Api/Open/",
        public_key=public_key_pem,
        timeout=5,
    )


@pytest.fixture
def client(config) -> FeieClient:
    return FeieClient(config)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo level and handler changes made to the feie_print logger."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
