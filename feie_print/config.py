"""
Feie Print Configuration
"""

import os
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# Gateway
# =============================================================================

# See: http://www.feieyun.com/open/index.html
DEFAULT_GATEWAY = 'https://api.feieyun.cn/Api/Open/'

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (feie-print; Linux x86_64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/87.0.4280.67 Safari/537.36'
)

DEFAULT_TIMEOUT = 30  # seconds

# Max printers per Open_printerAddlist call
MAX_PRINTERS_PER_CALL = 100

# Max copies accepted by Open_printMsg / Open_printLabelMsg
MAX_COPIES = 10

# =============================================================================
# Account (environment)
# =============================================================================

USER = os.environ.get('FEIE_USER', '')
UKEY = os.environ.get('FEIE_UKEY', '')
GATEWAY = os.environ.get('FEIE_GATEWAY', DEFAULT_GATEWAY)
PUBLIC_KEY = os.environ.get('FEIE_PUBLIC_KEY', '')
TIMEOUT = float(os.environ.get('FEIE_TIMEOUT', DEFAULT_TIMEOUT))
USER_AGENT = os.environ.get('FEIE_USER_AGENT', DEFAULT_USER_AGENT)

# =============================================================================
# Logging
# =============================================================================

LOG_PATH = os.environ.get('FEIE_LOG_PATH') or None
LOG_LEVEL = os.environ.get('FEIE_LOG_LEVEL') or None

# =============================================================================
# Callback Receiver
# =============================================================================

CALLBACK_HOST = os.environ.get('FEIE_CALLBACK_HOST', '0.0.0.0')
CALLBACK_PORT = int(os.environ.get('FEIE_CALLBACK_PORT', 5100))
CALLBACK_PATH = os.environ.get('FEIE_CALLBACK_PATH', '/feie/callback')
DEBUG = os.environ.get('FEIE_DEBUG', 'false').lower() == 'true'


@dataclass
class ClientConfig:
    """Everything FeieClient needs at construction time."""

    # Account identifier and UKEY from the Feieyun console
    user: str = ""
    ukey: str = ""

    # Gateway URL, override for sandboxes or proxies
    gateway: str = DEFAULT_GATEWAY

    # Vendor public key for callback verification (PEM or bare base64 DER)
    public_key: Optional[str] = None

    # Connect/read timeout in seconds for each call
    timeout: float = DEFAULT_TIMEOUT

    user_agent: str = DEFAULT_USER_AGENT

    # Directory for the rotating log file; None logs nowhere but handlers
    # already attached by the host application
    log_path: Optional[str] = None
    # None leaves the feie_print logger level to the host application
    log_level: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        """Build a config from FEIE_* environment variables."""
        return cls(
            user=USER,
            ukey=UKEY,
            gateway=GATEWAY,
            public_key=PUBLIC_KEY or None,
            timeout=TIMEOUT,
            user_agent=USER_AGENT,
            log_path=LOG_PATH,
            log_level=LOG_LEVEL,
        )
