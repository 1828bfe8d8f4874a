"""
Feie Callback Receiver
======================

Flask endpoint for Feieyun's asynchronous print results.

Feieyun POSTs ``orderId``, ``status``, ``stime`` and ``sign`` to the backurl
given with the print job and expects the literal body ``SUCCESS`` within
5 seconds; anything else is redelivered.

Run: python -m feie_print.app
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from flask import Flask, request, jsonify

from . import __version__
from .client import FeieClient
from .config import CALLBACK_HOST, CALLBACK_PORT, CALLBACK_PATH, DEBUG
from .constants import CALLBACK_ACK
from .exceptions import ConfigurationError
from .models.callback import CallbackNotification, VerificationResult

logger = logging.getLogger(__name__)

CALLBACK_NACK = 'FAIL'


def create_app(client: FeieClient,
               on_result: Optional[Callable[[VerificationResult], None]] = None,
               callback_path: str = CALLBACK_PATH) -> Flask:
    """
    Build the receiver app.

    Args:
        client: Client with a public key configured
        on_result: Called with each verified result, before SUCCESS is sent;
            keep it fast
        callback_path: URL path registered as backurl with Feieyun

    Raises:
        ConfigurationError: The client has no public key, so no callback
            could ever be verified
    """
    if not client.can_verify_callbacks:
        raise ConfigurationError('Callback receiver needs a Feieyun public key (FEIE_PUBLIC_KEY)')

    app = Flask(__name__)
    app.config['FEIE_CLIENT'] = client

    # =========================================================================
    # Callback
    # =========================================================================

    @app.route(callback_path, methods=['POST'])
    def feie_callback():
        """Verify a print result and acknowledge it."""
        try:
            notification = CallbackNotification.from_form(request.form)
        except ValueError as e:
            logger.warning("Rejected malformed callback: %s", e)
            return CALLBACK_NACK, 400, {'Content-Type': 'text/plain'}

        result = client.verify_callback(notification)
        if not result.verified:
            return CALLBACK_NACK, 400, {'Content-Type': 'text/plain'}

        if on_result is not None:
            on_result(result)

        logger.info("Order %s status=%s acknowledged", result.order_id, result.status)
        return CALLBACK_ACK, 200, {'Content-Type': 'text/plain'}

    # =========================================================================
    # Health
    # =========================================================================

    @app.route('/health', methods=['GET'])
    def health():
        """Health check."""
        return jsonify({
            'status': 'online',
            'version': __version__,
            'callback_path': callback_path,
            'timestamp': datetime.now().isoformat(),
        })

    return app


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the receiver with FEIE_* environment configuration."""
    client = FeieClient()
    app = create_app(client)

    print("=" * 60)
    print("  Feie Callback Receiver")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Listening: http://{CALLBACK_HOST}:{CALLBACK_PORT}{CALLBACK_PATH}")
    print(f"  Gateway: {client.config.gateway}")
    print("=" * 60)

    app.run(host=CALLBACK_HOST, port=CALLBACK_PORT, debug=DEBUG)


if __name__ == '__main__':
    main()
