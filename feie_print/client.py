"""
Feieyun Client
==============

Python SDK for the Feieyun cloud printer open API.

Usage:
    from feie_print import FeieClient, ClientConfig, PrintMsgRequest

    client = FeieClient(ClientConfig(user='you@example.com', ukey='your-ukey'))

    # Register a printer
    client.add_printers(PrinterAddRequest('916500001#abcdefgh#Front desk'))

    # Print a receipt
    resp = client.print_msg(PrintMsgRequest(sn='916500001', content='<CB>Hello</CB><BR>'))
    order_id = resp.raise_for_ret().data

    # Check it printed
    client.query_order_state(QueryOrderStateRequest(order_id)).data

Each call is one synchronous POST. Nothing is retried.
"""

import json
import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, Optional

import requests

from .config import ClientConfig
from .constants import APINAME_FIELD
from .exceptions import ConfigurationError, DecodeError, EmptyResponseError, TransportError
from .log import configure_logging, mask_form
from .signing import ClientCredentials, build_envelope
from .verifier import CallbackVerifier
from .models.callback import CallbackNotification, VerificationResult
from .models.requests import (
    PrinterAddRequest,
    PrinterDelRequest,
    PrintMsgRequest,
    PrintLabelMsgRequest,
    PrinterEditRequest,
    DelPrinterSqsRequest,
    QueryOrderStateRequest,
    QueryOrderInfoByDateRequest,
    QueryPrinterStatusRequest,
)
from .models.responses import (
    FeieResponse,
    OrderInfo,
    PrinterListResult,
    parse_bool,
    parse_order_id,
    parse_order_info,
    parse_printer_list,
    parse_printer_status,
)

logger = logging.getLogger(__name__)


class FeieClient:
    """Client for the Feieyun open API."""

    def __init__(self, config: Optional[ClientConfig] = None, **overrides):
        """
        Initialize client.

        Args:
            config: Client configuration; defaults to ClientConfig.from_env()
            **overrides: Replace individual config fields (user, ukey, gateway, ...)
        """
        if config is None:
            config = ClientConfig.from_env()
        if overrides:
            config = replace(config, **overrides)
        self.config = config

        configure_logging(config.log_level, config.log_path)

        self._lock = threading.Lock()
        self._credentials = ClientCredentials(config.user, config.ukey)

        # Fail at construction on a bad key, not when the first callback arrives
        self._verifier = CallbackVerifier(config.public_key) if config.public_key else None

    # =========================================================================
    # Credentials
    # =========================================================================

    @property
    def credentials(self) -> ClientCredentials:
        with self._lock:
            return self._credentials

    def set_user_key(self, ukey: str, user: Optional[str] = None):
        """Swap the UKEY (and optionally the account) for subsequent calls."""
        with self._lock:
            self._credentials = ClientCredentials(
                user if user is not None else self._credentials.user, ukey
            )

    def reset(self):
        """Restore the credentials given at construction, where non-blank."""
        with self._lock:
            user = self.config.user if self.config.user.strip() else self._credentials.user
            ukey = self.config.ukey if self.config.ukey.strip() else self._credentials.ukey
            self._credentials = ClientCredentials(user, ukey)

    # =========================================================================
    # Transport
    # =========================================================================

    def request(self, apiname: str, fields: Dict[str, str], user: Optional[str] = None) -> bytes:
        """
        Sign and send one operation.

        Args:
            apiname: Operation name (constants.PRINT_MSG, ...)
            fields: Operation fields, all values already strings
            user: Account override for this call only

        Returns:
            Raw response body

        Raises:
            ConfigurationError: user or ukey is blank
            TransportError: Connection failed or timed out
            EmptyResponseError: Gateway returned an empty body
        """
        credentials = self.credentials
        if user:
            credentials = ClientCredentials(user, credentials.ukey)
        if not credentials.is_complete():
            raise ConfigurationError('Feieyun user and ukey must both be set')

        form = build_envelope(apiname, fields, credentials).to_form()
        logger.debug("%s form: %s", apiname, mask_form(form))

        try:
            logger.debug("%s request start", apiname)
            response = requests.post(
                self.config.gateway,
                files={key: (None, value) for key, value in form.items()},
                headers={'User-Agent': self.config.user_agent},
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("%s timed out after %ss", apiname, self.config.timeout)
            raise TransportError(f'Request timeout after {self.config.timeout}s') from e
        except requests.exceptions.RequestException as e:
            logger.error("%s cannot connect to %s: %s", apiname, self.config.gateway, e)
            raise TransportError(f'Cannot connect to {self.config.gateway}: {e}') from e

        body = response.content
        logger.debug("%s request end: HTTP %s, %d bytes", apiname, response.status_code, len(body))
        if not body:
            raise EmptyResponseError(f'{apiname}: response is empty (HTTP {response.status_code})')
        return body

    def _call(self, req, data_parser: Callable[[Any], Any]) -> FeieResponse:
        form = req.to_form()
        apiname = form.pop(APINAME_FIELD)
        body = self.request(apiname, form, user=req.user)

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise DecodeError(f'{apiname}: response is not JSON: {e}', body) from e

        try:
            resp = FeieResponse.from_dict(payload, data_parser, apiname=apiname)
        except DecodeError as e:
            e.body = body
            raise
        if not resp.ok:
            logger.warning("%s returned ret=%s msg=%s", apiname, resp.ret, resp.msg)
        else:
            logger.debug("%s decoded: %s", apiname, resp)
        return resp

    # =========================================================================
    # Printers
    # =========================================================================

    def add_printers(self, req: PrinterAddRequest) -> FeieResponse[PrinterListResult]:
        """
        Register up to 100 printers.

        Returns:
            data.ok / data.no list the accepted and rejected lines
        """
        return self._call(req, parse_printer_list)

    def delete_printers(self, req: PrinterDelRequest) -> FeieResponse[PrinterListResult]:
        """Delete printers from the account."""
        return self._call(req, parse_printer_list)

    def edit_printer(self, req: PrinterEditRequest) -> FeieResponse[bool]:
        """Change a printer's name and SIM card number."""
        return self._call(req, parse_bool)

    def clear_printer_queue(self, req: DelPrinterSqsRequest) -> FeieResponse[bool]:
        """Drop every job still waiting for this printer."""
        return self._call(req, parse_bool)

    def query_printer_status(self, req: QueryPrinterStatusRequest) -> FeieResponse[str]:
        """
        Get printer state.

        Returns:
            data is one of constants.PRINTER_STATUSES
        """
        return self._call(req, parse_printer_status)

    # =========================================================================
    # Printing
    # =========================================================================

    def print_msg(self, req: PrintMsgRequest) -> FeieResponse[str]:
        """Submit a receipt job; data is the order id."""
        return self._call(req, parse_order_id)

    def print_label_msg(self, req: PrintLabelMsgRequest) -> FeieResponse[str]:
        """Submit a label job; data is the order id."""
        return self._call(req, parse_order_id)

    # =========================================================================
    # Orders
    # =========================================================================

    def query_order_state(self, req: QueryOrderStateRequest) -> FeieResponse[bool]:
        """data is True once the order has printed."""
        return self._call(req, parse_bool)

    def query_order_info_by_date(self, req: QueryOrderInfoByDateRequest) -> FeieResponse[OrderInfo]:
        """Printed and waiting counts for one printer on one day."""
        return self._call(req, parse_order_info)

    # =========================================================================
    # Callbacks
    # =========================================================================

    @property
    def can_verify_callbacks(self) -> bool:
        """True when a vendor public key was configured."""
        return self._verifier is not None

    def verify_callback(self, notification: CallbackNotification) -> VerificationResult:
        """
        Verify an asynchronous print result.

        Raises:
            ConfigurationError: No public key was configured
        """
        if self._verifier is None:
            raise ConfigurationError('A Feieyun public key is required to verify callbacks')
        return self._verifier.verify(notification)
