"""
Feie Print
==========

Client for the Feieyun (飞鹅云) cloud receipt and label printer API.

Supports:
- Printer registration, editing and removal
- Receipt (Open_printMsg) and label (Open_printLabelMsg) print jobs
- Order and printer status queries
- Verification of asynchronous print-result callbacks

Usage:
    from feie_print import FeieClient, PrintMsgRequest

    client = FeieClient(user='you@example.com', ukey='your-ukey')
    order_id = client.print_msg(PrintMsgRequest(sn='916500001', content='Hello')).data
"""

__version__ = '1.0.0'

from .config import ClientConfig
from .client import FeieClient
from .exceptions import (
    FeieError,
    ConfigurationError,
    TransportError,
    EmptyResponseError,
    DecodeError,
    PublicKeyError,
    ApiError,
)
from .models import (
    PrinterEntry,
    PrinterAddRequest,
    PrinterDelRequest,
    PrintMsgRequest,
    PrintLabelMsgRequest,
    PrinterEditRequest,
    DelPrinterSqsRequest,
    QueryOrderStateRequest,
    QueryOrderInfoByDateRequest,
    QueryPrinterStatusRequest,
    FeieResponse,
    PrinterListResult,
    OrderInfo,
    CallbackNotification,
    VerificationResult,
)
from .verifier import CallbackVerifier

__all__ = [
    'ClientConfig',
    'FeieClient',
    'CallbackVerifier',
    'FeieError',
    'ConfigurationError',
    'TransportError',
    'EmptyResponseError',
    'DecodeError',
    'PublicKeyError',
    'ApiError',
    'PrinterEntry',
    'PrinterAddRequest',
    'PrinterDelRequest',
    'PrintMsgRequest',
    'PrintLabelMsgRequest',
    'PrinterEditRequest',
    'DelPrinterSqsRequest',
    'QueryOrderStateRequest',
    'QueryOrderInfoByDateRequest',
    'QueryPrinterStatusRequest',
    'FeieResponse',
    'PrinterListResult',
    'OrderInfo',
    'CallbackNotification',
    'VerificationResult',
]
