"""
Feie Print Models
"""

from .requests import (
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
)
from .responses import FeieResponse, PrinterListResult, OrderInfo
from .callback import CallbackNotification, VerificationResult

__all__ = [
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
