"""
Response Models
===============

Every operation answers with the same envelope:

    {"ret": 0, "msg": "ok", "data": ..., "serverExecutedTime": 6}

``ret`` is 0 on success; ``data`` depends on the operation and is null on
error.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ..constants import PRINTER_STATUS_OFFLINE, PRINTER_STATUS_ONLINE_OK
from ..exceptions import ApiError, DecodeError

T = TypeVar('T')


@dataclass
class PrinterListResult:
    """Per-printer outcome of a bulk add/delete."""

    ok: List[str] = field(default_factory=list)
    no: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrinterListResult':
        return cls(
            ok=[s for s in (data.get('ok') or []) if s is not None],
            no=[s for s in (data.get('no') or []) if s is not None],
        )


@dataclass
class OrderInfo:
    """Open_queryOrderInfoByDate counts."""

    print_count: int = 0
    waiting: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderInfo':
        return cls(print_count=int(data.get('print', 0)), waiting=int(data.get('waiting', 0)))


@dataclass
class FeieResponse(Generic[T]):
    """Decoded response envelope."""

    ret: int
    msg: str
    data: Optional[T] = None
    server_executed_time: int = 0
    apiname: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.ret == 0

    def raise_for_ret(self) -> 'FeieResponse[T]':
        """Raise ApiError if the gateway reported a failure."""
        if not self.ok:
            raise ApiError(self.ret, self.msg, self.apiname)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Any, data_parser: Optional[Callable[[Any], T]] = None,
                  apiname: Optional[str] = None) -> 'FeieResponse[T]':
        """
        Build from a parsed JSON document.

        Args:
            payload: Result of json.loads on the body
            data_parser: Converts a non-null ``data`` value into its typed shape
            apiname: Operation, kept for error messages

        Raises:
            DecodeError: Payload is not an envelope, or data has the wrong shape
        """
        if not isinstance(payload, dict) or 'ret' not in payload:
            raise DecodeError(f'Unexpected response envelope: {payload!r:.200}')
        try:
            data = payload.get('data')
            if data is not None and data_parser is not None:
                data = data_parser(data)
            return cls(
                ret=int(payload['ret']),
                msg=str(payload.get('msg', '')),
                data=data,
                server_executed_time=int(payload.get('serverExecutedTime') or 0),
                apiname=apiname,
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f'Malformed {apiname or "response"} payload: {e}') from e


def parse_printer_list(data: Any) -> PrinterListResult:
    return PrinterListResult.from_dict(data)


def parse_order_info(data: Any) -> OrderInfo:
    return OrderInfo.from_dict(data)


def parse_order_id(data: Any) -> str:
    if not isinstance(data, str):
        raise TypeError(f'order id must be a string, got {type(data).__name__}')
    return data


def parse_bool(data: Any) -> bool:
    if not isinstance(data, bool):
        raise TypeError(f'expected a boolean, got {type(data).__name__}')
    return data


def parse_printer_status(data: Any) -> str:
    if not isinstance(data, str):
        raise TypeError(f'printer status must be a string, got {type(data).__name__}')
    return data


def is_printer_online(status: str) -> bool:
    """True for both online states returned by Open_queryPrinterStatus."""
    return bool(status) and not status.startswith(PRINTER_STATUS_OFFLINE.rstrip('。'))


def is_printer_healthy(status: str) -> bool:
    return status.startswith(PRINTER_STATUS_ONLINE_OK.rstrip('。'))
