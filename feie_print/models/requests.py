"""
Request Models
==============

One record per Feieyun operation. ``to_form()`` returns the operation's own
fields (everything except user/stime/sig, which the client adds when it
signs). Optional fields that are absent, blank or at their server default
are left out of the form entirely: the gateway treats key presence as
significant.
"""

import datetime
import time
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

from .. import constants as c
from ..config import MAX_COPIES, MAX_PRINTERS_PER_CALL

Form = Dict[str, str]


def _base_form(apiname: str, debug: bool) -> Form:
    form = {c.APINAME_FIELD: apiname}
    if debug:
        form[c.DEBUG_FIELD] = '1'
    return form


def _add_print_options(form: Form, expired: Optional[int], times: Optional[int],
                       backurl: Optional[str], now: Optional[int]) -> None:
    """Conditional fields shared by receipt and label jobs."""
    if now is None:
        now = int(time.time())
    if expired is not None and expired > now:
        form[c.EXPIRED_FIELD] = str(expired)
    if times is not None and times > MAX_COPIES:
        raise ValueError(f'At most {MAX_COPIES} copies per job, got {times}')
    if times is not None and times > 1:
        form[c.TIMES_FIELD] = str(times)
    if backurl is not None and backurl.strip():
        form[c.BACKURL_FIELD] = backurl


@dataclass
class PrinterEntry:
    """One line of an Open_printerAddlist batch."""

    sn: str
    key: str
    remark: str = ""
    phone_num: str = ""

    def to_line(self) -> str:
        parts = [self.sn, self.key]
        if self.remark or self.phone_num:
            parts.append(self.remark)
        if self.phone_num:
            parts.append(self.phone_num)
        return '#'.join(parts)


@dataclass
class PrinterAddRequest:
    """
    Register printers in bulk.

    ``printers`` is either PrinterEntry records or a ready-made content
    block: ``sn#key#remark#phone`` lines separated by ``\\n``, at most 100.
    """

    printers: Union[str, Sequence[PrinterEntry]]
    user: Optional[str] = None
    debug: bool = False

    @property
    def printer_content(self) -> str:
        if isinstance(self.printers, str):
            return self.printers
        return '\n'.join(p.to_line() for p in self.printers)

    def to_form(self, now: Optional[int] = None) -> Form:
        content = self.printer_content
        lines = [line for line in content.split('\n') if line.strip()]
        if not lines:
            raise ValueError('At least one printer is required')
        if len(lines) > MAX_PRINTERS_PER_CALL:
            raise ValueError(f'At most {MAX_PRINTERS_PER_CALL} printers per call, got {len(lines)}')
        form = _base_form(c.PRINTER_ADD_LIST, self.debug)
        form[c.PRINTER_CONTENT_FIELD] = content
        return form


@dataclass
class PrinterDelRequest:
    """Delete printers; serial numbers are joined with '-'."""

    sn_list: Union[str, Sequence[str]]
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        if isinstance(self.sn_list, str):
            snlist = self.sn_list
        else:
            snlist = '-'.join(self.sn_list)
        if not snlist:
            raise ValueError('At least one printer SN is required')
        form = _base_form(c.PRINTER_DEL_LIST, self.debug)
        form[c.SNLIST_FIELD] = snlist
        return form


@dataclass
class PrintMsgRequest:
    """
    Receipt print job (receipt printers only).

    Attributes:
        sn: Printer serial number
        content: Receipt markup
        expired: UNIX seconds after which the job is dropped; sent only if in the future
        times: Copies; sent only when > 1 (server default is 1)
        backurl: Callback URL for the asynchronous result; sent only if non-blank
    """

    sn: str
    content: str
    expired: Optional[int] = None
    times: Optional[int] = None
    backurl: Optional[str] = None
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.PRINT_MSG, self.debug)
        form[c.SN_FIELD] = self.sn
        form[c.CONTENT_FIELD] = self.content
        _add_print_options(form, self.expired, self.times, self.backurl, now)
        return form


@dataclass
class PrintLabelMsgRequest:
    """Label print job (label printers only). ``img`` is base64 image data."""

    sn: str
    content: str
    expired: Optional[int] = None
    times: Optional[int] = None
    backurl: Optional[str] = None
    img: Optional[str] = None
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.PRINT_LABEL_MSG, self.debug)
        form[c.SN_FIELD] = self.sn
        form[c.CONTENT_FIELD] = self.content
        _add_print_options(form, self.expired, self.times, self.backurl, now)
        if self.img:
            form[c.IMG_FIELD] = self.img
        return form


@dataclass
class PrinterEditRequest:
    """Rename a printer and optionally set its SIM card number."""

    sn: str
    name: str
    phone_num: Optional[str] = None
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.PRINTER_EDIT, self.debug)
        form[c.SN_FIELD] = self.sn
        form[c.NAME_FIELD] = self.name
        if self.phone_num is not None and self.phone_num.strip():
            form[c.PHONENUM_FIELD] = self.phone_num.strip()
        return form


@dataclass
class DelPrinterSqsRequest:
    """Clear a printer's pending queue."""

    sn: str
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.DEL_PRINTER_SQS, self.debug)
        form[c.SN_FIELD] = self.sn
        return form


@dataclass
class QueryOrderStateRequest:
    """Has an order (id from Open_printMsg) been printed?"""

    order_id: str
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.QUERY_ORDER_STATE, self.debug)
        form[c.ORDERID_FIELD] = self.order_id
        return form


@dataclass
class QueryOrderInfoByDateRequest:
    """Printed/waiting counts for one printer on one day (YYYY-MM-DD)."""

    sn: str
    date: Union[str, datetime.date]
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.QUERY_ORDER_INFO_BY_DATE, self.debug)
        form[c.SN_FIELD] = self.sn
        if isinstance(self.date, datetime.date):
            form[c.DATE_FIELD] = self.date.strftime('%Y-%m-%d')
        else:
            form[c.DATE_FIELD] = self.date
        return form


@dataclass
class QueryPrinterStatusRequest:
    """Online/offline and health of one printer."""

    sn: str
    user: Optional[str] = None
    debug: bool = False

    def to_form(self, now: Optional[int] = None) -> Form:
        form = _base_form(c.QUERY_PRINTER_STATUS, self.debug)
        form[c.SN_FIELD] = self.sn
        return form
