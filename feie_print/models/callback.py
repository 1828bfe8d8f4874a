"""
Callback Models
===============

Asynchronous print results pushed by Feieyun to the integrator's backurl.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

from ..constants import CALLBACK_ORDER_ID, CALLBACK_STATUS, CALLBACK_STIME, CALLBACK_SIGN

# Callback status codes
STATUS_PRINTED = 1


def _decimal(name: str, value: Any) -> int:
    """Plain ASCII digits only."""
    text = str(value)
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f'Callback field {name} is not a decimal integer: {text!r}')
    return int(text)


@dataclass(frozen=True)
class CallbackNotification:
    """One received callback, exactly as delivered."""

    order_id: str
    status: int
    stime: int
    sign: str

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> 'CallbackNotification':
        """
        Parse the vendor's POST fields.

        Raises:
            ValueError: A field is missing or status/stime is not an integer
        """
        missing = [k for k in (CALLBACK_ORDER_ID, CALLBACK_STATUS, CALLBACK_STIME, CALLBACK_SIGN)
                   if k not in form]
        if missing:
            raise ValueError(f'Callback missing fields: {", ".join(missing)}')
        return cls(
            order_id=str(form[CALLBACK_ORDER_ID]),
            status=_decimal(CALLBACK_STATUS, form[CALLBACK_STATUS]),
            stime=_decimal(CALLBACK_STIME, form[CALLBACK_STIME]),
            sign=str(form[CALLBACK_SIGN]),
        )

    def canonical_string(self) -> str:
        """Signed string: fields in ascending ASCII order of their names."""
        return (f'{CALLBACK_ORDER_ID}={self.order_id}'
                f'&{CALLBACK_STATUS}={self.status}'
                f'&{CALLBACK_STIME}={self.stime}')


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying one CallbackNotification."""

    order_id: str
    status: int
    stime: int
    verified: bool

    @property
    def printed(self) -> bool:
        return self.verified and self.status == STATUS_PRINTED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
