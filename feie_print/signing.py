"""
Request Signing
===============

Every Feieyun call carries three universal fields:

- user:  account identifier
- stime: current UNIX time in seconds, as a decimal string
- sig:   sha1(user + ukey + stime), 40 lowercase hex chars

The UKEY itself is never sent.
"""

import hashlib
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from .constants import APINAME_FIELD, USER_FIELD, STIME_FIELD, SIG_FIELD


@dataclass(frozen=True)
class ClientCredentials:
    """Account identifier and shared secret (UKEY)."""

    user: str
    ukey: str

    def is_complete(self) -> bool:
        return bool(self.user.strip()) and bool(self.ukey.strip())

    def __repr__(self) -> str:
        return f"ClientCredentials(user={self.user!r}, ukey='***')"


def current_stime() -> str:
    """Current UNIX time in seconds, base-10."""
    return str(int(time.time()))


def sha1_sign(user: str, ukey: str, stime: str) -> str:
    """Signature over user + ukey + stime, no separator."""
    return hashlib.sha1((user + ukey + stime).encode('utf-8')).hexdigest()


@dataclass
class SignedEnvelope:
    """A single outbound call, signed. Built fresh per call, never reused."""

    user: str
    stime: str
    sig: str
    apiname: str
    fields: Dict[str, str] = field(default_factory=dict)

    def to_form(self) -> Dict[str, str]:
        """Flat form body; universal fields overwrite operation fields."""
        form = dict(self.fields)
        form[APINAME_FIELD] = self.apiname
        form[USER_FIELD] = self.user
        form[STIME_FIELD] = self.stime
        form[SIG_FIELD] = self.sig
        return form


def build_envelope(apiname: str, fields: Dict[str, str],
                   credentials: ClientCredentials,
                   stime: Optional[str] = None) -> SignedEnvelope:
    """
    Sign one operation.

    Args:
        apiname: Operation name (constants.PRINT_MSG, ...)
        fields: Operation fields, already stringified
        credentials: Account to sign with
        stime: Fixed timestamp; defaults to now

    Returns:
        SignedEnvelope ready for ``to_form()``
    """
    if stime is None:
        stime = current_stime()
    return SignedEnvelope(
        user=credentials.user,
        stime=stime,
        sig=sha1_sign(credentials.user, credentials.ukey, stime),
        apiname=apiname,
        fields=dict(fields),
    )
