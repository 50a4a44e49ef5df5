"""json_value.py

Generic JSON tree plus **strict accessors**.

Responses from the exchange are untrusted and loosely typed (prices arrive
as strings, timestamps as numbers or ISO text). The body is parsed once into
plain Python values:

* ``None`` / ``bool`` / ``str`` / ``list`` / ``dict`` as usual,
* integers as ``int`` (arbitrary precision),
* fractional numbers as ``decimal.Decimal`` so nothing is rounded before a
  caller decides whether it wants an ``int`` or a ``float``.

Each ``expect_*`` accessor either returns a typed value or raises one of
:class:`MissingValue`, :class:`TypeMismatch` or :class:`TimeFormatError`.
No other exception escapes them, whatever the input.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import DecodeError, MissingValue, TimeFormatError, TypeMismatch

logger = logging.getLogger(__name__)

# Layout check first: strptime alone would take unpadded fields like "2017-8-1".
_TIME_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:?\d{2})",
    re.ASCII,
)

# Tried in order on the normalized text. ``%z`` matches both the ``-0700``
# and the ``-07:00`` offset.
TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)

# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

def decode_json(body: bytes | str) -> Any:
    """Parse a response *body* into the generic value tree."""
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        value = json.loads(body, parse_float=Decimal, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise DecodeError("$", f"invalid JSON: {exc}") from exc
    logger.debug("decoded JSON: %r", value)
    return value


def _reject_constant(name: str):
    # NaN / Infinity are not JSON; json.loads would accept them otherwise
    raise ValueError(f"unexpected constant {name}")


def kind_of(value: Any) -> str:
    """Return the JSON kind name of a generic *value*."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "dict"
    return type(value).__name__


def _mismatch(expected: str, value: Any, path: str) -> TypeMismatch:
    return TypeMismatch(path, f"expected {expected} but {value!r} ({kind_of(value)}) found")


def _missing(expected: str, path: str) -> MissingValue:
    return MissingValue(path, f"expected {expected} but NIL found")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)

# -----------------------------------------------------------------------------
# Scalar accessors
# -----------------------------------------------------------------------------

def expect_string(value: Any, path: str = "$") -> str:
    if value is None:
        raise _missing("string", path)
    if isinstance(value, str):
        return value
    raise _mismatch("string", value, path)


def expect_bool(value: Any, path: str = "$") -> bool:
    if value is None:
        raise _missing("bool", path)
    if isinstance(value, bool):
        return value
    raise _mismatch("bool", value, path)


def expect_int(value: Any, path: str = "$") -> int:
    """Integral JSON number → ``int``; ``12.0`` and ``"12"`` are rejected."""
    if value is None:
        raise _missing("int", path)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise _mismatch("int", value, path)


def expect_float(value: Any, path: str = "$") -> float:
    """JSON number or numeric string → ``float``."""
    if value is None:
        raise _missing("float", path)
    if _is_number(value):
        number = value
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            raise _mismatch("float", value, path) from None
    else:
        raise _mismatch("float", value, path)
    try:
        result = float(number)
    except (OverflowError, ValueError):
        # huge integers overflow; Decimal("sNaN") refuses conversion
        result = math.nan
    # "NaN" and "1e999" parse as Decimal but are no usable amount
    if not math.isfinite(result):
        raise _mismatch("finite float", value, path)
    return result


def expect_float_or_default(value: Any, default: float, path: str = "$") -> float:
    """Like :func:`expect_float` but ``None`` yields *default*."""
    if value is None:
        return default
    return expect_float(value, path)

# -----------------------------------------------------------------------------
# Container accessors
# -----------------------------------------------------------------------------

def expect_list(value: Any, path: str = "$") -> list:
    if value is None:
        raise _missing("list", path)
    if isinstance(value, list):
        return value
    raise _mismatch("list", value, path)


def expect_map(value: Any, path: str = "$") -> dict:
    if value is None:
        raise _missing("dict", path)
    if isinstance(value, dict):
        return value
    raise _mismatch("dict", value, path)

# -----------------------------------------------------------------------------
# Time accessors
# -----------------------------------------------------------------------------

def expect_timestamp(value: Any, path: str = "$") -> datetime:
    """Epoch seconds (integral number) → timezone-aware UTC ``datetime``."""
    seconds = expect_int(value, path)
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise TypeMismatch(path, f"timestamp {seconds} out of range") from None


def expect_time_text(value: Any, path: str = "$") -> datetime:
    """ISO-8601 text in one of :data:`TIME_FORMATS` → aware ``datetime``.

    Fractional seconds of any length are accepted and cut to microseconds;
    every other field must be zero-padded to its full width.
    """
    if value is None:
        raise _missing("time", path)
    if not isinstance(value, str):
        raise _mismatch("time", value, path)
    match = _TIME_RE.fullmatch(value)
    if match is None:
        raise TimeFormatError(path, f"can't parse time: {value}")
    stamp, fraction, zone = match.groups()
    normalized = f"{stamp}.{(fraction or '')[:6].ljust(6, '0')}{zone}"
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(normalized, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise TimeFormatError(path, f"can't parse time: {value}")
