"""signer.py

URL signing for private Kuna.io endpoints.

The server recomputes the signature from the URL it receives, so the
canonical form below is a compatibility contract:

1. the call's own parameters plus ``access_key`` and ``tonce``,
2. sorted by key (byte order), joined as ``key=value`` with ``&``,
3. HMAC-SHA256 of ``"{METHOD}|{path}|{query}"`` keyed by the secret,
4. hex digest appended as the last parameter, ``signature``.

Values are placed in the query verbatim; callers only pass market names,
sides, ids and fixed-point numbers.
"""

from __future__ import annotations

import hashlib
import hmac
import threading
import time
from collections.abc import Iterable, Mapping

BASE_URL = "https://kuna.io"

Params = Mapping[str, str] | Iterable[tuple[str, str]]


def make_tonce(now: float | None = None) -> int:
    """Millisecond-scale nonce built from a whole-second clock reading."""
    if now is None:
        now = time.time()
    return int(now) * 1000


class NonceSource:
    """Hands out tonces that never repeat within one process.

    The server expects millisecond values but the clock is read at second
    resolution, so two requests in the same second would share a tonce. In
    that case the previous value is bumped by one.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            tonce = max(make_tonce(self._clock()), self._last + 1)
            self._last = tonce
            return tonce


def canonical_query(params: Params) -> str:
    """Return ``k1=v1&k2=v2…`` sorted by key, byte-wise ascending."""
    pairs = params.items() if isinstance(params, Mapping) else params
    ordered = sorted(pairs, key=lambda kv: kv[0].encode("utf-8"))
    return "&".join(f"{k}={v}" for k, v in ordered)


def signature(secret_key: str, method: str, path: str, query: str) -> str:
    """Lower-case hex HMAC-SHA256 of ``METHOD|path|query``."""
    message = f"{method}|{path}|{query}"
    return hmac.new(
        secret_key.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign(
    method: str,
    path: str,
    access_key: str,
    secret_key: str,
    params: Params | None = None,
    *,
    tonce: int | None = None,
    base_url: str = BASE_URL,
) -> str:
    """Build the full signed URL for a private request.

    Parameters
    ----------
    method : str
        ``"GET"`` or ``"POST"``; part of the signed message.
    path : str
        Endpoint path such as ``/api/v2/orders``.
    params : mapping or iterable of pairs, optional
        Request parameters; keys must not repeat ``access_key``/``tonce``.
    tonce : int, optional
        Nonce to embed. Defaults to :func:`make_tonce` of the current time;
        pass it explicitly for reproducible URLs.
    """
    if params is None:
        pairs: list[tuple[str, str]] = []
    elif isinstance(params, Mapping):
        pairs = list(params.items())
    else:
        pairs = list(params)
    if tonce is None:
        tonce = make_tonce()
    pairs += [("access_key", access_key), ("tonce", str(tonce))]

    query = canonical_query(pairs)
    digest = signature(secret_key, method, path, query)
    return f"{base_url}{path}?{query}&signature={digest}"
