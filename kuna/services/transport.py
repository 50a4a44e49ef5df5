"""transport.py

Blocking HTTP layer shared by every API call.

One :class:`Transport` owns a ``requests.Session`` whose adapter keeps a
small pool of idle connections. It is built once at start-up and handed to
:class:`~kuna.services.api.KunaClient`; nothing else talks to the network.

* GET and POST only; POST carries no body (parameters live in the signed
  query string).
* Every request is bounded by a ``(connect, read)`` timeout.
* Nothing is retried: network failures surface as :class:`TransportError`,
  non-2xx answers as :class:`HTTPStatusError` / :class:`ServerError`.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from kuna import APP_NAME, VERSION
from kuna.config import settings

from .decoders import decode_error_payload
from .errors import HTTPStatusError, ServerError, TransportError
from .json_value import decode_json

logger = logging.getLogger(__name__)

_SIGNATURE_RE = re.compile(r"signature=[0-9a-f]+")


def _redact(url: str) -> str:
    return _SIGNATURE_RE.sub("signature=***", url)


class Transport:
    """Session wrapper with fixed timeouts and a bounded connection pool."""

    def __init__(
        self,
        timeout: tuple[float, float] = (3.0, 4.0),
        pool_size: int = 5,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = f"{APP_NAME}/{VERSION}"
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size, max_retries=0)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    @classmethod
    def from_settings(cls) -> "Transport":
        cfg = settings()
        return cls(
            timeout=(cfg["CONNECT_TIMEOUT"], cfg["READ_TIMEOUT"]),
            pool_size=cfg["POOL_SIZE"],
        )

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def get(self, url: str) -> Any:
        """Perform a **GET** and return the decoded JSON body."""
        return self._request("GET", url)

    def post(self, url: str) -> Any:
        """Perform a body-less **POST** and return the decoded JSON body."""
        return self._request("POST", url)

    def _request(self, method: str, url: str) -> Any:
        logger.debug("%s %s", method, _redact(url))
        try:
            resp = self.session.request(method, url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {_redact(url)}: {exc}") from exc
        with resp:
            return self._read(resp)

    @staticmethod
    def _read(resp: requests.Response) -> Any:
        """Check the status class, then decode the body."""
        if resp.status_code // 100 != 2:
            status_line = f"{resp.status_code} {resp.reason or ''}".rstrip()
            logger.warning("HTTP %s for %s", status_line, _redact(resp.url or ""))
            payload = decode_error_payload(resp.content)
            if payload is not None:
                raise ServerError(status_line, *payload)
            raise HTTPStatusError(status_line)
        return decode_json(resp.content)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
