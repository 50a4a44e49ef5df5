"""Transport tests
Covers: status-class handling, structured vs generic errors, network
failures, timeouts and body-less POST.
"""

from unittest.mock import MagicMock

import pytest
import requests

from kuna.services.errors import DecodeError, HTTPStatusError, ServerError, TransportError
from kuna.services.transport import Transport


class FakeResponse:
    def __init__(self, status_code=200, content=b"{}", reason="OK", url="https://kuna.io/x"):
        self.status_code = status_code
        self.content = content
        self.reason = reason
        self.url = url
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


def make_transport(response=None, error=None) -> tuple[Transport, MagicMock]:
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return Transport(timeout=(3.0, 4.0), session=session), session


class TestSuccess:

    def test_get_decodes_body(self):
        t, session = make_transport(FakeResponse(content=b'{"at": 1}'))
        assert t.get("https://kuna.io/api/v2/tickers/btcuah") == {"at": 1}
        session.request.assert_called_once_with(
            "GET", "https://kuna.io/api/v2/tickers/btcuah", timeout=(3.0, 4.0)
        )

    def test_post_has_no_body(self):
        t, session = make_transport(FakeResponse(status_code=201, content=b"[]"))
        assert t.post("https://kuna.io/api/v2/orders?x=1") == []
        args, kwargs = session.request.call_args
        assert args[0] == "POST"
        assert "data" not in kwargs and "json" not in kwargs

    def test_response_is_closed(self):
        resp = FakeResponse(content=b"1")
        t, _ = make_transport(resp)
        t.get("https://kuna.io/api/v2/timestamp")
        assert resp.closed

    def test_bad_json_on_success(self):
        t, _ = make_transport(FakeResponse(content=b"<html>"))
        with pytest.raises(DecodeError):
            t.get("https://kuna.io/api/v2/timestamp")


class TestErrors:

    def test_structured_error(self):
        body = b'{"error": {"code": 2002, "message": "Failed to create order"}}'
        t, _ = make_transport(FakeResponse(status_code=422, content=body, reason="Unprocessable Entity"))
        with pytest.raises(ServerError) as err:
            t.post("https://kuna.io/api/v2/orders")
        assert err.value.code == 2002
        assert err.value.message == "Failed to create order"
        assert err.value.status_line == "422 Unprocessable Entity"
        assert str(err.value) == "422 Unprocessable Entity; 2002: Failed to create order"

    def test_generic_status_error(self):
        t, _ = make_transport(FakeResponse(status_code=502, content=b"Bad Gateway", reason="Bad Gateway"))
        with pytest.raises(HTTPStatusError) as err:
            t.get("https://kuna.io/api/v2/timestamp")
        assert not isinstance(err.value, ServerError)
        assert err.value.status_line == "502 Bad Gateway"
        assert "502 Bad Gateway" in str(err.value)

    def test_redirect_class_is_not_success(self):
        t, _ = make_transport(FakeResponse(status_code=304, content=b"", reason="Not Modified"))
        with pytest.raises(HTTPStatusError):
            t.get("https://kuna.io/api/v2/timestamp")

    @pytest.mark.parametrize("error", [
        requests.ConnectTimeout("connect timed out"),
        requests.ReadTimeout("read timed out"),
        requests.ConnectionError("connection refused"),
    ])
    def test_network_failure(self, error):
        t, session = make_transport(error=error)
        with pytest.raises(TransportError):
            t.get("https://kuna.io/api/v2/timestamp")
        assert session.request.call_count == 1

    def test_signature_not_in_error_text(self):
        t, _ = make_transport(error=requests.ConnectionError("refused"))
        with pytest.raises(TransportError) as err:
            t.get("https://kuna.io/api/v2/orders?access_key=AK&signature=deadbeef")
        assert "deadbeef" not in str(err.value)


class TestLifecycle:

    def test_context_manager_closes_session(self):
        t, session = make_transport(FakeResponse())
        with t:
            pass
        session.close.assert_called_once()

    def test_user_agent(self):
        t, session = make_transport(FakeResponse())
        assert session.headers["User-Agent"].startswith("kuna-client/")

    def test_pool_adapter_mounted(self):
        t = Transport(pool_size=2)
        adapter = t.session.get_adapter("https://kuna.io")
        assert adapter._pool_maxsize == 2
        t.close()
