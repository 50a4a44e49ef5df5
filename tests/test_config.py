"""Settings / logging / client construction tests"""

import logging

import pytest

from kuna.config import configure_logging, settings
from kuna.services.api import KunaClient
from kuna.services.transport import Transport


@pytest.fixture
def fresh_settings(monkeypatch):
    for name in ("KUNA_API_URL", "KUNA_ACCESS_KEY", "KUNA_SECRET_KEY", "KUNA_MARKET",
                 "KUNA_CONNECT_TIMEOUT", "KUNA_READ_TIMEOUT", "KUNA_POOL_SIZE", "KUNA_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    settings.cache_clear()
    yield monkeypatch
    settings.cache_clear()


class TestSettings:

    def test_defaults(self, fresh_settings):
        cfg = settings()
        assert cfg["API_URL"] == "https://kuna.io"
        assert cfg["MARKET"] == "btcuah"
        assert cfg["CONNECT_TIMEOUT"] == 3.0
        assert cfg["READ_TIMEOUT"] == 4.0
        assert cfg["POOL_SIZE"] == 5
        assert cfg["DEBUG"] is False

    def test_environment_overrides(self, fresh_settings):
        fresh_settings.setenv("KUNA_ACCESS_KEY", "AK")
        fresh_settings.setenv("KUNA_READ_TIMEOUT", "10")
        fresh_settings.setenv("KUNA_DEBUG", "1")
        cfg = settings()
        assert cfg["ACCESS_KEY"] == "AK"
        assert cfg["READ_TIMEOUT"] == 10.0
        assert cfg["DEBUG"] is True

    def test_client_from_settings(self, fresh_settings):
        fresh_settings.setenv("KUNA_API_URL", "http://localhost:8000")
        fresh_settings.setenv("KUNA_ACCESS_KEY", "AK")
        fresh_settings.setenv("KUNA_SECRET_KEY", "SK")
        fresh_settings.setenv("KUNA_POOL_SIZE", "2")
        client = KunaClient.from_settings()
        assert client.base_url == "http://localhost:8000"
        assert client.access_key == "AK"
        assert isinstance(client.transport, Transport)
        assert client.transport.timeout == (3.0, 4.0)
        client.transport.close()


class TestLogging:

    def test_debug_flag_sets_level(self, fresh_settings):
        fresh_settings.setenv("KUNA_DEBUG", "yes")
        configure_logging()
        assert logging.getLogger("kuna").level == logging.DEBUG

    def test_explicit_level(self, fresh_settings):
        configure_logging(logging.ERROR)
        logger = logging.getLogger("kuna")
        assert logger.level == logging.ERROR
        assert len(logger.handlers) == 1
