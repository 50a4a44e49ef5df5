# config.py
import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env")


@lru_cache
def settings():
    return {
        "API_URL": os.getenv("KUNA_API_URL", "https://kuna.io"),
        "ACCESS_KEY": os.getenv("KUNA_ACCESS_KEY", ""),
        "SECRET_KEY": os.getenv("KUNA_SECRET_KEY", ""),
        "MARKET": os.getenv("KUNA_MARKET", "btcuah"),
        # Seconds; requests takes (connect, read)
        "CONNECT_TIMEOUT": float(os.getenv("KUNA_CONNECT_TIMEOUT", "3")),
        "READ_TIMEOUT": float(os.getenv("KUNA_READ_TIMEOUT", "4")),
        "POOL_SIZE": int(os.getenv("KUNA_POOL_SIZE", "5")),
        "DEBUG": os.getenv("KUNA_DEBUG", "") != "",
    }


def configure_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the ``kuna`` logger.

    Without an explicit *level* the logger runs at DEBUG when ``KUNA_DEBUG``
    is set and at WARNING otherwise.
    """
    if level is None:
        level = logging.DEBUG if settings()["DEBUG"] else logging.WARNING
    logger = logging.getLogger("kuna")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
