"""Package init: shares project-wide constants."""
from __future__ import annotations

APP_NAME = "kuna-client"
VERSION = "0.1.0"
