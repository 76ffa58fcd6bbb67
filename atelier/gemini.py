"""Process-wide Gemini client, created on first use."""

import logging
import threading

from google import genai

from atelier import config
from atelier.errors import ConfigurationError

logger = logging.getLogger(__name__)

_client: genai.Client | None = None
_lock = threading.Lock()


def get_client() -> genai.Client:
    """Return the shared client, building it once. Raises ConfigurationError."""
    global _client
    if _client is not None:
        return _client

    with _lock:
        if _client is None:
            if not config.GEMINI_API_KEY:
                logger.error("GEMINI_API_KEY is not set")
                raise ConfigurationError()
            try:
                _client = genai.Client(api_key=config.GEMINI_API_KEY)
            except Exception as e:
                logger.error("Failed to initialize Gemini client: %s", e)
                raise ConfigurationError() from e
    return _client


def set_client(client) -> None:
    """Install a pre-built client (tests, explicit wiring at startup)."""
    global _client
    with _lock:
        _client = client


def reset_client() -> None:
    set_client(None)
