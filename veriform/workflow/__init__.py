"""Runtime configuration and the scanned-data event listener."""

from .config import DEFAULT_SSE_URL, Settings, get_settings
from .listener import (
    ERROR_DATA_EVENT,
    SCANNED_DATA_EVENT,
    ListenerError,
    ScannedDataListener,
    ServerSentEvent,
    ServerSentEventDecoder,
)

__all__ = [
    "DEFAULT_SSE_URL",
    "Settings",
    "get_settings",
    "ERROR_DATA_EVENT",
    "SCANNED_DATA_EVENT",
    "ListenerError",
    "ScannedDataListener",
    "ServerSentEvent",
    "ServerSentEventDecoder",
]
