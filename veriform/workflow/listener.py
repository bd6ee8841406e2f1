"""Server-Sent Events listener delivering verified-data payloads.

The verifier service publishes ``SCANNED_DATA`` events carrying a flat JSON
object of field values and ``ERROR_DATA`` events describing failed scans.  The
listener keeps one connection open, hands every scanned payload to a handler
(normally a fill of the active page) and reconnects with exponential backoff
when the stream drops.  Once the backoff budget is spent it keeps probing the
connection at the keep-alive interval until the service is reachable again.
"""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)

SCANNED_DATA_EVENT = "SCANNED_DATA"
ERROR_DATA_EVENT = "ERROR_DATA"
DEFAULT_EVENT = "message"

ScannedDataHandler = Callable[[Dict[str, Any]], Awaitable[Any]]


class ListenerError(RuntimeError):
    """Raised when the event stream cannot be consumed."""


@dataclass(slots=True)
class ServerSentEvent:
    event: str = DEFAULT_EVENT
    data: str = ""
    id: Optional[str] = None
    retry: Optional[int] = None


class ServerSentEventDecoder:
    """Incremental decoder for the ``text/event-stream`` line format."""

    def __init__(self) -> None:
        self.last_event_id: Optional[str] = None
        self._reset()

    def _reset(self) -> None:
        self._event_type: Optional[str] = None
        self._data_lines: List[str] = []
        self._retry: Optional[int] = None

    def feed(self, line: str) -> Optional[ServerSentEvent]:
        """Consume one line; return an event when a blank line completes one."""

        line = line.rstrip("\r\n")

        if not line:
            if not self._data_lines:
                self._reset()
                return None
            event = ServerSentEvent(
                event=self._event_type or DEFAULT_EVENT,
                data="\n".join(self._data_lines),
                id=self.last_event_id,
                retry=self._retry,
            )
            self._reset()
            return event

        if line.startswith(":"):
            return None

        name, separator, value = line.partition(":")
        if separator and value.startswith(" "):
            value = value[1:]

        if name == "event":
            self._event_type = value
        elif name == "data":
            self._data_lines.append(value)
        elif name == "id":
            if "\0" not in value:
                self.last_event_id = value
        elif name == "retry":
            if value.isdigit():
                self._retry = int(value)
        return None


class ScannedDataListener:
    """Consumes the verifier event stream and forwards scanned payloads."""

    def __init__(
        self,
        url: str,
        handler: ScannedDataHandler,
        *,
        max_reconnect_attempts: int = 5,
        reconnect_delay: float = 1.0,
        keepalive_interval: float = 25.0,
        verify_ssl: bool = False,
    ) -> None:
        self._url = url
        self._handler = handler
        self._max_reconnect_attempts = max_reconnect_attempts
        self._reconnect_delay = reconnect_delay
        self._keepalive_interval = keepalive_interval
        self._verify_ssl = verify_ssl

        self._decoder = ServerSentEventDecoder()
        self._reconnect_attempts = 0
        self._stopping = asyncio.Event()
        self._response: Optional[aiohttp.ClientResponse] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def reconnect_attempts(self) -> int:
        return self._reconnect_attempts

    def stop(self) -> None:
        """Ask :meth:`run` to return; an open stream is closed immediately."""

        self._stopping.set()
        if self._response is not None:
            self._response.close()

    async def run(self) -> None:
        """Listen until :meth:`stop` is called."""

        timeout = aiohttp.ClientTimeout(total=None, sock_connect=10)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            while not self._stopping.is_set():
                try:
                    await self._consume(session)
                    if not self._stopping.is_set():
                        logger.warning("SSE connection closed by server")
                except (aiohttp.ClientError, asyncio.TimeoutError, ListenerError, ValueError) as exc:
                    if self._stopping.is_set():
                        break
                    logger.error(f"SSE Error: {exc}")
                finally:
                    self._response = None

                if self._stopping.is_set():
                    break
                await self._wait(self.next_reconnect_delay())

        logger.info("SSE listener stopped")

    def next_reconnect_delay(self) -> float:
        """Return how long to wait before the next connection attempt."""

        if self._reconnect_attempts < self._max_reconnect_attempts:
            self._reconnect_attempts += 1
            delay = self._reconnect_delay * 2 ** (self._reconnect_attempts - 1)
            logger.info(
                f"Attempting to reconnect ({self._reconnect_attempts}/{self._max_reconnect_attempts}) "
                f"in {delay * 1000:.0f}ms"
            )
            return delay

        logger.error("Max reconnection attempts reached")
        return self._keepalive_interval

    def handle_open(self) -> None:
        logger.info("SSE Connection opened", extra={"url": self._url})
        self._reconnect_attempts = 0

    async def dispatch(self, event: ServerSentEvent) -> None:
        if event.event == SCANNED_DATA_EVENT:
            await self._handle_scanned_data(event.data)
        elif event.event == ERROR_DATA_EVENT:
            logger.error(f"Received error data: {event.data}")
        else:
            self._handle_message(event)

    async def _consume(self, session: aiohttp.ClientSession) -> None:
        headers = {"Accept": "text/event-stream", "Cache-Control": "no-cache"}
        if self._decoder.last_event_id:
            headers["Last-Event-ID"] = self._decoder.last_event_id

        async with session.get(self._url, headers=headers, ssl=self._verify_ssl) as response:
            if response.status != 200:
                raise ListenerError(f"Unexpected SSE response status: {response.status}")
            self._response = response
            self.handle_open()

            async for raw_line in response.content:
                if self._stopping.is_set():
                    return
                event = self._decoder.feed(raw_line.decode("utf-8", errors="replace"))
                if event is not None:
                    await self.dispatch(event)

    async def _handle_scanned_data(self, data: str) -> None:
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            logger.error(f"Error handling scanned data: {exc}")
            return
        if not isinstance(payload, dict):
            logger.error(f"Error handling scanned data: expected an object, got {type(payload).__name__}")
            return

        try:
            await self._handler(payload)
        except Exception:
            logger.exception("Error handling scanned data")

    def _handle_message(self, event: ServerSentEvent) -> None:
        try:
            payload = json.loads(event.data)
        except json.JSONDecodeError as exc:
            logger.error(f"Error processing message: {exc}")
            return
        logger.info(f"Received message: {payload}", extra={"event": event.event})

    async def _wait(self, delay: float) -> None:
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass


__all__ = [
    "ERROR_DATA_EVENT",
    "SCANNED_DATA_EVENT",
    "ListenerError",
    "ScannedDataHandler",
    "ScannedDataListener",
    "ServerSentEvent",
    "ServerSentEventDecoder",
]
