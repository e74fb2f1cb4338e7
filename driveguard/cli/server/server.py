"""Provides an HTTP server based transport for the test sensor emulator."""

import asyncio
import logging
import threading
from collections.abc import Callable

from aiohttp import web

_LOGGER = logging.getLogger(__name__)

SENSOR_PATH = "/sensor"


class Server:
    """
    Serves the emulated sensor over HTTP from a background thread.

    The aiohttp application runs on its own event loop so that it can be
    used from synchronous code and tests.
    """

    _handle_request: Callable[[], tuple[int, str]]
    _thread: threading.Thread | None
    _loop: asyncio.AbstractEventLoop | None
    _stop_event: asyncio.Event | None
    _started: threading.Event
    _start_error: BaseException | None
    port: int | None

    STARTUP_TIMEOUT = 5.0

    def __init__(self, handle_request: Callable[[], tuple[int, str]]) -> None:
        """Create a server which answers requests using ``handle_request``."""
        self._handle_request = handle_request
        self._thread = None
        self._loop = None
        self._stop_event = None
        self._started = threading.Event()
        self._start_error = None
        self.port = None

    def start(self, host: str, port: int) -> None:
        """
        Start serving on the specified host+port.

        Blocks until the server is accepting connections. Port 0 picks a free
        port, which is then available as :py:attr:`port`.
        """
        self._started.clear()
        self._start_error = None
        self._thread = threading.Thread(
            target=self._run, args=(host, port), name="Sensor HTTP server"
        )
        self._thread.start()
        if not self._started.wait(Server.STARTUP_TIMEOUT):
            msg = "Sensor server did not start in time"
            raise RuntimeError(msg)
        if self._start_error is not None:
            self._thread.join()
            raise self._start_error

    def stop(self) -> None:
        """Stop serving and wait for the server thread to end."""
        _LOGGER.debug("Stopping Server")
        if self._loop is not None and self._stop_event is not None:
            self._loop.call_soon_threadsafe(self._stop_event.set)
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self, host: str, port: int) -> None:
        self._loop = asyncio.new_event_loop()
        try:
            self._loop.run_until_complete(self._serve(host, port))
        finally:
            self._loop.close()
            self._loop = None
        _LOGGER.info("Server loop ended")

    async def _serve(self, host: str, port: int) -> None:
        self._stop_event = asyncio.Event()
        app = web.Application()
        app.router.add_get(SENSOR_PATH, self._handle)
        runner = web.AppRunner(app)
        await runner.setup()
        try:
            site = web.TCPSite(runner, host, port)
            await site.start()
        except OSError as e:
            self._start_error = e
            self._started.set()
            await runner.cleanup()
            return

        self.port = runner.addresses[0][1]
        _LOGGER.info("Server listening on http://%s:%s%s", host, self.port, SENSOR_PATH)
        self._started.set()
        await self._stop_event.wait()
        await runner.cleanup()

    async def _handle(self, request: web.Request) -> web.Response:
        status, body = self._handle_request()
        _LOGGER.debug("%s %s -> %s %s", request.method, request.path, status, body)
        return web.Response(status=status, text=body, content_type="application/json")
