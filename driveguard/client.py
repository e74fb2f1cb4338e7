"""Provides the user API for monitoring a distance sensor."""

import asyncio
import contextlib
import logging
from collections.abc import Callable

from .actuator import Actuator
from .alert import AlertDispatcher
from .config import Config
from .detector import TransitionDetector
from .errors import ConnectivityError
from .event import TransitionEvent
from .sensor import HTTPSensorClient, PollResult, SensorClient
from .zone import (
    STATUS_TEXT,
    WAITING_STATUS_TEXT,
    ProximityLevel,
    Zone,
    classify,
    proximity_level,
)

_LOGGER = logging.getLogger(__name__)


class Client:
    """
    Polls a distance sensor and raises alerts when the proximity zone changes.

    Each tick performs one sensor request, classifies the result, and
    dispatches alerts only if the zone differs from the previous tick. Ticks
    never overlap, and a failed request is just a DISCONNECTED reading.
    """

    config: Config
    dispatcher: AlertDispatcher
    current_zone: Zone | None
    current_distance: int | None
    tick_count: int
    failure_count: int
    transition_count: int
    _sensor: SensorClient
    _detector: TransitionDetector
    _closed: bool
    _close_event: asyncio.Event
    _poll_task: asyncio.Task[PollResult] | None
    _on_zone_change: Callable[[TransitionEvent], None] | None
    _on_reading: Callable[[PollResult], None] | None

    def __init__(
        self,
        *,
        config: Config | None = None,
        endpoint: str | None = None,
        sensor: SensorClient | None = None,
        actuator: Actuator | None = None,
        dispatcher: AlertDispatcher | None = None,
    ) -> None:
        """
        Create a Client.

        :param config: Settings for the loop. Defaults to :py:class:`Config`
            with ``endpoint`` applied if given.
        :param endpoint: Sensor URL, shorthand for ``Config(endpoint=...)``
        :param sensor: Sensor client to poll. Defaults to an
            :py:class:`HTTPSensorClient` for the configured endpoint.
        :param actuator: Receives alert effects
        :param dispatcher: Dispatcher to use instead of one built around
            ``actuator``
        :raises ConfigurationError: if the configuration is invalid
        """
        if config is None:
            config = Config(endpoint=endpoint) if endpoint is not None else Config()
        elif endpoint is not None:
            msg = "Provide either config or endpoint, not both"
            raise ValueError(msg)

        if sensor is None:
            sensor = HTTPSensorClient(
                config.endpoint, timeout=config.request_timeout / 1000
            )
        if dispatcher is None:
            dispatcher = AlertDispatcher(
                actuator,
                sound_enabled=config.sound_enabled,
                vibration_enabled=config.vibration_enabled,
            )

        self.config = config
        self.dispatcher = dispatcher
        self._thresholds = config.thresholds
        self._sensor = sensor
        self._detector = TransitionDetector()
        self._closed = False
        self._close_event = asyncio.Event()
        self._poll_task = None
        self._on_zone_change = None
        self._on_reading = None
        self.current_zone = None
        self.current_distance = None
        self.tick_count = 0
        self.failure_count = 0
        self.transition_count = 0

    @property
    def status_text(self) -> str:
        """Get the text describing the current zone."""
        if self.current_zone is None:
            return WAITING_STATUS_TEXT
        return STATUS_TEXT[self.current_zone]

    @property
    def proximity_level(self) -> ProximityLevel:
        """Get the presentation band for the current distance."""
        return proximity_level(self.current_distance)

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    async def _poll_sensor(self) -> PollResult:
        try:
            return await self._sensor.poll()
        except ConnectivityError as e:
            return e
        except Exception as e:  # noqa: BLE001 # any sensor failure is a DISCONNECTED tick
            _LOGGER.exception("Unexpected error polling sensor")
            return ConnectivityError(str(e))

    async def poll_once(self) -> TransitionEvent | None:
        """
        Run one tick of the loop.

        :return: The transition dispatched during this tick, if any
        """
        if self._poll_task is not None:
            msg = "A poll is already in flight"
            raise RuntimeError(msg)
        self._poll_task = asyncio.ensure_future(self._poll_sensor())
        try:
            result = await self._poll_task
        finally:
            self._poll_task = None
        self.tick_count += 1

        if isinstance(result, ConnectivityError):
            self.failure_count += 1
            if self.current_zone == Zone.DISCONNECTED:
                _LOGGER.debug("Sensor still unreachable: %s", result.reason)
            else:
                _LOGGER.warning("Sensor unreachable: %s", result.reason)
            distance = None
        else:
            distance = result.distance_cm

        zone = classify(result, self._thresholds)
        _LOGGER.debug("Tick %s: distance=%s zone=%s", self.tick_count, distance, zone)
        self.current_zone = zone
        self.current_distance = distance
        self._notify(self._on_reading, result)

        event = self._detector.observe(zone, distance)
        if event is None:
            return None

        self.transition_count += 1
        _LOGGER.info("Zone changed %s (distance=%s)", event, distance)
        self.dispatcher.dispatch(event)
        self._notify(self._on_zone_change, event)
        return event

    def _notify(
        self, callback: Callable[..., None] | None, arg: TransitionEvent | PollResult
    ) -> None:
        if callback is None:
            return
        try:
            callback(arg)
        except Exception:  # noqa: BLE001 # observers must not stop the loop
            _LOGGER.exception("Error in callback %s", callback)

    async def keepalive(self) -> None:
        """
        Run the poll loop.

        This will run until Client.close() or asyncio_task.cancel() is called.
        Ticks start every ``config.poll_interval`` milliseconds; a tick that
        overruns the interval is followed immediately by the next one.
        """
        _LOGGER.debug("keepalive start")
        loop = asyncio.get_running_loop()
        interval = self.config.poll_interval / 1000
        try:
            while not self._closed:
                started = loop.time()
                try:
                    await self.poll_once()
                except asyncio.CancelledError:
                    if self._closed:
                        break
                    raise
                except Exception:  # noqa: BLE001 # a failed tick must not end the loop
                    _LOGGER.exception("Unexpected error during poll tick")

                if self._closed:
                    break
                delay = max(0.0, interval - (loop.time() - started))
                _LOGGER.debug("keepalive sleeping for %s", delay)
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(self._close_event.wait(), delay)
        finally:
            _LOGGER.debug("keepalive end")

    async def close(self) -> None:
        """
        Stop the client.

        Interrupts any in-flight request, stops the poll loop, silences all
        alerts and closes the sensor client.
        """
        _LOGGER.debug("Closing Client")
        self._closed = True
        self._close_event.set()
        if self._poll_task is not None:
            self._poll_task.cancel()
        self.dispatcher.silence()
        await self._sensor.close()

    def set_sound_enabled(self, enabled: bool) -> None:  # noqa: FBT001 # simple toggle
        """Enable or disable audible alerts."""
        self.dispatcher.set_sound_enabled(enabled)

    def set_vibration_enabled(self, enabled: bool) -> None:  # noqa: FBT001 # simple toggle
        """Enable or disable haptic alerts."""
        self.dispatcher.set_vibration_enabled(enabled)

    def on_zone_change(
        self, f: Callable[[TransitionEvent], None] | None
    ) -> Callable[[TransitionEvent], None] | None:
        """
        Provide a decorator @client.on_zone_change for zone transition handlers.

        Can also be called directly to set the zone transition handler
        """
        self._on_zone_change = f
        return f

    def on_reading(
        self, f: Callable[[PollResult], None] | None
    ) -> Callable[[PollResult], None] | None:
        """
        Provide a decorator @client.on_reading for per-tick handlers.

        The handler receives either a Reading or a ConnectivityError.
        Can also be called directly to set the reading handler
        """
        self._on_reading = f
        return f

