"""Provides the state of the emulated distance sensor."""

import json
import logging
import threading
from collections.abc import Iterable
from enum import Enum

_LOGGER = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_SERVICE_UNAVAILABLE = 503


class SensorDevice:
    """
    Represents the emulated sensor.

    Every call to :py:meth:`next_response` answers one HTTP request, so
    sequences and sweeps advance one step per poll.
    """

    class Mode(Enum):
        """What the emulated sensor answers with."""

        FIXED = "FIXED"
        SEQUENCE = "SEQUENCE"
        SWEEP = "SWEEP"
        OFFLINE = "OFFLINE"
        MALFORMED = "MALFORMED"

    mode: Mode
    distance: int
    request_count: int
    _sequence: list[int | None]
    _sweep: tuple[int, int, int]
    _sweep_direction: int
    _lock: threading.Lock

    def __init__(self, distance: int = 100) -> None:
        """Create an emulated sensor reporting a fixed distance."""
        self.mode = SensorDevice.Mode.FIXED
        self.distance = distance
        self.request_count = 0
        self._sequence = []
        self._sweep = (5, 60, 5)
        self._sweep_direction = -1
        self._lock = threading.Lock()

    def set_distance(self, distance: int) -> None:
        """Report a fixed distance (may be negative to emulate a bad measurement)."""
        with self._lock:
            _LOGGER.debug("Distance set to %s", distance)
            self.mode = SensorDevice.Mode.FIXED
            self.distance = distance

    def play_sequence(self, distances: Iterable[int | None]) -> None:
        """
        Answer successive requests with the given distances.

        ``None`` entries answer with an error status. Once exhausted the last
        entry is repeated.
        """
        with self._lock:
            self._sequence = list(distances)
            if not self._sequence:
                msg = "Sequence must not be empty"
                raise ValueError(msg)
            self.mode = SensorDevice.Mode.SEQUENCE

    def start_sweep(self, low: int = 5, high: int = 60, step: int = 5) -> None:
        """Simulate an obstacle repeatedly approaching and retreating."""
        if low >= high or step <= 0:
            msg = "Sweep needs low < high and a positive step"
            raise ValueError(msg)
        with self._lock:
            self._sweep = (low, high, step)
            self.distance = high
            self.mode = SensorDevice.Mode.SWEEP
            self._sweep_direction = -1

    def go_offline(self) -> None:
        """Answer every request with an error status."""
        with self._lock:
            self.mode = SensorDevice.Mode.OFFLINE

    def send_malformed(self) -> None:
        """Answer every request with a body that is not a valid payload."""
        with self._lock:
            self.mode = SensorDevice.Mode.MALFORMED

    def next_response(self) -> tuple[int, str]:
        """Get the HTTP status and body for the next request."""
        with self._lock:
            self.request_count += 1
            mode = self.mode
            if mode == SensorDevice.Mode.OFFLINE:
                return HTTP_SERVICE_UNAVAILABLE, "sensor offline"
            if mode == SensorDevice.Mode.MALFORMED:
                return HTTP_OK, "{distance: ???"
            if mode == SensorDevice.Mode.SEQUENCE:
                value = (
                    self._sequence.pop(0)
                    if len(self._sequence) > 1
                    else self._sequence[0]
                )
                if value is None:
                    return HTTP_SERVICE_UNAVAILABLE, "sensor offline"
                return HTTP_OK, json.dumps({"distance": value})
            if mode == SensorDevice.Mode.SWEEP:
                self._advance_sweep()
            return HTTP_OK, json.dumps({"distance": self.distance})

    def _advance_sweep(self) -> None:
        low, high, step = self._sweep
        candidate = self.distance + self._sweep_direction * step
        if candidate <= low or candidate >= high:
            self._sweep_direction = -self._sweep_direction
            candidate = max(low, min(high, candidate))
        self.distance = candidate
