"""Provides clients that read the distance sensor."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from .errors import ConnectivityError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reading:
    """
    A single sample from the distance sensor.

    ``distance_cm`` is None when the sensor answered but reported an invalid
    measurement.
    """

    distance_cm: int | None

    def __post_init__(self) -> None:
        """Validate the distance."""
        if self.distance_cm is None:
            return
        if isinstance(self.distance_cm, bool) or not isinstance(self.distance_cm, int):
            msg = f"distance_cm must be an integer, got {self.distance_cm!r}"
            raise TypeError(msg)
        if self.distance_cm < 0:
            msg = f"distance_cm must not be negative, got {self.distance_cm}"
            raise ValueError(msg)


PollResult = Reading | ConnectivityError


def parse_payload(body: str | bytes) -> Reading:
    """
    Parse a sensor response body into a Reading.

    The body is a JSON object with an integer ``distance`` field in cm.
    Other fields are ignored. Negative distances are the sensor's way of
    reporting an invalid measurement and produce a Reading with no distance.

    :raises ConnectivityError: if the body is not a valid payload
    """
    try:
        data: Any = json.loads(body)
    except (ValueError, RecursionError) as e:
        msg = f"Response is not valid JSON: {e}"
        raise ConnectivityError(msg) from e

    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise ConnectivityError(msg)
    if "distance" not in data:
        msg = "Response has no 'distance' field"
        raise ConnectivityError(msg)

    distance = data["distance"]
    if isinstance(distance, bool) or not isinstance(distance, int):
        msg = f"'distance' must be an integer, got {distance!r}"
        raise ConnectivityError(msg)

    if distance < 0:
        _LOGGER.debug("Sensor reported invalid distance %s", distance)
        return Reading(distance_cm=None)
    return Reading(distance_cm=distance)


class SensorClient:
    """
    Base class for sensor clients.

    Subclasses implement :py:meth:`read`. :py:meth:`poll` wraps it so that
    connectivity problems are returned as values instead of raised.
    """

    async def read(self) -> Reading:
        """
        Perform one request to the sensor.

        :raises ConnectivityError: if no valid reading could be obtained
        """
        raise NotImplementedError

    async def poll(self) -> PollResult:
        """Perform one request to the sensor, returning any failure as a value."""
        try:
            return await self.read()
        except ConnectivityError as e:
            return e

    async def close(self) -> None:
        """Release any resources held by the client."""


class HTTPSensorClient(SensorClient):
    """Reads the sensor by issuing HTTP GET requests to its endpoint."""

    _session: aiohttp.ClientSession | None

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 0.8,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Create a client for a sensor endpoint.

        :param endpoint: URL of the sensor, e.g. ``http://192.168.1.1/sensor``
        :param timeout: Total request timeout in seconds
        :param session: Optional session to use instead of creating one
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def read(self) -> Reading:
        """
        Issue a single GET to the sensor endpoint.

        :raises ConnectivityError: on network errors, timeouts, non-2xx
            responses or malformed bodies
        """
        session = await self._get_session()
        _LOGGER.debug("GET %s", self.endpoint)
        try:
            async with session.get(
                self.endpoint, timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                if resp.status < 200 or resp.status >= 300:  # noqa: PLR2004 # 2xx range
                    msg = f"Sensor returned HTTP {resp.status}"
                    raise ConnectivityError(msg)
                body = await resp.read()
        except asyncio.TimeoutError as e:
            msg = f"Timed out after {self.timeout}s"
            raise ConnectivityError(msg) from e
        except aiohttp.ClientError as e:
            msg = f"Request failed: {e}"
            raise ConnectivityError(msg) from e

        reading = parse_payload(body)
        _LOGGER.debug("Sensor reading: %s", reading)
        return reading

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None
