"""Test reading the sensor over HTTP."""

import asyncio
from collections.abc import Iterator
from unittest.mock import Mock

import aiohttp
import pytest

from driveguard.cli.server import SensorServer
from driveguard.errors import ConnectivityError
from driveguard.sensor import HTTPSensorClient, Reading, SensorClient, parse_payload


@pytest.fixture
def sensor_server() -> Iterator[SensorServer]:
    """Run a sensor emulator on a free port."""
    server = SensorServer(host="127.0.0.1", port=0, distance=42)
    server.start(interactive=False)
    yield server
    server.stop()


def test_parse_payload() -> None:
    """Check a well formed payload becomes a Reading."""
    assert parse_payload('{"distance": 17}') == Reading(distance_cm=17)
    assert parse_payload(b'{"distance": 0}') == Reading(distance_cm=0)


def test_parse_payload_ignores_unknown_fields() -> None:
    """Check additional fields do not affect parsing."""
    body = '{"distance": 31, "unit": "cm", "firmware": "1.2"}'
    assert parse_payload(body) == Reading(distance_cm=31)


def test_parse_payload_negative_distance() -> None:
    """Check a negative distance becomes a Reading without a distance."""
    assert parse_payload('{"distance": -1}') == Reading(distance_cm=None)


@pytest.mark.parametrize(
    ("body", "reason"),
    [
        ("not json", "not valid JSON"),
        ("[1, 2]", "Expected a JSON object"),
        ("{}", "no 'distance' field"),
        ('{"distance": "12"}', "must be an integer"),
        ('{"distance": 12.5}', "must be an integer"),
        ('{"distance": true}', "must be an integer"),
        ('{"distance": null}', "must be an integer"),
        ("[" * 100000, "not valid JSON"),
    ],
)
def test_parse_payload_malformed(body: str, reason: str) -> None:
    """Check malformed payloads raise ConnectivityError."""
    with pytest.raises(ConnectivityError, match=reason):
        parse_payload(body)


def test_reading_rejects_negative() -> None:
    """Check a Reading cannot hold a negative distance."""
    with pytest.raises(ValueError, match="must not be negative"):
        Reading(distance_cm=-5)
    with pytest.raises(TypeError):
        Reading(distance_cm=1.5)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_base_poll_returns_error() -> None:
    """Check SensorClient.poll() returns a raised ConnectivityError."""

    class FailingSensor(SensorClient):
        async def read(self) -> Reading:
            msg = "unplugged"
            raise ConnectivityError(msg)

    result = await FailingSensor().poll()

    assert result == ConnectivityError("unplugged")


@pytest.mark.asyncio
async def test_http_read(sensor_server: SensorServer) -> None:
    """Check a reading is fetched from the emulator."""
    client = HTTPSensorClient(sensor_server.url, timeout=1.0)
    try:
        assert await client.read() == Reading(distance_cm=42)
        sensor_server.device.set_distance(-1)
        assert await client.poll() == Reading(distance_cm=None)
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_http_error_status(sensor_server: SensorServer) -> None:
    """Check a non-2xx response is a ConnectivityError."""
    sensor_server.device.go_offline()
    client = HTTPSensorClient(sensor_server.url, timeout=1.0)
    try:
        result = await client.poll()
    finally:
        await client.close()

    assert isinstance(result, ConnectivityError)
    assert "HTTP 503" in result.reason


@pytest.mark.asyncio
async def test_http_malformed_body(sensor_server: SensorServer) -> None:
    """Check an unparseable body is a ConnectivityError."""
    sensor_server.device.send_malformed()
    client = HTTPSensorClient(sensor_server.url, timeout=1.0)
    try:
        result = await client.poll()
    finally:
        await client.close()

    assert isinstance(result, ConnectivityError)


@pytest.mark.asyncio
async def test_http_connection_refused() -> None:
    """Check an unreachable sensor is a ConnectivityError."""
    server = SensorServer(host="127.0.0.1", port=0)
    server.start(interactive=False)
    url = server.url
    server.stop()

    client = HTTPSensorClient(url, timeout=1.0)
    try:
        result = await client.poll()
    finally:
        await client.close()

    assert isinstance(result, ConnectivityError)
    assert "Request failed" in result.reason


@pytest.mark.asyncio
async def test_http_timeout() -> None:
    """Check a request timeout is a ConnectivityError."""
    session = Mock(spec=aiohttp.ClientSession)
    session.closed = False
    session.get.side_effect = asyncio.TimeoutError()
    client = HTTPSensorClient("http://10.0.0.2/sensor", timeout=0.5, session=session)

    result = await client.poll()

    assert isinstance(result, ConnectivityError)
    assert "Timed out" in result.reason


@pytest.mark.asyncio
async def test_close_keeps_provided_session() -> None:
    """Check close() does not close a session it did not create."""
    session = Mock(spec=aiohttp.ClientSession)
    client = HTTPSensorClient("http://10.0.0.2/sensor", session=session)

    await client.close()

    assert not session.close.called
