"""Test the emulated sensor device."""

import json

import pytest

from driveguard.cli.server import SensorDevice, SensorServer


def _distance(device: SensorDevice) -> int:
    status, body = device.next_response()
    assert status == 200  # noqa: PLR2004
    return json.loads(body)["distance"]


def test_fixed_distance() -> None:
    """Check the device reports a fixed distance until changed."""
    device = SensorDevice(distance=70)
    assert _distance(device) == 70  # noqa: PLR2004
    assert _distance(device) == 70  # noqa: PLR2004
    device.set_distance(12)
    assert _distance(device) == 12  # noqa: PLR2004
    assert device.request_count == 3  # noqa: PLR2004


def test_sequence() -> None:
    """Check a sequence is played in order and its last entry repeated."""
    device = SensorDevice()
    device.play_sequence([50, None, 15])

    assert _distance(device) == 50  # noqa: PLR2004
    assert device.next_response()[0] == 503  # noqa: PLR2004
    assert _distance(device) == 15  # noqa: PLR2004
    assert _distance(device) == 15  # noqa: PLR2004


def test_empty_sequence() -> None:
    """Check an empty sequence is rejected."""
    with pytest.raises(ValueError, match="must not be empty"):
        SensorDevice().play_sequence([])


def test_sweep_bounces_between_limits() -> None:
    """Check the sweep approaches then retreats within its limits."""
    device = SensorDevice()
    device.start_sweep(low=10, high=30, step=10)

    assert [_distance(device) for _ in range(5)] == [20, 10, 20, 30, 20]


def test_bad_sweep() -> None:
    """Check invalid sweep parameters are rejected."""
    with pytest.raises(ValueError, match="low < high"):
        SensorDevice().start_sweep(low=30, high=10)


def test_offline_and_malformed() -> None:
    """Check the failure modes."""
    device = SensorDevice()
    device.go_offline()
    assert device.next_response()[0] == 503  # noqa: PLR2004

    device.send_malformed()
    status, body = device.next_response()
    assert status == 200  # noqa: PLR2004
    with pytest.raises(ValueError):  # noqa: PT011 # JSONDecodeError
        json.loads(body)


def test_interactive_commands() -> None:
    """Check the emulator's interactive commands change the device mode."""
    server = SensorServer(host="127.0.0.1", port=0)

    assert server.interactive_command("25")
    assert server.device.distance == 25  # noqa: PLR2004
    assert server.interactive_command("-1")
    assert server.device.distance == -1
    assert server.interactive_command("o")
    assert server.device.mode == SensorDevice.Mode.OFFLINE
    assert server.interactive_command("M")
    assert server.device.mode == SensorDevice.Mode.MALFORMED
    assert server.interactive_command("s")
    assert server.device.mode == SensorDevice.Mode.SWEEP
    assert server.interactive_command("help")


def test_bad_server_args() -> None:
    """Check that bad arguments are rejected by the SensorServer constructor."""
    with pytest.raises(TypeError):
        SensorServer(host=None, port=8080)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="0-65535"):
        SensorServer(host="127.0.0.1", port=70000)
