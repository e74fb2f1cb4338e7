"""Provide the 'server' driveguard CLI command which runs a sensor emulator."""

import click

from .device import SensorDevice
from .sensor_server import SensorServer

DEFAULT_PORT = 8080


@click.command(help="Run a sensor emulator")
@click.option("--host", default="127.0.0.1")
@click.option("--port", type=int, default=DEFAULT_PORT)
@click.option("--distance", type=int, default=100)
@click.option("--simulate/--no-simulate", default=False)
def server(host: str, port: int, distance: int, *, simulate: bool) -> None:
    """Add the 'server' CLI command which runs an interactive sensor emulator."""
    sensor_server = SensorServer(host=host, port=port, distance=distance)
    sensor_server.start(interactive=True, with_simulation=simulate)


__all__ = ["DEFAULT_PORT", "SensorDevice", "SensorServer", "server"]
