"""Provide the 'watch' driveguard CLI command."""

import asyncio
import dataclasses

import click

from driveguard.actuator import LoggingActuator
from driveguard.client import Client
from driveguard.config import Config
from driveguard.errors import ConfigurationError
from driveguard.event import TransitionEvent


@click.command(help="Poll a sensor and print zone changes and alerts")
@click.option("--endpoint", default=None, help="Sensor URL")
@click.option("--poll-interval", type=int, default=None, help="Milliseconds")
@click.option("--request-timeout", type=int, default=None, help="Milliseconds")
@click.option("--danger-max", type=int, default=None)
@click.option("--warning-max", type=int, default=None)
@click.option("--sound/--no-sound", default=None)
@click.option("--vibration/--no-vibration", default=None)
@click.option("--duration", type=float, default=0, help="Seconds, 0 runs forever")
def watch(  # noqa: PLR0913 # one option per configuration value
    *,
    endpoint: str | None,
    poll_interval: int | None,
    request_timeout: int | None,
    danger_max: int | None,
    warning_max: int | None,
    sound: bool | None,
    vibration: bool | None,
    duration: float,
) -> None:
    """Add the 'watch' CLI command which prints zone changes until cancelled."""
    overrides = {
        "endpoint": endpoint,
        "poll_interval": poll_interval,
        "request_timeout": request_timeout,
        "danger_max": danger_max,
        "warning_max": warning_max,
        "sound_enabled": sound,
        "vibration_enabled": vibration,
    }
    try:
        config = dataclasses.replace(
            Config.from_env(), **{k: v for k, v in overrides.items() if v is not None}
        )
    except ConfigurationError as e:
        raise click.BadParameter(str(e)) from e

    client = Client(config=config, actuator=LoggingActuator(click.echo))

    @client.on_zone_change
    def on_zone_change(event: TransitionEvent) -> None:
        distance = "--" if event.distance_cm is None else f"{event.distance_cm} cm"
        click.echo(f"Zone changed {event} ({distance})")

    asyncio.run(_run(client, duration))


async def _run(client: Client, duration: float) -> None:
    task = asyncio.create_task(client.keepalive())
    try:
        if duration > 0:
            await asyncio.sleep(duration)
        else:
            await task
    finally:
        await client.close()
        await task
