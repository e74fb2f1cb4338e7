"""
Example that prints zone changes reported by driveguard.

Defaults to running forever - use ctrl-C to end.
"""

import asyncio

from driveguard import Client, LoggingActuator, TransitionEvent

endpoint = "http://127.0.0.1:65433/sensor"


async def watch(timeout: float = 0) -> None:  # noqa: ASYNC109 # asyncio.timeout unavailable in Python3.10
    """Register event handlers then polls the sensor until the timeout."""
    client = Client(endpoint=endpoint, actuator=LoggingActuator(print))

    @client.on_zone_change
    def on_zone_change(event: TransitionEvent) -> None:
        print(  # noqa: T201 # Valid CLI print
            f"Zone changed {event} at {event.timestamp:%H:%M:%S}"
        )

    async def _canceller() -> None:
        if timeout != 0:
            await asyncio.sleep(timeout)
            await client.close()

    try:
        await asyncio.gather(_canceller(), client.keepalive())
    finally:
        await client.close()


def main(timeout: float = 0) -> None:
    """Run the watch loop, stopping cleanly on ctrl-C."""
    try:
        asyncio.run(watch(timeout))
    except KeyboardInterrupt:
        print("Cancelled - shutting down")  # noqa: T201 # Valid CLI print


if __name__ == "__main__":
    main()
