"""Example of running individual driveguard poll ticks."""

import asyncio

from driveguard import Client

endpoint = "http://127.0.0.1:65434/sensor"


async def poll(ticks: int) -> None:
    """Poll the sensor a few times, printing the state after each tick."""
    client = Client(endpoint=endpoint)
    try:
        for _ in range(ticks):
            event = await client.poll_once()
            print(  # noqa: T201 # Valid CLI print
                f"{client.status_text}: distance={client.current_distance} "
                f"level={client.proximity_level.value} transition={event}"
            )
    finally:
        await client.close()


def main(ticks: int = 3) -> None:
    """Poll the sensor then exit."""
    asyncio.run(poll(ticks))


if __name__ == "__main__":
    main()
