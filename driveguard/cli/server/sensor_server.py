"""Implements a test sensor emulator with an interactive CLI UI."""

import logging

from .device import SensorDevice
from .server import Server

_LOGGER = logging.getLogger(__name__)


class SensorServer:
    """Implements a test sensor emulator with an interactive CLI UI."""

    device: SensorDevice
    server: Server

    PORT_MIN = 0
    PORT_MAX = 65535

    def __init__(self, host: str, port: int, distance: int = 100) -> None:
        """Create a new test sensor emulator that listens on a specifc host+port."""
        if not isinstance(host, str):
            msg = "Host must be a valid string"
            raise TypeError(msg)
        if (
            not isinstance(port, int)
            or port < SensorServer.PORT_MIN
            or port > SensorServer.PORT_MAX
        ):
            msg = "Port must be a valid integer 0-65535"
            raise ValueError(msg)
        self.device = SensorDevice(distance=distance)
        self.server = Server(handle_request=self.device.next_response)
        self._host = host
        self._port = port

    @property
    def url(self) -> str:
        """Get the URL the emulated sensor answers on."""
        port = self.server.port if self.server.port is not None else self._port
        return f"http://{self._host}:{port}/sensor"

    def start(self, *, interactive: bool = True, with_simulation: bool = False) -> None:
        """Start running the test sensor emulator."""
        self.server.start(host=self._host, port=self._port)
        if with_simulation:
            self.device.start_sweep()

        if interactive:
            while True:
                command = input("Command: ")
                if not self.interactive_command(command):
                    _LOGGER.debug("Stopping interactive commands")
                    break

    def interactive_command(self, command: str) -> bool:
        """Hande a user CLI command."""
        print(f"Got command {command}")  # noqa: T201 # Valid CLI print

        command = command.upper().strip()
        if command.lstrip("-").isdigit():
            self.device.set_distance(int(command))
        elif command == "S":
            self.device.start_sweep()
        elif command == "O":
            self.device.go_offline()
        elif command == "M":
            self.device.send_malformed()
        elif command == "Q":
            self.stop()
            return False
        else:
            print("Commands:")  # noqa: T201 # Valid CLI print
            print("  <n> : Report a distance of n cm")  # noqa: T201 # Valid CLI print
            print("  S   : Simulate an approaching/retreating obstacle")  # noqa: T201 # Valid CLI print
            print("  O   : Go offline (HTTP 503)")  # noqa: T201 # Valid CLI print
            print("  M   : Send malformed responses")  # noqa: T201 # Valid CLI print
            print("  Q   : Quit")  # noqa: T201 # Valid CLI print

        return True

    def stop(self) -> None:
        """Stop the test sensor emulator."""
        _LOGGER.debug("Stopping SensorServer")
        self.server.stop()
