"""Exception types raised by driveguard."""


class DriveGuardError(Exception):
    """Base class for all driveguard errors."""


class ConfigurationError(DriveGuardError, ValueError):
    """
    Invalid configuration detected at startup.

    Fatal - a Client cannot be constructed with invalid configuration.
    """


class ConnectivityError(DriveGuardError):
    """
    A sensor reading could not be obtained.

    Covers network unreachability, timeouts, non-2xx responses and malformed
    response bodies. These are deliberately not subdivided: every one of
    them maps to the DISCONNECTED zone.
    """

    def __init__(self, reason: str) -> None:
        """Create a ConnectivityError with a human readable reason."""
        super().__init__(reason)
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        """Compare errors by reason."""
        if not isinstance(other, ConnectivityError):
            return NotImplemented
        return self.reason == other.reason

    def __hash__(self) -> int:
        """Hash by reason."""
        return hash(self.reason)
