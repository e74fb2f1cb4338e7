"""Classifies sensor distances into proximity zones."""

import logging
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError, ConnectivityError
from .sensor import Reading

_LOGGER = logging.getLogger(__name__)


class Zone(Enum):
    """Proximity zones reported by the Client."""

    DANGER = "DANGER"
    WARNING = "WARNING"
    SAFE = "SAFE"
    DISCONNECTED = "DISCONNECTED"


class ProximityLevel(Enum):
    """Finer grained distance bands used for presentation."""

    CRITICAL = "CRITICAL"
    CLOSE = "CLOSE"
    NEAR = "NEAR"
    CLEAR = "CLEAR"
    UNKNOWN = "UNKNOWN"


STATUS_TEXT = {
    Zone.DANGER: "DANGER",
    Zone.WARNING: "WARNING",
    Zone.SAFE: "SAFE",
    Zone.DISCONNECTED: "No Connection",
}

WAITING_STATUS_TEXT = "Waiting..."


@dataclass(frozen=True)
class Thresholds:
    """
    Distance thresholds (in cm) separating the zones.

    * ``d < danger_max`` is DANGER
    * ``danger_max <= d <= warning_max`` is WARNING
    * ``d > warning_max`` is SAFE
    """

    danger_max: int = 20
    warning_max: int = 29

    def __post_init__(self) -> None:
        """Reject thresholds that cannot describe three ordered bands."""
        for name in ("danger_max", "warning_max"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ConfigurationError(msg)
            if value < 0:
                msg = f"{name} must not be negative, got {value}"
                raise ConfigurationError(msg)
        if self.danger_max >= self.warning_max:
            msg = (
                f"danger_max ({self.danger_max}) must be less than "
                f"warning_max ({self.warning_max})"
            )
            raise ConfigurationError(msg)


DEFAULT_THRESHOLDS = Thresholds()


def classify_distance(
    distance_cm: int | None, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> Zone:
    """
    Map a distance to a Zone.

    Missing and negative distances are treated as DISCONNECTED.
    """
    if distance_cm is None or distance_cm < 0:
        return Zone.DISCONNECTED
    if distance_cm < thresholds.danger_max:
        return Zone.DANGER
    if distance_cm <= thresholds.warning_max:
        return Zone.WARNING
    return Zone.SAFE


def classify(
    result: Reading | ConnectivityError, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> Zone:
    """Map the outcome of a sensor poll to a Zone."""
    if isinstance(result, ConnectivityError):
        return Zone.DISCONNECTED
    zone = classify_distance(result.distance_cm, thresholds)
    _LOGGER.debug("classified %s as %s", result, zone)
    return zone


def proximity_level(distance_cm: int | None) -> ProximityLevel:
    """Get the presentation band for a distance."""
    if distance_cm is None or distance_cm < 0:
        return ProximityLevel.UNKNOWN
    if distance_cm < 10:  # noqa: PLR2004 # band edges of the proximity display
        return ProximityLevel.CRITICAL
    if distance_cm < 20:  # noqa: PLR2004
        return ProximityLevel.CLOSE
    if distance_cm < 30:  # noqa: PLR2004
        return ProximityLevel.NEAR
    return ProximityLevel.CLEAR
