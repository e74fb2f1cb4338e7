"""Runtime configuration for the polling client."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlparse

from .errors import ConfigurationError
from .zone import Thresholds

_LOGGER = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://192.168.1.1/sensor"

_ENDPOINT_ENV = "DRIVEGUARD_ENDPOINT"
_POLL_INTERVAL_ENV = "DRIVEGUARD_POLL_INTERVAL_MS"
_REQUEST_TIMEOUT_ENV = "DRIVEGUARD_REQUEST_TIMEOUT_MS"
_DANGER_MAX_ENV = "DRIVEGUARD_DANGER_MAX"
_WARNING_MAX_ENV = "DRIVEGUARD_WARNING_MAX"
_SOUND_ENV = "DRIVEGUARD_SOUND"
_VIBRATION_ENV = "DRIVEGUARD_VIBRATION"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    """
    Settings for a Client.

    Intervals are in milliseconds. Construction validates all values and
    raises ConfigurationError for anything that would prevent the poll loop
    from running correctly.
    """

    endpoint: str = DEFAULT_ENDPOINT
    poll_interval: int = 1000
    request_timeout: int = 800
    danger_max: int = 20
    warning_max: int = 29
    sound_enabled: bool = True
    vibration_enabled: bool = True

    def __post_init__(self) -> None:
        """Validate the configuration."""
        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            msg = f"endpoint must be an http(s) URL, got {self.endpoint!r}"
            raise ConfigurationError(msg)
        for name in ("poll_interval", "request_timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ConfigurationError(msg)
        if self.poll_interval <= 0:
            msg = f"poll_interval must be positive, got {self.poll_interval}"
            raise ConfigurationError(msg)
        if self.request_timeout <= 0:
            msg = f"request_timeout must be positive, got {self.request_timeout}"
            raise ConfigurationError(msg)
        if self.request_timeout >= self.poll_interval:
            msg = (
                f"request_timeout ({self.request_timeout}ms) must be shorter than "
                f"poll_interval ({self.poll_interval}ms)"
            )
            raise ConfigurationError(msg)
        Thresholds(danger_max=self.danger_max, warning_max=self.warning_max)

    @property
    def thresholds(self) -> Thresholds:
        """Get the zone thresholds."""
        return Thresholds(danger_max=self.danger_max, warning_max=self.warning_max)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """
        Build a Config from ``DRIVEGUARD_*`` environment variables.

        Unset or blank variables use the defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        config = cls(
            endpoint=_read_str(env, _ENDPOINT_ENV, defaults.endpoint),
            poll_interval=_read_int(env, _POLL_INTERVAL_ENV, defaults.poll_interval),
            request_timeout=_read_int(
                env, _REQUEST_TIMEOUT_ENV, defaults.request_timeout
            ),
            danger_max=_read_int(env, _DANGER_MAX_ENV, defaults.danger_max),
            warning_max=_read_int(env, _WARNING_MAX_ENV, defaults.warning_max),
            sound_enabled=_read_bool(env, _SOUND_ENV, default=defaults.sound_enabled),
            vibration_enabled=_read_bool(
                env, _VIBRATION_ENV, default=defaults.vibration_enabled
            ),
        )
        _LOGGER.debug("Config from environment: %s", config)
        return config


def _read_str(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    candidate = _read_str(env, name, "")
    if not candidate:
        return default
    try:
        return int(candidate)
    except ValueError as e:
        msg = f"{name} must be an integer, got {candidate!r}"
        raise ConfigurationError(msg) from e


def _read_bool(env: Mapping[str, str], name: str, *, default: bool) -> bool:
    candidate = _read_str(env, name, "").lower()
    if not candidate:
        return default
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean, got {candidate!r}"
    raise ConfigurationError(msg)
