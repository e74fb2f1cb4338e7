"""Interfaces to the outputs that make alerts noticeable."""

import logging
from collections.abc import Callable

_LOGGER = logging.getLogger(__name__)


class Actuator:
    """
    Interface to the alert outputs driven by the AlertDispatcher.

    Implementations wrap the host's audio, vibration and display. Each method
    receives the desired state of one effect; the dispatcher guarantees that
    effects are retracted before new ones are started.
    """

    def set_danger_alert(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
        *,
        sound: bool = True,
        vibration: bool = True,
    ) -> None:
        """
        Start or stop the danger alert.

        The danger alert is a continuous tone plus a repeating vibration
        pattern. ``sound`` and ``vibration`` select which of these to use when
        activating.
        """
        raise NotImplementedError

    def set_warning_alert(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
    ) -> None:
        """
        Play or cancel the single short warning tone.

        The tone clears itself once playback finishes; implementations should
        then call :py:meth:`AlertDispatcher.warning_finished`.
        """
        raise NotImplementedError

    def set_banner_visible(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
    ) -> None:
        """Show or hide the persistent danger banner."""
        raise NotImplementedError

    def set_disconnected_indicator(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
    ) -> None:
        """Show or hide the 'no data' indicator."""
        raise NotImplementedError


class LoggingActuator(Actuator):
    """
    Actuator that reports every change as text.

    Used by the CLI and examples where no real outputs are available.
    """

    def __init__(self, output: Callable[[str], None] | None = None) -> None:
        """
        Create a LoggingActuator.

        :param output: Called with a line of text per change. Defaults to
                       logging at INFO level.
        """
        self._output = output if output is not None else _LOGGER.info

    def set_danger_alert(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
        *,
        sound: bool = True,
        vibration: bool = True,
    ) -> None:
        """Report the danger alert state."""
        if active:
            self._output(f"DANGER alert on (sound:{sound} vibration:{vibration})")
        else:
            self._output("DANGER alert off")

    def set_warning_alert(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
    ) -> None:
        """Report the warning tone state."""
        self._output("WARNING beep" if active else "WARNING beep cancelled")

    def set_banner_visible(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
    ) -> None:
        """Report the banner state."""
        self._output("TOO CLOSE! banner shown" if active else "Banner hidden")

    def set_disconnected_indicator(
        self,
        active: bool,  # noqa: FBT001 # Bool part of Pre-defined API
    ) -> None:
        """Report the disconnected indicator state."""
        self._output("No Connection" if active else "Connection restored")
