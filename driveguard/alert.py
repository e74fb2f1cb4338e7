"""Maps zone transitions onto alert effects."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .actuator import Actuator
from .event import TransitionEvent
from .zone import Zone

_LOGGER = logging.getLogger(__name__)


@dataclass
class AlertState:
    """Which alert effects are currently active."""

    danger_active: bool = False
    warning_active: bool = False
    banner_visible: bool = False
    disconnected_indicator: bool = False


@dataclass(frozen=True)
class ActuatorDirective:
    """The set of effects that should be active after a transition."""

    danger_alert: bool = False
    warning_alert: bool = False
    banner_visible: bool = False
    disconnected_indicator: bool = False
    sound: bool = True
    vibration: bool = True


class AlertDispatcher:
    """
    Drives an Actuator from zone transitions.

    On every transition the effects of the previous zone are retracted
    before those of the new zone are started, so the danger tone and the
    warning beep are never active together. A failing actuator call is
    logged and does not stop later calls.
    """

    state: AlertState
    current_zone: Zone | None

    def __init__(
        self,
        actuator: Actuator | None = None,
        *,
        sound_enabled: bool = True,
        vibration_enabled: bool = True,
    ) -> None:
        """
        Create a dispatcher.

        :param actuator: Receives the effect changes. Without one the
            dispatcher only computes directives.
        :param sound_enabled: Allow audible alerts
        :param vibration_enabled: Allow haptic alerts
        """
        self._actuator = actuator
        self.sound_enabled = sound_enabled
        self.vibration_enabled = vibration_enabled
        self.state = AlertState()
        self.current_zone = None

    def dispatch(self, event: TransitionEvent) -> ActuatorDirective:
        """
        Apply the effects for entering ``event.to_zone``.

        A transition into the zone that is already current is a no-op.
        """
        if event.to_zone in (event.from_zone, self.current_zone):
            _LOGGER.debug("Already in %s - nothing to dispatch", event.to_zone)
            return self._directive_from_state()

        directive = self.directive_for(event.to_zone)
        _LOGGER.info("Dispatching %s: %s", event, directive)
        self._apply(directive)
        self.current_zone = event.to_zone
        return directive

    def directive_for(self, zone: Zone) -> ActuatorDirective:
        """Get the effects that should be active while in ``zone``."""
        if zone == Zone.DANGER:
            return ActuatorDirective(
                danger_alert=True,
                banner_visible=True,
                sound=self.sound_enabled,
                vibration=self.vibration_enabled,
            )
        if zone == Zone.WARNING:
            return ActuatorDirective(
                warning_alert=self.sound_enabled,
                sound=self.sound_enabled,
                vibration=self.vibration_enabled,
            )
        if zone == Zone.DISCONNECTED:
            return ActuatorDirective(
                disconnected_indicator=True,
                sound=self.sound_enabled,
                vibration=self.vibration_enabled,
            )
        return ActuatorDirective(
            sound=self.sound_enabled, vibration=self.vibration_enabled
        )

    def warning_finished(self) -> None:
        """Record that the one-shot warning tone has finished playing."""
        _LOGGER.debug("Warning tone finished")
        self.state.warning_active = False

    def silence(self) -> None:
        """Retract every active effect."""
        _LOGGER.debug("Silencing all alerts")
        self._apply(ActuatorDirective())
        self.current_zone = None

    def set_sound_enabled(self, enabled: bool) -> None:  # noqa: FBT001 # simple toggle
        """Enable or disable audible alerts, updating any active alert."""
        if enabled == self.sound_enabled:
            return
        self.sound_enabled = enabled
        if not enabled and self.state.warning_active:
            self._retract("warning alert", self._set_warning)
            self.state.warning_active = False
        self._reissue_danger()

    def set_vibration_enabled(self, enabled: bool) -> None:  # noqa: FBT001 # simple toggle
        """Enable or disable haptic alerts, updating any active alert."""
        if enabled == self.vibration_enabled:
            return
        self.vibration_enabled = enabled
        self._reissue_danger()

    def _reissue_danger(self) -> None:
        if not self.state.danger_active:
            return
        _LOGGER.debug(
            "Re-issuing danger alert sound:%s vibration:%s",
            self.sound_enabled,
            self.vibration_enabled,
        )
        self._call("danger alert", self._set_danger, active=True)

    def _directive_from_state(self) -> ActuatorDirective:
        return ActuatorDirective(
            danger_alert=self.state.danger_active,
            warning_alert=self.state.warning_active,
            banner_visible=self.state.banner_visible,
            disconnected_indicator=self.state.disconnected_indicator,
            sound=self.sound_enabled,
            vibration=self.vibration_enabled,
        )

    def _apply(self, directive: ActuatorDirective) -> None:
        state = self.state

        # Retract first so that two zones' effects never overlap
        if state.warning_active and not directive.warning_alert:
            self._retract("warning alert", self._set_warning)
            state.warning_active = False
        if state.danger_active and not directive.danger_alert:
            self._retract("danger alert", self._set_danger)
            state.danger_active = False
        if state.banner_visible and not directive.banner_visible:
            self._retract("banner", self._set_banner)
            state.banner_visible = False
        if state.disconnected_indicator and not directive.disconnected_indicator:
            self._retract("disconnected indicator", self._set_disconnected)
            state.disconnected_indicator = False

        if directive.danger_alert and not state.danger_active:
            state.danger_active = self._call(
                "danger alert", self._set_danger, active=True
            )
        if directive.warning_alert and not state.warning_active:
            state.warning_active = self._call(
                "warning alert", self._set_warning, active=True
            )
        if directive.banner_visible and not state.banner_visible:
            state.banner_visible = self._call("banner", self._set_banner, active=True)
        if directive.disconnected_indicator and not state.disconnected_indicator:
            state.disconnected_indicator = self._call(
                "disconnected indicator", self._set_disconnected, active=True
            )

    def _retract(self, name: str, setter: Callable[[bool], None]) -> None:
        self._call(name, setter, active=False)

    def _call(
        self, name: str, setter: Callable[[bool], None], *, active: bool
    ) -> bool:
        """Invoke one actuator method, returning whether it succeeded."""
        if self._actuator is None:
            return True
        try:
            setter(active)
        except Exception:  # noqa: BLE001 # actuator failures must not stop alerting
            _LOGGER.exception("Failed to set %s to %s", name, active)
            return False
        return True

    def _set_danger(self, active: bool) -> None:  # noqa: FBT001
        if self._actuator is None:
            return
        if active:
            self._actuator.set_danger_alert(
                True,  # noqa: FBT003
                sound=self.sound_enabled,
                vibration=self.vibration_enabled,
            )
        else:
            self._actuator.set_danger_alert(False)  # noqa: FBT003

    def _set_warning(self, active: bool) -> None:  # noqa: FBT001
        if self._actuator is not None:
            self._actuator.set_warning_alert(active)

    def _set_banner(self, active: bool) -> None:  # noqa: FBT001
        if self._actuator is not None:
            self._actuator.set_banner_visible(active)

    def _set_disconnected(self, active: bool) -> None:  # noqa: FBT001
        if self._actuator is not None:
            self._actuator.set_disconnected_indicator(active)
