"""Edge detection over a stream of zone classifications."""

import logging

from .event import TransitionEvent
from .zone import Zone

_LOGGER = logging.getLogger(__name__)


class TransitionDetector:
    """
    Emits a TransitionEvent only when the observed zone changes.

    Repeated identical classifications produce no event, so anything driven
    by the events fires once per run of identical zones rather than once per
    sample.
    """

    last_emitted_zone: Zone | None

    def __init__(self) -> None:
        """Create a detector that has not yet emitted any zone."""
        self.last_emitted_zone = None

    def observe(
        self, zone: Zone, distance_cm: int | None = None
    ) -> TransitionEvent | None:
        """
        Observe the latest classification.

        :param zone: The zone the latest reading was classified as
        :param distance_cm: The distance behind the classification, if any
        :return: A TransitionEvent if the zone differs from the last emitted
                 zone, otherwise None
        """
        if zone == self.last_emitted_zone:
            return None

        event = TransitionEvent(
            from_zone=self.last_emitted_zone, to_zone=zone, distance_cm=distance_cm
        )
        _LOGGER.debug("Zone transition %s", event)
        self.last_emitted_zone = zone
        return event

    def reset(self) -> None:
        """Forget the last emitted zone so the next observation emits again."""
        self.last_emitted_zone = None
