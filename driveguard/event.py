"""Events emitted when the proximity zone changes."""

import datetime
from dataclasses import dataclass, field

from .zone import Zone


def _now() -> datetime.datetime:
    return datetime.datetime.now()  # noqa: DTZ005 - local timezone matches the display


@dataclass(frozen=True)
class TransitionEvent:
    """
    Represents a change from one Zone to a different Zone.

    ``from_zone`` is None for the very first classification, since no zone
    has been emitted before it.
    """

    from_zone: Zone | None
    to_zone: Zone
    timestamp: datetime.datetime = field(default_factory=_now)
    distance_cm: int | None = None

    @property
    def is_initial(self) -> bool:
        """True for the first event emitted by a detector."""
        return self.from_zone is None

    def __str__(self) -> str:
        """Get a short description of the transition."""
        from_name = self.from_zone.value if self.from_zone is not None else "START"
        return f"{from_name} -> {self.to_zone.value}"
