"""Module file for driveguard."""

from .actuator import Actuator, LoggingActuator
from .alert import ActuatorDirective, AlertDispatcher, AlertState
from .client import Client
from .config import Config
from .detector import TransitionDetector
from .errors import ConfigurationError, ConnectivityError, DriveGuardError
from .event import TransitionEvent
from .sensor import HTTPSensorClient, Reading, SensorClient
from .zone import ProximityLevel, Thresholds, Zone, classify, classify_distance

__all__ = [
    "Actuator",
    "ActuatorDirective",
    "AlertDispatcher",
    "AlertState",
    "Client",
    "Config",
    "ConfigurationError",
    "ConnectivityError",
    "DriveGuardError",
    "HTTPSensorClient",
    "LoggingActuator",
    "ProximityLevel",
    "Reading",
    "SensorClient",
    "Thresholds",
    "TransitionDetector",
    "TransitionEvent",
    "Zone",
    "classify",
    "classify_distance",
]
__version__ = "0.0.0-dev"
