"""
Enums for the pool bridge
"""

from enum import Enum, auto


class CommandKind(Enum):
    """Command identifiers (tag of the Command variant)"""
    SET_CIRCUIT = auto()
    SET_TEMPERATURE = auto()
    SET_HEAT_MODE = auto()
    SEND_LIGHT_COMMAND = auto()
    SET_SYSTEM_TIME = auto()
    CANCEL_DELAY = auto()


class BodyType(Enum):
    """Water bodies with a fixed controller index"""
    POOL = 0
    SPA = 1


class HeatMode(Enum):
    """Heat source selection as understood by the controller"""
    OFF = 0
    SOLAR = 1
    SOLAR_PREFERRED = 2
    HEATER = 3
    UNCHANGED = 4     # Leave current heat source untouched


class ConnectionType(Enum):
    """Where a status snapshot came from"""
    LOCAL = "local"
    REMOTE = "remote"
    DEMO = "demo"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    API = auto()         # HTTP routes, exception handlers
    AUTH = auto()        # Credential resolution, demo/live routing
    BRIDGE = auto()      # Connection slots, sessions, timeouts
    CONTROLLER = auto()  # screenlogicpy adapter
    DEMO = auto()        # In-memory demo backend
    SYSTEM = auto()      # Startup, shutdown, errors

    GENERAL = auto()    # Default general category
