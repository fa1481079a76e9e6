"""
Models package - Data models for the pool bridge
"""

from .enums import CommandKind, BodyType, HeatMode, ConnectionType, LogLevel, LogCategory
from .auth import Credentials, LiveMode, DemoMode, AuthMode
from .commands import Command, SetCircuit, SetTemperature, SetHeatMode, SendLightCommand
from .results import CommandResult
from .status import PoolStatus, BodyStatus, CircuitStatus

__all__ = [
    'CommandKind',
    'BodyType',
    'HeatMode',
    'ConnectionType',
    'LogLevel',
    'LogCategory',
    'Credentials',
    'LiveMode',
    'DemoMode',
    'AuthMode',
    'Command',
    'SetCircuit',
    'SetTemperature',
    'SetHeatMode',
    'SendLightCommand',
    'CommandResult',
    'PoolStatus',
    'BodyStatus',
    'CircuitStatus',
]
