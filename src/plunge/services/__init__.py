"""Services layer"""

from .credential_resolver import CredentialResolver, CredentialsError
from .demo_store import DemoStore
from .device_bridge import (
    DeviceBridge, BridgeError, DiscoveryError, AuthenticationError, BridgeTimeoutError, CommandError
)
from .service_container import ServiceContainer

__all__ = [
    "CredentialResolver",
    "CredentialsError",
    "DemoStore",
    "DeviceBridge",
    "BridgeError",
    "DiscoveryError",
    "AuthenticationError",
    "BridgeTimeoutError",
    "CommandError",
    "ServiceContainer",
]
