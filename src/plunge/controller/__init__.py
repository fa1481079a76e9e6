"""Controller boundary - interface to the external ScreenLogic library"""

from .controller_interface import (
    ControllerError, GatewayAddress, IControllerClient, IControllerSession
)

__all__ = [
    "ControllerError",
    "GatewayAddress",
    "IControllerClient",
    "IControllerSession",
]
