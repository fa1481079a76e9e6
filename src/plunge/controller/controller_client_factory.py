from plunge.controller.controller_interface import IControllerClient
from plunge.controller.screenlogic_client import ScreenLogicClient
from plunge.models.config import ControllerConfig


def create_controller_client(config: ControllerConfig) -> IControllerClient:
    return ScreenLogicClient(host=config.host, port=config.port)
