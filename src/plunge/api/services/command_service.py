"""
API Command Service - the command handlers' shared pipeline

Routes stay thin; every command endpoint goes through the same steps:
1. Validate the JSON body against its request schema (400 on failure)
2. Build the domain command
3. Dispatch to the demo store or the live bridge, per the resolved AuthMode
4. Wrap the outcome: CommandResult on success, CommandFailedError (500)
   carrying the bridge message on failure

No state is kept between calls.
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import ValidationError

from plunge.api.middleware.error_handler import CommandFailedError, CommandValidationError
from plunge.api.schemas.command import CommandRequest
from plunge.models.auth import AuthMode, DemoMode, LiveMode
from plunge.models.commands import Command, parse_body_index
from plunge.models.enums import ConnectionType, LogCategory
from plunge.models.results import CommandResult
from plunge.models.status import PoolStatus, SystemTime
from plunge.services.demo_store import DemoStore
from plunge.services.device_bridge import BridgeError, DeviceBridge
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

R = TypeVar("R", bound=CommandRequest)


def parse_request(schema: Type[R], payload: Optional[Dict[str, Any]]) -> R:
    """
    Validate a JSON body against a command request schema.

    Raises:
        CommandValidationError: with the violated constraint as the error text
    """
    try:
        return schema.model_validate(payload or {})
    except ValidationError as e:
        for error in e.errors():
            ctx_error = (error.get("ctx") or {}).get("error")
            if ctx_error is not None:
                raise CommandValidationError(str(ctx_error))
        raise CommandValidationError(schema.invalid_message)


def parse_body(body: str) -> int:
    """Path segment -> body index ('pool', 'spa' or a number)"""
    try:
        return parse_body_index(body)
    except ValueError as e:
        raise CommandValidationError(str(e))


def build_command(factory: Callable[..., Command], **fields) -> Command:
    try:
        return factory(**fields)
    except ValueError as e:
        raise CommandValidationError(str(e))


class CommandAPIService:
    """API wrapper over the demo store and the device bridge"""

    def __init__(self, bridge: DeviceBridge, demo_store: DemoStore):
        """
        Args:
            bridge: Live controller bridge
            demo_store: In-memory demo backend
        """
        self.bridge = bridge
        self.demo_store = demo_store

    async def run(self, command: Command, mode: AuthMode, failure: str) -> CommandResult:
        """
        Dispatch a validated command.

        Args:
            command: Domain command
            mode: LiveMode or DemoMode for this request
            failure: Error label used when the bridge fails ("Failed to set temperature")

        Raises:
            CommandFailedError: bridge failure, with the bridge message
        """
        if isinstance(mode, DemoMode):
            await self.demo_store.apply(command)
            return CommandResult(command=command, demo=True)

        try:
            await self.bridge.execute(command, mode.credentials)
        except BridgeError as e:
            log.error(failure, error=e.message, error_type=type(e).__name__)
            raise CommandFailedError(failure, e.message)
        return CommandResult(command=command, demo=False)

    async def status(self, mode: AuthMode) -> PoolStatus:
        if isinstance(mode, DemoMode):
            return await self.demo_store.snapshot()

        try:
            return await self.bridge.fetch_status(mode.credentials)
        except BridgeError as e:
            log.error("Failed to connect to pool", error=e.message)
            raise CommandFailedError("Failed to connect to pool", e.message)

    async def connection_info(self, mode: AuthMode, demo_system_name: str) -> Dict[str, Any]:
        if not isinstance(mode, LiveMode):
            return {"type": ConnectionType.DEMO.value, "system_name": demo_system_name}

        try:
            address = await self.bridge.resolve_gateway(mode.credentials)
        except BridgeError as e:
            raise CommandFailedError("Failed to get connection info", e.message)
        return {
            "type": ConnectionType.LOCAL.value,
            "system_name": mode.credentials.system_name,
            "address": address.ip_addr,
            "port": address.port,
            "gateway_name": address.name,
        }

    async def configuration(self, mode: AuthMode, demo_system_name: str) -> Dict[str, Any]:
        """Full controller and equipment configuration"""
        if isinstance(mode, DemoMode):
            return await self.demo_store.configuration(demo_system_name)

        try:
            return await self.bridge.fetch_configuration(mode.credentials)
        except BridgeError as e:
            log.error("Failed to get config", error=e.message)
            raise CommandFailedError("Failed to get config", e.message)

    async def system_time(self, mode: AuthMode) -> SystemTime:
        if isinstance(mode, DemoMode):
            return await self.demo_store.system_time()

        try:
            return await self.bridge.fetch_system_time(mode.credentials)
        except BridgeError as e:
            log.error("Failed to get system time", error=e.message)
            raise CommandFailedError("Failed to get system time", e.message)
