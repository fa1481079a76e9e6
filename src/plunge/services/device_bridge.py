"""
Device Connection Bridge - one controller connection per command

Every call opens its own session, issues exactly one request, and closes
the session on every exit path:

    slot -> discover (cached) -> connect -> command -> close -> release slot

Failures from any step are normalized into BridgeError subclasses carrying
a readable message. Nothing is retried; the caller gets the first failure.

The only state shared between calls is the connection slot semaphore and
the gateway address cache. Sessions live in local variables.
"""

import asyncio
import itertools
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Dict, Optional, Tuple, TypeVar

from plunge.controller.controller_interface import GatewayAddress, IControllerClient, IControllerSession
from plunge.models.auth import Credentials
from plunge.models.commands import Command
from plunge.models.config import ControllerConfig
from plunge.models.enums import LogCategory
from plunge.models.status import PoolStatus, SystemTime
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.BRIDGE)

T = TypeVar("T")


class BridgeError(Exception):
    """Any failure talking to the physical controller"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DiscoveryError(BridgeError):
    """Gateway could not be located"""


class AuthenticationError(BridgeError):
    """Gateway found but the connection/login was refused"""


class BridgeTimeoutError(BridgeError):
    """A step did not finish within its timeout"""


class CommandError(BridgeError):
    """Command rejected or acknowledgement malformed"""


class DeviceBridge:
    """
    Executes single commands against a live controller.

    Example:
        bridge = DeviceBridge(ScreenLogicClient(), ControllerConfig())
        await bridge.execute(SetCircuit(505, True), credentials)
    """

    def __init__(self, client: IControllerClient, config: Optional[ControllerConfig] = None):
        """
        Args:
            client: Controller library adapter (discovery + connect)
            config: Timeouts, connection slots and cache TTL
        """
        self.client = client
        self.config = config or ControllerConfig()
        self._slots = asyncio.Semaphore(max(1, self.config.max_connections))
        self._gateway_cache: Dict[str, Tuple[GatewayAddress, float]] = {}
        self._connection_ids = itertools.count(1)

    # ----------------------------------------------------------------------
    # PUBLIC API
    # ----------------------------------------------------------------------

    async def execute(self, command: Command, credentials: Credentials) -> None:
        """
        Run one command on the controller.

        Raises:
            BridgeError: discovery, connection, timeout or command failure
        """
        async with self.session(credentials) as (session, connection_id):
            log.debug(f"Sending {command.kind.name}", connection=connection_id, **command.echo())
            ack = await self._step(
                command.send(session),
                self.config.command_timeout,
                f"Command {command.kind.name} timed out",
                CommandError,
            )
            if ack is False:
                raise CommandError(f"Controller did not acknowledge {command.kind.name}")
            log.info(f"{command.kind.name} acknowledged", connection=connection_id)

    async def fetch_status(self, credentials: Credentials) -> PoolStatus:
        async with self.session(credentials) as (session, _):
            status = await self._step(
                session.get_status(),
                self.config.command_timeout,
                "Status request timed out",
                CommandError,
            )
        if not isinstance(status, PoolStatus):
            raise CommandError("Controller returned a malformed status")
        return status

    async def fetch_configuration(self, credentials: Credentials) -> Dict[str, Any]:
        async with self.session(credentials) as (session, _):
            return await self._step(
                session.get_config(),
                self.config.command_timeout,
                "Configuration request timed out",
                CommandError,
            )

    async def fetch_system_time(self, credentials: Credentials) -> SystemTime:
        async with self.session(credentials) as (session, _):
            return await self._step(
                session.get_system_time(),
                self.config.command_timeout,
                "System time request timed out",
                CommandError,
            )

    async def resolve_gateway(self, credentials: Credentials) -> GatewayAddress:
        """Discover (or read from cache) without opening a connection"""
        return await self._discover(credentials.system_name)

    def clear_cache(self) -> None:
        """Forget discovered gateway addresses (forces re-discovery)"""
        self._gateway_cache.clear()
        log.info("Gateway cache cleared")

    @asynccontextmanager
    async def session(
        self, credentials: Credentials
    ) -> AsyncIterator[Tuple[IControllerSession, int]]:
        """
        Scoped controller session.

        Holds a connection slot for the whole block and closes the session
        on exit, whether the block succeeded or raised.
        """
        await self._acquire_slot()
        try:
            connection_id = next(self._connection_ids)
            session = await self._open(credentials, connection_id)
            started = time.monotonic()
            try:
                yield session, connection_id
            finally:
                await self._close(session, connection_id, started)
        finally:
            self._slots.release()

    # ----------------------------------------------------------------------
    # INTERNAL
    # ----------------------------------------------------------------------

    async def _acquire_slot(self) -> None:
        # wait_for() on Semaphore.acquire() can lose a slot that is won as the
        # timeout fires, so the acquisition is a task that _abandon() settles
        acquire = asyncio.ensure_future(self._slots.acquire())
        try:
            await asyncio.wait({acquire}, timeout=self.config.queue_timeout)
        except asyncio.CancelledError:
            self._abandon(acquire)
            raise
        if acquire.done() and not acquire.cancelled():
            return

        self._abandon(acquire)
        log.warn("Connection queue timeout", queue_timeout=self.config.queue_timeout)
        raise BridgeTimeoutError("Connection queue timeout - too many pending requests")

    def _abandon(self, acquire: "asyncio.Future[bool]") -> None:
        """Cancel a pending slot acquisition; give the slot back if it was won anyway"""
        def release_if_won(task: "asyncio.Future[bool]") -> None:
            if not task.cancelled() and task.exception() is None:
                self._slots.release()

        if acquire.done():
            release_if_won(acquire)
            return
        acquire.cancel()
        acquire.add_done_callback(release_if_won)

    async def _open(self, credentials: Credentials, connection_id: int) -> IControllerSession:
        system_name = credentials.system_name
        address = await self._discover(system_name)

        log.debug(
            f"Connection #{connection_id}: connecting",
            address=address.ip_addr,
            port=address.port
        )
        try:
            session = await self._step(
                self.client.connect(address, credentials),
                self.config.connect_timeout,
                f"Connection timeout after {self.config.connect_timeout}s",
                AuthenticationError,
            )
        except BridgeError:
            # Stale address or wrong gateway; next call rediscovers
            self._gateway_cache.pop(system_name, None)
            raise

        log.info(f"Connection #{connection_id}: established", gateway=address.name)
        return session

    async def _close(self, session: IControllerSession, connection_id: int, started: float) -> None:
        duration_ms = int((time.monotonic() - started) * 1000)
        try:
            await session.close()
            log.debug(f"Connection #{connection_id}: closed", duration_ms=duration_ms)
        except Exception as e:
            log.warn(
                f"Connection #{connection_id}: error during close",
                error=str(e),
                error_type=type(e).__name__
            )

    async def _discover(self, system_name: str) -> GatewayAddress:
        ttl = self.config.discovery_cache_ttl
        cached = self._gateway_cache.get(system_name)
        if cached and ttl > 0 and time.monotonic() < cached[1]:
            return cached[0]

        address = await self._step(
            self.client.discover_and_login(system_name),
            self.config.discovery_timeout,
            f"Gateway discovery timed out after {self.config.discovery_timeout}s",
            DiscoveryError,
        )
        if ttl > 0:
            self._gateway_cache[system_name] = (address, time.monotonic() + ttl)
        log.info("Gateway resolved", gateway=address.name, address=address.ip_addr, port=address.port)
        return address

    async def _step(
        self,
        awaitable: Awaitable[T],
        timeout: float,
        timeout_message: str,
        error_cls: type,
    ) -> T:
        """Await one bridge step under a timeout, normalizing its failures"""
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError:
            log.warn(timeout_message)
            raise BridgeTimeoutError(timeout_message)
        except BridgeError:
            raise
        except Exception as e:
            log.error(
                f"{error_cls.__name__}: {e}",
                error_type=type(e).__name__
            )
            raise error_cls(str(e) or type(e).__name__) from e
