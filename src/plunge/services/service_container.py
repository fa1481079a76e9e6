"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from plunge.controller.controller_interface import IControllerClient
from plunge.models.config import AppConfig
from plunge.services.credential_resolver import CredentialResolver
from plunge.services.demo_store import DemoStore
from plunge.services.device_bridge import DeviceBridge


@dataclass
class ServiceContainer:
    """
    Everything the API layer needs, created once per app.

    Usage:
        services = ServiceContainer.build(config, client, demo_data_path)
        app = create_app(services=services)

        @router.get("/status")
        async def status(services: ServiceContainer = Depends(get_service_container)):
            ...
    """

    config: AppConfig
    resolver: CredentialResolver
    bridge: DeviceBridge
    demo_store: DemoStore

    @classmethod
    def build(
        cls,
        config: AppConfig,
        client: IControllerClient,
        demo_data_path: Optional[Path] = None,
        demo_store: Optional[DemoStore] = None
    ) -> 'ServiceContainer':
        return cls(
            config=config,
            resolver=CredentialResolver(
                demo_system_name=config.demo.system_name,
                strict=config.credentials.strict,
            ),
            bridge=DeviceBridge(client, config.controller),
            demo_store=demo_store or DemoStore(seed_path=demo_data_path),
        )
