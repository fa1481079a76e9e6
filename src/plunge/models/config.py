"""
Configuration models

Typed view over config.yaml. Every section and key is optional; missing
values fall back to the dataclass defaults below.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from plunge.models.enums import LogLevel


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a config dataclass from a dict, ignoring unknown keys"""
    data = data or {}
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    docs_enabled: bool = True
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])


@dataclass
class LoggingConfig:
    level: str = "INFO"
    use_colors: bool = True

    @property
    def log_level(self) -> LogLevel:
        try:
            return LogLevel[self.level.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {self.level}")


@dataclass
class ControllerConfig:
    """Connection tuning for the live bridge (seconds unless noted)"""
    host: Optional[str] = None              # Skip discovery and connect here
    port: int = 80
    discovery_timeout: float = 5.0
    connect_timeout: float = 15.0
    command_timeout: float = 10.0
    queue_timeout: float = 10.0
    max_connections: int = 1
    discovery_cache_ttl: float = 900.0      # 0 disables the gateway cache


@dataclass
class CredentialsConfig:
    strict: bool = False                    # Reject malformed credential headers


@dataclass
class DemoConfig:
    system_name: str = "demo"
    data_file: str = "demo_data.yaml"       # Relative to the config directory


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'AppConfig':
        data = data or {}
        return cls(
            server=_section(ServerConfig, data.get("server")),
            logging=_section(LoggingConfig, data.get("logging")),
            controller=_section(ControllerConfig, data.get("controller")),
            credentials=_section(CredentialsConfig, data.get("credentials")),
            demo=_section(DemoConfig, data.get("demo")),
        )
