"""
Credential and auth-mode models

A request runs either against a live controller (LiveMode, carrying the
credentials) or against the in-memory demo backend (DemoMode). The mode is
resolved once per request and passed explicitly down the call chain.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Credentials:
    """Controller login; never persisted, password kept out of repr"""
    system_name: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class LiveMode:
    credentials: Credentials

    @property
    def is_demo(self) -> bool:
        return False


@dataclass(frozen=True)
class DemoMode:
    reason: str = "no credentials"

    @property
    def is_demo(self) -> bool:
        return True


AuthMode = Union[LiveMode, DemoMode]
