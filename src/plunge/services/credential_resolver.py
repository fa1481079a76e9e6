"""
Credential Resolver - decides live vs demo for each request

Credentials travel in two headers:
    X-Pool-System-Name: Pentair: XX-XX-XX
    X-Pool-Password:    secret

Both present and non-blank -> LiveMode. Anything else -> DemoMode.

Malformed credentials (only one header, or blank values) are treated as
demo mode rather than rejected. This leniency is intentional; set
credentials.strict in config.yaml to reject them with a 400 instead.
"""

from typing import Mapping, Optional

from plunge.models.auth import AuthMode, Credentials, DemoMode, LiveMode
from plunge.models.enums import LogCategory
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.AUTH)

SYSTEM_NAME_HEADER = "X-Pool-System-Name"
PASSWORD_HEADER = "X-Pool-Password"


class CredentialsError(Exception):
    """Malformed credentials in strict mode"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CredentialResolver:

    def __init__(self, demo_system_name: Optional[str] = "demo", strict: bool = False):
        """
        Args:
            demo_system_name: Login name that always selects demo mode (None disables)
            strict: Raise CredentialsError for malformed credentials
        """
        self.demo_system_name = demo_system_name
        self.strict = strict

    def resolve(self, headers: Mapping[str, str]) -> AuthMode:
        """
        Resolve the auth mode from request headers.

        Never raises for missing credentials.

        Raises:
            CredentialsError: strict mode and credentials are malformed
        """
        system_name = self._header(headers, SYSTEM_NAME_HEADER)
        password = self._header(headers, PASSWORD_HEADER)

        if system_name is None and password is None:
            return DemoMode("no credentials")

        if not system_name or not password:
            problem = f"{SYSTEM_NAME_HEADER} and {PASSWORD_HEADER} must both be non-empty"
            if self.strict:
                log.warn("Rejecting malformed credentials")
                raise CredentialsError(problem)
            log.warn("Malformed credentials, falling back to demo mode")
            return DemoMode("malformed credentials")

        if self.demo_system_name and system_name.lower() == self.demo_system_name.lower():
            return DemoMode("demo login")

        return LiveMode(Credentials(system_name=system_name, password=password))

    @staticmethod
    def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
        """Header value stripped; None when absent, '' when blank"""
        value = headers.get(name)
        if value is None:
            value = headers.get(name.lower())
        if value is None:
            return None
        return value.strip()
