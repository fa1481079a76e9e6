"""Tests for CredentialResolver (live vs demo decision)"""

import pytest

from plunge.models.auth import DemoMode, LiveMode
from plunge.services.credential_resolver import CredentialResolver, CredentialsError


@pytest.fixture
def resolver():
    return CredentialResolver()


class TestResolve:

    def test_no_headers_is_demo(self, resolver):
        mode = resolver.resolve({})
        assert isinstance(mode, DemoMode)
        assert mode.is_demo

    def test_both_headers_is_live(self, resolver):
        mode = resolver.resolve({"X-Pool-System-Name": "Pentair: 12-34-56", "X-Pool-Password": "pw"})

        assert isinstance(mode, LiveMode)
        assert not mode.is_demo
        assert mode.credentials.system_name == "Pentair: 12-34-56"
        assert mode.credentials.password == "pw"

    def test_values_are_stripped(self, resolver):
        mode = resolver.resolve({"X-Pool-System-Name": "  Pentair: 12-34-56 ", "X-Pool-Password": "pw"})
        assert mode.credentials.system_name == "Pentair: 12-34-56"

    def test_lowercase_header_names(self, resolver):
        mode = resolver.resolve({"x-pool-system-name": "Pentair: 12-34-56", "x-pool-password": "pw"})
        assert isinstance(mode, LiveMode)

    def test_demo_system_name(self, resolver):
        mode = resolver.resolve({"X-Pool-System-Name": "Demo", "X-Pool-Password": "anything"})
        assert isinstance(mode, DemoMode)
        assert mode.reason == "demo login"

    @pytest.mark.parametrize("headers", [
        {"X-Pool-System-Name": "Pentair: 12-34-56"},
        {"X-Pool-Password": "pw"},
        {"X-Pool-System-Name": "   ", "X-Pool-Password": "pw"},
        {"X-Pool-System-Name": "Pentair: 12-34-56", "X-Pool-Password": ""},
    ])
    def test_malformed_is_demo_by_default(self, resolver, headers):
        mode = resolver.resolve(headers)
        assert isinstance(mode, DemoMode)
        assert mode.reason == "malformed credentials"

    def test_malformed_rejected_in_strict_mode(self):
        resolver = CredentialResolver(strict=True)

        with pytest.raises(CredentialsError, match="must both be non-empty"):
            resolver.resolve({"X-Pool-System-Name": "Pentair: 12-34-56"})

    def test_strict_mode_still_allows_absent_credentials(self):
        assert isinstance(CredentialResolver(strict=True).resolve({}), DemoMode)

    def test_password_not_in_repr(self, resolver):
        mode = resolver.resolve({"X-Pool-System-Name": "Pentair: 12-34-56", "X-Pool-Password": "hunter2"})
        assert "hunter2" not in repr(mode)
