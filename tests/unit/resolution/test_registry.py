"""Tests for the resolver registry."""

from __future__ import annotations

from fakes import FakeResolver

from aliasresolve.resolution.protocol import AliasResolver
from aliasresolve.resolution.registry import ResolverRegistry


class TestResolverRegistry:
    """Tests for ResolverRegistry."""

    def test_register_keeps_order(self):
        """Registration order is priority order."""
        registry = ResolverRegistry()
        registry.register(FakeResolver("first"))
        registry.register(FakeResolver("second"))

        assert [r.name for r in registry.resolvers] == ["first", "second"]
        assert len(registry) == 2

    def test_from_settings_builds_every_plugin(self, test_settings, http_client):
        """All fourteen naming systems are registered in priority order."""
        registry = ResolverRegistry.from_settings(test_settings, client=http_client)

        names = [r.name for r in registry.resolvers]
        assert len(names) == 14
        assert names[0] == "ENS"
        assert all(isinstance(r, AliasResolver) for r in registry.resolvers)

    def test_describe(self, test_settings, http_client):
        """Describe lists each plugin's source type and sample coverage."""
        registry = ResolverRegistry.from_settings(test_settings, client=http_client)
        described = {entry["source_type"]: entry for entry in registry.describe()}

        assert described["ens"]["handles"] == ["vitalik.eth"]
        assert "brad.crypto" in described["unstoppable_domains"]["handles"]
        assert "alice@example.com" in described["nostr_nip05"]["handles"]

    async def test_close_all_closes_shared_client(self, test_settings, http_client):
        """Closing the registry closes the shared client."""
        registry = ResolverRegistry.from_settings(test_settings, client=http_client)
        await registry.close_all()
        assert http_client.is_closed
