"""Resolver registry for building and describing the plugin set."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from aliasresolve.resolution.http import HttpFetcher, RateLimitConfig
from aliasresolve.resolution.protocol import AliasResolver

if TYPE_CHECKING:
    from aliasresolve.config import AliasResolveSettings

# Sample aliases reported by describe()
SAMPLE_ALIASES: tuple[str, ...] = (
    "vitalik.eth",
    "brad.crypto",
    "$alice",
    "example.com",
    "alice@example.com",
    "muneeb.id",
    "alice.zil",
    "welcome",
    "example.bit",
    "acct:alice@example.com",
    "$example.com/alice",
    "alice@edge",
)


def describe_resolvers(resolvers: list[AliasResolver]) -> list[dict[str, Any]]:
    """Each plugin's name and which sample aliases it accepts."""
    return [
        {
            "name": resolver.name,
            "source_type": str(getattr(resolver, "SOURCE_TYPE", "")),
            "handles": [alias for alias in SAMPLE_ALIASES if resolver.can_resolve(alias)],
        }
        for resolver in resolvers
    ]


class ResolverRegistry:
    """
    Ordered collection of resolver plugins.

    Registration order is priority order: it decides tie-breaks between
    equally confident candidates.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._resolvers: list[AliasResolver] = []
        self._client = client

    def register(self, resolver: AliasResolver) -> None:
        """Append a resolver at the lowest priority."""
        self._resolvers.append(resolver)

    @property
    def resolvers(self) -> list[AliasResolver]:
        return list(self._resolvers)

    def __len__(self) -> int:
        return len(self._resolvers)

    def describe(self) -> list[dict[str, Any]]:
        return describe_resolvers(self._resolvers)

    @classmethod
    def from_settings(
        cls,
        settings: "AliasResolveSettings",
        client: httpx.AsyncClient | None = None,
    ) -> "ResolverRegistry":
        """
        Create a registry with every plugin configured from settings.

        All plugins share one pooled HTTP client; each gets its own rate limiter.
        """
        from aliasresolve.resolution.dns import DnsTxtResolver, DohClient, HandshakeResolver
        from aliasresolve.resolution.identity import (
            LightningAddressResolver,
            NostrResolver,
            PayStringResolver,
            WebFingerResolver,
            WellKnownResolver,
        )
        from aliasresolve.resolution.registries import (
            BnsResolver,
            CardanoNameServiceResolver,
            EnsResolver,
            FioResolver,
            NamecoinResolver,
            UnstoppableDomainsResolver,
            ZnsResolver,
        )

        if client is None:
            client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.http_timeout),
                follow_redirects=True,
            )
        registry = cls(client)

        def fetcher(source: str) -> HttpFetcher:
            return HttpFetcher(
                source,
                timeout=settings.http_timeout,
                rate_limit=RateLimitConfig(requests_per_second=settings.default_rate_limit_rps),
                client=client,
            )

        handshake_doh = f"{settings.handshake_gateway_url.rstrip('/')}/dns/query"

        registry.register(
            EnsResolver(fetcher("ens"), settings.ens_gateway_url, settings.ethereum_rpc_url)
        )
        registry.register(
            UnstoppableDomainsResolver(fetcher("unstoppable_domains"), settings.unstoppable_api_key)
        )
        registry.register(CardanoNameServiceResolver(fetcher("cns"), settings.koios_api_url))
        registry.register(DnsTxtResolver(DohClient(fetcher("dns_txt"), settings.doh_url)))
        registry.register(NostrResolver(fetcher("nostr")))
        registry.register(LightningAddressResolver(fetcher("lightning")))
        registry.register(BnsResolver(fetcher("bns"), settings.stacks_api_url))
        registry.register(ZnsResolver(fetcher("zns"), settings.zilliqa_api_url))
        registry.register(HandshakeResolver(DohClient(fetcher("handshake"), handshake_doh)))
        registry.register(NamecoinResolver(fetcher("namecoin"), settings.namecoin_api_url))
        registry.register(WebFingerResolver(fetcher("webfinger")))
        registry.register(WellKnownResolver(fetcher("well_known")))
        registry.register(PayStringResolver(fetcher("paystring")))
        registry.register(FioResolver(fetcher("fio"), settings.fio_api_url))

        return registry

    async def close_all(self) -> None:
        """Close the shared HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
