"""Identity-protocol resolvers (Nostr, Lightning, WebFinger, well-known, PayString)."""

from aliasresolve.resolution.identity.lightning import LightningAddressResolver
from aliasresolve.resolution.identity.nostr import NostrResolver
from aliasresolve.resolution.identity.paystring import PayStringResolver, parse_paystring
from aliasresolve.resolution.identity.webfinger import WebFingerResolver
from aliasresolve.resolution.identity.well_known import WellKnownResolver

__all__ = [
    "LightningAddressResolver",
    "NostrResolver",
    "PayStringResolver",
    "WebFingerResolver",
    "WellKnownResolver",
    "parse_paystring",
]
