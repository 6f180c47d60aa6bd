"""Core enums and type definitions."""

from enum import StrEnum

ALL_CHAINS = "all"


class SourceType(StrEnum):
    """Naming systems a resolved candidate can come from."""

    # Name registries
    ENS = "ens"
    UNSTOPPABLE_DOMAINS = "unstoppable_domains"
    CARDANO_NAME_SERVICE = "cardano_name_service"
    BNS = "bns"
    ZNS = "zns"
    NAMECOIN = "namecoin"
    FIO = "fio"

    # DNS backed
    DNS_TXT = "dns_txt"
    HANDSHAKE = "handshake"

    # Identity protocols
    NOSTR_NIP05 = "nostr_nip05"
    LIGHTNING_ADDRESS = "lightning_address"
    WEBFINGER = "webfinger"
    WELL_KNOWN = "well_known"
    PAYSTRING = "paystring"


class VerificationMethod(StrEnum):
    """Which ownership proofs a verification run checks."""

    DNS = "dns"
    HTTPS = "https"
    BOTH = "both"


class TrustStatus(StrEnum):
    """Human-facing bucket for a trust score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class AlertChannel(StrEnum):
    """Delivery channels for monitoring alerts."""

    EMAIL = "email"
    WEBHOOK = "webhook"


class AlertType(StrEnum):
    """Reasons a monitoring alert is raised."""

    ADDRESS_CHANGED = "address_changed"
    TRUST_SCORE_DROP = "trust_score_drop"
    VERIFICATION_FAILED = "verification_failed"


class WebhookEvent(StrEnum):
    """Event names sent in outbound webhook payloads."""

    ADDRESS_CHANGED = "alias.address.changed"
    TRUST_SCORE_DROP = "trust_score_drop"
