"""Cryptocurrency address syntax checks and chain name normalization."""

from __future__ import annotations

import re

from aliasresolve.core.types import ALL_CHAINS

# Base58 alphabet excludes 0, O, I and l
BITCOIN_P2PKH_PATTERN = re.compile(r"^1[a-km-zA-HJ-NP-Z1-9]{25,34}$")
BITCOIN_P2SH_PATTERN = re.compile(r"^3[a-km-zA-HJ-NP-Z1-9]{25,34}$")
BITCOIN_BECH32_PATTERN = re.compile(r"^bc1[a-z0-9]{39,87}$")

ETHEREUM_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

LIGHTNING_INVOICE_PATTERN = re.compile(r"^ln[a-z0-9]+$", re.IGNORECASE)
LNURL_PATTERN = re.compile(r"^lnurl[a-z0-9]+$", re.IGNORECASE)
USER_AT_DOMAIN_PATTERN = re.compile(r"^[a-z0-9._-]+@[a-z0-9.-]+\.[a-z]{2,}$", re.IGNORECASE)

CHAIN_ALIASES: dict[str, str] = {
    "btc": "bitcoin",
    "xbt": "bitcoin",
    "eth": "ethereum",
    "ln": "lightning",
    "ada": "cardano",
    "stx": "stacks",
    "zil": "zilliqa",
    "sol": "solana",
    "matic": "polygon",
    "avax": "avalanche",
    "dot": "polkadot",
    "ltc": "litecoin",
    "doge": "dogecoin",
    "xrp": "ripple",
    "xrpl": "ripple",
}


def normalize_chain(chain: str | None) -> str:
    """Map a ticker or chain name to its canonical lowercase chain name.

    Empty input means every chain and is returned as ``"all"``.
    """
    if not chain:
        return ALL_CHAINS
    value = chain.strip().lower()
    if not value:
        return ALL_CHAINS
    return CHAIN_ALIASES.get(value, value)


def chain_matches(requested: str | None, currency: str) -> bool:
    """Whether a candidate currency passes the requested chain filter."""
    wanted = normalize_chain(requested)
    return wanted == ALL_CHAINS or wanted == normalize_chain(currency)


def validate_bitcoin_address(address: str) -> bool:
    """Validate P2PKH, P2SH and bech32 Bitcoin address syntax."""
    if not address or not isinstance(address, str):
        return False
    return bool(
        BITCOIN_P2PKH_PATTERN.match(address)
        or BITCOIN_P2SH_PATTERN.match(address)
        or BITCOIN_BECH32_PATTERN.match(address)
    )


def validate_ethereum_address(address: str) -> bool:
    """Validate ``0x``-prefixed 40 hex digit Ethereum addresses.

    Mixed-case addresses are accepted without EIP-55 checksum verification.
    """
    if not address or not isinstance(address, str):
        return False
    return bool(ETHEREUM_PATTERN.match(address))


def validate_lightning_address(address: str) -> bool:
    """Validate Lightning invoices, LNURLs and ``user@domain`` addresses."""
    if not address or not isinstance(address, str):
        return False
    return bool(
        LIGHTNING_INVOICE_PATTERN.match(address)
        or LNURL_PATTERN.match(address)
        or USER_AT_DOMAIN_PATTERN.match(address)
    )


def validate_address(address: str, currency: str) -> bool:
    """Validate an address for the given currency.

    Unknown currencies only get a length sanity check.
    """
    match normalize_chain(currency):
        case "bitcoin":
            return validate_bitcoin_address(address)
        case "ethereum":
            return validate_ethereum_address(address)
        case "lightning":
            return validate_lightning_address(address)
        case _:
            return bool(address) and isinstance(address, str) and 10 < len(address) < 200
