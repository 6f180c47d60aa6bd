"""OpenAlias record parsing (``oa1:<ticker> recipient_address=...;``)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from aliasresolve.core.addresses import normalize_chain

_OPENALIAS_PREFIX = re.compile(r"^\s*oa1:([a-z0-9]+)\s+(.*)$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class OpenAliasEntry:
    ticker: str
    fields: dict[str, str] = field(default_factory=dict)

    @property
    def chain(self) -> str:
        return normalize_chain(self.ticker)

    @property
    def address(self) -> str | None:
        return self.fields.get("recipient_address")


def parse_openalias(record: str) -> OpenAliasEntry | None:
    """Parse one TXT string or file line; None when it is not OpenAlias."""
    match = _OPENALIAS_PREFIX.match(record)
    if not match:
        return None
    fields: dict[str, str] = {}
    for part in match.group(2).split(";"):
        key, sep, value = part.strip().partition("=")
        if sep and key:
            fields[key.strip().lower()] = value.strip()
    return OpenAliasEntry(ticker=match.group(1).lower(), fields=fields)


def openalias_entries(records: list[str]) -> list[OpenAliasEntry]:
    """All OpenAlias entries carrying a recipient address."""
    entries = []
    for record in records:
        entry = parse_openalias(record)
        if entry is not None and entry.address:
            entries.append(entry)
    return entries
