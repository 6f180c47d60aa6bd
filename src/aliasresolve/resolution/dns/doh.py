"""DNS-over-HTTPS TXT lookups using the JSON wire format."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

TXT_RECORD_TYPE = 16

_QUOTED_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')


def clean_txt_data(data: str) -> str:
    """Strip presentation quoting from a TXT answer, joining multi-string records."""
    parts = _QUOTED_STRING.findall(data)
    if not parts:
        return data.strip()
    return "".join(part.replace('\\"', '"') for part in parts)


@dataclass
class TxtLookup:
    """TXT answers for one name plus the resolver's authenticated-data flag."""

    name: str
    records: list[str] = field(default_factory=list)
    authenticated: bool = False
    status: int = 0


class DohClient:
    """Queries a JSON DoH endpoint (Cloudflare, Google, HNS gateways)."""

    def __init__(self, fetcher: HttpFetcher, url: str) -> None:
        self._fetcher = fetcher
        self.url = url

    async def query_txt(self, name: str) -> TxtLookup | None:
        """Look up TXT records; None when the endpoint answers with an error status."""
        data = await self._fetcher.get_json(
            self.url,
            params={"name": name, "type": "TXT"},
            headers={"Accept": "application/dns-json"},
        )
        if data is None:
            logger.debug(f"DoH query for {name} at {self.url} failed")
            return None

        records = [
            clean_txt_data(answer["data"])
            for answer in data.get("Answer") or []
            if answer.get("type") == TXT_RECORD_TYPE and answer.get("data")
        ]
        return TxtLookup(
            name=name,
            records=records,
            authenticated=bool(data.get("AD")),
            status=int(data.get("Status", 0)),
        )
