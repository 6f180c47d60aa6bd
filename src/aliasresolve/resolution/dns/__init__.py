"""DNS-backed resolvers and DoH helpers."""

from aliasresolve.resolution.dns.doh import DohClient, TxtLookup, clean_txt_data
from aliasresolve.resolution.dns.handshake import HandshakeResolver
from aliasresolve.resolution.dns.openalias import (
    OpenAliasEntry,
    openalias_entries,
    parse_openalias,
)
from aliasresolve.resolution.dns.txt import DnsTxtResolver

__all__ = [
    "DnsTxtResolver",
    "DohClient",
    "HandshakeResolver",
    "OpenAliasEntry",
    "TxtLookup",
    "clean_txt_data",
    "openalias_entries",
    "parse_openalias",
]
