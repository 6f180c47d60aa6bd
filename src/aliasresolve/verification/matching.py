"""Comparison of published addresses against the expected binding."""

from __future__ import annotations

from dataclasses import dataclass, field

from aliasresolve.core.addresses import normalize_chain


@dataclass
class MatchResult:
    verified: bool = False
    found: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def match_expected(
    expected: dict[str, str],
    published: dict[str, list[str]],
    missing_template: str,
) -> MatchResult:
    """
    Check every expected ``{chain: address}`` pair against ``published``.

    ``published`` is keyed by canonical chain name. A chain with no
    published address is a warning (formatted from ``missing_template``
    with ``chain``); any published address that differs from the expected
    one is an error. The channel verifies only when at least one chain
    matched exactly and there were no errors.
    """
    result = MatchResult()
    matched = False

    for chain, expected_address in expected.items():
        addresses = published.get(normalize_chain(chain), [])
        if not addresses:
            result.warnings.append(missing_template.format(chain=chain))
            continue
        for address in addresses:
            result.found.setdefault(chain, address)
            if address == expected_address:
                matched = True
            else:
                result.errors.append(
                    f"Address mismatch for {chain}: expected {expected_address}, found {address}"
                )

    result.verified = matched and not result.errors
    return result
