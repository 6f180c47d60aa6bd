"""Cache key builders for consistent key formatting."""

from aliasresolve.core.types import ALL_CHAINS


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    PREFIX = "aliasresolve"

    @classmethod
    def resolution(cls, alias: str, chain: str | None = ALL_CHAINS) -> str:
        """Key for a resolution outcome; alias and chain are case-insensitive."""
        chain = (chain or ALL_CHAINS).strip() or ALL_CHAINS
        return f"{cls.PREFIX}:resolve:{alias.strip()}:{chain}".lower()

    @classmethod
    def resolution_pattern(cls) -> str:
        """Glob matching every resolution key."""
        return f"{cls.PREFIX}:resolve:*"
