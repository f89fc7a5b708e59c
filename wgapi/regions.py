"""Wargaming server regions and the domain suffix each one is served from."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidConfiguration


class Region(str, Enum):
    """Closed set of API deployments."""

    NA = "na"
    RU = "ru"
    EU = "eu"
    SEA = "sea"

    @property
    def tld(self) -> str:
        return REGION_TLDS[self]

    @classmethod
    def from_code(cls, code: str) -> Region:
        """
        Resolve a region code case-insensitively.

        Args:
            code: Region code such as "NA", "eu" or "asia".

        Raises:
            InvalidConfiguration: If the code is empty or not a known region.
        """
        if not code or not isinstance(code, str):
            raise InvalidConfiguration("region may not be empty and must be a string")

        key = code.lower()
        if key in REGION_ALIASES:
            return REGION_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise InvalidConfiguration(f"invalid region specified: {code!r}") from None


REGION_TLDS: dict[Region, str] = {
    Region.NA: "com",
    Region.RU: "ru",
    Region.EU: "eu",
    Region.SEA: "sea",
}

# "asia" is an older name for the SEA cluster
REGION_ALIASES: dict[str, Region] = {
    "asia": Region.SEA,
}
