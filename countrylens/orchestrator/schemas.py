"""Pydantic models shared by the cache, repository and controller.

Split into: cache entries, country records, and lookup tickets.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ═══════════════ CACHE ═══════════════

class CacheEntry(BaseModel):
    """Stored form of every cached value — ``timestamp`` is epoch milliseconds."""
    timestamp: int
    data: Any = None


# ═══════════════ COUNTRY RECORDS ═══════════════

class Currency(BaseModel):
    name: str = ""
    symbol: str = ""

    model_config = {"frozen": True}


class CountryRecord(BaseModel):
    """A single country as returned by REST Countries v3.1, flattened."""

    common_name: str
    official_name: str = ""
    capital: list[str] = Field(default_factory=list)
    population: int = 0
    area: float = 0.0
    region: str = ""
    subregion: str = ""
    currencies: dict[str, Currency] = Field(default_factory=dict)
    languages: dict[str, str] = Field(default_factory=dict)
    borders: list[str] = Field(default_factory=list)
    flag_url: str = ""
    maps_url: str = ""
    calling_code: str = ""
    top_level_domain: str = ""
    un_member: bool = False
    driving_side: str = ""
    status: str = ""
    coat_of_arms_url: str = ""
    cca2: str = ""
    cca3: str = ""

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Lowercased common name — the canonical cache key."""
        return self.common_name.lower()

    @property
    def has_borders(self) -> bool:
        return bool(self.borders)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> CountryRecord:
        name = raw.get("name") or {}
        flags = raw.get("flags") or {}
        coat = raw.get("coatOfArms") or {}
        idd = raw.get("idd") or {}
        suffixes = idd.get("suffixes") or []
        tld = raw.get("tld") or []
        return cls(
            common_name=name.get("common", ""),
            official_name=name.get("official", ""),
            capital=raw.get("capital") or [],
            population=raw.get("population") or 0,
            area=raw.get("area") or 0.0,
            region=raw.get("region") or "",
            subregion=raw.get("subregion") or "",
            currencies={
                code: Currency(name=c.get("name") or "", symbol=c.get("symbol") or "")
                for code, c in (raw.get("currencies") or {}).items()
            },
            languages=raw.get("languages") or {},
            borders=raw.get("borders") or [],
            flag_url=flags.get("svg") or flags.get("png") or "",
            maps_url=(raw.get("maps") or {}).get("googleMaps", ""),
            calling_code=f"{idd.get('root', '')}{suffixes[0] if suffixes else ''}",
            top_level_domain=tld[0] if tld else "",
            un_member=bool(raw.get("unMember", False)),
            driving_side=(raw.get("car") or {}).get("side", ""),
            status=raw.get("status") or "",
            coat_of_arms_url=coat.get("svg") or coat.get("png") or "",
            cca2=raw.get("cca2", ""),
            cca3=raw.get("cca3", ""),
        )


# ═══════════════ LOOKUPS ═══════════════

class LookupKind(str, Enum):
    BY_NAME = "by_name"
    BY_REGION = "by_region"
    RANDOM = "random"


class LookupTicket(BaseModel):
    """Identifies one user-initiated lookup.

    Only the ticket whose ``generation`` matches the controller's current
    generation may render or toggle the loader; older tickets finish
    silently.
    """

    generation: int
    kind: LookupKind
    query: str | None = None

    model_config = {"frozen": True}
