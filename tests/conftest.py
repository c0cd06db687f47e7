"""Shared test fixtures and configuration."""

import os

import pytest

# Never touch a real Redis during tests
os.environ.setdefault("REDIS_URL", "")

from countrylens.orchestrator.schemas import CountryRecord  # noqa: E402
from countrylens.services.cache import ExpiringCache  # noqa: E402


class FakeClock:
    """Controllable wall clock in seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSleep:
    """Records backoff delays instead of sleeping."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleep():
    return FakeSleep()


@pytest.fixture
def cache(clock):
    """Fresh in-memory cache on a controllable clock."""
    return ExpiringCache(ttl_seconds=86400, prefix="country_cache_", maxsize=128, clock=clock)


@pytest.fixture
def france_raw():
    """Sample REST Countries v3.1 record for France (trimmed)."""
    return {
        "name": {
            "common": "France",
            "official": "French Republic",
        },
        "tld": [".fr"],
        "cca2": "FR",
        "cca3": "FRA",
        "status": "officially-assigned",
        "unMember": True,
        "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
        "idd": {"root": "+3", "suffixes": ["3"]},
        "capital": ["Paris"],
        "region": "Europe",
        "subregion": "Western Europe",
        "languages": {"fra": "French"},
        "borders": ["AND", "BEL", "DEU", "ITA", "LUX", "MCO", "ESP", "CHE"],
        "area": 551695.0,
        "maps": {"googleMaps": "https://goo.gl/maps/g7QxxSFsWyTPKuzd7"},
        "population": 67391582,
        "car": {"signs": ["F"], "side": "right"},
        "flags": {
            "png": "https://flagcdn.com/w320/fr.png",
            "svg": "https://flagcdn.com/fr.svg",
        },
        "coatOfArms": {
            "png": "https://mainfacts.com/media/images/coats_of_arms/fr.png",
            "svg": "https://mainfacts.com/media/images/coats_of_arms/fr.svg",
        },
    }


@pytest.fixture
def germany_raw():
    return {
        "name": {"common": "Germany", "official": "Federal Republic of Germany"},
        "tld": [".de"],
        "cca2": "DE",
        "cca3": "DEU",
        "status": "officially-assigned",
        "unMember": True,
        "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
        "idd": {"root": "+4", "suffixes": ["9"]},
        "capital": ["Berlin"],
        "region": "Europe",
        "languages": {"deu": "German"},
        "borders": ["AUT", "BEL", "CZE", "DNK", "FRA", "LUX", "NLD", "POL", "CHE"],
        "area": 357114.0,
        "population": 83240525,
        "car": {"side": "right"},
        "flags": {"svg": "https://flagcdn.com/de.svg"},
    }


@pytest.fixture
def iceland_raw():
    """An island nation — no land borders."""
    return {
        "name": {"common": "Iceland", "official": "Iceland"},
        "tld": [".is"],
        "cca2": "IS",
        "cca3": "ISL",
        "unMember": True,
        "currencies": {"ISK": {"name": "Icelandic króna", "symbol": "kr"}},
        "idd": {"root": "+3", "suffixes": ["54"]},
        "capital": ["Reykjavik"],
        "region": "Europe",
        "languages": {"isl": "Icelandic"},
        "area": 103000.0,
        "population": 366425,
        "car": {"side": "right"},
        "flags": {"svg": "https://flagcdn.com/is.svg"},
    }


@pytest.fixture
def france(france_raw):
    return CountryRecord.from_api(france_raw)


@pytest.fixture
def germany(germany_raw):
    return CountryRecord.from_api(germany_raw)


@pytest.fixture
def iceland(iceland_raw):
    return CountryRecord.from_api(iceland_raw)
