"""CountryLens — country lookups with an expiring cache and stale-result guard."""

__version__ = "1.0.0"
