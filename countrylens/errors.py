"""Exception taxonomy for country lookups.

Every error carries a user-facing message; the search controller renders
``str(exc)`` and never lets these escape a lookup.
"""


class CountryLensError(Exception):
    """Base exception with a message fit for display."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NotFoundError(CountryLensError):
    default_message = "Country not found"


class RateLimitError(CountryLensError):
    """Upstream kept answering 429 after all retries."""

    default_message = "Too many requests. Please try again in a moment."

    def __init__(self, url: str, message: str | None = None):
        super().__init__(message)
        self.url = url


class NetworkError(CountryLensError):
    """Transport failure that survived every retry."""

    default_message = "Network error. Please check your connection and try again."

    def __init__(self, url: str, message: str | None = None):
        super().__init__(message)
        self.url = url


class RegionSearchError(CountryLensError):
    default_message = "Failed to search by region"


class RandomSearchError(CountryLensError):
    default_message = "Failed to get random country"
