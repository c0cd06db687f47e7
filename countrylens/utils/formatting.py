"""Display helpers for a country card — number formatting and summaries."""

from urllib.parse import quote

from countrylens.orchestrator.schemas import CountryRecord

# Russia — the largest country, used as the 100% reference for land area
LARGEST_AREA_KM2 = 17098242

NOT_AVAILABLE = "N/A"


def format_number(num: float) -> str:
    """Compact population figure: ``1.41 B``, ``67.39 M``, ``12.3 K``."""
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.2f} B"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.2f} M"
    if num >= 1_000:
        return f"{num / 1_000:.1f} K"
    return str(num)


def format_area(area: float) -> str:
    if area == int(area):
        return f"{int(area):,} km²"
    return f"{area:,} km²"


def area_share(area: float) -> float:
    """Land area as a percentage of the largest country, capped at 100."""
    return min(area / LARGEST_AREA_KM2 * 100, 100.0)


def currencies_text(record: CountryRecord) -> str:
    return ", ".join(f"{c.name} ({c.symbol})" for c in record.currencies.values()) or NOT_AVAILABLE


def languages_text(record: CountryRecord) -> str:
    return ", ".join(record.languages.values()) or NOT_AVAILABLE


def wikipedia_url(record: CountryRecord) -> str:
    return f"https://en.wikipedia.org/wiki/{quote(record.common_name.replace(' ', '_'))}"


def card_fields(record: CountryRecord) -> list[tuple[str, str]]:
    """Label/value pairs in card order."""
    return [
        ("Capital", record.capital[0] if record.capital else NOT_AVAILABLE),
        ("Population", format_number(record.population)),
        ("Calling Code", record.calling_code or NOT_AVAILABLE),
        ("Top Level Domain", record.top_level_domain or NOT_AVAILABLE),
        ("Currency", currencies_text(record)),
        ("Languages", languages_text(record)),
        ("Total land area", format_area(record.area)),
    ]
