"""Tests for pydantic models — record parsing and tickets."""

import pytest
from pydantic import ValidationError

from countrylens.orchestrator.schemas import CacheEntry, CountryRecord, LookupKind, LookupTicket


class TestCountryRecord:
    def test_from_api(self, france_raw):
        record = CountryRecord.from_api(france_raw)

        assert record.common_name == "France"
        assert record.official_name == "French Republic"
        assert record.capital == ["Paris"]
        assert record.population == 67391582
        assert record.area == 551695.0
        assert record.region == "Europe"
        assert record.currencies["EUR"].name == "Euro"
        assert record.currencies["EUR"].symbol == "€"
        assert record.languages == {"fra": "French"}
        assert "DEU" in record.borders
        assert record.flag_url == "https://flagcdn.com/fr.svg"
        assert record.maps_url.startswith("https://goo.gl/maps/")
        assert record.calling_code == "+33"
        assert record.top_level_domain == ".fr"
        assert record.un_member is True
        assert record.driving_side == "right"
        assert record.status == "officially-assigned"
        assert record.coat_of_arms_url.endswith("fr.svg")
        assert record.cca3 == "FRA"

    def test_key_is_lowercase_common_name(self, france):
        assert france.key == "france"

    def test_minimal_payload_defaults(self):
        record = CountryRecord.from_api({"name": {"common": "Bouvet Island"}})

        assert record.capital == []
        assert record.population == 0
        assert record.currencies == {}
        assert record.borders == []
        assert record.calling_code == ""
        assert record.top_level_domain == ""
        assert record.has_borders is False

    def test_png_flag_fallback(self):
        record = CountryRecord.from_api({
            "name": {"common": "X"},
            "flags": {"png": "https://flagcdn.com/w320/x.png"},
            "coatOfArms": {},
        })
        assert record.flag_url == "https://flagcdn.com/w320/x.png"
        assert record.coat_of_arms_url == ""

    def test_restored_from_cache_dump(self, france):
        assert CountryRecord.model_validate(france.model_dump(mode="json")) == france

    def test_frozen(self, france):
        with pytest.raises(ValidationError):
            france.common_name = "Gaul"


class TestCacheEntry:
    def test_json_layout(self):
        entry = CacheEntry(timestamp=1000, data={"a": 1})
        assert entry.model_dump() == {"timestamp": 1000, "data": {"a": 1}}

    def test_invalid_json_rejected(self):
        with pytest.raises(ValidationError):
            CacheEntry.model_validate_json("not json")


class TestLookupTicket:
    def test_fields(self):
        ticket = LookupTicket(generation=3, kind=LookupKind.BY_REGION, query="europe")
        assert ticket.kind.value == "by_region"
        assert ticket.query == "europe"

    def test_random_has_no_query(self):
        assert LookupTicket(generation=1, kind=LookupKind.RANDOM).query is None
