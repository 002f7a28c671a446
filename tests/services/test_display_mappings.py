# -*- coding: utf-8 -*-
"""
Tests for display mappings and the entity models they read.
"""

import pytest

from models.advertising_area import AdvertisingArea, RateInfo
from models.property import Property
from services.display_mappings import (
    area_daily_price, area_display_name, area_price_display, area_type_label,
    property_address, property_display_name, property_type_label
)


def make_area(**data):
    data.setdefault("id", "a")
    return AdvertisingArea.from_dict(data, property_id="p")


class TestPropertyMappings:
    """Test property labels."""

    def test_display_name_fallbacks(self):
        assert property_display_name(Property.from_dict({"id": "1", "title": "T", "name": "N"})) == "T"
        assert property_display_name(Property.from_dict({"id": "1", "name": "N"})) == "N"
        assert property_display_name(Property.from_dict({"id": "1"})) == "Unnamed Property"

    def test_address(self):
        full = Property.from_dict({"id": "1", "address": "1 Main St", "city": "Irvine", "state": "CA"})
        city_only = Property.from_dict({"id": "2", "city": "Irvine", "state": "CA"})
        nested = Property.from_dict({"id": "3", "location": {"address": "9 Elm", "city": "Tustin"}})

        assert property_address(full) == "1 Main St, Irvine, CA"
        assert property_address(city_only) == "Irvine, CA"
        assert property_address(nested) == "9 Elm, Tustin"
        assert property_address(Property.from_dict({"id": "4"})) == "Address not available"

    @pytest.mark.parametrize("property_type, expected", [
        ("OFFICE", "Office Building"),
        ("RETAIL", "Retail Space"),
        ("WAREHOUSE", "Warehouse"),
        ("PARKING", "Parking"),
        ("", "Property"),
    ])
    def test_type_label(self, property_type, expected):
        prop = Property.from_dict({"id": "1", "propertyType": property_type})
        assert property_type_label(prop) == expected

    def test_embedded_areas_belong_to_property(self):
        prop = Property.from_dict({
            "id": "p9",
            "advertising_areas": [{"id": "x"}, {"id": "y"}],
        })
        assert prop.has_embedded_areas is True
        assert [a.property_id for a in prop.advertising_areas] == ["p9", "p9"]
        assert Property.from_dict({"id": "p"}).advertising_areas is None


class TestAreaMappings:
    """Test area labels and pricing."""

    def test_display_name_and_type(self):
        assert area_display_name(make_area()) == "Unnamed Advertising Area"
        assert area_type_label(make_area(type="LUXURY_VIDEO_WALL")) == "Luxury Video Wall"
        assert area_type_label(make_area(type="roof_banner")) == "Roof banner"
        assert area_type_label(make_area()) == "Advertising Area"

    @pytest.mark.parametrize("data, expected", [
        ({"baseRate": 350}, "$350/day"),
        ({"baseRate": "6800.00", "rateType": "monthly"}, "$6800/month"),
        ({"baseRate": 40, "rateType": "HOURLY", "currency": "EUR"}, "€40/hr"),
        ({"baseRate": 100, "currency": "GBP"}, "GBP 100/day"),
        ({"pricing": {"weekly": 1400}}, "$1400/week"),
        ({"pricing": '{"daily": 75}'}, "$75/day"),
        ({"monthly_rate": 900}, "$900/month"),
        ({}, "Price on request"),
        ({"pricing": "not json"}, "Price on request"),
    ])
    def test_price_display(self, data, expected):
        assert area_price_display(make_area(**data)) == expected

    @pytest.mark.parametrize("data, expected", [
        ({"baseRate": 350}, 350),
        ({"baseRate": 700, "rateType": "WEEKLY"}, 100),
        ({"baseRate": 3000, "rateType": "MONTHLY"}, 100),
        ({"baseRate": 36500, "rateType": "YEARLY"}, 100),
        ({"baseRate": 25, "rateType": "HOURLY"}, 200),
        ({"pricing": {"weekly": 1400}}, 200),
        ({"pricing": {"monthly": 600}}, 20),
        ({}, None),
    ])
    def test_daily_price(self, data, expected):
        assert area_daily_price(make_area(**data)) == expected

    def test_rate_info_empty(self):
        assert RateInfo.from_dict({"baseRate": 0}) is None
        assert RateInfo().is_empty is True

    def test_features_dict_becomes_keys(self):
        area = make_area(features={"lighting": True, "power": True})
        assert area.features == ["lighting", "power"]


class TestPayloadIds:
    """Test id normalization in backend payloads."""

    @pytest.mark.parametrize("payload, expected", [
        ({"id": None}, ""),
        ({}, ""),
        ({"id": 0}, "0"),
        ({"id": 42}, "42"),
    ])
    def test_property_id(self, payload, expected):
        assert Property.from_dict(payload).id == expected

    def test_null_property_id_is_not_the_string_none(self):
        prop = Property.from_dict({"id": None, "advertising_areas": [{"id": None}]})

        assert prop.id == ""
        assert prop.advertising_areas[0].id == ""
        assert prop.advertising_areas[0].property_id == ""
