# -*- coding: utf-8 -*-
"""
Tests for the Proximity Ranker and its memo cache.

Tests cover:
- Ordering, truncation and unlocatable-last
- Stable ties
- Purity (input untouched)
- RankingCache keying and eviction
"""

import math

import pytest

from models.coordinate import Coordinate
from models.property import Property
from services.proximity_ranker import RankedEntity, RankingCache, rank_by_proximity

ORIGIN = Coordinate(40.0, -74.0)


@pytest.fixture
def scenario_properties():
    return [
        Property.from_dict({"id": 1, "lat": 40.0, "lng": -74.0, "name": "Times Square Tower"}),
        Property.from_dict({"id": 2, "lat": None, "lng": None, "name": "Unknown Site"}),
    ]


@pytest.fixture
def spread_properties():
    """Mixed order, one unlocatable in the middle, two equidistant."""
    return [
        Property.from_dict({"id": "far", "lat": 41.0, "lng": -74.0}),
        Property.from_dict({"id": "none", "name": "no location"}),
        Property.from_dict({"id": "near", "lat": 40.01, "lng": -74.0}),
        Property.from_dict({"id": "tie_a", "lat": 40.1, "lng": -74.0}),
        Property.from_dict({"id": "tie_b", "lat": 40.1, "lng": -74.0}),
    ]


class TestRankByProximity:
    """Test ranking."""

    def test_scenario_origin_and_unlocatable(self, scenario_properties):
        ranked = rank_by_proximity(scenario_properties, ORIGIN, 10)

        assert [(item.id, item.distance_km) for item in ranked] == [("1", 0.0), ("2", math.inf)]
        assert ranked[0].is_locatable is True
        assert ranked[1].is_locatable is False

    def test_non_decreasing(self, spread_properties):
        ranked = rank_by_proximity(spread_properties, ORIGIN, 10)
        distances = [item.distance_km for item in ranked]
        assert distances == sorted(distances)

    def test_unlocatable_last(self, spread_properties):
        ranked = rank_by_proximity(spread_properties, ORIGIN, 10)
        assert ranked[-1].id == "none"
        assert all(item.is_locatable for item in ranked[:-1])

    def test_stable_ties(self, spread_properties):
        ranked = rank_by_proximity(spread_properties, ORIGIN, 10)
        ids = [item.id for item in ranked]
        assert ids == ["near", "tie_a", "tie_b", "far", "none"]

    @pytest.mark.parametrize("limit, expected", [(0, 0), (-3, 0), (2, 2), (5, 5), (50, 5)])
    def test_truncation(self, spread_properties, limit, expected):
        ranked = rank_by_proximity(spread_properties, ORIGIN, limit)
        assert len(ranked) == expected
        assert len(ranked) <= min(max(limit, 0), len(spread_properties))

    def test_input_not_mutated(self, spread_properties):
        before = list(spread_properties)
        rank_by_proximity(spread_properties, ORIGIN, 2)
        assert spread_properties == before

    def test_custom_locator(self, spread_properties):
        """A locator can place unlocatable entities somewhere."""
        ranked = rank_by_proximity(
            spread_properties, ORIGIN, 10,
            locate=lambda entity: ORIGIN if entity.id == "none" else Coordinate(50, 0)
        )
        assert ranked[0].id == "none"
        assert ranked[0].distance_km == 0

    def test_dict_entities(self):
        ranked = rank_by_proximity([{"id": "d", "latitude": 40.0, "longitude": -74.0}], ORIGIN, 1)
        assert ranked[0].id == "d"


class TestRankingCache:
    """Test memoization of ranked results."""

    def test_hit_on_same_key(self, spread_properties):
        cache = RankingCache()
        calls = []

        def compute():
            calls.append(1)
            return rank_by_proximity(spread_properties, ORIGIN, 3)

        first = cache.get_or_compute(spread_properties, "x", ORIGIN, 3, compute)
        second = cache.get_or_compute(spread_properties, " X ", ORIGIN, 3, compute)

        assert first == second
        assert len(calls) == 1
        assert cache.get_cache_stats()["hits"] == 1

    @pytest.mark.parametrize("change", ["collection", "term", "origin", "limit", "scope"])
    def test_miss_when_key_changes(self, spread_properties, change):
        cache = RankingCache()
        cache.get_or_compute(spread_properties, "", ORIGIN, 3, lambda: [])

        args = {
            "collection": spread_properties,
            "term": "",
            "origin": ORIGIN,
            "limit": 3,
            "scope": None,
        }
        args[change] = {
            "collection": list(spread_properties),
            "term": "tower",
            "origin": Coordinate(0, 0),
            "limit": 4,
            "scope": "areas",
        }[change]

        marker = [RankedEntity(entity=None, distance_km=0.0)]
        result = cache.get_or_compute(
            args["collection"], args["term"], args["origin"], args["limit"],
            lambda: marker, scope=args["scope"]
        )
        assert result == marker

    def test_eviction_respects_max_size(self):
        cache = RankingCache(max_size=2)
        collections = [[1], [2], [3]]
        for collection in collections:
            cache.get_or_compute(collection, "", ORIGIN, 1, lambda: [])

        assert cache.get_cache_stats()["entries"] == 2

    def test_clear(self, spread_properties):
        cache = RankingCache()
        cache.get_or_compute(spread_properties, "", ORIGIN, 1, lambda: [])
        cache.clear()
        assert cache.get_cache_stats()["entries"] == 0

    def test_returned_list_cannot_corrupt_cache(self, scenario_properties):
        cache = RankingCache()

        def compute():
            return rank_by_proximity(scenario_properties, ORIGIN, 1)

        cache.get_or_compute(scenario_properties, "", ORIGIN, 1, compute).clear()
        hit = cache.get_or_compute(scenario_properties, "", ORIGIN, 1, compute)
        hit.append(RankedEntity(entity=None, distance_km=0.0))
        again = cache.get_or_compute(scenario_properties, "", ORIGIN, 1, compute)

        assert [item.id for item in again] == ["1"]
        assert cache.get_cache_stats()["misses"] == 1


class TestBoundaryRanking:
    """Test ranking around the poles and the antimeridian."""

    def test_antipodal_entity_ranks_before_unlocatable(self):
        ranked = rank_by_proximity(
            [{"id": "nowhere"}, {"id": "antipode", "lat": 87.5, "lng": 180.0}],
            Coordinate(-87.5, 0.0),
            10
        )

        assert [item.id for item in ranked] == ["antipode", "nowhere"]
        assert ranked[0].distance_km == pytest.approx(math.pi * 6371.0)

    def test_antimeridian_neighbour_ranks_first(self):
        ranked = rank_by_proximity(
            [
                {"id": "same_side", "lat": 0.0, "lng": 170.0},
                {"id": "across", "lat": 0.0, "lng": -179.9},
            ],
            Coordinate(0.0, 179.9),
            10
        )

        assert [item.id for item in ranked] == ["across", "same_side"]
        assert ranked[0].distance_km < 25

    @pytest.mark.parametrize("origin", [
        Coordinate(90.0, 0.0),
        Coordinate(-90.0, 45.0),
        Coordinate(0.0, 180.0),
        Coordinate(0.0, -180.0),
    ])
    def test_extreme_origins(self, origin):
        entities = [
            {"id": "north", "lat": 89.9, "lng": -179.0},
            {"id": "south", "lat": -89.9, "lng": 179.0},
            {"id": "equator", "lat": 0.0, "lng": 0.0},
        ]
        ranked = rank_by_proximity(entities, origin, 10)
        distances = [item.distance_km for item in ranked]

        assert distances == sorted(distances)
        assert all(math.isfinite(d) for d in distances)
