# -*- coding: utf-8 -*-
"""
Proximity Ranker.

Orders a collection by ascending great-circle distance from a reference
point and keeps the top N. Entities without a coordinate get an infinite
distance so they always sort last.

Usage:
    ranked = rank_by_proximity(properties, viewport.center, limit=10)
    for item in ranked:
        print(item.entity.display_name, item.distance_km)
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, Sequence, Tuple, TypeVar

from models.coordinate import Coordinate
from services.coordinate_resolver import entity_coordinate
from services.distance_service import distance_km
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Locator = Callable[[Any], Optional[Coordinate]]


@dataclass(frozen=True)
class RankedEntity(Generic[T]):
    """An entity paired with its distance (km) from the ranking origin."""
    entity: T
    distance_km: float

    @property
    def id(self) -> Any:
        if isinstance(self.entity, dict):
            return self.entity.get("id")
        return getattr(self.entity, "id", None)

    @property
    def is_locatable(self) -> bool:
        return not math.isinf(self.distance_km)


def rank_by_proximity(
    entities: Sequence[T],
    origin: Coordinate,
    limit: int,
    locate: Locator = entity_coordinate
) -> List[RankedEntity[T]]:
    """
    Rank entities by distance from ``origin``.

    Args:
        entities: Entities to rank (not modified)
        origin: Reference point, normally the viewport center
        limit: Maximum number of results
        locate: Coordinate lookup for an entity

    Returns:
        Up to ``limit`` RankedEntity items, non-decreasing in distance.
        Ties keep their input order.
    """
    if limit <= 0:
        return []

    ranked = []
    for entity in entities:
        coord = locate(entity)
        distance = distance_km(origin, coord) if coord is not None else math.inf
        ranked.append(RankedEntity(entity=entity, distance_km=distance))

    # list.sort is stable
    ranked.sort(key=lambda item: item.distance_km)
    return ranked[:limit]


@dataclass
class _CacheEntry:
    collection: Sequence[Any]
    result: List[RankedEntity]
    hit_count: int = 0


class RankingCache:
    """
    Memo for filter+rank results.

    Keys are ``(collection identity, term, origin, limit)``. The entry keeps
    a reference to the collection so its identity cannot be reused by a
    new object while the entry lives.
    """

    def __init__(self, max_size: int = 32):
        self.max_size = max_size
        self._cache: Dict[Tuple[Hashable, ...], _CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get_or_compute(
        self,
        collection: Sequence[Any],
        term: str,
        origin: Coordinate,
        limit: int,
        compute: Callable[[], List[RankedEntity]],
        scope: Hashable = None
    ) -> List[RankedEntity]:
        key = (scope, id(collection), (term or "").strip().lower(), origin, limit)

        entry = self._cache.get(key)
        if entry is not None and entry.collection is collection:
            entry.hit_count += 1
            self._hits += 1
            return list(entry.result)

        self._misses += 1
        result = compute()

        if len(self._cache) >= self.max_size:
            self._evict_lru()
        self._cache[key] = _CacheEntry(collection=collection, result=list(result))
        return list(result)

    def _evict_lru(self):
        """Evict the least used entry."""
        if not self._cache:
            return
        lru_key = min(self._cache.keys(), key=lambda k: self._cache[k].hit_count)
        del self._cache[lru_key]

    def clear(self):
        self._cache.clear()
        logger.debug("Ranking cache cleared")

    def get_cache_stats(self) -> Dict[str, int]:
        return {
            "entries": len(self._cache),
            "max_size": self.max_size,
            "hits": self._hits,
            "misses": self._misses,
        }
