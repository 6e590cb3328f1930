"""In-process search facade over the inventory and map point snapshots."""
from __future__ import annotations

import logging
from functools import lru_cache
from time import perf_counter
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel

from .cache import cache_key, get_cache
from .config import settings
from .data_files import load_snapshot
from .inventory import FileFacets, build_products, file_records, filter_layouts
from .matcher import MatchKind, search_with_kinds
from .models import (
    InventoryItem,
    PointsCollection,
    Product,
    ProductHit,
    ProductSearchResponse,
    RecordHit,
    RecordSearchResponse,
)
from .points import load_points, point_records, point_type_label
from .ranking import ScoredRecord, rank_scored
from .text import fold

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


@lru_cache(maxsize=1)
def load_inventory() -> tuple[InventoryItem, ...]:
    raw = load_snapshot(settings.inventory_path, settings.inventory_source_url) or []
    items = tuple(InventoryItem.model_validate(item) for item in raw)
    logger.info("Loaded %s inventory items from %s", len(items), settings.inventory_path)
    return items


@lru_cache(maxsize=1)
def load_products() -> tuple[Product, ...]:
    return tuple(build_products(load_inventory(), settings.content_filter).values())


@lru_cache(maxsize=1)
def load_point_collection() -> PointsCollection:
    return load_points(load_snapshot(settings.points_path, settings.points_source_url))


_generation = 0


def reload_data() -> None:
    """Forget loaded snapshots so the next search reads them again.

    Cached responses are keyed by snapshot generation, so nothing computed
    before the reload is served afterwards.
    """
    global _generation
    load_inventory.cache_clear()
    load_products.cache_clear()
    load_point_collection.cache_clear()
    _generation += 1
    logger.info("Snapshots dropped, cache generation is now %s", _generation)


def _cached(key: str, model: type[R], compute: Callable[[], R]) -> R:
    cache = get_cache() if settings.cache_enabled else None
    if cache is not None:
        hit = cache.get(key)
        if hit is not None:
            logger.debug("cache_hit key=%s", key)
            return model.model_validate(hit)
    response = compute()
    if cache is not None:
        cache.set(key, response.model_dump(mode="json"), settings.cache_ttl_seconds)
        logger.debug("cache_store key=%s ttl=%s", key, settings.cache_ttl_seconds)
    return response


def _record_hits(scored: list[ScoredRecord], labels: Optional[dict[int | str, str]] = None) -> list[RecordHit]:
    labels = labels or {}
    return [
        RecordHit(
            id=item.record.id,
            title=item.record.primary_text,
            subtitle=item.record.secondary_text,
            label=labels.get(item.record.id, ""),
            score=item.score,
        )
        for item in scored
    ]


def _product_hit(product: Product, kind: Optional[MatchKind]) -> ProductHit:
    return ProductHit(
        name=product.name,
        group=product.group,
        skus=list(product.skus),
        file_count=product.file_count,
        matchType=kind.value if kind is not None else None,
    )


def search_products(query: str) -> ProductSearchResponse:
    """Match the catalog against ``query``; a blank query lists every product."""

    def compute() -> ProductSearchResponse:
        t0 = perf_counter()
        products = load_products()
        t1 = perf_counter()
        if query.strip():
            results = [_product_hit(product, kind) for product, kind in search_with_kinds(products, query)]
        else:
            results = [_product_hit(product, None) for product in products]
        t2 = perf_counter()
        took_ms = (t2 - t1) * 1000
        logger.info(
            "timing: total=%.2fms load=%.2fms match=%.2fms q=%r catalog=%s hits=%s",
            (t2 - t0) * 1000,
            (t1 - t0) * 1000,
            took_ms,
            query,
            len(products),
            len(results),
        )
        return ProductSearchResponse(query=fold(query.strip()), results=results, took_ms=took_ms)

    return _cached(cache_key("products", query, generation=_generation), ProductSearchResponse, compute)


def search_points(query: str) -> RecordSearchResponse:
    def compute() -> RecordSearchResponse:
        t0 = perf_counter()
        collection = load_point_collection()
        records = point_records(collection)
        labels = {point.id: point_type_label(point.options.preset) for point in collection.features}
        t1 = perf_counter()
        scored = rank_scored(records, query)
        t2 = perf_counter()
        took_ms = (t2 - t1) * 1000
        logger.info(
            "timing: total=%.2fms load=%.2fms rank=%.2fms q=%r points=%s hits=%s",
            (t2 - t0) * 1000,
            (t1 - t0) * 1000,
            took_ms,
            query,
            len(records),
            len(scored),
        )
        return RecordSearchResponse(query=fold(query.strip()), results=_record_hits(scored, labels), took_ms=took_ms)

    return _cached(cache_key("points", query, generation=_generation), RecordSearchResponse, compute)


def search_files(query: str, facets: Optional[FileFacets] = None) -> RecordSearchResponse:
    facets = facets or FileFacets()

    def compute() -> RecordSearchResponse:
        t0 = perf_counter()
        records = file_records(filter_layouts(load_inventory(), facets))
        t1 = perf_counter()
        scored = rank_scored(records, query)
        t2 = perf_counter()
        took_ms = (t2 - t1) * 1000
        logger.info(
            "timing: total=%.2fms filter=%.2fms rank=%.2fms q=%r files=%s hits=%s",
            (t2 - t0) * 1000,
            (t1 - t0) * 1000,
            took_ms,
            query,
            len(records),
            len(scored),
        )
        return RecordSearchResponse(query=fold(query.strip()), results=_record_hits(scored), took_ms=took_ms)

    facet_parts = ["|".join(values) for _, values in facets.selections()]
    return _cached(cache_key("files", query, *facet_parts, generation=_generation), RecordSearchResponse, compute)
