"""Map marker snapshot handling.

Points are stored as a GeoJSON ``FeatureCollection`` in the format the map
widget consumes. Note the ``adress`` spelling: it is the key the published
data uses.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from .models import MapPoint, PointsCollection, RankableRecord

logger = logging.getLogger(__name__)

POINT_TYPES: dict[str, str] = {
    "islands#grayDotIcon": "Точка продаж",
    "islands#redDotIcon": "Официальная точка продаж",
    "islands#blueDotIcon": "Дилер",
}
UNKNOWN_POINT_TYPE = "Неизвестный тип"


def point_type_label(preset: str | None) -> str:
    return POINT_TYPES.get(preset or "", UNKNOWN_POINT_TYPE)


def load_points(payload: Any) -> PointsCollection:
    """Validate a raw collection, dropping features that are not usable points."""
    features: list[MapPoint] = []
    if payload is not None and not isinstance(payload, dict):
        logger.warning("Points payload is a %s, not a feature collection", type(payload).__name__)
        payload = None
    for raw in (payload or {}).get("features") or []:
        if not isinstance(raw, dict) or raw.get("id") is None or not raw.get("properties") or not raw.get("geometry"):
            logger.warning("Skipping invalid point feature: %r", raw)
            continue
        try:
            features.append(MapPoint.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping malformed point %s: %s", raw.get("id"), exc)
    logger.info("Loaded %s map points", len(features))
    return PointsCollection(features=features)


def point_records(collection: PointsCollection) -> list[RankableRecord]:
    return [
        RankableRecord(
            id=point.id,
            primary_text=point.properties.balloonContentHeader,
            secondary_text=point.properties.adress,
            tertiary_text=point.properties.balloonContentFooter,
            id_text=str(point.id),
        )
        for point in collection.features
    ]
