"""Tests for map point loading and record conversion."""

from catalog.points import load_points, point_records, point_type_label
from catalog.ranking import rank_scored


def feature(id, header="", adress="", footer="", preset="islands#blueDotIcon"):
    return {
        "type": "Feature",
        "id": id,
        "geometry": {"type": "Point", "coordinates": [59.93, 30.36]},
        "properties": {
            "balloonContentHeader": header,
            "balloonContent": "",
            "balloonContentFooter": footer,
            "hintContent": header,
            "adress": adress,
        },
        "options": {"preset": preset},
    }


def test_invalid_features_are_dropped():
    payload = {
        "type": "FeatureCollection",
        "features": [
            feature(1, "Дилер"),
            {"type": "Feature", "id": None, "properties": {}, "geometry": {}},
            {"type": "Feature", "id": 3, "geometry": {"type": "Point", "coordinates": [1, 2]}},
            {"type": "Feature", "id": 4, "properties": {"adress": "x"}, "geometry": {"type": "Point"}},
            None,
        ],
    }
    collection = load_points(payload)
    assert [point.id for point in collection.features] == [1]


def test_missing_payload_gives_empty_collection():
    assert load_points(None).features == []


def test_null_properties_become_empty_strings():
    raw = feature(7, "Магазин")
    raw["properties"]["balloonContentFooter"] = None
    [record] = point_records(load_points({"features": [raw]}))
    assert record.tertiary_text == ""


def test_point_records_map_fields():
    collection = load_points({"features": [feature(12, "Дилер Невский", "Невский пр. 1", "+7 812")]})
    [record] = point_records(collection)
    assert record.id == 12
    assert record.id_text == "12"
    assert (record.primary_text, record.secondary_text, record.tertiary_text) == (
        "Дилер Невский",
        "Невский пр. 1",
        "+7 812",
    )


def test_ranking_points_by_address():
    collection = load_points(
        {
            "features": [
                feature(2, "Склад", "Невский пр. 10"),
                feature(1, "Магазин", "ул. Садовая, Невский район"),
                feature(3, "Невский дилер"),
            ]
        }
    )
    scored = rank_scored(point_records(collection), "невский")
    assert [(item.record.id, item.score) for item in scored] == [(3, 80), (2, 40), (1, 20)]


def test_point_type_labels():
    assert point_type_label("islands#redDotIcon") == "Официальная точка продаж"
    assert point_type_label("islands#grayDotIcon") == "Точка продаж"
    assert point_type_label("islands#greenDotIcon") == "Неизвестный тип"
    assert point_type_label(None) == "Неизвестный тип"


def test_non_object_payloads_and_features_are_skipped():
    assert load_points([feature(1, "Дилер")]).features == []
    collection = load_points({"features": ["oops", 42, [1, 2], feature(5, "Склад")]})
    assert [point.id for point in collection.features] == [5]
