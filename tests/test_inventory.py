"""Tests for assembling products and file records from the inventory."""

from catalog.inventory import FileFacets, build_products, file_records, filter_layouts
from catalog.matcher import search
from catalog.models import InventoryItem


def item(name, path=None, type="file", **props):
    return InventoryItem(name=name, type=type, path=path or f"/disk/{name}", custom_properties=props)


def product_file(name, product, sku="", file_type="", content="Товар", group="Смазки"):
    props = {"Название товара": product, "Тип контента": content, "Группа товаров": group}
    if sku:
        props["SKU"] = sku
    if file_type:
        props["Тип файла"] = file_type
    return item(name, **props)


def test_files_are_grouped_by_product_name_in_first_seen_order():
    items = [
        product_file("a.jpg", "Смазка Валера", sku="VL-100"),
        product_file("b.jpg", "Фильтр"),
        product_file("c.jpg", "Смазка Валера", sku="VL-200"),
        product_file("d.jpg", "Смазка Валера", sku="VL-100"),
    ]
    products = build_products(items)
    assert list(products) == ["Смазка Валера", "Фильтр"]
    lubricant = products["Смазка Валера"]
    assert lubricant.skus == ["VL-100", "VL-200"]
    assert lubricant.file_count == 3
    assert lubricant.group == "Смазки"


def test_directories_and_unnamed_files_are_skipped():
    items = [
        item("folder", type="dir", **{"Название товара": "Смазка"}),
        item("orphan.jpg"),
    ]
    assert build_products(items) == {}


def test_content_filter_keeps_products_and_untagged_files():
    items = [
        product_file("a.jpg", "Смазка", content="Товар"),
        product_file("b.jpg", "Смазка", content=""),
        product_file("c.jpg", "Смазка", content="Макет"),
    ]
    assert build_products(items)["Смазка"].file_count == 2
    assert build_products(items, content_filter=None)["Смазка"].file_count == 3


def test_explicit_file_roles():
    items = [
        product_file("main.jpg", "Смазка", file_type="Главное фото"),
        product_file("side.jpg", "Смазка", file_type="Фото"),
        product_file("promo.bin", "Смазка", file_type="Видео"),
        product_file("manual.bin", "Смазка", file_type="Документ"),
        product_file("cut.png", "Смазка", file_type="PNG"),
    ]
    product = build_products(items)["Смазка"]
    assert product.main_photo.name == "main.jpg"
    assert [f.name for f in product.photos] == ["side.jpg"]
    assert [f.name for f in product.videos] == ["promo.bin"]
    assert [f.name for f in product.documents] == ["manual.bin"]
    assert [f.name for f in product.png_files] == ["cut.png"]


def test_untagged_files_are_placed_by_extension():
    items = [
        product_file("cut.PNG", "Смазка"),
        product_file("first.jpg", "Смазка"),
        product_file("second.webp", "Смазка"),
        product_file("clip.mp4", "Смазка"),
        product_file("sheet.xlsx", "Смазка"),
        product_file("notes.txt", "Смазка"),
    ]
    product = build_products(items)["Смазка"]
    assert product.main_photo.name == "first.jpg"
    assert [f.name for f in product.photos] == ["cut.PNG", "second.webp"]
    assert [f.name for f in product.videos] == ["clip.mp4"]
    assert [f.name for f in product.documents] == ["sheet.xlsx"]
    assert product.file_count == 6


def test_built_products_feed_the_matcher():
    products = build_products([product_file("a.jpg", "Смазка Валера", sku="VL-100")])
    assert [p.name for p in search(list(products.values()), "smazka valera")] == ["Смазка Валера"]


def test_filter_layouts_applies_content_type_and_facets():
    items = [
        item("poster.pdf", **{"Тип контента": "Макет", "Категория": "Печать", "Ответственный": "Анна"}),
        item("banner.pdf", **{"Категория": "Веб"}),
        item("photo.jpg", **{"Тип контента": "Товар", "Категория": "Печать"}),
        item("flyer.pdf", **{"Тип контента": "Макет", "Категория": "Печать", "Ответственный": "Олег"}),
    ]
    assert [i.name for i in filter_layouts(items)] == ["poster.pdf", "banner.pdf", "flyer.pdf"]

    facets = FileFacets(categories=("Печать",), responsible=("Анна", "Мария"))
    assert [i.name for i in filter_layouts(items, facets)] == ["poster.pdf"]


def test_file_records_default_missing_properties_to_empty():
    items = [item("poster.pdf", path="/layouts/poster.pdf", **{"Название товара": "Смазка", "SKU": "S-1"}), item("x.pdf")]
    first, second = file_records(items)
    assert first.id == "/layouts/poster.pdf"
    assert (first.primary_text, first.secondary_text, first.tertiary_text) == ("poster.pdf", "Смазка", "S-1")
    assert first.id_text == "/layouts/poster.pdf"
    assert (second.secondary_text, second.tertiary_text) == ("", "")


def test_null_fields_default_to_empty_values():
    first = InventoryItem.model_validate(
        {
            "name": "a.jpg",
            "path": None,
            "preview": None,
            "file": None,
            "size": None,
            "created": None,
            "custom_properties": {"Название товара": "Смазка", "SKU": None},
        }
    )
    second = InventoryItem.model_validate({"name": "b.jpg", "custom_properties": None})
    assert (first.path, first.preview, first.file, first.size, first.created) == ("", "", "", 0, "")
    assert first.custom_properties == {"Название товара": "Смазка"}
    assert second.custom_properties == {}

    products = build_products([first, second])
    assert list(products) == ["Смазка"]
    assert products["Смазка"].skus == []
