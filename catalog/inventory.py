"""Assemble searchable products and file records from an inventory snapshot.

Every file in the asset inventory carries free-form ``custom_properties``
written by the upload form. The keys are the Russian labels staff see in the
property editor, so they are kept verbatim here.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterable, Sequence

from .models import FileInfo, InventoryItem, Product, RankableRecord

logger = logging.getLogger(__name__)

PROP_PRODUCT_NAME = "Название товара"
PROP_SKU = "SKU"
PROP_PRODUCT_GROUP = "Группа товаров"
PROP_FILE_TYPE = "Тип файла"
PROP_CONTENT_TYPE = "Тип контента"
PROP_CATEGORY = "Категория"
PROP_SUBCATEGORY = "Подкатегория"
PROP_RESPONSIBLE = "Ответственный"

CONTENT_PRODUCT = "Товар"
CONTENT_LAYOUT = "Макет"

FILE_TYPE_MAIN_PHOTO = "Главное фото"
FILE_TYPE_PHOTO = "Фото"
FILE_TYPE_VIDEO = "Видео"
FILE_TYPE_DOCUMENT = "Документ"
FILE_TYPE_PNG = "PNG"

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "bmp"})
VIDEO_EXTENSIONS = frozenset({"mp4", "avi", "mov", "mkv", "wmv"})
DOCUMENT_EXTENSIONS = frozenset({"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx"})


@dataclass(frozen=True)
class FileFacets:
    """Selected values per facet; an empty tuple leaves that facet open."""

    categories: tuple[str, ...] = field(default_factory=tuple)
    subcategories: tuple[str, ...] = field(default_factory=tuple)
    responsible: tuple[str, ...] = field(default_factory=tuple)
    product_groups: tuple[str, ...] = field(default_factory=tuple)

    def selections(self) -> list[tuple[str, tuple[str, ...]]]:
        return [
            (PROP_CATEGORY, self.categories),
            (PROP_SUBCATEGORY, self.subcategories),
            (PROP_RESPONSIBLE, self.responsible),
            (PROP_PRODUCT_GROUP, self.product_groups),
        ]


def _extension(name: str) -> str:
    return PurePosixPath(name).suffix.lstrip(".").lower()


def _file_info(item: InventoryItem) -> FileInfo:
    return FileInfo(
        name=item.name,
        preview=item.preview,
        file=item.file,
        size=item.size,
        created=item.created,
    )


def _place_file(product: Product, item: InventoryItem) -> None:
    info = _file_info(item)
    file_type = item.custom_properties.get(PROP_FILE_TYPE, "")

    if file_type == FILE_TYPE_MAIN_PHOTO:
        product.main_photo = info
    elif file_type == FILE_TYPE_PHOTO:
        product.photos.append(info)
    elif file_type == FILE_TYPE_VIDEO:
        product.videos.append(info)
    elif file_type == FILE_TYPE_DOCUMENT:
        product.documents.append(info)
    elif file_type == FILE_TYPE_PNG:
        product.png_files.append(info)
    else:
        ext = _extension(item.name)
        if ext in IMAGE_EXTENSIONS:
            # Untagged PNGs are usually cut-outs, never the main shot.
            if product.main_photo is None and ext != "png":
                product.main_photo = info
            else:
                product.photos.append(info)
        elif ext in VIDEO_EXTENSIONS:
            product.videos.append(info)
        elif ext in DOCUMENT_EXTENSIONS:
            product.documents.append(info)


def build_products(items: Iterable[InventoryItem], content_filter: str | None = CONTENT_PRODUCT) -> dict[str, Product]:
    """Group inventory files into products keyed by product name.

    Files without a product name are ignored. With ``content_filter`` set to
    ``"Товар"`` only product content (or untagged files) is considered.
    """
    products: dict[str, Product] = {}
    for item in items:
        if item.type != "file":
            continue
        props = item.custom_properties
        name = props.get(PROP_PRODUCT_NAME, "")
        if not name:
            continue
        content_type = props.get(PROP_CONTENT_TYPE, "")
        if content_filter == CONTENT_PRODUCT and content_type not in (CONTENT_PRODUCT, ""):
            continue

        product = products.get(name)
        if product is None:
            product = Product(name=name, group=props.get(PROP_PRODUCT_GROUP, ""))
            products[name] = product

        sku = props.get(PROP_SKU, "")
        if sku and sku not in product.skus:
            product.skus.append(sku)
        product.file_count += 1
        _place_file(product, item)

    logger.info("Built %s products from inventory", len(products))
    return products


def filter_layouts(items: Iterable[InventoryItem], facets: FileFacets | None = None) -> list[InventoryItem]:
    """Keep layout files (or untagged ones) that satisfy every selected facet."""
    facets = facets or FileFacets()
    selected = [(prop, values) for prop, values in facets.selections() if values]
    result = []
    for item in items:
        if item.type != "file":
            continue
        props = item.custom_properties
        if props.get(PROP_CONTENT_TYPE, "") not in (CONTENT_LAYOUT, ""):
            continue
        if all(props.get(prop, "") in values for prop, values in selected):
            result.append(item)
    return result


def file_records(items: Sequence[InventoryItem]) -> list[RankableRecord]:
    return [
        RankableRecord(
            id=item.path or item.name,
            primary_text=item.name,
            secondary_text=item.custom_properties.get(PROP_PRODUCT_NAME, ""),
            tertiary_text=item.custom_properties.get(PROP_SKU, ""),
            id_text=item.path or item.name,
        )
        for item in items
    ]
