"""Pydantic models for catalog records and search payloads."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchableProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    skus: list[str] = Field(default_factory=list)


class RankableRecord(BaseModel):
    """Flat view of a map point or a file entry fed to the relevance ranker."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    primary_text: str = ""
    secondary_text: str = ""
    tertiary_text: str = ""
    id_text: str = ""


class FileInfo(BaseModel):
    name: str
    preview: str = ""
    file: str = ""
    size: int = 0
    created: str = ""


class Product(SearchableProduct):
    """A product assembled from every inventory file tagged with its name."""

    model_config = ConfigDict(frozen=False)

    group: str = ""
    main_photo: FileInfo | None = None
    photos: list[FileInfo] = Field(default_factory=list)
    videos: list[FileInfo] = Field(default_factory=list)
    documents: list[FileInfo] = Field(default_factory=list)
    png_files: list[FileInfo] = Field(default_factory=list)
    file_count: int = 0


class InventoryItem(BaseModel):
    name: str
    type: str = "file"
    path: str = ""
    preview: str = ""
    file: str = ""
    size: int = 0
    created: str = ""
    custom_properties: dict[str, str] = Field(default_factory=dict)

    @field_validator("path", "preview", "file", "created", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("size", mode="before")
    @classmethod
    def _none_to_zero(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("custom_properties", mode="before")
    @classmethod
    def _drop_empty_properties(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: prop for key, prop in value.items() if prop is not None}
        return value


class PointGeometry(BaseModel):
    type: str = "Point"
    coordinates: tuple[float, float]


class PointProperties(BaseModel):
    balloonContentHeader: str = ""
    balloonContent: str = ""
    balloonContentFooter: str = ""
    hintContent: str = ""
    adress: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class PointOptions(BaseModel):
    preset: str = ""


class MapPoint(BaseModel):
    type: str = "Feature"
    id: int
    geometry: PointGeometry
    properties: PointProperties
    options: PointOptions = Field(default_factory=PointOptions)


class PointsCollection(BaseModel):
    type: str = "FeatureCollection"
    features: list[MapPoint] = Field(default_factory=list)


class ProductHit(BaseModel):
    name: str
    group: str = ""
    skus: list[str] = Field(default_factory=list)
    file_count: int = 0
    matchType: str | None = None


class RecordHit(BaseModel):
    id: int | str
    title: str
    subtitle: str = ""
    label: str = ""
    score: int | None = None


class ProductSearchResponse(BaseModel):
    query: str
    results: list[ProductHit]
    took_ms: float


class RecordSearchResponse(BaseModel):
    query: str
    results: list[RecordHit]
    took_ms: float
