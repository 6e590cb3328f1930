"""Multilingual product filter.

A query is compared against each product in three spellings:

* the query as typed (``"смазка"``),
* its Latin transliteration (``"smazka"``) against the transliterated name,
* its keyboard-layout correction (``"cvfprf"`` -> ``"смазка"``).

SKUs only take plain substring matches. Queries of three or more characters
additionally get a fuzzy tier built on :func:`levenshtein_distance`: a prefix
check, a one-character-shorter substring check and a sliding window over the
name. The filter keeps catalog order; it does not rank.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, TypeVar

from .distance import levenshtein_distance
from .models import SearchableProduct
from .text import fix_layout, fold, transliterate

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
FUZZY_MIN_QUERY_LENGTH = 3
MAX_PREFIX_DISTANCE = 2
MAX_WINDOW_DISTANCE = 1

P = TypeVar("P", bound=SearchableProduct)


class MatchKind(str, Enum):
    EXACT = "exact"
    TRANSLIT = "translit"
    LAYOUT = "layout"
    SKU = "sku"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class QueryVariants:
    text: str
    translit: str
    fixed: str

    @classmethod
    def from_query(cls, query: str) -> Optional["QueryVariants"]:
        """Build the three spellings, or ``None`` for queries too short to match."""
        text = fold(query.strip())
        if len(text) < MIN_QUERY_LENGTH:
            return None
        return cls(
            text=text,
            translit=fold(transliterate(text)),
            fixed=fold(fix_layout(text)),
        )


def _prefix_close(term: str, name: str) -> bool:
    distance = levenshtein_distance(term, name[: len(term)])
    return distance <= MAX_PREFIX_DISTANCE and distance < len(term) / 2


def _shortened(term: str) -> str:
    return term[: max(2, len(term) - 1)]


def _window_close(term: str, name: str) -> bool:
    width = len(term)
    for start in range(len(name) - width + 1):
        if levenshtein_distance(term, name[start : start + width]) <= MAX_WINDOW_DISTANCE:
            return True
    return False


def _fuzzy_match(variants: QueryVariants, name: str, name_translit: str) -> bool:
    pairs = [(variants.text, name)]
    if variants.translit:
        pairs.append((variants.translit, name_translit))
    return any(
        _prefix_close(term, target) or _shortened(term) in target or _window_close(term, target)
        for term, target in pairs
    )


def match_kind(product: SearchableProduct, variants: QueryVariants) -> Optional[MatchKind]:
    """Return the first tier under which ``product`` matches, if any."""
    name = fold(product.name)
    name_translit = fold(transliterate(product.name))

    if variants.text in name:
        return MatchKind.EXACT
    # A query of hard/soft signs only has an empty Latin spelling.
    if variants.translit and variants.translit in name_translit:
        return MatchKind.TRANSLIT
    if variants.fixed in name:
        return MatchKind.LAYOUT
    for sku in product.skus:
        folded_sku = fold(sku)
        if variants.text in folded_sku or variants.fixed in folded_sku:
            return MatchKind.SKU
    # SKUs are left out of the fuzzy tier on purpose: they match literally or not at all.
    if len(variants.text) >= FUZZY_MIN_QUERY_LENGTH and _fuzzy_match(variants, name, name_translit):
        return MatchKind.FUZZY
    return None


def search_with_kinds(catalog: Sequence[P], query: str) -> list[tuple[P, MatchKind]]:
    variants = QueryVariants.from_query(query)
    if variants is None:
        logger.debug("search skipped: query %r shorter than %s", query, MIN_QUERY_LENGTH)
        return []
    hits: list[tuple[P, MatchKind]] = []
    for product in catalog:
        kind = match_kind(product, variants)
        if kind is not None:
            hits.append((product, kind))
    logger.debug(
        "search q=%r translit=%r fixed=%r catalog=%s hits=%s",
        variants.text,
        variants.translit,
        variants.fixed,
        len(catalog),
        len(hits),
    )
    return hits


def search(catalog: Sequence[P], query: str) -> list[P]:
    """Return the products of ``catalog`` matching ``query``, in catalog order."""
    return [product for product, _ in search_with_kinds(catalog, query)]
