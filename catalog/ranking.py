"""Relevance ranking for map points and file entries.

Scoring is a fixed decision list: the first rule that holds sets the score,
nothing is summed. Records that no rule accepts are dropped. Ties are broken
by ascending ``id`` so the output never depends on input order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .models import RankableRecord
from .text import fold

logger = logging.getLogger(__name__)

SCORE_PRIMARY_EXACT = 100
SCORE_PRIMARY_PREFIX = 80
SCORE_PRIMARY_CONTAINS = 60
SCORE_SECONDARY_PREFIX = 40
SCORE_SECONDARY_CONTAINS = 20
SCORE_ID_CONTAINS = 10


@dataclass(frozen=True)
class ScoredRecord:
    record: RankableRecord
    score: Optional[int] = None


def score_record(record: RankableRecord, query: str) -> int:
    """Score ``record`` against an already folded, non-empty query."""
    primary = fold(record.primary_text)
    secondary = fold(record.secondary_text)

    if primary == query:
        return SCORE_PRIMARY_EXACT
    if primary.startswith(query):
        return SCORE_PRIMARY_PREFIX
    if query in primary:
        return SCORE_PRIMARY_CONTAINS
    if secondary.startswith(query):
        return SCORE_SECONDARY_PREFIX
    if query in secondary or query in fold(record.tertiary_text):
        return SCORE_SECONDARY_CONTAINS
    if query in fold(record.id_text):
        return SCORE_ID_CONTAINS
    return 0


def rank_scored(records: Sequence[RankableRecord], query: str) -> list[ScoredRecord]:
    q = fold(query.strip())
    if not q:
        return [ScoredRecord(record) for record in sorted(records, key=lambda r: r.id)]

    scored = []
    for record in records:
        score = score_record(record, q)
        if score > 0:
            scored.append(ScoredRecord(record, score))
    scored.sort(key=lambda item: (-item.score, item.record.id))
    logger.debug("rank q=%r records=%s kept=%s", q, len(records), len(scored))
    return scored


def rank(records: Sequence[RankableRecord], query: str) -> list[RankableRecord]:
    """Return matching records, most relevant first."""
    return [item.record for item in rank_scored(records, query)]
