"""Raw per-field term frequency extraction for a (document, query) pair.

Every distinct query term gets an entry in every field, zero when the term
does not occur, which is what the scorer expects from its input.
"""

from __future__ import annotations

from collections import Counter

from field_rank.scoring.lengths import url_tokens
from field_rank.scoring.models import Document, FieldKind, Query


def query_term_counts(query: Query) -> dict[str, float]:
    """Return each distinct query term with its in-query frequency."""
    return {term: float(count) for term, count in query.term_counts().items()}


def _lowered(tokens: list[str]) -> Counter[str]:
    return Counter(token.lower() for token in tokens)


def extract_term_frequencies(document: Document, query: Query) -> dict[FieldKind, dict[str, float]]:
    """Count query-term occurrences in each field of ``document``."""

    terms = list(query_term_counts(query))

    url_counts = _lowered(url_tokens(document.url)) if document.url else Counter()
    title_counts = _lowered(document.title.split()) if document.title else Counter()

    header_counts: Counter[str] = Counter()
    for header in document.headers or ():
        header_counts.update(_lowered(header.split()))

    anchor_counts: Counter[str] = Counter()
    for text, links in (document.anchors or {}).items():
        for token, occurrences in _lowered(text.split()).items():
            anchor_counts[token] += occurrences * links

    body_hits = document.body_hits or {}

    return {
        FieldKind.URL: {term: float(url_counts[term]) for term in terms},
        FieldKind.TITLE: {term: float(title_counts[term]) for term in terms},
        FieldKind.BODY: {term: float(len(body_hits.get(term, ()))) for term in terms},
        FieldKind.HEADER: {term: float(header_counts[term]) for term in terms},
        FieldKind.ANCHOR: {term: float(anchor_counts[term]) for term in terms},
    }
