"""Per-field length statistics for BM25 length normalization.

Lengths are derived once per document when the scorer is built. They only
depend on the document itself, so the helpers here are plain functions
that can be unit tested without a scorer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import math
import re
from types import MappingProxyType

from field_rank.scoring.models import Document, FieldKind, Query


_URL_SEPARATOR = re.compile(r"[^0-9a-zA-Z]+")


def url_tokens(url: str) -> list[str]:
    """Split a URL on runs of non-alphanumeric characters."""
    return [token for token in _URL_SEPARATOR.split(url) if token]


def url_length(url: str | None) -> float:
    if url is None:
        return 0.0
    return float(len(url_tokens(url)))


def title_length(title: str | None) -> float:
    if title is None:
        return 0.0
    return float(len(title.split()))


def header_length(headers: Iterable[str] | None) -> float:
    if not headers:
        return 0.0
    return float(sum(len(header.split()) for header in headers))


def anchor_length(anchors: Mapping[str, int] | None) -> float:
    """Anchor tokens weighted by how many links carry each anchor text."""
    if not anchors:
        return 0.0
    return float(sum(len(text.split()) * count for text, count in anchors.items()))


def document_field_lengths(document: Document) -> dict[FieldKind, float]:
    """Return the length statistic of every field of ``document``."""
    return {
        FieldKind.URL: url_length(document.url),
        FieldKind.TITLE: title_length(document.title),
        FieldKind.BODY: float(document.body_length),
        FieldKind.HEADER: header_length(document.headers),
        FieldKind.ANCHOR: anchor_length(document.anchors),
    }


def log_page_rank(page_rank: float, lambda_prime: float) -> float:
    return math.log(lambda_prime + page_rank)


@dataclass(frozen=True)
class FieldLengthStats:
    """Aggregated length of one field across the corpus."""

    field: FieldKind
    total_length: float
    document_count: int

    @property
    def average_length(self) -> float:
        if self.document_count == 0:
            return 0.0
        return self.total_length / self.document_count


def compute_field_length_stats(
    lengths_by_document: Iterable[Mapping[FieldKind, float]],
) -> dict[FieldKind, FieldLengthStats]:
    """Return aggregate stats for each field given per-document lengths."""

    totals = dict.fromkeys(FieldKind, 0.0)
    doc_count = 0
    for lengths in lengths_by_document:
        doc_count += 1
        for kind in FieldKind:
            totals[kind] += lengths[kind]
    return {
        kind: FieldLengthStats(field=kind, total_length=totals[kind], document_count=doc_count) for kind in FieldKind
    }


@dataclass(frozen=True)
class CorpusStatistics:
    """Read-only caches computed in one pass over the corpus."""

    lengths: Mapping[Document, Mapping[FieldKind, float]]
    average_lengths: Mapping[FieldKind, float]
    page_rank_scores: Mapping[Document, float]

    @property
    def document_count(self) -> int:
        return len(self.lengths)


def iter_documents(corpus: Mapping[Query, Mapping[str, Document]]) -> Iterable[Document]:
    """Yield every distinct document of the corpus once, in first-seen order."""
    seen: set[Document] = set()
    for documents in corpus.values():
        for document in documents.values():
            if document in seen:
                continue
            seen.add(document)
            yield document


def compute_corpus_statistics(
    corpus: Mapping[Query, Mapping[str, Document]],
    *,
    page_rank_lambda_prime: float,
) -> CorpusStatistics:
    """Compute field lengths, average lengths and log-PageRank scores."""

    lengths: dict[Document, Mapping[FieldKind, float]] = {}
    page_rank_scores: dict[Document, float] = {}
    for document in iter_documents(corpus):
        lengths[document] = MappingProxyType(document_field_lengths(document))
        page_rank_scores[document] = log_page_rank(document.page_rank, page_rank_lambda_prime)

    stats = compute_field_length_stats(lengths.values())
    average_lengths = {kind: stats[kind].average_length for kind in FieldKind}
    return CorpusStatistics(
        lengths=MappingProxyType(lengths),
        average_lengths=MappingProxyType(average_lengths),
        page_rank_scores=MappingProxyType(page_rank_scores),
    )
