"""BM25F relevance scorer with a log-PageRank prior."""

from __future__ import annotations

from collections.abc import Mapping
import logging

from field_rank.errors import MissingTermFrequencyError, UnknownDocumentError
from field_rank.observability.metrics import CORPUS_DOCUMENTS, SCORE_LATENCY, SCORES_COMPUTED, track_latency
from field_rank.observability.tracing import create_span
from field_rank.parameters import ScorerParameters
from field_rank.scoring.lengths import CorpusStatistics, compute_corpus_statistics
from field_rank.scoring.models import Document, FieldKind, Query
from field_rank.scoring.normalizer import RawTermFrequencies, TermFrequencies, normalize_term_frequencies
from field_rank.scoring.term_frequencies import query_term_counts


logger = logging.getLogger(__name__)

_SCORER_LABEL = "bm25"


def saturation(wdt: float, k1: float) -> float:
    """BM25 saturation ``wdt / (wdt + k1)``: 0 at 0, approaching 1."""
    return wdt / (wdt + k1)


class BM25Scorer:
    """Score (query, document) pairs with field-weighted BM25 plus PageRank.

    Corpus statistics are computed eagerly in the constructor. After that
    the scorer only reads its caches, so one instance can be shared by any
    number of scoring calls.
    """

    def __init__(
        self,
        corpus: Mapping[Query, Mapping[str, Document]],
        *,
        parameters: ScorerParameters | None = None,
    ) -> None:
        self.parameters = parameters or ScorerParameters()
        with create_span("field_rank.corpus_statistics", attributes={"corpus.queries": len(corpus)}) as span:
            self.statistics: CorpusStatistics = compute_corpus_statistics(
                corpus,
                page_rank_lambda_prime=self.parameters.page_rank_lambda_prime,
            )
            span.set_attribute("corpus.documents", self.statistics.document_count)

        CORPUS_DOCUMENTS.labels(scorer=_SCORER_LABEL).set(self.statistics.document_count)
        logger.info(
            "Computed corpus statistics for %d documents across %d queries",
            self.statistics.document_count,
            len(corpus),
            extra={"average_lengths": {kind.value: avg for kind, avg in self.average_lengths.items()}},
        )

    @property
    def average_lengths(self) -> Mapping[FieldKind, float]:
        return self.statistics.average_lengths

    def field_lengths(self, document: Document) -> Mapping[FieldKind, float]:
        try:
            return self.statistics.lengths[document]
        except KeyError:
            raise UnknownDocumentError(document.url) from None

    def page_rank_score(self, document: Document) -> float:
        try:
            return self.statistics.page_rank_scores[document]
        except KeyError:
            raise UnknownDocumentError(document.url) from None

    def normalize(self, raw: RawTermFrequencies, document: Document) -> TermFrequencies:
        """Return length-normalized copies of ``raw`` for ``document``."""
        return normalize_term_frequencies(
            raw,
            lengths=self.field_lengths(document),
            average_lengths=self.average_lengths,
            parameters=self.parameters,
        )

    def weighted_term_frequency(self, tfs: Mapping[FieldKind, Mapping[str, float]], term: str) -> float:
        """Combine a term's normalized frequencies across the five fields."""
        wdt = 0.0
        for kind in FieldKind:
            try:
                value = tfs[kind][term]
            except KeyError:
                raise MissingTermFrequencyError(kind.value, term) from None
            wdt += self.parameters.for_field(kind).weight * value
        return wdt

    def net_score(
        self,
        tfs: Mapping[FieldKind, Mapping[str, float]],
        query_freqs: Mapping[str, float],
        document: Document,
        idf: Mapping[str, float],
    ) -> float:
        """Sum saturated, IDF-weighted term scores and add the PageRank prior.

        Each distinct query term counts once; its frequency within the
        query does not scale its contribution.
        """
        k1 = self.parameters.k1
        score = 0.0
        for term in query_freqs:
            wdt = self.weighted_term_frequency(tfs, term)
            score += saturation(wdt, k1) * idf[term]

        score += self.parameters.page_rank_lambda * self.page_rank_score(document)
        return score

    def similarity(
        self,
        document: Document,
        query: Query,
        raw: RawTermFrequencies,
        idf: Mapping[str, float],
    ) -> float:
        """Score ``document`` for ``query`` from raw per-field term frequencies."""
        with track_latency(SCORE_LATENCY, scorer=_SCORER_LABEL):
            tfs = self.normalize(raw, document)
            score = self.net_score(tfs, query_term_counts(query), document, idf)
        SCORES_COMPUTED.labels(scorer=_SCORER_LABEL).inc()
        return score
