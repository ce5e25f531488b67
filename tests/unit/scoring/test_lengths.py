"""Unit tests for per-field length statistics."""

from __future__ import annotations

import math

import pytest

from field_rank.scoring.lengths import (
    FieldLengthStats,
    anchor_length,
    compute_corpus_statistics,
    compute_field_length_stats,
    document_field_lengths,
    header_length,
    title_length,
    url_length,
    url_tokens,
)
from field_rank.scoring.models import Document, FieldKind, Query


pytestmark = pytest.mark.unit


def test_url_tokens_split_on_non_alphanumeric_runs() -> None:
    assert url_tokens("http://cs.stanford.edu/people/index.html") == [
        "http",
        "cs",
        "stanford",
        "edu",
        "people",
        "index",
        "html",
    ]
    assert url_tokens("--//..") == []


def test_missing_fields_have_zero_length() -> None:
    assert url_length(None) == 0.0
    assert title_length(None) == 0.0
    assert header_length(None) == 0.0
    assert header_length(()) == 0.0
    assert anchor_length(None) == 0.0
    assert anchor_length({}) == 0.0


def test_title_and_header_lengths_ignore_extra_whitespace() -> None:
    assert title_length("  Stanford   CS  People ") == 3.0
    assert header_length(["People", "  Faculty and  staff", ""]) == 4.0


def test_anchor_length_weights_tokens_by_link_count() -> None:
    assert anchor_length({"stanford cs": 2, "people": 1}) == 5.0
    assert anchor_length({"unused anchor": 0}) == 0.0


def test_document_field_lengths_cover_every_field(people_page: Document) -> None:
    lengths = document_field_lengths(people_page)

    assert lengths == {
        FieldKind.URL: 7.0,
        FieldKind.TITLE: 3.0,
        FieldKind.BODY: 100.0,
        FieldKind.HEADER: 4.0,
        FieldKind.ANCHOR: 5.0,
    }


def test_bare_document_lengths_are_zero_except_body(bare_page: Document) -> None:
    lengths = document_field_lengths(bare_page)

    assert lengths[FieldKind.URL] == 0.0
    assert lengths[FieldKind.TITLE] == 0.0
    assert lengths[FieldKind.HEADER] == 0.0
    assert lengths[FieldKind.ANCHOR] == 0.0
    assert lengths[FieldKind.BODY] == 50.0


def test_compute_field_length_stats_returns_averages() -> None:
    stats = compute_field_length_stats(
        [
            dict.fromkeys(FieldKind, 2.0),
            {**dict.fromkeys(FieldKind, 0.0), FieldKind.BODY: 148.0},
        ]
    )

    assert isinstance(stats[FieldKind.BODY], FieldLengthStats)
    assert stats[FieldKind.BODY].document_count == 2
    assert stats[FieldKind.BODY].average_length == 75.0
    assert stats[FieldKind.TITLE].average_length == 1.0


def test_compute_field_length_stats_empty_input_has_zero_averages() -> None:
    stats = compute_field_length_stats([])

    for kind in FieldKind:
        assert stats[kind].document_count == 0
        assert stats[kind].average_length == 0.0


def test_corpus_statistics_average_over_documents(corpus) -> None:
    statistics = compute_corpus_statistics(corpus, page_rank_lambda_prime=0.7)

    assert statistics.document_count == 2
    assert statistics.average_lengths == {
        FieldKind.URL: 3.5,
        FieldKind.TITLE: 1.5,
        FieldKind.BODY: 75.0,
        FieldKind.HEADER: 2.0,
        FieldKind.ANCHOR: 2.5,
    }


def test_corpus_statistics_cache_log_page_rank(corpus, people_page: Document, bare_page: Document) -> None:
    statistics = compute_corpus_statistics(corpus, page_rank_lambda_prime=0.7)

    assert statistics.page_rank_scores[people_page] == pytest.approx(math.log(1.7))
    assert statistics.page_rank_scores[bare_page] == math.log(0.7)


def test_corpus_statistics_count_shared_documents_once(people_page: Document, bare_page: Document) -> None:
    corpus = {
        Query(("stanford",)): {"people": people_page},
        Query(("people",)): {"people": people_page, "bare": bare_page},
    }

    statistics = compute_corpus_statistics(corpus, page_rank_lambda_prime=0.7)

    assert statistics.document_count == 2
    assert statistics.average_lengths[FieldKind.BODY] == 75.0


def test_corpus_statistics_are_read_only(corpus) -> None:
    statistics = compute_corpus_statistics(corpus, page_rank_lambda_prime=0.7)

    with pytest.raises(TypeError):
        statistics.average_lengths[FieldKind.BODY] = 1.0  # type: ignore[index]
