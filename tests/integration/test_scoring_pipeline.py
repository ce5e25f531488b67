"""End-to-end scoring from JSON files through the public API."""

from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from field_rank import BM25Scorer, ScorerParameters, extract_term_frequencies, write_parameter_file
from field_rank.corpus import load_corpus, load_idf
from field_rank.scoring.models import FieldKind, Query


pytestmark = pytest.mark.integration

CORPUS = {
    "stanford aoerc": {
        "http://aoerc.stanford.edu/": {
            "title": "Stanford AOERC",
            "body_length": 300,
            "headers": ["AOERC hours", "Stanford recreation"],
            "anchors": {"aoerc": 12, "stanford aoerc gym": 4},
            "page_rank": 6,
            "body_hits": {"aoerc": [1, 30, 77, 150], "stanford": [2]},
        },
        "http://www.stanford.edu/dept/news/": {
            "title": "Stanford News",
            "body_length": 900,
            "headers": ["Latest"],
            "anchors": {"news": 30},
            "page_rank": 8,
            "body_hits": {"stanford": [5, 80, 400]},
        },
        "http://blog.example.com/2013/aoerc-review": {
            "title": "A review",
            "body_length": 150,
            "body_hits": {"aoerc": [10]},
        },
    },
    "cs 276": {
        "http://web.stanford.edu/class/cs276/": {
            "title": "CS 276 Information Retrieval",
            "body_length": 500,
            "headers": ["CS 276"],
            "anchors": {"cs 276": 25},
            "page_rank": 5,
            "body_hits": {"cs": [1, 2, 3], "276": [1, 2, 3]},
        },
    },
}

IDF = {"total_docs": 98998, "doc_freqs": {"stanford": 60000, "aoerc": 40, "cs": 9000, "276": 120}}


@pytest.fixture
def loaded(tmp_path: Path):
    corpus_path = tmp_path / "corpus.json"
    corpus_path.write_text(json.dumps(CORPUS), encoding="utf-8")
    idf_path = tmp_path / "idf.json"
    idf_path.write_text(json.dumps(IDF), encoding="utf-8")
    return load_corpus(corpus_path), load_idf(idf_path)


def _scores(scorer: BM25Scorer, corpus, idf, query_text: str) -> dict[str, float]:
    query = Query.from_text(query_text)
    return {
        url: scorer.similarity(document, query, extract_term_frequencies(document, query), idf)
        for url, document in corpus[query].items()
    }


def test_focused_page_outranks_general_and_thin_pages(loaded):
    corpus, idf = loaded
    scorer = BM25Scorer(corpus)

    scores = _scores(scorer, corpus, idf, "stanford aoerc")

    ranking = sorted(scores, key=scores.get, reverse=True)
    assert ranking[0] == "http://aoerc.stanford.edu/"
    assert ranking[-1] == "http://blog.example.com/2013/aoerc-review"


def test_statistics_span_every_query(loaded):
    corpus, _ = loaded
    scorer = BM25Scorer(corpus)

    assert scorer.statistics.document_count == 4
    assert scorer.average_lengths[FieldKind.BODY] == pytest.approx((300 + 900 + 150 + 500) / 4)


def test_page_rank_prior_only_when_no_terms_match(loaded):
    corpus, idf = loaded
    scorer = BM25Scorer(corpus)
    query = Query.from_text("cs 276")
    document = corpus[query]["http://web.stanford.edu/class/cs276/"]
    raw = extract_term_frequencies(document, Query(("quantum",)))

    score = scorer.similarity(document, Query(("quantum",)), raw, idf)

    assert score == pytest.approx(math.log(0.7 + 5))


def test_tuned_parameters_change_ranking_weights(loaded, tmp_path: Path):
    corpus, idf = loaded
    anchor_heavy = ScorerParameters(anchor={"weight": 5.0}, page_rank_lambda=0.0)
    default_scorer = BM25Scorer(corpus, parameters=ScorerParameters(page_rank_lambda=0.0))
    tuned_scorer = BM25Scorer(corpus, parameters=anchor_heavy)

    default_scores = _scores(default_scorer, corpus, idf, "stanford aoerc")
    tuned_scores = _scores(tuned_scorer, corpus, idf, "stanford aoerc")

    assert tuned_scores["http://aoerc.stanford.edu/"] > default_scores["http://aoerc.stanford.edu/"]
    assert tuned_scores["http://blog.example.com/2013/aoerc-review"] == pytest.approx(
        default_scores["http://blog.example.com/2013/aoerc-review"]
    )
    assert write_parameter_file(anchor_heavy, tmp_path / "bm25Para.txt")
    assert "anchorweight 5.0" in (tmp_path / "bm25Para.txt").read_text(encoding="utf-8").splitlines()
