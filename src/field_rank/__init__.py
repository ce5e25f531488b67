"""Field-weighted BM25 relevance scoring with a PageRank prior."""

from field_rank.errors import (
    CorpusLoadError,
    FieldRankError,
    InvalidFieldError,
    MissingTermFrequencyError,
    UnknownDocumentError,
)
from field_rank.parameters import FieldParameters, ScorerParameters, write_parameter_file
from field_rank.scoring.idf import IdfTable
from field_rank.scoring.models import Document, FieldKind, Query
from field_rank.scoring.scorer import BM25Scorer
from field_rank.scoring.term_frequencies import extract_term_frequencies, query_term_counts


__all__ = [
    "BM25Scorer",
    "CorpusLoadError",
    "Document",
    "FieldKind",
    "FieldParameters",
    "FieldRankError",
    "IdfTable",
    "InvalidFieldError",
    "MissingTermFrequencyError",
    "Query",
    "ScorerParameters",
    "UnknownDocumentError",
    "extract_term_frequencies",
    "query_term_counts",
    "write_parameter_file",
]
