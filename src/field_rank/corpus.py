"""JSON loaders for scoring corpora and IDF tables.

Corpus file layout::

    {
      "stanford aoerc": {
        "http://aoerc.stanford.edu/": {
          "title": "AOERC",
          "body_length": 120,
          "headers": ["Hours"],
          "anchors": {"aoerc gym": 3},
          "page_rank": 2,
          "body_hits": {"aoerc": [4, 17]}
        }
      }
    }

Every document record is bound to the query it appears under, so the same
URL listed under two queries yields two ``Document`` objects.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import orjson
from pydantic import BaseModel, Field, ValidationError

from field_rank.errors import CorpusLoadError
from field_rank.scoring.idf import IdfTable
from field_rank.scoring.models import Document, Query


logger = logging.getLogger(__name__)


class DocumentRecord(BaseModel):
    """Validated shape of one document entry in a corpus file."""

    model_config = {"extra": "forbid"}

    title: str | None = None
    body_length: Annotated[int, Field(ge=0)] = 0
    headers: list[str] | None = None
    anchors: dict[str, Annotated[int, Field(ge=0)]] | None = None
    page_rank: Annotated[float, Field(ge=0.0)] = 0.0
    body_hits: dict[str, list[int]] | None = None

    def to_document(self, url: str) -> Document:
        return Document(
            url=url,
            title=self.title,
            body_length=self.body_length,
            headers=tuple(self.headers) if self.headers is not None else None,
            anchors=dict(self.anchors) if self.anchors is not None else None,
            page_rank=self.page_rank,
            body_hits=(
                {term: tuple(positions) for term, positions in self.body_hits.items()}
                if self.body_hits is not None
                else None
            ),
        )


class IdfRecord(BaseModel):
    """IDF file given as document frequencies."""

    model_config = {"extra": "forbid"}

    total_docs: Annotated[int, Field(ge=0)]
    doc_freqs: dict[str, Annotated[int, Field(ge=0)]]


def _read_json(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except OSError as exc:
        raise CorpusLoadError(f"Cannot read {path}: {exc}") from exc
    except orjson.JSONDecodeError as exc:
        raise CorpusLoadError(f"Invalid JSON in {path}: {exc}") from exc


def parse_corpus(payload: Any) -> dict[Query, dict[str, Document]]:
    """Build the query -> url -> document mapping from decoded JSON."""
    if not isinstance(payload, dict):
        raise CorpusLoadError("Corpus must be a JSON object keyed by query text")

    corpus: dict[Query, dict[str, Document]] = {}
    for query_text, documents in payload.items():
        if not isinstance(documents, dict):
            raise CorpusLoadError(f"Documents for query {query_text!r} must be a JSON object keyed by URL")
        query = Query.from_text(query_text)
        if query in corpus:
            raise CorpusLoadError(f"Query {query_text!r} normalizes to the same terms as an earlier query: {str(query)!r}")
        try:
            corpus[query] = {
                url: DocumentRecord.model_validate(record).to_document(url) for url, record in documents.items()
            }
        except ValidationError as exc:
            raise CorpusLoadError(f"Invalid document under query {query_text!r}: {exc}") from exc
    return corpus


def load_corpus(path: Path | str) -> dict[Query, dict[str, Document]]:
    source = Path(path)
    corpus = parse_corpus(_read_json(source))
    logger.info("Loaded %d queries from %s", len(corpus), source)
    return corpus


def parse_idf(payload: Any) -> IdfTable:
    """Build an IDF table from decoded JSON.

    Accepts either ``{"total_docs": N, "doc_freqs": {...}}`` or a flat
    ``{term: idf}`` object (unseen terms then score 0).
    """
    if not isinstance(payload, dict):
        raise CorpusLoadError("IDF file must be a JSON object")

    try:
        if "doc_freqs" in payload:
            record = IdfRecord.model_validate(payload)
            return IdfTable.from_document_frequencies(record.doc_freqs, record.total_docs)
        values = {str(term): float(value) for term, value in payload.items()}
    except ValidationError as exc:
        raise CorpusLoadError(f"Invalid IDF document frequencies: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise CorpusLoadError(f"IDF values must be numbers: {exc}") from exc
    return IdfTable(values)


def load_idf(path: Path | str) -> IdfTable:
    source = Path(path)
    table = parse_idf(_read_json(source))
    logger.info("Loaded %d IDF entries from %s", len(table), source)
    return table
