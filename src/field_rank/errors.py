"""Exception types raised by the scoring stack."""

from __future__ import annotations


class FieldRankError(Exception):
    """Base class for all field-rank errors."""


class InvalidFieldError(FieldRankError, ValueError):
    """Raised when a field name is not one of the five scored fields."""

    def __init__(self, field_name: object) -> None:
        self.field_name = field_name
        super().__init__(f"Unexpected field '{field_name}'")


class MissingTermFrequencyError(FieldRankError, KeyError):
    """Raised when a query term has no frequency entry for a field.

    The term-frequency producer must supply an entry (possibly zero) for
    every query term in every field.
    """

    def __init__(self, field_name: str, term: str) -> None:
        self.field_name = field_name
        self.term = term
        super().__init__(f"No term frequency for '{term}' in field '{field_name}'")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0])


class UnknownDocumentError(FieldRankError, KeyError):
    """Raised when scoring a document that was not in the construction corpus."""

    def __init__(self, url: str | None) -> None:
        self.url = url
        super().__init__(f"Document not in scorer corpus: {url!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class CorpusLoadError(FieldRankError, RuntimeError):
    """Raised when a corpus or IDF file cannot be parsed."""
