"""Data models shared by the length statistics, normalizer and scorer."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from field_rank.errors import InvalidFieldError


class FieldKind(str, Enum):
    """The five structural parts of a document that are scored."""

    URL = "url"
    TITLE = "title"
    BODY = "body"
    HEADER = "header"
    ANCHOR = "anchor"

    @classmethod
    def parse(cls, value: FieldKind | str) -> FieldKind:
        """Resolve a field member from itself or its name.

        Raises:
            InvalidFieldError: if ``value`` names none of the five fields.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidFieldError(value) from None


@dataclass(frozen=True, eq=False)
class Document:
    """A scored document.

    Documents are compared and hashed by identity so they can key the
    per-document caches even though ``anchors`` and ``body_hits`` are dicts.
    """

    url: str | None
    title: str | None = None
    body_length: int = 0
    headers: tuple[str, ...] | None = None
    anchors: Mapping[str, int] | None = None
    page_rank: float = 0.0
    body_hits: Mapping[str, tuple[int, ...]] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.body_length < 0:
            raise ValueError(f"body_length must be >= 0, got {self.body_length}")
        if self.page_rank < 0:
            raise ValueError(f"page_rank must be >= 0, got {self.page_rank}")
        if self.anchors is not None and any(count < 0 for count in self.anchors.values()):
            raise ValueError(f"anchor link counts must be >= 0, got {dict(self.anchors)}")
        if isinstance(self.headers, str):
            raise TypeError("headers must be a sequence of header strings, not a single str")
        if self.headers is not None and not isinstance(self.headers, tuple):
            object.__setattr__(self, "headers", tuple(self.headers))


@dataclass(frozen=True)
class Query:
    """An immutable sequence of query terms."""

    terms: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> Query:
        return cls(tuple(token.lower() for token in text.split()))

    def term_counts(self) -> dict[str, int]:
        """Return each distinct term with its frequency within the query."""
        return dict(Counter(self.terms))

    def __str__(self) -> str:
        return " ".join(self.terms)
