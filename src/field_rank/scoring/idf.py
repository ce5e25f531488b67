"""Inverse document frequency lookup with an explicit unseen-term policy."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import math


class IdfTable(Mapping[str, float]):
    """Read-only term -> IDF mapping.

    Looking up a term that is not in the table returns ``unseen`` rather
    than raising, so the scorer never has to know the table's policy.
    """

    def __init__(self, values: Mapping[str, float], *, unseen: float = 0.0) -> None:
        self._values = dict(values)
        self.unseen = unseen

    @classmethod
    def from_document_frequencies(cls, doc_freqs: Mapping[str, int], total_docs: int) -> IdfTable:
        """Build ``ln((N + 1) / (df + 1))`` weights.

        A term absent from the table is treated as occurring in no
        document and gets ``ln(N + 1)``.
        """
        if total_docs < 0:
            raise ValueError(f"total_docs must be >= 0, got {total_docs}")
        values = {}
        for term, df in doc_freqs.items():
            df = max(0, min(df, total_docs))
            values[term] = math.log((total_docs + 1) / (df + 1))
        return cls(values, unseen=math.log(total_docs + 1))

    def __getitem__(self, term: str) -> float:
        return self._values.get(term, self.unseen)

    def __contains__(self, term: object) -> bool:
        return term in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"IdfTable({len(self._values)} terms, unseen={self.unseen!r})"
