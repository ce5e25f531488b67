"""BM25 length normalization of raw per-field term frequencies."""

from __future__ import annotations

from collections.abc import Mapping

from field_rank.parameters import ScorerParameters
from field_rank.scoring.models import FieldKind


RawTermFrequencies = Mapping[FieldKind | str, Mapping[str, float]]
TermFrequencies = dict[FieldKind, dict[str, float]]


def normalization_factor(length: float, average_length: float, b: float) -> float:
    """Return ``1 / (1 + b * (length / average_length - 1))``.

    The factor is 0 when the corpus average is 0 or the document's own
    field is empty, since such a field holds no terms to scale.
    """
    if average_length == 0 or length == 0:
        return 0.0
    return 1.0 / (1.0 + b * (length / average_length - 1.0))


def normalize_term_frequencies(
    raw: RawTermFrequencies,
    *,
    lengths: Mapping[FieldKind, float],
    average_lengths: Mapping[FieldKind, float],
    parameters: ScorerParameters,
) -> TermFrequencies:
    """Scale every field's frequencies by that field's normalization factor.

    ``raw`` is left untouched; a new mapping keyed by ``FieldKind`` is
    returned.

    Raises:
        InvalidFieldError: if a key of ``raw`` is not a known field.
    """
    normalized: TermFrequencies = {}
    for field_name, frequencies in raw.items():
        kind = FieldKind.parse(field_name)
        factor = normalization_factor(lengths[kind], average_lengths[kind], parameters.for_field(kind).b)
        normalized[kind] = {term: factor * value for term, value in frequencies.items()}
    return normalized
