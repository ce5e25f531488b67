"""Tunable BM25 parameters and their flat-file export.

Parameters are an immutable pydantic model handed to the scorer at
construction time. A tuning sweep builds one ``ScorerParameters`` per run
instead of mutating shared weights.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, model_validator

from field_rank.observability.metrics import PARAMETER_WRITE_ERRORS
from field_rank.scoring.models import FieldKind


logger = logging.getLogger(__name__)


class FieldParameters(BaseModel):
    """Weight and length-normalization slope for one document field."""

    model_config = {"extra": "forbid", "frozen": True}

    weight: Annotated[
        float,
        Field(
            ge=0.0,
            description="Multiplier applied to the field's normalized term frequency",
        ),
    ]

    b: Annotated[
        float,
        Field(
            ge=0.0,
            le=1.0,
            description="Length normalization slope (0 disables length normalization)",
        ),
    ]


FIELD_DEFAULTS: dict[FieldKind, FieldParameters] = {
    FieldKind.URL: FieldParameters(weight=0.2, b=0.5),
    FieldKind.TITLE: FieldParameters(weight=1.0, b=0.7),
    FieldKind.BODY: FieldParameters(weight=0.2, b=0.8),
    FieldKind.HEADER: FieldParameters(weight=0.5, b=0.8),
    FieldKind.ANCHOR: FieldParameters(weight=0.5, b=0.4),
}


class ScorerParameters(BaseModel):
    """Complete configuration of the BM25 scorer."""

    model_config = {"extra": "forbid", "frozen": True}

    url: Annotated[
        FieldParameters,
        Field(description="URL token field"),
    ] = FIELD_DEFAULTS[FieldKind.URL]

    title: Annotated[
        FieldParameters,
        Field(description="Title field"),
    ] = FIELD_DEFAULTS[FieldKind.TITLE]

    body: Annotated[
        FieldParameters,
        Field(description="Body field"),
    ] = FIELD_DEFAULTS[FieldKind.BODY]

    header: Annotated[
        FieldParameters,
        Field(description="Section header field"),
    ] = FIELD_DEFAULTS[FieldKind.HEADER]

    anchor: Annotated[
        FieldParameters,
        Field(description="Incoming anchor text field"),
    ] = FIELD_DEFAULTS[FieldKind.ANCHOR]

    k1: Annotated[
        float,
        Field(
            gt=0.0,
            description="BM25 term frequency saturation constant",
            examples=[5.0],
        ),
    ] = 5.0

    page_rank_lambda: Annotated[
        float,
        Field(
            ge=0.0,
            description="Weight of the log-PageRank prior in the final score",
        ),
    ] = 1.0

    page_rank_lambda_prime: Annotated[
        float,
        Field(
            gt=0.0,
            description="Offset added to PageRank before taking the logarithm",
        ),
    ] = 0.7

    @model_validator(mode="before")
    @classmethod
    def _merge_partial_fields(cls, data: Any) -> Any:
        # A partial override such as {"title": {"weight": 2.0}} keeps the
        # field's default slope.
        if not isinstance(data, dict):
            return data
        merged = dict(data)
        for kind, default in FIELD_DEFAULTS.items():
            value = merged.get(kind.value)
            if isinstance(value, dict):
                merged[kind.value] = {**default.model_dump(), **value}
        return merged

    def for_field(self, kind: FieldKind | str) -> FieldParameters:
        """Return the weight/slope record for a field."""
        return getattr(self, FieldKind.parse(kind).value)

    def parameter_items(self) -> list[tuple[str, float]]:
        """Return ``(name, value)`` pairs in the fixed export order."""
        items = [(f"{kind.value}weight", self.for_field(kind).weight) for kind in FieldKind]
        # The slope block lists header before body.
        slope_order = (FieldKind.URL, FieldKind.TITLE, FieldKind.HEADER, FieldKind.BODY, FieldKind.ANCHOR)
        items.extend((f"b{kind.value}", self.for_field(kind).b) for kind in slope_order)
        items.extend(
            [
                ("k1", self.k1),
                ("pageRankLambda", self.page_rank_lambda),
                ("pageRankLambdaPrime", self.page_rank_lambda_prime),
            ]
        )
        return items


def format_parameter_lines(parameters: ScorerParameters) -> list[str]:
    """Render parameters as ``name value`` lines."""
    return [f"{name} {float(value)!r}" for name, value in parameters.parameter_items()]


def write_parameter_file(parameters: ScorerParameters, path: Path | str) -> bool:
    """Write parameters to ``path`` for external tuning tools.

    The write is best effort: an ``OSError`` is logged and counted, and
    ``False`` is returned instead of raising.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("\n".join(format_parameter_lines(parameters)) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write parameter file %s: %s", target, exc, exc_info=True)
        PARAMETER_WRITE_ERRORS.labels(reason=type(exc).__name__).inc()
        return False

    logger.debug("Wrote scorer parameters to %s", target)
    return True
