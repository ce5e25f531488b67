"""Command line entry point for scoring a corpus and exporting parameters.

Usage:
    field-rank score --corpus corpus.json --idf idf.json [--metrics-out field_rank.prom]
    field-rank params --output bm25Para.txt
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys
from typing import TextIO

import orjson
from pydantic import ValidationError

from field_rank.config import Settings
from field_rank.corpus import load_corpus, load_idf
from field_rank.errors import CorpusLoadError
from field_rank.observability.logging import configure_logging
from field_rank.observability.metrics import get_metrics
from field_rank.observability.tracing import init_tracing
from field_rank.parameters import write_parameter_file
from field_rank.scoring.scorer import BM25Scorer
from field_rank.scoring.term_frequencies import extract_term_frequencies


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="field-rank",
        description="Score documents with field-weighted BM25 and a PageRank prior",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser("score", help="Print one JSON line per (query, url) score")
    score.add_argument("--corpus", type=Path, required=True, help="JSON file of query -> url -> document")
    score.add_argument("--idf", type=Path, required=True, help="JSON IDF table or document frequencies")
    score.add_argument(
        "--params-out",
        type=Path,
        default=None,
        help="Parameter file path (defaults to FIELD_RANK_PARAMETER_FILE)",
    )
    score.add_argument(
        "--metrics-out",
        type=Path,
        default=None,
        help="Write Prometheus text metrics here after scoring (textfile collector format)",
    )

    params = subparsers.add_parser("params", help="Write the current parameters as 'name value' lines")
    params.add_argument("--output", type=Path, default=None, help="Destination (defaults to FIELD_RANK_PARAMETER_FILE)")
    return parser


def run_score(args: argparse.Namespace, settings: Settings, out: TextIO) -> int:
    try:
        corpus = load_corpus(args.corpus)
        idf = load_idf(args.idf)
    except CorpusLoadError as exc:
        logger.error("%s", exc)
        return 1

    scorer = BM25Scorer(corpus, parameters=settings.parameters)

    if settings.write_parameter_file or args.params_out is not None:
        write_parameter_file(settings.parameters, args.params_out or settings.parameter_file)

    for query, documents in corpus.items():
        for url, document in documents.items():
            raw = extract_term_frequencies(document, query)
            score = scorer.similarity(document, query, raw, idf)
            out.write(orjson.dumps({"query": str(query), "url": url, "score": score}).decode("utf-8") + "\n")

    if args.metrics_out is not None:
        return export_metrics(args.metrics_out)
    return 0


def export_metrics(path: Path) -> int:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(get_metrics())
    except OSError as exc:
        logger.error("Failed to write metrics to %s: %s", path, exc)
        return 1
    logger.info("Metrics written to %s", path)
    return 0


def run_params(args: argparse.Namespace, settings: Settings) -> int:
    target = args.output or settings.parameter_file
    if not write_parameter_file(settings.parameters, target):
        return 1
    logger.info("Parameters written to %s", target)
    return 0


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        configure_logging("error", json_output=False, stream=sys.stderr)
        logger.error("Invalid configuration: %s", exc)
        return 1

    configure_logging(settings.log_level, settings.json_logs, stream=sys.stderr)
    init_tracing()

    if args.command == "score":
        return run_score(args, settings, out or sys.stdout)
    return run_params(args, settings)


if __name__ == "__main__":
    sys.exit(main())
