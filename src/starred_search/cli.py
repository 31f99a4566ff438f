"""Command-line search over a JSON export of starred repositories."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

import orjson
from pydantic import TypeAdapter, ValidationError

from starred_search.config import Settings
from starred_search.domain.model import RepositorySearchResult, StarredRepository
from starred_search.observability.logging import configure_logging
from starred_search.observability.metrics import get_metrics
from starred_search.service_layer.search_service import RepositorySearchService


logger = logging.getLogger(__name__)

_REPOSITORY_LIST = TypeAdapter(list[StarredRepository])


def load_repositories(path: Path) -> list[StarredRepository]:
    """Load and validate a JSON array of repository records (camelCase or snake_case)."""
    payload = orjson.loads(path.read_bytes())
    return _REPOSITORY_LIST.validate_python(payload)


def _format_text(results: list[RepositorySearchResult]) -> str:
    lines = []
    for rank, result in enumerate(results, start=1):
        matched = ", ".join(result.matched_tokens)
        lines.append(f"{rank:>3}. {result.id}  score={result.score:.4f}  matched=[{matched}]")
    return "\n".join(lines)


def _format_json(results: list[RepositorySearchResult]) -> str:
    payload = [result.model_dump(mode="json", by_alias=True) for result in results]
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starred-search",
        description="Rank starred repositories from a JSON export against keywords.",
    )
    parser.add_argument("repositories", type=Path, help="JSON file holding an array of repository records")
    parser.add_argument(
        "-k",
        "--keyword",
        dest="keywords",
        action="append",
        required=True,
        help="Search keyword; repeat for several keywords",
    )
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", default=None, help="Override STARRED_SEARCH_LOG_LEVEL")
    parser.add_argument(
        "--metrics",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write Prometheus metrics in text exposition format to FILE after searching",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(args.log_level or settings.log_level, json_output=settings.log_json, stream=sys.stderr)

    try:
        repositories = load_repositories(args.repositories)
    except (OSError, orjson.JSONDecodeError, ValidationError) as exc:
        logger.error("Failed to load repositories from %s: %s", args.repositories, exc)
        sys.stderr.write(f"error: cannot load {args.repositories}: {exc}\n")
        return 1

    service = RepositorySearchService(settings)
    service.rebuild(repositories)
    results = service.search(args.keywords, limit=args.limit)

    output = _format_json(results) if args.json else _format_text(results)
    if output:
        sys.stdout.write(output + "\n")

    if args.metrics is not None:
        try:
            args.metrics.write_bytes(get_metrics())
        except OSError as exc:
            logger.error("Failed to write metrics to %s: %s", args.metrics, exc)
            sys.stderr.write(f"error: cannot write metrics to {args.metrics}: {exc}\n")
            return 1
    return 0
