"""CLI entry point — Run one search and print the result as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="serpbridge",
        description="serpbridge — One interface for Serper and SerpAPI web search",
    )
    parser.add_argument("query", nargs="?", help="Search query")
    parser.add_argument(
        "--engine",
        "-e",
        type=str,
        default=None,
        help="Search engine to use (serper, serpapi). Defaults to SEARCH_ENGINE or serper",
    )
    parser.add_argument(
        "--category",
        choices=["web", "news", "images"],
        default="web",
        help="Kind of search to run",
    )
    parser.add_argument(
        "--normalize",
        "-n",
        action="store_true",
        help="Print the provider-independent normalized result instead of the raw response",
    )
    parser.add_argument("--num", type=int, default=10, help="Number of results (1-100)")
    parser.add_argument("--location", type=str, default=None, help="Search location")
    parser.add_argument("--language", type=str, default=None, help="Language code, e.g. 'en'")
    parser.add_argument("--country", type=str, default=None, help="Country code, e.g. 'us'")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--list-engines",
        action="store_true",
        help="List the configured engines and their supported tools, then exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"serpbridge {_get_version()}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.query and not args.list_engines:
        parser.error("a search query is required")

    from pydantic import ValidationError

    from serpbridge.adapters.base.exceptions import AdapterError
    from serpbridge.adapters.base.registry import AdapterNotFoundError
    from serpbridge.client.client import AsyncSearchClient, build_registry
    from serpbridge.config.settings import Settings
    from serpbridge.core.exceptions import NormalizationError
    from serpbridge.models.query import SearchParams
    from serpbridge.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    if args.list_engines:
        registry = build_registry(settings)
        info = {name: engine.model_dump() for name, engine in registry.engine_info().items()}
        print(json.dumps(info, indent=2))
        return

    try:
        client = AsyncSearchClient.from_settings(settings, args.engine)
    except AdapterNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        params = SearchParams(
            query=args.query,
            location=args.location,
            language=args.language,
            country=args.country,
            num_results=args.num,
        )
    except ValidationError as e:
        print(f"Error: invalid search parameters: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        output = asyncio.run(_run(client, args.category, params, normalized=args.normalize))
    except (AdapterError, NormalizationError) as e:
        logger.debug("Search failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(output)


async def _run(client: Any, category: str, params: Any, *, normalized: bool) -> str:
    """Run one search with *client* and render the JSON output."""
    async with client:
        if normalized:
            calls = {
                "web": client.search_normalized,
                "news": client.search_news_normalized,
                "images": client.search_images_normalized,
            }
            result = await calls[category](params)
            return str(result.to_json(indent=2))

        calls = {
            "web": client.search,
            "news": client.search_news,
            "images": client.search_images,
        }
        raw = await calls[category](params)
        return json.dumps(raw.data, indent=2, ensure_ascii=False)


def _get_version() -> str:
    """Get the package version."""
    try:
        from serpbridge import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
