"""CLI entry point for the Todo Search server."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from todosearch.service.index import QUERY_METHOD_TYPES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-search",
        description="Todo Search — Todo list service with Apache Solr backed search",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help="Number of worker processes (overrides config)",
    )
    parser.add_argument(
        "--query-method",
        type=str,
        choices=list(QUERY_METHOD_TYPES),
        default=None,
        help="Search query strategy (overrides config)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Todo Search {_get_version()}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the Todo Search server."""
    args = build_parser().parse_args(argv)

    from todosearch.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.query_method:
        settings.solr.query_method_type = args.query_method
    if args.log_level:
        settings.observability.log_level = args.log_level

    import uvicorn

    # Worker and reload processes import the app factory themselves
    settings.export_snapshot()

    uvicorn.run(
        "todosearch.api.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers if not args.reload else 1,
        reload=args.reload,
        log_level=settings.observability.log_level,
    )


def _get_version() -> str:
    """Get the package version."""
    try:
        from todosearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
