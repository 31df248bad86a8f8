#!/usr/bin/env python3
"""CLI for certificate API management tasks.

Usage:
    python -m cli <command>

Commands:
    serve      Run the API with uvicorn
    catalog    Print the seeded catalog as JSON
"""

import argparse
import json
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CATALOG_SECTIONS = ("templates", "badges", "signatories")


def cmd_serve(host: str, port: int, reload: bool) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run("main:app", host=host, port=port, reload=reload)
    return 0


def cmd_catalog(section: str | None) -> int:
    """Print the seeded catalog (or one section of it) as JSON."""
    from services.catalog_service import build_default_catalog

    catalog = build_default_catalog()
    entries = {
        "templates": catalog.list_templates(),
        "badges": catalog.list_badges(),
        "signatories": catalog.list_signatories(),
    }
    sections = [section] if section else list(CATALOG_SECTIONS)
    payload = {
        name: [entry.model_dump(mode="json", by_alias=True) for entry in entries[name]]
        for name in sections
    }
    print(json.dumps(payload, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Certificate API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve = subparsers.add_parser("serve", help="Run the API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=3000)
    serve.add_argument("--reload", action="store_true")

    catalog = subparsers.add_parser(
        "catalog",
        help="Print the seeded catalog as JSON",
    )
    catalog.add_argument("section", nargs="?", choices=CATALOG_SECTIONS)

    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args.host, args.port, args.reload)
    elif args.command == "catalog":
        return cmd_catalog(args.section)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
