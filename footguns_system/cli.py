#!/usr/bin/env python3
"""
Footguns System CLI

Command-line interface for the catalog of recurring web-framework pitfalls.

Usage:
    # Print all open footguns
    python cli.py list-open

    # List footguns for a framework
    python cli.py list --framework SvelteKit

    # Show one footgun in full
    python cli.py show 2

    # Keyword search
    python cli.py search "cache session"

    # Check a definition file before committing it
    python cli.py validate src/catalog/data/footguns.json

    # Start API server
    python cli.py serve --port 8000
"""

import sys
import json
import logging
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from src.exceptions import FootgunsException

logger = logging.getLogger(__name__)


def load_catalog_from_args(args):
    """Load the catalog from --data or the configured path."""
    from src.catalog import FootgunCatalog

    return FootgunCatalog.from_file(args.data or settings.catalog.data_path)


def print_record_summary(record):
    status = record.status.value
    if record.fixed_in:
        status = f"{status} ({record.fixed_in})"
    print(f"#{record.id} [{record.framework}] {record.title} - {status}")


def print_record(record):
    print_record_summary(record)
    print("=" * 60)
    print(f"\n{record.explanation}")

    print("\nReproduction:")
    print(f"  {record.reproduction.scenario}")
    if record.reproduction.code:
        for line in record.reproduction.code.splitlines():
            print(f"    {line}")

    if record.remedies:
        print("\nRemedies:")
        for remedy in record.remedies:
            print(f"  {remedy.label}: {remedy.guidance}")
            if remedy.code:
                for line in remedy.code.splitlines():
                    print(f"    {line}")
    else:
        print("\nNo known fix yet.")

    if record.notes:
        print("\nNotes:")
        for note in record.notes:
            print(f"  - {note}")


def cmd_list_open(args):
    """Print all open footguns."""
    catalog = load_catalog_from_args(args)
    records = catalog.all_open()

    if not records:
        print("No open footguns")
        return 0

    print(f"\n{len(records)} open footgun(s):")
    for record in records:
        print_record_summary(record)
        if args.verbose and record.primary_remedy:
            print(f"   Fix: {record.primary_remedy.guidance}")
    return 0


def cmd_list(args):
    """List footguns, optionally filtered by framework or status."""
    from src.catalog import FootgunStatus

    catalog = load_catalog_from_args(args)

    records = catalog.by_framework(args.framework) if args.framework else catalog.records
    if args.status:
        status = FootgunStatus(args.status)
        records = [r for r in records if r.status == status]

    if not records:
        print("No footguns found")
        return 0

    for record in records:
        print_record_summary(record)
    return 0


def cmd_show(args):
    """Show a single footgun."""
    catalog = load_catalog_from_args(args)
    print_record(catalog.by_id(args.id))
    return 0


def cmd_search(args):
    """Search footguns by keyword."""
    from src.catalog import FootgunSearchEngine

    engine = FootgunSearchEngine(load_catalog_from_args(args))
    limit = args.limit or settings.search.default_limit

    print(f"\nSearching footguns for: '{args.query}'")
    print("=" * 60)

    results = engine.search(args.query, limit=limit)
    if not results:
        print("No footguns found")
        return 0

    for match in results:
        record = match.record
        print(f"\n[{match.relevance_score:.2f}] #{record.id} {record.framework}: {record.title}")
        if args.verbose:
            print(f"   {record.explanation[:150]}...")
            print(f"   Matched: {', '.join(match.matched_terms)}")
    return 0


def cmd_stats(args):
    """Show catalog statistics."""
    stats = load_catalog_from_args(args).get_statistics()

    print("\nFootgun Catalog Statistics")
    print("=" * 60)
    print(f"Total footguns: {stats['total_footguns']}")
    print(f"Open footguns: {stats['open_footguns']}")

    print("\nBy framework:")
    for name, count in stats["by_framework"].items():
        print(f"   {name}: {count}")

    print("\nBy status:")
    for status, count in stats["by_status"].items():
        print(f"   {status}: {count}")
    return 0


def cmd_export(args):
    """Export the catalog as JSON in catalog order."""
    data = load_catalog_from_args(args).to_dict()
    text = json.dumps(data, indent=2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"Exported {len(data['footguns'])} footguns to: {args.output}")
    else:
        print(text)
    return 0


def cmd_validate(args):
    """Load a definition file and report whether it is valid."""
    from src.catalog import FootgunCatalog

    catalog = FootgunCatalog.from_file(args.path)
    print(f"OK: {len(catalog)} footguns across {len(catalog.frameworks)} frameworks")
    return 0


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    from src.api.server import create_app

    app = create_app(load_catalog_from_args(args))
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


COMMANDS = {
    "list-open": cmd_list_open,
    "list": cmd_list,
    "show": cmd_show,
    "search": cmd_search,
    "stats": cmd_stats,
    "export": cmd_export,
    "validate": cmd_validate,
    "serve": cmd_serve,
}


def build_parser():
    parser = argparse.ArgumentParser(
        description="Footguns System CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Unresolved hazards first
  python cli.py list-open --verbose

  # Everything known about Express
  python cli.py list --framework Express

  # Search
  python cli.py search "async error middleware"
"""
    )

    # Global arguments
    parser.add_argument("--data", help="Path to the footgun definition JSON")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list-open command
    open_parser = subparsers.add_parser("list-open", help="Print all open footguns")
    open_parser.add_argument("--verbose", "-v", action="store_true", help="Show the primary fix")

    # list command
    list_parser = subparsers.add_parser("list", help="List footguns")
    list_parser.add_argument("--framework", help="Filter by framework")
    list_parser.add_argument(
        "--status",
        choices=["open", "fixed-upstream", "by-design-workaround-required"],
        help="Filter by status"
    )

    # show command
    show_parser = subparsers.add_parser("show", help="Show a footgun")
    show_parser.add_argument("id", type=int, help="Footgun id")

    # search command
    search_parser = subparsers.add_parser("search", help="Search footguns")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("--limit", type=int, help="Maximum results")
    search_parser.add_argument("--verbose", "-v", action="store_true", help="Show details")

    # stats command
    subparsers.add_parser("stats", help="Show catalog statistics")

    # export command
    export_parser = subparsers.add_parser("export", help="Export the catalog as JSON")
    export_parser.add_argument("--output", "-o", help="Output file path")

    # validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a definition file")
    validate_parser.add_argument("path", help="Path to definition JSON")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default=settings.api.host, help="Host to bind")
    serve_parser.add_argument("--port", type=int, default=settings.api.port, help="Port to bind")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings.logging.configure()

    try:
        return COMMANDS[args.command](args)
    except FootgunsException as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
