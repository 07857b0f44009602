"""Command-line interface for linkqueue."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.enqueue import enqueue_links
from .exceptions import LinkQueueError
from .logging_config import setup_logging
from .models.request import QueueOperationInfo, Request
from .queue.memory import MemoryRequestQueue


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="linkqueue",
        description="Extract links from an HTML document and show the requests they would enqueue",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # All links in a saved page
  linkqueue page.html --base-url https://example.com

  # Only product pages, at most 20
  linkqueue page.html --base-url https://example.com \\
      --pattern "https://example.com/products/[.*]" --limit 20

  # Read HTML from stdin, print JSON
  curl -s https://example.com | linkqueue - --base-url https://example.com --json
        """,
    )

    parser.add_argument(
        "input",
        help="HTML file to read links from ('-' for stdin)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    extract_group = parser.add_argument_group("extraction")
    extract_group.add_argument(
        "--base-url",
        "-b",
        default=None,
        help="Base URL for resolving relative links",
    )
    extract_group.add_argument(
        "--selector",
        "-s",
        default="a",
        help="CSS selector for link elements (default: a)",
    )
    extract_group.add_argument(
        "--pattern",
        "-p",
        action="append",
        dest="patterns",
        metavar="PURL",
        help="Pseudo-URL links must match, e.g. 'https://example.com/[.*]' (repeatable)",
    )
    extract_group.add_argument(
        "--limit",
        "-l",
        type=int,
        default=None,
        help="Maximum number of requests",
    )

    request_group = parser.add_argument_group("requests")
    request_group.add_argument(
        "--method",
        default=None,
        help="HTTP method for created requests (default: GET)",
    )
    request_group.add_argument(
        "--label",
        default=None,
        help="Value stored as user_data['label'] on every request",
    )
    request_group.add_argument(
        "--keep-fragment",
        action="store_true",
        help="Keep URL fragments when computing unique keys",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    return parser


def build_transform(args: argparse.Namespace) -> Optional[Callable[[Request], Request]]:
    """Build a request transform from CLI flags, or None if no flag needs one."""
    if not (args.method or args.label or args.keep_fragment):
        return None

    def transform(request: Request) -> Request:
        if args.method:
            request.method = args.method.upper()
        if args.label:
            request.user_data["label"] = args.label
        if args.keep_fragment:
            request.keep_url_fragment = True
        return request

    return transform


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def to_json_records(infos: list[QueueOperationInfo], queue: MemoryRequestQueue) -> list[dict[str, Any]]:
    """Pair each queue outcome with the request it refers to."""
    records = []
    for info in infos:
        record = info.to_dict()
        request = queue.get_request(info.request_id)
        record["request"] = request.to_dict() if request else None
        records.append(record)
    return records


def render_results(
    console: Console,
    infos: list[QueueOperationInfo],
    queue: MemoryRequestQueue,
) -> None:
    """Print a table of queue outcomes."""
    table = Table(title=f"Enqueued requests ({len(infos)})")
    table.add_column("#", justify="right")
    table.add_column("URL")
    table.add_column("Method")
    table.add_column("Request ID")
    table.add_column("Status")

    for i, info in enumerate(infos, 1):
        status = "[yellow]duplicate[/yellow]" if info.was_already_present else "[green]new[/green]"
        request = queue.get_request(info.request_id)
        url = request.url if request else info.unique_key
        method = request.method if request else ""
        table.add_row(str(i), escape(url), method, info.request_id, status)

    console.print(table)

    stats = queue.get_stats()
    console.print(f"  New: {stats['total_added']}  Duplicates: {stats['duplicates_found']}")


def run(args: argparse.Namespace) -> int:
    """Run the extraction for parsed arguments and return an exit code."""
    console = Console()
    err_console = Console(stderr=True)

    if args.verbose:
        setup_logging("DEBUG", force=True)
    elif args.quiet:
        setup_logging("ERROR", force=True)
    else:
        setup_logging("WARNING", force=True)

    try:
        html = read_input(args.input)
    except OSError as e:
        err_console.print(f"[red]Cannot read input:[/red] {escape(str(e))}")
        return 1

    queue = MemoryRequestQueue()
    options: dict[str, Any] = {
        "document": html,
        "selector": args.selector,
        "base_url": args.base_url,
        "patterns": args.patterns,
        "limit": args.limit,
        "transform": build_transform(args),
    }

    try:
        infos = asyncio.run(enqueue_links(queue, **options))
    except LinkQueueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    if args.json:
        print(json.dumps(to_json_records(infos, queue), indent=2, ensure_ascii=False))
    else:
        render_results(console, infos, queue)

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
