"""Command-line interface for the Invierte Ya web client."""

import argparse
import asyncio
import sys

from invierte_ya_web import __version__
from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.config import get_settings
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.formatting import format_money
from invierte_ya_web.logging_config import configure_logging
from invierte_ya_web.session.store import MemoryTokenStore


def create_client(api_url: str | None = None) -> InvierteYaAPIClient:
    """Create an unauthenticated API client for one-off commands."""
    return InvierteYaAPIClient(api_url, token_store=MemoryTokenStore())


async def _check_health(api_url: str | None) -> dict:
    api = create_client(api_url)
    try:
        return await api.health_check()
    finally:
        await api.aclose()


async def _fetch_funds(api_url: str | None) -> list:
    api = create_client(api_url)
    try:
        return await api.list_funds()
    finally:
        await api.aclose()


def cmd_serve(args: argparse.Namespace) -> int:
    """Launch the NiceGUI web interface."""
    try:
        from invierte_ya_web.ui.main import run
    except ImportError:
        print("Frontend dependencies are not installed.")
        print("Install with: pip install invierte-ya-web")
        return 1

    run(
        port=args.port,
        api_url=args.api_url,
        reload=False if args.no_reload else None,
    )
    return 0


def cmd_health(args: argparse.Namespace) -> int:
    """Check that the ledger API answers."""
    base_url = args.api_url or get_settings().api_base_url
    try:
        status = asyncio.run(_check_health(args.api_url))
    except InvierteYaError as e:
        print(f"API unreachable at {base_url}: {e.message}")
        return 1

    print(f"API: {base_url}")
    print(f"Status: {status.get('status', 'unknown')}")
    return 0


def cmd_funds(args: argparse.Namespace) -> int:
    """List the public fund catalogue."""
    try:
        funds = asyncio.run(_fetch_funds(args.api_url))
    except InvierteYaError as e:
        print(f"Error: {e.message}")
        return 1

    if not funds:
        print("No funds available.")
        return 0

    print(f"{'ID':<6} {'Name':<40} {'Category':<10} {'Minimum':>20}")
    print("-" * 80)
    for fund in funds:
        print(
            f"{fund.fund_id:<6} {fund.name:<40} {fund.category.value:<10} "
            f"{format_money(fund.minimum_amount):>20}"
        )
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"Invierte Ya Web v{__version__}")
    return 0


def _add_api_url(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--api-url",
        default=None,
        help="Ledger API base URL (default: IYW_API_BASE_URL or the production URL)",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="invierte-ya-web",
        description="Invierte Ya - Investment fund web client",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Launch the web interface")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the web interface (default: 3000)",
    )
    _add_api_url(serve_parser)
    serve_parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload even when IYW_UI_RELOAD is set",
    )
    serve_parser.set_defaults(func=cmd_serve)

    # health command
    health_parser = subparsers.add_parser("health", help="Check the ledger API")
    _add_api_url(health_parser)
    health_parser.set_defaults(func=cmd_health)

    # funds command
    funds_parser = subparsers.add_parser("funds", help="List available funds")
    _add_api_url(funds_parser)
    funds_parser.set_defaults(func=cmd_funds)

    # version command
    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging()

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
