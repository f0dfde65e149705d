#!/usr/bin/env python3
"""
Akavelog demo dashboard CLI

Usage:
    python -m akavelog_ui types                                   # List input types
    python -m akavelog_ui inputs                                  # List provisioned inputs
    python -m akavelog_ui create --title web --set port=9000      # Create an input from its schema
    python -m akavelog_ui send-test raw                           # Post a test log to /ingest/raw
    python -m akavelog_ui watch --duration 60                     # Live dashboard
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Tuple

from akavelog_ui.config.settings import get_settings
from akavelog_ui.engine.controller import OrchestrationController
from akavelog_ui.errors import SchemaFetchError
from akavelog_ui.logging_config import configure_logging, get_logger
from akavelog_ui.render import render_dashboard, render_error, render_inputs

logger = get_logger(name=__name__)

CLEAR_SCREEN = "\033[2J\033[H"


def parse_assignments(raw: List[str]) -> List[Tuple[str, str]]:
    """Parse ``key=value`` pairs from repeated ``--set`` options."""
    pairs = []
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"Expected key=value, got {item!r}")
        pairs.append((key.strip(), value))
    return pairs


async def list_types(args) -> int:
    """List input type names known to the backend."""
    dashboard = OrchestrationController.from_settings()
    try:
        types = await dashboard.schemas.list_types()
    except SchemaFetchError as exc:
        print(f"❌ {exc.message}")
        return 1

    for type_name in types:
        print(type_name)
    return 0


async def list_inputs(args) -> int:
    """List provisioned inputs with their ingest URLs."""
    dashboard = OrchestrationController.from_settings()
    if not await dashboard.load_inputs():
        print("\n".join(render_error(dashboard.error.value)))
        return 1
    print("\n".join(render_inputs(dashboard.registry.items.value, dashboard.ingest_url)))
    return 0


async def create_input(args) -> int:
    """Create an input, filling the schema form from --title / --set."""
    dashboard = OrchestrationController.from_settings()
    if not await dashboard.load_schema(args.type):
        print(f"❌ Input config for {args.type!r} is unavailable")
        return 1

    if args.title is not None:
        dashboard.form.set_title(args.title)
    for key, value in parse_assignments(args.set):
        try:
            dashboard.form.set_value(key, value)
        except KeyError:
            known = ", ".join(dashboard.form.values) or "none"
            print(f"❌ Unknown field {key!r} (fields: {known})")
            return 2

    item = await dashboard.create()
    if item is None:
        print("\n".join(render_error(dashboard.error.value)))
        return 1

    print(f"✅ Created {item.title} ({item.id})")
    print(f"   Send logs to: {dashboard.ingest_url(item)}")
    return 0


async def send_test(args) -> int:
    """Send one test log and show it in the refreshed window."""
    dashboard = OrchestrationController.from_settings()
    if not await dashboard.send_test_log(args.path):
        print("\n".join(render_error(dashboard.error.value)))
        return 1

    print(f"✅ Sent test log to /ingest/{args.path}")
    return 0


async def watch(args) -> int:
    """Run the live dashboard, redrawing whenever any state changes."""
    dashboard = OrchestrationController.from_settings()

    def redraw(_value=None) -> None:
        sys.stdout.write(CLEAR_SCREEN + render_dashboard(dashboard) + "\n")
        sys.stdout.flush()

    views = [
        dashboard.error,
        dashboard.create_state,
        dashboard.form.state,
        dashboard.registry.items,
        dashboard.logs.state,
        dashboard.status.state,
    ]
    unsubscribers = [view.subscribe(redraw) for view in views]

    try:
        async with dashboard:
            redraw()
            if args.duration is not None:
                await asyncio.sleep(args.duration)
            else:
                await asyncio.Event().wait()
    finally:
        for unsubscribe in unsubscribers:
            unsubscribe()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="akavelog-ui",
        description="Akavelog demo dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--log-level", default=None, help="Override AKAVELOG_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("types", help="List input types")
    subparsers.add_parser("inputs", help="List provisioned inputs")

    create_parser = subparsers.add_parser("create", help="Create an input")
    create_parser.add_argument("--type", default=get_settings().default_input_type, help="Input type")
    create_parser.add_argument("--title", default=None, help="Input title")
    create_parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Config field value (repeatable)",
    )

    send_parser = subparsers.add_parser("send-test", help="Send a test log")
    send_parser.add_argument("path", help="Ingest path, e.g. raw")

    watch_parser = subparsers.add_parser("watch", help="Live dashboard")
    watch_parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Seconds to run before exiting (default: until Ctrl+C)",
    )

    return parser


COMMANDS = {
    "types": list_types,
    "inputs": list_inputs,
    "create": create_input,
    "send-test": send_test,
    "watch": watch,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return asyncio.run(COMMANDS[args.command](args))
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except KeyboardInterrupt:
        print("\nStopped.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
