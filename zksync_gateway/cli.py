"""Command line interface for the zkSync Era gateway."""
import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_credentials
from .gateway import ZkSyncGateway
from .operations.table import OPERATIONS
from .utils.errors import GatewayError

logger = logging.getLogger(__name__)

console = Console()


def parse_param(text: str) -> tuple:
    """Parse a ``key=value`` pair; the value may be JSON (objects, numbers)."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {text!r}")
    if value[:1] in ("{", "["):
        try:
            return key, json.loads(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"invalid JSON for {key}: {e}") from e
    return key, value


def load_items(path: str) -> List[Dict[str, Any]]:
    """Load input items from a YAML or JSON file (a list or a single mapping)."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path} must contain a mapping or a list of mappings")
    return data


def show_operations(resource: Optional[str] = None) -> None:
    table = Table(title="zkSync Era operations")
    table.add_column("Resource", style="cyan")
    table.add_column("Operation", style="green")
    table.add_column("Method")
    table.add_column("Parameters")

    for spec in OPERATIONS:
        if resource and spec.resource != resource:
            continue
        params = ", ".join(p.name if p.required else escape(f"[{p.name}]") for p in spec.params)
        table.add_row(spec.resource, spec.operation, spec.method, params or "-")

    console.print(table)


async def run_operation(args: argparse.Namespace) -> int:
    credentials = load_credentials(args.config)
    items = load_items(args.items) if args.items else [{}]
    overrides = dict(args.param or [])
    items = [{**item, **overrides} for item in items]

    async with ZkSyncGateway(credentials) as gateway:
        output = await gateway.execute_batch_output(
            args.resource,
            args.operation,
            items,
            continue_on_failure=args.continue_on_failure,
        )

    console.print_json(json.dumps(output))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zksync-gateway", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ops = subparsers.add_parser("operations", help="List supported operations")
    ops.add_argument("resource", nargs="?", help="Only show this resource")

    run = subparsers.add_parser("run", help="Run an operation")
    run.add_argument("resource")
    run.add_argument("operation")
    run.add_argument("-p", "--param", action="append", type=parse_param, metavar="KEY=VALUE",
                     help="Parameter applied to every item (repeatable)")
    run.add_argument("-i", "--items", help="YAML/JSON file with input items")
    run.add_argument("-c", "--config", help="YAML credentials file")
    run.add_argument("--continue-on-failure", action="store_true",
                     help="Record per-item errors instead of aborting")

    serve = subparsers.add_parser("serve", help="Run the HTTP adapter")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8080)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.command == "operations":
        show_operations(args.resource)
        return 0

    if args.command == "serve":
        import uvicorn

        uvicorn.run("zksync_gateway.server:app", host=args.host, port=args.port)
        return 0

    try:
        return asyncio.run(run_operation(args))
    except GatewayError as e:
        where = f" (item {e.item_index})" if e.item_index is not None else ""
        console.print(f"[bold red]{type(e).__name__}{where}: {escape(str(e))}[/bold red]")
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
