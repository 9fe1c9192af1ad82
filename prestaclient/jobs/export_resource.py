"""Export webservice records as JSON.

Connection settings come from the PRESTASHOP_* environment variables (or a
.env file).

Usage:
    python -m prestaclient.jobs.export_resource products \\
        --display id,name,price \\
        --filter active=1 \\
        --filter name:BEGIN:Shirt \\
        --sort price:desc \\
        --limit 20
"""

import argparse
import json
import logging
import sys
from typing import Any

from prestaclient.client import PrestashopClient
from prestaclient.errors import PrestashopError
from prestaclient.resources.facade import Resource

logger = logging.getLogger(__name__)


def apply_filter(resource: Resource, expression: str) -> Resource:
    """
    Apply a --filter expression.

    "field=value" is an equality filter; "field:OP:value" names the
    operator, with comma-separated values for OR and INTERVAL.

    Raises:
        ValueError: If the expression has neither form
    """
    if "=" in expression and ":" not in expression.split("=", 1)[0]:
        field, value = expression.split("=", 1)
        return resource.where(field, value)

    parts = expression.split(":", 2)
    if len(parts) != 3 or not parts[0]:
        raise ValueError(f"Invalid filter expression: {expression}")

    field, operator, value = parts
    if operator.upper() in ("OR", "|", "INTERVAL", ","):
        return resource.where(field, operator, value.split(","))
    return resource.where(field, operator, value)


def apply_sort(resource: Resource, expression: str) -> Resource:
    field, _, direction = expression.partition(":")
    if direction.lower() == "desc":
        return resource.sort_by_desc(field)
    return resource.sort_by(field)


def export_resource(client: PrestashopClient, args: argparse.Namespace) -> list[dict[str, Any]]:
    """Build the query described by args and return record fields."""
    resource = client.resource(args.resource)

    if args.display:
        resource.select([f.strip() for f in args.display.split(",") if f.strip()])
    for expression in args.filter:
        apply_filter(resource, expression)
    for expression in args.sort:
        apply_sort(resource, expression)
    if args.limit is not None:
        resource.limit(args.limit, args.offset)
    if args.shop is not None:
        resource.shop(args.shop)

    records = [record.fields for record in resource.iter()]
    logger.info("Fetched %d %s records", len(records), args.resource)
    return records


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export webservice records as JSON")
    parser.add_argument("resource", help="Resource name, e.g. products")
    parser.add_argument("--display", help="Comma-separated fields to return")
    parser.add_argument(
        "--filter",
        action="append",
        default=[],
        help="field=value or field:OPERATOR:value (repeatable)",
    )
    parser.add_argument(
        "--sort", action="append", default=[], help="field or field:desc (repeatable)"
    )
    parser.add_argument("--limit", type=int, help="Maximum number of records")
    parser.add_argument(
        "--offset", type=int, help="Index of the first record (requires --limit)"
    )
    parser.add_argument("--shop", type=int, help="Shop id for multistore installs")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.offset is not None and args.limit is None:
        parser.error("--offset requires --limit")

    try:
        with PrestashopClient() as client:
            records = export_resource(client, args)
    except (PrestashopError, ValueError) as e:
        logger.error("Export of %s failed: %s", args.resource, e)
        return 1

    json.dump(records, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
