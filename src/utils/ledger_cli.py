"""
Product Ledger CLI

Command-line interface for registering products, recording status changes
and inspecting the history ledger.

Usage Examples:
    # Register a product (acting party defaults to PRODUCT_TRACKER_PARTY or login name)
    python -m src.utils.ledger_cli register "Widget A"

    # Move product 1 to production as a specific party
    python -m src.utils.ledger_cli --as acme update 1 in_production --notes "Line 3"

    # Status may also be given by number
    python -m src.utils.ledger_cli update 1 3

    # Show a product, its history, or audit its ledger
    python -m src.utils.ledger_cli show 1
    python -m src.utils.ledger_cli history 1
    python -m src.utils.ledger_cli verify 1

    # List statuses and allowed transitions
    python -m src.utils.ledger_cli statuses
"""

import argparse
import logging
import sys
from typing import List, Optional, Union

from src.models.product_status import ProductStatus, get_status_name
from src.services.database import initialize_app_database
from src.services.exceptions import LedgerError, ServiceError
from src.services.history_audit_service import verify_history
from src.services.ledger_service import register_product, update_status
from src.services.product_query_service import (
    get_product,
    get_product_history,
    get_sequence_count,
    next_product_id,
)
from src.services.transition_validator import allowed_targets
from src.utils.config import get_default_party


def parse_status(text: str) -> Union[int, str]:
    """
    Interpret a status argument.

    Numbers are passed through as integer codes and names are matched
    case-insensitively ("in production", "in-production", "IN_PRODUCTION").
    Unrecognized names are returned unchanged so the ledger reports them
    as an invalid status.
    """
    text = text.strip()
    if text.isdigit():
        return int(text)
    key = text.upper().replace("-", "_").replace(" ", "_")
    if key in ProductStatus.__members__:
        return ProductStatus[key]
    return text


def _format_error(error: ServiceError) -> str:
    if isinstance(error, LedgerError):
        return f"ERROR [{error.code}]: {error}"
    return f"ERROR: {error}"


def register_cmd(name: str, party: str) -> int:
    """Register a product."""
    try:
        product_id = register_product(name, party)
    except ServiceError as e:
        print(_format_error(e))
        return 1

    print(f"Registered product {product_id}: {name}")
    return 0


def update_cmd(product_id: int, status: str, notes: str, party: str) -> int:
    """Record a status change."""
    target = parse_status(status)
    try:
        update_status(product_id, target, notes, party)
    except ServiceError as e:
        print(_format_error(e))
        return 1

    print(f"Product {product_id} is now {get_status_name(target)}")
    return 0


def show_cmd(product_id: int) -> int:
    """Print one product."""
    product = get_product(product_id)
    if product is None:
        print(f"ERROR: Product with ID {product_id} not found")
        return 1

    print(f"Product {product.id}: {product.name}")
    print(f"  Manufacturer: {product.manufacturer}")
    print(f"  Status:       {get_status_name(product.current_status)}")
    print(f"  Created:      {product.created_at.isoformat()}")
    print(f"  Updated:      {product.updated_at.isoformat()}")
    print(f"  Entries:      {get_sequence_count(product_id)}")
    return 0


def history_cmd(product_id: int) -> int:
    """Print a product's history ledger."""
    entries = get_product_history(product_id)
    if not entries:
        print(f"ERROR: No history for product {product_id}")
        return 1

    for entry in entries:
        print(
            f"{entry.sequence:>4}  {get_status_name(entry.status):<14}  "
            f"{entry.recorded_at.isoformat()}  {entry.actor}  {entry.notes}"
        )
    return 0


def verify_cmd(product_id: int) -> int:
    """Audit a product's history ledger."""
    result = verify_history(product_id)
    if result.is_valid:
        print(f"Product {product_id}: history OK ({result.entry_count} entries)")
        return 0

    print(f"Product {product_id}: {len(result.issues)} issue(s) found")
    for issue in result.issues:
        print(f"  - {issue}")
    return 1


def statuses_cmd() -> int:
    """Print every status with its allowed successors."""
    for status in ProductStatus:
        targets = sorted(allowed_targets(status))
        successors = ", ".join(get_status_name(t) for t in targets) or "(terminal)"
        print(f"{status.value}  {get_status_name(status):<14} -> {successors}")
    print(f"\nNext product ID: {next_product_id()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Product lifecycle ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Register a product:
    python -m src.utils.ledger_cli register "Widget A"

  Record a status change:
    python -m src.utils.ledger_cli update 1 in_production --notes "Line 3"

  Inspect:
    python -m src.utils.ledger_cli history 1
    python -m src.utils.ledger_cli verify 1
""",
    )
    parser.add_argument(
        "--as",
        dest="party",
        default=None,
        help="Acting party (default: PRODUCT_TRACKER_PARTY or login name)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log service operations to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    register_parser = subparsers.add_parser("register", help="Register a new product")
    register_parser.add_argument("name", help="Product name")

    update_parser = subparsers.add_parser("update", help="Change a product's status")
    update_parser.add_argument("product_id", type=int, help="Product ID")
    update_parser.add_argument("status", help="Target status (name or number)")
    update_parser.add_argument("-n", "--notes", default="", help="Note for the history entry")

    show_parser = subparsers.add_parser("show", help="Show a product")
    show_parser.add_argument("product_id", type=int, help="Product ID")

    history_parser = subparsers.add_parser("history", help="Show a product's history")
    history_parser.add_argument("product_id", type=int, help="Product ID")

    verify_parser = subparsers.add_parser("verify", help="Audit a product's history")
    verify_parser.add_argument("product_id", type=int, help="Product ID")

    subparsers.add_parser("statuses", help="List statuses and allowed transitions")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_app_database()

    party = args.party or get_default_party()

    if args.command == "register":
        return register_cmd(args.name, party)
    elif args.command == "update":
        return update_cmd(args.product_id, args.status, args.notes, party)
    elif args.command == "show":
        return show_cmd(args.product_id)
    elif args.command == "history":
        return history_cmd(args.product_id)
    elif args.command == "verify":
        return verify_cmd(args.product_id)
    elif args.command == "statuses":
        return statuses_cmd()
    else:
        print(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
