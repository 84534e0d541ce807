"""Command-line entry point for the storefront catalog."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from storefront.catalog import AdminService, CatalogService
from storefront.config.environment import EnvironmentConfig
from storefront.config.exceptions import ConfigurationError
from storefront.config.loader import load_config, validate_config_file
from storefront.config.models import AppConfig
from storefront.contact import ContactService, ContactValidationError
from storefront.logging import get_logger
from storefront.logging.config import configure_logging
from storefront.navigation import AppState, Login, reduce, visible_page
from storefront.persistence import close_database, init_database, is_initialized
from storefront.persistence.exceptions import PersistenceError, RecordNotFoundError
from storefront.search.models import CatalogRecord, ResultPage
from storefront.search.service import CatalogSearchService
from storefront.stores import CatalogStore, StoreError, get_store

logger = get_logger(__name__, component="cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        env_config.log_level = env_config.log_level.upper()
    else:
        level = app_config.logging.level
        env_config.log_level = getattr(level, "value", level) or "INFO"

    return app_config, env_config


def parse_assignments(pairs: Sequence[str]) -> Dict[str, str]:
    """Turn ``field=value`` arguments into a dict.

    Raises:
        ValueError: If an argument has no '=' or an empty field name
    """
    changes = {}
    for pair in pairs:
        field_name, sep, value = pair.partition("=")
        if not sep or not field_name.strip():
            raise ValueError(f"Expected field=value, got: {pair!r}")
        changes[field_name.strip()] = value
    return changes


def format_product_row(record: CatalogRecord) -> str:
    price = record.get("price")
    price_text = f"₹{price:g}" if isinstance(price, (int, float)) else "₹-"
    return (
        f"#{record.get('id')}  {record.get('name') or ''}  [{record.get('sku') or '-'}]  "
        f"{record.get('collection') or '-'}  {record.get('brand') or '-'}  {price_text}"
    )


def _print_page(page: ResultPage, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps({"total": page.total, "records": page.records}, default=str, indent=2))
        return
    for record in page.records:
        print(format_product_row(record))
    print(page.summary)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Storefront catalog - product search, catalog browsing and inventory management",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search products by text and category")
    search.add_argument("query", nargs="?", default=None, help="Free-text query (all terms must match)")
    search.add_argument("--category", default=None, help="Canonical category label, e.g. Batteries")
    search.add_argument("--limit", type=int, default=None, help="Show at most this many products")
    search.add_argument("--json", action="store_true", help="Print records as JSON")

    subparsers.add_parser("categories", help="List storefront categories")
    subparsers.add_parser("best-sellers", help="List the products featured on the home page")
    subparsers.add_parser("products", help="List products grouped into original and compatible")

    show = subparsers.add_parser("show", help="Show one product's details")
    show.add_argument("id", type=int)

    inventory = subparsers.add_parser("inventory", help="Admin inventory table")
    inventory.add_argument("query", nargs="?", default=None)

    import_cmd = subparsers.add_parser("import", help="Import products from a CSV export")
    import_cmd.add_argument("path", type=Path)

    update = subparsers.add_parser("update", help="Edit product fields")
    update.add_argument("id", type=int)
    update.add_argument("changes", nargs="+", metavar="field=value")

    delete = subparsers.add_parser("delete", help="Delete a product")
    delete.add_argument("id", type=int)
    delete.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    contact = subparsers.add_parser("contact", help="Submit a contact-form inquiry")
    contact.add_argument("--name", required=True)
    contact.add_argument("--email", required=True)
    contact.add_argument("--message", required=True)

    login = subparsers.add_parser("login", help="Show the role and landing page an account gets")
    login.add_argument("email")

    subparsers.add_parser("forward-inquiries", help="Email stored inquiries that were never forwarded")

    check = subparsers.add_parser("check-config", help="Validate a configuration file and exit")
    check.add_argument("path", type=Path, nargs="?", default=Path("config.yaml"))

    return parser


def _confirm(prompt: str) -> bool:
    try:
        return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")
    except EOFError:
        return False


def run_command(
    args: argparse.Namespace,
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    store: CatalogStore,
) -> int:
    """Execute one subcommand against an already-built store."""
    search_service = CatalogSearchService.from_config(store, app_config.catalog)
    catalog = CatalogService(store, app_config.catalog)
    admin = AdminService(store, search_service, page_size=app_config.catalog.admin_page_size)

    if args.command == "search":
        result = search_service.search(query=args.query, category=args.category)
        _print_page(result.page(args.limit or 0), as_json=args.json)
        return 0

    if args.command == "categories":
        for category in catalog.categories():
            print(category.title)
        return 0

    if args.command == "best-sellers":
        for record in catalog.best_sellers():
            print(format_product_row(record))
        return 0

    if args.command == "products":
        for group, records in catalog.products_by_type().items():
            print(f"{group.title()} products ({len(records)})")
            for record in records:
                print(f"  {format_product_row(record)}")
        return 0

    if args.command == "show":
        detail = catalog.product_detail(args.id)
        print(detail.name)
        for label, value in detail.specifications().items():
            print(f"  {label}: {value if value is not None else '-'}")
        for n, option in enumerate(detail.options, start=1):
            print(f"  Option {n}: {option.name or '-'} ({option.type or '-'}) {option.description or ''}")
        for section in detail.additional_info:
            print(f"  {section.title}: {section.description}")
        return 0

    if args.command == "inventory":
        _print_page(admin.inventory(args.query))
        return 0

    if args.command == "import":
        result = admin.import_file(args.path)
        print(result.summary)
        if result.skipped_rows:
            print(f"Skipped blank rows: {', '.join(str(n) for n in result.skipped_rows)}")
        return 0 if result.succeeded else 1

    if args.command == "update":
        record = admin.update_product(args.id, parse_assignments(args.changes))
        print(f"Updated {format_product_row(record)}")
        return 0

    if args.command == "delete":
        record = store.get_record(args.id)
        name = record.get("name") or f"#{args.id}"
        if not args.yes and not _confirm(f'Are you sure you want to delete "{name}"?'):
            print("Cancelled")
            return 0
        admin.delete_product(args.id)
        print(f'Product "{name}" deleted successfully.')
        return 0

    if args.command == "login":
        state = reduce(AppState(), Login(args.email), app_config.auth)
        print(f"Signed in as {state.user_email} ({'admin' if state.is_admin else 'customer'})")
        print(f"Landing page: {visible_page(state).value}")
        return 0

    if args.command in ("contact", "forward-inquiries"):
        if not is_initialized():
            init_database(env_config.database_url)
        contact_service = ContactService(env_config, app_config.email)

        if args.command == "forward-inquiries":
            results = contact_service.forward_pending()
            sent = sum(1 for r in results if r.is_success())
            print(f"Forwarded {sent} of {len(results)} pending inquiries")
            return 0 if sent == len(results) else 1

        submission = contact_service.submit(args.name, args.email, args.message)
        print(submission.confirmation)
        if submission.delivery.status == "failed":
            print(f"Warning: the store was not emailed ({submission.delivery.error})", file=sys.stderr)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the storefront CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)

    if args.command == "check-config":
        return 0 if validate_config_file(args.path) else 1

    store: Optional[CatalogStore] = None
    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        log_format = getattr(app_config.logging.format, "value", app_config.logging.format)
        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(level=env_config.log_level, format_type=log_format, environment=environment)

        logger.debug(
            "Configuration loaded",
            extra={"event": "config.loaded", "command": args.command, "log_level": env_config.log_level},
        )

        store = get_store(app_config, env_config)
        return run_command(args, app_config, env_config, store)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except RecordNotFoundError as e:
        print(f"Not found: {e}", file=sys.stderr)
        return 1
    except ContactValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1
    except (StoreError, PersistenceError) as e:
        print(f"Catalog error: {e}", file=sys.stderr)
        logger.error(
            f"Catalog backend failed: {e}",
            extra={"event": "cli.command.failed", "error_type": type(e).__name__},
        )
        return 1
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        return 130
    finally:
        if store is not None:
            store.close()
        close_database()


if __name__ == "__main__":
    sys.exit(main())
