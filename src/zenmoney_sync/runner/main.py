"""
CLI main entry point.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from ..config import Config, ConfigValidationError, create_default_config, load_config
from ..errors import ErrorCode, ZenMoneyError
from ..schemas import EntityType, SyncResponse, Transaction
from ..zenmoney_client import ZenMoneyClient

logger = logging.getLogger(__name__)

ERROR_HINTS = {
    ErrorCode.INVALID_TOKEN: "Authentication failed, check your ZenMoney token",
    ErrorCode.SERVER_ERROR: "ZenMoney returned an error, try again later",
    ErrorCode.NETWORK_ERROR: "Could not reach ZenMoney, check connectivity",
    ErrorCode.INVALID_REQUEST: "Request or response could not be processed",
}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_timestamp(value: str) -> int:
    """Parse epoch seconds or an ISO-8601 date/time into epoch seconds."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(datetime.fromisoformat(value).timestamp())
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"expected epoch seconds or ISO-8601 date, got {value!r}"
        ) from e


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="zenmoney-sync",
        description="Synchronize data with the ZenMoney API",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("zenmoney.yaml"),
        help="Path to config file (default: zenmoney.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("init", help="Write a default config file")

    full_parser = subparsers.add_parser("full", help="Download the entire dataset")
    full_parser.add_argument("--json", action="store_true", help="Print the response as JSON")

    since_parser = subparsers.add_parser("since", help="Download changes since a server timestamp")
    since_parser.add_argument(
        "timestamp",
        type=parse_timestamp,
        help="Server timestamp of the previous sync (epoch seconds or ISO-8601)",
    )
    since_parser.add_argument("--json", action="store_true", help="Print the response as JSON")

    force_parser = subparsers.add_parser("force", help="Force a full refresh of entity types")
    force_parser.add_argument(
        "entities",
        nargs="+",
        type=EntityType,
        choices=list(EntityType),
        metavar="ENTITY",
        help=f"Entity types: {', '.join(t.value for t in EntityType)}",
    )
    force_parser.add_argument("--json", action="store_true", help="Print the response as JSON")

    suggest_parser = subparsers.add_parser(
        "suggest", help="Suggest merchant and categories for payees"
    )
    suggest_parser.add_argument("payees", nargs="+", help="Payee names")

    return parser


def build_client(config: Config) -> ZenMoneyClient:
    """Create a client from loaded configuration."""
    return ZenMoneyClient(config.token, config=config.client)


def print_sync_result(response: SyncResponse, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(response.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Server timestamp: {response.server_timestamp}")
    counts = response.counts()
    if not counts:
        print("No changes")
        return
    for key, count in counts.items():
        print(f"  {key:<16} {count}")


def cmd_init(config_path: Path) -> int:
    """Write the default config file."""
    if config_path.exists():
        print(f"Config already exists: {config_path}", file=sys.stderr)
        return 1
    create_default_config(config_path)
    print(f"Wrote {config_path}")
    return 0


def cmd_full(config: Config, as_json: bool) -> int:
    """Full sync."""
    response = build_client(config).full_sync()
    print_sync_result(response, as_json)
    return 0


def cmd_since(config: Config, timestamp: int, as_json: bool) -> int:
    """Incremental sync."""
    response = build_client(config).sync_since(timestamp)
    print_sync_result(response, as_json)
    return 0


def cmd_force(config: Config, entities: list[EntityType], as_json: bool) -> int:
    """Forced refresh of entity types."""
    response = build_client(config).force_sync_entities(*entities)
    print_sync_result(response, as_json)
    return 0


def cmd_suggest(config: Config, payees: list[str]) -> int:
    """Merchant/category suggestion."""
    client = build_client(config)
    if len(payees) == 1:
        suggestions = [client.suggest(Transaction(payee=payees[0]))]
    else:
        suggestions = client.suggest_batch(Transaction(payee=p) for p in payees)

    for payee, suggestion in zip(payees, suggestions):
        tags = ", ".join(suggestion.tag or []) or "-"
        print(f"{payee}: merchant={suggestion.merchant or '-'} tags={tags}")
    return 0


def report_error(error: ZenMoneyError) -> None:
    """Print a remediation hint for a client error."""
    hint = ERROR_HINTS.get(error.code, "Request failed")
    print(f"{hint}: {error}", file=sys.stderr)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init":
        return cmd_init(parsed.config)

    # Load config
    try:
        config = load_config(parsed.config)
    except (ConfigValidationError, OSError, ValueError) as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        return 1

    config_errors = config.validate()
    if config_errors:
        for error in config_errors:
            print(f"Config error: {error}", file=sys.stderr)
        return 1

    # Route to command
    try:
        if parsed.command == "full":
            return cmd_full(config, parsed.json)
        elif parsed.command == "since":
            return cmd_since(config, parsed.timestamp, parsed.json)
        elif parsed.command == "force":
            return cmd_force(config, parsed.entities, parsed.json)
        elif parsed.command == "suggest":
            return cmd_suggest(config, parsed.payees)
        else:
            parser.print_help()
            return 1
    except ZenMoneyError as e:
        logger.debug("Command failed", exc_info=True)
        report_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
