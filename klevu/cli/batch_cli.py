"""
Command-line interface for sending indexing batches.

Usage:
    klevu-batch put --input records.json [options]
    klevu-batch patch --input updates.json [options]
    klevu-batch delete --input ids.json [options]
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

import httpx

from klevu.config import SdkConfig, SdkConfigLoader
from klevu.core.models import AccountCredentials, InvalidRecordMode, RecordFactory, UpdateFactory
from klevu.exceptions import ApiException, EndpointConfigurationError, ValidationException
from klevu.observability.logger import get_logger, log_operation, setup_logger
from klevu.services import BatchService, DeleteService

logger = get_logger(__name__)

# Failures reported with exit code 1 rather than a traceback
CLI_ERRORS = (
    ValidationException,
    ApiException,
    EndpointConfigurationError,
    OSError,
    ValueError,
)


def load_input(input_path: str) -> list[Any]:
    """
    Read the JSON array of items to send.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON array
    """
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Input file must contain a JSON array, received {type(data).__name__}")
    return data


def load_config(args) -> SdkConfig:
    config = SdkConfigLoader(args.config).load() if args.config else SdkConfig.from_env()

    overrides: dict[str, Any] = {}
    if args.mode:
        overrides["invalid_record_mode"] = InvalidRecordMode(args.mode)
    if args.max_batch_size is not None:
        overrides["max_batch_size"] = args.max_batch_size
    if args.indexing_url:
        overrides["indexing_url"] = args.indexing_url
    if not overrides:
        return config
    return SdkConfig.model_validate({**config.model_dump(), **overrides})


def get_credentials(args) -> AccountCredentials:
    js_api_key = args.js_api_key or os.getenv("KLEVU_JS_API_KEY", "")
    rest_auth_key = args.rest_auth_key or os.getenv("KLEVU_REST_AUTH_KEY", "")
    return AccountCredentials(js_api_key=js_api_key, rest_auth_key=rest_auth_key)


def run_command(args, http_client: httpx.Client | None = None) -> int:
    """
    Execute one batch command.

    Args:
        args: Parsed command-line arguments
        http_client: Client used for requests, created by the service if None

    Returns:
        Process exit code
    """
    try:
        config = load_config(args)
        credentials = get_credentials(args)
        items = load_input(args.input)

        with log_operation(
            f"klevu-batch {args.command}",
            logger=logger,
            input=args.input,
            item_count=len(items),
        ):
            if args.command == "delete":
                with DeleteService(config=config, http_client=http_client) as service:
                    response = service.send_by_ids(credentials, items, record_type=args.record_type)
            elif args.command == "patch":
                factory = UpdateFactory()
                updates = [factory.create(item) for item in items]
                with BatchService(config=config, http_client=http_client) as service:
                    response = service.patch(credentials, updates)
            else:
                factory = RecordFactory()
                records = [factory.create(item) for item in items]
                with BatchService(config=config, http_client=http_client) as service:
                    response = service.put(credentials, records)

    except CLI_ERRORS as e:
        errors = list(e.errors) if isinstance(e, (ValidationException, ApiException)) else []
        logger.error(
            f"Error during klevu-batch {args.command}: {e}",
            extra={"errors": errors},
        )
        return 1

    print(response.model_dump_json(indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="klevu-batch",
        description="Send record, update and delete batches to the Klevu indexing API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Add or replace records
  klevu-batch put --input records.json --js-api-key klevu-1234567890 --rest-auth-key ABCDE1234567890

  # Apply partial updates, failing if any update is invalid
  klevu-batch patch --input updates.json --mode fail

  # Delete records by id, credentials from KLEVU_JS_API_KEY / KLEVU_REST_AUTH_KEY
  klevu-batch delete --input ids.json
        """
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    for command, help_text, input_help in (
        ("put", "Add or replace records", "Path to a JSON array of records"),
        ("patch", "Apply partial updates to records", "Path to a JSON array of updates"),
        ("delete", "Delete records by id", "Path to a JSON array of record ids"),
    ):
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument("--input", required=True, help=input_help)
        command_parser.add_argument(
            "--js-api-key",
            help="JS API key (default: KLEVU_JS_API_KEY)"
        )
        command_parser.add_argument(
            "--rest-auth-key",
            help="REST AUTH key (default: KLEVU_REST_AUTH_KEY)"
        )
        command_parser.add_argument(
            "--mode",
            choices=[mode.value for mode in InvalidRecordMode],
            help="How invalid records are handled (default: skip)"
        )
        command_parser.add_argument(
            "--max-batch-size",
            type=int,
            help="Most records sent in one request (default: 250)"
        )
        command_parser.add_argument(
            "--indexing-url",
            help="Indexing API host override"
        )
        command_parser.add_argument(
            "--config",
            help="Path to a YAML file with a 'klevu' settings section"
        )
        command_parser.add_argument(
            "--log-level",
            default=None,
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Log level (default: KLEVU_LOG_LEVEL or INFO)"
        )
        if command == "delete":
            command_parser.add_argument(
                "--record-type",
                default="",
                help="Record type assigned to the ids, e.g. KLEVU_PRODUCT"
            )

    return parser


def main(argv: list[str] | None = None, http_client: httpx.Client | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        setup_logger(level=args.log_level)

    return run_command(args, http_client=http_client)


if __name__ == "__main__":
    sys.exit(main())
