"""Main CLI entry point for openapi-tools."""

import argparse
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from src.cli.commands.filter import filter_command
from src.cli.commands.generate import generate_command
from src.cli.config import Config
from src.utils.logging_config import setup_logging


def _package_version() -> str:
    try:
        return version("openapi-tools")
    except PackageNotFoundError:
        return "unknown"


def _split_list(value: str) -> List[str]:
    """Parse a comma-separated option such as "/v1/chat/completions,/v1/models"."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", required=True, help="Input OpenAPI document (YAML/JSON path or http(s) URL)")
    parser.add_argument("--output", required=True, help="Output file")
    parser.add_argument("--config", help="Path to .env configuration file", default=None)
    parser.add_argument(
        "--skip-validation", action="store_true", help="Do not validate the input against the OpenAPI meta-schema"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed processing information")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="openapi-tools", description="OpenAPI Tools CLI")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Filter command
    filter_parser = subparsers.add_parser(
        "filter", help="Filter an OpenAPI document by path names or path prefixes"
    )
    _add_common_arguments(filter_parser)
    selector = filter_parser.add_mutually_exclusive_group(required=True)
    selector.add_argument(
        "--filter",
        type=_split_list,
        help='Comma-separated list of path names, e.g. "/v1/chat/completions,/v1/models"',
    )
    selector.add_argument("--prefix", type=_split_list, help='Comma-separated list of path prefixes, e.g. "/v1"')

    # Generate commands
    zod_parser = subparsers.add_parser("generate-zod", help="Generate Zod schemas from components.schemas")
    dict_parser = subparsers.add_parser(
        "generate-python-dict", help="Generate Python TypedDicts from components.schemas"
    )
    for generate_parser in (zod_parser, dict_parser):
        _add_common_arguments(generate_parser)
        generate_parser.add_argument(
            "--prefix",
            type=_split_list,
            default=None,
            help="Only generate schemas used by paths starting with these comma-separated prefixes",
        )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(verbose=args.verbose)

    # Load configuration
    config = Config(args.config)

    # Execute command
    if args.command == "filter":
        filter_command(
            config=config,
            input_source=args.input,
            output=args.output,
            path_names=args.filter,
            prefixes=args.prefix,
            skip_validation=args.skip_validation,
        )
    elif args.command == "generate-zod":
        generate_command(
            config=config,
            target="zod",
            input_source=args.input,
            output=args.output,
            prefixes=args.prefix,
            skip_validation=args.skip_validation,
        )
    elif args.command == "generate-python-dict":
        generate_command(
            config=config,
            target="typed-dict",
            input_source=args.input,
            output=args.output,
            prefixes=args.prefix,
            skip_validation=args.skip_validation,
        )
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
