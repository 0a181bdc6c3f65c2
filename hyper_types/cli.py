#!/usr/bin/env python3
"""
Command Line Interface for hyper-types.

Commands:
    hyper-types types                         - List payload types
    hyper-types endpoints                     - List remote endpoints
    hyper-types validate <type> <file>        - Check a payload against a type
    hyper-types convert <type> <file> --to F  - Re-encode a payload as json/yaml
    hyper-types sg lint <file>                - Validate a security group file
    hyper-types sg show <file>                - Print a security group as JSON

<type> is a type name such as ContainerJSON; append [] for a list payload
(e.g. Image[] for GET /images/json). <file> may be "-" for stdin.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from hyper_types import __version__, config
from hyper_types.codec import (JSON, STYLES, YAML, CodecError, DecodingError,
                               dumps, loads)
from hyper_types.endpoints import ENDPOINTS, payload_types
from hyper_types.security import (load_security_group,
                                  validate_security_group)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands and options."""
    parser = argparse.ArgumentParser(
        prog="hyper-types",
        description="Inspect and convert container API payloads",
    )

    parser.add_argument(
        "--version", "-v", action="version", version=f"hyper-types {__version__}"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # =========================================================================
    # listing commands
    # =========================================================================
    subparsers.add_parser("types", help="List payload types")
    subparsers.add_parser("endpoints", help="List remote endpoints")

    # =========================================================================
    # validate command
    # =========================================================================
    validate_parser = subparsers.add_parser(
        "validate", help="Check a payload against a type"
    )
    validate_parser.add_argument("type", help="Type name, e.g. ContainerJSON or Image[]")
    validate_parser.add_argument("file", help="Payload file ('-' for stdin)")
    validate_parser.add_argument(
        "--format", "-f", choices=STYLES, help="Input format (default: from extension)"
    )
    validate_parser.add_argument(
        "--strict", action="store_true", help="Reject unknown fields"
    )

    # =========================================================================
    # convert command
    # =========================================================================
    convert_parser = subparsers.add_parser(
        "convert", help="Re-encode a payload as json or yaml"
    )
    convert_parser.add_argument("type", help="Type name, e.g. SecurityGroup")
    convert_parser.add_argument("file", help="Payload file ('-' for stdin)")
    convert_parser.add_argument(
        "--from", dest="source", choices=STYLES, help="Input format (default: from extension)"
    )
    convert_parser.add_argument(
        "--to", dest="target", choices=STYLES, required=True, help="Output format"
    )

    # =========================================================================
    # sg command
    # =========================================================================
    sg_parser = subparsers.add_parser("sg", help="Security group files")
    sg_sub = sg_parser.add_subparsers(dest="sg_command", help="Security group commands")

    sg_lint = sg_sub.add_parser("lint", help="Validate a security group YAML file")
    sg_lint.add_argument("file", help="Security group YAML file")

    sg_show = sg_sub.add_parser("show", help="Print a security group as JSON")
    sg_show.add_argument("file", help="Security group YAML file")

    return parser


# =============================================================================
# Helpers
# =============================================================================


def resolve_type(name: str) -> Any:
    """
    Resolve a CLI type name to a type hint.

    Raises:
        KeyError: If the type is unknown
    """
    types = payload_types()
    if name.endswith("[]"):
        return List[resolve_type(name[:-2])]
    if name not in types:
        raise KeyError(f"Unknown type: {name}")
    return types[name]


def guess_format(path: str) -> str:
    """Guess the encoding of a file from its extension."""
    if path.endswith((".yaml", ".yml")):
        return YAML
    return JSON


def read_input(path: str) -> str:
    """
    Read a file, or stdin for '-'.

    Raises:
        DecodingError: If the input is not UTF-8 text
    """
    try:
        if path == "-":
            return sys.stdin.read()
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise DecodingError(f"{path}: not UTF-8 text ({e.reason} at byte {e.start})")


def type_label(hint: Any) -> str:
    """Short name of a type hint for listings."""
    if hint is None:
        return "-"
    args = getattr(hint, "__args__", None)
    if args:
        return f"{type_label(args[0])}[]"
    return hint.__name__


# =============================================================================
# Command Handlers
# =============================================================================


def cmd_types(args: argparse.Namespace) -> int:
    """Handle types command."""
    types = payload_types()

    print(f"{'TYPE':<30} {'MODULE'}")
    for name in sorted(types):
        print(f"{name:<30} {types[name].__module__}")

    return 0


def cmd_endpoints(args: argparse.Namespace) -> int:
    """Handle endpoints command."""
    print(f"{'METHOD':<7} {'PATH':<36} {'REQUEST':<26} {'RESPONSE'}")
    for e in ENDPOINTS:
        print(
            f"{e.method:<7} {e.path:<36} {type_label(e.request):<26} "
            f"{type_label(e.response)}"
        )

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    try:
        hint = resolve_type(args.type)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    style = args.format or guess_format(args.file)
    loads(hint, read_input(args.file), style, strict=args.strict or None)

    print(f"OK: {args.file} is a valid {args.type}")
    return 0


def cmd_convert(args: argparse.Namespace) -> int:
    """Handle convert command."""
    try:
        hint = resolve_type(args.type)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    style = args.source or guess_format(args.file)
    value = loads(hint, read_input(args.file), style)

    output = dumps(value, args.target, indent=config.output_indent())
    print(output.rstrip("\n"))
    return 0


def cmd_sg(args: argparse.Namespace) -> int:
    """Handle sg subcommands."""
    if args.sg_command == "lint":
        group = load_security_group(args.file)
        errors = validate_security_group(group)

        if errors:
            for err in errors:
                print(f"{args.file}: {err}", file=sys.stderr)
            return 1

        print(f"OK: security group {group.group_name!r} ({len(group.rules or [])} rule(s))")
        return 0

    elif args.sg_command == "show":
        group = load_security_group(args.file)
        print(dumps(group, JSON, indent=config.output_indent()))
        return 0

    else:
        print("Usage: hyper-types sg <lint|show> <file>")
        return 1


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.debug else config.log_level())

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handler
    handlers: Dict[str, Any] = {
        "types": cmd_types,
        "endpoints": cmd_endpoints,
        "validate": cmd_validate,
        "convert": cmd_convert,
        "sg": cmd_sg,
    }

    handler = handlers.get(args.command)
    if handler:
        logger.debug("Running command %s", args.command)
        try:
            return handler(args)
        except KeyboardInterrupt:
            print("\nInterrupted")
            return 130
        except (CodecError, OSError) as e:
            if args.debug:
                raise
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
