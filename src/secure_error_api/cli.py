"""Command line entry point: run the API, or check the configuration it would run with."""
from __future__ import annotations

import argparse
import json
import sys

from secure_error_api import runtime
from secure_error_api.config.load import load_settings
from secure_error_api.config.validate import ConfigValidationError


def cmd_serve(args: argparse.Namespace) -> int:
    return runtime.main()


def cmd_validate_config(args: argparse.Namespace) -> int:
    """Exit 0 when the configuration loads and validates, 1 otherwise."""
    try:
        settings = load_settings()
    except ConfigValidationError as exc:
        print(exc, file=sys.stderr)
        return 1

    fault_bodies = "diagnostic" if settings.app.is_development else "generic message only"
    print("Configuration is valid")
    print(f"  - Environment: {settings.app.environment.value} (500 bodies: {fault_bodies})")
    print(f"  - Listen: {settings.server.host}:{settings.server.port}")
    print(f"  - CORS origins: {', '.join(settings.cors.allow_origins)}")
    print(f"  - Log level: {settings.observability.log_level}")
    return 0


def cmd_dump_config(args: argparse.Namespace) -> int:
    """Print the effective settings as JSON."""
    try:
        settings = load_settings()
    except ConfigValidationError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(json.dumps(settings.model_dump(mode="json"), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secure-error-api",
        description="API that answers every unhandled fault with a generic 500",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, func, help_text in (
        ("serve", cmd_serve, "Run the API server"),
        ("validate-config", cmd_validate_config, "Validate configuration and exit"),
        ("dump-config", cmd_dump_config, "Print effective configuration as JSON"),
    ):
        subparsers.add_parser(name, help=help_text).set_defaults(func=func)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
