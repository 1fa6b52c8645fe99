"""Main entry point for i18n-keylint."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from i18n_keylint import __version__
from i18n_keylint.config import Settings, load_config
from i18n_keylint.errors import ConfigurationError
from i18n_keylint.rules import ALL_RULES
from i18n_keylint.runner import LintRunner

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_CONFIG_ERROR = 2


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if debug else logging.WARNING

    # Clear any existing handlers to prevent duplication
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Logs go to stderr, diagnostics to stdout
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.dev.ConsoleRenderer(colors=True)
                if debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="i18n-keylint",
        description="Check localization keys for missing and unused entries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"i18n-keylint {__version__}"
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    parser.add_argument("--config-file", type=Path, help="Path to configuration file")

    parser.add_argument(
        "--rule",
        action="append",
        choices=ALL_RULES,
        help="Rule to run (repeatable, default: all)",
    )

    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format of the diagnostics",
    )

    parser.add_argument("paths", nargs="+", type=Path, help="Files or directories to check")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the linter and return the process exit status."""
    args = parse_args(argv)
    settings = Settings()
    debug = args.debug or settings.debug
    setup_logging(debug)
    logger = structlog.get_logger()

    config_file = args.config_file or settings.config_file
    try:
        config = load_config(config_file)
        runner = LintRunner(config, base_dir=Path.cwd(), rules=args.rule)
    except ConfigurationError as e:
        logger.error("Configuration error", **e.to_dict())
        print(f"i18n-keylint: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    diagnostics = runner.run(args.paths)
    if runner.errors.has_errors():
        logger.warning("Some files could not be checked", **runner.errors.get_error_stats())

    if args.format == "json":
        print(json.dumps([d.to_dict() for d in diagnostics], indent=2, ensure_ascii=False))
    else:
        for diagnostic in diagnostics:
            print(diagnostic.format())

    if diagnostics:
        print(f"\n{len(diagnostics)} problem(s)", file=sys.stderr)
        return EXIT_DIAGNOSTICS
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
