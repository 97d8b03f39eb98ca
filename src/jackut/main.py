"""Command-line entry point."""

import argparse
import logging
import sys
from pathlib import Path

from jackut import __version__
from jackut.api.facade import Facade
from jackut.config import Settings, get_settings
from jackut.scripts.runner import ScriptRunner
from jackut.services.persistence import StateStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_facade(settings: Settings, data_file: Path | None = None) -> Facade:
    """Build a Facade over the configured data file and log startup details."""
    path = data_file or settings.data_file
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Data file: %s", path)

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    return Facade(StateStore(path))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="jackut", description="Jackut social network")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data-file", type=Path, default=None, help="Override the configured data file"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run acceptance scripts against the facade")
    run_parser.add_argument("scripts", nargs="+", type=Path, help="Script files to execute")
    return parser.parse_args(argv)


def run_scripts(settings: Settings, scripts: list[Path], data_file: Path | None = None) -> int:
    """Run each script with a freshly loaded facade; return the process exit code."""
    exit_code = 0
    for script in scripts:
        facade = create_facade(settings, data_file)
        report = ScriptRunner(facade).run_file(script)
        print(f"{report.name}: {report.passed} passed, {len(report.failures)} failed")
        for failure in report.failures:
            print(f"  line {failure.line_number}: {failure.reason}")
        if not report.ok:
            exit_code = 1
    return exit_code


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    return run_scripts(settings, args.scripts, args.data_file)


if __name__ == "__main__":
    sys.exit(main())
