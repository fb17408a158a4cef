"""Entry point: send the email described by a parameter file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from mailcomposer.core.config import settings
from mailcomposer.core.error_handlers import EXIT_OK, describe_error, handle_error
from mailcomposer.core.logging_config import configure_logging
from mailcomposer.models import EmailConfiguration
from mailcomposer.schemas import DeliveryOutcome
from mailcomposer.services import EmailService, parse_parameter_file
from mailcomposer.services.config_parser import companion_path

logger = logging.getLogger(__name__)

COMPANION_SUFFIXES = (".txt", ".md", ".html", ".list")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailcomposer",
        description=f"{settings.PROJECT_NAME}: send one email from a key=value parameter file",
    )
    parser.add_argument("param_file", help="Parameter file, e.g. email-config.txt")
    parser.add_argument("--log-level", default=None, help="Override MAILCOMPOSER_LOG_LEVEL")
    return parser


def cleanup_files(param_file: Path) -> List[Path]:
    """Delete the parameter file and its companions; return what was removed."""
    removed: List[Path] = []
    for path in [param_file, *(companion_path(param_file, s) for s in COMPANION_SUFFIXES)]:
        if path in removed or not path.exists():
            continue
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not delete %s: %s", path, exc)
            continue
        logger.info("Deleted: %s", path)
        removed.append(path)
    return removed


def report(outcome: DeliveryOutcome) -> None:
    """Hand the outcome to the logging and notification collaborators."""
    log = logger.info if outcome.succeeded else logger.error
    log("Delivery outcome: %s", outcome.model_dump_json())


def run(param_file: str, service: Optional[EmailService] = None) -> int:
    service = service or EmailService()
    config: Optional[EmailConfiguration] = None
    try:
        config = parse_parameter_file(param_file)
        outcome = service.send(config)
    except Exception as exc:
        report(DeliveryOutcome.from_configuration("ERROR", describe_error(exc), config))
        return handle_error(exc)

    report(outcome)
    if config.debug:
        logger.info("Debug mode: keeping all files")
    elif settings.CLEANUP_AFTER_SEND:
        cleanup_files(Path(param_file))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return run(args.param_file)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
