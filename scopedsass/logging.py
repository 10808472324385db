"""Logging utilities for scopedsass."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .models import ScopeDiagnostic

_LOGGER_NAME = "scopedsass"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the scopedsass hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach a console handler (and optional file sink) to the scopedsass logger.

    ``quiet`` limits console output to warnings and errors; ``verbose`` wins
    when both are set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[scopedsass] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_diagnostics(logger: logging.Logger, diagnostics: Iterable[ScopeDiagnostic]) -> int:
    """Emit one warning per dropped scope spec and return how many were logged."""
    count = 0
    for diagnostic in diagnostics:
        label = diagnostic.scope_name or "<unnamed>"
        logger.warning("Dropped scope %s: %s", label, diagnostic.message)
        count += 1
    return count


__all__ = ["configure_logging", "get_logger", "log_diagnostics"]
