"""
Logging Configuration

All engine modules log under the ``storefront_pricing`` package logger,
mostly at DEBUG (skipped variants, unresolved cart selections, decoder
fallbacks). Scripts attach a single stderr handler here so stdout stays
clean for the printed price report.

The level comes from the command-line flags, or from PRICING_LOG_LEVEL
(e.g. set in .env) when neither flag is given.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "storefront_pricing"
LOG_LEVEL_ENV = "PRICING_LOG_LEVEL"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Flags win over PRICING_LOG_LEVEL; unknown names fall back to INFO."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    return _LEVELS.get(name, logging.INFO)


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the package logger for a script run.

    Args:
        verbose: If True, set level to DEBUG
        quiet: If True, set level to WARNING

    Returns:
        The configured package logger
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_log_level(verbose, quiet))

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
