"""
Logging for the libgen CLI.

Handlers go on the ``libgen`` package logger only. libgen's own
dependencies (click, pydantic, PyYAML) don't log, so there is nothing
third-party to quiet, and records still propagate to the root logger
for anyone embedding libgen.

The console level comes from the global CLI flags, falling back to
the environment:

    --debug  >  --verbose  >  --quiet  >  LIBGEN_LOG_LEVEL  >  WARNING

LIBGEN_LOG_FILE adds a file handler at LIBGEN_LOG_FILE_LEVEL (default:
the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

PACKAGE_LOGGER = "libgen"

ENV_LOG_LEVEL = "LIBGEN_LOG_LEVEL"
ENV_LOG_FILE = "LIBGEN_LOG_FILE"
ENV_LOG_FILE_LEVEL = "LIBGEN_LOG_FILE_LEVEL"

# Console: warnings carry their level so they stand apart from the
# CREATE/UPDATE report on stdout; -v adds the module, --debug the line.
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_CONSOLE_DEFAULT = ("libgen: %(levelname)s: %(message)s", None)

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%Y-%m-%d %H:%M:%S")


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick the console level from the CLI flags, then LIBGEN_LOG_LEVEL."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    env = os.environ if environ is None else environ
    return _parse_level(env.get(ENV_LOG_LEVEL))


def setup_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Configure the ``libgen`` logger for this process and return it.

    Calling it again replaces the handlers from the previous call.
    """
    env = os.environ if environ is None else environ
    level = resolve_level(debug, verbose, quiet, env)

    fmt, datefmt = _CONSOLE_FORMATS.get(level, _CONSOLE_DEFAULT)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(console)

    effective = level
    log_file = env.get(ENV_LOG_FILE)
    if log_file:
        file_level = _parse_level(env.get(ENV_LOG_FILE_LEVEL), default=level)
        effective = min(effective, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(*_FILE_FORMAT))
        logger.addHandler(fh)

    logger.setLevel(effective)

    # Streams swapped out by test runners may be closed by the next log call
    logging.raiseExceptions = False
    return logger


def _parse_level(level: str | None, default: int = logging.WARNING) -> int:
    """Level name → numeric level. Unknown or empty names give ``default``."""
    if not level:
        return default
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else default
