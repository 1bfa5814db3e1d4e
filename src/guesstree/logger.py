"""logger.py - Shared logger factory for GuessTree modules."""

from __future__ import annotations

import logging

ROOT_LOGGER = "guesstree"


def get_logger(name: str) -> logging.Logger:
    """Return a logger parented under the ``guesstree`` namespace.

    Modules call ``get_logger(__name__)``; names outside the package
    (e.g. ``__main__``) are re-parented so one level setting covers all.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger (CLI use only)."""
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
