"""Logging setup for CLI runs."""

from __future__ import annotations

import logging
import sys


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr; stdout is reserved for generated documents.

    ``verbose`` lowers the level to DEBUG, which adds per-entity build lines and
    collision details. Pass ``force=True`` to replace handlers installed earlier.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
