"""Singleton logging configuration.

``setup_logging()`` configures the root logger once per process; later
calls only adjust the level of the ``storelint`` logger so that the CLI
can switch to DEBUG after settings are loaded.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

PACKAGE_LOGGER = "storelint"

_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logging once, then apply *level* to storelint."""
    global _configured  # noqa: PLW0603
    if not _configured:
        _configured = True
        logging.basicConfig(
            level=logging.WARNING,
            format=LOG_FORMAT,
            datefmt=LOG_DATEFMT,
        )

    logging.getLogger(PACKAGE_LOGGER).setLevel(
        getattr(logging, level.upper())
    )
