"""Logging utilities for elementdocs commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "elementdocs"


class _ComponentFormatter(logging.Formatter):
    """Tags console records with the pipeline stage that emitted them.

    ``elementdocs.extract`` renders as ``[elementdocs:extract]``; the package logger
    itself renders as ``[elementdocs]``.
    """

    def __init__(self, *, show_component: bool) -> None:
        super().__init__("%(tag)s %(levelname)s %(message)s")
        self.show_component = show_component

    def format(self, record: logging.LogRecord) -> str:
        component = record.name[len(_LOGGER_NAME) + 1 :] if record.name.startswith(f"{_LOGGER_NAME}.") else ""
        if self.show_component and component:
            record.tag = f"[{_LOGGER_NAME}:{component}]"
        else:
            record.tag = f"[{_LOGGER_NAME}]"
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the elementdocs hierarchy.

    Accepts either a stage name (``"extract"``) or a module ``__name__`` that already
    lives in the package.
    """
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the elementdocs logger with console output and optional file sink.

    Verbose runs log at DEBUG and tag each console line with its pipeline stage so the
    superclass walk can be followed across the analyzer, extractor and orchestrator.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(_ComponentFormatter(show_component=verbose))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        # The file sink keeps the full trace even when the console stays at INFO.
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]
