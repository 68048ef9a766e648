from __future__ import annotations

import logging
from pathlib import Path

import pytest

from elementdocs.logging import configure_logging, get_logger


@pytest.fixture
def package_logger():
    logger = logging.getLogger("elementdocs")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_get_logger_accepts_stage_and_module_names() -> None:
    assert get_logger().name == "elementdocs"
    assert get_logger("extract").name == "elementdocs.extract"
    assert get_logger("elementdocs.analyzers.tree_sitter").name == "elementdocs.analyzers.tree_sitter"


def _console_line(logger: logging.Logger, record_name: str, message: str) -> str:
    handler = logger.handlers[0]
    record = logging.LogRecord(record_name, logging.INFO, __file__, 1, message, None, None)
    return handler.format(record)


def test_verbose_console_tags_pipeline_stage(package_logger: logging.Logger) -> None:
    configure_logging(verbose=True)
    assert package_logger.level == logging.DEBUG
    line = _console_line(package_logger, "elementdocs.extract", "Extracting Fancy")
    assert line == "[elementdocs:extract] INFO Extracting Fancy"


def test_default_console_uses_package_tag(package_logger: logging.Logger) -> None:
    configure_logging()
    assert package_logger.level == logging.INFO
    line = _console_line(package_logger, "elementdocs.orchestrator", "Updated chips.md")
    assert line == "[elementdocs] INFO Updated chips.md"


def test_log_file_receives_debug_records(package_logger: logging.Logger, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "elementdocs.log"
    configure_logging(log_file=log_file)

    get_logger("extract").debug("Walking into Local")
    for handler in package_logger.handlers:
        handler.flush()

    assert package_logger.handlers[0].level == logging.INFO
    content = log_file.read_text(encoding="utf-8")
    assert "DEBUG elementdocs.extract: Walking into Local" in content


def test_reconfiguring_replaces_handlers(package_logger: logging.Logger) -> None:
    configure_logging()
    configure_logging(verbose=True)
    assert len(package_logger.handlers) == 1
