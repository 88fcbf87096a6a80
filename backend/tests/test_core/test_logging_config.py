"""Tests for loguru configuration."""

from pathlib import Path

from loguru import logger

from core.correlation import set_correlation_id
from core.logging_config import configure_logging, correlation_filter


def test_filter_adds_correlation_id() -> None:
    set_correlation_id("abc123de")
    record = {"extra": {}}

    assert correlation_filter(record) is True
    assert record["extra"]["correlation_id"] == "abc123de"


def test_filter_placeholder_without_id() -> None:
    set_correlation_id("")
    record = {"extra": {}}

    correlation_filter(record)

    assert record["extra"]["correlation_id"] == "-"


def test_test_environment_skips_file_sink(tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs"

    configure_logging("test", logs_dir=str(logs_dir))
    logger.info("hello")

    assert not logs_dir.exists()


def test_production_writes_json_file(tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs"

    try:
        configure_logging("production", logs_dir=str(logs_dir))
        logger.info("hello {braces}")
        logger.complete()

        content = (logs_dir / "app.log").read_text()
        assert '"text"' in content
        assert "hello {braces}" in content
    finally:
        configure_logging("test")
