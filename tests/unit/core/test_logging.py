"""Unit tests for log setup."""

import logging

import pytest
from clir.core.logging import level_for_verbosity, setup_logging
from rich.logging import RichHandler


@pytest.fixture
def clir_logger() -> logging.Logger:
    return logging.getLogger("clir")


class TestLevelForVerbosity:
    """Tests for level_for_verbosity function."""

    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [
            (0, logging.ERROR),
            (1, logging.WARNING),
            (2, logging.INFO),
            (3, logging.DEBUG),
            (7, logging.DEBUG),
        ],
    )
    def test_mapping(self, verbosity: int, level: int) -> None:
        """Each -v lowers the threshold by one level."""
        assert level_for_verbosity(verbosity) == level


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_installs_rich_handler(self, clir_logger: logging.Logger) -> None:
        """A RichHandler is attached to the package logger."""
        setup_logging(2)

        rich_handlers = [h for h in clir_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert clir_logger.level == logging.INFO

    def test_repeated_setup_replaces_handler(self, clir_logger: logging.Logger) -> None:
        """Calling setup twice does not duplicate output."""
        setup_logging(0)
        setup_logging(3)

        rich_handlers = [h for h in clir_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert clir_logger.level == logging.DEBUG
