"""Unit tests for console formatting utilities."""

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler
from scriptsort.utils.formatting import configure_logging, print_error, print_warning


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore root logger handlers after a test reconfigures logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestPrintMessages:
    """Tests for print_error and print_warning."""

    def test_print_error_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors are prefixed and written to stderr."""
        print_error("Error opening directory '/x': No such file or directory")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Error opening directory '/x': No such file or directory" in captured.err

    def test_print_warning_keeps_brackets(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Square brackets in messages are printed literally, not as markup."""
        print_warning("Error reading file '/d/[bold]x': Is a directory")

        assert "'/d/[bold]x'" in capsys.readouterr().err


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_default_level_is_warning(self, restore_logging: None) -> None:
        """Without verbose only warnings and above are logged."""
        configure_logging()

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0], RichHandler)

    def test_verbose_logs_debug(self, restore_logging: None) -> None:
        """Verbose enables debug logging."""
        configure_logging(verbose=True)

        assert logging.getLogger().level == logging.DEBUG
