import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from amount_recon.utils.exceptions import ConfigurationError
from amount_recon.utils.logging_config import resolve_level, setup_logging


class TestResolveLevel:
    @pytest.mark.parametrize(
        "name, expected",
        [("DEBUG", logging.DEBUG), ("info", logging.INFO), (" Warning ", logging.WARNING)],
    )
    def test_names(self, name, expected):
        assert resolve_level(name) == expected

    def test_numbers_pass_through(self):
        assert resolve_level(logging.ERROR) == logging.ERROR

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError, match="LOUD"):
            resolve_level("LOUD")


class TestSetupLogging:
    """Handlers attached to the ``amount_recon`` logger."""

    def test_plain_stream_handler_by_default(self):
        logger = setup_logging("WARNING")

        assert logger.name == "amount_recon"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert type(logger.handlers[0]) is logging.StreamHandler

    def test_rich_console(self):
        stream = io.StringIO()
        logger = setup_logging(logging.INFO, console=Console(file=stream, width=200))

        assert isinstance(logger.handlers[0], RichHandler)
        logging.getLogger("amount_recon.matching.engine").info("hello from the engine")
        assert "hello from the engine" in stream.getvalue()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_file_gets_debug_while_console_stays_quiet(self, tmp_path):
        stream = io.StringIO()
        log_file = tmp_path / "logs" / "recon.log"
        logger = setup_logging(
            "WARNING", log_file=log_file, console=Console(file=stream, width=200)
        )

        logging.getLogger("amount_recon.matching.index").debug("bucket detail")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.DEBUG
        assert "bucket detail" in log_file.read_text()
        assert "MainThread" in log_file.read_text()
        assert "bucket detail" not in stream.getvalue()

    def test_unknown_level_leaves_handlers_alone(self):
        logger = setup_logging()

        with pytest.raises(ConfigurationError):
            setup_logging("LOUD")
        assert len(logger.handlers) == 1
