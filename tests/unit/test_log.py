"""
Unit tests for logging setup.
"""

import logging

import pytest

from minihttp.log import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # Handlers bound to capsys streams must not outlive the test
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_info_goes_to_stdout(self, capsys):
        setup_logging()
        logging.getLogger("minihttp.server").info("hello info")

        captured = capsys.readouterr()
        assert "[INFO] minihttp.server: hello info" in captured.out
        assert "hello info" not in captured.err

    def test_warning_goes_to_stderr(self, capsys):
        setup_logging()
        logging.getLogger("minihttp.http.request").warning("bad header")

        captured = capsys.readouterr()
        assert "[WARNING] minihttp.http.request: bad header" in captured.err
        assert "bad header" not in captured.out

    def test_debug_hidden_unless_verbose(self, capsys):
        setup_logging(verbose=False)
        logging.getLogger("minihttp.core").debug("quiet")
        assert "quiet" not in capsys.readouterr().err

        setup_logging(verbose=True)
        logging.getLogger("minihttp.core").debug("loud")
        assert "[DEBUG] minihttp.core: loud" in capsys.readouterr().err

    def test_repeated_setup_does_not_duplicate(self, capsys):
        setup_logging()
        setup_logging()
        logging.getLogger("minihttp").info("once")

        assert capsys.readouterr().out.count("once") == 1

    def test_returns_package_logger(self):
        logger = setup_logging(verbose=True)

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
