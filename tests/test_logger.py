# File: tests/test_logger.py
import logging
import sys

import pytest

import docsweep.client.tree_client as tree_client_module
import docsweep.crawler.scheduler as scheduler_module
import docsweep.engine as engine_module
import docsweep.events as events_module
from docsweep.logger import LOGGER_NAME, configure, init_logging, logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


def test_console_output_goes_to_stderr():
    lg = configure(level="DEBUG")
    (handler,) = lg.handlers
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
    assert lg.level == logging.DEBUG
    assert lg.propagate is False


def test_log_file_receives_the_same_lines(tmp_path):
    log_file = tmp_path / "logs" / "sweep.log"
    configure(log_file=log_file, log_format="%(levelname)s %(message)s")

    logger.warning("BLANK PAGE DETECTED: /org/site/empty.html")
    for handler in logger.handlers:
        handler.flush()

    assert log_file.read_text(encoding="utf-8") == "WARNING BLANK PAGE DETECTED: /org/site/empty.html\n"


def test_reconfiguring_replaces_handlers(tmp_path):
    configure(log_file=tmp_path / "a.log")
    configure()
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


@pytest.mark.parametrize("module", [engine_module, events_module, scheduler_module, tree_client_module])
def test_modules_share_the_exported_logger(module):
    assert module.logger is logger
    assert logger is logging.getLogger(LOGGER_NAME)
