import logging
import uuid

from coinfolio.config.logging import resolve_level, set_log_level, setup_logging

def fresh_logger(**kwargs):
    return setup_logging(f"coinfolio.test.{uuid.uuid4().hex}", **kwargs)

def test_logs_go_to_stderr(capsys):
    logger = fresh_logger(level="INFO")
    logger.info("catalog fetched")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert " - INFO - catalog fetched" in captured.err

def test_setup_is_idempotent():
    name = f"coinfolio.test.{uuid.uuid4().hex}"
    assert setup_logging(name) is setup_logging(name)
    assert len(logging.getLogger(name).handlers) == 1

def test_set_log_level_filters_info(capsys):
    logger = fresh_logger(level="DEBUG")
    set_log_level(logger, "error")
    logger.warning("hidden")
    logger.error("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err

def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level("chatty") == logging.INFO
