import logging
import logging.handlers

import pytest

from src import config
from src.logging_config import APP_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def settings():
    with pytest.MonkeyPatch.context() as patch:
        patch.setattr(config, "LOG_FILE", None)
        patch.setattr(config, "SQL_ECHO", False)
        yield patch
    for handler in logging.getLogger(APP_LOGGER_NAME).handlers:
        handler.close()
    setup_logging()


def test_module_loggers_share_the_app_logger():
    assert get_logger("src.crud.crud_fund").name == "family_budget.src.crud.crud_fund"
    assert get_logger("family_budget.jobs").name == "family_budget.jobs"
    assert get_logger().name == APP_LOGGER_NAME


def test_setup_replaces_handlers_on_repeat_calls(settings):
    settings.setattr(config, "APP_LOG_LEVEL", "debug")

    setup_logging()
    app_logger = setup_logging()

    assert len(app_logger.handlers) == 1
    assert app_logger.level == logging.DEBUG
    assert app_logger.propagate is False


def test_unknown_level_falls_back_to_info(settings):
    settings.setattr(config, "APP_LOG_LEVEL", "chatty")
    assert setup_logging().level == logging.INFO


def test_log_file_rotates_with_configured_limits(settings, tmp_path):
    log_file = tmp_path / "logs" / "budget.log"
    settings.setattr(config, "LOG_FILE", str(log_file))
    settings.setattr(config, "LOG_FILE_MAX_BYTES", 1024)
    settings.setattr(config, "LOG_FILE_BACKUPS", 2)

    app_logger = setup_logging()

    file_handlers = [h for h in app_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2
    assert log_file.parent.is_dir()


def test_engine_loggers_are_left_alone_while_echoing(settings):
    engine_logger = logging.getLogger("sqlalchemy.engine")
    engine_logger.setLevel(logging.INFO)

    settings.setattr(config, "SQL_ECHO", True)
    setup_logging()
    assert engine_logger.level == logging.INFO
    assert logging.getLogger("uvicorn.access").level == logging.WARNING

    settings.setattr(config, "SQL_ECHO", False)
    setup_logging()
    assert engine_logger.level == logging.WARNING
