"""Tests for the logging configuration helpers."""

import logging

import pytest
import structlog
from storefront.utils.logging import add_context, clear_context, get_log_level, setup_stdlib_logging


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("ENV", "ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestLogLevel:
    @pytest.mark.parametrize(
        "env, level",
        [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("qa", "INFO")],
    )
    def test_level_follows_environment(self, clean_env, env, level):
        clean_env.setenv("PROTEAN_ENV", env)
        assert get_log_level() == level

    def test_defaults_to_development(self, clean_env):
        assert get_log_level() == "DEBUG"

    def test_explicit_level_wins(self, clean_env):
        clean_env.setenv("PROTEAN_ENV", "production")
        clean_env.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestStdlibHandlers:
    def test_writes_main_and_error_logs(self, clean_env, restore_root_logger, tmp_path):
        clean_env.setenv("LOG_DIR", str(tmp_path / "nested" / "logs"))
        setup_stdlib_logging()

        logging.getLogger("storefront.checkout").warning("stock low")
        logging.getLogger("storefront.checkout").error("checkout failed")
        for handler in restore_root_logger.handlers:
            handler.flush()

        log_dir = tmp_path / "nested" / "logs"
        main_log = (log_dir / "storefront.log").read_text()
        error_log = (log_dir / "storefront_error.log").read_text()
        assert "stock low" in main_log and "checkout failed" in main_log
        assert "checkout failed" in error_log
        assert "stock low" not in error_log

    def test_quietens_chatty_libraries(self, clean_env, restore_root_logger, tmp_path):
        clean_env.setenv("LOG_DIR", str(tmp_path))
        setup_stdlib_logging()
        assert logging.getLogger("passlib").level == logging.ERROR
        assert logging.getLogger("protean").level == logging.WARNING


class TestRequestContext:
    def test_context_is_bound_and_cleared(self):
        clear_context()
        add_context(user_id="user-001")
        assert structlog.contextvars.get_contextvars() == {"user_id": "user-001"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
