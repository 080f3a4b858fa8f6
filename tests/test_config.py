"""Tests for configuration loading and logging setup."""

import logging
import os
import sys
from unittest.mock import patch

import pytest

from restify.config import RestifyConfig, get_config, load_config, reset_config
from restify.exceptions import InvalidModelError, StoreOperationError
from restify.logging_config import KnownErrorFormatter, configure_logging


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


class TestConfig:
    """Test environment-driven configuration."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config()

        assert config == RestifyConfig()
        assert config.store_type == "json"
        assert config.mongodb_uri == "mongodb://localhost:27017"
        assert config.log_level == "INFO"

    def test_environment_overrides(self):
        env = {
            "RESTIFY_STORE_TYPE": "mongodb",
            "RESTIFY_JSON_PATH": "/tmp/data",
            "RESTIFY_MONGODB_URI": "mongodb://db:27017",
            "RESTIFY_MONGODB_DB_NAME": "shop",
            "RESTIFY_LOG_LEVEL": "DEBUG",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config()

        assert config.store_type == "mongodb"
        assert config.json_path == "/tmp/data"
        assert config.mongodb_uri == "mongodb://db:27017"
        assert config.mongodb_db_name == "shop"
        assert config.log_level == "DEBUG"

    def test_empty_values_fall_back(self):
        with patch.dict(os.environ, {"RESTIFY_STORE_TYPE": ""}, clear=True):
            assert load_config().store_type == "json"

    def test_get_config_cached(self):
        with patch.dict(os.environ, {"RESTIFY_STORE_TYPE": "mongodb"}):
            first = get_config()
        assert get_config() is first
        assert first.store_type == "mongodb"


class TestConfigureLogging:
    """Test logger setup."""

    def teardown_method(self):
        logging.getLogger("restify").setLevel(logging.NOTSET)

    def test_single_handler(self):
        logger = configure_logging("DEBUG")
        handler_count = len(logger.handlers)

        configure_logging("WARNING")

        assert len(logger.handlers) == handler_count
        assert logger.level == logging.WARNING

    def test_level_from_config(self):
        with patch.dict(os.environ, {"RESTIFY_LOG_LEVEL": "error"}):
            logger = configure_logging()
        assert logger.level == logging.ERROR

    def test_unknown_level_defaults_to_info(self):
        assert configure_logging("LOUD").level == logging.INFO


class TestKnownErrorFormatter:
    """Test stack trace suppression for client errors."""

    def _exc_info(self, exc):
        try:
            raise exc
        except Exception:
            return sys.exc_info()

    def test_client_error_has_no_traceback(self):
        formatter = KnownErrorFormatter()
        exc = InvalidModelError("bad", status_code=400)
        assert formatter.formatException(self._exc_info(exc)) == ""

    def test_server_error_keeps_traceback(self):
        formatter = KnownErrorFormatter()
        exc = StoreOperationError(RuntimeError("down"))
        text = formatter.formatException(self._exc_info(exc))
        assert "StoreOperationError" in text
