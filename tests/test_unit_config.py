"""Unit tests for settings and logging setup."""

import eliot
import importlib
import json
import logging
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from eliot.stdlib import EliotHandler
from playqueue import config
from playqueue import logging as queue_logging


class TestConfig:
    """Test configuration defaults and casts."""

    def test_defaults(self):
        assert config.HISTORY_LIMIT == 50
        assert config.DB_NAME
        assert config.LOG_LEVEL

    @pytest.mark.parametrize(("value", "expected"), [(None, None), ("", None), ("  ", None), ("42", 42), (7, 7)])
    def test_optional_int(self, value, expected):
        assert config._optional_int(value) == expected

    def test_optional_int_rejects_garbage(self):
        with pytest.raises(ValueError):
            config._optional_int("forty-two")


class TestSetupLogging:
    """Test setup_logging wiring."""

    @pytest.fixture
    def root_logger(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield root
        root.handlers = handlers
        root.setLevel(level)

    def test_setup_logging_with_file(self, monkeypatch, tmp_path, root_logger):
        add_destination = Mock()
        to_file = Mock()
        monkeypatch.setattr(queue_logging.eliot, "add_destination", add_destination)
        monkeypatch.setattr(queue_logging.eliot, "to_file", to_file)
        log_file = tmp_path / "logs" / "queue.log"

        queue_logging.setup_logging("debug", str(log_file))

        assert isinstance(add_destination.call_args.args[0], queue_logging.HumanReadableDestination)
        to_file.assert_called_once()
        assert log_file.parent.exists()
        assert root_logger.level == logging.DEBUG
        assert any(isinstance(handler, EliotHandler) for handler in root_logger.handlers)

        to_file.call_args.args[0].close()

    def test_setup_logging_stdout_only(self, monkeypatch, root_logger):
        monkeypatch.setattr(queue_logging.eliot, "add_destination", Mock())
        to_file = Mock()
        monkeypatch.setattr(queue_logging.eliot, "to_file", to_file)

        queue_logging.setup_logging("bogus")

        to_file.assert_not_called()
        assert root_logger.level == logging.INFO


class TestSetupLoggingFromEnvironment:
    """Test setup_logging picks up PLAYQUEUE_LOG_* settings when called without arguments."""

    @pytest.fixture
    def env_config(self, monkeypatch):
        """Reload settings after changing the environment; restore them afterwards."""
        yield lambda: importlib.reload(config)
        monkeypatch.undo()
        importlib.reload(config)

    @pytest.fixture
    def root_logger(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield root
        root.handlers = handlers
        root.setLevel(level)

    @pytest.fixture
    def file_destinations(self, monkeypatch):
        """Install real JSON file destinations and remove them after the test."""
        installed = []

        def to_file(output_file):
            destination = eliot.FileDestination(file=output_file)
            eliot.add_destinations(destination)
            installed.append(destination)

        monkeypatch.setattr(queue_logging.eliot, "add_destination", Mock())
        monkeypatch.setattr(queue_logging.eliot, "to_file", to_file)
        yield installed
        for destination in installed:
            eliot.remove_destination(destination)
            destination.file.close()

    def test_log_file_from_environment(self, monkeypatch, tmp_path, env_config, root_logger, file_destinations):
        """Test PLAYQUEUE_LOG_FILE receives JSON log lines."""
        log_file = tmp_path / "logs" / "queue.log"
        monkeypatch.setenv("PLAYQUEUE_LOG_FILE", str(log_file))
        env_config()

        queue_logging.setup_logging()
        queue_logging.log_queue_operation("shuffle", count=4)

        assert len(file_destinations) == 1
        messages = [json.loads(line) for line in log_file.read_text().splitlines()]
        setup = [m for m in messages if m.get("message_type") == "logging_setup"]
        assert setup[0]["log_file"] == str(log_file)
        assert any(m.get("operation") == "shuffle" for m in messages)

    def test_log_level_from_environment(self, monkeypatch, env_config, root_logger, file_destinations):
        """Test PLAYQUEUE_LOG_LEVEL sets the stdlib bridge level."""
        monkeypatch.delenv("PLAYQUEUE_LOG_FILE", raising=False)
        monkeypatch.setenv("PLAYQUEUE_LOG_LEVEL", "warning")
        env_config()

        queue_logging.setup_logging()

        assert root_logger.level == logging.WARNING
        assert file_destinations == []

    def test_arguments_override_environment(self, monkeypatch, env_config, root_logger, file_destinations):
        monkeypatch.setenv("PLAYQUEUE_LOG_LEVEL", "warning")
        env_config()

        queue_logging.setup_logging("debug")

        assert root_logger.level == logging.DEBUG
