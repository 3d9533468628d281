"""
Tests for logging setup and module/operation bindings.
"""

import json
import sys

import pytest
from loguru import logger

from paralens.utils.logger import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger.configure(extra={})
    yield
    logger.remove()
    logger.configure(extra={})
    logger.add(sys.stderr)


class TestGetLogger:
    def test_binds_module(self):
        records = []
        logger.add(lambda message: records.append(message.record), format="{message}")

        get_logger("paralens.core.vault_reader").info("hello")

        assert records[0]["extra"] == {"module": "paralens.core.vault_reader"}

    def test_binds_operation(self):
        records = []
        logger.add(lambda message: records.append(message.record), format="{message}")

        get_logger("paralens.services.vault_collector", operation="collect").info("hello")

        assert records[0]["extra"]["operation"] == "collect"


class TestSetupLogging:
    def test_console_shows_module_and_operation(self, capsys):
        setup_logging(level="INFO", log_to_file=False)

        get_logger("paralens.core.analytics.flow", operation="flows").info("estimated")
        err = capsys.readouterr().err

        assert "paralens.core.analytics.flow" in err
        assert "flows" in err
        assert "estimated" in err

    def test_unbound_records_use_defaults(self, capsys):
        setup_logging(level="INFO", log_to_file=False)

        logger.info("plain record")
        err = capsys.readouterr().err

        assert "plain record" in err
        assert "paralens" in err

    def test_level_filters_console(self, capsys):
        setup_logging(level="WARNING", log_to_file=False)

        get_logger("paralens.test").info("quiet")
        get_logger("paralens.test").warning("loud")
        err = capsys.readouterr().err

        assert "quiet" not in err
        assert "loud" in err

    def test_serialized_file_sink(self, tmp_path):
        setup_logging(level="INFO", log_dir=str(tmp_path))

        get_logger("paralens.services.analytics_engine").bind(operation="analyze").info("done")
        logger.complete()
        logger.remove()

        [log_file] = tmp_path.glob("paralens_*.log")
        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])["record"]
        assert record["message"] == "done"
        assert record["extra"] == {
            "module": "paralens.services.analytics_engine",
            "operation": "analyze",
        }
