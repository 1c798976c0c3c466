"""
utils/logger.py 單元測試

驗證 JsonFormatter、ScenarioFilter 與 scenario_logger。
"""

import json
import logging
import sys

import pytest

from utils.logger import (
    NO_SCENARIO,
    JsonFormatter,
    ScenarioFilter,
    logger,
    scenario_logger,
)


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        name="login_flow", level=logging.INFO, pathname="core/runner.py",
        lineno=42, msg=msg, args=(), exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJsonFormatter:
    """JsonFormatter"""

    @pytest.mark.unit
    def test_required_fields(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["message"] == "hello"
        assert parsed["level"] == "INFO"
        for key in ("timestamp", "logger", "module", "function", "line"):
            assert key in parsed

    @pytest.mark.unit
    def test_unicode_kept(self):
        parsed = json.loads(JsonFormatter().format(_record("測試中文訊息")))
        assert parsed["message"] == "測試中文訊息"

    @pytest.mark.unit
    def test_exception(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(_record(exc_info=exc_info)))
        assert "ValueError" in parsed["exception"]

    @pytest.mark.unit
    def test_scenario_field(self):
        parsed = json.loads(JsonFormatter().format(_record(scenario="login_logout")))
        assert parsed["scenario"] == "login_logout"

    @pytest.mark.unit
    @pytest.mark.parametrize("extra", [{}, {"scenario": NO_SCENARIO}])
    def test_no_scenario_field(self, extra):
        assert "scenario" not in json.loads(JsonFormatter().format(_record(**extra)))


@pytest.mark.unit
class TestScenarioFilter:
    """ScenarioFilter"""

    @pytest.mark.unit
    def test_fills_placeholder(self):
        record = _record()
        assert ScenarioFilter().filter(record) is True
        assert record.scenario == NO_SCENARIO

    @pytest.mark.unit
    def test_keeps_existing(self):
        record = _record(scenario="legal_links")
        ScenarioFilter().filter(record)
        assert record.scenario == "legal_links"


@pytest.mark.unit
class TestLoggerInstance:
    """logger 實例"""

    @pytest.mark.unit
    def test_logger_setup(self):
        assert logger.name == "login_flow"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) >= 2

    @pytest.mark.unit
    def test_every_handler_has_scenario_filter(self):
        for handler in logger.handlers:
            assert any(isinstance(f, ScenarioFilter) for f in handler.filters)

    @pytest.mark.unit
    def test_scenario_logger_tags_records(self):
        records = []

        class _Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = _Collect()
        logger.addHandler(handler)
        try:
            scenario_logger("password_reset").info("hi")
        finally:
            logger.removeHandler(handler)
        assert records[-1].scenario == "password_reset"
