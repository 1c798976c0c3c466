"""
日誌模組
console 與檔案共用一個 logger；透過 scenario_logger() 記錄的訊息會帶上所屬 scenario，
其他訊息以 "-" 代替。

    [2026-10-19 10:00:00] INFO    [login_logout] ===== Scenario 通過 (8.2s) =====
    [2026-10-19 10:00:01] INFO    [-] Driver 已關閉

環境變數：
    LOG_LEVEL: console 日誌等級 (預設 INFO)
    LOG_JSON:  設為 "1" 另外輸出 JSON 結構化日誌檔
    LOG_DIR:   日誌目錄 (預設 reports/)
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

LOG_DIR = Path(
    os.getenv("LOG_DIR", Path(__file__).resolve().parent.parent / "reports")
)
LOG_DIR.mkdir(parents=True, exist_ok=True)

NO_SCENARIO = "-"


class ScenarioFilter(logging.Filter):
    """沒有 scenario 的紀錄補上 "-"，讓 formatter 永遠拿得到欄位"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "scenario", None):
            record.scenario = NO_SCENARIO
        return True


class JsonFormatter(logging.Formatter):
    """一行一筆 JSON，scenario 欄位只在有值時輸出"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        scenario = getattr(record, "scenario", None)
        if scenario and scenario != NO_SCENARIO:
            entry["scenario"] = scenario
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _handler(handler: logging.Handler, level: int,
             formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ScenarioFilter())
    return handler


def _create_logger() -> logging.Logger:
    _logger = logging.Logger("login_flow")
    _logger.setLevel(logging.DEBUG)

    console_level = getattr(
        logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
    )
    text_fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-7s [%(scenario)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    _logger.addHandler(_handler(
        logging.StreamHandler(sys.stdout), console_level, text_fmt,
    ))
    _logger.addHandler(_handler(
        logging.FileHandler(LOG_DIR / "flow.log", encoding="utf-8"),
        logging.DEBUG, text_fmt,
    ))
    if os.getenv("LOG_JSON", "").strip() == "1":
        _logger.addHandler(_handler(
            logging.FileHandler(LOG_DIR / "flow.json.log", encoding="utf-8"),
            logging.DEBUG, JsonFormatter(),
        ))
    return _logger


def scenario_logger(scenario_id: str) -> logging.LoggerAdapter:
    """回傳自動標記 scenario 的 logger"""
    return logging.LoggerAdapter(logger, {"scenario": scenario_id})


logger = _create_logger()
