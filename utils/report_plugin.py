"""
自訂 pytest 報告 plugin
收集本次 pytest session 中所有 scenario 的 verdict，
在終端機輸出摘要並寫入 reports/verdicts.json。
在 conftest.py 引入即可生效。
"""

from utils.logger import logger
from utils.report import VerdictReport

_report: VerdictReport | None = None


# ── pytest hooks ──

def pytest_sessionstart(session):
    """測試 session 開始：訂閱 scenario 事件"""
    global _report
    _report = VerdictReport().attach()


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """有執行過 scenario 才輸出摘要"""
    if _report is None or not _report.verdicts:
        return

    path = _report.write()
    lines = _report.render().splitlines()
    lines.append(f"  報告: {path}")

    writer = terminalreporter
    writer.section("Login Flow Report", sep="=")
    for line in lines:
        writer.line(line)

    # 同時寫入 log
    for line in lines:
        logger.info(line)


def pytest_sessionfinish(session, exitstatus):
    if _report is not None:
        _report.detach()
