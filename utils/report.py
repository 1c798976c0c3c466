"""
Verdict 報告
訂閱 runner 的 scenario.* 事件，收集每個 scenario 的結果，
結束後輸出 JSON 檔與終端機摘要。

用法：
    report = VerdictReport().attach()
    runner.run_all(...)
    report.write(Path("reports/verdicts.json"))
    print(report.render())
    report.detach()
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from config.config import Config
from core.event_bus import event_bus
from utils.logger import logger


class VerdictReport:
    """收集 scenario verdict"""

    EVENTS = ("scenario.pass", "scenario.fail", "scenario.skip")

    def __init__(self, bus=None):
        self._bus = bus or event_bus
        self.verdicts: list = []
        self.started_at = datetime.now()

    def attach(self) -> "VerdictReport":
        for name in self.EVENTS:
            self._bus.on(name, self._on_verdict)
        return self

    def detach(self) -> None:
        for name in self.EVENTS:
            self._bus.off(name, self._on_verdict)

    def _on_verdict(self, event) -> None:
        self.verdicts.append(event.data["verdict"])

    # ── 輸出 ──

    def counts(self) -> dict[str, int]:
        counts = {"passed": 0, "failed": 0, "skipped": 0}
        for v in self.verdicts:
            counts[v.outcome.value] += 1
        counts["total"] = len(self.verdicts)
        return counts

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(timespec="seconds"),
            "summary": self.counts(),
            "scenarios": [v.to_dict() for v in self.verdicts],
        }

    def write(self, path: Path | None = None) -> Path:
        path = Path(path or Config.REPORT_DIR / "verdicts.json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(self.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info(f"Verdict 報告已儲存: {path}")
        return path

    def render(self) -> str:
        """終端機摘要"""
        c = self.counts()
        sep = "=" * 60
        lines = [
            sep,
            "  登入流程 Scenario 結果",
            sep,
        ]
        for v in self.verdicts:
            mark = {"passed": "PASS", "failed": "FAIL", "skipped": "SKIP"}[v.outcome.value]
            line = f"  {mark:<5} {v.scenario_id}"
            if v.diagnostic:
                line += f"  ({v.diagnostic})"
            lines.append(line)
        lines += [
            "-" * 60,
            f"  通過 {c['passed']} / 失敗 {c['failed']} / 跳過 {c['skipped']}"
            f" (共 {c['total']})",
            sep,
        ]
        return "\n".join(lines)
