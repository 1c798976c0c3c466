"""
Flow Runner

run(scenario, parameters, session) -> Verdict

規則：
- 步驟依宣告順序執行，前一步完成才執行下一步
- 第一個失敗的步驟結束整個 scenario，後面的步驟不執行
- 刻意跳過的 scenario 只會得到 SKIPPED，不碰瀏覽器
- 不重試
- run_all 讓每個 scenario 使用自己的 session；
  一個 scenario 失敗不影響後面的 scenario
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

import allure
from selenium.common.exceptions import WebDriverException

from core.event_bus import event_bus
from core.exceptions import StepError
from core.parameters import Parameters
from core.scenario import Scenario
from core.steps import FlowContext
from utils.logger import scenario_logger


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Verdict:
    """單一 scenario 的結果"""

    scenario_id: str
    outcome: Outcome
    diagnostic: str = ""
    failed_step: int | None = None
    steps_completed: int = 0
    duration: float = 0.0
    screenshot: str | None = None

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    @property
    def skipped(self) -> bool:
        return self.outcome is Outcome.SKIPPED

    def to_dict(self) -> dict:
        return {
            "scenario_id": self.scenario_id,
            "outcome": self.outcome.value,
            "diagnostic": self.diagnostic,
            "failed_step": self.failed_step,
            "steps_completed": self.steps_completed,
            "duration": round(self.duration, 3),
            "screenshot": self.screenshot,
        }


class FlowRunner:
    """依序執行 scenario 的步驟並產生 Verdict"""

    def __init__(self, screenshot_on_fail: bool = True, bus=None):
        self.screenshot_on_fail = screenshot_on_fail
        self._bus = bus or event_bus

    def run(self, scenario: Scenario, parameters: Parameters,
            session=None) -> Verdict:
        log = scenario_logger(scenario.scenario_id)
        if scenario.skipped:
            log.info(f"跳過: {scenario.skip_reason}")
            verdict = Verdict(
                scenario.scenario_id, Outcome.SKIPPED,
                diagnostic=scenario.skip_reason,
            )
            self._emit("scenario.skip", scenario, verdict)
            return verdict

        if session is None:
            raise ValueError(f"Scenario '{scenario.scenario_id}' 需要瀏覽 session")

        log.info(f"===== Scenario 開始: {scenario.title} =====")
        self._bus.emit("scenario.start", {"scenario": scenario}, source="runner")

        ctx = FlowContext(session, parameters)
        start = time.time()
        for index, step in enumerate(scenario.steps):
            self._bus.emit("step.before", {
                "scenario": scenario, "index": index, "step": step,
            }, source="runner")
            try:
                with allure.step(step.describe()):
                    step.execute(ctx)
            except (StepError, WebDriverException) as e:
                self._bus.emit("step.error", {
                    "scenario": scenario, "index": index, "step": step, "error": e,
                }, source="runner")
                log.error(f"第 {index + 1} 步失敗 ({step.describe()}): {e}")
                verdict = Verdict(
                    scenario.scenario_id, Outcome.FAILED,
                    diagnostic=f"{type(e).__name__}: {e}",
                    failed_step=index,
                    steps_completed=index,
                    duration=time.time() - start,
                    screenshot=self._capture(session, scenario),
                )
                self._emit("scenario.fail", scenario, verdict)
                return verdict
            self._bus.emit("step.after", {
                "scenario": scenario, "index": index, "step": step,
            }, source="runner")

        verdict = Verdict(
            scenario.scenario_id, Outcome.PASSED,
            steps_completed=len(scenario.steps),
            duration=time.time() - start,
        )
        log.info(f"===== Scenario 通過 ({verdict.duration:.1f}s) =====")
        self._emit("scenario.pass", scenario, verdict)
        return verdict

    def run_all(self, scenarios: Iterable[Scenario], parameters: Parameters,
                session_factory: Callable) -> list[Verdict]:
        """
        每個 scenario 建立獨立 session，結束後關閉。

        session 建立失敗或執行中出現非預期例外時，該 scenario 記為 FAILED，
        其餘 scenario 照常執行。
        """
        verdicts = []
        for scenario in scenarios:
            if scenario.skipped:
                verdicts.append(self.run(scenario, parameters))
                continue
            session = None
            start = time.time()
            try:
                session = session_factory()
                verdicts.append(self.run(scenario, parameters, session))
            except Exception as e:
                verdicts.append(self._aborted(scenario, e, time.time() - start))
            finally:
                if session is not None:
                    self._close(session, scenario)
        return verdicts

    def _aborted(self, scenario: Scenario, error: Exception,
                 duration: float) -> Verdict:
        scenario_logger(scenario.scenario_id).exception(
            f"Scenario 中止: {type(error).__name__}: {error}"
        )
        verdict = Verdict(
            scenario.scenario_id, Outcome.FAILED,
            diagnostic=f"{type(error).__name__}: {error}",
            duration=duration,
        )
        self._emit("scenario.fail", scenario, verdict)
        return verdict

    def _close(self, session, scenario: Scenario) -> None:
        try:
            session.close()
        except Exception as e:
            scenario_logger(scenario.scenario_id).warning(f"Session 關閉失敗: {e}")

    def _capture(self, session, scenario: Scenario) -> str | None:
        if not self.screenshot_on_fail:
            return None
        try:
            return session.screenshot(f"FAIL_{scenario.scenario_id}")
        except (WebDriverException, OSError) as e:
            scenario_logger(scenario.scenario_id).warning(f"失敗截圖無法儲存: {e}")
            return None

    def _emit(self, event_name: str, scenario: Scenario, verdict: Verdict) -> None:
        self._bus.emit(event_name, {
            "scenario": scenario, "verdict": verdict,
        }, source="runner")

