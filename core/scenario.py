"""
Scenario 與 ScenarioRegistry

Scenario 在定義時就固定：id、標題、依序執行的步驟。
skip_reason 非空代表刻意跳過（placeholder），runner 不會執行任何步驟。

用法：
    from core.scenario import Scenario, registry

    registry.register(Scenario(
        scenario_id="invalid_password",
        title="Invalid password should trigger error message",
        steps=(...),
    ))
    registry.get("invalid_password")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from string import Formatter

from core.exceptions import DuplicateScenarioError, UnknownScenarioError
from core.steps import Step


@dataclass(frozen=True)
class Scenario:
    """一個具名的端對端流程"""

    scenario_id: str
    title: str
    steps: tuple[Step, ...] = ()
    skip_reason: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # 允許傳 list，統一轉成 tuple
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "tags", frozenset(self.tags))

    @property
    def skipped(self) -> bool:
        return bool(self.skip_reason)

    def placeholders(self) -> set[str]:
        """列出所有步驟引用的參數名稱（debug 用）"""
        names: set[str] = set()
        for step in self.steps:
            for value in vars(step).values():
                texts = []
                if isinstance(value, str):
                    texts.append(value)
                elif isinstance(value, dict):
                    texts.extend(v for v in value.values() if isinstance(v, str))
                elif hasattr(value, "kind") and value.kind != "pattern":
                    texts.extend(t for t in (value.value, value.name) if t)
                for text in texts:
                    if text.startswith("/"):
                        continue
                    names.update(
                        f for _, f, _, _ in Formatter().parse(text) if f
                    )
        return names


class ScenarioRegistry:
    """保存 scenario，維持註冊順序"""

    def __init__(self):
        self._scenarios: dict[str, Scenario] = {}

    def register(self, scenario: Scenario) -> Scenario:
        if scenario.scenario_id in self._scenarios:
            raise DuplicateScenarioError(scenario.scenario_id)
        self._scenarios[scenario.scenario_id] = scenario
        return scenario

    def get(self, scenario_id: str) -> Scenario:
        try:
            return self._scenarios[scenario_id]
        except KeyError:
            raise UnknownScenarioError(scenario_id)

    def select(self, ids: list[str] | None = None,
               tag: str | None = None) -> list[Scenario]:
        """依 id 或 tag 挑選；都不給就回傳全部"""
        if ids:
            return [self.get(i) for i in ids]
        scenarios = list(self._scenarios.values())
        if tag:
            scenarios = [s for s in scenarios if tag in s.tags]
        return scenarios

    def ids(self) -> list[str]:
        return list(self._scenarios)

    def __iter__(self):
        return iter(self._scenarios.values())

    def __len__(self) -> int:
        return len(self._scenarios)

    def __contains__(self, scenario_id: str) -> bool:
        return scenario_id in self._scenarios


# 全域 singleton
registry = ScenarioRegistry()
