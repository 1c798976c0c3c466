"""
Event Bus — scenario 生命週期事件

Runner 在 scenario 與 step 的各個階段發出事件，
報告、Allure、log 等模組訂閱事件做事，不必和 runner 直接耦合。

事件名稱與 data：
    scenario.start   {scenario}
    scenario.pass    {scenario, verdict}
    scenario.fail    {scenario, verdict}
    scenario.skip    {scenario, verdict}
    step.before      {scenario, index, step}
    step.after       {scenario, index, step}
    step.error       {scenario, index, step, error}

用法：
    from core.event_bus import event_bus

    @event_bus.on("scenario.fail")
    def on_fail(event):
        print(event.data["verdict"].diagnostic)

    event_bus.on("step.*", handler)      # 所有 step 事件
    event_bus.on("*", handler)           # 所有事件
"""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from utils.logger import logger

Handler = Callable[["Event"], Any]


@dataclass
class Event:
    name: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    source: str = ""


def _matches(pattern: str, event_name: str) -> bool:
    """pattern 可為完整名稱、"*"、或 "prefix.*" """
    if pattern in ("*", event_name):
        return True
    return pattern.endswith(".*") and event_name.startswith(pattern[:-1])


class EventBus:
    """
    同步事件匯流排

    handler 依 priority 由小到大執行；handler 出錯只記 log，
    不影響其他 handler，也不會改變 scenario 的結果。
    """

    def __init__(self):
        self._handlers: dict[str, list[tuple[int, Handler]]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event_name: str, handler: Handler | None = None,
           priority: int = 10):
        """訂閱事件。可當 decorator 或直接呼叫。"""
        def _register(fn: Handler) -> Handler:
            with self._lock:
                self._handlers[event_name].append((priority, fn))
                self._handlers[event_name].sort(key=lambda x: x[0])
            return fn

        if handler is None:
            return _register
        return _register(handler)

    def off(self, event_name: str, handler: Handler | None = None) -> None:
        """取消訂閱。不指定 handler 則移除該事件所有 handler。"""
        with self._lock:
            if handler is None:
                self._handlers.pop(event_name, None)
                return
            remaining = [(p, h) for p, h in self._handlers[event_name]
                         if h is not handler]
            if remaining:
                self._handlers[event_name] = remaining
            else:
                self._handlers.pop(event_name, None)

    def emit(self, event_name: str, data: dict | None = None,
             source: str = "") -> Event:
        event = Event(name=event_name, data=data or {}, source=source)
        with self._lock:
            to_call = sorted(
                (entry for pattern, entries in self._handlers.items()
                 if _matches(pattern, event_name) for entry in entries),
                key=lambda x: x[0],
            )

        for _, handler in to_call:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Event handler 錯誤 [{event_name}]: {e}")
        return event


# 全域 singleton
event_bus = EventBus()
