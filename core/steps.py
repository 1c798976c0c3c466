"""
Step — scenario 中的單一動作或斷言

每個 Step 都是不可變的 dataclass，執行時透過 FlowContext 取得
瀏覽 session 與參數。文字欄位可以含 {name} 樣板，執行當下才代入。

    Navigate("{base_url}")
    Fill(LoginPage.EMAIL, "{email}")
    Click(LoginPage.CONTINUE)
    AssertVisible(Locator.by_text("{display_name}"))
    AssertUrl("{base_url}")
    AssertAttribute(LoginPage.PASSWORD, "type", "text")
    AssertPopupUrl(LoginPage.PRIVACY_POLICY, "/privacy/i")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import requests

from core.exceptions import AssertionMismatchError, LocatorNotFoundError
from core.locator import Locator
from utils.api_client import ApiClient
from utils.logger import logger


class FlowContext:
    """單一 scenario 執行期間的狀態，不跨 scenario 共用"""

    def __init__(self, session, params):
        self.session = session
        self.params = params
        self.last_response = None


def _resolve_pattern(params, pattern: str) -> str:
    # /regex/ 形式不代入，避免和 {n} 量詞衝突
    if pattern.startswith("/"):
        return pattern
    return params.resolve(pattern)


@dataclass(frozen=True)
class Step:
    """所有 Step 的基底"""

    action: ClassVar[str] = "step"

    def execute(self, ctx: FlowContext) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return self.action


@dataclass(frozen=True)
class Navigate(Step):
    url: str
    action: ClassVar[str] = "navigate"

    def execute(self, ctx: FlowContext) -> None:
        ctx.session.navigate(ctx.params.resolve(self.url))

    def describe(self) -> str:
        return f"前往 {self.url}"


@dataclass(frozen=True)
class Reload(Step):
    action: ClassVar[str] = "reload"

    def execute(self, ctx: FlowContext) -> None:
        ctx.session.reload()

    def describe(self) -> str:
        return "重新整理頁面"


@dataclass(frozen=True)
class Fill(Step):
    locator: Locator
    value: str
    action: ClassVar[str] = "fill"

    def execute(self, ctx: FlowContext) -> None:
        ctx.session.fill(
            self.locator.resolve(ctx.params), ctx.params.resolve(self.value),
        )

    def describe(self) -> str:
        return f"輸入 {self.value} -> {self.locator}"


@dataclass(frozen=True)
class Click(Step):
    locator: Locator
    action: ClassVar[str] = "click"

    def execute(self, ctx: FlowContext) -> None:
        ctx.session.click(self.locator.resolve(ctx.params))

    def describe(self) -> str:
        return f"點擊 {self.locator}"


@dataclass(frozen=True)
class AssertVisible(Step):
    locator: Locator
    action: ClassVar[str] = "assert_visible"

    def execute(self, ctx: FlowContext) -> None:
        locator = self.locator.resolve(ctx.params)
        try:
            ctx.session.wait_visible(locator)
        except LocatorNotFoundError:
            raise AssertionMismatchError(f"可見性 {locator}", "visible", "not visible")

    def describe(self) -> str:
        return f"確認可見 {self.locator}"


@dataclass(frozen=True)
class AssertUrl(Step):
    pattern: str
    action: ClassVar[str] = "assert_url"

    def execute(self, ctx: FlowContext) -> None:
        ctx.session.wait_for_url(_resolve_pattern(ctx.params, self.pattern))

    def describe(self) -> str:
        return f"確認 URL {self.pattern}"


@dataclass(frozen=True)
class AssertAttribute(Step):
    locator: Locator
    attribute: str
    expected: str
    action: ClassVar[str] = "assert_attribute"

    def execute(self, ctx: FlowContext) -> None:
        locator = self.locator.resolve(ctx.params)
        expected = ctx.params.resolve(self.expected)
        actual = ctx.session.get_attribute(locator, self.attribute)
        if actual != expected:
            raise AssertionMismatchError(
                f"{locator} 的 {self.attribute} 屬性", expected, actual,
            )

    def describe(self) -> str:
        return f"確認 {self.locator}.{self.attribute} == {self.expected!r}"


@dataclass(frozen=True)
class AssertPopupUrl(Step):
    """點擊 trigger 開出新視窗，確認 URL 後關閉"""

    trigger: Locator
    pattern: str
    action: ClassVar[str] = "assert_popup_url"

    def execute(self, ctx: FlowContext) -> None:
        with ctx.session.open_popup(self.trigger.resolve(ctx.params)) as popup:
            popup.wait_for_url(_resolve_pattern(ctx.params, self.pattern))

    def describe(self) -> str:
        return f"新視窗 {self.trigger} 的 URL 符合 {self.pattern}"


# ── API ──

@dataclass(frozen=True)
class ApiPost(Step):
    """POST JSON，回應存到 ctx.last_response"""

    url: str
    payload: dict = field(default_factory=dict)
    action: ClassVar[str] = "api_post"

    def execute(self, ctx: FlowContext) -> None:
        body = {k: ctx.params.resolve(v) for k, v in self.payload.items()}
        client = ApiClient(ctx.params.resolve(self.url))
        try:
            ctx.last_response = client.post("", json_data=body)
        except requests.RequestException as e:
            raise AssertionMismatchError(
                "API 請求", "response", f"{type(e).__name__}: {e}",
            )

    def describe(self) -> str:
        return f"POST {self.url}"


@dataclass(frozen=True)
class AssertResponse(Step):
    """確認上一個 API 回應的狀態碼，以及 JSON 內含指定欄位"""

    status: int
    json_key: str | None = None
    action: ClassVar[str] = "assert_response"

    def execute(self, ctx: FlowContext) -> None:
        resp = ctx.last_response
        if resp is None:
            raise AssertionMismatchError("API 回應", "response", None)
        if resp.status_code != self.status:
            raise AssertionMismatchError("HTTP 狀態碼", self.status, resp.status_code)
        if self.json_key is not None:
            try:
                body = resp.json()
            except ValueError:
                raise AssertionMismatchError("回應格式", "JSON", resp.text[:200])
            if not isinstance(body, dict) or self.json_key not in body:
                raise AssertionMismatchError(
                    "回應 JSON 欄位", self.json_key,
                    sorted(body) if isinstance(body, dict) else body,
                )
        logger.info(f"[API] 回應符合預期: {resp.status_code}")

    def describe(self) -> str:
        suffix = f" 且含 '{self.json_key}'" if self.json_key else ""
        return f"確認回應 {self.status}{suffix}"
