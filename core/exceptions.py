"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
Runner 只攔截 StepError 這一大類並轉成 FAILED verdict，
其他錯誤（程式錯誤、設定錯誤）由 run() 往上拋，
run_all 再把它記為該 scenario 的 FAILED，不影響其他 scenario。

Exception 樹：
    FlowFrameworkError
    ├── DriverError
    │   └── DriverStartError
    ├── StepError
    │   ├── LocatorNotFoundError
    │   ├── AssertionMismatchError
    │   ├── ResolutionError
    │   └── PopupNotOpenedError
    ├── ConfigError
    │   └── InvalidConfigError
    └── ScenarioError
        ├── DuplicateScenarioError
        └── UnknownScenarioError
"""


class FlowFrameworkError(Exception):
    """框架所有例外的基底，catch 這個就能攔截一切框架錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── Driver 相關 ──

class DriverError(FlowFrameworkError):
    """Driver 相關錯誤"""


class DriverStartError(DriverError):
    """無法啟動瀏覽器"""

    def __init__(self, browser: str = "", original: Exception | None = None):
        self.original = original
        msg = f"無法啟動瀏覽器: {browser}"
        if original:
            msg += f" ({type(original).__name__}: {original})"
        super().__init__(msg, context={"browser": browser})


# ── Step 相關 ──

class StepError(FlowFrameworkError):
    """單一步驟失敗，會結束所屬 scenario"""


class LocatorNotFoundError(StepError):
    """等待時間內找不到元素"""

    def __init__(self, locator=None, timeout: float = 0):
        msg = f"找不到元素: {locator}"
        if timeout:
            msg += f" (等待 {timeout}s)"
        super().__init__(msg, context={"locator": locator, "timeout": timeout})


class AssertionMismatchError(StepError, AssertionError):
    """實際值與預期值不符"""

    def __init__(self, what: str = "", expected=None, actual=None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what}: 預期 {expected!r}，實際 {actual!r}",
            context={"what": what, "expected": expected, "actual": actual},
        )


class ResolutionError(StepError):
    """步驟引用的參數不存在"""

    def __init__(self, name: str = "", template: str = ""):
        msg = f"缺少參數: {name}"
        if template:
            msg += f" (於 '{template}')"
        super().__init__(msg, context={"name": name, "template": template})


class PopupNotOpenedError(StepError):
    """觸發動作後沒有開出新視窗"""

    def __init__(self, trigger=None, timeout: float = 0):
        super().__init__(
            f"未開啟新視窗: {trigger} (等待 {timeout}s)",
            context={"trigger": trigger, "timeout": timeout},
        )


# ── Config 相關 ──

class ConfigError(FlowFrameworkError):
    """設定相關錯誤"""


class InvalidConfigError(ConfigError):
    """設定值無效"""

    def __init__(self, key: str = "", value: str = "", reason: str = ""):
        msg = f"設定值無效: {key}={value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"key": key, "value": value})


# ── Scenario 相關 ──

class ScenarioError(FlowFrameworkError):
    """Scenario 定義或查找錯誤"""


class DuplicateScenarioError(ScenarioError):
    """Scenario id 重複註冊"""

    def __init__(self, scenario_id: str = ""):
        super().__init__(
            f"Scenario 已存在: {scenario_id}",
            context={"scenario_id": scenario_id},
        )


class UnknownScenarioError(ScenarioError):
    """找不到指定的 Scenario"""

    def __init__(self, scenario_id: str = ""):
        super().__init__(
            f"找不到 Scenario: {scenario_id}",
            context={"scenario_id": scenario_id},
        )
