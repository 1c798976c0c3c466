"""
core — 框架核心

統一匯出所有核心元件，方便外部 import。

用法：
    from core import FlowRunner, Scenario, Locator, Parameters
    from core import Navigate, Fill, Click, AssertVisible
    from core import LocatorNotFoundError, AssertionMismatchError
"""

from core.browser_session import BrowserSession, BrowsingEngine, PopupHandle
from core.driver_manager import DriverManager
from core.env_manager import env
from core.event_bus import event_bus
from core.exceptions import (
    AssertionMismatchError,
    ConfigError,
    DriverError,
    DriverStartError,
    DuplicateScenarioError,
    FlowFrameworkError,
    InvalidConfigError,
    LocatorNotFoundError,
    PopupNotOpenedError,
    ResolutionError,
    ScenarioError,
    StepError,
    UnknownScenarioError,
)
from core.locator import Locator
from core.parameters import Parameters
from core.runner import FlowRunner, Outcome, Verdict
from core.scenario import Scenario, ScenarioRegistry, registry
from core.steps import (
    ApiPost,
    AssertAttribute,
    AssertPopupUrl,
    AssertResponse,
    AssertUrl,
    AssertVisible,
    Click,
    Fill,
    FlowContext,
    Navigate,
    Reload,
    Step,
)

__all__ = [
    # Runner / Scenario
    "FlowRunner",
    "Verdict",
    "Outcome",
    "Scenario",
    "ScenarioRegistry",
    "registry",
    "Parameters",
    # Steps
    "Step",
    "FlowContext",
    "Navigate",
    "Reload",
    "Fill",
    "Click",
    "AssertVisible",
    "AssertUrl",
    "AssertAttribute",
    "AssertPopupUrl",
    "ApiPost",
    "AssertResponse",
    # Browser
    "Locator",
    "BrowsingEngine",
    "BrowserSession",
    "PopupHandle",
    "DriverManager",
    # Infrastructure
    "event_bus",
    "env",
    # Exceptions
    "FlowFrameworkError",
    "DriverError",
    "DriverStartError",
    "StepError",
    "LocatorNotFoundError",
    "AssertionMismatchError",
    "ResolutionError",
    "PopupNotOpenedError",
    "ConfigError",
    "InvalidConfigError",
    "ScenarioError",
    "DuplicateScenarioError",
    "UnknownScenarioError",
]
