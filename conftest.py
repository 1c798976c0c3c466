"""
pytest 全域 fixtures

提供：
- browser_session fixture：每個 e2e 測試自動建立/關閉瀏覽器
- flow_params / flow_runner fixtures
- 失敗時自動截圖（含 Allure 報告附件）
- 命令列參數支援 (--browser, --env, --headed)
- Verdict 報告 plugin
"""

import pytest

from core.driver_manager import DriverManager
from core.runner import FlowRunner
from utils.allure_helper import attach_page_source, attach_screenshot
from utils.logger import logger

pytest_plugins = ["utils.report_plugin"]


# ── 命令列參數 ──

def pytest_addoption(parser):
    """新增自訂命令列參數"""
    parser.addoption(
        "--browser",
        action="store",
        default=None,
        choices=["chrome", "firefox"],
        help="瀏覽器: chrome 或 firefox (預設讀取 BROWSER)",
    )
    parser.addoption(
        "--env",
        action="store",
        default=None,
        help="測試環境: dev / staging / prod",
    )
    parser.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="顯示瀏覽器視窗",
    )


# ── Session / Environment ──

@pytest.fixture(scope="session")
def test_env(request) -> str:
    """取得測試環境並初始化 EnvManager"""
    from core.env_manager import env

    env_name = request.config.getoption("--env")
    if env_name:
        env.switch(env_name)
    return env.env_name


@pytest.fixture(scope="session")
def flow_params(test_env):
    """整個 run 共用、唯讀的參數"""
    from scenarios import build_parameters

    params = build_parameters()
    logger.info(f"Flow 參數 ({test_env}): {params!r}")
    return params


@pytest.fixture(scope="session")
def flow_runner(test_env) -> FlowRunner:
    from core.env_manager import env

    return FlowRunner(screenshot_on_fail=env.get("screenshot_on_fail", True))


# ── Browser ──

@pytest.fixture(scope="function")
def browser_session(request):
    """
    每個測試函式自動建立並關閉瀏覽器。

    scope=function 確保每個 scenario 獨立，互不影響。
    """
    browser = request.config.getoption("--browser")
    headless = False if request.config.getoption("--headed") else None
    logger.info("===== 建立瀏覽器 session =====")
    session = DriverManager.create_session(browser, headless)
    yield session
    logger.info("===== 關閉瀏覽器 session =====")
    session.close()


# ── 測試生命週期 Hook ──

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """測試失敗時：截圖 + 頁面原始碼附加到 Allure"""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        logger.error(f"測試失敗: {item.name}")
        session = item.funcargs.get("browser_session")
        if session is not None:
            attach_screenshot(session.driver, f"失敗截圖: {item.name}")
            attach_page_source(session.driver)
