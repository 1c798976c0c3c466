"""
Allure 報告整合輔助
封裝失敗截圖、文字附件，以及 scenario 資訊標記。
"""

import allure
from selenium.common.exceptions import WebDriverException

from utils.logger import logger


def attach_screenshot(driver, name: str = "截圖") -> None:
    """將截圖附加到 Allure 報告；瀏覽器已關閉時略過"""
    try:
        png = driver.get_screenshot_as_png()
    except WebDriverException as e:
        logger.warning(f"無法擷取截圖附件: {e}")
        return
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)


def attach_text(text: str, name: str = "log") -> None:
    """將文字附加到 Allure 報告"""
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def label_scenario(scenario) -> None:
    """以 scenario 的標題、tag 標記目前的 Allure 測試"""
    allure.dynamic.title(scenario.title)
    for tag in sorted(scenario.tags):
        allure.dynamic.tag(tag)
    allure.dynamic.parameter("scenario_id", scenario.scenario_id)


def attach_page_source(driver, name: str = "頁面原始碼 (HTML)") -> None:
    """將目前頁面 HTML 附加到 Allure 報告"""
    try:
        source = driver.page_source
    except WebDriverException as e:
        logger.warning(f"無法取得頁面原始碼: {e}")
        return
    attach_text(source, name)
