"""
Browsing engine 介面與 Selenium 實作

Runner 只依賴 BrowsingEngine 定義的能力：
    navigate / reload / fill / click / get_attribute
    wait_visible / current_url / wait_for_url
    open_popup / screenshot / close

等待與輪詢全部交給 Selenium 的 WebDriverWait，這裡只描述「最後要成立的條件」。
逾時一律轉成框架自己的例外：
    找不到元素 → LocatorNotFoundError
    URL 不符   → AssertionMismatchError
    沒開新視窗 → PopupNotOpenedError
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from contextlib import contextmanager

from selenium.common.exceptions import (
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from config.config import Config
from core.exceptions import (
    AssertionMismatchError,
    LocatorNotFoundError,
    PopupNotOpenedError,
)
from core.locator import Locator
from utils.logger import logger
from utils.screenshot import take_screenshot

# 頁面重繪時元素可能在輪詢途中被換掉，視為「尚未成立」繼續等
_IGNORED = (StaleElementReferenceException,)


class BrowsingEngine(ABC):
    """Runner 需要的瀏覽器能力"""

    @abstractmethod
    def navigate(self, url: str) -> None: ...

    @abstractmethod
    def reload(self) -> None: ...

    @abstractmethod
    def fill(self, locator: Locator, text: str) -> None: ...

    @abstractmethod
    def click(self, locator: Locator) -> None: ...

    @abstractmethod
    def get_attribute(self, locator: Locator, name: str) -> str | None: ...

    @abstractmethod
    def wait_visible(self, locator: Locator) -> None: ...

    @property
    @abstractmethod
    def current_url(self) -> str: ...

    @abstractmethod
    def wait_for_url(self, pattern: str) -> str: ...

    @abstractmethod
    def open_popup(self, trigger: Locator) -> "PopupHandle": ...

    @abstractmethod
    def screenshot(self, name: str) -> str: ...

    @abstractmethod
    def close(self) -> None: ...


def url_matches(pattern: str, url: str) -> bool:
    """
    URL 比對規則：
        以 / 包起來 ("/privacy/i") → 正規表達式，結尾 i 表示不分大小寫
        其他 → 完全相等
    """
    m = re.fullmatch(r"/(.*)/(i?)", pattern, re.DOTALL)
    if m:
        flags = re.IGNORECASE if m.group(2) else 0
        return re.search(m.group(1), url, flags) is not None
    return url == pattern


class BrowserSession(BrowsingEngine):
    """
    以 Selenium WebDriver 實作的瀏覽 session

    每個 scenario 一個 session，scenario 之間不共用。
    """

    def __init__(self, driver, timeout: float | None = None,
                 popup_timeout: float | None = None, on_close=None):
        self.driver = driver
        self._on_close = on_close or driver.quit
        self.timeout = timeout or Config.EXPLICIT_WAIT
        self.popup_timeout = popup_timeout or Config.POPUP_WAIT
        self.wait = WebDriverWait(driver, self.timeout, ignored_exceptions=_IGNORED)

    # ── 導覽 ──

    def navigate(self, url: str) -> None:
        logger.info(f"前往: {url}")
        self.driver.get(url)

    def reload(self) -> None:
        logger.info("重新整理頁面")
        self.driver.refresh()

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def wait_for_url(self, pattern: str) -> str:
        """等待目前 URL 符合 pattern，回傳最後看到的 URL"""
        try:
            self.wait.until(lambda d: url_matches(pattern, d.current_url))
        except TimeoutException:
            raise AssertionMismatchError("URL", pattern, self.driver.current_url)
        return self.driver.current_url

    # ── 元素查找 ──

    def find_element(self, locator: Locator) -> WebElement:
        """等待元素出現並回傳（目前 frame 內）"""
        try:
            if locator.is_pattern:
                return self.wait.until(lambda d: self._match_pattern(locator))
            return self.wait.until(
                EC.presence_of_element_located(locator.to_selenium())
            )
        except TimeoutException:
            raise LocatorNotFoundError(locator, self.timeout)

    def wait_for_clickable(self, locator: Locator) -> WebElement:
        try:
            if locator.is_pattern:
                return self.wait.until(lambda d: self._match_pattern(locator))
            return self.wait.until(
                EC.element_to_be_clickable(locator.to_selenium())
            )
        except TimeoutException:
            raise LocatorNotFoundError(locator, self.timeout)

    def _wait_for_visible(self, locator: Locator) -> WebElement:
        if locator.is_pattern:
            return self.wait.until(lambda d: self._match_pattern(locator))
        return self.wait.until(
            EC.visibility_of_element_located(locator.to_selenium())
        )

    def _match_pattern(self, locator: Locator) -> WebElement | bool:
        """回傳第一個文字符合 pattern 的可見最內層元素，找不到回傳 False"""
        for element in self.driver.find_elements(*locator.to_selenium()):
            try:
                if not locator.matches_text(element.text):
                    continue
                children = element.find_elements(By.XPATH, "./*")
                if any(locator.matches_text(c.text) for c in children):
                    continue
                if element.is_displayed():
                    return element
            except StaleElementReferenceException:
                continue
        return False

    @contextmanager
    def _frame(self, locator: Locator):
        """locator 指定 iframe 時，切入後執行，結束切回主文件"""
        if not locator.frame:
            yield
            return
        try:
            self.wait.until(EC.frame_to_be_available_and_switch_to_it(
                (By.CSS_SELECTOR, locator.frame)
            ))
        except TimeoutException:
            raise LocatorNotFoundError(Locator.by_css(locator.frame), self.timeout)
        try:
            yield
        finally:
            self.driver.switch_to.default_content()

    # ── 元素操作 ──

    def click(self, locator: Locator) -> None:
        logger.info(f"點擊元素: {locator}")
        with self._frame(locator):
            self.wait_for_clickable(locator).click()

    def fill(self, locator: Locator, text: str) -> None:
        logger.info(f"輸入文字 -> {locator}")
        with self._frame(locator):
            try:
                element = self._wait_for_visible(locator)
            except TimeoutException:
                raise LocatorNotFoundError(locator, self.timeout)
            element.clear()
            element.send_keys(text)

    def get_attribute(self, locator: Locator, name: str) -> str | None:
        with self._frame(locator):
            return self.find_element(locator).get_attribute(name)

    def wait_visible(self, locator: Locator) -> None:
        """等待元素可見，逾時拋出 LocatorNotFoundError"""
        with self._frame(locator):
            try:
                self._wait_for_visible(locator)
            except TimeoutException:
                raise LocatorNotFoundError(locator, self.timeout)

    # ── 新視窗 ──

    def open_popup(self, trigger: Locator) -> "PopupHandle":
        """
        點擊 trigger 並等待新視窗出現。

        回傳的 PopupHandle 已切換到新視窗；close() 後切回原視窗。
        """
        opener = self.driver.current_window_handle
        before = list(self.driver.window_handles)
        self.click(trigger)
        try:
            WebDriverWait(
                self.driver, self.popup_timeout, ignored_exceptions=_IGNORED,
            ).until(
                EC.new_window_is_opened(before)
            )
        except TimeoutException:
            raise PopupNotOpenedError(trigger, self.popup_timeout)

        new_handle = next(
            h for h in self.driver.window_handles if h not in before
        )
        logger.info(f"切換到新視窗: {new_handle}")
        self.driver.switch_to.window(new_handle)
        return PopupHandle(self, new_handle, opener)

    # ── 其他 ──

    def screenshot(self, name: str) -> str:
        return take_screenshot(self.driver, name)

    def close(self) -> None:
        self._on_close()


class PopupHandle:
    """由觸發動作開出的次要視窗，只會有一個結果"""

    def __init__(self, session: BrowserSession, handle: str, opener: str):
        self.session = session
        self.handle = handle
        self.opener = opener
        self.closed = False

    def wait_for_url(self, pattern: str) -> str:
        return self.session.wait_for_url(pattern)

    def close(self) -> None:
        if self.closed:
            return
        driver = self.session.driver
        driver.close()
        driver.switch_to.window(self.opener)
        self.closed = True
        logger.info("已關閉新視窗並切回原視窗")

    def __enter__(self) -> "PopupHandle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
