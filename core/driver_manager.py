"""
Driver 生命週期管理

負責建立、關閉 Selenium WebDriver，確保每個 scenario 使用獨立的瀏覽器。

支援：
- 執行緒安全（平行測試時每個 worker 獨立 driver）
- Chrome / Firefox，可 headless
- 啟動失敗自動重試（指數退避）
"""

import threading
import time

from selenium import webdriver
from selenium.common.exceptions import WebDriverException

from config.config import SUPPORTED_BROWSERS, Config
from core.browser_session import BrowserSession
from core.exceptions import DriverStartError, InvalidConfigError
from utils.logger import logger


class DriverManager:
    """
    管理 WebDriver 的建立與銷毀

    使用 thread-local storage 確保平行測試時各 worker 的 driver 互不干擾。
    """

    _local = threading.local()

    @classmethod
    def resolve_browser(cls, browser: str | None = None) -> str:
        """確認瀏覽器名稱受支援，回傳正規化後的名稱"""
        browser = (browser or Config.BROWSER).lower()
        if browser not in SUPPORTED_BROWSERS:
            raise InvalidConfigError(
                "BROWSER", browser, f"僅支援 {', '.join(SUPPORTED_BROWSERS)}",
            )
        return browser

    @classmethod
    def window_size(cls) -> tuple[int, int]:
        """解析 WINDOW_SIZE ('寬,高')"""
        try:
            width, height = (int(v) for v in Config.WINDOW_SIZE.split(","))
        except ValueError:
            raise InvalidConfigError(
                "WINDOW_SIZE", Config.WINDOW_SIZE, "格式應為 寬,高",
            )
        return width, height

    @classmethod
    def build_options(cls, browser: str, headless: bool):
        """依瀏覽器建立 Options"""
        width, height = cls.window_size()
        if browser == "chrome":
            options = webdriver.ChromeOptions()
            if headless:
                options.add_argument("--headless=new")
            options.add_argument(f"--window-size={width},{height}")
            options.add_argument("--disable-dev-shm-usage")
        else:
            options = webdriver.FirefoxOptions()
            if headless:
                options.add_argument("-headless")
            options.add_argument(f"--width={width}")
            options.add_argument(f"--height={height}")
        return options

    @classmethod
    def create_driver(
        cls,
        browser: str | None = None,
        headless: bool | None = None,
        max_retries: int = 3,
        retry_delay: float = 2.0,
    ):
        """
        建立 WebDriver，支援自動重試。

        Args:
            browser: 'chrome' 或 'firefox'，預設讀取 Config.BROWSER
            headless: 是否不顯示視窗，預設讀取 Config.HEADLESS
            max_retries: 啟動失敗時最多重試次數
            retry_delay: 首次重試等待秒數（後續指數退避）

        Returns:
            WebDriver 實例
        """
        browser = cls.resolve_browser(browser)
        headless = Config.HEADLESS if headless is None else headless
        options = cls.build_options(browser, headless)
        factory = webdriver.Chrome if browser == "chrome" else webdriver.Firefox

        last_error: Exception | None = None
        for attempt in range(max_retries):
            try:
                drv = factory(options=options)
                break
            except WebDriverException as e:
                last_error = e
                if attempt < max_retries - 1:
                    wait = retry_delay * (2 ** attempt)
                    logger.warning(
                        f"瀏覽器啟動失敗 (第 {attempt + 1} 次)，"
                        f"{wait:.1f}s 後重試: {e}"
                    )
                    time.sleep(wait)
        else:
            raise DriverStartError(browser, last_error)

        drv.implicitly_wait(Config.IMPLICIT_WAIT)
        drv.set_page_load_timeout(Config.PAGE_LOAD_TIMEOUT)

        cls._local.driver = drv
        logger.info(f"Driver 已建立: {browser} (headless={headless})")
        return drv

    @classmethod
    def quit_driver(cls) -> None:
        """安全關閉當前執行緒的 driver"""
        drv = getattr(cls._local, "driver", None)
        if drv is not None:
            drv.quit()
            cls._local.driver = None
            logger.info("Driver 已關閉")

    @classmethod
    def create_session(cls, browser: str | None = None,
                       headless: bool | None = None):
        """建立 driver 並包成 BrowserSession，session.close() 時關閉 driver"""
        drv = cls.create_driver(browser, headless)
        return BrowserSession(drv, on_close=cls.quit_driver)
