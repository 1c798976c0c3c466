"""
設定管理模組
統一管理瀏覽器、等待時間、輸出目錄等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = Path(__file__).resolve().parent

SUPPORTED_BROWSERS = ("chrome", "firefox")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Config:
    """框架全域設定"""

    # 瀏覽器
    BROWSER = os.getenv("BROWSER", "chrome").lower()
    HEADLESS = _env_bool("HEADLESS", "true")
    WINDOW_SIZE = os.getenv("WINDOW_SIZE", "1440,900")

    # 超時設定 (秒)
    IMPLICIT_WAIT = int(os.getenv("IMPLICIT_WAIT", "0"))
    EXPLICIT_WAIT = int(os.getenv("EXPLICIT_WAIT", "15"))
    POPUP_WAIT = int(os.getenv("POPUP_WAIT", "10"))
    PAGE_LOAD_TIMEOUT = int(os.getenv("PAGE_LOAD_TIMEOUT", "30"))

    # 截圖與報告
    SCREENSHOT_DIR = BASE_DIR / "screenshots"
    REPORT_DIR = BASE_DIR / "reports"
