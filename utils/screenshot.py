"""
截圖工具
scenario 失敗時自動截圖，方便 debug。
"""

import re
from datetime import datetime

from config.config import Config
from utils.logger import logger


def safe_filename(name: str) -> str:
    """把 pytest node id 這類字串轉成可當檔名的形式"""
    return re.sub(r"[^\w.-]+", "_", name).strip("_") or "screenshot"


def take_screenshot(driver, name: str) -> str:
    """
    擷取瀏覽器畫面並儲存到 screenshots 目錄。

    Args:
        driver: WebDriver 實例
        name: 截圖名稱（不含副檔名）

    Returns:
        截圖檔案的完整路徑
    """
    Config.SCREENSHOT_DIR.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{safe_filename(name)}_{timestamp}.png"
    filepath = Config.SCREENSHOT_DIR / filename
    driver.save_screenshot(str(filepath))
    logger.info(f"截圖已儲存: {filepath}")
    return str(filepath)
