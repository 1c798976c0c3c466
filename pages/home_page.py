"""
登入後首頁 Page Object

帳號選單以使用者縮寫（heading）或顯示名稱開啟。
"""

from core.locator import Locator
from core.steps import AssertUrl, Click, Navigate, Step


class HomePage:
    """登入後首頁"""

    # ── Locators ──
    DISPLAY_NAME = Locator.by_text("{display_name}")
    INITIALS_MENU = Locator.by_role("heading", "{initials}")

    LOG_OUT = Locator.by_role("link", "Log Out")
    ACCOUNT_SETTINGS = Locator.by_role("link", "Account Settings")
    TICKETS_AND_PASSES = Locator.by_role("link", "Tickets & Passes")
    GET_HELP = Locator.by_role("link", "Get Help")
    CLOSE_CHAT = Locator.by_label("Close chat window").in_frame("#decagon-iframe")

    # ── 步驟片段 ──

    @classmethod
    def logout_via_display_name(cls) -> list[Step]:
        """點顯示名稱開選單 → Log Out → 回到網站首頁"""
        return [
            Click(cls.DISPLAY_NAME),
            Click(cls.LOG_OUT),
            AssertUrl("{base_url}"),
        ]

    @classmethod
    def open_menu_item(cls, item: Locator) -> list[Step]:
        """從縮寫選單開啟某個項目"""
        return [Click(cls.INITIALS_MENU), Click(item)]

    @classmethod
    def back_home(cls) -> list[Step]:
        return [Navigate("{home_url}")]
