"""
登入頁面 Page Object

這裡只集中 locator 與可重用的步驟片段，實際操作由 FlowRunner 執行。
網站改名（按鈕文字、label）時只需要修改這個檔案。
"""

from core.locator import Locator
from core.steps import AssertVisible, Click, Fill, Navigate, Step
from pages.home_page import HomePage


class LoginPage:
    """登入頁面"""

    # ── Locators ──
    LOG_IN_LINK = Locator.by_role("link", "Log in")
    # 登入選單中的第二個 "Hudl" 項目才是一般使用者登入
    HUDL_PRODUCT_LINK = Locator.by_role("link", "Hudl", exact=True).nth_match(1)

    EMAIL_INPUT = Locator.by_label("Email")
    PASSWORD_INPUT = Locator.by_label("Password")
    CONTINUE_EXACT = Locator.by_role("button", "Continue", exact=True)
    CONTINUE = Locator.by_role("button", "Continue")

    SHOW_PASSWORD = Locator.by_role("button", "Show password")
    HIDE_PASSWORD = Locator.by_role("button", "Hide password")
    FORGOT_PASSWORD = Locator.by_role("link", "Forgot Password")
    CREATE_ACCOUNT = Locator.by_role("link", "Create Account")

    PRIVACY_POLICY = Locator.by_role("link", "Privacy Policy")
    TERMS_OF_SERVICE = Locator.by_role("link", "Terms of Service")

    INCORRECT_ERROR = Locator.by_pattern(r"incorrect")

    # ── 步驟片段 ──

    @classmethod
    def open(cls) -> list[Step]:
        """首頁 → Log in → Hudl 登入頁"""
        return [
            Navigate("{base_url}"),
            Click(cls.LOG_IN_LINK),
            Click(cls.HUDL_PRODUCT_LINK),
        ]

    @classmethod
    def enter_email(cls) -> list[Step]:
        return [
            Fill(cls.EMAIL_INPUT, "{email}"),
            Click(cls.CONTINUE_EXACT),
        ]

    @classmethod
    def submit_credentials(cls, password: str = "{password}") -> list[Step]:
        """輸入 email → Continue → 密碼 → Continue"""
        return cls.enter_email() + [
            Fill(cls.PASSWORD_INPUT, password),
            Click(cls.CONTINUE),
        ]

    @classmethod
    def login(cls) -> list[Step]:
        """完整的登入流程，結束時確認顯示名稱可見"""
        return cls.open() + cls.submit_credentials() + [
            AssertVisible(HomePage.DISPLAY_NAME),
        ]
