"""
建立帳號頁面 Page Object
"""

from core.locator import Locator
from core.steps import Click, Fill, Step
from pages.login_page import LoginPage


class SignupPage:
    """建立帳號頁面"""

    FIRST_NAME_INPUT = Locator.by_label("First Name*")
    LAST_NAME_INPUT = Locator.by_label("Last Name*")
    EMAIL_INPUT = LoginPage.EMAIL_INPUT

    ACCOUNT_EXISTS_ERROR = Locator.by_pattern(r"already.*exists|account.*exists")

    @classmethod
    def fill_profile(cls) -> list[Step]:
        """填入姓名與 email"""
        return [
            Click(LoginPage.CREATE_ACCOUNT),
            Fill(cls.FIRST_NAME_INPUT, "{first_name}"),
            Fill(cls.LAST_NAME_INPUT, "{last_name}"),
            Fill(cls.EMAIL_INPUT, "{email}"),
        ]
