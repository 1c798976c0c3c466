"""
登入 / 帳號流程 scenario 表

import 本模組即把所有 scenario 註冊到 core.scenario.registry。
id 後面的數字對應原始測試清單的編號。
"""

from core.scenario import Scenario, registry
from core.steps import (
    ApiPost,
    AssertAttribute,
    AssertPopupUrl,
    AssertResponse,
    AssertVisible,
    Click,
    Fill,
    Navigate,
    Reload,
)
from pages.home_page import HomePage
from pages.login_page import LoginPage
from pages.signup_page import SignupPage

SESSION_RELOADS = 3

LOGIN_LOGOUT = registry.register(Scenario(
    scenario_id="login_logout",
    title="1. Successful login and logout flow",
    steps=LoginPage.login() + HomePage.logout_via_display_name(),
    tags={"smoke", "auth"},
))

INVALID_PASSWORD = registry.register(Scenario(
    scenario_id="invalid_password",
    title="2. Invalid password should trigger error message",
    steps=LoginPage.open()
    + LoginPage.submit_credentials("{invalid_password}")
    + [AssertVisible(LoginPage.INCORRECT_ERROR)],
    tags={"negative", "auth"},
))

PASSWORD_RESET = registry.register(Scenario(
    scenario_id="password_reset",
    title="3. Password reset flow accessibility",
    steps=LoginPage.open()
    + LoginPage.enter_email()
    + [Click(LoginPage.FORGOT_PASSWORD)],
    tags={"auth"},
))

PASSWORD_VISIBILITY = registry.register(Scenario(
    scenario_id="password_visibility",
    title="4. Password visibility toggle functionality",
    steps=LoginPage.open()
    + LoginPage.enter_email()
    + [
        Fill(LoginPage.PASSWORD_INPUT, "{password}"),
        Click(LoginPage.SHOW_PASSWORD),
        AssertAttribute(LoginPage.PASSWORD_INPUT, "type", "text"),
        Click(LoginPage.HIDE_PASSWORD),
        AssertAttribute(LoginPage.PASSWORD_INPUT, "type", "password"),
    ],
    tags={"auth"},
))

EXISTING_ACCOUNT = registry.register(Scenario(
    scenario_id="existing_account",
    title="5. Existing account creation should trigger error message",
    steps=LoginPage.open()
    + SignupPage.fill_profile()
    + [
        Click(LoginPage.CONTINUE_EXACT),
        Fill(LoginPage.PASSWORD_INPUT, "{password}"),
        Click(LoginPage.CONTINUE),
        AssertVisible(SignupPage.ACCOUNT_EXISTS_ERROR),
    ],
    tags={"negative", "signup"},
))

LEGAL_LINKS = registry.register(Scenario(
    scenario_id="legal_links",
    title="6. TOS and Privacy Policy Pre-Auth",
    steps=LoginPage.open() + [
        AssertPopupUrl(LoginPage.PRIVACY_POLICY, "/privacy/i"),
        AssertPopupUrl(LoginPage.TERMS_OF_SERVICE, "/terms/i"),
    ],
    tags={"legal"},
))

SESSION_PERSISTENCE = registry.register(Scenario(
    scenario_id="session_persistence",
    title="7. Session persistence after page reload",
    steps=LoginPage.login()
    + [Reload(), AssertVisible(HomePage.DISPLAY_NAME)] * SESSION_RELOADS
    + HomePage.logout_via_display_name(),
    tags={"auth", "session"},
))

API_LOGIN_SUCCESS = registry.register(Scenario(
    scenario_id="api_login_success",
    title="8. Successful login via API (Placeholder)",
    steps=(
        ApiPost("{api_login_url}", {"email": "{email}", "password": "{password}"}),
        AssertResponse(200, json_key="token"),
    ),
    skip_reason="API 登入端點尚未提供 (placeholder)",
    tags={"api"},
))

API_LOGIN_INVALID = registry.register(Scenario(
    scenario_id="api_login_invalid",
    title="9. Invalid login via API (Placeholder)",
    steps=(
        ApiPost(
            "{api_login_url}",
            {"email": "{email}", "password": "{invalid_password}"},
        ),
        AssertResponse(401),
    ),
    skip_reason="API 登入端點尚未提供 (placeholder)",
    tags={"api", "negative"},
))

MOBILE_VIEWPORT = registry.register(Scenario(
    scenario_id="mobile_viewport",
    title="10. Responsive login page renders correctly on mobile",
    steps=(Navigate("{base_url}"),),
    skip_reason="尚未支援行動裝置 viewport 模擬 (placeholder)",
    tags={"viewport"},
))

ACCOUNT_NAVIGATION = registry.register(Scenario(
    scenario_id="account_navigation",
    title="11. Post-Auth Account Settings Navigation",
    steps=LoginPage.open()
    + LoginPage.submit_credentials()
    + HomePage.open_menu_item(HomePage.ACCOUNT_SETTINGS)
    + HomePage.back_home()
    + HomePage.open_menu_item(HomePage.TICKETS_AND_PASSES)
    + HomePage.back_home()
    + HomePage.open_menu_item(HomePage.GET_HELP)
    + [Click(HomePage.CLOSE_CHAT)]
    + HomePage.open_menu_item(HomePage.LOG_OUT),
    tags={"auth", "navigation"},
))
