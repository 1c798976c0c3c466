"""
core/scenario.py 單元測試

驗證 Scenario 定義與 ScenarioRegistry 的註冊、查詢、挑選。
"""

import pytest

from core.exceptions import DuplicateScenarioError, UnknownScenarioError
from core.locator import Locator
from core.scenario import Scenario, ScenarioRegistry
from core.steps import ApiPost, AssertUrl, Click, Fill, Navigate


@pytest.fixture
def reg():
    r = ScenarioRegistry()
    r.register(Scenario("login_logout", "Login and logout", tags={"smoke", "auth"}))
    r.register(Scenario("invalid_password", "Invalid password", tags={"negative"}))
    r.register(Scenario("api_login", "API login", skip_reason="placeholder"))
    return r


@pytest.mark.unit
class TestScenario:
    """Scenario 定義"""

    @pytest.mark.unit
    def test_steps_and_tags_normalized(self):
        s = Scenario("x", "X", steps=[Navigate("{base_url}")], tags=["a"])
        assert isinstance(s.steps, tuple)
        assert s.tags == frozenset({"a"})

    @pytest.mark.unit
    def test_skipped(self):
        assert Scenario("x", "X", skip_reason="not ready").skipped
        assert not Scenario("x", "X").skipped

    @pytest.mark.unit
    def test_placeholders(self):
        s = Scenario("x", "X", steps=[
            Navigate("{base_url}"),
            Fill(Locator.by_label("Email"), "{email}"),
            Click(Locator.by_role("heading", "{initials}")),
            AssertUrl("/privacy{1}/i"),
            ApiPost("{api_login_url}", {"password": "{password}"}),
        ])
        assert s.placeholders() == {
            "base_url", "email", "initials", "api_login_url", "password",
        }


@pytest.mark.unit
class TestScenarioRegistry:
    """ScenarioRegistry"""

    @pytest.mark.unit
    def test_order_preserved(self, reg):
        assert reg.ids() == ["login_logout", "invalid_password", "api_login"]
        assert len(reg) == 3
        assert "login_logout" in reg

    @pytest.mark.unit
    def test_duplicate_rejected(self, reg):
        with pytest.raises(DuplicateScenarioError):
            reg.register(Scenario("login_logout", "again"))

    @pytest.mark.unit
    def test_unknown(self, reg):
        with pytest.raises(UnknownScenarioError):
            reg.get("nope")

    @pytest.mark.unit
    def test_select_by_ids_keeps_request_order(self, reg):
        picked = reg.select(ids=["invalid_password", "login_logout"])
        assert [s.scenario_id for s in picked] == ["invalid_password", "login_logout"]

    @pytest.mark.unit
    def test_select_by_tag(self, reg):
        assert [s.scenario_id for s in reg.select(tag="smoke")] == ["login_logout"]

    @pytest.mark.unit
    def test_select_all(self, reg):
        assert len(reg.select()) == 3
