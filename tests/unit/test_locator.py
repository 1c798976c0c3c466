"""
core/locator.py 單元測試

驗證 Locator 轉換成 Selenium XPath、參數代入、正規表達式比對。
"""

import re

import pytest
from lxml import html as lxml_html
from selenium.webdriver.common.by import By

from core.locator import Locator, xpath_literal
from core.parameters import Parameters
from core.exceptions import ResolutionError


@pytest.mark.unit
class TestXpathLiteral:
    """XPath 字面值"""

    @pytest.mark.unit
    def test_plain(self):
        assert xpath_literal("Log in") == "'Log in'"

    @pytest.mark.unit
    def test_single_quote(self):
        assert xpath_literal("Don't") == '"Don\'t"'

    @pytest.mark.unit
    def test_both_quotes(self):
        assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"


@pytest.mark.unit
class TestToSelenium:
    """to_selenium 轉換"""

    @pytest.mark.unit
    def test_css(self):
        assert Locator.by_css("#decagon-iframe").to_selenium() == (
            By.CSS_SELECTOR, "#decagon-iframe",
        )

    @pytest.mark.unit
    def test_css_with_nth_rejected(self):
        with pytest.raises(ValueError):
            Locator.by_css("a").nth_match(1).to_selenium()

    @pytest.mark.unit
    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError, match="shadow"):
            Locator("shadow", "x").to_selenium()

    @pytest.mark.unit
    def test_role_link_includes_implicit_anchor(self):
        by, xpath = Locator.by_role("link", "Log in").to_selenium()
        assert by == By.XPATH
        assert "@role='link'" in xpath
        assert "self::a[@href]" in xpath
        assert "'log in'" in xpath  # 不分大小寫時轉小寫比對

    @pytest.mark.unit
    def test_role_exact_uses_equality(self):
        _, xpath = Locator.by_role("button", "Continue", exact=True).to_selenium()
        assert "normalize-space(.)='Continue'" in xpath
        assert "translate(" not in xpath

    @pytest.mark.unit
    def test_role_without_name(self):
        _, xpath = Locator.by_role("heading").to_selenium()
        assert xpath.startswith("//*[@role='heading' or self::h1")
        assert xpath.endswith("]")

    @pytest.mark.unit
    def test_unknown_role_only_matches_attribute(self):
        _, xpath = Locator.by_role("dialog").to_selenium()
        assert xpath == "//*[@role='dialog']"

    @pytest.mark.unit
    def test_nth_wraps_xpath(self):
        _, xpath = Locator.by_role("link", "Hudl", exact=True).nth_match(1).to_selenium()
        assert xpath.startswith("(//*[")
        assert xpath.endswith(")[2]")

    @pytest.mark.unit
    def test_label_covers_for_nested_and_aria(self):
        _, xpath = Locator.by_label("Email").to_selenium()
        branches = xpath.split(" | ")
        assert len(branches) == 3
        assert "/@for]" in branches[0]
        assert branches[1].startswith("//label[")
        assert "@aria-label" in branches[2]
        assert not branches[2].startswith("//*[(self::input")

    @pytest.mark.unit
    def test_text_selects_innermost(self):
        _, xpath = Locator.by_text("Jane Doe").to_selenium()
        assert "[not(*[" in xpath
        assert "self::script" in xpath

    @pytest.mark.unit
    def test_pattern_returns_candidates(self):
        _, xpath = Locator.by_pattern(r"incorrect").to_selenium()
        assert xpath.startswith("//body//*")


@pytest.mark.unit
class TestLocatorModifiers:
    """nth_match / in_frame 不改變原物件"""

    @pytest.mark.unit
    def test_modifiers_return_new_instance(self):
        base = Locator.by_role("button", "Close chat window")
        framed = base.in_frame("#decagon-iframe")
        assert framed.frame == "#decagon-iframe"
        assert base.frame is None
        assert base.nth_match(0).nth == 0
        assert base.nth is None

    @pytest.mark.unit
    def test_str(self):
        loc = Locator.by_role("link", "Hudl", exact=True).nth_match(1)
        assert str(loc) == "<role='link' name='Hudl' exact nth=1>"


@pytest.mark.unit
class TestPattern:
    """by_pattern"""

    @pytest.mark.unit
    def test_invalid_regex_rejected_at_definition(self):
        with pytest.raises(re.error):
            Locator.by_pattern("([")

    @pytest.mark.unit
    @pytest.mark.parametrize("text, expected", [
        ("Your email or password is INCORRECT.", True),
        ("incorrect", True),
        ("Welcome back", False),
        ("", False),
        (None, False),
    ])
    def test_matches_text(self, text, expected):
        assert Locator.by_pattern(r"incorrect").matches_text(text) is expected


@pytest.mark.unit
class TestResolve:
    """參數代入"""

    @pytest.mark.unit
    def test_value_and_name_resolved(self):
        params = Parameters({"display_name": "Jane Doe", "initials": "JD"})
        assert Locator.by_text("{display_name}").resolve(params).value == "Jane Doe"
        heading = Locator.by_role("heading", "{initials}").resolve(params)
        assert heading.value == "heading"
        assert heading.name == "JD"

    @pytest.mark.unit
    def test_pattern_untouched(self):
        """正規表達式的 {n} 量詞不被當成樣板"""
        loc = Locator.by_pattern(r"a{2}")
        assert loc.resolve(Parameters()) is loc

    @pytest.mark.unit
    def test_missing_parameter(self):
        with pytest.raises(ResolutionError):
            Locator.by_text("{display_name}").resolve(Parameters())


def _query(markup: str, locator: Locator) -> list:
    """在真實 DOM 上執行 locator 產生的 XPath"""
    _, xpath = locator.to_selenium()
    return lxml_html.document_fromstring(markup).xpath(xpath)


@pytest.mark.unit
class TestXpathOnDom:
    """產生的 XPath 在 lxml 解析的 DOM 上實際比對"""

    @pytest.mark.unit
    @pytest.mark.parametrize("needle", ["Émile Zola", "émile zola", "ÉMILE"])
    def test_text_case_insensitive_non_ascii(self, needle):
        markup = "<body><p>Signed in as <span>ÉMILE ZOLA</span></p></body>"
        found = _query(markup, Locator.by_text(needle))
        assert [el.tag for el in found] == ["span"]

    @pytest.mark.unit
    def test_text_non_ascii_no_false_match(self):
        markup = "<body><span>Emile Zola</span></body>"
        assert _query(markup, Locator.by_text("Émile")) == []

    @pytest.mark.unit
    def test_role_link_with_non_ascii_name(self):
        markup = (
            '<body><a href="/a">ŁÓDŹ Athletics</a>'
            '<a href="/b">Kraków</a></body>'
        )
        found = _query(markup, Locator.by_role("link", "łódź athletics"))
        assert [el.get("href") for el in found] == ["/a"]

    @pytest.mark.unit
    def test_text_selects_innermost_element(self):
        markup = "<body><div><p><b>Jane Doe</b></p></div><script>Jane Doe</script></body>"
        found = _query(markup, Locator.by_text("Jane Doe"))
        assert [el.tag for el in found] == ["b"]

    @pytest.mark.unit
    def test_label_for_attribute(self):
        markup = (
            '<body><label for="username">Email</label>'
            '<input id="username" type="email"><input id="other"></body>'
        )
        found = _query(markup, Locator.by_label("Email"))
        assert [el.get("id") for el in found] == ["username"]

    @pytest.mark.unit
    def test_label_wrapping_field(self):
        markup = '<body><label>Password <input id="pw" type="password"></label></body>'
        found = _query(markup, Locator.by_label("password"))
        assert [el.get("id") for el in found] == ["pw"]

    @pytest.mark.unit
    def test_label_matches_aria_label_on_button(self):
        markup = (
            '<body><button aria-label="Close chat window">×</button>'
            '<button>Send</button></body>'
        )
        found = _query(markup, Locator.by_label("Close chat window"))
        assert [el.tag for el in found] == ["button"]
        assert found[0].get("aria-label") == "Close chat window"

    @pytest.mark.unit
    def test_nth_match_picks_second_exact_link(self):
        markup = (
            '<body><a href="/one">Hudl</a><a href="/x">Hudl Assist</a>'
            '<a href="/two">Hudl</a></body>'
        )
        loc = Locator.by_role("link", "Hudl", exact=True).nth_match(1)
        assert [el.get("href") for el in _query(markup, loc)] == ["/two"]
