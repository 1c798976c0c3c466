"""
Locator — 以角色 / 標籤 / 文字描述元素

網站上沒有穩定的 id，scenario 以使用者看得到的東西找元素：
    Locator.by_role("link", "Log in")          → <a href> 或 role="link"，名稱含 "Log in"
    Locator.by_label("Email")                  → <label>Email</label> 對應的 input
    Locator.by_text("{display_name}")          → 含該文字的最內層元素
    Locator.by_pattern(r"incorrect")           → 文字符合正規表達式（不分大小寫）
    Locator.by_css("#decagon-iframe")          → 直接用 CSS

to_selenium() 轉成 Selenium 的 (By, value)。XPath 1.0 沒有正規表達式，
by_pattern 只回傳候選元素，由 BrowserSession 在 Python 端比對文字。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from selenium.webdriver.common.by import By

_ASCII_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_FORM_FIELD = "(self::input or self::textarea or self::select)"

# 角色 → 隱含此角色的 HTML 元素
_IMPLICIT_ROLES = {
    "link": "self::a[@href]",
    "button": (
        "self::button or self::input[@type='button' or @type='submit'"
        " or @type='reset']"
    ),
    "heading": (
        "self::h1 or self::h2 or self::h3 or self::h4 or self::h5 or self::h6"
    ),
    "textbox": (
        "self::textarea or self::input[not(@type) or @type='text'"
        " or @type='email' or @type='password' or @type='search' or @type='tel']"
    ),
    "checkbox": "self::input[@type='checkbox']",
}

_TEXT_CANDIDATES = "//body//*[not(self::script or self::style)][normalize-space(.)]"


def xpath_literal(value: str) -> str:
    """把字串轉成 XPath 字面值，處理同時含單雙引號的情況"""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in pieces) + ")"


def _case_maps(text: str) -> tuple[str, str]:
    """
    translate() 用的大小寫對照表：A-Z 加上 text 中所有字元的大寫形式。
    XPath 1.0 沒有 lower-case()，非 ASCII 字母 (É、Ł、Д) 要自己列出。
    """
    chars = set(_ASCII_UPPER) | set(text.upper()) | set(text)
    src = "".join(sorted(
        c for c in chars if c != c.lower() and len(c.lower()) == 1
    ))
    return src, "".join(c.lower() for c in src)


def _text_matches(expr: str, text: str, exact: bool) -> str:
    """exact: 完全相等；否則不分大小寫的子字串比對"""
    text = text.strip()
    if exact:
        return f"normalize-space({expr})={xpath_literal(text)}"
    src, dst = _case_maps(text)
    return (
        f"contains(translate(normalize-space({expr}), "
        f"{xpath_literal(src)}, {xpath_literal(dst)}), "
        f"{xpath_literal(text.lower())})"
    )


@dataclass(frozen=True)
class Locator:
    """元素定位規則（不可變）"""

    kind: str
    value: str
    name: str | None = None
    exact: bool = False
    nth: int | None = None
    frame: str | None = None

    # ── 建構 ──

    @classmethod
    def by_role(cls, role: str, name: str | None = None,
                exact: bool = False) -> "Locator":
        return cls("role", role, name=name, exact=exact)

    @classmethod
    def by_label(cls, text: str, exact: bool = False) -> "Locator":
        return cls("label", text, exact=exact)

    @classmethod
    def by_text(cls, text: str, exact: bool = False) -> "Locator":
        return cls("text", text, exact=exact)

    @classmethod
    def by_pattern(cls, pattern: str) -> "Locator":
        re.compile(pattern)  # 定義時就檢查語法
        return cls("pattern", pattern)

    @classmethod
    def by_css(cls, selector: str) -> "Locator":
        return cls("css", selector)

    def nth_match(self, index: int) -> "Locator":
        """取第 index 個符合的元素 (0-based)"""
        return replace(self, nth=index)

    def in_frame(self, frame_css: str) -> "Locator":
        """在指定 iframe 內查找"""
        return replace(self, frame=frame_css)

    # ── 參數代入 ──

    def resolve(self, params) -> "Locator":
        """代入 {name} 樣板；正規表達式不處理"""
        if self.kind == "pattern":
            return self
        name = params.resolve(self.name) if self.name is not None else None
        return replace(self, value=params.resolve(self.value), name=name)

    # ── 轉換 ──

    @property
    def is_pattern(self) -> bool:
        return self.kind == "pattern"

    def matches_text(self, text: str) -> bool:
        """by_pattern 用：文字是否符合（不分大小寫）"""
        return re.search(self.value, text or "", re.IGNORECASE) is not None

    def to_selenium(self) -> tuple[str, str]:
        """轉成 Selenium locator tuple"""
        if self.kind == "css":
            if self.nth is not None:
                raise ValueError("CSS locator 不支援 nth，請改用 XPath 類型")
            return By.CSS_SELECTOR, self.value

        builders = {
            "role": self._role_xpath,
            "label": self._label_xpath,
            "text": self._text_xpath,
            "pattern": lambda: _TEXT_CANDIDATES,
        }
        if self.kind not in builders:
            raise ValueError(f"不支援的 locator 類型: {self.kind}")

        xpath = builders[self.kind]()
        if self.nth is not None:
            xpath = f"({xpath})[{self.nth + 1}]"
        return By.XPATH, xpath

    def _role_xpath(self) -> str:
        role = self.value
        implicit = _IMPLICIT_ROLES.get(role)
        role_cond = f"@role={xpath_literal(role)}"
        if implicit:
            role_cond = f"{role_cond} or {implicit}"
        xpath = f"//*[{role_cond}]"
        if self.name is not None:
            name_cond = " or ".join(
                _text_matches(expr, self.name, self.exact)
                for expr in (".", "@aria-label", "@value", "@title")
            )
            xpath += f"[{name_cond}]"
        return xpath

    def _label_xpath(self) -> str:
        label = f"//label[{_text_matches('.', self.value, self.exact)}]"
        return " | ".join([
            f"//*[{_FORM_FIELD}][@id={label}/@for]",
            f"{label}//*[{_FORM_FIELD}]",
            f"//*[{_text_matches('@aria-label', self.value, self.exact)}]",
        ])

    def _text_xpath(self) -> str:
        cond = _text_matches(".", self.value, self.exact)
        # 最內層：自己符合但沒有子元素符合
        return (
            f"//body//*[not(self::script or self::style)][{cond}]"
            f"[not(*[{cond}])]"
        )

    def __str__(self) -> str:
        parts = [f"{self.kind}={self.value!r}"]
        if self.name is not None:
            parts.append(f"name={self.name!r}")
        if self.exact:
            parts.append("exact")
        if self.nth is not None:
            parts.append(f"nth={self.nth}")
        if self.frame:
            parts.append(f"frame={self.frame!r}")
        return f"<{' '.join(parts)}>"
