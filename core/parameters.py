"""
Flow 參數

把帳號、密碼、顯示名稱等外部提供的字串集中成一個唯讀物件，
在 run 開始時建立一次，傳給每個 scenario，執行期間不會被修改。

步驟中的文字可以寫成 "{display_name}" 這種樣板，
執行時透過 Parameters.resolve() 代入；缺少的參數會拋出 ResolutionError。

用法：
    from core.parameters import Parameters

    params = Parameters.from_env()
    params.resolve("Hi {display_name}")     → "Hi Jane Doe"
    params.with_overrides(password="x")     → 新的 Parameters
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from string import Formatter
from types import MappingProxyType

from core.exceptions import ResolutionError

# 邏輯名稱 → (環境變數, 預設值)
ENV_SOURCES: dict[str, tuple[str, str]] = {
    "email": ("LOGIN_EMAIL", "YOUR_EMAIL"),
    "password": ("LOGIN_PASSWORD", "YOUR_PASSWORD"),
    "display_name": ("LOGIN_DISPLAY_NAME", "USER_DISPLAY_NAME"),
    "initials": ("LOGIN_INITIALS", "USER_INITIALS"),
}

# 不從環境變數讀取的固定值
LITERALS: dict[str, str] = {
    "invalid_password": "invalid_password",
    "first_name": "TestFirstName",
    "last_name": "TestLastName",
}

_formatter = Formatter()


class Parameters(Mapping):
    """唯讀的參數表"""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None,
                 extra: Mapping[str, str] | None = None) -> "Parameters":
        """從環境變數建立，未設定時使用預設字串；extra 為網站 URL 等附加值"""
        environ = os.environ if environ is None else environ
        values = dict(LITERALS)
        values.update(extra or {})
        for name, (env_key, fallback) in ENV_SOURCES.items():
            values[name] = environ.get(env_key) or fallback
        return cls(values)

    def with_overrides(self, **overrides: str) -> "Parameters":
        """回傳覆寫部分值的新物件（本身不變）"""
        merged = dict(self._values)
        merged.update(overrides)
        return Parameters(merged)

    def resolve(self, template: str) -> str:
        """代入 {name} 樣板；樣板以外的文字原樣保留"""
        parts = []
        for literal, field, spec, conversion in _formatter.parse(template):
            parts.append(literal)
            if field is None:
                continue
            if field not in self._values:
                raise ResolutionError(field, template)
            parts.append(self._values[field])
        return "".join(parts)

    def placeholders(self, template: str) -> list[str]:
        """列出樣板引用的參數名稱"""
        return [f for _, f, _, _ in _formatter.parse(template) if f is not None]

    # ── Mapping 介面 ──

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        masked = {
            k: ("***" if "password" in k else v) for k, v in self._values.items()
        }
        return f"Parameters({masked})"
