"""
Environment Manager — 依環境切換目標網站

同一組 scenario 可以對 dev / staging 等不同網站執行，
每個環境只需要在 config/env/{env}.json 寫出和 base.json 不同的部分。

設定層 (後者覆蓋前者)：
    1. 程式碼內建預設值
    2. config/env/base.json
    3. config/env/{env_name}.json
    4. 環境變數 (key 轉大寫、"." 換成 "_"，例如 api.login_url → API_LOGIN_URL)

用法：
    from core.env_manager import env

    env.switch("staging")            # 或 TEST_ENV=staging / pytest --env staging
    env.get("api.login_url")
    env.site_parameters()            → {"base_url": ..., "home_url": ..., "api_login_url": ...}
"""

from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from urllib.parse import urlparse

from core.exceptions import InvalidConfigError
from utils.logger import logger

_ENV_DIR = Path(__file__).resolve().parent.parent / "config" / "env"

_DEFAULTS = {
    "base_url": "https://www.hudl.com/",
    "home_url": "https://www.hudl.com/home",
    "api": {
        "login_url": "https://example.com/api/login",
    },
    "screenshot_on_fail": True,
}

# 參數名稱 → 設定 key；scenario 樣板以左邊的名稱引用
SITE_KEYS = {
    "base_url": "base_url",
    "home_url": "home_url",
    "api_login_url": "api.login_url",
}


def _deep_merge(base: dict, override: dict) -> dict:
    """回傳合併後的新 dict，巢狀 dict 逐層合併"""
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


class EnvManager:
    """多環境設定，第一次讀取時才載入"""

    def __init__(self, env_dir: Path | None = None):
        self._env_name: str = os.getenv("TEST_ENV", "dev")
        self._env_dir = Path(env_dir) if env_dir else _ENV_DIR
        self._config: dict | None = None

    @property
    def env_name(self) -> str:
        return self._env_name

    def switch(self, env_name: str) -> None:
        logger.info(f"切換環境: {self._env_name} -> {env_name}")
        self._env_name = env_name
        self._config = self._load()

    def get(self, key: str, default=None):
        """dot notation 讀取，環境變數優先"""
        env_val = os.getenv(key.upper().replace(".", "_"))
        if env_val is not None:
            return self._cast(env_val)

        value = self._settings()
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def get_all(self) -> dict:
        return deepcopy(self._settings())

    def site_parameters(self) -> dict[str, str]:
        """scenario 需要的網站 URL，任何一個不是 http(s) URL 就拋出 InvalidConfigError"""
        urls = {}
        for name, key in SITE_KEYS.items():
            value = self.get(key)
            parsed = urlparse(str(value or ""))
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise InvalidConfigError(key, value, "必須是 http(s) URL")
            urls[name] = str(value)
        return urls

    # ── 載入 ──

    def _settings(self) -> dict:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> dict:
        config = deepcopy(_DEFAULTS)
        for layer in ("base", self._env_name):
            path = self._env_dir / f"{layer}.json"
            if path.exists():
                config = _deep_merge(config, self._read_layer(path))
            elif layer not in ("base", "dev"):
                logger.warning(f"找不到環境設定檔: {path}，只使用基底設定")
        logger.debug(f"環境設定已載入: {self._env_name}")
        return config

    @staticmethod
    def _read_layer(path: Path) -> dict:
        """讀取 JSON 設定檔，略過 "_" 開頭的註解欄位"""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return {k: v for k, v in data.items() if not k.startswith("_")}

    @staticmethod
    def _cast(value: str):
        """環境變數字串轉成 bool / int / float，其他維持字串"""
        lowered = value.strip().lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False
        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                continue
        return value


# 全域 singleton
env = EnvManager()
