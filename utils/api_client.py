"""
API Client 工具
API 登入類 scenario 使用：直接對登入端點送出 JSON，再檢查回應。
"""

import requests

from utils.logger import logger


class ApiClient:
    """簡易 REST API 客戶端"""

    def __init__(self, base_url: str, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def url_for(self, path: str) -> str:
        """path 為空時直接使用 base_url"""
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    def post(self, path: str, json_data: dict | None = None) -> requests.Response:
        url = self.url_for(path)
        logger.info(f"[API] POST {url}")
        resp = self.session.post(url, json=json_data, timeout=self.timeout)
        logger.info(f"[API] Status: {resp.status_code}")
        return resp
