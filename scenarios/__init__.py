"""
scenarios — 登入流程 scenario 表

用法：
    from scenarios import registry, build_parameters

    params = build_parameters()
    for scenario in registry:
        ...
"""

from core.env_manager import env
from core.parameters import Parameters
from core.scenario import registry
from scenarios import login_flows  # noqa: F401  import 時註冊 scenario


def build_parameters(environ=None) -> Parameters:
    """環境變數中的帳密 + 目前環境設定的網站 URL"""
    return Parameters.from_env(environ, extra=env.site_parameters())


__all__ = ["registry", "build_parameters"]
