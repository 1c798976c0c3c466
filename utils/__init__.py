from utils.logger import logger, scenario_logger
from utils.screenshot import take_screenshot
from utils.api_client import ApiClient

__all__ = [
    "logger",
    "scenario_logger",
    "take_screenshot",
    "ApiClient",
]
