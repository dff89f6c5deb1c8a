from utils.logger import setup_logging, log_debug, log_info, log_success, log_warning, log_error
from utils.platform import PendingCalls, is_mac, launch_web_url

__all__ = [
    "setup_logging",
    "log_debug",
    "log_info",
    "log_success",
    "log_warning",
    "log_error",
    "is_mac",
    "launch_web_url",
    "PendingCalls",
]
