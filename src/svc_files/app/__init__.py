from .core.env import Env, get_env, pick
from .core.logging import JsonFormatter, setup_logging
from .settings import AppSettings, get_app_settings

__all__ = [
    "Env",
    "get_env",
    "pick",
    "JsonFormatter",
    "setup_logging",
    "AppSettings",
    "get_app_settings",
]
