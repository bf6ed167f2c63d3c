"""Poll action package initialisation."""

from .background import configure_executor, run_async  # noqa: F401
from .config import AppSettings, get_settings  # noqa: F401
from .logging_config import configure_logging  # noqa: F401

__all__ = [
    "AppSettings",
    "configure_executor",
    "get_settings",
    "run_async",
    "configure_logging",
]
