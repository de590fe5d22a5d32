"""Configuration: environment-driven settings for the logging facade."""

from .settings import CorrelationSettings, LogSettings, TracelogSettings, clear_settings_cache, get_settings

__all__ = [
    "CorrelationSettings",
    "LogSettings",
    "TracelogSettings",
    "clear_settings_cache",
    "get_settings",
]
