"""Configuration module."""

from stdmeta.config.settings import AppSettings, clear_settings_cache, get_settings

__all__ = ["AppSettings", "clear_settings_cache", "get_settings"]
