"""Configuration module."""
from .settings import AppSettings, InsightThresholds, get_settings

__all__ = ["AppSettings", "InsightThresholds", "get_settings"]
