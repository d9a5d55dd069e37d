"""Configuration management for docformatters."""

from docformatters.config.manager import ConfigManager
from docformatters.config.defaults import DEFAULT_CONFIG

__all__ = ["ConfigManager", "DEFAULT_CONFIG"]
