"""Configuration management for webterm.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides such as the sandbox root.
"""

from webterm.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
