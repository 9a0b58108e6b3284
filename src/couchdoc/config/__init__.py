"""Configuration system for couchdoc."""

from .models import EncodeOptions
from .settings import Settings, configure_logging, load_settings, settings

__all__ = ["EncodeOptions", "Settings", "configure_logging", "load_settings", "settings"]
