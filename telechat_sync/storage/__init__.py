"""
Storage Layer.

This package handles configuration persistence.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
