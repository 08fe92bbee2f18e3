"""
Configuration management module.
"""

from .settings import ClientConfig, Settings, get_settings, set_settings

__all__ = [
    'ClientConfig',
    'Settings',
    'get_settings',
    'set_settings',
]
