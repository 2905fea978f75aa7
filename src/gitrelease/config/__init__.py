"""
Configuration loading for gitrelease.

Settings are read from environment variables. See
:mod:`gitrelease.config.loader` for the recognised variables.
"""

from .loader import ConfigError, load_config  # noqa: F401
