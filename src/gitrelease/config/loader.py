"""
Configuration loader for gitrelease.

The tool is configured through environment variables:

- ``GITHUB_TOKEN`` (required): token used to publish releases.
- ``GITRELEASE_API_URL`` (optional): base URL of the GitHub API,
  defaults to ``https://api.github.com``.
- ``GITRELEASE_TIMEOUT`` (optional): HTTP timeout in seconds.

Missing or invalid values raise a :class:`ConfigError`.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

from gitrelease.github.release_client import DEFAULT_API_URL, DEFAULT_TIMEOUT


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where the root logger is not configured. The CLI configures logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


TOKEN_VAR = "GITHUB_TOKEN"
API_URL_VAR = "GITRELEASE_API_URL"
TIMEOUT_VAR = "GITRELEASE_TIMEOUT"


class ConfigError(Exception):
    """Raised when the environment does not hold a usable configuration."""

    pass


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load and validate the configuration from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        A dictionary with keys:
        - token (str): The API token
        - api_url (str): The API base URL, without a trailing slash
        - request_timeout (float): HTTP timeout in seconds

    Raises:
        ConfigError: If the token is missing or an optional value is invalid.
    """
    env = os.environ if environ is None else environ

    token = env.get(TOKEN_VAR, "").strip()
    if not token:
        logger.error("Environment variable %s is not set", TOKEN_VAR)
        raise ConfigError(f"please export {TOKEN_VAR}")

    api_url = env.get(API_URL_VAR, "").strip() or DEFAULT_API_URL
    if not api_url.startswith(("http://", "https://")):
        raise ConfigError(f"'{API_URL_VAR}' must be an http(s) URL, got {api_url!r}")

    raw_timeout = env.get(TIMEOUT_VAR, "").strip()
    request_timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            request_timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigError(f"'{TIMEOUT_VAR}' must be a number, got {raw_timeout!r}") from exc
        if request_timeout <= 0:
            raise ConfigError(f"'{TIMEOUT_VAR}' must be positive, got {raw_timeout!r}")

    config = {
        "token": token,
        "api_url": api_url.rstrip("/"),
        "request_timeout": request_timeout,
    }
    logger.debug("Loaded configuration: api_url=%s, timeout=%s", config["api_url"], request_timeout)
    return config
