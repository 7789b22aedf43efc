"""
Environment loading for sandfly-fabric.

Required:
    SANDFLY_HOST      Sandfly server URL (e.g. https://10.88.140.176)
    SANDFLY_USERNAME  API username
    SANDFLY_PASSWORD  API password

Optional:
    SANDFLY_VERIFY_SSL  "false" skips TLS verification for this client (default: true)
    SANDFLY_TIMEOUT     Per-request deadline in seconds (default: 30)
    SANDFLY_LOG_LEVEL   Logging level (default: INFO)
    SANDFLY_LOG_REQUESTS   "true" logs each outgoing request at DEBUG (default: false)
    SANDFLY_LOG_RESPONSES  "true" logs each response status and body at DEBUG (default: false)
    SANDFLY_HTTP_HOST   Bind address for the HTTP transport (default: 127.0.0.1)
    SANDFLY_HTTP_PORT   Port for the HTTP transport (default: 8000)
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import ValidationError

from sandfly_fabric.config.schemas import AppSettings
from sandfly_fabric.integrations.base import ConfigurationError

REQUIRED_VARIABLES = ("SANDFLY_HOST", "SANDFLY_USERNAME", "SANDFLY_PASSWORD")

_FALSE_VALUES = {"false", "0", "no", "off"}


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


def load_settings(environ: Mapping[str, str] | None = None) -> AppSettings:
    """
    Read settings from the environment.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]
    if missing:
        raise ConfigurationError(f"{', '.join(missing)} required")

    try:
        return AppSettings(
            sandfly_host=env["SANDFLY_HOST"],
            sandfly_username=env["SANDFLY_USERNAME"],
            sandfly_password=env["SANDFLY_PASSWORD"],
            verify_ssl=_flag(env.get("SANDFLY_VERIFY_SSL"), True),
            request_timeout=env.get("SANDFLY_TIMEOUT", "30"),
            log_level=env.get("SANDFLY_LOG_LEVEL", "INFO"),
            log_requests=_flag(env.get("SANDFLY_LOG_REQUESTS"), False),
            log_responses=_flag(env.get("SANDFLY_LOG_RESPONSES"), False),
            http_host=env.get("SANDFLY_HTTP_HOST", "127.0.0.1"),
            http_port=env.get("SANDFLY_HTTP_PORT", "8000"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
