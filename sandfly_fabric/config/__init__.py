"""
Configuration for sandfly-fabric.

Settings come from SANDFLY_* environment variables and are validated
into an AppSettings model.
"""

from .schemas import AppSettings
from .settings import REQUIRED_VARIABLES, load_settings

__all__ = [
    "AppSettings",
    "REQUIRED_VARIABLES",
    "load_settings",
]
