"""Configurações centralizadas do emargement.

Uso típico:
    from emargement.config import get_settings
"""

from emargement.config.settings import (
    DEFAULT_START_TIME,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_START_TIME",
]
