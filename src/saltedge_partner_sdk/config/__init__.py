"""
Configuration management for Salt Edge Partner SDK
"""

from .settings import (
    ENV_VARS,
    SaltedgeSettings,
    SettingsErrorCodes,
)

__all__ = [
    'ENV_VARS',
    'SaltedgeSettings',
    'SettingsErrorCodes',
]
