"""Configuration module using Pydantic Settings.

Usage:
    from colonytasks.config import ColonySettings

    settings = ColonySettings(max_population=8)
"""

from colonytasks.config.settings import ColonySettings

__all__ = [
    "ColonySettings",
]
