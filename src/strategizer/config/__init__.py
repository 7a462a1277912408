"""Configuration module using Pydantic Settings.

Usage:
    from strategizer.config import StrategizerSettings

    settings = StrategizerSettings(expansion_supply_threshold=24)
"""

from strategizer.config.settings import StrategizerSettings

__all__ = [
    "StrategizerSettings",
]
