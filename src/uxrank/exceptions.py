"""Custom exception hierarchy for uxrank."""

__all__ = [
    "ConfigError",
    "ConvertError",
    "DataError",
    "RenderError",
    "UxrankError",
]


class UxrankError(Exception):
    """Base exception for all uxrank errors."""


class ConfigError(UxrankError):
    """Raised when configuration loading or validation fails."""


class DataError(UxrankError):
    """Raised when a collection or reasoning file cannot be loaded."""


class RenderError(UxrankError):
    """Raised when a recommendation template cannot be rendered."""


class ConvertError(UxrankError):
    """Raised when CSV import fails."""
