"""Exception hierarchy for Qube."""

from .base import QubeError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
)

__all__ = [
    "QubeError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
]
