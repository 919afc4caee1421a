"""Application package exports."""

from .app import APP_VERSION, app, create_app
from .theme import ThemeApplier, build_tokens
from . import infrastructure, processing

__version__ = APP_VERSION

__all__ = [
    "APP_VERSION",
    "__version__",
    "app",
    "create_app",
    "ThemeApplier",
    "build_tokens",
    "infrastructure",
    "processing",
]
