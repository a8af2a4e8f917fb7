"""Flatten YAML configuration files into a colon-keyed store."""

from __future__ import annotations

__version__ = "0.1.0"

from kvconf.core.errors import (
    ExitCode,
    KvConfError,
    MalformedDocumentError,
    SettingsError,
    SourceUnavailableError,
)
from kvconf.core.models import StoreSettings
from kvconf.core.store import ConfigStore

__all__ = [
    "ConfigStore",
    "ExitCode",
    "KvConfError",
    "MalformedDocumentError",
    "SettingsError",
    "SourceUnavailableError",
    "StoreSettings",
    "__version__",
]
