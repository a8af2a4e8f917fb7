from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    NOT_FOUND = 1
    ERROR = 2


class KvConfError(Exception):
    """Base error for kvconf."""


class SourceUnavailableError(KvConfError):
    """The YAML source could not be opened."""


class MalformedDocumentError(KvConfError):
    """The YAML event stream reported a parse error (strict mode only)."""


class SettingsError(KvConfError):
    """A settings file is unreadable or invalid."""
