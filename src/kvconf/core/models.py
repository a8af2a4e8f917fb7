from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


# ================================
# Store settings (defaults only)
# ================================

DEFAULT_NAMESPACE = "config"
DEFAULT_SEPARATOR = ":"


class StoreSettings(BaseModel):
    """
    Defaults live here.
    Global/repo/CLI overrides are merged by core/config.py.
    """

    namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1)
    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1, max_length=1)
    strict: bool = Field(
        default=False,
        description="Raise on unreadable or malformed YAML instead of keeping the previous/partial result.",
    )

    @field_validator("separator")
    @classmethod
    def _separator_not_blank(cls, v: str) -> str:
        if v.isspace():
            raise ValueError("separator must not be whitespace")
        return v

    @field_validator("namespace")
    @classmethod
    def _namespace_is_simple(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError("namespace must not contain whitespace")
        return v


# ================================
# CLI defaults
# ================================


class DefaultsConfig(BaseModel):
    """
    Fallback values applied with merge() after a load, as "key=value" pairs
    or a [defaults] table in the settings file.
    """

    values: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: List[str]) -> "DefaultsConfig":
        values: Dict[str, str] = {}
        for raw in pairs:
            if "=" not in raw:
                raise ValueError(f"expected KEY=VALUE, got {raw!r}")
            k, v = raw.split("=", 1)
            k = k.strip()
            if not k:
                raise ValueError(f"empty key in {raw!r}")
            values[k] = v
        return cls(values=values)
