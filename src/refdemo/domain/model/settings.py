"""Global properties: platform-wide key/value settings."""

from __future__ import annotations

from dataclasses import dataclass

from .entity import Entity


@dataclass(eq=False, kw_only=True)
class GlobalProperty(Entity):
    name: str
    value: str | None = None
    description: str | None = None
