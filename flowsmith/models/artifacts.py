"""Artifact models — the objects creators hand back to the factory.

The factory treats artifacts as opaque payloads.  These frozen Pydantic
models give creators a shared vocabulary; hosts are free to return
subclasses or entirely different objects.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Manager(BaseModel):
    """A workflow manager bound to a provider (typically a table name)."""

    model_config = ConfigDict(frozen=True)

    provider_name: str
    workflow_type: str | None = None
    workflows: list[str] = []


class Entity(BaseModel):
    """A workflow entity wrapping an underlying record."""

    model_config = ConfigDict(frozen=True)

    entity_id: str = Field(default_factory=lambda: f"ent-{uuid.uuid4().hex[:12]}")
    provider_name: str
    properties: dict[str, Any] = {}


class Form(BaseModel):
    model_config = ConfigDict(frozen=True)

    form_type: str
    fields: dict[str, Any] = {}


class User(BaseModel):
    """The acting user.

    ``User()`` is the default anonymous user the factory seeds every
    user request with.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = ""
    roles: list[str] = []

    @property
    def is_anonymous(self) -> bool:
        return not self.user_id

    def has_role(self, role: str) -> bool:
        return role in self.roles
