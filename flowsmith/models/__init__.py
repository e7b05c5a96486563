"""Flowsmith data models — all Pydantic v2, all frozen."""

from flowsmith.models.artifacts import Entity, Form, Manager, User
from flowsmith.models.requests import (
    REQUEST_TYPE_MAP,
    CreateEntityRequest,
    CreateFormRequest,
    CreateManagerRequest,
    CreateUserRequest,
    CreationRequest,
    RequestKind,
)

__all__ = [
    # artifacts
    "Manager",
    "Entity",
    "Form",
    "User",
    # requests
    "RequestKind",
    "CreationRequest",
    "CreateManagerRequest",
    "CreateEntityRequest",
    "CreateFormRequest",
    "CreateUserRequest",
    "REQUEST_TYPE_MAP",
]
