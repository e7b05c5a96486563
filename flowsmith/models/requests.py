"""Creation requests — one per artifact kind.

A request carries the caller's inputs (frozen after construction) and a
single private output slot.  Creators fill the slot; the factory reads it
once the broadcast has finished.  The slot can be overwritten but never
cleared.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from flowsmith.models.artifacts import Entity, Form, Manager, User


class RequestKind(str, Enum):
    """The four globally-unique request names."""

    MANAGER = "workflow.factory.create-manager"
    ENTITY = "workflow.factory.create-entity"
    FORM = "workflow.factory.create-form"
    USER = "workflow.factory.create-user"

    @property
    def alias(self) -> str:
        """Short name, e.g. ``"manager"``."""
        return self.name.lower()

    @classmethod
    def parse(cls, name: str | RequestKind) -> RequestKind:
        """Resolve a full request name or a short alias.

        Raises
        ------
        ValueError
            If *name* matches no kind.
        """
        if isinstance(name, cls):
            return name
        cleaned = name.strip()
        for kind in cls:
            if cleaned == kind.value or cleaned.lower() == kind.alias:
                return kind
        raise ValueError(
            f"Unknown request kind {name!r} — expected one of "
            + ", ".join(k.alias for k in cls)
        )


class CreationRequest(BaseModel):
    """Base class for all creation requests.

    Examples
    --------
    >>> request = CreateFormRequest(form_type="contact")
    >>> request.has_result
    False
    >>> request.set_result(Form(form_type="contact"))
    >>> request.form.form_type
    'contact'
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ClassVar[RequestKind]

    request_id: str = Field(default_factory=lambda: f"req-{uuid.uuid4().hex[:12]}")

    _result: Any = PrivateAttr(default=None)

    @property
    def result(self) -> Any:
        """The current slot value, ``None`` while unset."""
        return self._result

    @property
    def has_result(self) -> bool:
        return bool(self._result)

    def set_result(self, value: Any) -> None:
        """Fill the output slot, replacing any earlier value.

        Raises
        ------
        ValueError
            If *value* is empty (``None``, ``""``, ``0``, an empty
            container); the slot cannot be cleared.
        """
        if not value:
            raise ValueError(
                f"Cannot clear the result of {type(self).__name__} {self.request_id} "
                f"with {value!r}"
            )
        self._result = value


class CreateManagerRequest(CreationRequest):
    kind: ClassVar[RequestKind] = RequestKind.MANAGER

    provider_name: str
    workflow_type: str | None = None

    @property
    def manager(self) -> Manager | None:
        return self._result


class CreateEntityRequest(CreationRequest):
    """Asks for an entity wrapping *model*.

    ``provider_name`` is only a hint for creators that cannot derive it
    from the model itself.
    """

    kind: ClassVar[RequestKind] = RequestKind.ENTITY

    model: Any
    provider_name: str | None = None

    @property
    def entity(self) -> Entity | None:
        return self._result


class CreateFormRequest(CreationRequest):
    kind: ClassVar[RequestKind] = RequestKind.FORM

    form_type: str

    @property
    def form(self) -> Form | None:
        return self._result


class CreateUserRequest(CreationRequest):
    """User request with the slot pre-seeded.

    The slot starts out holding *user* (default ``User()``), so a user
    request always has a result even when no creator responds.
    """

    kind: ClassVar[RequestKind] = RequestKind.USER

    def __init__(self, user: User | None = None, **data: Any) -> None:
        super().__init__(**data)
        self._result = user if user is not None else User()

    @property
    def user(self) -> User:
        return self._result


REQUEST_TYPE_MAP: dict[RequestKind, type[CreationRequest]] = {
    RequestKind.MANAGER: CreateManagerRequest,
    RequestKind.ENTITY: CreateEntityRequest,
    RequestKind.FORM: CreateFormRequest,
    RequestKind.USER: CreateUserRequest,
}
