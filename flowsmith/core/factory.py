"""Factory — creates workflow artifacts by broadcasting creation requests.

The factory never builds artifacts itself.  Each ``create_*`` call builds
a fresh request, hands it to the injected dispatcher, and then checks that
some creator filled the output slot.  Only ``create_user`` skips the check:
its request is seeded with a default user and cannot come back empty.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from flowsmith.models.artifacts import Entity, Form, Manager, User
from flowsmith.models.requests import (
    CreateEntityRequest,
    CreateFormRequest,
    CreateManagerRequest,
    CreateUserRequest,
    CreationRequest,
    RequestKind,
)

if TYPE_CHECKING:
    from flowsmith.config import FactoryConfig
    from flowsmith.core.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class CreationFailed(RuntimeError):
    """Raised when no creator produced an artifact for a guarded request.

    Attributes
    ----------
    request_kind:
        The kind of the request that came back empty.
    context:
        The identifying inputs of that request.
    """

    def __init__(
        self,
        message: str,
        *,
        request_kind: RequestKind | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.request_kind = request_kind
        self.context = context or {}


class Factory:
    """Dispatches creation requests that creators subscribe to.

    Parameters
    ----------
    event_dispatcher:
        Shared dispatcher; the factory keeps a reference and nothing else.

    Examples
    --------
    >>> dispatcher = CreationDispatcher()
    >>> dispatcher.register(RequestKind.FORM, lambda r: Form(form_type=r.form_type))
    >>> Factory(dispatcher).create_form("contact").form_type
    'contact'
    """

    def __init__(self, event_dispatcher: EventDispatcher) -> None:
        self._event_dispatcher = event_dispatcher

    @classmethod
    def from_config(cls, config: FactoryConfig | None = None) -> Factory:
        """Build a factory over a dispatcher loaded from *config*."""
        from flowsmith.plugins.loader import build_dispatcher

        return cls(build_dispatcher(config))

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._event_dispatcher

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_manager(
        self, provider_name: str, workflow_type: str | None = None
    ) -> Manager:
        """Create a workflow manager.

        Parameters
        ----------
        provider_name:
            The provider name, typically a database table name.
        workflow_type:
            Optional workflow type limitation passed on to the creators.

        Raises
        ------
        CreationFailed
            If no creator produced a manager.
        """
        request = CreateManagerRequest(
            provider_name=provider_name, workflow_type=workflow_type
        )
        return self._guard_created(
            self._broadcast(request),
            f'Could not create manager for provider "{provider_name}" '
            f'and type "{workflow_type or ""}"',
            request_kind=request.kind,
            context={"provider_name": provider_name, "workflow_type": workflow_type},
        )

    def create_entity(self, model: Any, provider_name: str | None = None) -> Entity:
        """Create a workflow entity for *model*.

        Parameters
        ----------
        model:
            The underlying record, of any type.
        provider_name:
            Provider name for creators that cannot derive it from *model*.

        Raises
        ------
        CreationFailed
            If no creator produced an entity.
        """
        request = CreateEntityRequest(model=model, provider_name=provider_name)
        model_type = type(model).__name__
        return self._guard_created(
            self._broadcast(request),
            f'Could not create entity for model "{model_type} ({provider_name or ""})"',
            request_kind=request.kind,
            context={"model_type": model_type, "provider_name": provider_name},
        )

    def create_form(self, form_type: str) -> Form:
        """Create a form of *form_type*.

        Raises
        ------
        CreationFailed
            If no creator produced a form.
        """
        request = CreateFormRequest(form_type=form_type)
        return self._guard_created(
            self._broadcast(request),
            f'Could not create form type "{form_type}"',
            request_kind=request.kind,
            context={"form_type": form_type},
        )

    def create_user(self) -> User:
        """Create the acting user.

        The request starts out holding ``User()``; if no creator replaces
        it, that default is returned.  This operation never raises
        ``CreationFailed``.
        """
        return self._broadcast(CreateUserRequest())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _broadcast(self, request: CreationRequest) -> Any:
        logger.debug("Dispatching %s (request %s)", request.kind.value, request.request_id)
        self._event_dispatcher.dispatch(request.kind.value, request)
        return request.result

    @staticmethod
    def _guard_created(
        result: Any,
        message: str,
        *,
        request_kind: RequestKind | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        """Return *result* unchanged, or raise ``CreationFailed`` if it is empty."""
        if not result:
            raise CreationFailed(message, request_kind=request_kind, context=context)
        return result
