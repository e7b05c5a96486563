"""CreationDispatcher — routes creation requests to registered creators.

Creators are plain callables keyed by request name.  Every creator for a
name is called, synchronously and in registration order, with the
request.  A non-empty return value is written into the request's
output slot, so the last creator that answers wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

from flowsmith.models.requests import RequestKind

if TYPE_CHECKING:
    from flowsmith.models.requests import CreationRequest

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class EventDispatcher(Protocol):
    """Protocol the factory dispatches through.

    Any object with a ``dispatch(request_name, request)`` method satisfies
    it; ``CreationDispatcher`` is the bundled implementation.
    """

    def dispatch(self, request_name: str, request: CreationRequest) -> None:
        """Deliver *request* to every listener registered for *request_name*.

        Must not return before all listeners have run.
        """
        ...


@runtime_checkable
class Creator(Protocol):
    """Protocol for creators.

    A creator returns the artifact it built, or ``None`` when the request
    is not one it handles.  It may also fill the slot itself with
    ``request.set_result`` and return ``None``.  Creators must not raise
    for "not applicable".
    """

    def __call__(self, request: CreationRequest) -> Any | None:
        ...


def _key(request_name: str | RequestKind) -> str:
    if isinstance(request_name, RequestKind):
        return request_name.value
    return request_name


def creator_name(creator: Creator, *, qualified: bool = True) -> str:
    """Human-readable name for a creator, used in logs and the CLI."""
    name = getattr(creator, "__qualname__", None) or type(creator).__qualname__
    module = getattr(creator, "__module__", None)
    return f"{module}.{name}" if qualified and module else name


class CreationDispatcher:
    """In-process dispatcher holding creators per request name.

    Usage
    -----
    >>> dispatcher = CreationDispatcher()
    >>> @dispatcher.creator(RequestKind.FORM)
    ... def contact_form(request):
    ...     if request.form_type == "contact":
    ...         return Form(form_type="contact")
    >>> request = CreateFormRequest(form_type="contact")
    >>> dispatcher.dispatch(RequestKind.FORM.value, request)
    >>> request.form.form_type
    'contact'
    """

    def __init__(self) -> None:
        self._creators: dict[str, list[Creator]] = {}

    # ------------------------------------------------------------------
    # Creator management
    # ------------------------------------------------------------------

    def register(self, request_name: str | RequestKind, creator: Creator) -> None:
        """Register *creator* for *request_name*.

        Creators are called in registration order.  Registering the same
        creator twice for one name is silently ignored.
        """
        if not callable(creator):
            raise TypeError(f"Creator must be callable, got {type(creator).__name__}")
        creators = self._creators.setdefault(_key(request_name), [])
        if creator not in creators:
            creators.append(creator)
            logger.info(
                "Registered creator %s for %s", creator_name(creator), _key(request_name)
            )

    def creator(
        self, request_name: str | RequestKind
    ) -> Callable[[Creator], Creator]:
        """Decorator form of :meth:`register`."""

        def decorator(func: Creator) -> Creator:
            self.register(request_name, func)
            return func

        return decorator

    def unregister(self, request_name: str | RequestKind, creator: Creator) -> bool:
        """Remove a previously registered creator.

        Returns ``True`` if it was found.
        """
        creators = self._creators.get(_key(request_name), [])
        try:
            creators.remove(creator)
        except ValueError:
            return False
        logger.info(
            "Unregistered creator %s for %s", creator_name(creator), _key(request_name)
        )
        return True

    def creators_for(self, request_name: str | RequestKind) -> list[Creator]:
        """Return a copy of the creators for *request_name*, in call order."""
        return list(self._creators.get(_key(request_name), []))

    def registered_names(self) -> list[str]:
        """Request names with at least one creator, sorted."""
        return sorted(name for name, creators in self._creators.items() if creators)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, request_name: str, request: CreationRequest) -> None:
        """Broadcast *request* to every creator registered for *request_name*.

        Empty return values count as declining and never touch the slot.
        Exceptions raised by a creator propagate to the caller; creators
        after the failing one are not called.
        """
        creators = self.creators_for(request_name)
        if not creators:
            logger.debug(
                "No creators registered for %s (request %s)",
                _key(request_name),
                request.request_id,
            )
            return

        for creator in creators:
            value = creator(request)
            if value:
                logger.debug(
                    "Creator %s answered %s (request %s)",
                    creator_name(creator),
                    _key(request_name),
                    request.request_id,
                )
                request.set_result(value)
