"""Creator loader — resolves creator references and registers them.

Two sources are supported:

* creator specs of the form ``<kind>=<module>:<attr>``, where ``<kind>``
  is a request name or alias (``manager``, ``entity``, ``form``,
  ``user``) and ``<attr>`` may be a dotted path inside the module;
* installed package entry points in the ``flowsmith.creators`` group,
  whose entry-point *name* is the kind alias::

      [project.entry-points."flowsmith.creators"]
      manager = "myapp.workflow:create_manager"
"""

from __future__ import annotations

import importlib
import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Any

from flowsmith.core.dispatcher import CreationDispatcher, Creator
from flowsmith.models.requests import RequestKind

if TYPE_CHECKING:
    from flowsmith.config import FactoryConfig

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_POINT_GROUP = "flowsmith.creators"


class CreatorLoadError(RuntimeError):
    """Raised when a creator reference cannot be resolved."""


def load_object(reference: str) -> Any:
    """Import ``module:attr`` (``attr`` may be dotted) and return the object.

    Raises
    ------
    CreatorLoadError
        If the reference is malformed, the module cannot be imported, or
        the attribute does not exist.
    """
    module_name, sep, attr_path = reference.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise CreatorLoadError(
            f"Invalid reference {reference!r} — expected 'module:attr'"
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise CreatorLoadError(f"Cannot import module {module_name!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise CreatorLoadError(
                f"Module {module_name!r} has no attribute {attr_path!r}"
            ) from exc
    return obj


def parse_creator_spec(spec: str) -> tuple[RequestKind, str]:
    """Split ``kind=module:attr`` into its request kind and reference."""
    kind_name, sep, reference = spec.partition("=")
    if not sep or not reference.strip():
        raise CreatorLoadError(
            f"Invalid creator spec {spec!r} — expected 'kind=module:attr'"
        )
    try:
        kind = RequestKind.parse(kind_name)
    except ValueError as exc:
        raise CreatorLoadError(str(exc)) from exc
    return kind, reference.strip()


class CreatorLoader:
    """Loads creators and registers them on a dispatcher.

    Parameters
    ----------
    dispatcher:
        The dispatcher that receives every loaded creator.
    """

    def __init__(self, dispatcher: CreationDispatcher) -> None:
        self._dispatcher = dispatcher

    def load_spec(self, spec: str) -> Creator:
        """Resolve a ``kind=module:attr`` spec and register the creator."""
        kind, reference = parse_creator_spec(spec)
        creator = load_object(reference)
        if not callable(creator):
            raise CreatorLoadError(
                f"Creator {reference!r} is not callable ({type(creator).__name__})"
            )
        self._dispatcher.register(kind, creator)
        return creator

    def load_all(self, specs: list[str]) -> int:
        """Register every spec in order; returns the number loaded."""
        for spec in specs:
            self.load_spec(spec)
        return len(specs)

    def discover(self, group: str = DEFAULT_ENTRY_POINT_GROUP) -> int:
        """Register every installed entry point in *group*.

        Entry points are registered in name order so that the resulting
        creator order does not depend on installation order.
        """
        found = sorted(entry_points(group=group), key=lambda ep: (ep.name, ep.value))
        for ep in found:
            self.load_spec(f"{ep.name}={ep.value}")
        if found:
            logger.info("Discovered %d creator(s) in entry-point group %s", len(found), group)
        return len(found)


def build_dispatcher(config: FactoryConfig | None = None) -> CreationDispatcher:
    """Create a dispatcher populated from *config* (default: module config)."""
    if config is None:
        from flowsmith.config import config as default_config

        config = default_config

    dispatcher = CreationDispatcher()
    loader = CreatorLoader(dispatcher)
    loader.load_all(config.creators)
    if config.discover_entry_points:
        loader.discover(config.entry_point_group)
    return dispatcher
