"""Flowsmith: event-dispatched creation of workflow artifacts.

Callers ask the ``Factory`` for a manager, entity, form or user; the
factory broadcasts a creation request and registered creators supply the
concrete instance.
"""

__version__ = "0.1.0"
__description__ = "Event-dispatched workflow artifact factory"

from flowsmith.core.dispatcher import CreationDispatcher, Creator, EventDispatcher
from flowsmith.core.factory import CreationFailed, Factory
from flowsmith.models.artifacts import Entity, Form, Manager, User
from flowsmith.models.requests import RequestKind

__all__ = [
    "Factory",
    "CreationFailed",
    "CreationDispatcher",
    "EventDispatcher",
    "Creator",
    "RequestKind",
    "Manager",
    "Entity",
    "Form",
    "User",
    "__version__",
]
