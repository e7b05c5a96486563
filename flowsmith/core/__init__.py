"""Flowsmith core — the factory and the dispatcher it broadcasts through."""

from flowsmith.core.dispatcher import CreationDispatcher, Creator, EventDispatcher
from flowsmith.core.factory import CreationFailed, Factory

__all__ = [
    "Factory",
    "CreationFailed",
    "CreationDispatcher",
    "EventDispatcher",
    "Creator",
]
