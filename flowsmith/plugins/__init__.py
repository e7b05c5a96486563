"""Flowsmith plugin loading — creators from specs and entry points."""

from flowsmith.plugins.loader import (
    CreatorLoader,
    CreatorLoadError,
    build_dispatcher,
    load_object,
    parse_creator_spec,
)

__all__ = [
    "CreatorLoader",
    "CreatorLoadError",
    "build_dispatcher",
    "load_object",
    "parse_creator_spec",
]
