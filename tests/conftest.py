"""Shared test fixtures for Flowsmith."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from flowsmith.config import FactoryConfig
from flowsmith.core.dispatcher import CreationDispatcher
from flowsmith.core.factory import Factory


@pytest.fixture
def dispatcher() -> CreationDispatcher:
    """Provide an empty CreationDispatcher."""
    return CreationDispatcher()


@pytest.fixture
def factory(dispatcher: CreationDispatcher) -> Factory:
    """Provide a Factory wired to the test dispatcher."""
    return Factory(dispatcher)


@pytest.fixture
def isolated_config() -> FactoryConfig:
    """Config with no configured creators and no entry-point discovery."""
    return FactoryConfig(creators=[], discover_entry_points=False)


# ---------------------------------------------------------------------------
# Importable creator modules — shared across loader and CLI tests
# ---------------------------------------------------------------------------


@pytest.fixture
def make_creator_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[[str, str], str]:
    """Factory fixture: write a module on sys.path and return its name."""
    monkeypatch.syspath_prepend(str(tmp_path))

    def _factory(module_name: str, source: str) -> str:
        (tmp_path / f"{module_name}.py").write_text(
            textwrap.dedent(source), encoding="utf-8"
        )
        return module_name

    return _factory


CREATORS_SOURCE = """
from flowsmith.models.artifacts import Entity, Form, Manager, User


def create_manager(request):
    return Manager(provider_name=request.provider_name, workflow_type=request.workflow_type)


def create_entity(request):
    if isinstance(request.model, dict) and "id" in request.model:
        return Entity(
            entity_id=str(request.model["id"]),
            provider_name=request.provider_name or "unknown",
            properties=request.model,
        )
    return None


def create_form(request):
    if request.form_type == "contact":
        return Form(form_type="contact", fields={"email": "string"})
    return None


def create_admin(request):
    return User(user_id="admin", roles=["admin"])


class Creators:
    def skip(request):
        return None


NOT_CALLABLE = 42
"""


@pytest.fixture
def creators_module(make_creator_module: Callable[[str, str], str]) -> str:
    """A ready-made creator module; returns its import name."""
    return make_creator_module("flowsmith_test_creators", CREATORS_SOURCE)
