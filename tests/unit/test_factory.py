"""Tests for Factory — broadcast, guard, and the seeded user request."""

from __future__ import annotations

import logging

import pytest

from flowsmith.config import FactoryConfig
from flowsmith.core.dispatcher import CreationDispatcher
from flowsmith.core.factory import CreationFailed, Factory
from flowsmith.models.artifacts import Entity, Form, Manager, User
from flowsmith.models.requests import (
    CreateEntityRequest,
    CreateManagerRequest,
    CreateUserRequest,
    RequestKind,
)


class RecordingDispatcher:
    """Minimal host dispatcher: records calls, optionally answers."""

    def __init__(self, answer=None):
        self.calls = []
        self.answer = answer

    def dispatch(self, request_name, request):
        self.calls.append((request_name, request))
        if self.answer is not None:
            request.set_result(self.answer)


class TestCreateManager:
    """Managers come from creators; an unanswered request must raise."""

    def test_returns_creator_value(self, dispatcher: CreationDispatcher, factory: Factory):
        manager = Manager(provider_name="tl_page", workflow_type="article")
        dispatcher.register(RequestKind.MANAGER, lambda r: manager)
        assert factory.create_manager("tl_page", "article") is manager

    def test_request_carries_inputs(self, dispatcher: CreationDispatcher, factory: Factory):
        seen = []

        def creator(request):
            seen.append(request)
            return Manager(provider_name=request.provider_name)

        dispatcher.register(RequestKind.MANAGER, creator)
        factory.create_manager("tl_page", "article")
        assert isinstance(seen[0], CreateManagerRequest)
        assert seen[0].provider_name == "tl_page"
        assert seen[0].workflow_type == "article"

    def test_no_creator_raises(self, factory: Factory):
        with pytest.raises(CreationFailed) as excinfo:
            factory.create_manager("tl_page", None)
        assert "tl_page" in str(excinfo.value)
        assert excinfo.value.request_kind is RequestKind.MANAGER
        assert excinfo.value.context == {"provider_name": "tl_page", "workflow_type": None}

    def test_message_contains_provider_and_type(self, factory: Factory):
        with pytest.raises(CreationFailed) as excinfo:
            factory.create_manager("tl_news", "approval")
        message = str(excinfo.value)
        assert message == (
            'Could not create manager for provider "tl_news" and type "approval"'
        )

    def test_declining_creator_raises(self, dispatcher: CreationDispatcher, factory: Factory):
        dispatcher.register(RequestKind.MANAGER, lambda r: None)
        with pytest.raises(CreationFailed):
            factory.create_manager("tl_page")

    def test_last_creator_wins(self, dispatcher: CreationDispatcher, factory: Factory):
        dispatcher.register(RequestKind.MANAGER, lambda r: Manager(provider_name="1"))
        dispatcher.register(RequestKind.MANAGER, lambda r: Manager(provider_name="2"))
        assert factory.create_manager("tl_page") == Manager(provider_name="2")

    def test_falsy_result_is_rejected(self, dispatcher: CreationDispatcher, factory: Factory):
        dispatcher.register(RequestKind.MANAGER, lambda r: "")
        with pytest.raises(CreationFailed):
            factory.create_manager("tl_page")

    def test_creation_failed_is_runtime_error(self, factory: Factory):
        with pytest.raises(RuntimeError):
            factory.create_manager("tl_page")

    def test_failure_is_raised_not_logged(
        self, factory: Factory, caplog: pytest.LogCaptureFixture
    ):
        with caplog.at_level(logging.DEBUG, logger="flowsmith"):
            with pytest.raises(CreationFailed):
                factory.create_manager("tl_page", "article")
        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []
        assert not any("Could not create" in r.getMessage() for r in caplog.records)


class TestCreateEntity:
    """Entity failures must name the model type and provider."""

    def test_returns_creator_value(self, dispatcher: CreationDispatcher, factory: Factory):
        def creator(request):
            return Entity(
                entity_id=str(request.model["id"]),
                provider_name=request.provider_name,
                properties=request.model,
            )

        dispatcher.register(RequestKind.ENTITY, creator)
        entity = factory.create_entity({"id": 7, "title": "Home"}, "tl_page")
        assert entity.entity_id == "7"
        assert entity.properties["title"] == "Home"

    def test_model_passed_by_identity(self, dispatcher: CreationDispatcher, factory: Factory):
        model = object()
        seen = []

        def creator(request):
            seen.append(request)
            return Entity(provider_name="tl_page")

        dispatcher.register(RequestKind.ENTITY, creator)
        factory.create_entity(model)
        assert isinstance(seen[0], CreateEntityRequest)
        assert seen[0].model is model
        assert seen[0].provider_name is None

    def test_message_contains_model_type_and_provider(self, factory: Factory):
        with pytest.raises(CreationFailed) as excinfo:
            factory.create_entity({"id": 1}, "tl_page")
        message = str(excinfo.value)
        assert "dict" in message
        assert "tl_page" in message
        assert excinfo.value.context["model_type"] == "dict"

    def test_message_uses_class_name_of_model(self, factory: Factory):
        class PageModel:
            pass

        with pytest.raises(CreationFailed, match="PageModel"):
            factory.create_entity(PageModel())


class TestCreateForm:
    """Forms come from creators; unknown types must raise."""

    def test_returns_creator_value(self, dispatcher: CreationDispatcher, factory: Factory):
        form = Form(form_type="contact")
        dispatcher.register(
            RequestKind.FORM, lambda r: form if r.form_type == "contact" else None
        )
        assert factory.create_form("contact") is form

    def test_unknown_type_raises(self, dispatcher: CreationDispatcher, factory: Factory):
        dispatcher.register(
            RequestKind.FORM, lambda r: Form(form_type="contact") if r.form_type == "contact" else None
        )
        with pytest.raises(CreationFailed, match='Could not create form type "survey"'):
            factory.create_form("survey")


class TestCreateUser:
    """The user request never fails and falls back to the default user."""

    def test_default_user_without_creators(self, factory: Factory):
        user = factory.create_user()
        assert user == User()
        assert user.is_anonymous

    def test_declining_creator_keeps_default(self, dispatcher: CreationDispatcher, factory: Factory):
        dispatcher.register(RequestKind.USER, lambda r: None)
        assert factory.create_user() == User()

    def test_creator_replaces_default(self, dispatcher: CreationDispatcher, factory: Factory):
        admin = User(user_id="admin", roles=["admin"])
        dispatcher.register(RequestKind.USER, lambda r: admin)
        assert factory.create_user() is admin

    def test_creator_sees_seeded_user(self, dispatcher: CreationDispatcher, factory: Factory):
        seen = []
        dispatcher.register(RequestKind.USER, lambda r: seen.append(r.user))
        factory.create_user()
        assert seen == [User()]


class TestFactoryWiring:
    """The factory must use the fixed request names and a fresh request per call."""

    def test_uses_request_names(self):
        host = RecordingDispatcher(answer=Form(form_type="contact"))
        factory = Factory(host)
        factory.create_form("contact")
        factory.create_user()
        assert [name for name, _ in host.calls] == [
            "workflow.factory.create-form",
            "workflow.factory.create-user",
        ]
        assert isinstance(host.calls[1][1], CreateUserRequest)

    def test_fresh_request_per_call(self):
        host = RecordingDispatcher(answer=Manager(provider_name="tl_page"))
        factory = Factory(host)
        factory.create_manager("tl_page")
        factory.create_manager("tl_page")
        first, second = (request for _, request in host.calls)
        assert first is not second

    def test_creator_exception_propagates(self, dispatcher: CreationDispatcher, factory: Factory):
        def broken(request):
            raise KeyError("boom")

        dispatcher.register(RequestKind.FORM, broken)
        with pytest.raises(KeyError):
            factory.create_form("contact")

    def test_dispatcher_is_shared(self, dispatcher: CreationDispatcher):
        assert Factory(dispatcher).event_dispatcher is dispatcher

    def test_from_config(self, isolated_config: FactoryConfig):
        factory = Factory.from_config(isolated_config)
        assert isinstance(factory.event_dispatcher, CreationDispatcher)
        assert factory.create_user() == User()
