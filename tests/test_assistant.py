"""
Tests for the assistant client and service.
"""
from datetime import datetime, timezone

import pytest
import requests

from lira_portal.ai import (
    AssistantClient,
    AssistantService,
    ContextAggregator,
    ErrorKind,
    HuggingFaceClient,
    InferenceError,
    InferenceRouter,
)
from lira_portal.ai.prompts import DEFAULT_ROLE_CONTEXT

from test_context import FakeGateway, sample_gateway

FIXED_NOW = datetime(2026, 3, 4, 10, 0, tzinfo=timezone.utc)


def anthropic_reply(*texts):
    return {"content": [{"type": "text", "text": t} for t in texts]}


def make_service(session, gateway=None, api_key="sk-test"):
    aggregator = ContextAggregator(gateway or sample_gateway(), max_workers=1, clock=lambda: FIXED_NOW)
    return AssistantService(aggregator, AssistantClient(api_key, session=session))


class TestAssistantClient:

    def test_request_shape(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, anthropic_reply("Hello")))
        client = AssistantClient("sk-test", session=session, max_tokens=1500)

        assert client.complete("SYSTEM", "How many pending reviews?") == "Hello"

        call = session.calls[0]
        assert call["url"] == "https://api.anthropic.com/v1/messages"
        assert call["headers"]["x-api-key"] == "sk-test"
        assert call["headers"]["anthropic-version"] == "2023-06-01"
        assert call["json"]["system"] == "SYSTEM"
        assert call["json"]["max_tokens"] == 1500
        assert call["json"]["messages"] == [{"role": "user", "content": "How many pending reviews?"}]

    def test_text_blocks_joined(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, anthropic_reply("Part one. ", "Part two.")))
        assert AssistantClient("sk-test", session=session).complete("S", "M") == "Part one. Part two."

    def test_missing_key_is_configuration_error(self, fake_session_cls):
        session = fake_session_cls()
        with pytest.raises(InferenceError) as exc:
            AssistantClient("", session=session).complete("S", "M")
        assert exc.value.kind is ErrorKind.CONFIGURATION
        assert session.calls == []

    def test_rate_limited(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(429, None, text="slow down"))
        with pytest.raises(InferenceError) as exc:
            AssistantClient("sk-test", session=session).complete("S", "M")
        assert exc.value.kind is ErrorKind.RATE_LIMITED

    def test_empty_content_is_error(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, {"content": []}))
        with pytest.raises(InferenceError):
            AssistantClient("sk-test", session=session).complete("S", "M")


class TestAssistantService:

    def test_respond_injects_digest(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, anthropic_reply("You have 1 pending review.")))
        service = make_service(session)

        reply = service.respond("What needs review?", "staff")

        expected_digest = service.aggregator.gather("staff")
        assert reply.response == "You have 1 pending review."
        assert reply.context_used == len(expected_digest.split("\n"))
        system = session.calls[0]["json"]["system"]
        assert "- Pending Reviews: 1" in system
        assert "- User Role: staff" in system
        assert session.calls[0]["json"]["messages"][0]["content"] == "What needs review?"

    def test_respond_with_every_source_down(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, anthropic_reply("Working with limited data.")))
        gateway = FakeGateway(failing={"activities", "profiles", "departments", "comments"})

        reply = make_service(session, gateway).respond("Status?", "intern")

        assert reply.response == "Working with limited data."
        assert reply.context_used > 0

    def test_blank_message_rejected(self, fake_session_cls):
        session = fake_session_cls()
        with pytest.raises(InferenceError) as exc:
            make_service(session).respond("   ", "intern")
        assert exc.value.kind is ErrorKind.VALIDATION
        assert session.calls == []


class TestRoleHandling:

    def test_missing_role_gets_default_context(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, anthropic_reply("Hello.")))

        make_service(session).respond("Hi", None)

        system = session.calls[0]["json"]["system"]
        assert DEFAULT_ROLE_CONTEXT in system
        assert "Current user role: unspecified" in system


class TestOneShotRequests:

    def test_clients_without_session_use_requests_post(self, monkeypatch, fake_response_cls):
        calls = []

        def fake_post(url, json=None, headers=None, timeout=None):
            calls.append(url)
            if "anthropic" in url:
                return fake_response_cls(200, anthropic_reply("Hello from the API."))
            return fake_response_cls(200, [{"generated_text": "A generated paragraph."}])

        monkeypatch.setattr(requests, "post", fake_post)

        assistant = AssistantClient("sk-test")
        router = InferenceRouter(HuggingFaceClient("hf_token"))

        assert assistant.session is None
        assert router.client.session is None
        assert assistant.complete("S", "M") == "Hello from the API."
        assert router.generate("gpt2", "Write") == "A generated paragraph."
        assert calls == [
            "https://api.anthropic.com/v1/messages",
            "https://api-inference.huggingface.co/models/gpt2",
        ]
