"""
Tests for model dispatch, payload construction and output cleanup.
"""
import pytest
import requests

from lira_portal.ai import ErrorKind, HuggingFaceClient, InferenceError, InferenceRouter, RequestShape
from lira_portal.ai.errors import GENERIC_MESSAGE, classify_status
from lira_portal.ai.inference import (
    QA_ACTIVITY_CONTEXT,
    QA_DEFAULT_CONTEXT,
    build_request,
    clean_response,
    extract_text,
    resolve_shape,
)


class TestDispatch:

    @pytest.mark.parametrize("model,shape", [
        ("google/flan-t5-base", RequestShape.INSTRUCTION),
        ("google/flan-t5-large", RequestShape.INSTRUCTION),
        ("microsoft/DialoGPT-small", RequestShape.CONVERSATIONAL),
        ("facebook/blenderbot-400M-distill", RequestShape.CONVERSATIONAL),
        ("distilbert-base-uncased-distilled-squad", RequestShape.EXTRACTIVE_QA),
        ("distilbert-base-uncased", RequestShape.TEXT_GENERATION),
        ("gpt2", RequestShape.TEXT_GENERATION),
    ])
    def test_resolve_shape(self, model, shape):
        assert resolve_shape(model) is shape

    def test_instruction_activity_template(self):
        request = build_request("google/flan-t5-base", "Checked lab safety equipment", "activity")
        assert request.payload["inputs"].startswith(
            "Create a detailed activity report based on: Checked lab safety equipment."
        )
        assert "objectives, actions taken, outcomes, and learnings" in request.payload["inputs"]
        assert request.payload["parameters"]["max_new_tokens"] == 500

    def test_instruction_without_activity_uses_prompt(self):
        request = build_request("google/flan-t5-base", "Summarize this week", "general")
        assert request.payload["inputs"] == "Summarize this week"

    def test_conversational_parameters(self):
        request = build_request("microsoft/DialoGPT-medium", "Hello", None)
        assert request.payload["parameters"] == {
            "max_new_tokens": 300,
            "temperature": 0.8,
            "do_sample": True,
            "pad_token_id": 50256,
        }

    def test_extractive_qa_contexts(self):
        activity = build_request("distilbert-base-uncased-distilled-squad", "What did I learn?", "activity")
        assert activity.payload == {
            "inputs": {"question": "What did I learn?", "context": QA_ACTIVITY_CONTEXT}
        }
        other = build_request("distilbert-base-uncased-distilled-squad", "What is Lira?", "general")
        assert other.payload["inputs"]["context"] == QA_DEFAULT_CONTEXT == "General knowledge and information."

    def test_parameters_not_shared_between_requests(self):
        first = build_request("gpt2", "a", None)
        first.payload["parameters"]["max_new_tokens"] = 1
        assert build_request("gpt2", "b", None).payload["parameters"]["max_new_tokens"] == 400


class TestCleanup:

    def test_extract_from_list(self):
        assert extract_text(RequestShape.TEXT_GENERATION, [{"generated_text": "Hello there"}]) == "Hello there"
        assert extract_text(RequestShape.EXTRACTIVE_QA, {"answer": "teamwork"}) == "teamwork"

    def test_extract_raises_on_error_body(self):
        with pytest.raises(InferenceError) as exc:
            extract_text(RequestShape.TEXT_GENERATION, {"error": "Model is overloaded"})
        assert "Model is overloaded" in exc.value.message

    def test_echoed_prompt_removed(self):
        text = clean_response("Write a report about the lab work done", "Write a report")
        assert text == "about the lab work done"

    def test_minimum_length_boundary(self):
        assert clean_response("  abcdefghij  ", "prompt") == "abcdefghij"
        with pytest.raises(InferenceError) as exc:
            clean_response("abcdefghi", "prompt")
        assert exc.value.kind is ErrorKind.DEGENERATE_OUTPUT
        assert exc.value.user_message == GENERIC_MESSAGE

    def test_pure_echo_is_degenerate(self):
        with pytest.raises(InferenceError):
            clean_response("Tell me about interns", "Tell me about interns")


class TestErrorClassification:

    @pytest.mark.parametrize("status,kind", [
        (429, ErrorKind.RATE_LIMITED),
        (401, ErrorKind.CONFIGURATION),
        (403, ErrorKind.CONFIGURATION),
        (404, ErrorKind.MODEL_UNAVAILABLE),
        (503, ErrorKind.MODEL_UNAVAILABLE),
        (500, ErrorKind.UPSTREAM),
    ])
    def test_classify_status(self, status, kind):
        assert classify_status(status) is kind


class TestRouter:

    def test_generate_posts_to_model_endpoint(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, [{"generated_text": "A structured weekly report"}]))
        router = InferenceRouter(HuggingFaceClient("hf_token", session=session))

        text = router.generate("gpt2", "Weekly", None)

        assert text == "A structured weekly report"
        call = session.calls[0]
        assert call["url"] == "https://api-inference.huggingface.co/models/gpt2"
        assert call["headers"]["Authorization"] == "Bearer hf_token"

    def test_no_token_sends_no_authorization(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, {"answer": "Hands-on training"}))
        router = InferenceRouter(HuggingFaceClient("", session=session))
        router.generate("distilbert-base-uncased-distilled-squad", "What?", "activity")
        assert "Authorization" not in session.calls[0]["headers"]

    @pytest.mark.parametrize("model,prompt", [(None, "Hi"), ("gpt2", ""), ("", None)])
    def test_missing_model_or_prompt(self, fake_session_cls, model, prompt):
        session = fake_session_cls()
        router = InferenceRouter(HuggingFaceClient("tok", session=session))
        with pytest.raises(InferenceError) as exc:
            router.generate(model, prompt)
        assert exc.value.kind is ErrorKind.VALIDATION
        assert exc.value.message == "Model and prompt are required"
        assert session.calls == []

    @pytest.mark.parametrize("status,message", [
        (429, "Rate limit exceeded. Please try again in a few minutes."),
        (503, "Model temporarily unavailable. Please try a different model."),
        (401, "API configuration issue. Please contact support."),
        (500, "Failed to generate content"),
    ])
    def test_upstream_errors_map_to_user_messages(self, fake_session_cls, fake_response_cls, status, message):
        session = fake_session_cls(fake_response_cls(status, None, text="upstream says no"))
        router = InferenceRouter(HuggingFaceClient("tok", session=session))
        with pytest.raises(InferenceError) as exc:
            router.generate("gpt2", "Hello")
        assert exc.value.user_message == message
        assert str(status) in exc.value.message

    def test_network_failure_is_upstream(self, fake_session_cls):
        session = fake_session_cls(requests.ConnectionError("connection refused"))
        router = InferenceRouter(HuggingFaceClient("tok", session=session))
        with pytest.raises(InferenceError) as exc:
            router.generate("gpt2", "Hello")
        assert exc.value.kind is ErrorKind.UPSTREAM


class TestDocumentedScenarios:

    @pytest.mark.parametrize("model", ["google/flan-t5-base", "google/flan-t5-small", "acme/flan-t5-xl-ft"])
    def test_flan_t5_family_activity_prompt(self, model):
        inputs = build_request(model, "worked on login page", "activity").payload["inputs"]
        for word in ("objectives", "actions taken", "outcomes", "learnings"):
            assert word in inputs

    def test_flan_t5_activity_report(self, fake_session_cls, fake_response_cls):
        generated = "Objectives: improve the login page. Actions taken: rebuilt the form."
        session = fake_session_cls(fake_response_cls(200, [{"generated_text": generated}]))
        router = InferenceRouter(HuggingFaceClient("tok", session=session))

        text = router.generate("google/flan-t5-base", "worked on login page", "activity")

        assert len(text) >= 10
        assert not text.startswith("worked on login page")

    def test_distilbert_returns_answer_span(self, fake_session_cls, fake_response_cls):
        session = fake_session_cls(fake_response_cls(200, {"answer": "professional development", "score": 0.42}))
        router = InferenceRouter(HuggingFaceClient("tok", session=session))

        text = router.generate(
            "distilbert-base-uncased-distilled-squad", "What did the intern learn?", "activity"
        )

        assert text == "professional development"
        assert session.calls[0]["json"]["inputs"]["context"] == QA_ACTIVITY_CONTEXT
