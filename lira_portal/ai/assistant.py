"""
LIRA AI assistant: context digest + system prompt + Anthropic Messages call.
"""
from dataclasses import dataclass
from typing import Optional

import requests

from ..logging_config import ai_logger
from .context import ContextAggregator
from .errors import ErrorKind, InferenceError, raise_for_upstream
from .http import post
from .prompts import UNSPECIFIED_ROLE, compose_system_prompt


@dataclass
class AssistantReply:
    response: str
    context_used: int


class AssistantClient:
    """Thin wrapper over the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.anthropic.com/v1/messages",
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 1500,
        anthropic_version: str = "2023-06-01",
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.anthropic_version = anthropic_version
        self.timeout = timeout
        self.session = session

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None) -> "AssistantClient":
        return cls(
            api_key=settings.anthropic_api_key,
            api_url=settings.anthropic_api_url,
            model=settings.assistant_model,
            max_tokens=settings.assistant_max_tokens,
            anthropic_version=settings.anthropic_version,
            timeout=settings.inference_timeout,
            session=session,
        )

    def complete(self, system_prompt: str, message: str) -> str:
        if not self.api_key:
            raise InferenceError(ErrorKind.CONFIGURATION, "ANTHROPIC_API_KEY is not configured")

        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": system_prompt,
            "messages": [{"role": "user", "content": message}],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.anthropic_version,
            "content-type": "application/json",
        }

        try:
            response = post(self.session, self.api_url, payload, headers, self.timeout)
        except requests.RequestException as e:
            raise InferenceError(ErrorKind.UPSTREAM, f"Anthropic API request failed: {e}") from e

        raise_for_upstream(response, "Anthropic")

        blocks = response.json().get("content") or []
        text = "".join(block.get("text", "") for block in blocks if block.get("type", "text") == "text")
        if not text:
            raise InferenceError(ErrorKind.UPSTREAM, "Anthropic API returned no text content")
        return text


class AssistantService:
    """Answers one user message with the current portal context."""

    def __init__(self, aggregator: ContextAggregator, client: AssistantClient):
        self.aggregator = aggregator
        self.client = client

    def respond(self, message: Optional[str], role: Optional[str] = None) -> AssistantReply:
        if not message or not message.strip():
            raise InferenceError(ErrorKind.VALIDATION, "Message is required")

        # A missing role gets the generic capability blurb
        role = role or UNSPECIFIED_ROLE
        digest = self.aggregator.gather(role)
        system_prompt = compose_system_prompt(role, digest)

        ai_logger.bind(role=role).info("Assistant request", context_chars=len(digest))
        text = self.client.complete(system_prompt, message)

        return AssistantReply(response=text, context_used=len(digest.split("\n")))
