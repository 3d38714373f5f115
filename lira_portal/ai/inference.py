"""
Inference router over the Hugging Face Inference API.

A model id resolves to a RequestShape: first through the table of models the
portal offers, then through ordered family rules, then the generic fallback.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import requests

from ..logging_config import ai_logger
from .errors import ErrorKind, InferenceError, raise_for_upstream
from .http import post

MIN_RESPONSE_LENGTH = 10


class RequestShape(str, Enum):
    INSTRUCTION = "instruction"
    CONVERSATIONAL = "conversational"
    EXTRACTIVE_QA = "extractive_qa"
    TEXT_GENERATION = "text_generation"


@dataclass(frozen=True)
class ModelInfo:
    id: str
    name: str
    description: str
    capabilities: Tuple[str, ...]
    shape: RequestShape

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "provider": "Hugging Face",
            "capabilities": list(self.capabilities),
            "shape": self.shape.value,
        }


MODEL_CATALOG = (
    ModelInfo(
        "microsoft/DialoGPT-medium",
        "DialoGPT Medium",
        "Conversational AI for creative writing and brainstorming",
        ("Creative Writing", "Brainstorming", "Dialogue"),
        RequestShape.CONVERSATIONAL,
    ),
    ModelInfo(
        "google/flan-t5-base",
        "FLAN-T5 Base",
        "Instruction-following model for task completion",
        ("Instructions", "Summarization", "Q&A"),
        RequestShape.INSTRUCTION,
    ),
    ModelInfo(
        "facebook/blenderbot-400M-distill",
        "BlenderBot 400M",
        "Conversational AI for interactive discussions",
        ("Conversation", "Knowledge", "Personality"),
        RequestShape.CONVERSATIONAL,
    ),
    ModelInfo(
        "distilbert-base-uncased-distilled-squad",
        "DistilBERT QA",
        "Question answering and information extraction",
        ("Question Answering", "Information Extraction"),
        RequestShape.EXTRACTIVE_QA,
    ),
)

KNOWN_MODELS = {model.id: model.shape for model in MODEL_CATALOG}

# (all substrings required, shape); first match wins
FAMILY_RULES = (
    (("flan-t5",), RequestShape.INSTRUCTION),
    (("DialoGPT",), RequestShape.CONVERSATIONAL),
    (("blenderbot",), RequestShape.CONVERSATIONAL),
    (("distilbert", "squad"), RequestShape.EXTRACTIVE_QA),
)

GENERATION_PARAMETERS = {
    RequestShape.INSTRUCTION: {"max_new_tokens": 500, "temperature": 0.7, "do_sample": True},
    RequestShape.CONVERSATIONAL: {
        "max_new_tokens": 300,
        "temperature": 0.8,
        "do_sample": True,
        "pad_token_id": 50256,
    },
    RequestShape.TEXT_GENERATION: {"max_new_tokens": 400, "temperature": 0.7, "do_sample": True},
}

ACTIVITY_REPORT_TEMPLATE = (
    "Create a detailed activity report based on: {prompt}. "
    "Include objectives, actions taken, outcomes, and learnings."
)

QA_ACTIVITY_CONTEXT = (
    "This relates to internship activities, work experiences, learning outcomes, "
    "and professional development."
)
QA_DEFAULT_CONTEXT = "General knowledge and information."


def resolve_shape(model: str) -> RequestShape:
    if model in KNOWN_MODELS:
        return KNOWN_MODELS[model]
    for tokens, shape in FAMILY_RULES:
        if all(token in model for token in tokens):
            return shape
    return RequestShape.TEXT_GENERATION


@dataclass
class InferenceRequest:
    model: str
    shape: RequestShape
    payload: Dict[str, Any]


def build_request(model: str, prompt: str, context: Optional[str] = None) -> InferenceRequest:
    """Build the upstream payload for a model, prompt and context tag."""
    shape = resolve_shape(model)

    if shape is RequestShape.EXTRACTIVE_QA:
        payload = {
            "inputs": {
                "question": prompt,
                "context": QA_ACTIVITY_CONTEXT if context == "activity" else QA_DEFAULT_CONTEXT,
            }
        }
        return InferenceRequest(model, shape, payload)

    inputs = prompt
    if shape is RequestShape.INSTRUCTION and context == "activity":
        inputs = ACTIVITY_REPORT_TEMPLATE.format(prompt=prompt)

    payload = {"inputs": inputs, "parameters": dict(GENERATION_PARAMETERS[shape])}
    return InferenceRequest(model, shape, payload)


def extract_text(shape: RequestShape, data: Any) -> str:
    """Normalize the upstream response body into plain text."""
    if isinstance(data, list):
        data = data[0] if data else {}
    if not isinstance(data, dict):
        return ""
    if "error" in data:
        raise InferenceError(ErrorKind.UPSTREAM, f"Hugging Face API error: {data['error']}")
    if shape is RequestShape.EXTRACTIVE_QA:
        return data.get("answer") or ""
    return data.get("generated_text") or ""


def clean_response(text: str, prompt: str) -> str:
    """Trim, drop an exact echo of the prompt, and reject degenerate output."""
    text = (text or "").strip()
    if prompt and text.startswith(prompt):
        text = text[len(prompt):].strip()
    if len(text) < MIN_RESPONSE_LENGTH:
        raise InferenceError(ErrorKind.DEGENERATE_OUTPUT, "Generated response is too short or empty")
    return text


class HuggingFaceClient:
    """POSTs payloads to the hosted inference endpoint of a model."""

    def __init__(
        self,
        token: str = "",
        api_url: str = "https://api-inference.huggingface.co/models",
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session

    def run(self, model: str, payload: Dict[str, Any]) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = post(self.session, f"{self.api_url}/{model}", payload, headers, self.timeout)
        except requests.RequestException as e:
            raise InferenceError(ErrorKind.UPSTREAM, f"Hugging Face request failed: {e}") from e

        raise_for_upstream(response, "Hugging Face")
        return response.json()


class InferenceRouter:
    """One calling convention (model, prompt, context tag) over several request shapes."""

    def __init__(self, client: HuggingFaceClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None) -> "InferenceRouter":
        return cls(HuggingFaceClient(
            token=settings.hugging_face_access_token,
            api_url=settings.hugging_face_api_url,
            timeout=settings.inference_timeout,
            session=session,
        ))

    def generate(self, model: Optional[str], prompt: Optional[str], context: Optional[str] = None) -> str:
        if not model or not prompt:
            raise InferenceError(ErrorKind.VALIDATION, "Model and prompt are required")

        request = build_request(model, prompt, context)
        ai_logger.bind(model=model).info(
            "Generating content",
            context_tag=context,
            shape=request.shape.value,
        )

        data = self.client.run(model, request.payload)
        return clean_response(extract_text(request.shape, data), prompt)
