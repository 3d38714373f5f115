"""
AI assistant and multi-model generation services.
"""
from .errors import ErrorKind, InferenceError
from .gateway import DataGateway
from .context import ContextAggregator
from .prompts import compose_system_prompt
from .assistant import AssistantClient, AssistantService, AssistantReply
from .inference import HuggingFaceClient, InferenceRouter, RequestShape, MODEL_CATALOG

__all__ = [
    "ErrorKind",
    "InferenceError",
    "DataGateway",
    "ContextAggregator",
    "compose_system_prompt",
    "AssistantClient",
    "AssistantService",
    "AssistantReply",
    "HuggingFaceClient",
    "InferenceRouter",
    "RequestShape",
    "MODEL_CATALOG",
]
