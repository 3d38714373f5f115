"""
Request bodies of the function endpoints. Field names mirror the client payloads.

Bodies are validated inside the endpoints so that a bad payload is reported
with the same {error, details} body as any other failure.
"""
from pydantic import BaseModel
from typing import Any, Optional


class AssistantRequest(BaseModel):
    message: Optional[str] = None
    context: Any = None
    userRole: Optional[str] = None


class GenerateRequest(BaseModel):
    model: Optional[str] = None
    prompt: Optional[str] = None
    context: Optional[str] = None
