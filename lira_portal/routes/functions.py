"""
Function endpoints called by the portal client: the LIRA AI assistant and
multi-model content generation.

Both answer CORS preflight with wildcard headers and report every failure
as a JSON {error, details} body with HTTP 500.
"""
from typing import Type, TypeVar

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from ..ai import (
    AssistantClient,
    AssistantService,
    ContextAggregator,
    DataGateway,
    ErrorKind,
    InferenceError,
    InferenceRouter,
    MODEL_CATALOG,
)
from ..ai.errors import GENERIC_MESSAGE
from ..config import Settings, get_settings
from ..database import get_session_factory
from ..limiter import limiter
from ..logging_config import ai_logger
from ..responses import CORS_HEADERS, cors_json, function_error
from ..schemas.functions import AssistantRequest, GenerateRequest

settings = get_settings()

router = APIRouter(prefix="/functions/v1", tags=["functions"])

BodyT = TypeVar("BodyT", bound=BaseModel)


def get_assistant_service(
    settings: Settings = Depends(get_settings),
    session_factory=Depends(get_session_factory),
) -> AssistantService:
    aggregator = ContextAggregator.from_settings(DataGateway(session_factory), settings)
    return AssistantService(aggregator, AssistantClient.from_settings(settings))


def get_inference_router(settings: Settings = Depends(get_settings)) -> InferenceRouter:
    return InferenceRouter.from_settings(settings)


async def read_body(request: Request, schema: Type[BodyT]) -> BodyT:
    """Parse and validate a JSON body. Malformed input raises InferenceError."""
    try:
        return schema.model_validate(await request.json())
    except ValueError as e:
        # covers JSONDecodeError and pydantic's ValidationError
        raise InferenceError(ErrorKind.VALIDATION, f"Invalid request body: {e}") from e


@router.options("/ai-assistant")
@router.options("/free-ai-models")
def preflight():
    return Response(status_code=200, headers=dict(CORS_HEADERS))


@router.post("/ai-assistant")
@limiter.limit(settings.function_rate_limit)
async def ai_assistant(
    request: Request,
    service: AssistantService = Depends(get_assistant_service),
):
    log = ai_logger.bind(endpoint="ai-assistant")
    try:
        body = await read_body(request, AssistantRequest)
        log = log.bind(role=body.userRole)
        reply = await run_in_threadpool(service.respond, body.message, body.userRole)
    except Exception as e:
        log.error("Error in ai-assistant function", error=e)
        return function_error("Failed to generate AI response", str(e))

    return cors_json({"response": reply.response, "contextUsed": reply.context_used})


@router.get("/free-ai-models")
def list_models():
    """Models offered in the generator UI."""
    return cors_json({"models": [model.to_dict() for model in MODEL_CATALOG]})


@router.post("/free-ai-models")
@limiter.limit(settings.function_rate_limit)
async def free_ai_models(
    request: Request,
    router_: InferenceRouter = Depends(get_inference_router),
):
    log = ai_logger.bind(endpoint="free-ai-models")
    try:
        body = await read_body(request, GenerateRequest)
        log = log.bind(model=body.model)
        text = await run_in_threadpool(router_.generate, body.model, body.prompt, body.context)
    except InferenceError as e:
        log.error("Error in free-ai-models function", error=e, kind=e.kind.value)
        return function_error(e.user_message, e.message)
    except Exception as e:
        log.error("Error in free-ai-models function", error=e)
        return function_error(GENERIC_MESSAGE, str(e))

    return cors_json({"response": text, "model": body.model, "context": body.context})
