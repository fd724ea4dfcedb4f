"""
Fire Survey Backend: Generation Proxy Route
===========================================

What:  POST /generate forwards a prompt to the local language model and
       relays its answer verbatim.
How:   The body's `model` and `stream` are ignored; OllamaService sends the
       configured model with streaming off. The upstream status code and body
       bytes are copied into the response unchanged.

Error responses (global handlers):
    HTTP 400: body is not JSON or has wrong types
    HTTP 500: generation service unreachable or timed out
"""

import logging

from fastapi import APIRouter, Response

from firesurvey.schemas.common import ErrorResponse
from firesurvey.schemas.generation import GenerateRequest
from firesurvey.services.ollama_service import ollama_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Generation"])


@router.post(
    "/generate",
    responses={
        200: {"description": "Raw response from the generation service"},
        400: {"description": "Invalid JSON body", "model": ErrorResponse},
        500: {"description": "Generation service unavailable", "model": ErrorResponse},
    },
    summary="Proxy a prompt to the local language model",
)
async def generate(payload: GenerateRequest) -> Response:
    upstream = await ollama_service.generate(payload.prompt)
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type="application/json",
    )


@router.options("/generate", include_in_schema=False)
async def generate_options() -> Response:
    return Response(status_code=200)
