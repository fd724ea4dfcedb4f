"""
Fire Survey Backend: Generation Proxy Schemas
=============================================

What:  Request body accepted by POST /generate and the payload forwarded upstream.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr


class GenerateRequest(BaseModel):
    """
    Body of POST /generate.

    `model` and `stream` are accepted for compatibility with Ollama clients
    but ignored: the proxy always uses the configured model, non-streaming.
    """
    model: Optional[StrictStr] = Field(default=None, description="Ignored; overridden by configuration")
    prompt: StrictStr = Field(default="", description="Free-text prompt")
    stream: Optional[StrictBool] = Field(default=None, description="Ignored; always false upstream")


class GenerationPayload(BaseModel):
    """JSON sent to the generation service's /api/generate endpoint."""
    model: str
    prompt: str
    stream: bool = False
