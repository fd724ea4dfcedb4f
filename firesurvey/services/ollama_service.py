"""
Fire Survey Backend: Ollama Generation Service
==============================================

What:  GenerationService implementation that forwards prompts to a locally
       hosted Ollama server (POST /api/generate).
How:   One shared httpx.AsyncClient, created on first use and closed at
       shutdown. Every request uses the configured model with streaming off.
Who:   Singleton `ollama_service`, used by POST /generate and GET /health.

Failure handling:
    - Upstream answered (any status, any body) → returned unchanged
    - Upstream unreachable / too slow          → GenerationServiceError (→ 500)
    - The httpx timeout bounds every call; nothing is retried.
"""

import logging
import time
import uuid
from typing import Optional

import httpx

from firesurvey.config import settings
from firesurvey.exceptions import GenerationServiceError
from firesurvey.schemas.generation import GenerationPayload
from firesurvey.services.generation_base import GenerationService

logger = logging.getLogger(__name__)

# Health probes should fail fast regardless of GENERATION_TIMEOUT.
HEALTH_CHECK_TIMEOUT = 5.0


class OllamaService(GenerationService):
    """
    Proxy to the Ollama text-generation API.

    Args:
        url: Full /api/generate URL (default: settings.generation_url)
        model: Model name forced on every request (default: settings.generation_model)
        timeout: Seconds before the call is abandoned (default: settings.generation_timeout)
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.generation_url
        self.model = model or settings.generation_model
        self.timeout = timeout if timeout is not None else settings.generation_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "OllamaService initialized with url=%s, model=%s, timeout=%.1fs",
            self.url,
            self.model,
            self.timeout,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def generate(self, prompt: str) -> httpx.Response:
        request_id = str(uuid.uuid4())[:8]
        payload = GenerationPayload(model=self.model, prompt=prompt, stream=False)

        logger.info(
            "[%s] Forwarding prompt to %s (model=%s, %d chars)",
            request_id,
            self.url,
            self.model,
            len(prompt),
        )

        start_time = time.perf_counter()
        try:
            response = await self._get_client().post(self.url, json=payload.model_dump())
        except httpx.TimeoutException as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "[%s] Generation service timed out after %.0fms: %s",
                request_id,
                duration_ms,
                str(e),
            )
            raise GenerationServiceError(
                message="The text generation service did not respond in time.",
                context={"request_id": request_id, "timeout": self.timeout},
            )
        except httpx.HTTPError as e:
            logger.error(
                "[%s] Generation service unreachable: %s",
                request_id,
                str(e),
            )
            raise GenerationServiceError(
                message="Could not reach the text generation service.",
                context={"request_id": request_id, "error_type": type(e).__name__},
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "[%s] Generation service answered %d in %.0fms (%d bytes)",
            request_id,
            response.status_code,
            duration_ms,
            len(response.content),
        )
        return response

    async def health_check(self) -> bool:
        """
        GET the server root (Ollama answers "Ollama is running").

        Any HTTP answer below 500 counts as reachable; no model is loaded.
        """
        root = httpx.URL(self.url).join("/")
        try:
            response = await self._get_client().get(root, timeout=HEALTH_CHECK_TIMEOUT)
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.warning("Generation service health check failed: %s", str(e))
            return False

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


# ── Singleton Instance ────────────────────────────────────────────────────
# Shares one connection pool across all /generate requests.
ollama_service = OllamaService()
