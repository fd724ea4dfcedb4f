"""
Fire Survey Backend: Abstract Text Generation Interface
=======================================================

What:  Contract for services that answer POST /generate.
How:   Concrete implementations inherit from GenerationService and implement
       generate() and health_check().
Who:   OllamaService is the only implementation; routes depend on this
       interface, and tests substitute implementations backed by a mock transport.
"""

from abc import ABC, abstractmethod

import httpx


class GenerationService(ABC):
    """
    Abstract interface for a prompt → completion backend.

    Contract:
        - generate() sends one non-streaming request and returns the upstream
          response untouched, whatever its status code
        - Transport failures (refused, timeout, DNS) are wrapped in
          GenerationServiceError
        - No retries
    """

    @abstractmethod
    async def generate(self, prompt: str) -> httpx.Response:
        """
        Forward a prompt to the generation backend.

        Args:
            prompt: Free-text prompt, possibly empty.

        Returns:
            httpx.Response: The fully read upstream response; callers relay
            `status_code` and `content` as-is.

        Raises:
            GenerationServiceError: The backend could not be reached or did
                not answer within the configured timeout.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the backend answers at all, False otherwise. Never raises."""
        ...

    async def aclose(self) -> None:
        """Release network resources (application shutdown)."""
        return None
