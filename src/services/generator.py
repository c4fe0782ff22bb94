"""Answer generator backed by Google Gemini."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

import constants
import metrics
from errors import UpstreamUnavailableError
from models.config import GeneratorConfiguration
from log import get_logger

logger = get_logger(__name__)


class AnswerGenerator(ABC):
    """Turns a rendered prompt into answer text."""

    @property
    def configured(self) -> bool:
        """Whether the generator can produce real answers."""
        return True

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the answer for the prompt."""

    async def close(self) -> None:
        """Release resources held by the generator."""


class GeminiAnswerGenerator(AnswerGenerator):
    """Answer generator calling the Gemini API through google-genai.

    Without an API key the generator stays usable but answers every prompt
    with a fixed notice instead of calling the model.
    """

    def __init__(
        self,
        config: GeneratorConfiguration,
        client: Optional[genai.Client] = None,
    ) -> None:
        """Create the generator and its Gemini client when a key is set."""
        self.config = config
        if client is None and self._has_api_key(config):
            client = genai.Client(
                api_key=config.api_key.get_secret_value(),  # type: ignore[union-attr]
                # google-genai expects the timeout in milliseconds
                http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
            )
        self.client = client
        if self.client is None:
            logger.warning(
                "Generator API key is not set, answers will be replaced by a notice"
            )

    @staticmethod
    def _has_api_key(config: GeneratorConfiguration) -> bool:
        return config.api_key is not None and bool(config.api_key.get_secret_value())

    @property
    def configured(self) -> bool:
        """Whether a Gemini client is available."""
        return self.client is not None

    async def generate(self, prompt: str) -> str:
        """Return Gemini completion of the prompt."""
        if self.client is None:
            return constants.GENERATOR_NOT_CONFIGURED_ANSWER

        metrics.llm_calls_total.labels(self.config.model).inc()
        try:
            response = await self.client.aio.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.config.temperature
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            metrics.llm_calls_failures_total.inc()
            metrics.upstream_failures_total.labels("generator").inc()
            logger.error("Generation request failed: %s", e)
            raise UpstreamUnavailableError("generator", str(e) or type(e).__name__) from e

        text = (response.text or "").strip()
        if not text:
            metrics.llm_calls_failures_total.inc()
            metrics.upstream_failures_total.labels("generator").inc()
            raise UpstreamUnavailableError("generator", "model returned no text")
        return text

    async def close(self) -> None:
        """Close the Gemini client."""
        if self.client is not None:
            await self.client.aio.aclose()
