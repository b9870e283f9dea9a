"""
LLM client for chat completions against an OpenAI-compatible endpoint
(OpenRouter by default).
"""
import logging
import time
from typing import Any, Optional

import openai
from openai import OpenAI

from coactivo.errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_ERROR = 'Error en OpenRouter'


def _envelope_message(error: Any) -> str:
    if isinstance(error, dict):
        return error.get('message') or DEFAULT_PROVIDER_ERROR
    return getattr(error, 'message', None) or DEFAULT_PROVIDER_ERROR


class LLMClient:
    """
    Thin wrapper over the OpenAI SDK.

    One request per call: the SDK's own retries are disabled and the timeout
    bounds every call.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        client: Optional[OpenAI] = None,
    ):
        if client is None:
            if not api_key:
                raise ValueError("OPENROUTER_API_KEY environment variable not set")
            client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
            logger.info(f"LLM client initialized (base_url={base_url}, model={model})")
        self.client = client
        self.model = model
        self.timeout = timeout

    def complete(self, system_prompt: str, user_prompt: str, model: Optional[str] = None) -> str:
        """
        Run one chat completion.

        Args:
            system_prompt: The system message.
            user_prompt: The user message.
            model: Model id; defaults to the configured model.

        Returns:
            The completion text, stripped. Empty string if the provider sent no content.

        Raises:
            ProviderError: If the provider fails, times out or answers with an error envelope.
        """
        model = model or self.model
        start_time = time.time()

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                timeout=self.timeout,
            )
        except openai.APITimeoutError as e:
            logger.error(f"LLM request timed out after {self.timeout}s (model={model})")
            raise ProviderError(f"LLM request timed out after {self.timeout}s") from e
        except openai.APIError as e:
            message = getattr(e, 'message', None) or str(e)
            logger.error(f"LLM provider error (model={model}): {type(e).__name__} - {message}")
            raise ProviderError(message) from e

        error = getattr(response, 'error', None)
        if error:
            message = _envelope_message(error)
            logger.error(f"LLM provider returned an error envelope (model={model}): {message}")
            raise ProviderError(message)

        choices = getattr(response, 'choices', None) or []
        content = ''
        if choices and choices[0].message is not None:
            content = (choices[0].message.content or '').strip()

        duration = time.time() - start_time
        logger.info(f"LLM completion: model={model}, {len(content)} chars, duration={duration:.2f}s")
        return content
