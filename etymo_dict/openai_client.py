"""OpenAI API client and error classification."""

import asyncio
from typing import Awaitable, Callable, List, Optional

import openai
import structlog

from .config import REQUEST_TIMEOUT
from .errors import (
    BackendError,
    BackendFailure,
    ConfigurationError,
    MalformedResponse,
    RequestTimeout,
    ServiceUnavailable,
)

log = structlog.get_logger()

CallBackend = Callable[[str, str], Awaitable[str]]


def classify_error(exc: Exception, model: Optional[str] = None) -> BackendError:
    """Map an OpenAI SDK exception onto the lookup error taxonomy."""
    # APITimeoutError subclasses APIConnectionError, so test it first.
    if isinstance(exc, openai.APITimeoutError):
        return RequestTimeout(str(exc) or "Request timed out", model=model)
    if isinstance(exc, (
        openai.APIConnectionError,
        openai.RateLimitError,
        openai.InternalServerError,  # Covers 500, 502, 503, 504, etc.
    )):
        return ServiceUnavailable(str(exc), model=model)
    return BackendFailure(str(exc), model=model)


def create_client(api_key: Optional[str], base_url: Optional[str] = None) -> openai.OpenAI:
    if not api_key:
        raise ConfigurationError("API key is missing. Please set OPENAI_API_KEY in .env")
    # Retries are handled by the orchestrator, one attempt per call here.
    return openai.OpenAI(api_key=api_key, base_url=base_url, max_retries=0)


def make_backend(api_key: Optional[str], base_url: Optional[str] = None,
                 timeout: float = REQUEST_TIMEOUT) -> CallBackend:
    """Return an async ``call_backend(model, prompt) -> text`` for the chat API.

    The blocking SDK call runs in the default executor. If the caller stops
    waiting, the thread is left to finish on its own; ``timeout`` is also
    passed to the HTTP request so it does not linger.
    """
    client = create_client(api_key, base_url)

    async def call_backend(model: str, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                lambda: client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                    timeout=timeout,
                )
            )
        except openai.OpenAIError as e:
            raise classify_error(e, model) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise MalformedResponse("Empty response", model=model)
        return content

    return call_backend


def list_models(api_key: Optional[str], base_url: Optional[str] = None) -> List[str]:
    """List the model ids available to the configured credential."""
    client = create_client(api_key, base_url)
    try:
        models = client.models.list()
    except openai.OpenAIError as e:
        log.error("Listing models failed", error=str(e))
        raise classify_error(e) from e
    return sorted(model.id for model in models)
