"""Lookup orchestration: normalize, prompt, try models in order, validate."""

import asyncio
import time
from typing import Any, Awaitable, Dict, List, Optional, Sequence

import structlog
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_fixed

from .config import (
    CANDIDATE_MODELS,
    CONFIG_ERRORS,
    MAX_ATTEMPTS_PER_MODEL,
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
    REQUEST_TIMEOUT,
    RETRY_DELAY,
    TARGET_LANGUAGE,
)
from .errors import (
    AllBackendsExhausted,
    BackendError,
    BackendFailure,
    ConfigurationError,
    DictionaryLookupError,
    RequestTimeout,
    ServiceUnavailable,
)
from .models import AttemptOutcome, DictionaryEntry, LookupResult
from .normalizer import normalize
from .openai_client import CallBackend, make_backend
from .parsing import parse_entry
from .prompts import build_prompt

log = structlog.get_logger()


def _discard_result(task: "asyncio.Future[Any]") -> None:
    if not task.cancelled() and task.exception() is not None:
        log.debug("Abandoned call failed", error=str(task.exception()))


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, BackendError) and exc.transient


def select_cause(errors: Sequence[BackendError]) -> Optional[BackendError]:
    """Pick the most actionable error out of everything that went wrong.

    Service-unavailable first, then any other transient error, then the
    first error recorded.
    """
    for error in errors:
        if isinstance(error, ServiceUnavailable):
            return error
    for error in errors:
        if error.transient:
            return error
    return errors[0] if errors else None


class Orchestrator:
    """Looks up one query at a time against an ordered list of models."""

    def __init__(self, call_backend: Optional[CallBackend] = None,
                 models: Sequence[str] = CANDIDATE_MODELS,
                 timeout: float = REQUEST_TIMEOUT,
                 max_attempts: int = MAX_ATTEMPTS_PER_MODEL,
                 retry_delay: float = RETRY_DELAY,
                 api_key: Optional[str] = OPENAI_API_KEY,
                 base_url: Optional[str] = OPENAI_BASE_URL,
                 target_language: str = TARGET_LANGUAGE,
                 config_errors: Sequence[str] = CONFIG_ERRORS):
        self.models = tuple(models)
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.api_key = api_key
        self.base_url = base_url
        self.target_language = target_language
        self.config_errors = tuple(config_errors)
        self._call_backend = call_backend

    def _backend(self) -> CallBackend:
        if self.config_errors:
            raise ConfigurationError("; ".join(self.config_errors))
        if self._call_backend is None:
            self._call_backend = make_backend(self.api_key, self.base_url, timeout=self.timeout)
        return self._call_backend

    async def lookup(self, raw_query: str) -> LookupResult:
        """Look up a raw query. Never raises; failures come back as results."""
        try:
            query = normalize(raw_query)
            call_backend = self._backend()
            entry = await self._run(call_backend, query)
        except DictionaryLookupError as e:
            log.warning("Lookup failed", query=raw_query, error_kind=e.kind, error=str(e))
            return LookupResult.failed(e)
        return LookupResult.ok(entry)

    async def _run(self, call_backend: CallBackend, query: str) -> DictionaryEntry:
        prompt = build_prompt(query, self.target_language)
        errors: List[BackendError] = []
        outcomes: List[AttemptOutcome] = []

        log.info("Starting lookup", query=query, models=list(self.models))
        for model in self.models:
            try:
                entry = await self._try_model(call_backend, model, prompt, outcomes, errors)
            except BackendError as e:
                log.warning("Model failed", model=model, error_kind=e.kind, error=str(e))
                continue
            log.info("Lookup completed", query=query, term=entry.term, model=model, attempts=len(outcomes))
            return entry

        cause = select_cause(errors)
        log.error("All models failed", query=query, attempts=len(outcomes),
                  failures=[outcome.failure for outcome in outcomes])
        raise AllBackendsExhausted(cause)

    async def _try_model(self, call_backend: CallBackend, model: str, prompt: str,
                         outcomes: List[AttemptOutcome], errors: List[BackendError]) -> DictionaryEntry:
        """Attempt one model, retrying only transient failures."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )
        return await retrying(self._attempt, call_backend, model, prompt, outcomes, errors)

    async def _race(self, call: Awaitable[Any], model: str) -> Any:
        """Await ``call`` for at most ``self.timeout`` seconds.

        On timeout the call is cancelled and abandoned without waiting for it,
        so whatever it produces later is never seen.
        """
        task = asyncio.ensure_future(call)
        done, _ = await asyncio.wait({task}, timeout=self.timeout)
        if task not in done:
            task.add_done_callback(_discard_result)
            task.cancel()
            raise RequestTimeout(f"Request timed out after {self.timeout:g}s", model=model)
        return task.result()

    async def _attempt(self, call_backend: CallBackend, model: str, prompt: str,
                       outcomes: List[AttemptOutcome], errors: List[BackendError]) -> DictionaryEntry:
        number = 1 + sum(1 for outcome in outcomes if outcome.model == model)
        t0 = time.perf_counter()
        try:
            try:
                text = await self._race(call_backend(model, prompt), model)
            except BackendError:
                raise
            except Exception as e:
                raise BackendFailure(str(e) or type(e).__name__, model=model) from e
            entry = parse_entry(text, model=model)
        except BackendError as e:
            outcome = AttemptOutcome(
                model=model,
                attempt=number,
                elapsed_ms=1000 * (time.perf_counter() - t0),
                failure=e.kind,
                message=str(e),
            )
            outcomes.append(outcome)
            errors.append(e)
            log.info("Attempt failed", model=model, attempt=number, elapsed_ms=outcome.elapsed_ms,
                     failure=outcome.failure, transient=e.transient)
            raise

        outcome = AttemptOutcome(
            model=model,
            attempt=number,
            elapsed_ms=1000 * (time.perf_counter() - t0),
            entry=entry,
        )
        outcomes.append(outcome)
        log.info("Attempt succeeded", model=model, attempt=number, elapsed_ms=outcome.elapsed_ms)
        return entry


class LookupSession:
    """Keeps only the newest of overlapping lookups.

    Each ``search`` gets a generation number; when a lookup finishes after a
    newer one has started, its result is discarded.
    """

    def __init__(self, orchestrator: Optional[Orchestrator] = None):
        self.orchestrator = orchestrator or Orchestrator()
        self.latest: Optional[LookupResult] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def search(self, raw_query: str) -> Optional[LookupResult]:
        """Run a lookup; return ``None`` if a newer search superseded it."""
        self._generation += 1
        generation = self._generation
        result = await self.orchestrator.lookup(raw_query)
        if generation != self._generation:
            log.info("Discarding stale lookup result", query=raw_query,
                     generation=generation, current=self._generation)
            return None
        self.latest = result
        return result


async def lookup(raw_query: str) -> Dict[str, Any]:
    """Look up a query with the configured models.

    Returns ``{"success": True, "data": {...}}`` or
    ``{"success": False, "error": "..."}``.
    """
    result = await Orchestrator().lookup(raw_query)
    return result.to_payload()
