"""Error taxonomy for dictionary lookups.

Every failure the lookup path can produce is one of these classes. The
orchestrator turns them into a ``LookupResult`` at its boundary, so callers
only ever see the class name and message.
"""

from typing import Optional


class DictionaryLookupError(Exception):
    """Base class for all lookup failures."""

    transient = False

    @property
    def kind(self) -> str:
        return type(self).__name__


class InputRejected(DictionaryLookupError):
    """The query was refused before any network call."""


class EmptyInput(InputRejected):
    def __init__(self, message: str = "Please enter a word or idiom."):
        super().__init__(message)


class NonEnglishInput(InputRejected):
    def __init__(self, message: str = "Please enter English text only."):
        super().__init__(message)


class ConfigurationError(DictionaryLookupError):
    """Missing or unusable configuration, e.g. no API key."""


class BackendError(DictionaryLookupError):
    """A single attempt against one model failed."""

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model

    def __str__(self) -> str:
        message = super().__str__()
        if self.model:
            return f"{self.model}: {message}"
        return message


class RequestTimeout(BackendError):
    transient = True


class ServiceUnavailable(BackendError):
    transient = True


class BackendFailure(BackendError):
    """Non-transient backend error (auth, unknown model, bad request)."""


class MalformedResponse(BackendError):
    """The model's text could not be parsed as JSON."""


class InvalidSchema(BackendError):
    """The parsed JSON does not have the shape of a dictionary entry."""


class AllBackendsExhausted(DictionaryLookupError):
    """No model produced a valid entry."""

    def __init__(self, cause: Optional[BackendError] = None):
        self.cause = cause
        if cause is None:
            message = "Failed to retrieve dictionary data: no models configured."
        else:
            message = f"Failed to retrieve dictionary data from any available model ({cause.kind}: {cause})"
        super().__init__(message)
