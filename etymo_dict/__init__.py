"""English dictionary lookups backed by an OpenAI-compatible model service."""

from .errors import (
    AllBackendsExhausted,
    BackendError,
    ConfigurationError,
    DictionaryLookupError,
    EmptyInput,
    InputRejected,
    NonEnglishInput,
)
from .models import DictionaryEntry, LookupResult
from .normalizer import normalize
from .orchestrator import LookupSession, Orchestrator, lookup

__all__ = [
    "AllBackendsExhausted",
    "BackendError",
    "ConfigurationError",
    "DictionaryEntry",
    "DictionaryLookupError",
    "EmptyInput",
    "InputRejected",
    "LookupResult",
    "LookupSession",
    "NonEnglishInput",
    "Orchestrator",
    "lookup",
    "normalize",
]
