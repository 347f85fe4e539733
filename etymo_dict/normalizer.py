"""Query validation performed before anything is sent to a model."""

import re

from .errors import EmptyInput, NonEnglishInput

# Anything outside printable ASCII (0x20-0x7E) counts as non-English.
_NON_ENGLISH = re.compile(r"[^\x20-\x7E]")


def normalize(raw: str) -> str:
    """Trim a raw query and reject empty or non-English input."""
    query = raw.strip()
    if not query:
        raise EmptyInput()
    if _NON_ENGLISH.search(query):
        raise NonEnglishInput()
    return query
