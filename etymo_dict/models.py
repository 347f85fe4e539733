"""Data models for dictionary entries and lookup results."""

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

EntryKind = Literal["word", "idiom"]


class MeaningGroup(BaseModel):
    """Definitions sharing one part of speech."""

    model_config = ConfigDict(populate_by_name=True)

    part_of_speech: str = Field(default="", alias="partOfSpeech")
    definitions: List[str] = Field(min_length=1)

    @field_validator("part_of_speech", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Morpheme(BaseModel):
    """One prefix, root or suffix and what it contributes."""

    part: str
    meaning: str


class RootWord(BaseModel):
    """A cognate sharing the queried word's root.

    ``breakdown`` separates parts with ``/`` and wraps the shared root in
    ``*``, e.g. ``pre/*dict*``.
    """

    term: str
    breakdown: str = ""
    meaning: str = ""

    def segments(self) -> List[Tuple[str, bool]]:
        """Split the breakdown into ``(text, highlighted)`` pairs."""
        pieces = self.breakdown.split("*")
        # Odd indices sit between a pair of markers.
        return [(piece, index % 2 == 1) for index, piece in enumerate(pieces) if piece]


class DictionaryEntry(BaseModel):
    """A validated dictionary entry for a word or an idiom."""

    model_config = ConfigDict(populate_by_name=True)

    kind: EntryKind = Field(default="word", validation_alias=AliasChoices("kind", "type"))
    term: str
    corrected_from: Optional[str] = Field(default=None, alias="correctedFrom")
    meaning_groups: List[MeaningGroup] = Field(
        alias="meaningGroups",
        validation_alias=AliasChoices("meaningGroups", "meaning", "meaning_groups"),
    )
    pronunciation: Optional[str] = None
    etymology: Optional[str] = None
    origin: Optional[str] = None
    morphemes: Optional[List[Morpheme]] = None
    root_words: Optional[List[RootWord]] = Field(default=None, alias="rootWords")
    related_words: Optional[List[str]] = Field(default=None, alias="relatedWords")
    examples: List[str] = Field(default_factory=list)

    @field_validator("term")
    @classmethod
    def _term_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("term must not be empty")
        return value

    @field_validator("meaning_groups", mode="before")
    @classmethod
    def _group_plain_meanings(cls, value: Any) -> Any:
        # Flat ``["meaning 1", "meaning 2"]`` lists become a single group.
        if not isinstance(value, list):
            return value
        groups: List[Any] = []
        loose: List[str] = []
        for item in value:
            if isinstance(item, str):
                if not loose:
                    groups.append({"partOfSpeech": "", "definitions": loose})
                loose.append(item)
            else:
                groups.append(item)
        return groups

    @field_validator("examples", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _drop_noop_correction(self) -> "DictionaryEntry":
        corrected = (self.corrected_from or "").strip()
        if not corrected or corrected == self.term:
            self.corrected_from = None
        else:
            self.corrected_from = corrected
        return self

    @property
    def cognate_fallback(self) -> List[str]:
        """Related words, shown only when there are no root words."""
        if self.root_words:
            return []
        return list(self.related_words or [])


class AttemptOutcome(BaseModel):
    """Diagnostic record of one call to one model."""

    model: str
    attempt: int
    elapsed_ms: float
    entry: Optional[DictionaryEntry] = None
    failure: Optional[str] = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.entry is not None


class LookupResult(BaseModel):
    """Outcome of a lookup: either ``data`` or an ``error`` message."""

    success: bool
    data: Optional[DictionaryEntry] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    cause_kind: Optional[str] = None

    @classmethod
    def ok(cls, entry: DictionaryEntry) -> "LookupResult":
        return cls(success=True, data=entry)

    @classmethod
    def failed(cls, error: Exception) -> "LookupResult":
        cause = getattr(error, "cause", None)
        return cls(
            success=False,
            error=str(error),
            error_kind=type(error).__name__,
            cause_kind=type(cause).__name__ if cause is not None else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Return the ``{"success": ..., "data"/"error": ...}`` shape."""
        if self.success and self.data is not None:
            return {"success": True, "data": self.data.model_dump(by_alias=True, exclude_none=True)}
        return {"success": False, "error": self.error or "Unknown error"}
