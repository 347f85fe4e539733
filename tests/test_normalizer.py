"""Tests for query normalization."""

import pytest

from etymo_dict.errors import EmptyInput, InputRejected, NonEnglishInput
from etymo_dict.normalizer import normalize


def test_normalize_trims_whitespace():
    assert normalize("  reciept \n") == "reciept"


def test_normalize_keeps_inner_spaces_and_punctuation():
    assert normalize("don't judge a book by its cover!") == "don't judge a book by its cover!"


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", "　"])
def test_normalize_rejects_empty_input(raw):
    with pytest.raises(EmptyInput):
        normalize(raw)


@pytest.mark.parametrize("raw", [
    "こんにちは",
    "café",
    "naïve",
    "word😀",
    "tab\tinside",
    "bell\x07",
    "del\x7f",
])
def test_normalize_rejects_non_english_input(raw):
    with pytest.raises(NonEnglishInput):
        normalize(raw)


def test_rejections_share_base_class():
    with pytest.raises(InputRejected):
        normalize("日本語")


def test_printable_ascii_boundaries_are_accepted():
    assert normalize("a ~") == "a ~"
