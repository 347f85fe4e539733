"""Pytest configuration and fixtures."""

import asyncio
import hashlib
import json
import os
import pathlib
import time
import pytest
import vcr

# Calculate hash of prompts.py for cassette invalidation
PROMPTS_HASH = hashlib.sha256(
    (pathlib.Path(__file__).parent.parent / "etymo_dict" / "prompts.py").read_bytes()
).hexdigest()[:8]

RECIEPT_PAYLOAD = {
    "term": "receipt",
    "correctedFrom": "reciept",
    "type": "word",
    "meaning": [{"partOfSpeech": "noun", "definitions": ["受取"]}],
    "examples": ["I got a receipt / 受け取りをもらった"],
}


class Slow:
    """Scripted backend action: wait, then answer."""

    def __init__(self, seconds: float, text: str):
        self.seconds = seconds
        self.text = text


class ScriptedBackend:
    """Fake ``call_backend`` that plays back a script per model.

    Each action is a string to return, an exception to raise or a ``Slow``.
    """

    def __init__(self, script):
        self.script = {model: list(actions) for model, actions in script.items()}
        self.calls = []
        self.prompts = []
        self.times = []

    async def __call__(self, model: str, prompt: str) -> str:
        self.calls.append(model)
        self.times.append(time.perf_counter())
        self.prompts.append(prompt)
        action = self.script[model].pop(0)
        if isinstance(action, Exception):
            raise action
        if isinstance(action, Slow):
            await asyncio.sleep(action.seconds)
            return action.text
        return action


@pytest.fixture
def my_vcr():
    """VCR fixture for recording/replaying HTTP interactions."""
    return vcr.VCR(
        cassette_library_dir="tests/fixtures",
        filter_headers=[("authorization", "DUMMY")],
        record_mode="once",
    )


@pytest.fixture
def cassette():
    """Generate cassette filenames keyed by the prompt hash."""
    def _cassette(name: str) -> str:
        return f"{name}_{PROMPTS_HASH}.yaml"
    return _cassette


@pytest.fixture
def live_guard():
    """Skip unless live testing is enabled."""
    if not os.getenv("ETYMO_DICT_LIVE"):
        pytest.skip("Live LLM disabled (set ETYMO_DICT_LIVE=1)")


@pytest.fixture
def reciept_payload():
    return json.loads(json.dumps(RECIEPT_PAYLOAD))


@pytest.fixture
def reciept_text():
    return json.dumps(RECIEPT_PAYLOAD, ensure_ascii=False)


@pytest.fixture
def word_payload():
    """A complete word entry with etymology and cognates."""
    return {
        "type": "word",
        "term": "predict",
        "correctedFrom": None,
        "meaning": [
            {"partOfSpeech": "verb", "definitions": ["予言する", "予測する"]},
        ],
        "pronunciation": "/prɪˈdɪkt/",
        "etymology": "ラテン語 praedicere から",
        "morphemes": [
            {"part": "pre-", "meaning": "前に"},
            {"part": "dict", "meaning": "言う"},
        ],
        "rootWords": [
            {"term": "dictate", "breakdown": "*dict*/ate", "meaning": "口述する"},
            {"term": "contradict", "breakdown": "contra/*dict*", "meaning": "反論する"},
        ],
        "examples": ["Experts predict rain tomorrow. / 専門家は明日の雨を予測している。"],
    }


@pytest.fixture
def idiom_payload():
    return {
        "type": "idiom",
        "term": "break the ice",
        "meaning": [{"partOfSpeech": "idiom", "definitions": ["緊張をほぐす"]}],
        "origin": "凍った川の氷を割って船を通したことから",
        "examples": ["He told a joke to break the ice. / 彼は場を和ませるために冗談を言った。"],
    }


@pytest.fixture
def scripted_backend():
    """Factory for ``ScriptedBackend`` instances."""
    return ScriptedBackend


@pytest.fixture
def slow():
    return Slow
