"""Shared test fixtures for the modargs test suite.

WHY: Several test modules need the same default sample spec and the same
valid-key list that a typical audio module would declare. Centralizing
them keeps expectations consistent across tokenizer, accessor and CLI
tests.

HOW: Pytest fixtures provide a fixed default SampleSpec (independent of
any .env in the working directory) and the usual audio module key list.

RULES:
- The fixture default spec is valid: s16le, 44100 Hz, 2 channels
- Tests that need the configured default use config.get_default_sample_spec()
- Every test starts with MODARGS_DEFAULT_* unset and no cached default
"""

from typing import List

import pytest

from modargs import config
from modargs.sample.spec import SampleFormat, SampleSpec

AUDIO_MODULE_KEYS: List[str] = ["rate", "channels", "format", "device", "sink_name"]


@pytest.fixture(autouse=True)
def clean_default_config(monkeypatch):
    """Clear MODARGS_DEFAULT_* and the cached default spec for each test."""
    for name in ("MODARGS_DEFAULT_FORMAT", "MODARGS_DEFAULT_RATE", "MODARGS_DEFAULT_CHANNELS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_CACHED_DEFAULT_SPEC", None)


@pytest.fixture
def default_spec():
    """A known-valid default sample spec: s16le 2ch 44100Hz."""
    return SampleSpec(format=SampleFormat.S16LE, rate=44100, channels=2)


@pytest.fixture
def audio_module_keys():
    """Valid-key list of a typical audio sink module."""
    return list(AUDIO_MODULE_KEYS)
