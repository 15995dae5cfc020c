"""Unit tests for configuration loading.

WHY: The default sample spec is the base every get_sample_spec() call
starts from. A bad environment value must fail loudly at load time
rather than surface later as a confusing module error.

HOW: load_default_sample_spec() is called with explicit values, so the
tests do not depend on the process environment or a local .env file.
"""

import importlib

import pytest

from modargs import config
from modargs.sample.spec import SampleFormat, SampleSpec, sample_spec_valid


class TestDefaultSampleSpec:
    """load_default_sample_spec builds a validated default record."""

    def test_explicit_values(self):
        spec = config.load_default_sample_spec("u8", "8000", "1")
        assert spec == SampleSpec(format=SampleFormat.U8, rate=8000, channels=1)

    def test_native_alias_resolves(self):
        spec = config.load_default_sample_spec("s16ne", "44100", "2")
        assert spec.format is SampleFormat.S16NE

    def test_module_default_is_valid(self):
        assert sample_spec_valid(config.get_default_sample_spec())

    def test_unknown_format_raises(self):
        with pytest.raises(ValueError, match="MODARGS_DEFAULT_FORMAT"):
            config.load_default_sample_spec("mp3", "44100", "2")

    def test_non_integer_rate_raises(self):
        with pytest.raises(ValueError, match="integers"):
            config.load_default_sample_spec("s16le", "fast", "2")

    def test_invalid_spec_raises(self):
        with pytest.raises(ValueError, match="Invalid default sample spec"):
            config.load_default_sample_spec("s16le", "0", "2")

    def test_falls_back_to_module_constants(self, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_FORMAT_NAME", "alaw")
        monkeypatch.setattr(config, "DEFAULT_RATE", "8000")
        monkeypatch.setattr(config, "DEFAULT_CHANNELS", "1")
        spec = config.load_default_sample_spec()
        assert spec == SampleSpec(format=SampleFormat.ALAW, rate=8000, channels=1)

    def test_reads_environment_when_loaded(self, monkeypatch):
        monkeypatch.setenv("MODARGS_DEFAULT_FORMAT", "ulaw")
        monkeypatch.setenv("MODARGS_DEFAULT_RATE", "8000")
        monkeypatch.setenv("MODARGS_DEFAULT_CHANNELS", "1")
        spec = config.load_default_sample_spec()
        assert spec == SampleSpec(format=SampleFormat.ULAW, rate=8000, channels=1)


class TestLazyDefault:
    """get_default_sample_spec resolves the default on first use only."""

    def test_result_is_cached(self, monkeypatch):
        first = config.get_default_sample_spec()
        monkeypatch.setenv("MODARGS_DEFAULT_RATE", "8000")
        assert config.get_default_sample_spec() is first

    def test_bad_environment_fails_on_use(self, monkeypatch):
        monkeypatch.setenv("MODARGS_DEFAULT_CHANNELS", "many")
        with pytest.raises(ValueError, match="MODARGS_DEFAULT_CHANNELS"):
            config.get_default_sample_spec()

    def test_bad_environment_does_not_break_import(self, monkeypatch):
        monkeypatch.setenv("MODARGS_DEFAULT_RATE", "abc")
        reloaded = importlib.reload(config)
        assert reloaded._CACHED_DEFAULT_SPEC is None
