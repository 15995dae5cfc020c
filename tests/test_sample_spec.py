"""Unit tests for the sample spec record and its validation rules.

WHY: get_sample_spec() delegates "is this a usable stream layout?" to the
sample package. If the schema bounds or the alias table drift, modules
either reject valid configurations or accept streams the pipeline cannot
play.

HOW: Tests check the alias table, native-endian resolution, the
jsonschema-backed validity predicate and its messages, and the frame
size helpers.

RULES:
- Bounds: rate 1..192000, channels 1..32
"""

import sys

import pytest

from modargs.sample.spec import (
    FORMAT_ALIASES,
    SampleFormat,
    SampleSpec,
    bytes_per_second,
    frame_size,
    parse_sample_format,
    sample_size,
    sample_spec_errors,
    sample_spec_valid,
)


class TestSampleFormat:
    """SampleFormat members and the format alias table."""

    def test_native_endian_matches_host(self):
        expected = SampleFormat.S16LE if sys.byteorder == "little" else SampleFormat.S16BE
        assert SampleFormat.S16NE is expected

    def test_alias_table_is_case_sensitive(self):
        assert parse_sample_format("ulaw") is SampleFormat.ULAW
        assert parse_sample_format("ULAW") is None

    def test_unknown_name(self):
        assert parse_sample_format("s24le") is None

    def test_every_alias_maps_to_a_member(self):
        assert set(FORMAT_ALIASES.values()) <= set(SampleFormat)


class TestValidity:
    """sample_spec_valid() and sample_spec_errors() apply the domain rules."""

    def test_default_layout_is_valid(self, default_spec):
        assert sample_spec_valid(default_spec)
        assert sample_spec_errors(default_spec) == []

    @pytest.mark.parametrize("rate,channels", [
        (1, 1),
        (192000, 32),
        (8000, 1),
    ])
    def test_bounds_are_inclusive(self, rate, channels):
        assert sample_spec_valid(SampleSpec(SampleFormat.U8, rate, channels))

    @pytest.mark.parametrize("rate,channels", [
        (0, 2),
        (192001, 2),
        (44100, 0),
        (44100, 33),
    ])
    def test_out_of_range(self, rate, channels):
        assert not sample_spec_valid(SampleSpec(SampleFormat.S16LE, rate, channels))

    def test_error_names_the_field(self):
        errors = sample_spec_errors(SampleSpec(SampleFormat.S16LE, 0, 2))
        assert len(errors) == 1
        assert errors[0].startswith("rate:")

    def test_non_enum_format_is_invalid(self):
        assert not sample_spec_valid(SampleSpec("s24le", 44100, 2))


class TestSizes:
    """Frame size and byte rate helpers."""

    @pytest.mark.parametrize("fmt,size", [
        (SampleFormat.S16LE, 2),
        (SampleFormat.S16BE, 2),
        (SampleFormat.U8, 1),
        (SampleFormat.FLOAT32, 4),
        (SampleFormat.ULAW, 1),
        (SampleFormat.ALAW, 1),
    ])
    def test_sample_size(self, fmt, size):
        assert sample_size(fmt) == size

    def test_frame_size_and_byte_rate(self, default_spec):
        assert frame_size(default_spec) == 4
        assert bytes_per_second(default_spec) == 176400

    def test_describe(self):
        assert SampleSpec(SampleFormat.ULAW, 8000, 1).describe() == "ulaw 1ch 8000Hz"
