"""Sample format record, format aliases, and domain validation.

WHY: Module arguments describe audio streams with ``rate``, ``channels``
and ``format`` keys. The parser needs a typed record to assemble them
into, a fixed table of accepted format names, and a validity check that
belongs to the audio domain rather than to the parser.

HOW: SampleFormat is an enum of encodings; S16NE is an alias member that
resolves to S16LE or S16BE from sys.byteorder at import time. SampleSpec
is a frozen dataclass. Validation runs the record's dict form through
jsonschema against sample_spec_schema.json, which holds the bounds.

RULES:
- Format names are matched case-sensitively through FORMAT_ALIASES
- "s16ne", "s16" and "16" all mean native-endian signed 16-bit
- Valid rate: 1..192000 Hz; valid channels: 1..32
- Validation never raises; callers decide what an invalid spec means
"""

from __future__ import annotations

import enum
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

_SCHEMA_PATH = Path(__file__).resolve().parent / "sample_spec_schema.json"


class SampleFormat(enum.Enum):
    """Sample encodings understood by the audio pipeline."""

    S16LE = "s16le"
    S16BE = "s16be"
    U8 = "u8"
    FLOAT32 = "float32"
    ULAW = "ulaw"
    ALAW = "alaw"
    # Alias of S16LE or S16BE depending on the host
    S16NE = "s16le" if sys.byteorder == "little" else "s16be"


FORMAT_ALIASES: dict[str, SampleFormat] = {
    "s16le": SampleFormat.S16LE,
    "s16be": SampleFormat.S16BE,
    "s16ne": SampleFormat.S16NE,
    "s16": SampleFormat.S16NE,
    "16": SampleFormat.S16NE,
    "u8": SampleFormat.U8,
    "8": SampleFormat.U8,
    "float32": SampleFormat.FLOAT32,
    "ulaw": SampleFormat.ULAW,
    "alaw": SampleFormat.ALAW,
}
"""Accepted ``format=`` values (case-sensitive) and their encodings."""

_SAMPLE_SIZES: dict[SampleFormat, int] = {
    SampleFormat.S16LE: 2,
    SampleFormat.S16BE: 2,
    SampleFormat.U8: 1,
    SampleFormat.FLOAT32: 4,
    SampleFormat.ULAW: 1,
    SampleFormat.ALAW: 1,
}


@dataclass(frozen=True)
class SampleSpec:
    """Layout of an audio stream.

    Attributes:
        format: Sample encoding.
        rate: Samples per second per channel.
        channels: Number of interleaved channels (8-bit field).
    """

    format: SampleFormat
    rate: int
    channels: int

    def to_dict(self) -> dict[str, Any]:
        """Plain dict form, as checked against the JSON schema."""
        return {
            "format": self.format.value if isinstance(self.format, SampleFormat) else self.format,
            "rate": self.rate,
            "channels": self.channels,
        }

    def describe(self) -> str:
        """Short human-readable form, e.g. ``"s16le 2ch 44100Hz"``."""
        return "{} {}ch {}Hz".format(self.to_dict()["format"], self.channels, self.rate)


def parse_sample_format(name: str) -> SampleFormat | None:
    """Look up a format name in FORMAT_ALIASES; None if unrecognized."""
    return FORMAT_ALIASES.get(name)


_CACHED_VALIDATOR: Any = None


def _get_validator() -> Any:
    global _CACHED_VALIDATOR
    if _CACHED_VALIDATOR is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            schema = json.load(f)
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)
        _CACHED_VALIDATOR = validator_cls(schema)
    return _CACHED_VALIDATOR


def sample_spec_errors(spec: SampleSpec) -> list[str]:
    """Return every domain-rule violation in ``spec`` (empty if valid).

    Messages are prefixed with the offending field, e.g.
    ``"rate: 0 is less than the minimum of 1"``.
    """
    errors = []
    for error in _get_validator().iter_errors(spec.to_dict()):
        field = ".".join(str(p) for p in error.path) or "spec"
        errors.append("{}: {}".format(field, error.message))
    return errors


def sample_spec_valid(spec: SampleSpec) -> bool:
    """True if ``spec`` satisfies the audio domain rules."""
    return _get_validator().is_valid(spec.to_dict())


def sample_size(fmt: SampleFormat) -> int:
    """Bytes per single-channel sample for ``fmt``."""
    return _SAMPLE_SIZES[fmt]


def frame_size(spec: SampleSpec) -> int:
    """Bytes per frame (one sample for every channel)."""
    return sample_size(spec.format) * spec.channels


def bytes_per_second(spec: SampleSpec) -> int:
    """Byte rate of a stream with layout ``spec``."""
    return spec.rate * frame_size(spec)
