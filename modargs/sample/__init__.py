"""Audio sample format domain: encodings, the SampleSpec record, validation.

WHY: ModArgs.get_sample_spec() assembles a SampleSpec from argument
values but does not own the rules for what a valid spec is. Those live
here, next to the record itself.

HOW: spec.py defines the enum, the dataclass, the alias table and the
jsonschema-backed validity check.

RULES:
- Nothing in this package imports from modargs.core
"""

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

__all__ = [
    "FORMAT_ALIASES",
    "SampleFormat",
    "SampleSpec",
    "bytes_per_second",
    "frame_size",
    "parse_sample_format",
    "sample_size",
    "sample_spec_errors",
    "sample_spec_valid",
]
