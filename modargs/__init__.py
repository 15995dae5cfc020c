"""Module argument parser: ``key=value`` strings to typed settings.

WHY: Loadable modules are configured with a single flat string such as
``rate=44100 channels=2 sink="Living Room"``. Every module needs the
same tokenizing, key checking, and integer/sample-spec conversion, with
the same errors.

HOW: Two layers. core.tokenizer scans the string with an explicit state
machine; core.arguments builds a ModArgs set from it and provides typed
accessors. The sample package owns the audio sample-spec record and its
validation rules.

RULES:
- Build once, read many times, free once
- ParseError for malformed strings, ValueTypeError for unusable values
- The default sample spec comes from config (overridable via .env)
"""

from modargs.core.arguments import ModArgs, parse_modargs, parse_u32
from modargs.core.errors import ModArgsError, ParseError, ValueTypeError

__version__ = "0.1.0"

__all__ = [
    "ModArgs",
    "ModArgsError",
    "ParseError",
    "ValueTypeError",
    "parse_modargs",
    "parse_u32",
]
