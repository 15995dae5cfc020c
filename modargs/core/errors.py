"""Error types raised by the argument parser and its typed accessors.

WHY: Callers (module loaders, the CLI) need to tell a malformed argument
string apart from a well-formed string whose values cannot be used. Both
are reported synchronously; nothing is retried or partially returned.

HOW: A single base class, ModArgsError, with two concrete kinds:
ParseError for the tokenizer/builder and ValueTypeError for the typed
accessors.

RULES:
- ParseError: '=' with no key, unterminated quote, trailing key without
  '=', or a key missing from the valid-key list
- ValueTypeError: empty or non-numeric integer, unknown format name,
  or an assembled sample spec that fails validation
- Catch ModArgsError to handle both
"""

from __future__ import annotations


class ModArgsError(Exception):
    """Base class for all argument parsing and conversion errors."""


class ParseError(ModArgsError):
    """The argument string is malformed or names a key that is not allowed.

    Attributes:
        position: Character offset where parsing failed. End-of-input
                  failures report the input length.
        key: The offending key for unknown-key failures, else None.
    """

    def __init__(self, message: str, position: int | None = None, key: str | None = None):
        super().__init__(message)
        self.position = position
        self.key = key


class ValueTypeError(ModArgsError):
    """A present value cannot be converted to the requested type.

    Attributes:
        key: The argument key whose value was rejected, if any.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
