"""Argument set construction, lookup, and typed accessors.

WHY: A module receives its configuration as one flat string such as
``rate=44100 channels=2 device="/dev/dsp 1"``. Module code wants a
validated key-to-value mapping it can query, with integer and sample
spec conversion that behaves the same for every module.

HOW: ModArgs.build() runs the tokenizer over the string, checks each
committed key against the optional valid-key list, and collects pairs
into a local dict. Only when the whole string is accepted is a ModArgs
created around that dict, so a failed build never exposes partial
state. Accessors read the dict; get_u32() follows C strtoul base-0
rules and get_sample_spec() layers rate/channels/format onto a default.

RULES:
- Later duplicates overwrite earlier ones (last write wins)
- Unknown keys (when valid_keys is given) fail the whole build
- None, "" and all-whitespace input build an empty set
- get_u32: absent -> None, "" or trailing junk -> ValueTypeError,
  out-of-range values wrap/saturate like strtoul then keep the low 32 bits
- get_sample_spec: channels are truncated to 8 bits before validation
- The valid-key list is only read during build(); it is never stored
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Iterator, Mapping, Optional

from modargs import config
from modargs.core.errors import ModArgsError, ParseError, ValueTypeError
from modargs.core.tokenizer import WHITESPACE_CHARS, tokenize
from modargs.sample.spec import SampleSpec, parse_sample_format, sample_spec_errors

logger = logging.getLogger(__name__)

ULONG_MAX = 2 ** 64 - 1
_ULONG_MAX_DIGITS = len(str(ULONG_MAX))
U32_MASK = 0xFFFFFFFF
CHANNELS_MASK = 0xFF

# strtoul(v, &end, 0): optional C whitespace, optional sign, then a hex,
# octal or decimal digit run. fullmatch() rejects anything left over.
_STRTOUL_RE = re.compile(
    r"[ \t\n\r\x0b\x0c]*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))"
)


def parse_u32(text: str) -> Optional[int]:
    """Parse ``text`` as an unsigned integer and narrow it to 32 bits.

    WHY: Module arguments have always been read with C strtoul in base 0
    and cast to uint32, so "0x10", "010" and "-1" all have established
    meanings that existing configurations rely on.

    HOW: Match the whole string against the strtoul grammar. Negative
    numbers wrap modulo 2**64, magnitudes above ULONG_MAX saturate, and
    the result keeps its low 32 bits.

    RULES:
    - "0x"/"0X" prefix is hex, a leading "0" is octal, else decimal
    - Returns None when no digits are found or characters remain
    - "-1" -> 4294967295, "4294967296" -> 0
    - Decimal runs of any length saturate; int() never sees more than
      20 digits

    Args:
        text: The value text.

    Returns:
        The narrowed value, or None if ``text`` is not a number.
    """
    match = _STRTOUL_RE.fullmatch(text)
    if match is None:
        return None

    sign, hex_digits, oct_digits, dec_digits = match.groups()
    if hex_digits is not None:
        magnitude = int(hex_digits, 16)
    elif oct_digits is not None:
        magnitude = int(oct_digits, 8)
    elif len(dec_digits) > _ULONG_MAX_DIGITS:
        # Too long for an unsigned long, and possibly for int() itself
        magnitude = ULONG_MAX + 1
    else:
        magnitude = int(dec_digits, 10)

    if magnitude > ULONG_MAX:
        value = ULONG_MAX
    elif sign == "-":
        value = -magnitude & ULONG_MAX
    else:
        value = magnitude

    return value & U32_MASK


def _check_pair(key: object, value: object) -> None:
    if not isinstance(key, str) or not key:
        raise ParseError("Argument keys must be non-empty strings, got {!r}".format(key))
    if "=" in key or key[0] in WHITESPACE_CHARS:
        raise ParseError("Invalid argument key {!r}".format(key), key=key)
    if not isinstance(value, str):
        raise ParseError(
            "Value for {!r} must be a string, got {}".format(key, type(value).__name__),
            key=key,
        )


class ModArgs:
    """An immutable set of parsed module arguments.

    Create one with :meth:`build` (or :func:`parse_modargs`), query it,
    then release it with :meth:`free` or by using it as a context manager::

        with ModArgs.build("rate=48000 format=s16le", VALID_KEYS) as args:
            spec = args.get_sample_spec()
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        """Wrap an already-split mapping.

        Prefer :meth:`build`. Direct construction still enforces the key
        rules the tokenizer guarantees: keys are non-empty strings that
        contain no '=' and do not start with whitespace; values are strings.

        Raises:
            ParseError: If a key or value breaks those rules.
        """
        self._values: Dict[str, str] = dict(values) if values else {}
        for key, value in self._values.items():
            _check_pair(key, value)
        self._freed = False

    @classmethod
    def build(cls, raw: Optional[str], valid_keys: Optional[Iterable[str]] = None) -> "ModArgs":
        """Parse ``raw`` into a new argument set.

        Args:
            raw: The argument string, or None for "no arguments".
            valid_keys: Permitted key names, or None to accept any key.
                Only consulted during this call.

        Returns:
            A new ModArgs holding every committed pair.

        Raises:
            ParseError: If the string is malformed or uses a key that is
                not in ``valid_keys``. No partial set is returned.
        """
        allowed = None if valid_keys is None else frozenset(valid_keys)
        values: Dict[str, str] = {}

        for key, value in tokenize(raw):
            if allowed is not None and key not in allowed:
                logger.debug("Rejected unknown key %r", key)
                raise ParseError(
                    "Unknown argument {!r} (valid: {})".format(key, ", ".join(sorted(allowed)) or "none"),
                    key=key,
                )
            logger.debug("Committed %s=%r", key, value)
            values[key] = value

        return cls(values)

    # -- teardown ----------------------------------------------------------

    def free(self) -> None:
        """Release all keys and values. Safe to call more than once."""
        self._values.clear()
        self._freed = True

    def __enter__(self) -> "ModArgs":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.free()

    def _mapping(self) -> Dict[str, str]:
        if self._freed:
            raise ModArgsError("Argument set has already been freed")
        return self._values

    # -- lookup ------------------------------------------------------------

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for ``key`` ("" is a valid value), else ``default``."""
        return self._mapping().get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping()

    def __len__(self) -> int:
        return len(self._mapping())

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping())

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the key-to-value mapping."""
        return dict(self._mapping())

    def __repr__(self) -> str:
        if self._freed:
            return "ModArgs(<freed>)"
        return "ModArgs({!r})".format(self._values)

    # -- typed accessors ---------------------------------------------------

    def get_u32(self, key: str) -> Optional[int]:
        """Read ``key`` as an unsigned 32-bit integer.

        Returns:
            The value, or None if the key is absent.

        Raises:
            ValueTypeError: If the value is empty or not a number.
        """
        text = self.get(key)
        if text is None:
            return None
        if not text:
            raise ValueTypeError("Argument {!r} is empty, expected an integer".format(key), key=key)

        value = parse_u32(text)
        if value is None:
            raise ValueTypeError(
                "Argument {!r} has non-integer value {!r}".format(key, text), key=key
            )
        return value

    def get_sample_spec(self, default: Optional[SampleSpec] = None) -> SampleSpec:
        """Assemble a SampleSpec from the ``rate``, ``channels`` and ``format`` keys.

        WHY: Most audio modules accept the same three keys to describe the
        stream they produce or consume. Interpreting them in one place keeps
        every module's behavior and error messages identical.

        HOW: Start from ``default`` (or config.get_default_sample_spec()) and
        overwrite each field whose key is present, then validate the
        assembled record against the sample domain rules.

        RULES:
        - Absent keys keep the default field
        - ``channels`` is read as 32-bit then truncated to 8 bits, so
          channels=258 becomes 2
        - ``format`` must be a FORMAT_ALIASES name (case-sensitive)
        - The result must pass sample_spec_valid

        Raises:
            ValueTypeError: On a malformed integer, an unknown format name,
                or an invalid resulting spec.
            ValueError: If no ``default`` is given and the configured
                default (MODARGS_DEFAULT_*) is invalid.
        """
        spec = default if default is not None else config.get_default_sample_spec()
        fmt, rate, channels = spec.format, spec.rate, spec.channels

        value = self.get_u32("rate")
        if value is not None:
            rate = value

        value = self.get_u32("channels")
        if value is not None:
            channels = value & CHANNELS_MASK

        name = self.get("format")
        if name is not None:
            fmt = parse_sample_format(name)
            if fmt is None:
                raise ValueTypeError("Unrecognized sample format {!r}".format(name), key="format")

        result = SampleSpec(format=fmt, rate=rate, channels=channels)
        errors = sample_spec_errors(result)
        if errors:
            raise ValueTypeError("Invalid sample spec: " + "; ".join(errors))
        return result


def parse_modargs(raw: Optional[str], valid_keys: Optional[Iterable[str]] = None) -> ModArgs:
    """Shorthand for :meth:`ModArgs.build`."""
    return ModArgs.build(raw, valid_keys)
