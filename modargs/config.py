"""Configuration defaults and .env loading.

WHY: The default sample spec that module arguments are layered onto is
owned by the host system, not by the parser. Keeping it in one place,
overridable from the environment, lets a deployment change the default
stream layout without touching code.

HOW: python-dotenv loads the .env file on import. MODARGS_DEFAULT_*
values are read only when the default is first needed:
get_default_sample_spec() calls load_default_sample_spec() once and
caches the validated SampleSpec.

RULES:
- MODARGS_DEFAULT_FORMAT accepts any name from FORMAT_ALIASES (default "s16ne")
- MODARGS_DEFAULT_RATE / MODARGS_DEFAULT_CHANNELS are decimal integers
- MODARGS_LOG_LEVEL is a logging level name used by the CLI
- Invalid environment values raise ValueError with a clear message
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from modargs.sample.spec import SampleSpec, parse_sample_format, sample_spec_errors

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Default sample spec
# ---------------------------------------------------------------------------

# Built-in fallbacks; MODARGS_DEFAULT_* override them when the default is loaded
DEFAULT_FORMAT_NAME = "s16ne"
DEFAULT_RATE = "44100"
DEFAULT_CHANNELS = "2"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL = os.getenv("MODARGS_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def load_default_sample_spec(
    format_name: str | None = None,
    rate: str | None = None,
    channels: str | None = None,
) -> SampleSpec:
    """Build the host's default SampleSpec from configuration values.

    WHY: get_sample_spec() starts from a default record and overwrites
    only the fields present in the argument string. That default must
    itself be valid, or every module without explicit arguments fails.

    HOW: Each missing argument is read from its MODARGS_DEFAULT_* variable,
    falling back to the matching module constant. The format name goes
    through the same alias table as ``format=`` arguments.

    RULES:
    - Unknown format names raise ValueError
    - Non-integer rate/channels raise ValueError
    - A spec that fails domain validation raises ValueError

    Args:
        format_name: Format alias, e.g. "s16le". Defaults to $MODARGS_DEFAULT_FORMAT.
        rate: Sample rate as text. Defaults to $MODARGS_DEFAULT_RATE.
        channels: Channel count as text. Defaults to $MODARGS_DEFAULT_CHANNELS.

    Returns:
        A validated SampleSpec.
    """
    if format_name is None:
        format_name = os.getenv("MODARGS_DEFAULT_FORMAT", DEFAULT_FORMAT_NAME)
    if rate is None:
        rate = os.getenv("MODARGS_DEFAULT_RATE", DEFAULT_RATE)
    if channels is None:
        channels = os.getenv("MODARGS_DEFAULT_CHANNELS", DEFAULT_CHANNELS)

    fmt = parse_sample_format(format_name)
    if fmt is None:
        raise ValueError(
            f"Unknown default sample format {format_name!r}. "
            f"Set MODARGS_DEFAULT_FORMAT to e.g. s16le, u8 or float32."
        )

    try:
        spec = SampleSpec(format=fmt, rate=int(rate), channels=int(channels))
    except ValueError:
        raise ValueError(
            f"Default rate and channels must be integers (got rate={rate!r}, "
            f"channels={channels!r}). Check MODARGS_DEFAULT_RATE and "
            f"MODARGS_DEFAULT_CHANNELS."
        ) from None

    errors = sample_spec_errors(spec)
    if errors:
        raise ValueError("Invalid default sample spec: " + "; ".join(errors))
    return spec


_CACHED_DEFAULT_SPEC: SampleSpec | None = None


def get_default_sample_spec() -> SampleSpec:
    """Return the configured default SampleSpec, loading it on first use.

    Resolved on demand so that a bad MODARGS_DEFAULT_* value only breaks
    callers that need the default, not importing the package.

    Raises:
        ValueError: If the configured default is invalid.
    """
    global _CACHED_DEFAULT_SPEC
    if _CACHED_DEFAULT_SPEC is None:
        _CACHED_DEFAULT_SPEC = load_default_sample_spec()
    return _CACHED_DEFAULT_SPEC
