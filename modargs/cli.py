"""Command-line interface for checking module argument strings.

WHY: Module authors and users need a quick way to see how an argument
string will be parsed (which keys, which values, which sample spec)
without loading the module itself.

HOW: Uses argparse to accept the argument string, an optional
comma-separated valid-key list, and output options. The string is
parsed with ModArgs.build(); results go to stdout as ``key=value``
lines or JSON. Status and error messages go to stderr.

RULES:
- Positional argument: the argument string (may be empty)
- --valid-keys: comma-separated allow-list; omitted means any key
- --sample-spec: also assemble and print the sample spec
- --json: print one JSON object instead of text lines
- Errors print "Error: <message>" to stderr and exit with status 1
- --log-level is checked against LOG_LEVELS; a bad value is a usage error
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from modargs.config import LOG_FORMAT, LOG_LEVEL, LOG_LEVELS
from modargs.core.arguments import ModArgs
from modargs.core.errors import ModArgsError
from modargs.sample.spec import bytes_per_second, frame_size

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _split_keys(text: Optional[str]) -> Optional[List[str]]:
    if text is None:
        return None
    return [k.strip() for k in text.split(",") if k.strip()]


def _run(args: argparse.Namespace) -> int:
    valid_keys = _split_keys(args.valid_keys)

    try:
        with ModArgs.build(args.arguments, valid_keys) as modargs:
            values = modargs.as_dict()
            spec = modargs.get_sample_spec() if args.sample_spec else None
    except (ModArgsError, ValueError) as e:
        logger.debug("Rejected argument string %r", args.arguments)
        _status("Error: {}".format(e))
        return 1

    if args.json:
        output = {"arguments": values}
        if spec is not None:
            output["sample_spec"] = dict(
                spec.to_dict(),
                frame_size=frame_size(spec),
                bytes_per_second=bytes_per_second(spec),
            )
        print(json.dumps(output, indent=2, sort_keys=True))
        return 0

    for key in sorted(values):
        print("{}={}".format(key, values[key]))
    if spec is not None:
        _status("Sample spec:")
        print(spec.describe())
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="modargs",
        description="Parse a module argument string (key=value pairs) and "
                    "print the resulting arguments and sample spec.",
    )

    parser.add_argument(
        "arguments",
        help="The argument string, e.g. 'rate=44100 channels=2'.",
    )

    parser.add_argument(
        "--valid-keys",
        default=None,
        help="Comma-separated list of accepted keys (default: accept any key).",
    )

    parser.add_argument(
        "--sample-spec",
        action="store_true",
        help="Also assemble the sample spec from rate, channels and format.",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON object instead of key=value lines.",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=LOG_LEVEL,
        help="Logging level for diagnostics on stderr (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Exits with the status returned by the run
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level not in LOG_LEVELS:
        # argparse does not check a default taken from MODARGS_LOG_LEVEL
        parser.error("invalid log level {!r} (choose from {})".format(
            args.log_level, ", ".join(LOG_LEVELS)))

    logging.basicConfig(
        level=args.log_level,
        format=LOG_FORMAT,
    )

    status = _run(args)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
