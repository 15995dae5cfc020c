"""Finite-state tokenizer for ``key=value`` argument strings.

WHY: Module argument strings are a flat, whitespace-separated list of
``key=value`` pairs where values may be bare, double-quoted, or
single-quoted. Edge cases (``k=`` at end of input, ``k= next=1``, a quote
that never closes) must behave exactly the same on every call, so the
scanner is an explicit state machine rather than a pile of flags.

HOW: ``transition()`` is a pure function from (state, character) to
(next state, action). ``finish()`` decides what the final state means at
end of input. ``tokenize()`` drives both over the input once, left to
right, tracking slice offsets and yielding each committed pair.

RULES:
- Whitespace is the C isspace set only (space, \\t, \\n, \\v, \\f, \\r)
- Only '=' terminates a key; whitespace inside a key is kept
- '=' where a key should start is a parse error
- Whitespace right after '=' commits an empty value
- Quoted values end at the matching quote; there are no escapes
- End of input: VALUE_START commits "", VALUE_SIMPLE commits the value,
  WHITESPACE is a clean end, anything else is a parse error
- Pairs are yielded in input order; duplicates are left to the caller
"""

from __future__ import annotations

import enum
import logging
from typing import Iterator, Optional, Tuple

from modargs.core.errors import ParseError

logger = logging.getLogger(__name__)

WHITESPACE_CHARS = frozenset(" \t\n\r\x0b\x0c")
"""Characters treated as separators (the C locale isspace set)."""


class State(enum.Enum):
    """Scanner states."""

    WHITESPACE = "whitespace"
    KEY = "key"
    VALUE_START = "value_start"
    VALUE_SIMPLE = "value_simple"
    VALUE_DOUBLE_QUOTED = "value_double_quoted"
    VALUE_SINGLE_QUOTED = "value_single_quoted"


class Action(enum.Enum):
    """What the driver does with the character that caused a transition."""

    SKIP = "skip"
    BEGIN_KEY = "begin_key"
    EXTEND_KEY = "extend_key"
    END_KEY = "end_key"
    OPEN_QUOTE = "open_quote"
    BEGIN_VALUE = "begin_value"
    EXTEND_VALUE = "extend_value"
    COMMIT = "commit"
    COMMIT_EMPTY = "commit_empty"
    FAIL = "fail"


_CLOSING_QUOTE = {
    State.VALUE_DOUBLE_QUOTED: '"',
    State.VALUE_SINGLE_QUOTED: "'",
}


def transition(state: State, char: str) -> Tuple[State, Action]:
    """Compute the next state and action for one input character.

    Args:
        state: Current scanner state.
        char: A single character of input.

    Returns:
        (next_state, action). A FAIL action leaves the state unchanged.
    """
    if state is State.WHITESPACE:
        if char == "=":
            return state, Action.FAIL
        if char in WHITESPACE_CHARS:
            return state, Action.SKIP
        return State.KEY, Action.BEGIN_KEY

    if state is State.KEY:
        if char == "=":
            return State.VALUE_START, Action.END_KEY
        return state, Action.EXTEND_KEY

    if state is State.VALUE_START:
        if char == "'":
            return State.VALUE_SINGLE_QUOTED, Action.OPEN_QUOTE
        if char == '"':
            return State.VALUE_DOUBLE_QUOTED, Action.OPEN_QUOTE
        if char in WHITESPACE_CHARS:
            return State.WHITESPACE, Action.COMMIT_EMPTY
        return State.VALUE_SIMPLE, Action.BEGIN_VALUE

    if state is State.VALUE_SIMPLE:
        if char in WHITESPACE_CHARS:
            return State.WHITESPACE, Action.COMMIT
        return state, Action.EXTEND_VALUE

    # Quoted values: only the matching quote ends them
    if char == _CLOSING_QUOTE[state]:
        return State.WHITESPACE, Action.COMMIT
    return state, Action.EXTEND_VALUE


def finish(state: State) -> Action:
    """Return the action implied by reaching end of input in ``state``."""
    if state is State.WHITESPACE:
        return Action.SKIP
    if state is State.VALUE_START:
        return Action.COMMIT_EMPTY
    if state is State.VALUE_SIMPLE:
        return Action.COMMIT
    return Action.FAIL


def _failure(state: State, position: int, key: Optional[str]) -> ParseError:
    if state is State.KEY:
        return ParseError(f"Key {key!r} is not followed by '='", position, key)
    if state in _CLOSING_QUOTE:
        return ParseError(
            f"Unterminated {_CLOSING_QUOTE[state]} quoted value for key {key!r}",
            position,
            key,
        )
    return ParseError(f"'=' without a preceding key at position {position}", position)


def tokenize(raw: Optional[str]) -> Iterator[Tuple[str, str]]:
    """Scan an argument string and yield ``(key, value)`` pairs.

    Args:
        raw: The argument string. None is treated like an empty string.

    Yields:
        Each committed (key, value) pair in input order.

    Raises:
        ParseError: On '=' with no key, an unterminated quote, or a
            trailing key without '='.
    """
    if not raw:
        return

    state = State.WHITESPACE
    key_start = key_end = 0
    value_start = value_end = 0

    for pos, char in enumerate(raw):
        next_state, action = transition(state, char)

        if action is Action.BEGIN_KEY:
            key_start, key_end = pos, pos + 1
        elif action is Action.EXTEND_KEY:
            key_end = pos + 1
        elif action is Action.OPEN_QUOTE:
            value_start = value_end = pos + 1
        elif action is Action.BEGIN_VALUE:
            value_start, value_end = pos, pos + 1
        elif action is Action.EXTEND_VALUE:
            value_end = pos + 1
        elif action is Action.COMMIT:
            yield raw[key_start:key_end], raw[value_start:value_end]
        elif action is Action.COMMIT_EMPTY:
            yield raw[key_start:key_end], ""
        elif action is Action.FAIL:
            error = _failure(state, pos, None)
            logger.debug("Parse failure: %s", error)
            raise error

        state = next_state

    action = finish(state)
    if action is Action.COMMIT:
        yield raw[key_start:key_end], raw[value_start:value_end]
    elif action is Action.COMMIT_EMPTY:
        yield raw[key_start:key_end], ""
    elif action is Action.FAIL:
        error = _failure(state, len(raw), raw[key_start:key_end])
        logger.debug("Parse failure: %s", error)
        raise error
