"""
Per-message outcomes produced by Engine.process().

Every message ends in exactly one outcome; the engine never raises past its
boundary for a malformed message.

Outcomes
- Ignored: the message was malformed, filtered by policy, not addressed to the
  bot, or empty after normalization.
- Unmatched: no descriptor matched the leading keyword (UnknownCommandError).
- MissingRequired: required parameters were left unfilled (MissingRequiredParameterError).
- ExcessInput: unkeyed text could not be placed (ExcessUnmatchedInputError).
- Vetoed: the requirement gate refused a restricted command (RequirementNotMetError).
- Failed: the handler raised (DelegatedCommandError).
- Dispatched: the handler ran; `result` is whatever it returned, never awaited.

`reportable` tells the presentation layer whether the outcome should be shown
to the originating channel. Vetoed outcomes are not reportable so restricted
commands do not reveal their existence.
"""
from typing import NamedTuple, Any


class Ignored(NamedTuple):
    reason: str

    ok = False
    reportable = False


class Unmatched(NamedTuple):
    fault: Any
    keyword: str

    ok = False
    reportable = True


class MissingRequired(NamedTuple):
    fault: Any
    descriptor: Any
    missing: tuple

    ok = False
    reportable = True


class ExcessInput(NamedTuple):
    fault: Any
    descriptor: Any
    leftover: str

    ok = False
    reportable = True


class Vetoed(NamedTuple):
    fault: Any
    descriptor: Any

    ok = False
    reportable = False


class Failed(NamedTuple):
    fault: Any
    descriptor: Any

    ok = False
    reportable = True


class Dispatched(NamedTuple):
    context: Any
    descriptor: Any
    result: Any = None

    ok = True
    reportable = False


__all__ = (
    "Ignored",
    "Unmatched",
    "MissingRequired",
    "ExcessInput",
    "Vetoed",
    "Failed",
    "Dispatched",
)
