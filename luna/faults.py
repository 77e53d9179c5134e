"""
Luna faults: per-message failures and how they present themselves.

Scope
- FaultCode: stable numeric identifiers, one per way a message can fail to
  reach its handler. Numbers never change once published so logs and user
  reports stay searchable.
- CommandException: base type carrying a message plus a read-only bag of
  options (code, title, hint, descriptor, ...). Each subclass declares its own
  code and title; raise sites only pass what varies.
- getdoc(): optional long-form description of a code, provided by the host.

Voice
- Short lowercase titles, one-sentence bodies, a single actionable hint.
- Arity faults always end with the usage template of the command.

Integration
- Matcher and validator raise these faults; Engine.process() catches them and
  turns them into outcomes (see luna.outcomes). No fault escapes process().
- Presentation layers either print the fault (it is a rich renderable) or read
  its options to build a transport-specific message.

Host overrides, read from __main__
- __codes__: FaultCode → label shown instead of the number.
- __docs__: FaultCode → description, attached as the `docs` option.
- __styles__: palette entries ("prog-name", "code", "fault-title", ...).
- __prog__: program name shown in the header.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import *


class FaultCode(IntEnum):
    """
    fault codes of the resolution pipeline.

    - 1110x routing: the leading keyword names no command.
    - 1112x arity: required parameters left unfilled.
    - 1113x delegation: the handler itself raised.
    - 1114x arity: unkeyed text nobody could take.
    - 1115x gating: the requirement of a restricted command refused the author.
    """
    UNKNOWN_COMMAND             = 11101
    MISSING_REQUIRED_PARAMETER  = 11125
    DELEGATED_ERROR             = 11131
    EXCESS_UNMATCHED_INPUT      = 11141
    REQUIREMENT_NOT_MET         = 11151

    def normalize(self):
        """
        label of this code as shown to users: the host's __codes__ entry if
        any, the number otherwise.
        """
        labels = getattr(__import__("__main__"), "__codes__", {})
        return str(labels.get(self, self.value))


class CommandException(Exception):
    """
    base fault: a message and read-only options.

    options
    - code / title: default to the subclass' __faultcode__ / __faulttitle__.
    - docs: defaults to getdoc(code).
    - hint: one sentence rendered after an arrow.
    - descriptor: the matched descriptor, when there is one.
    - colorful / fancy / prog: rendering switches.
    """
    __faultcode__ = Unset
    __faulttitle__ = "command error"

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        defaults = {"code": type(self).__faultcode__, "title": type(self).__faulttitle__}
        if isinstance(code := options.get("code", defaults["code"]), FaultCode):
            defaults["docs"] = getdoc(code)
        self.message = message
        self.options = MappingProxyType(defaults | options)

    @property
    def code(self):
        return self.options["code"]

    @property
    def title(self):
        return self.options["title"]

    @property
    def hint(self):
        return self.options.get("hint")

    def _palette(self):
        if not self.options.get("colorful", True):
            return defaultdict(str)
        return defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white
            "code": "bold #00E5FF",  # cyan
            "fault-title": "bold #FF4DA6",  # pink
            "fault-message": "#C8C8D0",  # light gray
            "hint-arrow": "dim #9CE19C",
            "hint": "italic #9CE19C",  # green
            "docs": "dim",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def __rich__(self):
        palette = self._palette()
        prog = getattr(__import__("__main__"), "__prog__", self.options.get("prog", "luna"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"

        header = Text.assemble(
            "[ ",
            (str(prog), palette["prog-name"]),
            " — ",
            (code, palette["code"]),
            " | ",
            (self.title.title(), palette["fault-title"]),
            " ]",
        )
        body = [Text(coalesce(self.message, ""), palette["fault-message"])]
        if self.hint:
            body.append(Text.assemble((" → ", palette["hint-arrow"]), (self.hint, palette["hint"])))
        if docs := self.options.get("docs"):
            body.append(Text(docs, palette["docs"]))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __replace__(self, /, **overrides):
        """
        rebuild the fault with some options overridden (colorful=False, ...).
        """
        return type(self)(self.message, **(dict(self.options) | overrides))


class UnknownCommandError(CommandException):
    __faultcode__ = FaultCode.UNKNOWN_COMMAND
    __faulttitle__ = "unknown command"


class MissingRequiredParameterError(CommandException):
    __faultcode__ = FaultCode.MISSING_REQUIRED_PARAMETER
    __faulttitle__ = "missing arguments"


class ExcessUnmatchedInputError(CommandException):
    __faultcode__ = FaultCode.EXCESS_UNMATCHED_INPUT
    __faulttitle__ = "too many arguments"


class RequirementNotMetError(CommandException):
    __faultcode__ = FaultCode.REQUIREMENT_NOT_MET
    __faulttitle__ = "requirement not met"


class DelegatedCommandError(CommandException):
    __faultcode__ = FaultCode.DELEGATED_ERROR
    __faulttitle__ = "delegated command error"


def getdoc(code, /):
    """
    host-provided description of a fault code, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "MissingRequiredParameterError",
    "ExcessUnmatchedInputError",
    "RequirementNotMetError",
    "DelegatedCommandError",
    "FaultCode",
    "getdoc",
)
