"""
Console reporter: the presentation side of outcomes.

The engine never formats or sends output itself. A transport hands each outcome
to a reporter; this one prints to a rich console and is what the bundled demo
transport uses. Chat transports provide their own, with the same three
severities:

- info: plain informational panel.
- warn: ":warning:" panel in the warning accent (usage errors, unknown commands).
- severe: ":exclamation:" panel in the severe accent (handler failures, bans, ...).

Palette
- Define a mapping named __styles__ in __main__ to override any entry
  ("info-border", "warning-border", "severe-border", "title").
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.emoji import Emoji
from rich.panel import Panel
from rich.text import Text

from .faults import CommandException
from .outcomes import *
from .utils import *


class Reporter:
    """
    Render messages and outcomes on a rich console.

    Parameters
    - console: Console | Unset, defaults to a console on standard output.
    - colorful: bool, apply the palette (faults render uncolored otherwise).
    """

    def __init__(self, console=Unset, /, *, colorful=True):
        if not isinstance(console := coalesce(console, Console()), Console):
            raise TypeError("reporter 'console' must be a rich console")
        self._console = console
        self._colorful = bool(colorful)

    @property
    def console(self):
        return self._console

    def _styles(self):
        return defaultdict(str, {
            "info-border": "#36C5F0",  # sky-blue
            "warning-border": "#FFD600",  # amber
            "severe-border": "#EF4444",  # red
            "title": "bold #FF4D94",  # magenta branding
        } | getattr(__import__("__main__"), "__styles__", {}))

    def _send(self, renderable, border, title=Unset):
        style = self._styles()[border] if self._colorful else ""
        title = Text(title, self._styles()["title"] if self._colorful else "") if title else None
        self._console.print(Panel(renderable, border_style=style, title=title, title_align="left"))

    def send(self, message, /, *, title=Unset, fields=()):
        """
        Print an informational panel, optionally with (name, value) fields.
        """
        renders = [Text(message)] if message else []
        for name, value in fields:
            renders.append(Text.assemble((name, "bold"), "\n", value))
        self._send(Group(*renders), "info-border", title)

    def info(self, message, /):
        self._send(Text(message), "info-border")

    def warn(self, message, /):
        self._send(Text(Emoji.replace(":warning: ") + message), "warning-border")

    def severe(self, message, /):
        self._send(Text(Emoji.replace(":exclamation: ") + message), "severe-border")

    def report(self, outcome, /):
        """
        Print a reportable outcome; stay silent for the others.

        Returns
        - True when something was printed.
        """
        if not outcome.reportable:
            return False
        fault = outcome.fault
        if not isinstance(fault, CommandException):
            raise TypeError("report() outcome must carry a fault")
        fault = fault.__replace__(colorful=self._colorful)
        self._send(fault, "severe-border" if isinstance(outcome, Failed) else "warning-border")
        return True


__all__ = (
    "Reporter",
)
