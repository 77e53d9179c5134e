"""
Modules: named groups of descriptors sharing a requirement gate.

A module is what registers commands with the bot (information, moderation,
music, ...). Besides grouping descriptors for help listings, it owns the
requirement predicate consulted for its restricted commands, e.g. "the author
holds the moderator role".
"""
from collections.abc import Iterable

from .descriptors import Descriptor
from .utils import *


class Module:
    """
    A named, immutable group of descriptors.

    Parameters
    - name: str, display name of the module ("Moderation").
    - commands: Iterable[Descriptor], in registration order.
    - requirement: Callable[[Message], bool] | None, predicate gating the
      module's restricted commands. Without one, restricted commands are
      always refused.
    """

    name = mirror("name")
    commands = mirror("commands")

    def __init__(self, name, commands=(), /, *, requirement=None):
        if not isinstance(name, str):
            raise TypeError("module 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("module 'name' cannot be empty")

        if isinstance(commands, str) or not isinstance(commands, Iterable):
            raise TypeError("module 'commands' must be an iterable of descriptors")
        commands = tuple(commands)
        if not all(isinstance(command, Descriptor) for command in commands):
            raise TypeError("module 'commands' must be an iterable of descriptors")

        if requirement is not None and not callable(requirement):
            raise TypeError("module 'requirement' must be callable")

        self._name = name
        self._commands = commands
        self._requirement = requirement

    @property
    def restricted(self):
        """
        Descriptors of this module flagged as restricted.
        """
        return tuple(command for command in self._commands if command.restricted)

    def is_requirement_met(self, descriptor, message, /):
        """
        Return True when `descriptor` may run for `message`.

        Unrestricted descriptors always pass; restricted ones pass only when the
        module's requirement predicate accepts the message.
        """
        if not descriptor.restricted:
            return True
        if self._requirement is None:
            return False
        return bool(self._requirement(message))

    def __repr__(self):
        return "module(name=%r, commands=%r)" % (self._name, tuple(command.identifier for command in self._commands))


__all__ = (
    "Module",
)
