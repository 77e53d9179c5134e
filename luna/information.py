"""
Information module: the built-in help command.

help_command(reporter) builds a "help" descriptor (alias "commands", parameter
"optional: module") that lists the modules of the invoking catalog, or every
command of one module, through the given reporter.

    luna help              → modules with their first few commands
    luna help moderation   → full entries of the moderation commands
"""
from .descriptors import Descriptor
from .utils import *


def help_command(reporter, /, *, alias=Unset):
    """
    Build the help descriptor.

    Parameters
    - reporter: object with send(message, *, title, fields) and warn(message).
    - alias: str | Unset, invocation alias shown in callers and usage lines.
    """

    def help(context):
        catalog = context.catalog
        invoke = " ".join(filter(None, (alias, "help")))

        if context.parameter is None:
            listing = []
            for module in catalog.modules:
                callers = [command.caller(alias) for command in module.commands[:3]]
                if len(module.commands) > 3:
                    callers.append("...")
                listing.append("%s ~ [%s]" % (module.name, ", ".join(callers)))
            reporter.send(Unset, title="help menu", fields=(
                ("how to use the bot",
                 "below is the list of modules available; to get the full list of commands of "
                 "a module, use '%s <module>'" % invoke),
                ("available modules", "\n".join(listing) or "none"),
            ))
            return None

        wanted = context.parameter.lower()
        for module in catalog.modules:
            if module.name.lower() == wanted:
                reporter.send(
                    "\n\n".join(command.information(alias) for command in module.commands),
                    title="list of commands of the %s module" % module.name.lower(),
                )
                return module

        reporter.warn("that module does not exist, use '%s' to get the full list of modules." % invoke)
        return None

    return Descriptor(
        "help",
        help,
        aliases=["commands"],
        parameters=["optional: module"],
        description="Displays how to use the bot and the list of available modules",
    )


__all__ = (
    "help_command",
)
