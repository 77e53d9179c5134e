"""
Arity validator.

Decides whether an extraction is complete enough to dispatch.

Rules
- Singleton descriptors always pass.
- Unfilled required parameters reject with MissingRequiredParameterError. When
  unkeyed text is left over as well, the missing parameters are what gets
  reported.
- Unkeyed text left after the fallback rules rejects with
  ExcessUnmatchedInputError.

Both faults carry the usage message built by usage_message(), meant for the
presentation layer; nothing is printed here.
"""
from .faults import MissingRequiredParameterError, ExcessUnmatchedInputError
from .utils import *


def usage_message(descriptor, alias=Unset, /):
    """
    Build the usage message of a descriptor.

    Example
    - "this command requires 1 argument, and can additionally take up to
      2 optional arguments.\\n\\nusage: luna ban <user> [days] [reason]"
    """
    message = "this command requires %s" % quantify(len(descriptor.required), "argument")
    if len(descriptor.optional) > 1:
        message += ", and can additionally take up to %s" % quantify(len(descriptor.optional), "optional argument")
    return message + ".\n\nusage: " + descriptor.usage(alias)


def validate(descriptor, extraction, alias=Unset, /):
    """
    Accept or reject an extraction.

    Raises
    - MissingRequiredParameterError: options carry `missing` (tuple of names).
    - ExcessUnmatchedInputError: options carry `leftover` (joined text).
    """
    if descriptor.singleton:
        return

    if extraction.missing:
        raise MissingRequiredParameterError(
            usage_message(descriptor, alias),
            descriptor=descriptor,
            missing=extraction.missing,
            hint="provide %s" % ", ".join("%r" % (name + ":") for name in extraction.missing),
        )

    if extraction.leftover:
        if descriptor.names:
            example = " ".join("%s: <%s>" % (name, name) for name in descriptor.names)
            hint = "tag each value with its parameter, e.g. %r" % example
        else:
            hint = "remove the extra words, this command takes no arguments"
        raise ExcessUnmatchedInputError(
            usage_message(descriptor, alias),
            descriptor=descriptor,
            leftover=" ".join(extraction.leftover),
            hint=hint,
        )


__all__ = (
    "usage_message",
    "validate",
)
