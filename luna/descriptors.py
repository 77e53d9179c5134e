"""
Luna descriptor layer: static metadata for every invocable chat command.

What this module provides
- Descriptor: immutable record describing one command:
  • identifier and aliases (the keywords a message may start with),
  • declared parameters (required, or optional through the "optional: " prefix),
  • declared dependencies (identifiers of sibling descriptors),
  • the handler invoked with an InvocationContext,
  • help metadata (description) and the restricted flag for the requirement gate.
- classify(parameters): the parameter classifier, splitting a declared parameter
  list into required and optional names.
- command(...): create a Descriptor or a decorator that produces one.

Core ideas
- Metadata is validated and normalized once, at construction; every public field
  is a read-only mirror, so a catalog built from descriptors never changes.
- One sealed type for every command, tagged by `singleton`: identifiers starting
  with the SIGIL are singletons (argument-less, matched when nothing else is).
- Identifiers, aliases and dependencies are compared lower-cased.

Quick start
    from luna import command

    @command("ban", aliases=["suspend"], parameters=["user", "optional: days", "optional: reason"])
    def ban(context):
        print(context.parameters)

    ban.required   # ('user',)
    ban.optional   # ('days', 'reason')
    ban.usage()    # 'ban <user> [days] [reason]'
"""
import functools
import inspect
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .utils import *

SIGIL = "$"
"""Identifier prefix marking a singleton descriptor."""

SEPARATOR = ":"
"""Separator between a keyword and its value ("reason: spam")."""

OPTIONAL = "optional:"
"""Prefix marking an optional parameter in a declared parameter list."""


def _typename(name):
    # "CommandDescriptor" → "command-descriptor"
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower()


def _introspection(fields, displayable):
    """
    Build the __repr__/__rich_repr__ pair shared by every descriptor type.
    """

    @rename("__rich_repr__")
    def __rich_repr__(self):
        for field in coalesce(displayable, fields):
            yield field, getattr(self, field)

    @rename("__repr__")
    def __repr__(self):
        pairs = map(functools.partial(operator.mod, "%s=%r"), __rich_repr__(self))
        return "%s(%s)" % (type(self).__typename__, ", ".join(pairs))

    return {"__repr__": __repr__, "__rich_repr__": __rich_repr__}


class DescriptorType(type):
    """
    Metaclass of descriptor types.

    - every name in __introspectable__ becomes a read-only mirror() of its
      "_name" backing field.
    - __repr__ and __rich_repr__ list __displayable__ (or all introspectable
      fields) so descriptors print the same in logs and in rich output.
    - __typename__ (hyphenated lowercase class name) prefixes every
      construction error ("descriptor 'aliases' must be ...").
    - sealed=True forbids subclasses: a catalog only ever holds one shape.
    """

    def __new__(cls, name, bases, namespace, /, *, sealed=False):
        fields = namespace.get("__introspectable__", ())
        generated = {field: mirror(field) for field in fields}
        generated |= _introspection(fields, namespace.get("__displayable__", Unset))
        generated["__typename__"] = _typename(name)

        if sealed:
            @rename("__init_subclass__")
            def __init_subclass__(subclass, **options):
                raise TypeError(f"type {name!r} is not an acceptable base type")
            generated["__init_subclass__"] = classmethod(__init_subclass__)

        return super().__new__(cls, name, bases, namespace | generated)


@functools.cache
def _classify(parameters):
    required = []
    optional = []
    for parameter in parameters:
        if parameter.startswith(OPTIONAL):
            optional.append(parameter[len(OPTIONAL):].strip())
        else:
            required.append(parameter)
    return tuple(required), tuple(optional)


def classify(parameters, /):
    """
    Split a declared parameter list into (required, optional) name tuples.

    Entries carrying the "optional:" prefix are optional and are returned without
    the prefix; every other entry is required. Declaration order is preserved in
    both tuples, the two are disjoint, and together they hold every declared name.

    Examples
    - classify(["user", "optional: days"]) -> (("user",), ("days",))
    - classify([])                         -> ((), ())
    """
    if isinstance(parameters, str) or not isinstance(parameters, Iterable):
        raise TypeError("classify() argument must be an iterable of strings")
    parameters = tuple(parameters)
    if not all(isinstance(parameter, str) for parameter in parameters):
        raise TypeError("classify() argument must be an iterable of strings")
    return _classify(parameters)


def _keyword(cls, label, object):
    """
    Validate one invocation keyword (identifier or alias) and lower-case it.
    """
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} {label!r} must be a string")
    elif not (object := object.strip()):
        raise ValueError(f"{cls.__typename__} {label!r} cannot be empty")
    elif re.search(r"\s", object):
        raise ValueError(f"{cls.__typename__} {label!r} must be a single word")
    return object.lower()


def _strings(cls, label, objects):
    """
    Validate an iterable of strings (not a plain string); return a tuple.
    """
    if isinstance(objects, str | Text) or not isinstance(objects, Iterable):
        raise TypeError(f"{cls.__typename__} {label!r} must be an iterable of strings")
    objects = tuple(objects)
    if not all(isinstance(object, str) for object in objects):
        raise TypeError(f"{cls.__typename__} {label!r} must be an iterable of strings")
    return objects


def _process_identity(cls, metadata):
    """
    Normalize identifier and aliases.

    Rules
    - identifier and aliases are single, non-empty words, lower-cased.
    - aliases may not repeat each other nor the identifier.
    - singleton descriptors (identifier starting with SIGIL) take no aliases:
      they are never matched by keyword.
    """
    metadata["identifier"] = identifier = _keyword(cls, "identifier", metadata["identifier"])

    aliases = []
    for alias in _strings(cls, "aliases", metadata["aliases"]):
        alias = _keyword(cls, "aliases", alias)
        if alias == identifier or alias in aliases:
            raise ValueError(f"{cls.__typename__} alias {alias!r} is already in use")
        aliases.append(alias)

    if identifier.startswith(SIGIL) and aliases:
        raise ValueError(f"{cls.__typename__} singleton {identifier!r} cannot have aliases")

    metadata["aliases"] = tuple(aliases)


def _process_parameters(cls, metadata):
    """
    Normalize the declared parameter list and derive required/optional names.

    Rules
    - every entry is a non-empty string; "optional:" entries must name something.
    - names are single words without the SEPARATOR (anything else would never
      match as a keyword) and may not repeat, whether required or optional.
    - singleton descriptors take no parameters.
    """
    parameters = []
    for parameter in _strings(cls, "parameters", metadata["parameters"]):
        if not (parameter := parameter.strip()):
            raise ValueError(f"{cls.__typename__} 'parameters' must be an iterable of non-empty strings")
        if parameter.startswith(OPTIONAL):
            parameter = OPTIONAL + " " + parameter[len(OPTIONAL):].strip()
        parameters.append(parameter)

    required, optional = classify(parameters)
    names = []
    for parameter in parameters:
        name = parameter[len(OPTIONAL):].strip() if parameter.startswith(OPTIONAL) else parameter
        if not name:
            raise ValueError(f"{cls.__typename__} optional parameter must have a name")
        if SEPARATOR in name:
            raise ValueError(f"{cls.__typename__} parameter {name!r} cannot contain {SEPARATOR!r}")
        if re.search(r"\s", name):
            raise ValueError(f"{cls.__typename__} parameter {name!r} must be a single word")
        if name.lower() in map(str.lower, names):
            raise ValueError(f"{cls.__typename__} parameter {name!r} is already in use")
        names.append(name)

    if metadata["identifier"].startswith(SIGIL) and parameters:
        raise ValueError(f"{cls.__typename__} singleton {metadata['identifier']!r} cannot have parameters")

    metadata["parameters"] = tuple(parameters)
    metadata["required"] = required
    metadata["optional"] = optional
    metadata["names"] = tuple(names)


def _process_dependencies(cls, metadata):
    """
    Normalize dependency identifiers: lower-cased, unique, never self-referencing.
    """
    dependencies = []
    for dependency in _strings(cls, "dependencies", metadata["dependencies"]):
        dependency = _keyword(cls, "dependencies", dependency)
        if dependency in dependencies:
            raise ValueError(f"{cls.__typename__} dependency {dependency!r} is duplicated")
        if dependency == metadata["identifier"]:
            raise ValueError(f"{cls.__typename__} {dependency!r} cannot depend on itself")
        dependencies.append(dependency)
    metadata["dependencies"] = tuple(dependencies)


def _process_scalars(cls, metadata):
    """
    Validate handler, description and restricted flag.
    """
    if not callable(metadata["handler"]):
        raise TypeError(f"{cls.__typename__} 'handler' must be callable")

    if not isinstance(description := metadata["description"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    elif isinstance(description, str) and not (description := description.strip()):
        raise ValueError(f"{cls.__typename__} 'description' cannot be empty")
    metadata["description"] = coalesce(description)

    if not isinstance(metadata["restricted"], bool):
        raise TypeError(f"{cls.__typename__} 'restricted' must be a boolean")


class Descriptor(metaclass=DescriptorType, sealed=True):
    """
    Immutable command descriptor.

    Lifecycle
    - Constructed once when modules register their commands; metadata is
      validated and normalized, then mirrored into read-only properties.
    - Handed to a Catalog, which indexes it by identifier and aliases.
    - Called (descriptor(context)) by the engine at most once per message.
    """

    __introspectable__ = (
        "identifier",
        "aliases",
        "parameters",
        "dependencies",
        "handler",
        "description",
        "restricted",
        "required",
        "optional",
        "names",
    )

    __displayable__ = (
        "identifier",
        "aliases",
        "parameters",
        "dependencies",
        "restricted",
    )

    def __new__(
            cls,
            identifier,
            handler,
            /,
            aliases=(),
            parameters=(),
            dependencies=(),
            *,
            description=Unset,
            restricted=False,
    ):
        """
        Construct a descriptor.

        Parameters
        - identifier: str
          Canonical keyword. A leading SIGIL makes the descriptor a singleton.
        - handler: Callable[[InvocationContext], Any]
          Effect of the command. Its return value is handed back untouched.
        - aliases: Iterable[str]
          Alternate keywords, matched with the same priority as the identifier.
        - parameters: Iterable[str]
          Declared parameters; "optional: <name>" marks an optional one.
        - dependencies: Iterable[str]
          Identifiers of sibling descriptors resolved at invocation time.
        - description: str | Unset
          One-line help text. Defaults to the handler's docstring, if any.
        - restricted: bool
          Consult the requirement gate before dispatching.

        Raises
        - TypeError/ValueError on malformed metadata (see the _process_* helpers).
        """
        metadata = {
            "identifier": identifier,
            "handler": handler,
            "aliases": aliases,
            "parameters": parameters,
            "dependencies": dependencies,
            "description": coalesce(description, inspect.isroutine(handler) and inspect.getdoc(handler) or Unset),
            "restricted": restricted,
        }
        _process_identity(cls, metadata)
        _process_parameters(cls, metadata)
        _process_dependencies(cls, metadata)
        _process_scalars(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def singleton(self):
        """
        True for argument-less descriptors whose identifier carries the SIGIL.
        """
        return self._identifier.startswith(SIGIL)

    def caller(self, alias=Unset, /):
        """
        Return the text a user types to invoke this command ("luna ban").
        """
        if alias:
            return "%s %s" % (alias, self._identifier)
        return self._identifier

    def usage(self, alias=Unset, /):
        """
        Return the usage template: caller, then <required> and [optional] names.

        Example
        - "luna ban <user> [days] [reason]"
        """
        parts = [self.caller(alias)]
        parts.extend("<%s>" % name for name in self._required)
        parts.extend("[%s]" % name for name in self._optional)
        return " ".join(parts)

    def information(self, alias=Unset, /):
        """
        Return a full help entry: caller, aliases, description and usage.
        """
        lines = [self.caller(alias)]
        if self._aliases:
            lines[0] += " (%s)" % ", ".join(self._aliases)
        if self._description:
            lines.append(self._description)
        lines.append("usage: " + self.usage(alias))
        return "\n".join(lines)

    def __call__(self, context, /):
        return self._handler(context)


def command(identifier, handler=Unset, /, *args, **kwargs):
    """
    Create a Descriptor or return a decorator to build it later.

    Invocation modes
    - Direct:
        ban = command("ban", on_ban, parameters=["user"])
    - Decorator:
        @command("ban", parameters=["user"])
        def ban(context): ...

    Returns
    - Descriptor | Callable[[Callable], Descriptor]
    """
    @rename("command")
    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@command() must be applied to a callable")
        return Descriptor(identifier, handler, *args, **kwargs)

    return wrapper(handler) if handler is not Unset else wrapper


__all__ = (
    "Descriptor",
    "classify",
    "command",
    "SIGIL",
    "SEPARATOR",
    "OPTIONAL",
)

del DescriptorType
