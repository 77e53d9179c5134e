"""
Luna utilities: the few helpers every layer leans on.

Contents
- Unset / UnsetType
  • "argument not given" marker, distinct from None (None is a legitimate
    value for descriptions, gates and defaults).
  • Falsey, prints as "Unset", one instance per process, cannot be subclassed.
  • Usable in unions for isinstance checks: isinstance(x, str | Unset).

- coalesce(object, default=None)
  • Unset becomes `default`; every other value, falsey ones included, is kept.

- @rename("name")
  • Stable __name__/__qualname__ for functions generated at class creation.

- mirror("attr")
  • Read-only property over self._attr. Containers come back as tuples,
    frozensets or fresh dicts, so metadata of a built catalog stays put.

- pluralize(text) / quantify(count, text)
  • Just enough English for usage and log lines ("2 optional arguments",
    "1 module", "3 entries").

- sanitize(text)
  • Letters and digits only, case-folded: how channel names are compared.

Examples
    >>> coalesce(Unset, "luna")
    'luna'
    >>> quantify(2, "optional argument")
    '2 optional arguments'
    >>> sanitize("#Off-Topic 💬")
    'offtopic'
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker. UnsetType() always returns the same object.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, `object` otherwise.

    - coalesce(Unset, "luna") -> "luna"
    - coalesce("", "luna")    -> ""
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving a function the __name__ and __qualname__ `name`.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    decorator.__name__ = decorator.__qualname__ = "rename"
    return decorator


def _freeze(object):
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(_freeze(item) for item in object)
    if isinstance(object, Set):
        return frozenset(_freeze(item) for item in object)
    if isinstance(object, Mapping):
        return {key: _freeze(value) for key, value in object.items()}
    return coalesce(object)


def mirror(name, /):
    """
    Read-only property exposing self._<name>.

    Example
    - aliases = mirror("aliases") reads self._aliases.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


_IRREGULAR = {
    "person": "people",
    "child": "children",
    "alias": "aliases",
}


@functools.cache
def pluralize(text, /):
    """
    Plural of a word or of the last word of a phrase.

    - pluralize("argument")          -> "arguments"
    - pluralize("optional argument") -> "optional arguments"
    - pluralize("entry")             -> "entries"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")

    head, _, word = text.rpartition(" ")
    if not word:
        return text

    lower = word.lower()
    if lower in _IRREGULAR:
        plural = _IRREGULAR[lower]
    elif re.search(r"(s|sh|ch|x|z)$", lower):
        plural = lower + "es"
    elif re.search(r"[^aeiou]y$", lower):
        plural = lower[:-1] + "ies"
    else:
        plural = lower + "s"

    if word.isupper():
        plural = plural.upper()
    elif word[:1].isupper():
        plural = plural.capitalize()

    return (head + " " if head else "") + plural


def quantify(count, text, /):
    """
    "<count> <text>", pluralized unless count is exactly one.

    - quantify(1, "argument") -> "1 argument"
    - quantify(0, "argument") -> "0 arguments"
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise TypeError("quantify() first argument must be an integer")
    return "%d %s" % (count, text if count == 1 else pluralize(text))


def sanitize(text, /):
    """
    Keep only letters and digits, case-folded.

    Channel names carry decorations (emoji, dashes, '#') that differ between
    platforms; comparisons go through this function on both sides.
    """
    if not isinstance(text, str):
        raise TypeError("sanitize() argument must be a string")
    return "".join(char for char in text if char.isalnum()).casefold()


Unset = UnsetType()
"""Marker for "argument not given"; see UnsetType."""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "quantify",
    "sanitize",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
