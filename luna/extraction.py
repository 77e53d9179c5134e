"""
Argument extractor.

Given the text left after matching, the extractor fills the declared parameters
of a descriptor from keyword-tagged spans and places the remaining, unkeyed text
with a positional fallback.

Algorithm
1. Parsable tokens are the declared names with the separator appended,
   lower-cased ("reason:").
2. The text is split into words; only words equal to a parsable token (ignoring
   case) are lower-cased, values keep their case.
3. For each declared name, in declaration order, whose token is present: the
   value runs from the word after the token up to (excluding) the next word
   ending with the separator, or to the end. Token and value are removed from
   the word pool, so later names never re-consume claimed words.
4. Whatever is left in the pool is unkeyed text.
5. Fallback, only for non-empty unkeyed text: a single unfilled required name
   receives it; otherwise a descriptor with exactly one optional name gives it to
   that name. The required slot always takes precedence. In any other case the
   text stays as leftover for the arity validator.

Edge cases
- A token directly followed by another token, or ending the text, yields "".
- A name appearing inside ordinary text is not a keyword: only the exact
  "name:" word is.
"""
from typing import NamedTuple

from .descriptors import SEPARATOR
from .tokens import tokenize
from .utils import *


class Extraction(NamedTuple):
    """
    Result of one extraction.

    - arguments: dict[str, str], declared name → value.
    - leftover: tuple[str, ...], words no rule could place.
    - missing: tuple[str, ...], required names still unfilled.
    """
    arguments: dict
    leftover: tuple
    missing: tuple


def extract(text, required, optional, /, names=Unset):
    """
    Extract arguments from post-match text.

    Parameters
    - text: str, post-match text (keyword spans already repaired).
    - required: Sequence[str], required names in declaration order.
    - optional: Sequence[str], optional names in declaration order.
    - names: Sequence[str] | Unset, every declared name in declaration order;
      defaults to required followed by optional.

    Returns
    - Extraction
    """
    required = tuple(required)
    optional = tuple(optional)
    names = tuple(coalesce(names, required + optional))

    # "reason:" → "reason"; dict order is the scan order
    parsable = {name.lower() + SEPARATOR: name for name in names}
    words = tokenize(text, parsable)
    arguments = {}

    for token, name in parsable.items():
        try:
            start = words.index(token)
        except ValueError:
            continue
        end = next(
            (index for index in range(start + 1, len(words)) if words[index].endswith(SEPARATOR)),
            len(words)
        )
        arguments[name] = " ".join(words[start + 1:end])
        del words[start:end]

    missing = [name for name in required if name not in arguments]

    if words:
        if len(missing) == 1:
            arguments[missing.pop()] = " ".join(words)
            words.clear()
        elif len(optional) == 1:
            arguments[optional[0]] = " ".join(words)
            words.clear()

    return Extraction(arguments, tuple(words), tuple(missing))


def primary(descriptor, extraction, text, /):
    """
    Return the primary parameter of an invocation.

    - A descriptor declaring no parameters gets the whole post-match text.
    - Otherwise the value of the first declared name that received one, or None.
    """
    if not descriptor.names:
        return text
    for name in descriptor.names:
        if name in extraction.arguments:
            return extraction.arguments[name]
    return None


__all__ = (
    "Extraction",
    "extract",
    "primary",
)
