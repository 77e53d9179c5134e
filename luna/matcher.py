"""
Command matcher.

Resolves the leading keyword of a normalized message to exactly one descriptor.

Rules
- The candidate keyword is the first space-delimited word, lower-cased.
- A keyword descriptor matches when the keyword equals its identifier or one of
  its aliases. Keyword descriptors always win over singletons.
- Singleton descriptors match any keyword; they are the fallback class, tried in
  catalog order when no identifier or alias equals the keyword.
- A keyword match drops the keyword from the text; a singleton match keeps the
  whole text as its single implicit argument.
"""
from .faults import UnknownCommandError
from .utils import Unset


def keyword(text, /):
    """
    Return the lower-cased first word of `text` ("" for empty text).
    """
    return text.split(" ", 1)[0].lower()


def matches(descriptor, keyword, /):
    """
    Match predicate of one descriptor against a candidate keyword.
    """
    return descriptor.singleton or keyword == descriptor.identifier or keyword in descriptor.aliases


def match(text, catalog, /, alias=Unset):
    """
    Select the descriptor invoked by `text`.

    `alias` only shapes the hint of the fault ("run 'luna help' ...").

    Returns
    - (descriptor, remainder): remainder is the text the extractor works on.

    Raises
    - UnknownCommandError: no keyword descriptor matched and the catalog holds
      no singleton.
    """
    candidate = keyword(text)

    if (descriptor := catalog.lookup(candidate)) is not None:
        _, _, remainder = text.partition(" ")
        return descriptor, remainder

    for descriptor in catalog.singletons:
        if matches(descriptor, candidate):
            return descriptor, text

    raise UnknownCommandError(
        "unknown command %r" % candidate,
        keyword=candidate,
        hint="run %r to see the available commands" % " ".join(filter(None, (alias, "help"))),
    )


__all__ = (
    "keyword",
    "matches",
    "match",
)
