"""
Tokenizer / normalizer.

Turns a raw chat payload into normalized text ready for matching, and prepares
post-match text for argument extraction.

Functions
- collapse(text): runs of whitespace become single spaces; ends are trimmed.
- strip_alias(text, alias): remove a leading invocation alias; None if absent.
- normalize(text, settings, channel): collapse + alias handling, honoring
  alias-exempt channels. None means "not addressed to the bot" (silent drop);
  an empty string means "addressed, but nothing left to process".
- repair(text): split glued "keyword:value" tokens into "keyword: value".
- tokenize(text, parsable): split into words, case-folding keyword tokens only.

Notes
- repair() is idempotent: once every separator inside a token is followed by a
  space, no token contains the separator anywhere but at its end.
- tokenize() leaves argument values untouched; only words that are exactly a
  declared "name:" keyword (ignoring case) are lower-cased.
"""
import re

from .descriptors import SEPARATOR


def collapse(text, /):
    """
    Collapse runs of whitespace to single spaces and trim both ends.

    Example
    - collapse("  luna   ban\\tuser ") -> "luna ban user"
    """
    if not isinstance(text, str):
        raise TypeError("collapse() argument must be a string")
    return re.sub(r"\s+", " ", text).strip()


def strip_alias(text, alias, /):
    """
    Remove the invocation alias (case-insensitive) and its following separator.

    The alias must be followed by a space or end the text; "lunatic" does not
    start with the alias "luna".

    Returns
    - the remaining text (possibly empty) when the alias was present.
    - None otherwise.
    """
    lowered = text.lower()
    alias = alias.lower()
    if lowered == alias:
        return ""
    if lowered.startswith(alias + " "):
        return text[len(alias) + 1:]
    return None


def normalize(text, settings, channel, /):
    """
    Normalize a raw payload for matching.

    Behavior
    - whitespace is collapsed first.
    - a leading alias is stripped when present.
    - without the alias, the text passes through unchanged only in alias-exempt
      channels; elsewhere the message is not for us and None is returned.
    """
    text = collapse(text)
    if (stripped := strip_alias(text, settings.alias)) is not None:
        return stripped
    if channel in settings.aliasless_channels:
        return text
    return None


def repair(text, /):
    """
    Split keyword spans missing their separating space.

    Every token containing the separator anywhere but at its end gets a space
    after each separator, so "reason:spam" becomes "reason: spam" and the
    extractor sees the keyword as a token of its own.

    Examples
    - repair("user:alice days:3") -> "user: alice days: 3"
    - repair("user: alice")       -> "user: alice"
    """
    words = []
    for word in text.split(" "):
        if SEPARATOR in word and not word.endswith(SEPARATOR):
            word = (SEPARATOR + " ").join(word.split(SEPARATOR))
        words.append(word)
    return " ".join(words)


def tokenize(text, parsable, /):
    """
    Split text on spaces into words, lower-casing only keyword tokens.

    Parameters
    - text: str, normalized post-match text.
    - parsable: Collection[str], lower-cased "name:" keyword tokens.

    Returns
    - list[str], the word pool the extractor consumes (empty for empty text).
    """
    words = []
    for word in text.split():
        lowered = word.lower()
        words.append(lowered if lowered in parsable else word)
    return words


__all__ = (
    "collapse",
    "strip_alias",
    "normalize",
    "repair",
    "tokenize",
)
