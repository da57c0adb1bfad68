"""
Gatehouse - Naming Utilities

Pure helpers that turn configuration identifiers into display names and slugs.
The same input always yields the same output so repeated seed runs keep
slug identity stable.
"""

import re
import unicodedata

_WORD_START_PATTERN = re.compile(r"(^|\s)(\S)")
_UNDERSCORE_PATTERN = re.compile(r"_+")
_UNSLUGGABLE_PATTERN = re.compile(r"[^-a-z0-9\s]+")
_SLUG_SEPARATOR_PATTERN = re.compile(r"[-\s]+")
_SEPARATOR_PATTERN = re.compile(r"[-_]+")


def TitleCase(value: str) -> str:
    """
    Upper-case the first character of every whitespace separated word

    The rest of each word is left as written, so "read user" becomes
    "Read User" and "read-user" becomes "Read-user".

    Args:
        value: Text to convert

    Returns:
        str: Title-cased text
    """
    return _WORD_START_PATTERN.sub(lambda match: match.group(1) + match.group(2).upper(), value)


def Slugify(value: str) -> str:
    """
    Return a URL-safe slug derived from value

    Args:
        value: Text to convert

    Returns:
        str: Lower-case ASCII slug with words joined by hyphens
    """
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    folded = _UNDERSCORE_PATTERN.sub("-", folded).replace("@", "-at-")
    # Punctuation is dropped, not turned into a separator: "user's" -> "users"
    folded = _UNSLUGGABLE_PATTERN.sub("", folded.lower())
    return _SLUG_SEPARATOR_PATTERN.sub("-", folded).strip("-")


def HumanizeSlug(slug: str) -> str:
    """Turn "content-manager" or "content_manager" into "Content Manager"."""
    return TitleCase(_SEPARATOR_PATTERN.sub(" ", slug).strip())


def DefaultPermissionDescription(name: str) -> str:
    """Description used when a permission entry does not provide one."""
    return f"Ability to {name} permission."


def SplitIdentifiers(value) -> list:
    """
    Normalize a pipe-delimited string or an iterable into a list of identifiers

    "admin|editor" -> ["admin", "editor"]; ["admin"] -> ["admin"]; None -> []
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split("|")
    else:
        items = []
        for item in value:
            items.extend(SplitIdentifiers(item) if isinstance(item, str) else [item])
    return [item.strip() for item in items if item and item.strip()]
