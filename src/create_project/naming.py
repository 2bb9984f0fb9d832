"""Package-name validation and normalization.

Names follow the npm ``package.json`` naming rules: lower case, optionally
scoped as ``@scope/name``, no leading dot or underscore, none of ``~'!()*`` in
the name segment, at most 214 characters.
"""

from __future__ import annotations

import re

DEFAULT_PROJECT_NAME = "vue-project"
INVALID_PACKAGE_NAME_MESSAGE = "Invalid package.json name"
MAX_PACKAGE_NAME_LENGTH = 214

_PACKAGE_NAME_RE = re.compile(r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")
_RESERVED_NAMES = frozenset({"node_modules", "favicon.ico"})
_SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_MARKERS_RE = re.compile(r"^[._]+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9\-]+")
_REPEATED_SEPARATOR_RE = re.compile(r"-{2,}")


def is_valid_package_name(name: str) -> bool:
    """Return whether ``name`` is usable as a package name.

    Args:
        name: Candidate name.

    Returns:
        ``True`` when the name matches the package-name grammar.

    Example:
        >>> is_valid_package_name("my-app")
        True
        >>> is_valid_package_name("@acme/widgets")
        True
        >>> is_valid_package_name("My App!")
        False
        >>> is_valid_package_name(".hidden")
        False
        >>> is_valid_package_name("a~b")
        False
    """
    if not isinstance(name, str) or not name:
        return False
    if len(name) > MAX_PACKAGE_NAME_LENGTH:
        return False
    if name in _RESERVED_NAMES:
        return False
    if _SPECIAL_CHARS_RE.search(name.rpartition("/")[2]):
        return False
    return _PACKAGE_NAME_RE.fullmatch(name) is not None


def to_valid_package_name(name: str) -> str:
    """Coerce ``name`` into a valid package name on a best-effort basis.

    The result is idempotent under repeated application. Degenerate input
    (empty, or only disallowed characters) yields ``""``, which is not a
    valid package name, so prompts keep asking.

    Args:
        name: Raw user input, usually a directory name.

    Returns:
        Normalized name, or ``""`` when nothing usable remains.

    Example:
        >>> to_valid_package_name("My App!")
        'my-app'
        >>> to_valid_package_name("  __Hello   World__ ")
        'hello-world'
        >>> to_valid_package_name("!!!")
        ''
    """
    normalized = str(name).strip().lower()
    normalized = _WHITESPACE_RE.sub("-", normalized)
    normalized = _LEADING_MARKERS_RE.sub("", normalized)
    normalized = _DISALLOWED_RE.sub("-", normalized)
    normalized = _REPEATED_SEPARATOR_RE.sub("-", normalized)
    normalized = normalized.strip("-")
    return normalized[:MAX_PACKAGE_NAME_LENGTH].rstrip("-")


def package_name_or_fallback(name: str, fallback: str = DEFAULT_PROJECT_NAME) -> str:
    """Normalize ``name``, falling back to ``fallback`` when nothing usable remains.

    Example:
        >>> package_name_or_fallback("???")
        'vue-project'
    """
    normalized = to_valid_package_name(name)
    return normalized or fallback


def validate_package_name(name: str) -> bool | str:
    """Prompt validator: ``True`` when valid, otherwise the error message."""
    if is_valid_package_name(str(name).strip()):
        return True
    return INVALID_PACKAGE_NAME_MESSAGE
