"""Naming utilities for code generation."""

from __future__ import annotations

import keyword
import re
from functools import lru_cache
from typing import Final

PYTHON_KEYWORDS: frozenset[str] = frozenset(keyword.kwlist)

DEFAULT_RECORD_PREFIX: Final[str] = "Db"
DEFAULT_RECORD_SUFFIX: Final[str] = "Rec"

# Module names the generator itself writes into the output package
RESERVED_MODULE_NAMES: frozenset[str] = frozenset({"__init__", "db_types"})

_NON_IDENTIFIER = re.compile(r"\W")
_LEADING_DUNDER = re.compile(r"^__+")


def _ascii_upper(ch: str) -> str:
    return ch.upper() if ch.isascii() else ch


def _is_record_name(name: str, prefix: str, suffix: str) -> bool:
    """Check whether ``name`` already has the shape ``record_name`` produces."""
    if len(name) < len(prefix) + len(suffix):
        return False
    if not (name.startswith(prefix) and name.endswith(suffix)):
        return False
    core = name[len(prefix):len(name) - len(suffix)]
    return core == "" or (core.isalpha() and core[0] == _ascii_upper(core[0]))


@lru_cache(maxsize=1024)
def record_name(
    table_name: str,
    prefix: str = DEFAULT_RECORD_PREFIX,
    suffix: str = DEFAULT_RECORD_SUFFIX,
) -> str:
    """Derive the generated record class name for a table.

    The first letter and every letter following a non-letter is
    upper-cased; non-letters (digits included) are dropped. Names that
    already look like a generated record name are returned unchanged.

    Examples:
        >>> record_name("user_accounts")
        'DbUserAccountsRec'
        >>> record_name("DbUserAccountsRec")
        'DbUserAccountsRec'
        >>> record_name("")
        'DbRec'
    """
    if _is_record_name(table_name, prefix, suffix):
        return table_name

    output: list[str] = []
    capitalize = True
    for ch in table_name:
        if ch.isalpha():
            output.append(_ascii_upper(ch) if capitalize else ch)
            capitalize = False
        else:
            capitalize = True
    return f"{prefix}{''.join(output)}{suffix}"


def _sanitize_identifier(value: str) -> str:
    sanitized = _NON_IDENTIFIER.sub("_", value)
    if not sanitized or sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    if sanitized in PYTHON_KEYWORDS:
        sanitized = f"{sanitized}_"
    return sanitized


@lru_cache(maxsize=1024)
def sanitize_module_name(value: str) -> str:
    """Sanitize a table name for use as a Python module name.

    Uses caching for repeated calls with the same input.
    """
    sanitized = _sanitize_identifier(value)
    if sanitized in RESERVED_MODULE_NAMES:
        sanitized = f"{sanitized}_"
    return sanitized


@lru_cache(maxsize=1024)
def sanitize_field_name(value: str) -> str:
    """Sanitize a column name for use as a dataclass field name.

    Leading double underscores are reduced to one so the field is not
    subject to private name mangling inside the record class.

    Uses caching for repeated calls with the same input.
    """
    return _LEADING_DUNDER.sub("_", _sanitize_identifier(value))


def unique_name(name: str, used: set[str]) -> str:
    """Return ``name``, or ``name_2``, ``name_3``... if already in ``used``.

    The returned name is added to ``used``.
    """
    candidate = name
    counter = 2
    while candidate in used:
        candidate = f"{name}_{counter}"
        counter += 1
    used.add(candidate)
    return candidate


def is_valid_identifier(name: str) -> bool:
    """True if ``name`` can be used as a Python class or variable name."""
    return name.isidentifier() and name not in PYTHON_KEYWORDS
