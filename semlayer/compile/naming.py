"""Table aliases and output column names.

Generated column names are part of the view's public surface: dashboards and
saved queries select them by name.  The suffix rules below are therefore
fixed policy:

* ``_external`` is removed from the end of table names (case-sensitive), so
  an external table and its native copy produce the same column names.
* Join keys lose a trailing ``_id``, then ``_code``, then ``airport`` (each
  case-insensitive), so ``orders.user_id -> users`` yields
  ``orders_user_users_email`` rather than ``orders_user_id_users_email``.
"""
from __future__ import annotations

import re
import string

_EXTERNAL_SUFFIX = re.compile(r"_external$")
_JOIN_KEY_SUFFIXES = (
    re.compile(r"_id$", re.IGNORECASE),
    re.compile(r"_code$", re.IGNORECASE),
    re.compile(r"airport$", re.IGNORECASE),
)


def clean_table_name(name: str) -> str:
    """Strip a trailing ``_external`` marker from a table display name."""
    return _EXTERNAL_SUFFIX.sub("", name)


def join_key_name(field: str) -> str:
    """Strip foreign-key suffixes from a join column name.

    The suffixes are removed in sequence, so ``origin_airport_code`` becomes
    ``origin_``.
    """
    for pattern in _JOIN_KEY_SUFFIXES:
        field = pattern.sub("", field)
    return field


def base_column_name(table_name: str, field: str) -> str:
    """Output name for a column of the base table."""
    return f"{clean_table_name(table_name)}_{field}"


def joined_column_name(
    from_table_name: str,
    from_field: str,
    to_table_name: str,
    field: str,
) -> str:
    """Output name for a column reached through a join."""
    return (
        f"{clean_table_name(from_table_name)}_{join_key_name(from_field)}"
        f"_{clean_table_name(to_table_name)}_{field}"
    )


class AliasAllocator:
    """Hands out table aliases ``a``, ``b``, ... ``z``, ``a1``, ... ``z1``, ``a2``.

    One allocator is created per compilation; aliases carry no identity
    across calls.  The numbered forms keep aliases clear of two-letter SQL
    keywords (``as``, ``by``, ``on``, ...).
    """

    _LETTERS = string.ascii_lowercase

    def __init__(self) -> None:
        self._index = 0

    def next(self) -> str:
        cycle, pos = divmod(self._index, len(self._LETTERS))
        self._index += 1
        letter = self._LETTERS[pos]
        return letter if cycle == 0 else f"{letter}{cycle}"

    @property
    def issued(self) -> int:
        """Number of aliases handed out so far."""
        return self._index
