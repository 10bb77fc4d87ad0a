"""
Lookup helpers over raw solution rows.

These work on the binding level (``QueryResult.rows``) rather than on
materialized RDF terms and only compare lexical values.  The variable
names ``s`` and ``p`` follow the usual ``SELECT ?s ?p ?o`` convention.
"""

from __future__ import annotations

from datetime import datetime

from sparqlrepo.models import Row

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "find_object_value_by_predicate",
    "find_object_value_by_specified_predicate",
    "get_datetime",
    "get_value",
    "list_of",
    "list_of_subjects",
]

# RFC 3339, the layout of xsd:dateTime values with a timezone
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def find_object_value_by_predicate(needle: str, rows: list[Row]) -> Row:
    """Return the first row whose ``p`` value contains ``needle``, else ``{}``."""
    return find_object_value_by_specified_predicate(needle, "p", rows)


def find_object_value_by_specified_predicate(needle: str, predicate: str, rows: list[Row]) -> Row:
    """
    Return the first row whose ``predicate`` variable contains ``needle``.

    Args:
        needle: Substring to look for
        predicate: Name of the variable to inspect
        rows: Solution rows

    Returns:
        The matching row, or an empty dict if no row matches
    """
    for row in rows:
        binding = row.get(predicate)
        if binding is not None and needle in binding.value:
            return row
    return {}


def get_value(needle: str, rows: list[Row]) -> str:
    """Return the value of variable ``needle`` in the first row, or ``""``."""
    if not rows:
        return ""
    binding = rows[0].get(needle)
    return binding.value if binding is not None else ""


def get_datetime(
    needle: str,
    rows: list[Row],
    date_format: str = DEFAULT_DATE_FORMAT,
) -> datetime | None:
    """
    Parse the value of variable ``needle`` in the first row as a datetime.

    Args:
        needle: Variable name
        rows: Solution rows
        date_format: :func:`datetime.strptime` layout

    Returns:
        The parsed datetime, or None if the variable is unbound

    Raises:
        ValueError: If the value does not match ``date_format``
    """
    value = get_value(needle, rows)
    if not value:
        return None
    return datetime.strptime(value, date_format)


def list_of_subjects(rows: list[Row]) -> dict[str, list[Row]]:
    """Group rows by the value of their ``s`` variable."""
    return list_of(rows, "s")


def list_of(rows: list[Row], needle: str) -> dict[str, list[Row]]:
    """Group rows by the value of variable ``needle``; unbound rows are dropped."""
    grouped: dict[str, list[Row]] = {}
    for row in rows:
        binding = row.get(needle)
        if binding is not None:
            grouped.setdefault(binding.value, []).append(row)
    return grouped
