"""Decoders for SPARQL response bodies.

* :func:`parse_json` turns an ``application/sparql-results+json`` payload
  into a :class:`~sparqlrepo.models.QueryResult`.
* :func:`parse_turtle` turns a ``text/turtle`` document (the answer to a
  CONSTRUCT query) into a list of triples in document order.
"""

from __future__ import annotations

import logging
from typing import IO

from pydantic import ValidationError
from rdflib import Graph
from rdflib.term import Node

from sparqlrepo.errors import DecodeError
from sparqlrepo.models import QueryResult

__all__ = [
    "DEFAULT_BASE_IRI",
    "Triple",
    "parse_json",
    "parse_turtle",
]

logger = logging.getLogger(__name__)

Triple = tuple[Node, Node, Node]
Source = IO[bytes] | bytes | str

# Relative IRIs in a Turtle document read without a base resolve against this
DEFAULT_BASE_IRI = "http://localhost/"


def _read(source: Source) -> bytes | str:
    if isinstance(source, (bytes, str)):
        return source
    return source.read()


def parse_json(source: Source) -> QueryResult:
    """
    Parse a SPARQL JSON results document.

    Missing ``head`` or ``results`` sections are tolerated and yield an
    empty result.

    Args:
        source: Binary stream, bytes or text holding the JSON payload

    Returns:
        The decoded :class:`QueryResult`

    Raises:
        DecodeError: If the payload is not JSON or does not have the
            shape of a SPARQL results document
    """
    try:
        return QueryResult.model_validate_json(_read(source))
    except ValidationError as e:
        raise DecodeError(f"Invalid SPARQL JSON results: {e}") from e


class _DocumentOrderGraph(Graph):
    """Graph that also remembers the order triples were parsed in."""

    def __init__(self) -> None:
        super().__init__()
        self.parsed: dict[Triple, None] = {}

    def add(self, triple: Triple) -> Graph:
        self.parsed.setdefault(tuple(triple), None)
        return super().add(triple)


def parse_turtle(source: Source, base: str | None = None) -> list[Triple]:
    """
    Decode every triple of a Turtle document.

    Args:
        source: Binary stream, bytes or text holding the Turtle document
        base: Base IRI for resolving relative IRIs, defaults to
            :data:`DEFAULT_BASE_IRI`

    Returns:
        Triples in the order they appear in the document, duplicates
        collapsed to their first occurrence

    Raises:
        DecodeError: If the document is not valid Turtle
    """
    data = _read(source)
    if not data.strip():
        return []
    graph = _DocumentOrderGraph()
    try:
        graph.parse(data=data, format="turtle", publicID=base or DEFAULT_BASE_IRI)
    except Exception as e:
        raise DecodeError(f"Invalid Turtle document: {e}") from e
    triples = list(graph.parsed)
    logger.debug(f"Decoded {len(triples)} triples from Turtle")
    return triples
