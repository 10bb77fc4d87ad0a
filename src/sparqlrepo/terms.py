"""Conversion of SPARQL JSON bindings into rdflib terms."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD
from rdflib.term import Identifier

from sparqlrepo.errors import (
    InvalidBlankNode,
    InvalidIRI,
    InvalidLanguageTag,
    UnknownTermKind,
)

if TYPE_CHECKING:
    from sparqlrepo.models import Binding

__all__ = [
    "XSD_STRING",
    "new_blank",
    "new_iri",
    "new_lang_literal",
    "term_from_binding",
]

XSD_STRING = XSD.string

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_IRI_FORBIDDEN_RE = re.compile(r'[\x00-\x20<>"{}|^`\\]')
_BLANK_FORBIDDEN_RE = re.compile(r"[\x00-\x20\x7f]")


def new_iri(value: str) -> URIRef:
    """
    Build an IRI term, rejecting syntactically invalid values.

    Args:
        value: Absolute IRI string

    Returns:
        The IRI as a :class:`rdflib.URIRef`

    Raises:
        InvalidIRI: If the value is empty, has no scheme or contains
            characters not allowed in an IRI
    """
    if not value:
        raise InvalidIRI("empty IRI")
    if _IRI_FORBIDDEN_RE.search(value):
        raise InvalidIRI(f"IRI contains invalid characters: {value!r}")
    if not _SCHEME_RE.match(value):
        raise InvalidIRI(f"IRI has no scheme: {value!r}")
    return URIRef(value)


def new_blank(label: str) -> BNode:
    """Build a blank node; the label must be non-empty and whitespace free."""
    if not label:
        raise InvalidBlankNode("blank node label cannot be empty")
    if _BLANK_FORBIDDEN_RE.search(label):
        raise InvalidBlankNode(f"invalid blank node label: {label!r}")
    return BNode(label)


def new_lang_literal(value: str, lang: str) -> Literal:
    """Build a language-tagged literal."""
    try:
        return Literal(value, lang=lang)
    except ValueError as e:
        raise InvalidLanguageTag(f"invalid language tag: {lang!r}") from e


def term_from_binding(binding: Binding) -> Identifier:
    """
    Materialize a single binding into an RDF term.

    Plain literals without a language tag become ``xsd:string`` typed
    literals.  A ``datatype`` given on a ``literal`` binding is not
    consulted; only ``typed-literal`` bindings carry a datatype.

    Args:
        binding: One SPARQL JSON result cell

    Returns:
        URIRef, BNode or Literal

    Raises:
        TermMaterializationError: If the binding is malformed or of an
            unknown kind
    """
    kind = binding.type
    if kind == "bnode":
        return new_blank(binding.value)
    if kind == "uri":
        return new_iri(binding.value)
    if kind == "literal":
        if binding.lang:
            return new_lang_literal(binding.value, binding.lang)
        return Literal(binding.value, datatype=XSD_STRING)
    if kind == "typed-literal":
        return Literal(binding.value, datatype=new_iri(binding.datatype))
    raise UnknownTermKind(kind)
