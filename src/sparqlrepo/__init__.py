"""sparqlrepo: a client for RDF triple stores speaking the SPARQL protocol.

Main modules:
- repo: Repo class performing query, update and construct requests
- models: Pydantic models of SPARQL JSON results
- terms: conversion of result bindings into rdflib terms
- decoder: JSON and Turtle response decoders
- helpers: lookup helpers over raw solution rows
"""

from . import helpers
from .decoder import Triple, parse_json, parse_turtle
from .errors import (
    DecodeError,
    InvalidBlankNode,
    InvalidIRI,
    InvalidLanguageTag,
    OptionError,
    ProtocolError,
    SparqlError,
    TermMaterializationError,
    TransportError,
    UnknownTermKind,
)
from .models import Binding, Header, QueryResult, Results
from .repo import UPDATE_OK, Repo, RepoSettings, date_format, digest_auth, open_repo, timeout
from .terms import XSD_STRING, term_from_binding
from .version import VERSION

__all__ = [
    "UPDATE_OK",
    "VERSION",
    "XSD_STRING",
    "Binding",
    "DecodeError",
    "Header",
    "InvalidBlankNode",
    "InvalidIRI",
    "InvalidLanguageTag",
    "OptionError",
    "ProtocolError",
    "QueryResult",
    "Repo",
    "RepoSettings",
    "Results",
    "SparqlError",
    "TermMaterializationError",
    "TransportError",
    "Triple",
    "UnknownTermKind",
    "date_format",
    "digest_auth",
    "helpers",
    "open_repo",
    "parse_json",
    "parse_turtle",
    "term_from_binding",
    "timeout",
]
