"""Shared fixtures for sparqlrepo tests."""

from __future__ import annotations

import json

import pytest

from sparqlrepo import Repo, parse_json

ENDPOINT = "http://localhost:3030/ds/sparql"

XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"


@pytest.fixture
def results_payload():
    """A SPARQL JSON results document covering every binding kind."""
    return {
        "head": {"vars": ["s", "p", "o"]},
        "results": {
            "bindings": [
                {
                    "s": {"type": "uri", "value": "http://example.org/book1"},
                    "p": {"type": "uri", "value": "http://purl.org/dc/terms/title"},
                    "o": {"type": "literal", "value": "Sult", "xml:lang": "no"},
                },
                {
                    "s": {"type": "uri", "value": "http://example.org/book1"},
                    "p": {"type": "uri", "value": "http://example.org/pages"},
                    "o": {"type": "typed-literal", "value": "42", "datatype": XSD_INTEGER},
                },
                {
                    "s": {"type": "bnode", "value": "b0"},
                    "p": {"type": "uri", "value": "http://example.org/note"},
                    "o": {"type": "literal", "value": "hello"},
                },
            ]
        },
    }


@pytest.fixture
def results_json(results_payload):
    return json.dumps(results_payload)


@pytest.fixture
def query_result(results_json):
    return parse_json(results_json)


@pytest.fixture
def repo():
    return Repo(ENDPOINT)
