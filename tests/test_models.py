"""Tests for SPARQL JSON result decoding and bulk materialization."""

from __future__ import annotations

import io
import json

import pytest
from pydantic import ValidationError
from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

from sparqlrepo import Binding, DecodeError, QueryResult, parse_json

EX = "http://example.org/"


class TestParseJSON:
    def test_parses_head_and_rows(self, query_result):
        assert query_result.vars == ["s", "p", "o"]
        assert len(query_result.rows) == 3
        first = query_result.rows[0]["o"]
        assert first == Binding(type="literal", value="Sult", lang="no")

    def test_accepts_binary_stream(self, results_json):
        result = parse_json(io.BytesIO(results_json.encode("utf-8")))
        assert result.vars == ["s", "p", "o"]

    def test_accepts_bytes(self, results_json):
        assert len(parse_json(results_json.encode("utf-8")).rows) == 3

    @pytest.mark.parametrize("payload", ["{}", '{"head": {}}', '{"results": {}}'])
    def test_partial_document_is_empty(self, payload):
        result = parse_json(payload)
        assert result.vars == []
        assert result.rows == []
        assert result.bindings_by_variable() == {}
        assert result.solutions() == []

    def test_flags_and_links(self):
        result = parse_json(
            json.dumps(
                {
                    "head": {"vars": ["x"], "link": ["http://example.org/meta"]},
                    "results": {"distinct": True, "ordered": True, "bindings": []},
                }
            )
        )
        assert result.head.link == ["http://example.org/meta"]
        assert result.results.distinct is True
        assert result.results.ordered is True

    def test_ignores_unknown_keys(self):
        assert parse_json('{"boolean": true}').vars == []

    @pytest.mark.parametrize(
        "payload",
        [
            "",
            "not json",
            '{"head": ',
            "[]",
            '{"head": {"vars": "s"}}',
            '{"results": {"bindings": [{"s": {"type": "uri", "value": 1}}]}}',
        ],
    )
    def test_malformed_document(self, payload):
        with pytest.raises(DecodeError):
            parse_json(payload)

    def test_result_is_immutable(self, query_result):
        with pytest.raises(ValidationError):
            query_result.head = None


class TestNullValues:
    """JSON null reads as an absent value and never fails the document."""

    def test_null_cell_is_skipped(self):
        result = parse_json(
            '{"head": {"vars": ["x", "y"]}, "results": {"bindings": '
            '[{"x": null, "y": {"type": "uri", "value": "http://example.org/y"}}]}}'
        )
        assert result.solutions() == [{"y": URIRef(EX + "y")}]
        assert result.bindings_by_variable() == {"y": [URIRef(EX + "y")]}
        assert result.rows[0]["x"] == Binding()

    def test_null_language_tag(self):
        result = parse_json(
            '{"head": {"vars": ["o"]}, "results": {"bindings": '
            '[{"o": {"type": "literal", "value": "hello", "xml:lang": null}}]}}'
        )
        assert result.solutions() == [{"o": Literal("hello", datatype=XSD.string)}]

    def test_null_sections(self):
        result = parse_json('{"head": null, "results": null}')
        assert result.vars == []
        assert result.rows == []

    def test_null_bindings(self):
        result = parse_json('{"head": {"vars": ["x"]}, "results": {"bindings": null}}')
        assert result.vars == ["x"]
        assert result.solutions() == []

    def test_null_row(self):
        result = parse_json(
            '{"head": {"vars": ["x"]}, "results": {"bindings": '
            '[null, {"x": {"type": "uri", "value": "http://example.org/x"}}]}}'
        )
        assert result.solutions() == [{}, {"x": URIRef(EX + "x")}]

    def test_null_document(self):
        assert parse_json("null").rows == []


class TestBindingsByVariable:
    def test_groups_terms_per_variable(self, query_result):
        index = query_result.bindings_by_variable()
        assert list(index) == ["s", "p", "o"]
        assert index["s"] == [URIRef(EX + "book1"), URIRef(EX + "book1"), BNode("b0")]
        assert index["o"] == [
            Literal("Sult", lang="no"),
            Literal("42", datatype=XSD.integer),
            Literal("hello", datatype=XSD.string),
        ]

    def test_unbound_variables_are_skipped(self):
        result = QueryResult.model_validate(
            {
                "head": {"vars": ["a", "b", "c"]},
                "results": {
                    "bindings": [
                        {"a": {"type": "uri", "value": EX + "1"}},
                        {"a": {"type": "uri", "value": EX + "2"}, "b": {"type": "literal", "value": "x"}},
                    ]
                },
            }
        )
        index = result.bindings_by_variable()
        assert index["a"] == [URIRef(EX + "1"), URIRef(EX + "2")]
        assert index["b"] == [Literal("x", datatype=XSD.string)]
        assert "c" not in index

    def test_invalid_bindings_are_dropped(self):
        result = QueryResult.model_validate(
            {
                "head": {"vars": ["x"]},
                "results": {
                    "bindings": [
                        {"x": {"type": "foo", "value": "?"}},
                        {"x": {"type": "uri", "value": "not an iri"}},
                        {"x": {"type": "uri", "value": EX + "ok"}},
                    ]
                },
            }
        )
        assert result.bindings_by_variable() == {"x": [URIRef(EX + "ok")]}

    def test_sizes_are_bounded_by_head_and_rows(self, query_result):
        index = query_result.bindings_by_variable()
        assert len(index) <= len(query_result.vars)
        for terms in index.values():
            assert len(terms) <= len(query_result.rows)

    def test_undeclared_variables_are_ignored(self):
        result = QueryResult.model_validate(
            {
                "head": {"vars": ["x"]},
                "results": {"bindings": [{"y": {"type": "uri", "value": EX + "y"}}]},
            }
        )
        assert result.bindings_by_variable() == {}

    def test_repeatable(self, query_result):
        assert query_result.bindings_by_variable() == query_result.bindings_by_variable()


class TestSolutions:
    def test_one_mapping_per_row_in_order(self, query_result):
        solutions = query_result.solutions()
        assert len(solutions) == 3
        assert solutions[0]["o"] == Literal("Sult", lang="no")
        assert solutions[1]["o"] == Literal("42", datatype=XSD.integer)
        assert solutions[2]["s"] == BNode("b0")

    def test_row_kept_when_bindings_fail(self):
        result = QueryResult.model_validate(
            {
                "head": {"vars": ["x", "y"]},
                "results": {
                    "bindings": [
                        {"x": {"type": "foo", "value": "1"}, "y": {"type": "uri", "value": EX + "y"}},
                        {"x": {"type": "bnode", "value": ""}},
                        {"x": {"type": "literal", "value": "ok"}},
                    ]
                },
            }
        )
        solutions = result.solutions()
        assert solutions == [
            {"y": URIRef(EX + "y")},
            {},
            {"x": Literal("ok", datatype=XSD.string)},
        ]
