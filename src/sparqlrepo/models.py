"""Pydantic models for ``application/sparql-results+json`` documents.

The models mirror the JSON layout one-to-one::

    {"head": {"vars": [...]},
     "results": {"bindings": [{"x": {"type": ..., "value": ...}}, ...]}}

Every field has a default, so partial documents (``{}`` included) decode
to an empty :class:`QueryResult` instead of failing.  Turning bindings into
RDF terms is done on demand by :meth:`QueryResult.bindings_by_variable` and
:meth:`QueryResult.solutions`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from rdflib.term import Identifier

from sparqlrepo.errors import TermMaterializationError
from sparqlrepo.terms import term_from_binding

__all__ = [
    "Binding",
    "Header",
    "QueryResult",
    "Results",
    "Row",
]


class _ResultModel(BaseModel):
    """Base for the result models: frozen, with ``null`` read as the field default."""

    model_config = ConfigDict(frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class Binding(_ResultModel):
    """One result cell, tagged with the kind of RDF term it encodes."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field("", description='"uri", "literal", "typed-literal" or "bnode"')
    value: str = Field("", description="Lexical value")
    lang: str = Field("", alias="xml:lang", description="Language tag of plain literals")
    datatype: str = Field("", description="Datatype IRI of typed literals")


Row = dict[str, Binding]


class Header(_ResultModel):
    """The ``head`` section: declared variables and optional links."""

    link: list[str] = Field(default_factory=list)
    vars: list[str] = Field(default_factory=list)


class Results(_ResultModel):
    """The ``results`` section holding the solution rows."""

    distinct: bool = False
    ordered: bool = False
    bindings: list[Row] = Field(default_factory=list)

    @field_validator("bindings", mode="before")
    @classmethod
    def null_rows_and_cells(cls, value: Any) -> Any:
        # A null row is an empty row; a null cell is an empty binding,
        # which never materializes and so is skipped in bulk reads.
        if not isinstance(value, list):
            return value
        rows = []
        for row in value:
            if row is None:
                row = {}
            elif isinstance(row, dict):
                row = {var: {} if cell is None else cell for var, cell in row.items()}
            rows.append(row)
        return rows


class QueryResult(_ResultModel):
    """A decoded SPARQL SELECT response."""

    head: Header = Field(default_factory=Header)
    results: Results = Field(default_factory=Results)

    @model_validator(mode="before")
    @classmethod
    def null_document(cls, data: Any) -> Any:
        return {} if data is None else data

    @property
    def vars(self) -> list[str]:
        """Declared variable names, in declaration order."""
        return self.head.vars

    @property
    def rows(self) -> list[Row]:
        """Raw solution rows, in response order."""
        return self.results.bindings

    def bindings_by_variable(self) -> dict[str, list[Identifier]]:
        """
        Map each declared variable to the RDF terms bound to it.

        Variables are visited in declaration order and rows in response
        order.  Rows where the variable is unbound, or where its binding
        cannot be materialized, are skipped without a placeholder; a
        variable with no usable binding at all gets no key.

        Returns:
            Dictionary of variable name to list of terms
        """
        index: dict[str, list[Identifier]] = {}
        for var in self.head.vars:
            for row in self.results.bindings:
                binding = row.get(var)
                if binding is None:
                    continue
                try:
                    term = term_from_binding(binding)
                except TermMaterializationError:
                    continue
                index.setdefault(var, []).append(term)
        return index

    def solutions(self) -> list[dict[str, Identifier]]:
        """
        Materialize every row into a variable to term mapping.

        One mapping is returned per row, even when some (or all) of its
        bindings fail to materialize; failing bindings are left out.

        Returns:
            List of dictionaries, one per row, in response order
        """
        solutions: list[dict[str, Identifier]] = []
        for row in self.results.bindings:
            solution: dict[str, Identifier] = {}
            for var, binding in row.items():
                try:
                    solution[var] = term_from_binding(binding)
                except TermMaterializationError:
                    continue
            solutions.append(solution)
        return solutions
