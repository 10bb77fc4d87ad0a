"""Exceptions raised by :mod:`sparqlrepo`.

Every error derives from :class:`SparqlError`, so callers that do not
care about the failure kind can catch a single type.
"""

from __future__ import annotations


class SparqlError(Exception):
    """Base exception for sparqlrepo errors."""

    pass


class OptionError(SparqlError, ValueError):
    """Raised when a repository option is given an invalid value."""

    pass


class TransportError(SparqlError):
    """Raised when the HTTP exchange itself fails (DNS, refused, timeout)."""

    pass


class ProtocolError(SparqlError):
    """Raised when the endpoint answers with a non-200 status.

    Attributes:
        operation: Name of the repository call ("Query", "Update", ...)
        status_code: HTTP status code
        reason: HTTP reason phrase
        body: Response body text, or None if it could not be read
    """

    def __init__(
        self,
        operation: str,
        status_code: int,
        reason: str,
        body: str | None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(self._message())

    @property
    def status(self) -> str:
        """The HTTP status line, e.g. ``"500 Internal Server Error"``."""
        return f"{self.status_code} {self.reason}".strip()

    def _message(self) -> str:
        if self.body is None:
            detail = "Failed to read response body"
        elif self.body.strip():
            detail = "Response body: \n" + self.body
        else:
            detail = ""
        return f"{self.operation}: SPARQL request failed: {self.status}. {detail}".rstrip()


class DecodeError(SparqlError):
    """Raised when a response body is not valid SPARQL JSON or Turtle."""

    pass


class TermMaterializationError(SparqlError, ValueError):
    """Raised when a binding cannot be turned into an RDF term."""

    pass


class InvalidIRI(TermMaterializationError):
    """Raised for values that are not syntactically valid IRIs."""

    pass


class InvalidBlankNode(TermMaterializationError):
    """Raised for labels that cannot identify a blank node."""

    pass


class InvalidLanguageTag(TermMaterializationError):
    """Raised for malformed ``xml:lang`` tags."""

    pass


class UnknownTermKind(TermMaterializationError):
    """Raised when a binding has a ``type`` other than the four known kinds."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"unknown term type: {kind!r}")
