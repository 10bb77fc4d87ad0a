"""
Repository client for SPARQL endpoints.

A :class:`Repo` wraps a single SPARQL endpoint URL and performs the three
canonical SPARQL protocol operations over HTTP POST:

- :meth:`Repo.query` for SELECT queries (JSON results)
- :meth:`Repo.update` for SPARQL Update requests
- :meth:`Repo.construct` for CONSTRUCT queries (Turtle triples)

Transport settings are passed as option callables, applied in order when
the repository is created:

Usage:
    from sparqlrepo import Repo, digest_auth, timeout

    repo = Repo(
        "http://localhost:8890/sparql",
        digest_auth("dba", "secret"),
        timeout(30),
    )
    result = repo.query("SELECT ?s WHERE { ?s ?p ?o } LIMIT 10")
    for row in result.solutions():
        print(row["s"])

Each call is a single round trip with no retry; failures surface as
:class:`~sparqlrepo.errors.TransportError` or
:class:`~sparqlrepo.errors.ProtocolError`.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable
from urllib.parse import urlencode

import requests
from requests.auth import AuthBase, HTTPDigestAuth

from sparqlrepo.decoder import Triple, parse_json, parse_turtle
from sparqlrepo.errors import OptionError, ProtocolError, TransportError
from sparqlrepo.helpers import DEFAULT_DATE_FORMAT, get_datetime
from sparqlrepo.models import QueryResult, Row
from sparqlrepo.version import VERSION

__all__ = [
    "UPDATE_OK",
    "MimeTypes",
    "Option",
    "Repo",
    "RepoSettings",
    "date_format",
    "digest_auth",
    "open_repo",
    "timeout",
]

logger = logging.getLogger(__name__)

UPDATE_OK = "OK"


class MimeTypes:
    """MIME types used on the wire."""

    FORM = "application/x-www-form-urlencoded"
    JSON = "application/sparql-results+json"
    TURTLE = "text/turtle"


@dataclass
class RepoSettings:
    """Transport settings of a :class:`Repo`, filled in by options."""

    timeout: float | None = None
    auth: AuthBase | None = None
    date_format: str = DEFAULT_DATE_FORMAT


Option = Callable[[RepoSettings], None]


def digest_auth(username: str, password: str) -> Option:
    """Use HTTP Digest authentication on every request."""

    def apply(settings: RepoSettings) -> None:
        if not username:
            raise OptionError("digest_auth: username cannot be empty")
        settings.auth = HTTPDigestAuth(username, password)

    return apply


def timeout(duration: float | timedelta) -> Option:
    """
    Time requests out after the given duration.

    Args:
        duration: Seconds, or a :class:`datetime.timedelta`

    Returns:
        Option callable for :class:`Repo`
    """

    def apply(settings: RepoSettings) -> None:
        if isinstance(duration, bool) or not isinstance(duration, (int, float, timedelta)):
            raise OptionError(f"timeout: expected seconds or a timedelta, got {duration!r}")
        seconds = duration.total_seconds() if isinstance(duration, timedelta) else duration
        if seconds <= 0:
            raise OptionError(f"timeout: duration must be positive, got {seconds}")
        settings.timeout = float(seconds)

    return apply


def date_format(layout: str) -> Option:
    """Set the ``strptime`` layout used to read ``xsd:dateTime`` values."""

    def apply(settings: RepoSettings) -> None:
        if not layout:
            raise OptionError("date_format: layout cannot be empty")
        settings.date_format = layout

    return apply


class Repo:
    """
    A RDF repository queryable via the SPARQL protocol over HTTP.

    The instance holds configuration only; every call opens its own
    session, so one ``Repo`` can be shared between threads.

    Attributes:
        endpoint: The SPARQL endpoint URL
        timeout: Request timeout in seconds, or None for no timeout
        date_format: Layout used by :meth:`get_datetime`

    Example:
        >>> repo = Repo("http://localhost:3030/ds/sparql", timeout(10))
        >>> result = repo.query("SELECT ?s { ?s a ?c } LIMIT 1")
        >>> result.bindings_by_variable()["s"]
    """

    USER_AGENT = f"sparqlrepo/{VERSION} (SPARQL client)"

    def __init__(self, endpoint: str, *options: Option) -> None:
        """
        Create a repository and apply options in order.

        Args:
            endpoint: SPARQL endpoint URL
            *options: Option callables such as :func:`digest_auth`,
                :func:`timeout` and :func:`date_format`

        Raises:
            OptionError: From the first option that rejects its value
        """
        settings = RepoSettings()
        for option in options:
            option(settings)
        self._endpoint = endpoint
        self._settings = settings
        logger.debug(f"Repo initialized for {endpoint}")

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout(self) -> float | None:
        return self._settings.timeout

    @property
    def date_format(self) -> str:
        return self._settings.date_format

    @property
    def authenticated(self) -> bool:
        return self._settings.auth is not None

    def query(self, query: str) -> QueryResult:
        """
        Perform a SPARQL query and decode the JSON results.

        Args:
            query: SPARQL SELECT query string

        Returns:
            The decoded :class:`QueryResult`

        Raises:
            TransportError: If the request could not be completed
            ProtocolError: If the endpoint answered with a non-200 status
            DecodeError: If the body is not SPARQL JSON results
        """
        body = self._post("Query", {"query": query}, accept=MimeTypes.JSON)
        return parse_json(io.BytesIO(body))

    def update(self, query: str) -> str:
        """
        Perform a SPARQL Update request.

        The response body is ignored; success is reported with
        :data:`UPDATE_OK`.

        Raises:
            TransportError: If the request could not be completed
            ProtocolError: If the endpoint answered with a non-200 status
        """
        self._post("Update", {"update": query}, accept=MimeTypes.JSON)
        return UPDATE_OK

    def construct(self, query: str) -> list[Triple]:
        """
        Perform a SPARQL CONSTRUCT query and decode the Turtle response.

        Args:
            query: SPARQL CONSTRUCT query string

        Returns:
            The constructed triples, in document order

        Raises:
            TransportError: If the request could not be completed
            ProtocolError: If the endpoint answered with a non-200 status
            DecodeError: If the body is not valid Turtle
        """
        body = self._post(
            "Construct",
            {"query": query, "format": MimeTypes.TURTLE},
            accept=MimeTypes.TURTLE,
        )
        return parse_turtle(io.BytesIO(body), base=self._endpoint)

    def get_datetime(self, needle: str, rows: list[Row]) -> datetime | None:
        """Read variable ``needle`` of the first row with this repo's date layout."""
        return get_datetime(needle, rows, date_format=self._settings.date_format)

    def _post(self, operation: str, form: dict[str, str], accept: str) -> bytes:
        """
        POST a form-encoded request and return the body of a 200 response.

        Args:
            operation: Name used in log and error messages
            form: Form fields to encode
            accept: Accept header value

        Returns:
            Raw response body

        Raises:
            TransportError: On network failures and timeouts
            ProtocolError: On any status other than 200
        """
        data = urlencode(form).encode("ascii")
        headers = {
            "Content-Type": MimeTypes.FORM,
            "Content-Length": str(len(data)),
            "Accept": accept,
            "User-Agent": self.USER_AGENT,
        }

        logger.debug(f"{operation}: POST {self._endpoint} ({len(data)} bytes)")

        try:
            with requests.Session() as session, session.post(
                self._endpoint,
                data=data,
                headers=headers,
                auth=self._settings.auth,
                timeout=self._settings.timeout,
                stream=True,
            ) as response:
                logger.debug(f"{operation}: HTTP {response.status_code} from {self._endpoint}")
                if response.status_code != requests.codes.ok:
                    raise ProtocolError(
                        operation,
                        response.status_code,
                        response.reason or "",
                        _read_error_body(response),
                    )
                return response.content
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{operation}: SPARQL request failed: {e}") from e

    def __repr__(self) -> str:
        return f"Repo({self._endpoint!r})"


def _read_error_body(response: requests.Response) -> str | None:
    """Return the body of an error response, or None if it cannot be read."""
    try:
        return response.text
    except requests.exceptions.RequestException:
        return None


def open_repo(endpoint: str, *options: Option) -> Repo:
    """Create a :class:`Repo`; shorthand for ``Repo(endpoint, *options)``."""
    return Repo(endpoint, *options)
