"""Command line interface for :mod:`sparqlrepo`."""

from __future__ import annotations

import json
import logging
import sys

import click

from .errors import SparqlError
from .repo import Option, Repo, digest_auth, timeout

__all__ = [
    "main",
]


def _endpoint_options(func):
    """Attach the connection options shared by every command."""
    options = [
        click.option(
            "--endpoint",
            required=True,
            envvar="SPARQL_ENDPOINT",
            help="SPARQL endpoint URL (env: SPARQL_ENDPOINT)",
        ),
        click.option("--user", envvar="SPARQL_USER", default=None, help="Digest auth username"),
        click.option(
            "--password", envvar="SPARQL_PASSWORD", default="", help="Digest auth password"
        ),
        click.option(
            "--timeout",
            "timeout_seconds",
            type=float,
            envvar="SPARQL_TIMEOUT",
            default=None,
            help="Request timeout in seconds",
        ),
        click.argument("query"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _open(endpoint: str, user: str | None, password: str, timeout_seconds: float | None) -> Repo:
    options: list[Option] = []
    if user:
        options.append(digest_auth(user, password))
    if timeout_seconds is not None:
        options.append(timeout(timeout_seconds))
    try:
        return Repo(endpoint, *options)
    except SparqlError as e:
        raise click.ClickException(str(e)) from e


def _read_query(query: str) -> str:
    if query == "-":
        return sys.stdin.read()
    return query


@click.group()
@click.version_option(package_name="sparqlrepo")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """sparqlrepo - query, update and construct against a SPARQL endpoint.

    QUERY is the SPARQL text, or - to read it from stdin.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("sparqlrepo").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s", force=True)


@main.command()
@_endpoint_options
@click.option("--json", "as_json", is_flag=True, help="Print solutions as JSON")
def query(
    endpoint: str,
    user: str | None,
    password: str,
    timeout_seconds: float | None,
    query: str,
    as_json: bool,
) -> None:
    """Run a SELECT query and print one line per solution.

    Terms are printed in N3 form, tab separated, in the order of the
    query's variables.  Unbound variables print as empty cells.

    Example:
      sparqlrepo query --endpoint http://localhost:3030/ds/sparql "SELECT * { ?s ?p ?o } LIMIT 5"
    """
    repo = _open(endpoint, user, password, timeout_seconds)
    try:
        result = repo.query(_read_query(query))
    except SparqlError as e:
        raise click.ClickException(str(e)) from e

    solutions = result.solutions()
    if as_json:
        rows = [{var: term.n3() for var, term in row.items()} for row in solutions]
        click.echo(json.dumps(rows, indent=2))
        return

    click.echo("\t".join(result.vars))
    for row in solutions:
        cells = [row[var].n3() if var in row else "" for var in result.vars]
        click.echo("\t".join(cells))


@main.command()
@_endpoint_options
def update(
    endpoint: str,
    user: str | None,
    password: str,
    timeout_seconds: float | None,
    query: str,
) -> None:
    """Send a SPARQL Update request."""
    repo = _open(endpoint, user, password, timeout_seconds)
    try:
        status = repo.update(_read_query(query))
    except SparqlError as e:
        raise click.ClickException(str(e)) from e
    click.echo(status)


@main.command()
@_endpoint_options
def construct(
    endpoint: str,
    user: str | None,
    password: str,
    timeout_seconds: float | None,
    query: str,
) -> None:
    """Run a CONSTRUCT query and print the triples as N-Triples."""
    repo = _open(endpoint, user, password, timeout_seconds)
    try:
        triples = repo.construct(_read_query(query))
    except SparqlError as e:
        raise click.ClickException(str(e)) from e
    for s, p, o in triples:
        click.echo(f"{s.n3()} {p.n3()} {o.n3()} .")


if __name__ == "__main__":
    main()
