# rqlmongo/cli.py
import json
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import cyclopts

from rqlmongo import convert as do_convert
from rqlmongo.convert import query_from_url
from rqlmongo.errors import RQLError
from rqlmongo.export import get_exporter
from rqlmongo.export.json import default_serializer
from rqlmongo.query.parser import parse as do_parse
from rqlmongo.query.serializer import to_string

app = cyclopts.App(
    name="rqlmongo",
    help="Convert RQL resource queries into Mongo queries.",
)


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


@app.command(name="convert")
def convert(
    query: Annotated[str | None, cyclopts.Parameter(help="RQL query string")] = None,
    url: Annotated[
        str | None,
        cyclopts.Parameter(name=["--url", "-u"], help="Read the RQL from this URL's query string"),
    ] = None,
    format: Annotated[
        str,
        cyclopts.Parameter(name=["--format", "-f"], help="Output format: json, tree"),
    ] = "json",
    output: Annotated[
        Path | None,
        cyclopts.Parameter(name=["--output", "-o"], help="Output file path"),
    ] = None,
    id_field: Annotated[
        str | None,
        cyclopts.Parameter(
            name="--id-field", help="Field allowed to be excluded from an inclusive projection"
        ),
    ] = None,
) -> None:
    """Convert an RQL query into a Mongo query."""
    if url is not None:
        query = query_from_url(url)
    if not query:
        _fail("No query provided. Pass it as an argument or use --url.")

    # Validate format early
    try:
        exporter = get_exporter(format)
    except ValueError as e:
        _fail(str(e))

    try:
        result = do_convert(query, id_field=id_field)
    except RQLError as e:
        _fail(str(e))

    if output:
        exporter.export(result, output)
        print(f"Exported query to {output}")
    else:
        print(exporter.to_string(result))


@app.command(name="parse")
def parse(
    query: Annotated[str, cyclopts.Parameter(help="RQL query string")],
    canonical: Annotated[
        bool,
        cyclopts.Parameter(name="--canonical", help="Print canonical RQL text instead of JSON"),
    ] = False,
) -> None:
    """Parse an RQL query and print its operator tree."""
    try:
        tree = do_parse(query)
    except RQLError as e:
        _fail(str(e))

    if canonical:
        print(to_string(tree))
    else:
        print(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False, default=default_serializer))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
