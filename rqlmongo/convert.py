# rqlmongo/convert.py
import logging

import httpx

from rqlmongo.compiler import Compiler
from rqlmongo.models import MongoQuery
from rqlmongo.query.combinators import Query
from rqlmongo.query.parser import parse
from rqlmongo.query.validator import validate

logger = logging.getLogger(__name__)


def convert(query: Query | dict | str, id_field: str | None = None) -> MongoQuery:
    """
    Convert an RQL query into a Mongo query.

    Args:
        query: RQL text, a Query tree, or a plain {"name", "args"} mapping
        id_field: Field that may be excluded from an inclusive projection
            (defaults to $RQLMONGO_ID_FIELD, then "_id")

    Returns:
        MongoQuery with criteria, sort, projection and paging filled in

    Raises:
        ParseError: If the text is malformed
        ValidationError: If an operator or its arguments are not allowed
        ConflictError: If a field gets both eq and another comparison

    Examples:
        convert("eq(status,active)&sort(-created)&limit(20)")

        q = Query("and", [...]).push(limit(20), after(cursor))
        convert(q)
    """
    if isinstance(query, str):
        logger.debug("Parsing query string: %s", query)
        query = parse(query)
    return Compiler(id_field).compile(validate(query))


def convert_string(rql: str, id_field: str | None = None) -> MongoQuery:
    """Parse, validate and compile RQL text."""
    return convert(parse(rql), id_field)


def query_from_url(url: str | httpx.URL) -> str:
    """Return the raw, still percent-encoded query string of a request URL.

    Example: https://api.local/items?eq(a,1)&sort(-b) -> "eq(a,1)&sort(-b)"
    """
    return httpx.URL(url).query.decode("ascii")


def convert_url(url: str | httpx.URL, id_field: str | None = None) -> MongoQuery:
    """Convert the RQL carried in a request URL's query string."""
    rql = query_from_url(url)
    logger.debug("Query from %s: %s", url, rql)
    return convert_string(rql, id_field)
