import math
import re
from datetime import UTC, datetime

import pytest

from rqlmongo.query.combinators import Query, eq, in_, sort
from rqlmongo.query.parser import parse
from rqlmongo.query.serializer import encode_value, to_string


def test_to_string_simple():
    assert to_string(parse("eq(foo,3)")) == "eq(foo,3)"


def test_str_is_canonical_text():
    q = parse("eq(a,1)|eq(b,2)")
    assert str(q) == "or(eq(a,1),eq(b,2))"


def test_to_string_array():
    assert to_string(in_("x", [1, 2])) == "in(x,(1,2))"


def test_sort_signs_survive():
    assert parse(to_string(sort("+a", "-b"))) == sort("+a", "-b")


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (5.921, "5.921"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        ("abc", "abc"),
        ("a b", "a%20b"),
        ("(x)", "%28x%29"),
        ("3", "string:3"),
        ("true", "string:true"),
        ("", "string:"),
        (datetime(2001, 1, 1, tzinfo=UTC), "date:2001-01-01T00:00:00.000Z"),
        (re.compile("^a", re.IGNORECASE), "re:%5Ea"),
        (re.compile("^a"), "RE:%5Ea"),
        ({"k": 1}, "json:%7B%22k%22%3A1%7D"),
        ("x<y", "x\\%3Cy"),
        ("b>=c", "b\\%3E%3Dc"),
        (re.compile("(?<=x)y"), "RE:%28%3F\\%3C%3Dx%29y"),
    ],
)
def test_encode_value(value, expected):
    assert encode_value(value) == expected


def test_encode_unsupported_value():
    with pytest.raises(TypeError):
        encode_value(object())


@pytest.mark.parametrize(
    "text",
    [
        "eq(foo,3)",
        "eq(foo,string:3)",
        "eq(foo,string:true)",
        "eq(foo,null)",
        "eq(foo,-Infinity)",
        "eq(foo,5.921)",
        "eq(name,'a,b')",
        "eq(name,%27quoted%27)",
        "in(x,(1,2,3))",
        "out(x,())",
        "and(eq(a,1),or(eq(b,2),lt(c,epoch:0)))",
        "eq(a,re:^ab)",
        "eq(a,RE:^ab)",
        'eq(a,json:{\\"k\\":1})',
        "ge(a,date:2019-11-21T17:13:34.937Z)",
        "gt(a,isodate:2001)",
        "sort(+a,-b,c)&select(+name,-_id)&limit(10,2)&after(01a0b9f08238fde)",
        "eq(a,1),eq(b,2)|eq(c,3)",
        "eq(a,x\\%3Cy)",
        "eq(a,json:%22x%5Cu003cy%22)",
    ],
)
def test_round_trip(text):
    q = parse(text)
    assert parse(to_string(q)) == q


def test_round_trip_built_tree():
    q = Query("and", [eq("a b", "12"), eq("c", datetime(2020, 5, 1, 12, 30, 0, 123456, tzinfo=UTC))])
    assert parse(to_string(q)) == q


@pytest.mark.parametrize(
    "value",
    ["x<y", "b>c", "<=", re.compile("(?<=x)y"), re.compile("a>b", re.IGNORECASE), {"op": "<", "v": ">"}],
)
def test_round_trip_angle_brackets(value):
    q = eq("a", value)
    assert parse(to_string(q)) == q
