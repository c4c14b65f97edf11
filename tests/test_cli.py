import json

import pytest

from rqlmongo import cli


def test_convert_prints_json(capsys):
    cli.convert("and(gt(x,1),lt(x,5))")
    data = json.loads(capsys.readouterr().out)
    assert data["criteria"] == {"x": {"$gt": 1, "$lt": 5}}


def test_convert_tree_format(capsys):
    cli.convert("eq(a,1)", format="tree")
    assert "  a: 1" in capsys.readouterr().out.splitlines()


def test_convert_from_url(capsys):
    cli.convert(url="https://api.local/items?eq(a,1)&limit(10)")
    data = json.loads(capsys.readouterr().out)
    assert data["criteria"] == {"a": 1}
    assert data["limit"] == 10


def test_convert_to_file(tmp_path, capsys):
    path = tmp_path / "out.json"
    cli.convert("eq(a,1)", output=path)
    assert "Exported query" in capsys.readouterr().out
    assert json.loads(path.read_text())["criteria"] == {"a": 1}


def test_convert_id_field(capsys):
    cli.convert("select(+name,-key)", id_field="key")
    assert json.loads(capsys.readouterr().out)["projection"] == {"name": 1, "key": 0}


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"query": "eq(foo,1),ne(foo,2)"}, "conflicting operators"),
        ({"query": "foo(a,1)"}, "not allowed: foo"),
        ({"query": "eq(a,1"}, "closing paren"),
        ({"query": "eq(a,1)", "format": "xml"}, "Unknown format"),
        ({}, "No query provided"),
    ],
)
def test_convert_errors(capsys, kwargs, message):
    with pytest.raises(SystemExit) as exc:
        cli.convert(**kwargs)
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert message in err


def test_parse_prints_tree(capsys):
    cli.parse("eq(a,1)|eq(b,2)")
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "name": "or",
        "args": [{"name": "eq", "args": ["a", 1]}, {"name": "eq", "args": ["b", 2]}],
    }


def test_parse_canonical(capsys):
    cli.parse("a=1&b<2", canonical=True)
    assert capsys.readouterr().out.strip() == "and(eq(a,1),lt(b,2))"


def test_parse_error(capsys):
    with pytest.raises(SystemExit):
        cli.parse("?eq(a,1)")
    assert "must not start with ?" in capsys.readouterr().err
