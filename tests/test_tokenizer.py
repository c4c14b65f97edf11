import pytest

from rqlmongo.errors import ParseError
from rqlmongo.query.tokenizer import match_group, normalize_shorthand, split_args, unquote_arg


class TestMatchGroup:
    def test_simple(self):
        assert match_group("(a,b)") == "a,b"

    def test_nested(self):
        assert match_group("(a,(b,c)),d") == "a,(b,c)"

    def test_quoted_paren(self):
        assert match_group("(a,')',b)") == "a,')',b"
        assert match_group('(a,")",b)') == 'a,")",b'

    def test_escaped_paren(self):
        assert match_group("(a\\)b)") == "a\\)b"

    def test_unterminated(self):
        with pytest.raises(ParseError, match="closing paren"):
            match_group("(a,b")


class TestSplitArgs:
    def test_plain(self):
        assert split_args("a,b , c") == ["a", "b", "c"]

    def test_array(self):
        assert split_args("foo,(1,2,3)") == ["foo", ["1", "2", "3"]]

    def test_array_first(self):
        assert split_args("(1,2) , x") == [["1", "2"], "x"]

    def test_nested_call_kept_whole(self):
        assert split_args("eq(a,1),b") == ["eq(a,1)", "b"]

    def test_quotes_protect_commas(self):
        assert split_args("'a,b',c") == ["'a,b'", "c"]

    def test_escape_protects_comma(self):
        assert split_args("a\\,b,c") == ["a\\,b", "c"]

    def test_trailing_empty_dropped(self):
        assert split_args("a,") == ["a"]
        assert split_args("") == []

    def test_text_after_array(self):
        with pytest.raises(ParseError):
            split_args("(1,2)x")


class TestUnquoteArg:
    def test_strips_quotes(self):
        assert unquote_arg("'a,b'") == "a,b"
        assert unquote_arg('"x"') == "x"

    def test_drops_escapes(self):
        assert unquote_arg("a\\,b") == "a,b"

    def test_keeps_escaped_colon(self):
        assert unquote_arg("a\\:b") == "a\\:b"

    def test_backslash_literal_inside_quotes(self):
        assert unquote_arg("'a\\b'") == "a\\b"


class TestNormalizeShorthand:
    def test_equals(self):
        assert normalize_shorthand("foo=3") == "eq(foo,3)"
        assert normalize_shorthand("foo==3") == "eq(foo,3)"

    def test_comparators(self):
        assert normalize_shorthand("a>=1&b!=2") == "ge(a,1)&ne(b,2)"
        assert normalize_shorthand("a<1|b>2") == "lt(a,1)|gt(b,2)"
        assert normalize_shorthand("a<=1") == "le(a,1)"

    def test_url_escaped(self):
        assert normalize_shorthand("a%3C5") == "lt(a,5)"
        assert normalize_shorthand("a%3c=5") == "le(a,5)"
        assert normalize_shorthand("a%3E5") == "gt(a,5)"
        assert normalize_shorthand("a%3e=5") == "ge(a,5)"

    def test_escaped_url_comparator_is_literal(self):
        assert normalize_shorthand("eq(a,x\\%3Cy)") == "eq(a,x\\%3Cy)"
        assert normalize_shorthand("eq(a,b\\%3E%3Dc)") == "eq(a,b\\%3E%3Dc)"

    def test_named_comparator(self):
        assert normalize_shorthand("price=gt=10") == "gt(price,10)"

    def test_calls_untouched(self):
        assert normalize_shorthand("and(eq(a,1),lt(b,2))") == "and(eq(a,1),lt(b,2))"

    def test_illegal_operator(self):
        with pytest.raises(ParseError, match="Illegal operator"):
            normalize_shorthand("a!==1")
