import pytest

from kdlparse import KdlDocument, KdlFormatter, StringValue, format_document, parse_document
from kdlparse.formatter import escape_string, needs_quotes


def canonical(text: str, formatter: KdlFormatter | None = None) -> str:
    return parse_document(text).serialize(formatter)


def test_nested_document():
    text = 'node 1 "two" key=true {\n  child null\n  other { deep }\n}\nlast\n'
    assert canonical(text) == (
        'node 1 "two" key=true {\n'
        "    child null\n"
        "    other {\n"
        "        deep\n"
        "    }\n"
        "}\n"
        "last\n"
    )


def test_empty_document():
    assert canonical("") == ""
    assert format_document(KdlDocument()) == ""


def test_values_come_before_properties():
    assert canonical("n k=1 2 j=3 4") == "n 2 4 k=1 j=3\n"


def test_empty_children_block_is_dropped():
    assert canonical("n {}\n") == "n\n"


def test_string_escapes():
    assert canonical('n "a\\nb\\"c\\\\d\\te\\/f\\b\\f"') == 'n "a\\nb\\"c\\\\d\\te/f\\b\\f"\n'


def test_raw_string_is_written_as_escaped_string():
    assert canonical('n r#"a "q" \\x"#') == 'n "a \\"q\\" \\\\x"\n'


def test_decimal_numbers():
    assert canonical("n 12.340 1.05 1e10 2.5E-3 1_000 -1.5 +7 0.0") == "n 12.340 1.05 1e10 2.5e-3 1000 -1.5 7 0.0\n"


def test_based_numbers_are_written_in_decimal():
    assert canonical("n 0x1A_F 0b101 0o17 -0x10") == "n 431 5 15 -16\n"


@pytest.mark.parametrize(
    "text, expected",
    [
        ('"my node"', '"my node"\n'),
        ('"true"', '"true"\n'),
        ('"1abc"', '"1abc"\n'),
        ('"-1x"', '"-1x"\n'),
        ('"a\\"b"', '"a\\"b"\n'),
        ('"plain"', "plain\n"),
        ("-dash", "-dash\n"),
        ("héllo", "héllo\n"),
        ('n "key with space"=1 "null"=2', 'n "key with space"=1 "null"=2\n'),
        ('("my type")n ("u 8")1', '("my type")n ("u 8")1\n'),
        ("(t)n (u8)0x10", "(t)n (u8)16\n"),
    ],
)
def test_identifier_quoting(text, expected):
    assert canonical(text) == expected


def test_needs_quotes():
    assert not needs_quotes("abc")
    assert not needs_quotes("r#x")
    assert needs_quotes("a=b")
    assert needs_quotes("+5")
    assert needs_quotes("false")
    with pytest.raises(ValueError):
        needs_quotes("")


def test_escape_string():
    assert escape_string('say "hi"\n') == '"say \\"hi\\"\\n"'


def test_sort_properties():
    assert canonical("n b=1 a=2") == "n b=1 a=2\n"
    assert canonical("n b=1 a=2", KdlFormatter(sort_properties=True)) == "n a=2 b=1\n"


def test_custom_indent():
    assert canonical("a { b { c } }", KdlFormatter(indent="\t")) == "a {\n\tb {\n\t\tc\n\t}\n}\n"


def test_slashdashed_parts_are_omitted():
    assert canonical("a /-1 2 /-k=3\n/-b\nc /-{ d }\n") == "a 2\nc\n"


def test_format_value():
    formatter = KdlFormatter()
    assert formatter.format_value(StringValue(value="x", type_hint="t")) == '(t)"x"'


def test_document_str_matches_serialize():
    document = parse_document("a 1")
    assert str(document) == document.serialize() == "a 1\n"


FIXED_POINT_DOCUMENTS = [
    'node 1 "two" key=true {\n  child null\n}\n',
    "/-foo bar=1 { baz }\n",
    'n r#"raw "quoted" \\path"# "tab\\there" "\\u{2028}"\n',
    '("type hint")"node name" ("value hint")1.50 "=key"=(t)-0o17\n',
    "a; b; c { d; e { f } }",
    "n 1.0e-5 +12 0b1111_0000 1_2.3_4",
    '"true" "false"=null "-1"=2 "+a"=3',
    "n \\\n  1 \\ // continued\n  2 /* inline */ 3\n",
    'weird "\\b\\f\\r" "\u00a0spaced" "end"',
]


@pytest.mark.parametrize("text", FIXED_POINT_DOCUMENTS)
def test_canonical_form_is_a_fixed_point(text):
    once = canonical(text)
    assert canonical(once) == once


def test_deep_document_formats_without_recursion():
    document = KdlDocument()
    parent = 0
    depth = 3000
    for _ in range(depth):
        parent = document.add_child(parent, "n").index
    lines = document.serialize(KdlFormatter(indent=" ")).splitlines()
    assert len(lines) == 2 * depth - 1
    assert lines[depth - 1] == " " * (depth - 1) + "n"
    assert lines[-1] == "}"
