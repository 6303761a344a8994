import pytest
from pydantic import ValidationError

from kdlparse import BasedNumber, DecimalNumber, KdlDocument, Node, NullValue, Radix, StringValue, parse_document


def test_new_document_has_only_the_root():
    document = KdlDocument()
    assert len(document) == 0
    assert document.root.index == 0
    assert document.root.name == "document"
    assert document.root.parent is None


def test_add_child_links_both_ways():
    document = KdlDocument()
    a = document.add_child(0, "a", type_hint="t")
    b = document.add_child(a.index, "b")
    assert document.root.children == [a.index]
    assert a.children == [b.index]
    assert b.parent == a.index
    assert document.parent(b.index) is a
    assert document.node(b.index) is b
    assert document.serialize() == "(t)a {\n    b\n}\n"


def test_walk_reports_depth_in_document_order():
    document = parse_document("a { b { c } d }\ne")
    assert [(depth, node.name) for depth, node in document.walk()] == [
        (0, "a"),
        (1, "b"),
        (2, "c"),
        (1, "d"),
        (0, "e"),
    ]


def test_find():
    document = parse_document("item 1\ngroup { item 2 }")
    assert [node.arguments for node in document.find("item")] == [[1], [2]]


def test_number_models_validate():
    with pytest.raises(ValidationError):
        DecimalNumber(integral=-1)
    with pytest.raises(ValidationError):
        BasedNumber(radix=Radix.HEX, magnitude=-5)
    assert BasedNumber(radix=16, magnitude=255).radix is Radix.HEX
    assert Radix.OCTAL.prefix == "0o"


def test_decimal_to_python():
    assert DecimalNumber(integral=12).to_python() == 12
    assert DecimalNumber(negative=True, integral=1, fractional=5, fractional_digits=2).to_python() == -1.05
    assert DecimalNumber(integral=3, exponent=2, exponent_negative=True).to_python() == 0.03


def test_node_values_use_the_kind_discriminator():
    node = Node.model_validate(
        {
            "index": 1,
            "name": "n",
            "values": [{"kind": "string", "value": "x"}, {"kind": "null", "type_hint": "t"}],
            "properties": {"k": {"kind": "number", "value": {"radix": 2, "magnitude": 5}}},
        }
    )
    assert node.values == [StringValue(value="x"), NullValue(type_hint="t")]
    assert node.get("k") == 5
    assert node.get("missing", "default") == "default"
