"""
Tests for the expression wire codec
"""

import json

import pytest

from report_filters.builder import add_condition, add_group, update_condition
from report_filters.models import FilterExpression, TextCondition
from report_filters.serialization import (
    ExpressionDecodeError,
    deserialize,
    from_wire,
    serialize,
    to_wire,
)

from tests.conftest import make_expr


TWO_GROUPS_JSON = (
    '[{"conditions":[{"field":"category","value":["cat-1"]}]},'
    '{"conditions":[{"field":"account","value":["acc-1"]}]}]'
)


class TestEncoding:
    """Tests for serialize and to_wire."""

    def test_serialize_two_groups(self):
        """Test the documented wire example."""
        expr = make_expr(json.loads(TWO_GROUPS_JSON))
        assert serialize(expr) == TWO_GROUPS_JSON

    def test_serialize_empty(self):
        """Test the empty expression."""
        assert serialize(FilterExpression()) == "[]"

    def test_to_wire_uses_plain_lists(self, two_group_expr):
        """Test JSON-compatible output."""
        wire = to_wire(two_group_expr)
        assert wire[0] == {"conditions": [
            {"field": "category", "value": ["c1"]},
            {"field": "payee", "value": ["p1"]},
        ]}
        assert isinstance(wire[1]["conditions"][0]["value"], list)

    def test_text_value_is_string(self):
        """Test a text condition on the wire."""
        expr = make_expr([{"conditions": [{"field": "text", "value": "Hydro"}]}])
        assert to_wire(expr) == [{"conditions": [{"field": "text", "value": "Hydro"}]}]


class TestRoundTrip:
    """Tests for deserialize(serialize(e)) == e."""

    def test_empty(self):
        """Test the empty expression."""
        assert deserialize(serialize(FilterExpression())) == FilterExpression()

    def test_fixture_expression(self, two_group_expr):
        """Test a two-group expression."""
        assert deserialize(serialize(two_group_expr)) == two_group_expr

    def test_builder_output(self):
        """Test an expression assembled through the builder."""
        expr = add_group(add_group(FilterExpression()))
        expr = add_condition(expr, 0)
        expr = update_condition(expr, 0, 0, {"value": ["cat-1", "uncategorized"]})
        expr = update_condition(expr, 0, 1, {"field": "text"})
        expr = update_condition(expr, 0, 1, {"value": "coffee"})
        expr = update_condition(expr, 1, 0, {"field": "payee"})

        restored = deserialize(serialize(expr))
        assert restored == expr
        assert isinstance(restored[0].conditions[1], TextCondition)

    def test_selection_order_survives(self):
        """Test that identifier order is kept."""
        expr = make_expr([{"conditions": [{"field": "payee", "value": ["p3", "p1", "p2"]}]}])
        assert deserialize(serialize(expr))[0].conditions[0].value == ("p3", "p1", "p2")


class TestDecoding:
    """Tests for deserialize and from_wire."""

    def test_accepts_bytes(self):
        """Test decoding raw bytes."""
        assert len(deserialize(TWO_GROUPS_JSON.encode("utf-8"))) == 2

    def test_null_is_empty_expression(self):
        """Test a missing filter."""
        assert from_wire(None) == FilterExpression()
        assert deserialize("null") == FilterExpression()

    def test_single_identifier_is_lifted_to_set(self):
        """Test conditions stored with one identifier string."""
        expr = from_wire([{"conditions": [
            {"field": "account", "value": "acc-1"},
            {"field": "category", "value": ""},
            {"field": "text", "value": "rent"},
        ]}])
        values = [c.value for c in expr[0].conditions]
        assert values == [("acc-1",), (), "rent"]

    def test_groups_without_conditions_are_skipped(self):
        """Test stored empty groups."""
        expr = from_wire([
            {"conditions": []},
            {"conditions": [{"field": "payee", "value": ["p1"]}]},
        ])
        assert len(expr) == 1
        assert expr[0].conditions[0].field == "payee"

    @pytest.mark.parametrize("text", ["not json", "", "{"])
    def test_invalid_json(self, text):
        """Test text that is not JSON."""
        with pytest.raises(ExpressionDecodeError):
            deserialize(text)

    def test_deeply_nested_json(self):
        """Test nesting too deep for the JSON parser."""
        with pytest.raises(ExpressionDecodeError):
            deserialize("[" * 100000 + "]" * 100000)

    @pytest.mark.parametrize("data", [
        {"conditions": []},
        [{"field": "account", "value": ["a1"]}],
        [{"conditions": [{"field": "amount", "value": ["1"]}]}],
        [{"conditions": [{"field": "text", "value": ["rent"]}]}],
        [{"conditions": [{"field": "account", "value": [1]}]}],
        ["group"],
    ])
    def test_invalid_shape(self, data):
        """Test JSON that is not an expression."""
        with pytest.raises(ExpressionDecodeError):
            from_wire(data)

    def test_decode_error_is_value_error(self):
        """Test the exception hierarchy."""
        with pytest.raises(ValueError):
            deserialize("[1]")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
