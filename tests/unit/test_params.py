"""Unit tests for request parameter sets."""

import json

import pytest

from tradesatoshi_client.api.params import FIELDS, ParameterSet


class TestParameterSet:
    """Test cases for ParameterSet."""

    def test_empty_set_serializes_to_nothing(self):
        params = ParameterSet()
        assert len(params) == 0
        assert params.to_query_string() == ""
        assert params.to_json_body() == "{}"

    def test_unset_fields_are_omitted(self):
        params = ParameterSet(market="LTC_BTC", count=None)
        assert params.to_dict() == {"Market": "LTC_BTC"}
        assert "Count" not in params.to_json_body()
        assert "Count" not in params.to_query_string()

    def test_query_string_uses_canonical_order(self):
        # declared order is Market, Count, ..., Type, Depth regardless of kwargs order
        params = ParameterSet(depth=10, type="both", market="LTC_BTC")
        assert params.to_query_string() == "?Market=LTC_BTC&Type=both&Depth=10"

    def test_query_string_encodes_values(self):
        params = ParameterSet(address="a b&c=d")
        assert params.to_query_string() == "?Address=a+b%26c%3Dd"

    def test_json_body_wire_names(self):
        params = ParameterSet(
            market="LTC_BTC", count=5, currency="BTC", type="Buy", depth=3,
            amount=1.5, price=0.01, address="addr", page_num=2, order_id=99,
            username="alice",
        )
        assert params.to_json_body() == (
            '{"Market":"LTC_BTC","Count":5,"Currency":"BTC","Type":"Buy","Depth":3,'
            '"Amount":1.5,"Price":0.01,"Address":"addr","PageNumber":2,"OrderId":99,'
            '"Username":"alice"}'
        )

    def test_float_fields_serialize_as_floats(self):
        params = ParameterSet(amount=2, price=1222223.12323)
        assert params.to_json_body() == '{"Amount":2.0,"Price":1222223.12323}'

    def test_set_returns_new_instance(self):
        base = ParameterSet(market="LTC_BTC")
        extended = base.set("count", 20)

        assert base.get("count") is None
        assert extended.get("count") == 20
        assert extended.get("market") == "LTC_BTC"

    def test_set_none_clears_field(self):
        params = ParameterSet(market="LTC_BTC", count=20).set("count", None)
        assert params.to_dict() == {"Market": "LTC_BTC"}

    def test_equality(self):
        assert ParameterSet(market="A", count=1) == ParameterSet(count=1, market="A")
        assert ParameterSet(market="A") != ParameterSet(market="B")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            ParameterSet(side="buy")
        with pytest.raises(ValueError):
            ParameterSet().set("side", "buy")

    @pytest.mark.parametrize("name,value", [
        ("count", "20"),
        ("count", 2.5),
        ("count", True),
        ("market", 5),
        ("amount", "1.0"),
        ("order_id", "99"),
    ])
    def test_wrong_types_rejected(self, name, value):
        with pytest.raises(TypeError):
            ParameterSet(**{name: value})

    def test_non_finite_amount_rejected(self):
        with pytest.raises(ValueError):
            ParameterSet(amount=float("nan"))
        with pytest.raises(ValueError):
            ParameterSet(price=float("inf"))

    def test_oversized_integer_amount_rejected(self):
        with pytest.raises(ValueError):
            ParameterSet(amount=10**400)
        with pytest.raises(ValueError):
            ParameterSet().set("price", -10**400)

    def test_json_body_is_valid_json(self):
        params = ParameterSet(username="Zoë", amount=0.1)
        assert json.loads(params.to_json_body()) == {"Amount": 0.1, "Username": "Zoë"}

    def test_field_vocabulary(self):
        assert [wire for _, wire, _ in FIELDS] == [
            "Market", "Count", "Currency", "Type", "Depth", "Amount", "Price",
            "Address", "PageNumber", "OrderId", "Username",
        ]
