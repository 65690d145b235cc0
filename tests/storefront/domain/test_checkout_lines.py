"""Tests for checkout line validation and merging."""

import pytest
from storefront.checkout.placement import normalize_lines
from storefront.shared.errors import InvalidArgument


class TestNormalizeLines:
    def test_empty(self):
        with pytest.raises(InvalidArgument) as exc:
            normalize_lines([])
        assert "items" in exc.value.messages

    def test_duplicates_are_merged(self):
        merged = normalize_lines(
            [
                {"product_id": "p1", "quantity": 2},
                {"product_id": "p2", "quantity": 1},
                {"product_id": "p1", "quantity": 3},
            ]
        )
        assert list(merged.items()) == [("p1", 5), ("p2", 1)]

    @pytest.mark.parametrize("quantity", [0, -2, "3", 1.5, True, None])
    def test_bad_quantity(self, quantity):
        with pytest.raises(InvalidArgument) as exc:
            normalize_lines([{"product_id": "p1", "quantity": quantity}])
        assert "quantity" in exc.value.messages

    @pytest.mark.parametrize("product_id", [None, "", "   "])
    def test_bad_product_id(self, product_id):
        with pytest.raises(InvalidArgument) as exc:
            normalize_lines([{"product_id": product_id, "quantity": 1}])
        assert "product_id" in exc.value.messages

    def test_malformed_line(self):
        with pytest.raises(InvalidArgument):
            normalize_lines(["p1"])
