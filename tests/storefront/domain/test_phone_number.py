"""Tests for PhoneNumber value object."""

import pytest
from protean.exceptions import ValidationError
from storefront.shared.phone import PhoneNumber


class TestPhoneNumber:
    @pytest.mark.parametrize(
        "number",
        ["01001234567", "+201001234567", "+20 100 123 4567", "(02)-1234-5678", "555.123.4567"],
    )
    def test_valid_numbers(self, number):
        assert PhoneNumber(number=number).number == number

    @pytest.mark.parametrize("number", ["call me", "12-ab-34", "++2010"])
    def test_invalid_numbers(self, number):
        with pytest.raises(ValidationError) as exc:
            PhoneNumber(number=number)
        assert "phone_number" in exc.value.messages

    def test_required(self):
        with pytest.raises(ValidationError):
            PhoneNumber()
