"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from kasir.domain.exceptions import ValidationError
from kasir.domain.model.value_objects import Money


class TestMoney:

    def test_creation(self):
        m = Money(10_000)
        assert m.amount == 10_000

    def test_of_factory_from_string(self):
        assert Money.of("25000") == Money(25_000)

    def test_of_factory_from_whole_decimal(self):
        assert Money.of(Decimal("15000.00")) == Money(15_000)

    def test_of_factory_rejects_fraction(self):
        with pytest.raises(ValidationError, match="whole units"):
            Money.of("10.50")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            Money(10.0)

    def test_bool_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            Money(True)

    def test_str_formatting(self):
        assert str(Money(0)) == "Rp 0"
        assert str(Money(20_000)) == "Rp 20.000"
        assert str(Money(1_234_567)) == "Rp 1.234.567"
        assert str(Money(-500)) == "-Rp 500"

