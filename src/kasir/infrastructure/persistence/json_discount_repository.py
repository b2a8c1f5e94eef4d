"""JSON-file-backed implementation of DiscountRepository."""

from __future__ import annotations

from pathlib import Path

from kasir.domain.model.discount import Discount, Promo
from kasir.domain.model.value_objects import DiscountType
from kasir.domain.repository.discount_repository import DiscountRepository
from kasir.infrastructure.persistence.json_snapshot import (
    JsonSnapshot,
    parse_amount,
    parse_enum,
    parse_optional_amount,
    parse_timestamp,
)


class JsonDiscountRepository(DiscountRepository):

    def __init__(self, discounts_path: Path, promos_path: Path) -> None:
        self._discounts = JsonSnapshot(discounts_path)
        self._promos = JsonSnapshot(promos_path)

    # --- DiscountRepository interface -----------------------------------------

    def list_discounts(self) -> list[Discount]:
        return self._discounts.load(self._discount_to_domain)

    def list_promos(self) -> list[Promo]:
        return self._promos.load(self._promo_to_domain)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _value(discount_type: DiscountType, raw_value) -> float:
        # Nominal reductions are currency; percentages may be fractional.
        if discount_type is DiscountType.NOMINAL:
            return parse_amount(raw_value)
        return float(raw_value)

    @classmethod
    def _discount_to_domain(cls, raw: dict) -> Discount:
        discount_type = parse_enum(DiscountType, raw["discount_type"])
        return Discount(
            id=raw["id"],
            product_id=raw["product_id"],
            discount_type=discount_type,
            discount_value=cls._value(discount_type, raw["discount_value"]),
            is_active=raw.get("is_active", True),
            product_name=raw.get("product_name"),
        )

    @classmethod
    def _promo_to_domain(cls, raw: dict) -> Promo:
        discount_type = parse_enum(DiscountType, raw["discount_type"])
        return Promo(
            id=raw["id"],
            name=raw["name"],
            start_date=parse_timestamp(raw["start_date"]),
            end_date=parse_timestamp(raw["end_date"]),
            discount_type=discount_type,
            discount_value=cls._value(discount_type, raw["discount_value"]),
            min_purchase=parse_optional_amount(raw.get("min_purchase")),
            product_ids=tuple(raw.get("product_ids") or ()),
            is_active=raw.get("is_active", True),
            description=raw.get("description"),
        )
