from datetime import date, datetime
from types import SimpleNamespace

import pytest

from app.models.enums import RoomCategory
from app.utils.pricing import (
    EXTRA_GUEST_RATE,
    apply_discount,
    base_capacity,
    breakfast_total,
    calculate_total_price,
    extra_guests_for,
    nights_between,
    quote_stay,
    tax_breakdown,
)


class TestNights:
    def test_whole_days(self):
        assert nights_between(date(2030, 3, 10), date(2030, 3, 13)) == 3

    def test_same_day_counts_one_night(self):
        assert nights_between(date(2030, 3, 10), date(2030, 3, 10)) == 1

    def test_half_day_rounds_up(self):
        assert nights_between(datetime(2030, 3, 10, 0), datetime(2030, 3, 11, 12)) == 2

    def test_partial_day_below_half_rounds_down(self):
        assert nights_between(datetime(2030, 3, 10, 0), datetime(2030, 3, 11, 9)) == 1

    def test_accepts_mixed_date_and_datetime(self):
        assert nights_between(date(2030, 3, 10), datetime(2030, 3, 12)) == 2

    def test_rejects_strings(self):
        with pytest.raises(TypeError):
            nights_between("2030-03-10", "2030-03-12")


class TestTotalPrice:
    def test_base_price_only(self):
        assert calculate_total_price(3000, date(2030, 3, 10), date(2030, 3, 13)) == 9000

    def test_extra_guests_charged_per_night(self):
        total = calculate_total_price(3000, date(2030, 3, 10), date(2030, 3, 13), extra_guest_count=2)
        assert total == 9000 + 2 * 600 * 3

    def test_extra_guest_surcharge_is_exact(self):
        with_extra = calculate_total_price(1000, date(2030, 1, 1), date(2030, 1, 4), 2)
        without = calculate_total_price(1000, date(2030, 1, 1), date(2030, 1, 4))
        assert with_extra - without == 3600

    def test_negative_extra_guest_count_ignored(self):
        assert calculate_total_price(2000, date(2030, 1, 1), date(2030, 1, 2), -1) == 2000

    def test_rate_constant(self):
        assert EXTRA_GUEST_RATE == 600


class TestCapacity:
    def test_royal_deluxe_includes_one_adult(self):
        assert base_capacity(RoomCategory.ROYAL_DELUXE) == 1
        assert base_capacity("Royal Deluxe") == 1

    @pytest.mark.parametrize("category", ["Royal Executive", "Royal Suite"])
    def test_other_categories_include_two_adults(self, category):
        assert base_capacity(category) == 2

    def test_extra_guests(self):
        assert extra_guests_for("Royal Deluxe", 3) == 2
        assert extra_guests_for("Royal Suite", 3) == 1
        assert extra_guests_for("Royal Suite", 1) == 0
        assert extra_guests_for("Royal Suite", None) == 0


class TestTax:
    def test_each_component_is_six_point_one_percent(self):
        taxes = tax_breakdown(10000)
        assert taxes.cgst == 610.0
        assert taxes.sgst == 610.0
        assert taxes.tax == 1220.0

    def test_total_is_not_increased_by_tax(self):
        assert tax_breakdown(9000).total == 9000

    def test_rounded_to_two_places(self):
        taxes = tax_breakdown(1234.57)
        assert taxes.cgst == round(1234.57 * 0.061, 2)


class TestDiscounts:
    def test_discount_subtracted(self):
        assert apply_discount(1000, 200) == (200, 800)

    def test_discount_capped_at_amount(self):
        assert apply_discount(500, 800) == (500, 0)

    def test_negative_discount_treated_as_zero(self):
        assert apply_discount(500, -50) == (0, 500)

    def test_breakfast(self):
        assert breakfast_total(250, 3, 2) == 1500
        assert breakfast_total(None, 3, 2) == 0


class TestQuote:
    def room(self, **overrides):
        values = {"price": 2500.0, "breakfast_price": 300.0, "category_type": "Royal Deluxe"}
        values.update(overrides)
        return SimpleNamespace(**values)

    def test_quote_for_deluxe_with_extra_adult(self):
        quote = quote_stay(self.room(), date(2030, 3, 10), date(2030, 3, 12), adults=2)

        assert quote.nights == 2
        assert quote.base_price == 5000
        assert quote.extra_guests == 1
        assert quote.extra_guest_charges == 1200
        assert quote.total == 6200
        assert quote.cgst == round(6200 * 0.061, 2)

    def test_breakfast_is_reported_but_not_in_total(self):
        quote = quote_stay(self.room(category_type="Royal Suite"), date(2030, 3, 10), date(2030, 3, 12),
                           adults=2, children=1, with_breakfast=True)

        assert quote.breakfast_total == 300 * 3 * 2
        assert quote.total == 5000

    def test_effective_adults_override(self):
        quote = quote_stay(self.room(category_type="Royal Suite"), date(2030, 3, 10), date(2030, 3, 11),
                           adults=2, effective_adults=4)
        assert quote.extra_guests == 2
        assert quote.total == 2500 + 1200
