from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from app.core.exceptions import NotFoundError, PromoInvalidError, ValidationError
from app.models.enums import PromoStatus
from app.services import promo_codes

NOW = datetime(2030, 1, 15, 12, 0)


def make_promo(store, code="SUMMER", discount=200, **kwargs):
    return promo_codes.create_promo_code(store, code, discount, **kwargs)


class TestValidate:
    def test_valid_code(self, store):
        make_promo(store)

        result = promo_codes.validate_promo_code(store, "SUMMER", 1000, now=NOW)

        assert result.valid
        assert result.original_amount == 1000
        assert result.discount_amount == 200
        assert result.final_amount == 800

    def test_code_is_case_and_space_insensitive(self, store):
        make_promo(store)
        assert promo_codes.validate_promo_code(store, "  summer ", 1000, now=NOW).valid

    def test_discount_never_exceeds_amount(self, store):
        make_promo(store, discount=1500)

        result = promo_codes.validate_promo_code(store, "SUMMER", 1000, now=NOW)

        assert result.discount_amount == 1000
        assert result.final_amount == 0

    def test_unknown_code(self, store):
        result = promo_codes.validate_promo_code(store, "NOPE", 1000, now=NOW)
        assert not result.valid
        assert result.message == "Invalid promo code"
        assert result.discount_amount is None

    def test_empty_code(self, store):
        assert not promo_codes.validate_promo_code(store, "", 1000, now=NOW).valid

    @pytest.mark.parametrize("amount", [0, -10])
    def test_amount_must_be_positive(self, store, amount):
        make_promo(store)
        assert not promo_codes.validate_promo_code(store, "SUMMER", amount, now=NOW).valid

    def test_expired_by_date(self, store):
        make_promo(store, expiry_date=NOW - timedelta(days=1))

        result = promo_codes.validate_promo_code(store, "SUMMER", 1000, now=NOW)

        assert not result.valid
        assert "expired" in result.message

    def test_valid_until_expiry_instant(self, store):
        make_promo(store, expiry_date=NOW)
        assert promo_codes.validate_promo_code(store, "SUMMER", 1000, now=NOW).valid

    def test_inactive_status(self, store):
        promo = make_promo(store)
        store.update("promo_codes", {"id": promo.id}, {"status": PromoStatus.EXPIRED})

        assert not promo_codes.validate_promo_code(store, "SUMMER", 1000, now=NOW).valid

    def test_usage_limit_reached(self, store):
        promo = make_promo(store, max_uses=2)
        store.update("promo_codes", {"id": promo.id}, {"current_uses": 2})

        result = promo_codes.validate_promo_code(store, "SUMMER", 1000, now=NOW)

        assert not result.valid
        assert "limit" in result.message

    def test_validation_has_no_side_effects(self, store):
        make_promo(store, max_uses=1)

        for _ in range(3):
            assert promo_codes.validate_promo_code(store, "SUMMER", 1000, customer_id="c1", now=NOW).valid

        assert store.first("promo_codes", {"code": "SUMMER"}).current_uses == 0
        assert store.query("promo_code_usage") == []


class TestRedeem:
    def test_redeem_counts_use_and_records_usage(self, store):
        make_promo(store, max_uses=3)

        result = promo_codes.redeem_promo_code(store, "SUMMER", 1000, booking_id="b1", customer_id="c1", now=NOW)

        promo = store.first("promo_codes", {"code": "SUMMER"})
        usage = store.query("promo_code_usage")
        assert result.final_amount == 800
        assert promo.current_uses == 1
        assert promo.status == PromoStatus.ACTIVE.value
        assert len(usage) == 1
        assert usage[0].booking_id == "b1"
        assert usage[0].discount_amount == 200

    def test_last_use_marks_code_used(self, store):
        make_promo(store, max_uses=1)

        promo_codes.redeem_promo_code(store, "SUMMER", 1000, now=NOW)

        assert store.first("promo_codes", {"code": "SUMMER"}).status == PromoStatus.USED.value
        with pytest.raises(PromoInvalidError):
            promo_codes.redeem_promo_code(store, "SUMMER", 1000, now=NOW)

    def test_same_customer_cannot_reuse(self, store):
        make_promo(store)
        promo_codes.redeem_promo_code(store, "SUMMER", 1000, customer_id="c1", now=NOW)

        assert not promo_codes.validate_promo_code(store, "SUMMER", 1000, customer_id="c1", now=NOW).valid
        assert promo_codes.validate_promo_code(store, "SUMMER", 1000, customer_id="c2", now=NOW).valid

    def test_same_device_cannot_reuse(self, store):
        make_promo(store)
        promo_codes.redeem_promo_code(store, "SUMMER", 1000, device_id="dev-1", now=NOW)

        with pytest.raises(PromoInvalidError):
            promo_codes.redeem_promo_code(store, "SUMMER", 1000, device_id="dev-1", now=NOW)

    def test_stale_use_count_is_rejected(self, store, monkeypatch):
        promo = make_promo(store, max_uses=5)
        stale = SimpleNamespace(id=promo.id, code=promo.code, discount_amount=200, current_uses=0, max_uses=5)
        store.update("promo_codes", {"id": promo.id}, {"current_uses": 1})
        monkeypatch.setattr(promo_codes, "_usable_promo", lambda *args, **kwargs: stale)

        with pytest.raises(PromoInvalidError):
            promo_codes.redeem_promo_code(store, "SUMMER", 1000, now=NOW)

        assert store.first("promo_codes", {"id": promo.id}).current_uses == 1
        assert store.query("promo_code_usage") == []


class TestAdmin:
    def test_create_normalizes_code(self, store):
        promo = make_promo(store, code=" diwali10 ")
        assert promo.code == "DIWALI10"
        assert promo.current_uses == 0
        assert promo.status == PromoStatus.ACTIVE.value

    def test_duplicate_code_rejected(self, store):
        make_promo(store)
        with pytest.raises(ValidationError):
            make_promo(store, code="summer")

    def test_random_code(self, store):
        promo = promo_codes.create_promo_code(store, None, 300, generate_random_code=True)
        assert len(promo.code) == 8
        assert promo.code.isalnum() and promo.code == promo.code.upper()

    @pytest.mark.parametrize("discount", [0, -5, None])
    def test_discount_must_be_positive(self, store, discount):
        with pytest.raises(ValidationError):
            make_promo(store, discount=discount)

    def test_max_uses_must_be_positive(self, store):
        with pytest.raises(ValidationError):
            make_promo(store, max_uses=0)

    def test_code_required(self, store):
        with pytest.raises(ValidationError):
            make_promo(store, code="  ")

    def test_delete_removes_usage_rows(self, store):
        promo_id = make_promo(store).id
        promo_codes.redeem_promo_code(store, "SUMMER", 1000, customer_id="c1", now=NOW)

        promo_codes.delete_promo_code(store, promo_id)

        assert store.query("promo_codes") == []
        assert store.query("promo_code_usage") == []

    def test_delete_unknown(self, store):
        with pytest.raises(NotFoundError):
            promo_codes.delete_promo_code(store, "missing")

    def test_expire_past_due_codes(self, store):
        make_promo(store, code="OLD", expiry_date=NOW - timedelta(days=2))
        make_promo(store, code="NEW", expiry_date=NOW + timedelta(days=2))
        make_promo(store, code="FOREVER")

        assert promo_codes.expire_promo_codes(store, now=NOW) == 1

        statuses = {p.code: p.status for p in promo_codes.list_promo_codes(store)}
        assert statuses == {"OLD": "expired", "NEW": "active", "FOREVER": "active"}
