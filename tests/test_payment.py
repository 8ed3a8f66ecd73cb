"""
tests/test_payment.py
=====================
Payment rule and its effect on the sale.
"""
import pytest

from market.exceptions import InsufficientPayment, NoSuchSale, ValidationError
from market.sale.models import Sale
from market.sale.payment import HalfTotalPaymentPolicy
from market.sale.service import record_payment


class TestHalfTotalPaymentPolicy:

    def setup_method(self):
        self.policy = HalfTotalPaymentPolicy()

    def test_more_than_half_accepted(self):
        assert self.policy.settle(1000, 0, 600) == (600, 400)

    def test_less_than_half_rejected(self):
        with pytest.raises(InsufficientPayment):
            self.policy.settle(1000, 0, 400)

    def test_exactly_half_rejected(self):
        with pytest.raises(InsufficientPayment):
            self.policy.settle(1000, 0, 500)

    def test_overpayment_gives_negative_debt(self):
        assert self.policy.settle(1000, 0, 1200) == (1200, -200)


class TestRecordPayment:

    def test_rejected_then_accepted(self, db_session, make_branch, make_sale):
        sale = make_sale(make_branch(), total_price=1000.0)

        with pytest.raises(InsufficientPayment) as exc_info:
            record_payment(db_session, sale.increment_id, 400)
        assert exc_info.value.message == "not enough money"

        record_payment(db_session, sale.increment_id, 600)

        db_session.expire_all()
        paid = db_session.get(Sale, sale.id)
        assert paid.paid == 600
        assert paid.debt == 400

    def test_second_payment_overwrites_first(self, db_session, make_branch, make_sale):
        sale = make_sale(make_branch(), total_price=1000.0)

        record_payment(db_session, sale.increment_id, 600)
        record_payment(db_session, sale.increment_id, 700)

        db_session.expire_all()
        paid = db_session.get(Sale, sale.id)
        assert paid.paid == 700
        assert paid.debt == 300

    def test_rejected_payment_leaves_sale_untouched(self, db_session, make_branch, make_sale):
        sale = make_sale(make_branch(), total_price=1000.0)

        with pytest.raises(InsufficientPayment):
            record_payment(db_session, sale.increment_id, 100)

        db_session.expire_all()
        unpaid = db_session.get(Sale, sale.id)
        assert unpaid.paid == 0
        assert unpaid.debt == 1000

    @pytest.mark.parametrize("amount", [float("inf"), float("nan")])
    def test_non_finite_amount_rejected(self, db_session, make_branch, make_sale, amount):
        sale = make_sale(make_branch(), total_price=1000.0)

        with pytest.raises(ValidationError):
            record_payment(db_session, sale.increment_id, amount)

        db_session.expire_all()
        assert db_session.get(Sale, sale.id).paid == 0

    def test_unknown_increment_id(self, db_session):
        with pytest.raises(NoSuchSale):
            record_payment(db_session, "S-0000404", 10)

    def test_custom_policy(self, db_session, make_branch, make_sale):
        class PayAnything:
            def settle(self, total_price, paid, amount):
                return paid + amount, total_price - paid - amount

        sale = make_sale(make_branch(), total_price=1000.0)
        record_payment(db_session, sale.increment_id, 100, policy=PayAnything())
        record_payment(db_session, sale.increment_id, 100, policy=PayAnything())

        db_session.expire_all()
        assert db_session.get(Sale, sale.id).debt == 800
