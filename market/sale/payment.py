"""
Payment rules, kept apart from the sale bookkeeping so they can be replaced.

A policy turns (total_price, paid so far, amount offered) into the new
(paid, debt) pair, or raises InsufficientPayment.
"""
from typing import Protocol

from market.exceptions import InsufficientPayment


class PaymentPolicy(Protocol):

    def settle(self, total_price: float, paid: float, amount: float) -> tuple[float, float]:
        ...


class HalfTotalPaymentPolicy:
    """
    Accept a payment only when it is strictly more than half of the total.
    The accepted amount replaces any earlier payment; it is not added to it.
    """

    def settle(self, total_price: float, paid: float, amount: float) -> tuple[float, float]:
        if not amount > total_price / 2:
            raise InsufficientPayment(amount, total_price)
        return amount, total_price - amount


default_policy = HalfTotalPaymentPolicy()


def get_payment_policy() -> PaymentPolicy:
    return default_policy
