"""Tests for transaction type classification."""

from decimal import Decimal

import pytest

from bankroll.domain.classifier import (
    INTERNAL_TYPES,
    PURCHASE_TYPE,
    REDEMPTION_TYPE,
    classify,
    is_external,
    real_money_delta,
)


def test_purchase_is_external_loss():
    """Purchases count as money put in."""
    assert is_external(PURCHASE_TYPE)
    assert real_money_delta(PURCHASE_TYPE, Decimal("20")) == Decimal("-20")


def test_redemption_is_external_gain():
    """Redemptions count as money taken out, whatever the export's sign."""
    assert is_external(REDEMPTION_TYPE)
    assert real_money_delta(REDEMPTION_TYPE, Decimal("-100")) == Decimal("100")
    assert real_money_delta(REDEMPTION_TYPE, Decimal("100")) == Decimal("100")


def test_purchase_sign_ignored():
    assert real_money_delta(PURCHASE_TYPE, Decimal("-20")) == Decimal("-20")


@pytest.mark.parametrize("transaction_type", INTERNAL_TYPES)
def test_internal_types_contribute_nothing(transaction_type):
    """Play-money activity never changes real-money profit."""
    classification = classify(transaction_type)
    assert classification.is_external is False
    assert classification.real_money_delta(Decimal("-33")) == Decimal("0")


def test_unknown_type_is_internal():
    """Unrecognized types are stored but ignored for profit."""
    assert is_external("Jackpot Spin") is False
    assert real_money_delta("Jackpot Spin", Decimal("500")) == Decimal("0")


def test_matching_is_case_sensitive():
    assert is_external("redemption") is False
    assert is_external("Purchase - credit card") is False
