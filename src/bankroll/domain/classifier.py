"""Transaction type classification.

Imported platform transactions either move real money in or out of the
bankroll (external) or only shuffle play money inside the platform
(internal). Only external transactions count toward online profit.
"""

from dataclasses import dataclass
from decimal import Decimal

PURCHASE_TYPE = "Purchase - Credit Card"
REDEMPTION_TYPE = "Redemption"

EXTERNAL_TYPES = (PURCHASE_TYPE, REDEMPTION_TYPE)

INTERNAL_TYPES = (
    "Tournament Registration",
    "Tournament Payout",
    "Tournament Re-buy",
    "Tournament Add-on",
    "Tournament Bounty",
    "Tournament Unregistration",
    "Daily Bonus",
    "Daily Bonus Boost",
    "Prize Draw",
    "Vault Bonus Claim",
)

ZERO = Decimal("0")


@dataclass(frozen=True)
class Classification:
    """Result of classifying a transaction type."""

    type: str
    is_external: bool

    def real_money_delta(self, amount: Decimal) -> Decimal:
        """Signed contribution of ``amount`` to tracked profit.

        Purchases are a cost, redemptions a gain. Internal types contribute
        nothing regardless of amount.
        """
        if self.type == PURCHASE_TYPE:
            return -abs(amount)
        if self.type == REDEMPTION_TYPE:
            return abs(amount)
        return ZERO


def classify(transaction_type: str) -> Classification:
    """Classify a transaction type string.

    Matching is exact and case-sensitive. Unknown types are treated as
    internal so new platform activity never blocks an import.
    """
    return Classification(
        type=transaction_type,
        is_external=transaction_type in EXTERNAL_TYPES,
    )


def is_external(transaction_type: str) -> bool:
    """Return True if the type moves real money."""
    return classify(transaction_type).is_external


def real_money_delta(transaction_type: str, amount: Decimal) -> Decimal:
    """Return the real-money profit contribution of a transaction."""
    return classify(transaction_type).real_money_delta(amount)
