"""Rent ledger accounting.

A receipt is turned into whole weeks of rent plus a residual credit smaller
than one week's rent. Whole weeks move the paid-to-date marker forward; the
residual is carried to the next receipt.
"""
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation

from dateutil.relativedelta import relativedelta

from ..errors import InvalidState


CENT = Decimal("0.01")


def to_money(value, name="amount"):
    """Returns `value` as a Decimal, rejecting anything finer than a cent."""
    if value is None:
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
        exact = number == number.quantize(CENT)
    except InvalidOperation:
        raise InvalidState(f"{name} must be a finite amount of money, got {value!r}") from None
    if not exact:
        raise InvalidState(f"{name} must have at most two decimal places, got {value}")
    return number


@dataclass(frozen=True)
class LedgerSnapshot:
    weekly_rent_amount: Decimal
    current_rent_credit_amount: Decimal
    current_rent_paid_to_date: date


@dataclass(frozen=True)
class LedgerPosting:
    snapshot: LedgerSnapshot
    weeks_paid: int


def _check(snapshot: LedgerSnapshot, amount: Decimal) -> None:
    if amount is None:
        raise InvalidState("receipt amount is required")
    if amount < 0:
        raise InvalidState(f"receipt amount must not be negative, got {amount}")
    if snapshot.weekly_rent_amount < 0:
        raise InvalidState(f"weekly rent amount must not be negative, got {snapshot.weekly_rent_amount}")
    if snapshot.current_rent_credit_amount < 0:
        raise InvalidState(f"rent credit must not be negative, got {snapshot.current_rent_credit_amount}")


def apply_receipt(snapshot: LedgerSnapshot, amount: Decimal) -> LedgerPosting:
    """Apply a receipt of `amount` to `snapshot` and return the new ledger state.

    With no weekly rent the whole amount becomes credit, since no week can be
    paid off. Negative amounts and amounts finer than a cent are rejected
    with InvalidState.
    """
    amount = to_money(amount)
    _check(snapshot, amount)
    to_money(snapshot.weekly_rent_amount, "weekly rent amount")
    to_money(snapshot.current_rent_credit_amount, "rent credit")

    if snapshot.weekly_rent_amount == 0:
        credit = snapshot.current_rent_credit_amount + amount
        return LedgerPosting(replace(snapshot, current_rent_credit_amount=credit), 0)

    total_credit = amount + snapshot.current_rent_credit_amount
    weeks_paid, residual = divmod(total_credit, snapshot.weekly_rent_amount)
    weeks_paid = int(weeks_paid)

    paid_to_date = snapshot.current_rent_paid_to_date
    if weeks_paid:
        paid_to_date = paid_to_date + relativedelta(weeks=weeks_paid)

    return LedgerPosting(
        LedgerSnapshot(
            weekly_rent_amount=snapshot.weekly_rent_amount,
            current_rent_credit_amount=residual,
            current_rent_paid_to_date=paid_to_date,
        ),
        weeks_paid,
    )
