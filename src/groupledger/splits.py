"""Split calculation: turn an expense amount into per-participant shares."""

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from .exceptions import DegenerateInputError, InputInconsistencyError
from .models import (
    CustomSplit,
    EqualSplit,
    PercentageSplit,
    Split,
    SplitPolicy,
)
from .money import from_cents, round_percentage, to_cents

logger = logging.getLogger(__name__)


def calculate_split_amounts(
    amount: Decimal,
    participant_ids: Sequence[str],
    split_type: SplitPolicy,
) -> list[Split]:
    """
    Compute each participant's owed share of an expense.

    Equal and percentage splits always sum to ``amount`` exactly: any rounding
    remainder is assigned to the first participant. Custom splits are returned
    as given and must be checked with ``verify_split_total`` by the caller.

    Args:
        amount: Positive expense total
        participant_ids: Ordered participant ids (used by equal splits)
        split_type: The split policy, carrying custom shares where needed

    Returns:
        List of splits in input order

    Raises:
        DegenerateInputError: If an equal or percentage split has no participants
        TypeError: If ``split_type`` is not a known policy
    """
    total_cents = to_cents(amount)

    if isinstance(split_type, EqualSplit):
        return _equal_splits(total_cents, participant_ids)
    if isinstance(split_type, CustomSplit):
        return _custom_splits(total_cents, split_type)
    if isinstance(split_type, PercentageSplit):
        return _percentage_splits(total_cents, split_type)

    raise TypeError(f"Unknown split policy: {split_type!r}")


def _equal_splits(total_cents: int, participant_ids: Sequence[str]) -> list[Split]:
    count = len(participant_ids)
    if count == 0:
        raise DegenerateInputError("Cannot split an expense between zero participants")

    base = total_cents // count
    remainder = total_cents - base * count
    percentage = round_percentage(Decimal(100) / count)

    if remainder:
        logger.debug(f"Assigning {remainder} cent remainder to {participant_ids[0]}")

    return [
        Split(
            participant_id=participant_id,
            amount=from_cents(base + remainder if index == 0 else base),
            percentage=percentage,
        )
        for index, participant_id in enumerate(participant_ids)
    ]


def _custom_splits(total_cents: int, policy: CustomSplit) -> list[Split]:
    return [
        Split(
            participant_id=share.participant_id,
            amount=share.amount,
            percentage=round_percentage(
                Decimal(to_cents(share.amount)) * 100 / total_cents
            ),
        )
        for share in policy.shares
    ]


def _percentage_splits(total_cents: int, policy: PercentageSplit) -> list[Split]:
    if not policy.shares:
        raise DegenerateInputError("Cannot split an expense between zero participants")

    amounts = [
        int(
            (total_cents * share.percentage / 100).quantize(
                Decimal("1"), rounding=ROUND_HALF_UP
            )
        )
        for share in policy.shares
    ]

    # First share absorbs whatever rounding left over
    diff = total_cents - sum(amounts)
    if diff:
        amounts[0] += diff
        logger.debug(
            f"Adjusted {policy.shares[0].participant_id} by {diff} cents "
            f"to match total"
        )

    return [
        Split(
            participant_id=share.participant_id,
            amount=from_cents(cents),
            percentage=share.percentage,
        )
        for share, cents in zip(policy.shares, amounts)
    ]


def verify_split_total(splits: Sequence[Split], amount: Decimal) -> None:
    """
    Check that split amounts add up to the expense total, exact to the cent.

    Args:
        splits: Splits computed for the expense
        amount: Expense total

    Raises:
        InputInconsistencyError: If the totals differ
    """
    expected = to_cents(amount)
    actual = sum(to_cents(split.amount) for split in splits)

    if actual != expected:
        raise InputInconsistencyError(
            f"Split amounts must equal total expense amount:\n"
            f"  Expected: {from_cents(expected)}\n"
            f"  Actual:   {from_cents(actual)}"
        )
