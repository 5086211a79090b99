"""Spending summaries for a group."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from .models import Expense, GroupSummary, Participant, ParticipantContribution
from .money import from_cents, to_cents


def summarize_group(
    expenses: Sequence[Expense], participants: Sequence[Participant]
) -> GroupSummary:
    """
    Summarize a group's spending.

    Args:
        expenses: The group's expenses
        participants: The group roster

    Returns:
        Totals, per-category breakdown and per-participant contributions
    """
    total_cents = sum(to_cents(exp.amount) for exp in expenses)
    count = len(expenses)

    average_cents = 0
    if count:
        average = Decimal(total_cents) / count
        average_cents = int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    by_category: dict[str, int] = {}
    for exp in expenses:
        by_category[exp.category] = by_category.get(exp.category, 0) + to_cents(
            exp.amount
        )

    contributions = []
    for participant in participants:
        paid_cents = sum(
            to_cents(exp.amount) for exp in expenses if exp.payer_id == participant.id
        )
        percentage = 0
        if total_cents:
            percentage = int(
                (Decimal(paid_cents) * 100 / total_cents).quantize(
                    Decimal("1"), rounding=ROUND_HALF_UP
                )
            )
        contributions.append(
            ParticipantContribution(
                id=participant.id,
                name=participant.name,
                color=participant.color,
                amount=from_cents(paid_cents),
                percentage=percentage,
            )
        )

    contributions.sort(key=lambda c: (-c.amount, c.id))

    return GroupSummary(
        total_spent=from_cents(total_cents),
        total_expenses=count,
        average_expense=from_cents(average_cents),
        category_breakdown={
            category: from_cents(cents) for category, cents in by_category.items()
        },
        participant_contributions=contributions,
    )
