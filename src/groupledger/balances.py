"""Net balance aggregation across a group's expense history."""

import logging
from collections.abc import Iterable
from decimal import Decimal

from .exceptions import UnknownParticipantError
from .models import Expense, Participant
from .money import from_cents, to_cents

logger = logging.getLogger(__name__)


def calculate_group_balances(
    expenses: Iterable[Expense],
    participants: Iterable[Participant],
    strict: bool = False,
) -> dict[str, Decimal]:
    """
    Calculate each participant's net balance for a group.

    The payer of every expense is credited the full amount and every split
    participant is debited their share. Positive balances are owed money,
    negative balances owe money. The result does not depend on expense order.

    Ids missing from ``participants`` are skipped with a warning, or raise
    when ``strict`` is set.

    Args:
        expenses: Expenses carrying their resolved splits
        participants: Group roster; every member appears in the result
        strict: Raise instead of skipping unknown participant ids

    Returns:
        Mapping of participant id to balance, rounded to the cent

    Raises:
        UnknownParticipantError: If ``strict`` and an id is not in the roster
    """
    balances: dict[str, int] = {p.id: 0 for p in participants}

    def post(participant_id: str, cents: int, expense_id: str) -> None:
        if participant_id not in balances:
            if strict:
                raise UnknownParticipantError(participant_id)
            logger.warning(
                f"Skipping unknown participant {participant_id} "
                f"in expense {expense_id}"
            )
            return
        balances[participant_id] += cents

    for expense in expenses:
        post(expense.payer_id, to_cents(expense.amount), expense.id)
        for split in expense.splits:
            post(split.participant_id, -to_cents(split.amount), expense.id)

    return {pid: from_cents(cents) for pid, cents in balances.items()}
