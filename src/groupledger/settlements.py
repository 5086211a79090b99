"""Settlement resolution: greedy largest-first debt netting."""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from .exceptions import UnknownParticipantError
from .models import Participant, Settlement
from .money import from_cents, to_cents

logger = logging.getLogger(__name__)

# Balances within one cent of zero count as settled
SETTLED_THRESHOLD_CENTS = 1


def _partition(
    balances: Mapping[str, Decimal],
    participants: Iterable[Participant],
    strict: bool,
) -> tuple[list[tuple[str, int]], list[tuple[str, int]]]:
    """Split balances into (creditors, debtors) as (id, positive cents) pairs."""
    roster = {p.id for p in participants}
    creditors: list[tuple[str, int]] = []
    debtors: list[tuple[str, int]] = []

    for participant_id, balance in balances.items():
        if participant_id not in roster:
            if strict:
                raise UnknownParticipantError(participant_id)
            logger.warning(f"Skipping balance for unknown participant {participant_id}")
            continue

        cents = to_cents(balance)
        if cents > SETTLED_THRESHOLD_CENTS:
            creditors.append((participant_id, cents))
        elif cents < -SETTLED_THRESHOLD_CENTS:
            debtors.append((participant_id, -cents))

    # Largest first; equal amounts ordered by participant id
    creditors.sort(key=lambda entry: (-entry[1], entry[0]))
    debtors.sort(key=lambda entry: (-entry[1], entry[0]))

    return creditors, debtors


def calculate_settlements(
    balances: Mapping[str, Decimal],
    participants: Iterable[Participant],
    strict: bool = False,
) -> list[Settlement]:
    """
    Calculate the payments that settle every balance.

    Creditors and debtors are each sorted by amount, largest first, with ties
    broken by ascending participant id. The largest remaining debtor then pays
    the largest remaining creditor as much as either side allows, until one
    side runs out. This yields at most n - 1 payments for n unsettled members.

    Args:
        balances: Mapping of participant id to signed balance
        participants: Group roster used to resolve ids
        strict: Raise instead of skipping ids missing from the roster

    Returns:
        Ordered list of settlements

    Raises:
        UnknownParticipantError: If ``strict`` and a balance id is not in the roster
    """
    creditors, debtors = _partition(balances, participants, strict)

    credit_left = [cents for _, cents in creditors]
    debt_left = [cents for _, cents in debtors]
    settlements: list[Settlement] = []

    i = j = 0
    while i < len(creditors) and j < len(debtors):
        settle_cents = min(credit_left[i], debt_left[j])

        if settle_cents > SETTLED_THRESHOLD_CENTS:
            settlements.append(
                Settlement(
                    from_id=debtors[j][0],
                    to_id=creditors[i][0],
                    amount=from_cents(settle_cents),
                )
            )

        credit_left[i] -= settle_cents
        debt_left[j] -= settle_cents

        if credit_left[i] < 1:
            i += 1
        if debt_left[j] < 1:
            j += 1

    logger.debug(
        f"Resolved {len(creditors)} creditors and {len(debtors)} debtors "
        f"into {len(settlements)} settlements"
    )

    return settlements


def apply_settlements(
    balances: Mapping[str, Decimal], settlements: Iterable[Settlement]
) -> dict[str, Decimal]:
    """
    Apply settlements to a balance map and return what remains.

    Each payment raises the payer's balance and lowers the recipient's by the
    settled amount. Settlements from ``calculate_settlements`` never pay one
    cent or less: a creditor left with a single cent is matched against the
    next debtor without a payment. That debtor keeps its whole balance, so a
    residual can exceed one cent (e.g. a two cent debt that was never paid).
    """
    residual = {pid: to_cents(balance) for pid, balance in balances.items()}

    for settlement in settlements:
        cents = to_cents(settlement.amount)
        residual[settlement.from_id] = residual.get(settlement.from_id, 0) + cents
        residual[settlement.to_id] = residual.get(settlement.to_id, 0) - cents

    return {pid: from_cents(cents) for pid, cents in residual.items()}
