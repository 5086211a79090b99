"""Service layer that composes the ledger engine for callers.

This module runs the checks that callers of the engine are responsible for
(roster membership, split totals) and bundles balances, settlements and
summaries into a single report.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

from .analytics import summarize_group
from .balances import calculate_group_balances
from .config import Settings
from .exceptions import InputInconsistencyError, UnknownParticipantError
from .models import (
    EqualSplit,
    GroupReport,
    GroupSnapshot,
    Participant,
    Split,
    SplitPolicy,
)
from .settlements import calculate_settlements
from .splits import calculate_split_amounts, verify_split_total

logger = logging.getLogger(__name__)


class LedgerService:
    """Validates expense input and computes group reports."""

    def __init__(self, settings: Settings):
        """Initialize the ledger service."""
        self.settings = settings

    def load_snapshot(self, path: Path) -> GroupSnapshot:
        """
        Load a group snapshot from a JSON file.

        Args:
            path: Path to the snapshot document

        Returns:
            Validated group snapshot
        """
        snapshot = GroupSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
        logger.info(
            f"Loaded {len(snapshot.participants)} participants and "
            f"{len(snapshot.expenses)} expenses from {path}"
        )
        return snapshot

    def build_splits(
        self,
        participants: Sequence[Participant],
        amount: Decimal,
        payer_id: str,
        participant_ids: Sequence[str],
        split_type: SplitPolicy | None = None,
        expense_id: str | None = None,
    ) -> list[Split]:
        """
        Compute and verify the splits for a new or updated expense.

        Args:
            participants: Group roster
            amount: Expense total
            payer_id: Participant who paid
            participant_ids: Participants sharing the expense, in order. For
                custom and percentage splits the shares decide who pays; when
                given, these ids must match the share ids
            split_type: Split policy (defaults to an equal split)
            expense_id: Optional id to stamp onto the splits

        Returns:
            Splits whose amounts sum exactly to ``amount``

        Raises:
            UnknownParticipantError: If the payer or a sharer is not in the roster
            InputInconsistencyError: If too many participants are given, the
                shares don't match ``participant_ids``, or the split amounts
                don't add up to ``amount``
        """
        policy = split_type or EqualSplit()
        roster = {p.id for p in participants}

        if payer_id not in roster:
            raise UnknownParticipantError(
                payer_id, "Payer must be a participant in the group"
            )

        sharer_ids = list(participant_ids)
        if not isinstance(policy, EqualSplit):
            share_ids = [share.participant_id for share in policy.shares]
            if participant_ids and set(participant_ids) != set(share_ids):
                raise InputInconsistencyError(
                    "Split shares must cover exactly the expense participants"
                )
            sharer_ids.extend(share_ids)
        for participant_id in sharer_ids:
            if participant_id not in roster:
                raise UnknownParticipantError(participant_id)

        if len(set(sharer_ids)) > self.settings.max_participants:
            raise InputInconsistencyError(
                f"An expense can be shared by at most "
                f"{self.settings.max_participants} participants"
            )

        splits = calculate_split_amounts(amount, participant_ids, policy)

        verify_split_total(splits, amount)

        if expense_id is not None:
            splits = [
                split.model_copy(update={"expense_id": expense_id}) for split in splits
            ]

        logger.info(f"Built {len(splits)} {policy.kind} splits for {amount}")

        return splits

    def group_report(self, snapshot: GroupSnapshot) -> GroupReport:
        """
        Compute balances, settlements and a spending summary for a group.

        Args:
            snapshot: The group's participants and expenses

        Returns:
            Report with balances, settlements and summary
        """
        strict = self.settings.strict_participants

        balances = calculate_group_balances(
            snapshot.expenses, snapshot.participants, strict=strict
        )
        settlements = calculate_settlements(
            balances, snapshot.participants, strict=strict
        )
        summary = summarize_group(snapshot.expenses, snapshot.participants)

        logger.info(
            f"Computed {len(balances)} balances and {len(settlements)} settlements "
            f"over {summary.total_expenses} expenses"
        )

        return GroupReport(balances=balances, settlements=settlements, summary=summary)
