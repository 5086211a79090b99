"""GroupLedger - Split shared expenses and settle group balances."""

__version__ = "0.1.0"

from .balances import calculate_group_balances
from .config import Settings, load_settings
from .models import (
    CustomShare,
    CustomSplit,
    EqualSplit,
    Expense,
    GroupSnapshot,
    Participant,
    PercentageShare,
    PercentageSplit,
    Settlement,
    Split,
    SplitType,
)
from .service import LedgerService
from .settlements import apply_settlements, calculate_settlements
from .splits import calculate_split_amounts, verify_split_total

__all__ = [
    "Settings",
    "load_settings",
    "CustomShare",
    "CustomSplit",
    "EqualSplit",
    "Expense",
    "GroupSnapshot",
    "Participant",
    "PercentageShare",
    "PercentageSplit",
    "Settlement",
    "Split",
    "SplitType",
    "LedgerService",
    "apply_settlements",
    "calculate_group_balances",
    "calculate_settlements",
    "calculate_split_amounts",
    "verify_split_total",
]
