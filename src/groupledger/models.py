"""Pydantic domain models for GroupLedger."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ExpenseCategory = Literal[
    "food",
    "transport",
    "entertainment",
    "utilities",
    "shopping",
    "healthcare",
    "travel",
    "education",
    "other",
]

# ============================================================================
# Group Models
# ============================================================================


class Participant(BaseModel):
    """A member of a group."""

    id: str
    name: str
    color: str = "#8B5CF6"
    is_owner: bool = False


class Split(BaseModel):
    """One participant's owed share of an expense."""

    expense_id: str | None = None  # set once attached to a stored expense
    participant_id: str
    amount: Decimal
    percentage: Decimal  # informational only


class Expense(BaseModel):
    """A shared purchase together with its resolved splits."""

    id: str
    group_id: str
    amount: Decimal = Field(gt=0)
    payer_id: str
    description: str = ""
    date: datetime = Field(default_factory=datetime.now)
    category: ExpenseCategory = "other"
    splits: list[Split] = Field(default_factory=list)


class Settlement(BaseModel):
    """A directed payment from a debtor to a creditor."""

    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    amount: Decimal


class GroupSnapshot(BaseModel):
    """A fully materialized group: roster plus expense history."""

    id: str | None = None
    name: str | None = None
    participants: list[Participant]
    expenses: list[Expense] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_participants(self) -> "GroupSnapshot":
        """Participant ids must be unique within a group."""
        seen: set[str] = set()
        for participant in self.participants:
            if participant.id in seen:
                raise ValueError(f"Duplicate participant id: {participant.id}")
            seen.add(participant.id)
        return self


# ============================================================================
# Split Policies
# ============================================================================


class SplitType(str, Enum):
    """The supported split policies."""

    EQUAL = "equal"
    CUSTOM = "custom"
    PERCENTAGE = "percentage"


class CustomShare(BaseModel):
    """A fixed amount owed by one participant."""

    participant_id: str
    amount: Decimal


class PercentageShare(BaseModel):
    """A percentage of the total owed by one participant."""

    participant_id: str
    percentage: Decimal = Field(ge=0, le=100)


class EqualSplit(BaseModel):
    """Divide the amount evenly across the participants."""

    kind: Literal["equal"] = "equal"


class CustomSplit(BaseModel):
    """Use caller-supplied amounts verbatim."""

    kind: Literal["custom"] = "custom"
    shares: list[CustomShare]


class PercentageSplit(BaseModel):
    """Derive each amount from a percentage of the total."""

    kind: Literal["percentage"] = "percentage"
    shares: list[PercentageShare]


SplitPolicy = Annotated[
    EqualSplit | CustomSplit | PercentageSplit, Field(discriminator="kind")
]

# ============================================================================
# Report Models
# ============================================================================


class ParticipantContribution(BaseModel):
    """How much one participant paid towards the group total."""

    id: str
    name: str
    color: str
    amount: Decimal
    percentage: int  # whole percent of total spent


class GroupSummary(BaseModel):
    """Spending totals for a group."""

    total_spent: Decimal
    total_expenses: int
    average_expense: Decimal
    category_breakdown: dict[str, Decimal] = Field(default_factory=dict)
    participant_contributions: list[ParticipantContribution] = Field(
        default_factory=list
    )


class GroupReport(BaseModel):
    """Balances, settlements and summary computed for one snapshot."""

    balances: dict[str, Decimal]
    settlements: list[Settlement]
    summary: GroupSummary
