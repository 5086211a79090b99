"""Tests for split calculation."""

from decimal import Decimal

import pytest
from pydantic import TypeAdapter

from groupledger.exceptions import DegenerateInputError, InputInconsistencyError
from groupledger.models import (
    CustomShare,
    CustomSplit,
    EqualSplit,
    PercentageShare,
    PercentageSplit,
    SplitPolicy,
)
from groupledger.splits import calculate_split_amounts, verify_split_total


def percentage_split(*shares: tuple[str, str]) -> PercentageSplit:
    """Build a percentage policy from (id, percentage) pairs."""
    return PercentageSplit(
        shares=[
            PercentageShare(participant_id=pid, percentage=Decimal(pct))
            for pid, pct in shares
        ]
    )


class TestEqualSplit:
    """Tests for equal splits."""

    def test_three_way_split_first_absorbs_remainder(self):
        """100 between three people leaves the extra cent with the first."""
        splits = calculate_split_amounts(
            Decimal("100"), ["P1", "P2", "P3"], EqualSplit()
        )

        assert [s.participant_id for s in splits] == ["P1", "P2", "P3"]
        assert [s.amount for s in splits] == [
            Decimal("33.34"),
            Decimal("33.33"),
            Decimal("33.33"),
        ]

    def test_even_division_has_no_remainder(self):
        """Amounts that divide evenly are split evenly."""
        splits = calculate_split_amounts(
            Decimal("90.00"), ["A", "B", "C"], EqualSplit()
        )

        assert all(s.amount == Decimal("30.00") for s in splits)

    def test_sum_is_exact_and_non_negative(self):
        """Equal splits always add up to the amount, to the cent."""
        amounts = ["0.01", "0.05", "1.00", "10.00", "33.33", "99.99", "1234.57"]
        for raw in amounts:
            amount = Decimal(raw)
            for count in range(1, 5):
                ids = [f"P{i}" for i in range(count)]
                splits = calculate_split_amounts(amount, ids, EqualSplit())

                assert sum(s.amount for s in splits) == amount
                assert all(s.amount >= 0 for s in splits)

    def test_single_participant_owes_everything(self):
        """One participant takes the full amount."""
        splits = calculate_split_amounts(Decimal("42.42"), ["solo"], EqualSplit())

        assert len(splits) == 1
        assert splits[0].amount == Decimal("42.42")
        assert splits[0].percentage == Decimal("100.00")

    def test_percentage_is_informational(self):
        """Each equal share reports 100/n percent rounded to two places."""
        splits = calculate_split_amounts(
            Decimal("100"), ["P1", "P2", "P3"], EqualSplit()
        )

        assert all(s.percentage == Decimal("33.33") for s in splits)

    def test_zero_participants_raises(self):
        """Splitting between nobody is a caller error."""
        with pytest.raises(DegenerateInputError):
            calculate_split_amounts(Decimal("10.00"), [], EqualSplit())

    def test_splits_have_no_expense_id(self):
        """Splits are not attached to an expense until stored."""
        splits = calculate_split_amounts(Decimal("10.00"), ["A", "B"], EqualSplit())

        assert all(s.expense_id is None for s in splits)


class TestCustomSplit:
    """Tests for custom amount splits."""

    def test_amounts_taken_verbatim(self):
        """Custom amounts are used as given with derived percentages."""
        policy = CustomSplit(
            shares=[
                CustomShare(participant_id="A", amount=Decimal("70.00")),
                CustomShare(participant_id="B", amount=Decimal("30.00")),
            ]
        )

        splits = calculate_split_amounts(Decimal("100.00"), ["A", "B"], policy)

        assert [s.amount for s in splits] == [Decimal("70.00"), Decimal("30.00")]
        assert [s.percentage for s in splits] == [Decimal("70.00"), Decimal("30.00")]

    def test_percentage_rounded_to_two_places(self):
        """Derived percentages are rounded for display."""
        policy = CustomSplit(
            shares=[
                CustomShare(participant_id="A", amount=Decimal("10.00")),
                CustomShare(participant_id="B", amount=Decimal("20.00")),
            ]
        )

        splits = calculate_split_amounts(Decimal("30.00"), ["A", "B"], policy)

        assert splits[0].percentage == Decimal("33.33")
        assert splits[1].percentage == Decimal("66.67")

    def test_mismatched_total_is_not_checked(self):
        """Custom splits are returned even when they don't add up."""
        policy = CustomSplit(
            shares=[
                CustomShare(participant_id="A", amount=Decimal("50.00")),
                CustomShare(participant_id="B", amount=Decimal("20.00")),
            ]
        )

        splits = calculate_split_amounts(Decimal("100.00"), ["A", "B"], policy)

        assert sum(s.amount for s in splits) == Decimal("70.00")


class TestPercentageSplit:
    """Tests for percentage splits."""

    def test_sixty_forty(self):
        """A 60/40 split of 100 is exact."""
        splits = calculate_split_amounts(
            Decimal("100"), ["P1", "P2"], percentage_split(("P1", "60"), ("P2", "40"))
        )

        assert [s.amount for s in splits] == [Decimal("60.00"), Decimal("40.00")]
        assert sum(s.amount for s in splits) == Decimal("100.00")
        assert [s.percentage for s in splits] == [Decimal("60"), Decimal("40")]

    def test_shortfall_added_to_first_share(self):
        """Rounding down each share leaves a cent for the first participant."""
        policy = percentage_split(("A", "33.33"), ("B", "33.33"), ("C", "33.34"))

        splits = calculate_split_amounts(Decimal("10.00"), ["A", "B", "C"], policy)

        # 3.333 -> 3.33, 3.333 -> 3.33, 3.334 -> 3.33; one cent short
        assert [s.amount for s in splits] == [
            Decimal("3.34"),
            Decimal("3.33"),
            Decimal("3.33"),
        ]

    def test_overshoot_taken_from_first_share(self):
        """Half-up rounding can overshoot; the first share gives it back."""
        policy = percentage_split(("A", "50"), ("B", "50"))

        splits = calculate_split_amounts(Decimal("0.05"), ["A", "B"], policy)

        # 2.5 cents rounds up to 3 for both shares
        assert [s.amount for s in splits] == [Decimal("0.02"), Decimal("0.03")]
        assert sum(s.amount for s in splits) == Decimal("0.05")

    def test_percentages_not_summing_to_hundred_still_match_total(self):
        """The first share absorbs whatever the percentages leave over."""
        policy = percentage_split(("A", "50"), ("B", "25"))

        splits = calculate_split_amounts(Decimal("80.00"), ["A", "B"], policy)

        assert [s.amount for s in splits] == [Decimal("60.00"), Decimal("20.00")]

    def test_no_shares_raises(self):
        """A percentage split needs at least one share."""
        with pytest.raises(DegenerateInputError):
            calculate_split_amounts(Decimal("10.00"), [], PercentageSplit(shares=[]))


class TestSplitPolicy:
    """Tests for split policy handling."""

    def test_policy_parsed_from_kind(self):
        """The kind field selects the policy variant."""
        adapter = TypeAdapter(SplitPolicy)

        policy = adapter.validate_python(
            {
                "kind": "percentage",
                "shares": [{"participant_id": "A", "percentage": "100"}],
            }
        )

        assert isinstance(policy, PercentageSplit)
        assert isinstance(adapter.validate_python({"kind": "equal"}), EqualSplit)

    def test_unknown_policy_raises_type_error(self):
        """Anything other than the three policies is a programming error."""
        with pytest.raises(TypeError, match="Unknown split policy"):
            policy = object()
            calculate_split_amounts(Decimal("10.00"), ["A"], policy)


class TestVerifySplitTotal:
    """Tests for split total verification."""

    def test_matching_total_passes(self):
        """Splits that add up are accepted."""
        splits = calculate_split_amounts(
            Decimal("10.00"), ["A", "B", "C"], EqualSplit()
        )

        verify_split_total(splits, Decimal("10.00"))

    def test_mismatched_total_raises(self):
        """Splits that don't add up are rejected."""
        policy = CustomSplit(
            shares=[
                CustomShare(participant_id="A", amount=Decimal("50.00")),
                CustomShare(participant_id="B", amount=Decimal("49.99")),
            ]
        )
        splits = calculate_split_amounts(Decimal("100.00"), ["A", "B"], policy)

        with pytest.raises(InputInconsistencyError, match="must equal total"):
            verify_split_total(splits, Decimal("100.00"))
