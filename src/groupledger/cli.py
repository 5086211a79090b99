"""CLI for GroupLedger using Typer."""

import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import load_settings
from .models import (
    CustomShare,
    CustomSplit,
    EqualSplit,
    GroupReport,
    GroupSnapshot,
    Participant,
    PercentageShare,
    PercentageSplit,
    Split,
    SplitPolicy,
    SplitType,
)
from .service import LedgerService
from .splits import calculate_split_amounts

app = typer.Typer(
    name="groupledger",
    help="Split shared expenses and work out who pays whom",
)

console = Console()


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def parse_amount(value: str) -> Decimal:
    """Parse a positive currency amount from the command line."""
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise typer.BadParameter(f"Not a valid amount: {value}") from None
    if amount <= 0:
        raise typer.BadParameter(f"Amount must be positive: {value}")
    return amount


def parse_shares(values: list[str]) -> list[tuple[str, Decimal]]:
    """Parse ``ID=VALUE`` share options."""
    shares = []
    for value in values:
        participant_id, sep, raw = value.partition("=")
        if not sep or not participant_id:
            raise typer.BadParameter(f"Share must look like ID=VALUE: {value}")
        try:
            shares.append((participant_id, Decimal(raw)))
        except InvalidOperation:
            raise typer.BadParameter(f"Not a valid share value: {value}") from None
    return shares


def build_policy(
    split_type: SplitType, shares: list[tuple[str, Decimal]]
) -> SplitPolicy:
    """Build the split policy for the chosen split type."""
    if split_type is SplitType.EQUAL:
        return EqualSplit()
    if not shares:
        raise typer.BadParameter(f"--share is required for {split_type.value} splits")
    if split_type is SplitType.CUSTOM:
        return CustomSplit(
            shares=[CustomShare(participant_id=pid, amount=v) for pid, v in shares]
        )
    return PercentageSplit(
        shares=[PercentageShare(participant_id=pid, percentage=v) for pid, v in shares]
    )


def format_money(amount: Decimal, symbol: str = "$", use_color: bool = True) -> str:
    """
    Format money in accounting style with alignment.

    Negative amounts use parentheses: ($85.02)
    Positive amounts have spaces:      $85.02
    """
    abs_amount = abs(amount)
    if amount < 0:
        if use_color:
            return f"({symbol}[red]{abs_amount:,.2f}[/red])"
        return f"({symbol}{abs_amount:,.2f})"
    if use_color:
        return f" [green]{symbol}{abs_amount:,.2f}[/green] "
    return f" {symbol}{abs_amount:,.2f} "


def _names(participants: list[Participant]) -> dict[str, str]:
    return {p.id: p.name for p in participants}


def display_splits(splits: list[Split], amount: Decimal, symbol: str):
    """Display computed splits in a table."""
    table = Table(title="Splits", show_header=True, header_style="bold magenta")
    table.add_column("Participant", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right", style="dim")

    for split in splits:
        table.add_row(
            split.participant_id,
            format_money(split.amount, symbol),
            f"{split.percentage}%",
        )

    console.print(table)

    total = sum((split.amount for split in splits), Decimal("0"))
    if total == amount:
        console.print("  [green]✓ Splits add up to the expense total[/green]")
    else:
        console.print(
            f"  [red]✗ Splits total {total}, expense total is {amount}[/red]"
        )


def display_balances(report: GroupReport, snapshot: GroupSnapshot, symbol: str):
    """Display each participant's net balance."""
    names = _names(snapshot.participants)

    table = Table(title="Balances", show_header=True, header_style="bold magenta")
    table.add_column("Participant", style="cyan")
    table.add_column("Balance", justify="right")
    table.add_column("Status", style="dim")

    for participant_id, balance in report.balances.items():
        if balance > 0:
            status = "is owed"
        elif balance < 0:
            status = "owes"
        else:
            status = "settled"
        table.add_row(
            names.get(participant_id, participant_id),
            format_money(balance, symbol),
            status,
        )

    console.print(table)


def display_settlements(report: GroupReport, snapshot: GroupSnapshot, symbol: str):
    """Display the payments that settle the group."""
    if not report.settlements:
        console.print("[green]Everyone is settled up.[/green]")
        return

    names = _names(snapshot.participants)

    table = Table(title="Settlements", show_header=True, header_style="bold magenta")
    table.add_column("From", style="red")
    table.add_column("To", style="green")
    table.add_column("Amount", justify="right")

    for settlement in report.settlements:
        table.add_row(
            names.get(settlement.from_id, settlement.from_id),
            names.get(settlement.to_id, settlement.to_id),
            format_money(settlement.amount, symbol),
        )

    console.print(table)


def display_summary(report: GroupReport, symbol: str):
    """Display group spending totals."""
    summary = report.summary

    console.print("\n[bold]Group Summary:[/bold]")
    console.print(f"  Total spent: {format_money(summary.total_spent, symbol)}")
    console.print(f"  Expenses: {summary.total_expenses}")
    console.print(f"  Average expense: {format_money(summary.average_expense, symbol)}")
    console.print()

    if summary.category_breakdown:
        table = Table(
            title="By Category", show_header=True, header_style="bold magenta"
        )
        table.add_column("Category", style="yellow")
        table.add_column("Amount", justify="right")
        for category, amount in sorted(
            summary.category_breakdown.items(), key=lambda item: -item[1]
        ):
            table.add_row(category, format_money(amount, symbol))
        console.print(table)

    table = Table(title="Paid By", show_header=True, header_style="bold magenta")
    table.add_column("Participant", style="cyan")
    table.add_column("Paid", justify="right")
    table.add_column("Share", justify="right", style="dim")
    for contribution in summary.participant_contributions:
        table.add_row(
            contribution.name,
            format_money(contribution.amount, symbol),
            f"{contribution.percentage}%",
        )
    console.print(table)


@app.command()
def split(
    amount: str = typer.Argument(..., help="Expense total, e.g. 100.00"),
    participants: list[str] | None = typer.Option(
        None,
        "--participant",
        "-p",
        help="Participant id (repeat, first absorbs rounding)",
    ),
    split_type: SplitType = typer.Option(
        SplitType.EQUAL, "--type", "-t", help="How to split the amount"
    ),
    shares: list[str] | None = typer.Option(
        None, "--share", "-s", help="ID=VALUE amount or percentage (repeat)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Preview how an expense would be split.

    Equal splits divide AMOUNT between the --participant ids. Custom and
    percentage splits take one --share ID=VALUE per participant.
    """
    setup_logging(verbose)

    total = parse_amount(amount)
    parsed_shares = parse_shares(shares or [])
    policy = build_policy(split_type, parsed_shares)
    participant_ids = participants or [pid for pid, _ in parsed_shares]

    if split_type is SplitType.EQUAL and not participant_ids:
        raise typer.BadParameter("At least one --participant is required")

    try:
        settings = load_settings()
        splits = calculate_split_amounts(total, participant_ids, policy)
        display_splits(splits, total, settings.currency_symbol)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


def _load_report(snapshot_path: Path) -> tuple[GroupReport, GroupSnapshot, str]:
    settings = load_settings()
    service = LedgerService(settings)
    snapshot = service.load_snapshot(snapshot_path)
    report = service.group_report(snapshot)
    return report, snapshot, settings.currency_symbol


@app.command()
def balances(
    snapshot_path: Path = typer.Argument(..., help="Group snapshot JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show each participant's net balance for a group."""
    setup_logging(verbose)

    try:
        report, snapshot, symbol = _load_report(snapshot_path)
        display_balances(report, snapshot, symbol)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def settle(
    snapshot_path: Path = typer.Argument(..., help="Group snapshot JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show the payments that settle a group."""
    setup_logging(verbose)

    try:
        report, snapshot, symbol = _load_report(snapshot_path)
        display_balances(report, snapshot, symbol)
        console.print()
        display_settlements(report, snapshot, symbol)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def summary(
    snapshot_path: Path = typer.Argument(..., help="Group snapshot JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show spending totals for a group."""
    setup_logging(verbose)

    try:
        report, _snapshot, symbol = _load_report(snapshot_path)
        display_summary(report, symbol)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


if __name__ == "__main__":
    app()
