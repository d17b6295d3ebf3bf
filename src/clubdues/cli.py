"""Command line entry point for ClubDues."""

from __future__ import annotations

from datetime import date

import click

from .config import BaseConfig
from .context import DuesContext, create_context
from .errors import DuesError
from .logging_config import setup_logging
from .models.payment import PAYMENT_STATUSES, STATUS_PAID
from .services.advance import preview_batch
from .services.months import format_month


def _dues(ctx: click.Context) -> DuesContext:
    return ctx.find_object(DuesContext)


@click.group()
@click.option("--club", "club_id", type=int, default=None, help="Club id (defaults to CLUBDUES_CLUB_ID)")
@click.option(
    "--auto-sync/--no-auto-sync",
    default=True,
    help="Run the daily payment sync before the command if it has not run today.",
)
@click.pass_context
def main(ctx: click.Context, club_id: int | None, auto_sync: bool) -> None:
    """Monthly dues tracking for club members."""

    config = BaseConfig()
    setup_logging(config)
    dues = create_context(config, club_id=club_id)
    ctx.obj = dues

    if auto_sync and ctx.invoked_subcommand != "sync":
        try:
            result = dues.run_sync()
        except DuesError as exc:
            click.echo(f"Automatic sync failed, will retry next time: {exc}", err=True)
        else:
            if result is not None and result.total:
                click.echo(f"Synced: {result.created} created, {result.promoted} marked overdue")


@main.command("sync")
@click.option("--force", is_flag=True, default=False, help="Run even if a sync already ran today")
@click.pass_context
def sync_command(ctx: click.Context, force: bool) -> None:
    """Create missing monthly records and mark stale ones overdue."""

    try:
        result = _dues(ctx).run_sync(force=force)
    except DuesError as exc:
        raise click.ClickException(str(exc)) from exc
    if result is None:
        click.echo("Already synced today. Use --force to run again.")
        return
    click.echo(f"Created: {result.created}  Marked overdue: {result.promoted}")


@main.command("ledger")
@click.argument("enrollment_id", type=int)
@click.option("--upcoming", "upcoming_months", type=int, default=0, help="Also show N future months")
@click.pass_context
def ledger_command(ctx: click.Context, enrollment_id: int, upcoming_months: int) -> None:
    """Show month-by-month dues for an enrollment."""

    dues = _dues(ctx)
    try:
        entries = dues.build_ledger(enrollment_id)
        if upcoming_months > 0:
            entries += dues.upcoming(enrollment_id, months=upcoming_months)
    except DuesError as exc:
        raise click.ClickException(str(exc)) from exc

    for entry in entries:
        marker = "*" if entry.is_auto_generated else " "
        paid_on = entry.paid_on.isoformat() if entry.paid_on else ""
        click.echo(
            f"{entry.month} {marker} {entry.label:<20} {entry.status:<9} {entry.amount:>10.2f} {paid_on}"
        )


@main.command("advance")
@click.argument("enrollment_id", type=int)
@click.argument("start_month")
@click.argument("count", type=int)
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt")
@click.pass_context
def advance_command(
    ctx: click.Context, enrollment_id: int, start_month: str, count: int, yes: bool
) -> None:
    """Record COUNT months from START_MONTH (YYYY-MM) as paid in advance."""

    dues = _dues(ctx)
    try:
        enrollment = dues.require_enrollment(enrollment_id)
        rows, total = preview_batch(
            enrollment,
            start_month,
            count,
            max_months=dues.config.ADVANCE_MAX_MONTHS,
            locale=dues.config.LOCALE,
        )
        for _, label, amount in rows:
            click.echo(f"  {label:<20} {amount:>10.2f}")
        click.echo(f"  {'Total':<20} {total:>10.2f}")
        if not yes and not click.confirm("Record these months as paid?", default=True):
            click.echo("Cancelled.")
            return
        created = dues.create_advance_batch(enrollment_id, start_month, count)
    except DuesError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Recorded {len(created)} month(s) as paid.")


@main.command("pay")
@click.argument("enrollment_id", type=int)
@click.argument("month")
@click.option("--amount", type=float, default=None, help="Defaults to the enrollment's monthly fee")
@click.option("--status", type=click.Choice(PAYMENT_STATUSES), default=STATUS_PAID, show_default=True)
@click.option("--paid-on", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.pass_context
def pay_command(
    ctx: click.Context,
    enrollment_id: int,
    month: str,
    amount: float | None,
    status: str,
    paid_on,
) -> None:
    """Record a single MONTH (YYYY-MM) for an enrollment."""

    paid_date: date | None = paid_on.date() if paid_on else None
    try:
        record = _dues(ctx).add_payment(enrollment_id, month, amount, status, paid_date)
    except DuesError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Recorded {record.month} as {record.status} ({record.amount:.2f}).")


@main.command("summary")
@click.pass_context
def summary_command(ctx: click.Context) -> None:
    """Show collected, pending and overdue figures for the club."""

    dues = _dues(ctx)
    try:
        summary = dues.summary()
        revenue = dues.monthly_revenue()
    except DuesError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Collected this month: {summary.collected_this_month:.2f}")
    click.echo(f"Pending: {summary.pending_count}")
    click.echo(f"Overdue: {summary.overdue_count}")
    click.echo(f"Total revenue: {summary.total_revenue:.2f}")
    click.echo("Last 6 months:")
    for month, amount in revenue:
        click.echo(f"  {format_month(month, dues.config.LOCALE):<20} {amount:>10.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
