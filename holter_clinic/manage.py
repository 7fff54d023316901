"""Management commands for the Holter clinic engine."""

from __future__ import annotations

import time
from typing import Optional

import click

from .core.config import clinic_now
from .core.exceptions import HolterClinicError
from .main import create_clinic, load_environment


@click.group()
@click.option(
    "--demo/--no-demo",
    default=False,
    help="Start with the demo patients and appointments.",
)
@click.pass_context
def cli(ctx: click.Context, demo: bool) -> None:
    """Entry point for management commands."""
    load_environment()
    ctx.ensure_object(dict)
    ctx.obj["demo"] = demo


def _engine(ctx: click.Context):
    engine, _ = create_clinic(with_demo_data=ctx.obj["demo"])
    return engine


@cli.command("summary")
@click.pass_context
def summary(ctx: click.Context) -> None:
    """Print dashboard counters for today."""
    engine = _engine(ctx)
    engine.scan_overdue()
    dashboard = engine.dashboard_summary(clinic_now())

    click.echo(f"Available holters:    {dashboard.available_holters}")
    click.echo(f"Available cables:     {dashboard.available_cables}")
    click.echo(f"Open appointments:    {dashboard.open_appointments}")
    click.echo(f"Installations today:  {len(dashboard.todays_installations)}")
    click.echo(f"Returns today:        {len(dashboard.todays_returns)}")
    for notification in dashboard.recent_notifications:
        click.echo(f"! {notification.message}")


@cli.command("scan-overdue")
@click.pass_context
def scan_overdue(ctx: click.Context) -> None:
    """Run one overdue scan and list the notifications it raised."""
    engine = _engine(ctx)
    created = engine.scan_overdue()
    if not created:
        click.echo("No overdue appointments.")
        return
    for notification in created:
        click.echo(f"{notification.appointment_id}: {notification.message}")


@cli.command("report")
@click.option("--search", default="", help="Filter by patient name or record number.")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the report to this CSV file instead of printing it.",
)
@click.pass_context
def report(ctx: click.Context, search: str, output: Optional[str]) -> None:
    """Show or export the appointments report."""
    engine = _engine(ctx)
    engine.scan_overdue()

    if output:
        try:
            count = engine.export_report(output, search)
        except (OSError, HolterClinicError) as e:
            raise click.ClickException(f"Could not write report: {e}") from e
        click.echo(f"Wrote {count} rows to {output}")
        return

    rows = engine.report_rows(search)
    if not rows:
        click.echo("No appointments found.")
        return
    for row in rows:
        click.echo(
            f"{row.appointment_id}\t{row.patient}\t"
            f"{row.install_date:%Y-%m-%d %H:%M}\t{row.return_date:%Y-%m-%d %H:%M}\t"
            f"{row.holter_cable}\t{row.status}\t{row.services}"
        )


@cli.command("watch")
@click.pass_context
def watch(ctx: click.Context) -> None:
    """Keep the engine running with the periodic overdue scan until interrupted."""
    _, scheduler = create_clinic(with_demo_data=ctx.obj["demo"], start_scheduler=True)
    if scheduler is None:
        raise click.ClickException("Overdue scan scheduler could not be started.")

    click.echo(
        f"Scanning for overdue returns every {scheduler.interval_seconds}s. "
        "Press Ctrl+C to stop."
    )
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        click.echo("Stopping.")
    finally:
        scheduler.shutdown()


if __name__ == "__main__":
    cli()
