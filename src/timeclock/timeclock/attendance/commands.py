from __future__ import annotations

import click
from flask import Flask


def register(app: Flask, container) -> None:
    @app.cli.command("auto-clock-out")
    def auto_clock_out():
        """Clock out sessions left open past the configured limit."""
        closed = container.auto_clock_out_service.run()
        click.echo(f"Auto clock-out closed {closed} session(s)")

    @app.cli.command("send-reminders")
    def send_reminders():
        """Run one pass of the work-time reminder check."""
        fired = container.reminder_loop.run_once()
        click.echo(f"Sent {len(fired)} reminder(s)")
