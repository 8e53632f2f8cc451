"""Flask CLI commands for Habitual."""

from __future__ import annotations

import click

from .extensions import get_store


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitual-seed")
    @click.option("--force", is_flag=True, default=False, help="Seed even if habits exist")
    def habitual_seed(force: bool) -> None:
        """Load the sample habits and two weeks of history."""

        from .services.seed import seed_sample_data

        store = get_store(app)
        if store.list_habits() and not force:
            click.echo("Habits already exist; use --force to add the samples anyway.")
            return
        created = seed_sample_data(store)
        click.echo(f"Seeded {created} sample habits.")

    @app.cli.command("habitual-reset")
    @click.confirmation_option(prompt="Delete every habit and completion?")
    def habitual_reset() -> None:
        """Remove all habit data and restart ids at 1."""

        get_store(app).reset_all_data()
        click.echo("All habit data has been reset.")
