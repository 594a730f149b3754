"""Utility script to populate sample data for local environments."""

import logging

import typer

from taskboard.config import settings
from taskboard.seed import run_seed


APP = typer.Typer(add_completion=False, help="Carga personas, etiquetas, tareas y comentarios de ejemplo.")

logger = logging.getLogger("run_seeder")


@APP.command()
def main() -> None:
	"""Load deterministic sample data into an existing schema."""
	logging.basicConfig(level=settings.log_level, format="%(levelname)s | %(name)s | %(message)s")
	typer.echo("Seeding database...")
	try:
		run_seed()
	except Exception as exc:
		logger.exception("Seeding failed")
		typer.secho(str(exc), fg=typer.colors.RED, err=True)
		raise typer.Exit(code=1)
	typer.echo("Seeding finished.")


if __name__ == "__main__":
	APP()
