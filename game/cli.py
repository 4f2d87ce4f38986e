"""CLI interface for bootstrapping and administering the game database."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from game.config import load_config
from store.errors import StoreError
from store.repository import GameStore

app = typer.Typer(help="Live quiz game store CLI")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def init(
    config_path: str = typer.Argument(..., help="Path to game YAML config"),
    db_dir: Optional[str] = typer.Option(None, "--db-dir", help="Override the config's db directory"),
) -> None:
    """Create a fresh per-run database and load the question bank."""
    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        typer.secho(f"❌ Config file not found: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except ValueError as e:
        typer.secho(f"❌ Invalid config: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    _configure_logging(config.log_level)

    try:
        with GameStore.for_new_run(db_dir or config.db_dir) as store:
            store.init()
            store.insert_questions(config.questions)
            db_path = store.db_path
    except StoreError as e:
        typer.secho(f"❌ Database setup failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho("✅ Database ready!", fg=typer.colors.GREEN)
    typer.echo(f"   Path:      {db_path}")
    typer.echo(f"   Questions: {len(config.questions)}")


@app.command()
def reset(
    db_path: str = typer.Argument(..., help="Path to an existing game database"),
) -> None:
    """Clear comments, votes and the player snapshot of a game database."""
    if not Path(db_path).is_file():
        typer.secho(f"❌ Database not found: {db_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    try:
        with GameStore(db_path) as store:
            store.init()
            store.reset()
    except StoreError as e:
        typer.secho(f"❌ Reset failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho(f"✅ Cleared comments, votes and players in {db_path}", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
