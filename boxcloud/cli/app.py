"""Main Typer application — registers all CLI commands.

Entry point: ``boxcloud`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from boxcloud.cli.commands.publish import publish_cmd

app = typer.Typer(
    name="boxcloud",
    help="boxcloud: publish Vagrant boxes to a box registry.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="publish", help="Publish a .box file as a new box version.")(publish_cmd)


@app.command(name="version", help="Show the boxcloud version.")
def version_cmd() -> None:
    """Print the installed boxcloud version."""
    from boxcloud import __version__

    typer.echo(f"boxcloud {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
