# yanker/cli.py
"""
Main CLI entry point for yanker.

This module sets up the Typer application and registers the yank command.
"""
import typer

from yanker.commands import yank

app = typer.Typer(
    name="yanker",
    help="yanker - yank a range of crate versions from crates.io",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Register commands
yank.register(app)


def main():
    app()


if __name__ == "__main__":
    main()
