"""Main entry point for Chomper."""

import typer

from chomper import __version__
from chomper.commands import (
    add_command,
    auth,
    config,
    delete_command,
    done_command,
    edit_command,
    list_command,
)
from chomper.utils.typer_helpers import SuggestingGroup
from chomper.utils.ui.console import get_console

app = typer.Typer(
    name="chomper",
    cls=SuggestingGroup,
    help="Chomp through your tasks from the terminal",
    no_args_is_help=True,
)

console = get_console(highlight=False)

# Authentication
app.command("login")(auth.login)
app.command("signup")(auth.signup)
app.command("logout")(auth.logout)
app.command("whoami")(auth.whoami)

# Tasks
app.command("add")(add_command.add)
app.command("list")(list_command.list_tasks)
app.command("edit")(edit_command.edit)
app.command("done")(done_command.done)
app.command("delete")(delete_command.delete)
app.command("clear")(delete_command.clear)

app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Chomper[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
