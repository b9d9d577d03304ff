"""Command-line interface for Tally CLI."""

import logging
import sys
from pathlib import Path

import click

from .config import ConfigModel, get_config, load_config
from .errors import StorageError
from .session import Session
from .storage import TaskStorage
from .theme import get_themed_console, print_result, show_quick_help, show_startup_banner

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, level_name: str = "WARNING") -> None:
    """Configure the root logger for the command line."""
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def get_storage(config: ConfigModel) -> TaskStorage:
    """Get the storage for the configured task file."""
    return TaskStorage(config.get_tasks_path())


def open_session(config: ConfigModel, console) -> Session:
    """Start a session, falling back to an empty list if the file is unreadable."""
    storage = get_storage(config)
    try:
        return Session.start(storage)
    except StorageError as e:
        logger.warning("%s", e)
        console.print("[warning]Could not load saved tasks, starting with an empty list.[/warning]")
        return Session(storage)


def run_repl(session: Session, console, show_banner: bool = True) -> None:
    """Read lines until 'bye', end of input or Ctrl-C."""
    if show_banner:
        show_startup_banner(console)

    while not session.finished:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            error = session.close()
            if error:
                console.print(f"[error]Could not save tasks: {error}[/error]")
            console.print("[muted]Interrupted. Goodbye.[/muted]")
            return

        if not line.strip():
            continue
        if line.strip() == "help":
            show_quick_help(console)
            continue

        print_result(console, session.handle(line))


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Directory holding the task file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config_path, data_dir, verbose):
    """Tally - track tasks and expenses one line at a time.

    Run without a subcommand to start an interactive session.
    """
    ctx.ensure_object(dict)

    try:
        config = load_config(Path(config_path)) if config_path else get_config()
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if data_dir:
        config.data_dir = str(Path(data_dir).expanduser())

    setup_logging(verbose, config.log_level)
    ctx.obj["config"] = config
    ctx.obj["console"] = get_themed_console(no_color=config.no_color)

    if ctx.invoked_subcommand is None:
        console = ctx.obj["console"]
        run_repl(open_session(config, console), console, show_banner=config.show_banner)


@cli.command()
@click.argument("command", nargs=-1, required=True)
@click.pass_context
def run(ctx, command):
    """Run a single COMMAND, e.g. tally run todo read book."""
    config = ctx.obj["config"]
    console = ctx.obj["console"]
    session = open_session(config, console)

    result = session.handle(" ".join(command))
    print_result(console, result)
    if result.is_error:
        sys.exit(1)


@cli.command()
@click.pass_context
def path(ctx):
    """Show the absolute path to the task file."""
    click.echo(str(get_storage(ctx.obj["config"]).path.resolve()))


def main():
    """Entry point for the tally command."""
    cli(obj={})


if __name__ == "__main__":
    main()
