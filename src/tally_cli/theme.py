"""Console styling for Tally CLI."""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from . import __version__
from .operations import OperationResult


CITY_LIGHTS_COLORS = {
    'surface_light': '#41505E',
    'primary': '#68D5F3',
    'accent': '#B7C5D3',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'text_primary': '#B7C5D3',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
}

TALLY_THEME = Theme({
    'default': f"{CITY_LIGHTS_COLORS['text_primary']}",
    'muted': f"{CITY_LIGHTS_COLORS['text_muted']}",
    'bright': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'success': f"{CITY_LIGHTS_COLORS['success']}",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'primary': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'accent': f"{CITY_LIGHTS_COLORS['accent']}",
    'header': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'border': f"{CITY_LIGHTS_COLORS['surface_light']}",
})


def get_themed_console(no_color: bool = False, file=None) -> Console:
    """Get a console with the Tally theme applied."""
    return Console(theme=TALLY_THEME, no_color=no_color, file=file, highlight=False)


def show_startup_banner(console: Console) -> None:
    """Display the greeting panel."""
    body = Text.assemble(
        ("Hello! I'm Tally.\n", "primary"),
        ("Tasks and expenses, one line at a time. Type ", "accent"),
        ("bye", "bright"),
        (" to leave.", "accent"),
    )
    console.print(Panel(
        body,
        title="[bright]Welcome[/bright]",
        subtitle=f"[muted]v{__version__}[/muted]",
        border_style="border",
        padding=(1, 2),
    ))


def show_quick_help(console: Console) -> None:
    """Show the command summary."""
    help_text = """[header]Commands:[/header]
  [primary]todo[/primary] [muted]<description>[/muted]
  [primary]deadline[/primary] [muted]<description> /by yyyy-mm-dd HHMM[/muted]
  [primary]event[/primary] [muted]<description> /at yyyy-mm-dd HHMM[/muted]
  [primary]list[/primary]                     Show all tasks
  [primary]done[/primary] [muted]<n>[/muted]                 Mark task n as done
  [primary]delete[/primary] [muted]<n>[/muted]               Remove task n
  [primary]find[/primary] [muted]<keyword>[/muted]           Search descriptions
  [primary]pay[/primary] [muted]<description> $<amount> /by dd-mm-yyyy[/muted]
  [primary]receive[/primary] [muted]<description> $<amount> /by dd-mm-yyyy[/muted]
  [primary]bye[/primary]                      Save and exit
"""
    console.print(Panel(
        help_text,
        title="[accent]Getting Started[/accent]",
        border_style="border",
        padding=(1, 1),
    ))


def print_result(console: Console, result: OperationResult) -> None:
    """Print an operation result; task text is never read as markup."""
    style = "error" if result.is_error else "default"
    console.print(Text(result.message, style=style))
    for suggestion in result.suggestions:
        console.print(Text(f"  {suggestion}", style="accent"))
