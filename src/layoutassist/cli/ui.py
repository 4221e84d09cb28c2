"""
Terminal UI utilities using Rich.

Provides:
- Completion tables
- View hierarchy display
- Error and status messages
"""

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from layoutassist.lsp.protocol import CompletionResult, MatchLevel

# Global console instance
console = Console()

_LEVEL_STYLES = {
    MatchLevel.CASE_SENSITIVE_EQUAL: "bold green",
    MatchLevel.CASE_INSENSITIVE_EQUAL: "green",
    MatchLevel.CASE_SENSITIVE_PREFIX: "cyan",
    MatchLevel.CASE_INSENSITIVE_PREFIX: "blue",
    MatchLevel.PARTIAL_MATCH: "yellow",
}


def show_completions(result: CompletionResult, title: str = "Attribute completions"):
    """
    Render completion items as a table.

    Args:
        result: Completion result, already ranked
        title: Table title
    """
    if not result.items:
        console.print("[dim]No completions[/dim]")
        return

    table = Table(title=title, show_lines=False)
    table.add_column("Attribute", style="bold")
    table.add_column("Package", style="magenta")
    table.add_column("Format", style="dim")
    table.add_column("Match")

    for item in result.items:
        style = _LEVEL_STYLES.get(item.match_level, "")
        table.add_row(
            item.qualified_name,
            item.package,
            item.format or "",
            f"[{style}]{item.match_level.name.lower()}[/{style}]" if style else item.match_level.name.lower(),
        )

    console.print(table)
    if result.is_incomplete:
        console.print(f"[yellow]Showing first {len(result.items)} items[/yellow]")


def show_hierarchy(hierarchy: str, title: str = "View hierarchy"):
    """Show an inflated view tree."""
    console.print(Panel(hierarchy or "(empty)", title=title, border_style="cyan"))


def show_layout(text: str):
    """Echo layout XML with syntax highlighting."""
    console.print(Syntax(text, "xml", theme="monokai", line_numbers=True))


def show_error(message: str):
    console.print(f"[bold red]Error:[/bold red] {message}")


def show_info(message: str):
    console.print(f"[cyan]{message}[/cyan]")
