"""Rich rendering of orchestrator responses."""

import json
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from api.constants import DASHBOARD_BASE_URL
from api.models.responses import L0Response
from api.plugins.registry import PluginRegistry

TYPE_STYLES = {
    "snippet": "magenta",
    "memory": "green",
    "context": "blue",
    "help": "yellow",
    "orchestration": "cyan",
    "campaign": "bright_magenta",
}


def make_console() -> Console:
    return Console(
        legacy_windows=False,
        force_interactive=False,
        no_color=False,
        tab_size=4
    )


class ResponseRenderer:
    """Prints L0 responses and plugin tables to a console."""

    def __init__(self, console: Optional[Console] = None, dashboard_base_url: str = DASHBOARD_BASE_URL):
        self.console = console or make_console()
        self.dashboard_base_url = dashboard_base_url.rstrip("/")

    def render(self, response: L0Response, as_json: bool = False):
        """Print a response.

        Args:
            response: Response to print
            as_json: Print the raw JSON instead of the formatted view
        """
        if as_json:
            self.console.print_json(json.dumps(response.to_dict(), ensure_ascii=False))
            return

        style = TYPE_STYLES.get(response.type, "white")
        self.console.print(f"[bold {style}]{escape(response.message)}[/bold {style}]")

        if response.code:
            language = response.data.get("language", "text") if isinstance(response.data, dict) else "text"
            title = response.data.get("title") if isinstance(response.data, dict) else None
            self.console.print(Panel(
                Syntax(response.code, "jsx" if language == "react" else language, word_wrap=True),
                title=title,
                border_style=style
            ))

        if response.workflow:
            self.console.print("\n[bold]Workflow:[/bold]")
            for i, step in enumerate(response.workflow, 1):
                self.console.print(f"  {i}. {escape(step)}")

        if response.agents:
            self.console.print("\n[bold]Agents:[/bold]")
            for agent in response.agents:
                self.console.print(f"  • {escape(agent)}")

        if isinstance(response.data, str):
            self.console.print()
            self.console.print(escape(response.data))
        elif response.data and not response.code:
            self.console.print("\n[bold]Details:[/bold]")
            for key, value in response.data.items():
                if isinstance(value, (list, dict)):
                    value = json.dumps(value, ensure_ascii=False)
                self.console.print(f"  [cyan]{key}:[/cyan] {escape(str(value))}")

        if response.related:
            self.console.print(f"\n[dim]Related: {escape(', '.join(response.related))}[/dim]")

        if response.dashboard_url:
            self.console.print(f"[dim]Dashboard: {self.dashboard_base_url}{response.dashboard_url}[/dim]")

        self.console.print()

    def render_plugins(self, registry: PluginRegistry):
        """Print every registered plugin as a table."""
        plugins = registry.list_detailed()
        if not plugins:
            self.console.print("[yellow]No plugins registered[/yellow]\n")
            return

        table = Table(title=f"Plugins ({registry.enabled_count}/{registry.count} enabled)")
        table.add_column("Name", style="cyan")
        table.add_column("Version")
        table.add_column("Priority", justify="right")
        table.add_column("Source")
        table.add_column("Enabled")
        table.add_column("Triggers", overflow="fold")
        for info in plugins:
            table.add_row(
                info["name"],
                info["version"],
                str(info["priority"]),
                info["source"],
                "[green]yes[/green]" if info["enabled"] else "[red]no[/red]",
                ", ".join(info["triggers"])
            )
        self.console.print(table)
        self.console.print()

    def show_error(self, message: str):
        self.console.print(f"[red]✗ {escape(message)}[/red]\n")
