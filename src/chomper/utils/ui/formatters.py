"""Output formatters for different formats."""

import json
from datetime import date
from typing import Any

import yaml
from rich.panel import Panel
from rich.text import Text

from chomper.models import Buckets, ChomperState, FilteredView, Task
from chomper.services.animation import face, speech_bubble
from chomper.utils.grouping import format_due_label, is_overdue
from chomper.utils.recurrence import describe_recurrence
from chomper.utils.ui.console import get_console

console = get_console()

# Status Icons
STATUS_ICONS = {
    "open": "⬜",
    "completed": "✅",
    "recurring": "🔄",
}

# Metadata Icons
METADATA_ICONS = {
    "due_date": "📅",
    "time": "⏰",
    "notes": "📝",
}

SECTION_STYLES = {
    "Today": "bold cyan",
    "Tomorrow": "bold blue",
    "Upcoming": "bold magenta",
    "Someday": "bold white",
    "Completed": "bold green",
}

CHOMPER_STYLES = {
    ChomperState.IDLE: "green",
    ChomperState.CHOMPING: "yellow",
    ChomperState.DANCING: "magenta",
}


def task_to_dict(task: Task) -> dict[str, Any]:
    """Serialize a task for JSON/YAML output."""
    return task.model_dump(mode="json")


def view_to_dict(view: Buckets | FilteredView) -> dict[str, Any]:
    """Serialize a list view, keeping its sections."""
    if isinstance(view, Buckets):
        return {
            "view": "buckets",
            **{
                name: [task_to_dict(t) for t in getattr(view, name)]
                for name in ("today", "tomorrow", "upcoming", "someday")
            },
        }
    return {
        "view": "filter",
        "filter": view.task_filter.value,
        "active": [task_to_dict(t) for t in view.active],
        "completed": [task_to_dict(t) for t in view.completed],
    }


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Print plain data as JSON or YAML; anything else goes through rich."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_single_item(item: dict) -> None:
    """Format a flat mapping as ``key: value`` lines."""
    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        console.print(f"[cyan]{formatted_key}:[/cyan] {value}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Task lists
# ============================================================================


def format_task_item(
    task: Task, today: date, number: int | None = None, indent: str = "  "
) -> None:
    """Format a single task with its metadata line."""
    recurrence = describe_recurrence(task)
    if task.completed:
        status_icon = STATUS_ICONS["completed"]
    elif recurrence:
        status_icon = STATUS_ICONS["recurring"]
    else:
        status_icon = STATUS_ICONS["open"]

    line = Text(indent)
    if number is not None:
        line.append(f"{number:>2}. ", style="dim")
    line.append(f"{status_icon} ")
    line.append(task.text, style="dim strike" if task.completed else "")
    console.print(line)

    meta: list[tuple[str, str]] = []
    due_label = format_due_label(task.due_date, today)
    if due_label:
        style = "bold red" if is_overdue(task.due_date, today) and not task.completed else "cyan"
        meta.append((f"{METADATA_ICONS['due_date']} {due_label}", style))
    if task.due_time is not None:
        meta.append((f"{METADATA_ICONS['time']} {task.due_time.strftime('%H:%M')}", "cyan"))
    if recurrence:
        meta.append((f"{STATUS_ICONS['recurring']} {recurrence}", "green"))
    meta.append((f"#{task.id[-6:]}", "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}    └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)

    if task.notes:
        console.print(
            Text(f"{indent}       {METADATA_ICONS['notes']} {task.notes}", style="italic dim")
        )


def format_view(view: Buckets | FilteredView, today: date) -> None:
    """Render the list view, numbering tasks across sections.

    The numbers match what ``resolve_task`` accepts as a task reference.
    """
    if not view.all_tasks():
        console.print("[yellow]No tasks yet. Add one with: chomper add[/yellow]")
        return

    number = 1
    for title, tasks in view.sections():
        if not tasks:
            continue
        header = Text()
        header.append(title, style=SECTION_STYLES.get(title, "bold cyan"))
        header.append(f" ({len(tasks)})", style="dim")
        console.print(header)
        for task in tasks:
            format_task_item(task, today, number=number)
            number += 1
        console.print()


def chomper_panel(state: ChomperState, tasks_remaining: int) -> Panel:
    """The chomper and its speech bubble."""
    body = Text(justify="center")
    body.append(face(state) + "\n", style="bold")
    body.append(speech_bubble(state, tasks_remaining), style=CHOMPER_STYLES[state])
    return Panel(body, expand=False, border_style=CHOMPER_STYLES[state])


def format_chomper(state: ChomperState, tasks_remaining: int) -> None:
    """Print the chomper once."""
    console.print(chomper_panel(state, tasks_remaining))
