"""Task helper utilities."""

from __future__ import annotations

from chomper.models import Task
from chomper.utils.errors import TaskNotFoundError


def _find_shortest_unique_suffix(task_ids: list[str], target_id: str) -> str:
    """
    Find the shortest suffix of target_id that uniquely identifies it.

    Args:
        task_ids: List of all task IDs
        target_id: The task ID to find a unique suffix for

    Returns:
        The shortest unique suffix
    """
    # Try increasingly longer suffixes from the end
    for length in range(1, len(target_id) + 1):
        suffix = target_id[-length:]
        matches = [tid for tid in task_ids if tid.endswith(suffix)]
        if len(matches) == 1:
            return suffix
    return target_id  # Fallback to full ID


def resolve_task(
    tasks: list[Task],
    reference: str,
    numbered: list[Task | None] | None = None,
) -> Task:
    """
    Resolve a list number, full task ID or ID suffix to a task.

    Args:
        tasks: Tasks searched by ID and suffix
        reference: 1-based list number, full ID, or unique ID suffix
        numbered: Tasks in the order ``chomper list`` numbered them, None for
            tasks that have since gone away. Defaults to ``tasks``.

    Returns:
        The matching task

    Raises:
        TaskNotFoundError: If nothing matches or the suffix is ambiguous
    """
    reference = reference.strip()
    if numbered is None:
        numbered = tasks

    if reference.isdigit() and 1 <= int(reference) <= len(numbered):
        task = numbered[int(reference) - 1]
        if task is None:
            raise TaskNotFoundError(
                f"Task {reference} from the last list no longer exists. "
                "Run 'chomper list' to renumber"
            )
        return task

    for task in tasks:
        if task.id == reference:
            return task

    matching_tasks = [task for task in tasks if task.id.endswith(reference)]

    if not matching_tasks:
        raise TaskNotFoundError(f"No task found with number, ID or suffix '{reference}'")

    if len(matching_tasks) > 1:
        all_task_ids = [t.id for t in tasks]
        suggestions = []
        for task in matching_tasks:
            unique_suffix = _find_shortest_unique_suffix(all_task_ids, task.id)
            text = task.text
            # Truncate long titles
            if len(text) > 70:
                text = text[:67] + "..."
            suggestions.append(f"  [{unique_suffix}] {text}")

        raise TaskNotFoundError(
            f"Multiple tasks match suffix '{reference}':\n"
            + "\n".join(suggestions)
            + "\n\nUse the suffix in brackets to select a specific task."
        )

    return matching_tasks[0]
