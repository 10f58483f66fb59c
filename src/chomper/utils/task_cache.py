"""Cache of the task order shown by the last ``chomper list``.

``done``, ``edit`` and ``delete`` accept the numbers printed by ``list``.
Those numbers depend on the filter the list was run with, so the listed IDs
are remembered per profile and numbers are looked up against them.
"""

import json
import logging
import time
from pathlib import Path
from typing import Optional

from platformdirs import user_cache_dir

LIST_ORDER_TTL = 30 * 60  # 30 minutes

logger = logging.getLogger(__name__)


def _list_order_file(profile: str) -> Path:
    return Path(user_cache_dir("chomper")) / f"{profile}.list_order.json"


def save_list_order(task_ids: list[str], profile: str = "default") -> None:
    """Remember the IDs of the listed tasks, in display order.

    Args:
        task_ids: IDs as numbered by ``list`` (number 1 first)
        profile: Profile the list was run for
    """
    path = _list_order_file(profile)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"timestamp": time.time(), "task_ids": task_ids}))
    except OSError as e:
        logger.warning("could not save list order: %s", e)


def get_list_order(profile: str = "default") -> Optional[list[str]]:
    """IDs of the last listed tasks, or None if missing or expired."""
    path = _list_order_file(profile)
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable list order: %s", e)
        return None

    if time.time() - data.get("timestamp", 0) > LIST_ORDER_TTL:
        return None
    return data.get("task_ids")


def clear_list_order(profile: str = "default") -> None:
    """Forget the last listed order."""
    _list_order_file(profile).unlink(missing_ok=True)
