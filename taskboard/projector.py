"""Filtered, read-only views of a board."""
from __future__ import annotations

from .models import Board, Task


def task_matches(task: Task, filter_text: str) -> bool:
    needle = filter_text.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def project(board: Board, filter_text: str) -> Board:
    """Keep only tasks whose title or description contains ``filter_text``.

    Matching is a case-insensitive substring test. An empty filter returns
    ``board`` itself.
    """
    if not filter_text:
        return board
    return Board(
        columns={
            cid: column.with_tasks(
                tuple(task for task in column.tasks if task_matches(task, filter_text))
            )
            for cid, column in board.columns.items()
        }
    )
