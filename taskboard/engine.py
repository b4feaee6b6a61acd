"""Board transitions.

``transition`` is a pure function of its inputs: it never mutates the board
it is given and never keeps state between calls. Lookup misses (unknown
column, task not in the source column) return the input board itself, so
callers can tell "nothing changed" with an identity check.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Set

from .actions import Action, AddTask, DeleteTask, MoveTask
from .models import Board, Task

logger = logging.getLogger(__name__)

IdFactory = Callable[[Board], str]


def next_task_id(board: Board, now: Optional[float] = None) -> str:
    """Return a millisecond timestamp id not used by any task on ``board``."""
    if now is None:
        now = time.time()
    candidate = int(now * 1000)
    existing = board.task_ids()
    while str(candidate) in existing:
        candidate += 1
    return str(candidate)


def _unique(task_id: str, existing: Set[str]) -> str:
    if task_id not in existing:
        return task_id
    suffix = 1
    while f"{task_id}-{suffix}" in existing:
        suffix += 1
    return f"{task_id}-{suffix}"


def transition(board: Board, action: Action, id_factory: IdFactory = next_task_id) -> Board:
    if isinstance(action, AddTask):
        return _add(board, action, id_factory)
    if isinstance(action, MoveTask):
        return _move(board, action)
    if isinstance(action, DeleteTask):
        return _delete(board, action)
    raise TypeError(f"Unsupported action: {action!r}")


def _add(board: Board, action: AddTask, id_factory: IdFactory) -> Board:
    if action.column_id not in board:
        logger.debug("Add ignored, unknown column %s", action.column_id)
        return board
    task_id = _unique(id_factory(board), board.task_ids())
    column = board[action.column_id]
    task = Task.from_draft(task_id, action.draft)
    return board.with_columns(column.with_tasks(column.tasks + (task,)))


def _move(board: Board, action: MoveTask) -> Board:
    source_id = action.source_column_id
    destination_id = action.destination_column_id
    if source_id not in board or destination_id not in board:
        logger.debug("Move ignored, unknown column %s -> %s", source_id, destination_id)
        return board
    source = board[source_id]
    task = source.find(action.task_id)
    if task is None:
        logger.debug("Move ignored, task %s not in %s", action.task_id, source_id)
        return board
    remaining = source.with_tasks(tuple(t for t in source.tasks if t.id != task.id))
    # same-column moves must append to the already-filtered sequence
    destination = remaining if destination_id == source_id else board[destination_id]
    moved = destination.with_tasks(destination.tasks + (task,))
    if destination_id == source_id:
        return board.with_columns(moved)
    return board.with_columns(remaining, moved)


def _delete(board: Board, action: DeleteTask) -> Board:
    if action.column_id not in board:
        logger.debug("Delete ignored, unknown column %s", action.column_id)
        return board
    column = board[action.column_id]
    if column.find(action.task_id) is None:
        logger.debug("Delete ignored, task %s not in %s", action.task_id, action.column_id)
        return board
    return board.with_columns(
        column.with_tasks(tuple(t for t in column.tasks if t.id != action.task_id))
    )
