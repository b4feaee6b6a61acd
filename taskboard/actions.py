"""Actions accepted by the transition engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .models import TaskDraft


@dataclass(frozen=True)
class AddTask:
    column_id: str
    draft: TaskDraft


@dataclass(frozen=True)
class MoveTask:
    source_column_id: str
    destination_column_id: str
    task_id: str


@dataclass(frozen=True)
class DeleteTask:
    column_id: str
    task_id: str


Action = Union[AddTask, MoveTask, DeleteTask]
