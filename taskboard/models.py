"""Domain models for the task board."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Set, Tuple

SCHEMA_VERSION = "1.0"

COLUMN_IDS: Tuple[str, ...] = ("todo", "in-progress", "done")
COLUMN_TITLES: Dict[str, str] = {
    "todo": "To Do",
    "in-progress": "In Progress",
    "done": "Done",
}


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_str(cls, value: str) -> "Priority":
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown priority: {value!r}")


@dataclass(frozen=True)
class TaskDraft:
    """Fields supplied by the caller when adding a task."""

    title: str
    description: str = ""
    category: str = "General"
    priority: Priority = Priority.LOW
    due_date: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Task title must not be empty")


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str = ""
    category: str = ""
    priority: Priority = Priority.LOW
    due_date: Optional[str] = None

    @classmethod
    def from_draft(cls, task_id: str, draft: TaskDraft) -> "Task":
        return cls(
            id=task_id,
            title=draft.title,
            description=draft.description,
            category=draft.category,
            priority=draft.priority,
            due_date=draft.due_date,
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority.value,
            "dueDate": self.due_date,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Task":
        if not isinstance(data, dict):
            raise TypeError("Task must be a JSON object")
        title = data["title"]
        if not isinstance(title, str) or not title:
            raise ValueError("Task title must be a non-empty string")
        due_date = data.get("dueDate")
        if due_date is not None and not isinstance(due_date, str):
            raise TypeError("dueDate must be a string")
        description = data.get("description", "")
        category = data.get("category", "")
        if not isinstance(description, str) or not isinstance(category, str):
            raise TypeError("description and category must be strings")
        return cls(
            id=str(data["id"]),
            title=title,
            description=description,
            category=category,
            priority=Priority.from_str(data.get("priority", Priority.LOW.value)),
            due_date=due_date,
        )


@dataclass(frozen=True)
class Column:
    id: str
    title: str
    tasks: Tuple[Task, ...] = ()

    def find(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def with_tasks(self, tasks: Tuple[Task, ...]) -> "Column":
        return replace(self, tasks=tuple(tasks))

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Column":
        if not isinstance(data, dict):
            raise TypeError("Column must be a JSON object")
        tasks = data.get("tasks", [])
        if not isinstance(tasks, list):
            raise TypeError("Column tasks must be a list")
        return cls(
            id=data["id"],
            title=data.get("title", COLUMN_TITLES.get(data["id"], data["id"])),
            tasks=tuple(Task.from_dict(task) for task in tasks),
        )


@dataclass(frozen=True)
class Board:
    """Mapping of column id to column.

    Boards are treated as values: every change produces a new Board and
    untouched columns are shared between the old and the new value.
    """

    columns: Mapping[str, Column] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def __getitem__(self, column_id: str) -> Column:
        return self.columns[column_id]

    def __contains__(self, column_id: object) -> bool:
        return column_id in self.columns

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns.values())

    def with_columns(self, *changed: Column) -> "Board":
        columns = dict(self.columns)
        for column in changed:
            columns[column.id] = column
        return Board(columns=columns)

    def all_tasks(self) -> List[Task]:
        return [task for column in self for task in column.tasks]

    def task_ids(self) -> Set[str]:
        return {task.id for task in self.all_tasks()}

    def column_of(self, task_id: str) -> Optional[str]:
        for column in self:
            if column.find(task_id) is not None:
                return column.id
        return None

    def task_count(self) -> int:
        return sum(len(column.tasks) for column in self)

    def validate(self) -> None:
        if set(self.columns) != set(COLUMN_IDS):
            raise ValueError(
                f"Board columns must be {list(COLUMN_IDS)}, got {list(self.columns)}"
            )
        for column_id, column in self.columns.items():
            if column.id != column_id:
                raise ValueError(f"Column keyed {column_id!r} has id {column.id!r}")
        seen: Set[str] = set()
        for task in self.all_tasks():
            if task.id in seen:
                raise ValueError(f"Duplicate task id: {task.id}")
            seen.add(task.id)

    def to_dict(self) -> Dict:
        return {
            "schema_version": SCHEMA_VERSION,
            "columns": {cid: column.to_dict() for cid, column in self.columns.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Board":
        if not isinstance(data, dict):
            raise TypeError("Snapshot must be a JSON object")
        version = data.get("schema_version", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported schema version: {version}")
        raw_columns = data["columns"]
        if not isinstance(raw_columns, dict):
            raise TypeError("Snapshot columns must be a JSON object")
        loaded = {cid: Column.from_dict(raw) for cid, raw in raw_columns.items()}
        # canonical order, unknown ids kept so validate() can report them
        ordered = {cid: loaded[cid] for cid in COLUMN_IDS if cid in loaded}
        ordered.update({cid: col for cid, col in loaded.items() if cid not in ordered})
        board = cls(columns=ordered)
        board.validate()
        return board


def empty_board() -> Board:
    return Board(
        columns={cid: Column(id=cid, title=COLUMN_TITLES[cid]) for cid in COLUMN_IDS}
    )


def seed_board() -> Board:
    """Board shown on first run, before anything has been saved."""
    return Board(
        columns={
            "todo": Column(
                id="todo",
                title="To Do",
                tasks=(
                    Task(
                        id="1",
                        title="Design Homepage",
                        description="Create a responsive homepage design based on the wireframes.",
                        category="Design",
                        priority=Priority.HIGH,
                        due_date="2023-10-25",
                    ),
                    Task(
                        id="2",
                        title="Setup Database",
                        description="Configure the PostgreSQL database and create necessary tables.",
                        category="Backend",
                        priority=Priority.MEDIUM,
                        due_date="2023-10-28",
                    ),
                ),
            ),
            "in-progress": Column(
                id="in-progress",
                title="In Progress",
                tasks=(
                    Task(
                        id="3",
                        title="Develop API endpoints",
                        description="Build and test RESTful APIs for user authentication and data retrieval.",
                        category="Backend",
                        priority=Priority.HIGH,
                        due_date="2023-11-05",
                    ),
                ),
            ),
            "done": Column(
                id="done",
                title="Done",
                tasks=(
                    Task(
                        id="4",
                        title="Fix deployment bug",
                        description="Resolved the issue with the deployment script on Vercel.",
                        category="DevOps",
                        priority=Priority.LOW,
                        due_date="2023-10-15",
                    ),
                ),
            ),
        }
    )
