"""
Tests for board transitions: add, move, delete and id generation.
"""
from collections import Counter

import pytest

from taskboard.actions import AddTask, DeleteTask, MoveTask
from taskboard.engine import next_task_id, transition
from taskboard.models import Priority, Task, TaskDraft, empty_board, seed_board


def _ids(board, column_id):
    return [task.id for task in board[column_id].tasks]


def _membership(board):
    return {column.id: sorted(_ids(board, column.id)) for column in board}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Add
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_add_to_seed_board(board):
    """Adding to todo appends a task with the draft fields and a fresh id"""
    draft = TaskDraft(
        title="Write tests",
        description="Unit tests for reducer",
        category="QA",
        priority=Priority.LOW,
    )
    result = transition(board, AddTask("todo", draft))

    assert len(result["todo"].tasks) == 3
    added = result["todo"].tasks[-1]
    assert added.title == "Write tests"
    assert added.description == "Unit tests for reducer"
    assert added.category == "QA"
    assert added.priority == Priority.LOW
    assert added.due_date is None
    assert added.id not in board.task_ids()


@pytest.mark.parametrize("column_id", ["todo", "in-progress", "done"])
def test_add_only_touches_target_column(board, column_id, fixed_ids):
    """Other columns are shared unchanged"""
    result = transition(board, AddTask(column_id, TaskDraft(title="New")), fixed_ids)
    assert len(result[column_id].tasks) == len(board[column_id].tasks) + 1
    for column in board:
        if column.id != column_id:
            assert result[column.id] is column


def test_add_does_not_mutate_input(board, fixed_ids):
    """The caller's board stays valid and unchanged"""
    before = seed_board()
    transition(board, AddTask("todo", TaskDraft(title="New")), fixed_ids)
    assert board == before


def test_add_uses_id_factory(board, fixed_ids):
    """Identical inputs with a deterministic id source give identical boards"""
    action = AddTask("done", TaskDraft(title="Ship"))
    first = transition(board, action, lambda _b: "42")
    second = transition(board, action, lambda _b: "42")
    assert first == second
    assert first["done"].tasks[-1].id == "42"


def test_add_suffixes_colliding_id(board):
    """A factory id already on the board is made unique"""
    result = transition(board, AddTask("todo", TaskDraft(title="Clash")), lambda _b: "1")
    assert result["todo"].tasks[-1].id == "1-1"

    again = transition(result, AddTask("todo", TaskDraft(title="Clash")), lambda _b: "1")
    assert again["todo"].tasks[-1].id == "1-2"


def test_add_unknown_column_is_noop(board):
    """Adding to a column that does not exist returns the input board"""
    result = transition(board, AddTask("backlog", TaskDraft(title="Lost")))
    assert result is board


def test_rapid_adds_get_distinct_ids():
    """Successive adds inside the same millisecond never collide"""
    board = empty_board()
    for _ in range(5):
        board = transition(
            board, AddTask("todo", TaskDraft(title="Quick")), lambda b: next_task_id(b, now=1.0)
        )
    assert len(board.task_ids()) == 5


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Id generation
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_next_task_id_is_millisecond_timestamp():
    """Ids are wall-clock milliseconds"""
    assert next_task_id(empty_board(), now=1700000000.5) == "1700000000500"


def test_next_task_id_skips_existing(board):
    """Ids already on the board are skipped"""
    assert next_task_id(board, now=0.0015) == "5"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Move
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_move_todo_to_done(board):
    """Moving task 1 relocates it to the end of done, unchanged"""
    original = board["todo"].tasks[0]
    result = transition(board, MoveTask("todo", "done", "1"))

    assert _ids(result, "todo") == ["2"]
    assert _ids(result, "done") == ["4", "1"]
    assert result["done"].tasks[-1] == original
    assert result["in-progress"] is board["in-progress"]


def test_move_missing_task_is_noop(board):
    """A task id not in the source column leaves the board alone"""
    assert transition(board, MoveTask("todo", "done", "missing")) is board
    # task 3 exists, but not in todo
    assert transition(board, MoveTask("todo", "done", "3")) is board


@pytest.mark.parametrize(
    "source, destination",
    [("backlog", "done"), ("todo", "archive")],
)
def test_move_unknown_column_is_noop(board, source, destination):
    """Unknown source or destination columns are ignored"""
    assert transition(board, MoveTask(source, destination, "1")) is board


def test_move_to_same_column_reorders_to_end(board):
    """Self-moves neither duplicate nor drop the task"""
    result = transition(board, MoveTask("todo", "todo", "1"))
    assert _ids(result, "todo") == ["2", "1"]
    assert _membership(result) == _membership(board)
    assert Counter(t.id for t in result.all_tasks()) == Counter(t.id for t in board.all_tasks())


def test_move_single_task_to_own_column(board):
    """A lone task stays exactly once in its column"""
    result = transition(board, MoveTask("in-progress", "in-progress", "3"))
    assert _ids(result, "in-progress") == ["3"]
    assert result == board


def test_move_does_not_mutate_input(board):
    """The previous board value is untouched"""
    before = seed_board()
    transition(board, MoveTask("todo", "in-progress", "2"))
    assert board == before


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Delete
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_delete_from_in_progress(board):
    """Deleting task 3 empties in-progress and leaves the rest"""
    result = transition(board, DeleteTask("in-progress", "3"))
    assert result["in-progress"].tasks == ()
    assert result["todo"] is board["todo"]
    assert result["done"] is board["done"]


def test_delete_missing_task_is_noop(board):
    """Deleting an absent task returns the input board"""
    assert transition(board, DeleteTask("todo", "missing")) is board
    assert transition(board, DeleteTask("nowhere", "1")) is board


def test_delete_is_idempotent(board):
    """A second delete of the same task changes nothing"""
    once = transition(board, DeleteTask("done", "4"))
    twice = transition(once, DeleteTask("done", "4"))
    assert twice is once
    assert "4" not in twice.task_ids()


def test_unknown_action_raises(board):
    """Only the three action kinds are accepted"""
    with pytest.raises(TypeError):
        transition(board, object())


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Invariants across sequences
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_task_ids_stay_unique_across_operations(board, fixed_ids):
    """Every task lives in exactly one column after mixed operations"""
    actions = [
        AddTask("todo", TaskDraft(title="A")),
        MoveTask("todo", "in-progress", "1"),
        AddTask("done", TaskDraft(title="B")),
        MoveTask("in-progress", "done", "3"),
        DeleteTask("todo", "2"),
        MoveTask("done", "done", "4"),
        MoveTask("in-progress", "todo", "1"),
    ]
    for action in actions:
        board = transition(board, action, fixed_ids)
        ids = [task.id for task in board.all_tasks()]
        assert len(ids) == len(set(ids))
        board.validate()

    assert _ids(board, "todo") == ["100", "1"]
    assert _ids(board, "in-progress") == []
    assert _ids(board, "done") == ["101", "3", "4"]
    assert isinstance(board["todo"].tasks[0], Task)
