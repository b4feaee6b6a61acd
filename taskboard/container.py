"""Caller-owned holder of the current board."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .actions import Action, AddTask, DeleteTask, MoveTask
from .engine import IdFactory, next_task_id, transition
from .models import Board, TaskDraft
from .projector import project
from .storage import BoardSnapshotStore

logger = logging.getLogger(__name__)

PersistCallback = Callable[[Board], object]
Listener = Callable[[], None]


class BoardState:
    """Holds the board and filter text and runs actions against them.

    After every action that changes the board the ``persist`` callback is
    called with the new board, then subscribed listeners are notified. A
    failing ``persist`` is logged; the new board is kept either way.
    """

    def __init__(
        self,
        board: Board,
        persist: Optional[PersistCallback] = None,
        id_factory: IdFactory = next_task_id,
    ) -> None:
        self._board = board
        self._filter_text = ""
        self._persist = persist
        self._id_factory = id_factory
        self._listeners: List[Listener] = []

    @classmethod
    def from_adapter(cls, adapter: BoardSnapshotStore, **kwargs) -> "BoardState":
        return cls(adapter.load_or_seed(), persist=adapter.save, **kwargs)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def filter_text(self) -> str:
        return self._filter_text

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def dispatch(self, action: Action) -> Board:
        board = transition(self._board, action, self._id_factory)
        if board is self._board:
            return board
        self._commit(board)
        return board

    def _commit(self, board: Board) -> None:
        self._board = board
        if self._persist is not None:
            try:
                self._persist(board)
            except Exception:
                logger.exception("Persisting board failed; keeping in-memory state")
        self._notify()

    def replace_board(self, board: Board) -> None:
        """Swap in a whole board, e.g. one read from an export file."""
        board.validate()
        self._commit(board)

    def add_task(self, column_id: str, draft: TaskDraft) -> Board:
        return self.dispatch(AddTask(column_id, draft))

    def move_task(self, source_id: str, destination_id: str, task_id: str) -> Board:
        return self.dispatch(MoveTask(source_id, destination_id, task_id))

    def delete_task(self, column_id: str, task_id: str) -> Board:
        return self.dispatch(DeleteTask(column_id, task_id))

    def set_filter(self, text: str) -> None:
        if text == self._filter_text:
            return
        self._filter_text = text
        self._notify()

    def visible_board(self) -> Board:
        return project(self._board, self._filter_text)
