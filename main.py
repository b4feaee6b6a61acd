"""Entry point for the task board application."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QComboBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSizePolicy,
    QTextEdit,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from taskboard.config import AppConfig
from taskboard.container import BoardState
from taskboard.logging_utils import configure_logging
from taskboard.models import COLUMN_IDS, COLUMN_TITLES, Column, Priority, Task, TaskDraft
from taskboard.storage import BoardSnapshotStore, JsonFileStore

TASK_MIME_TYPE = "application/x-qabstractitemmodeldatalist"

PRIORITY_COLORS = {
    Priority.HIGH: ("#5c1f24", "#ffb3b8"),
    Priority.MEDIUM: ("#5a4a12", "#ffe08a"),
    Priority.LOW: ("#1d4a2c", "#a6f0bf"),
}
CATEGORY_COLORS = ("#1b3458", "#a8c8ff")


def _badge_style(background: str, foreground: str) -> str:
    return (
        f"padding: 3px 10px; border-radius: 10px; background-color: {background};"
        f" color: {foreground}; font-size: 9pt; font-weight: 600;"
    )


def create_application() -> QApplication:
    app = QApplication([])
    app.setApplicationName("Project Dashboard")
    palette = app.palette()
    palette.setColor(QPalette.ColorRole.Window, QColor("#0f111a"))
    palette.setColor(QPalette.ColorRole.WindowText, QColor("#e8ebf2"))
    palette.setColor(QPalette.ColorRole.Base, QColor("#141724"))
    palette.setColor(QPalette.ColorRole.Text, QColor("#e8ebf2"))
    palette.setColor(QPalette.ColorRole.Button, QColor("#1c2030"))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor("#e8ebf2"))
    palette.setColor(QPalette.ColorRole.Highlight, QColor("#3f7cff"))
    app.setPalette(palette)
    app.setStyleSheet(
        "\n".join(
            [
                "QWidget { font-size: 11pt; color: #e8ebf2; }",
                "QMainWindow, QWidget { background-color: #0f111a; }",
                (
                    "QPushButton { background-color: #3f7cff; color: #ffffff; padding: 6px 14px;"
                    " border-radius: 6px; font-weight: 600; border: 1px solid #345fcc; }"
                ),
                "QPushButton:hover { background-color: #5b92ff; }",
                "QPushButton#deleteButton { background: transparent; border: none; color: #9ca3c7; }",
                "QPushButton#deleteButton:hover { color: #ff6b6b; }",
                (
                    "QLineEdit, QComboBox, QTextEdit, QListWidget {"
                    " background-color: #141724; border: 1px solid #2a2d3f;"
                    " border-radius: 8px; padding: 6px; color: #e8ebf2; }"
                ),
                (
                    "QGroupBox { border: 1px solid #1f2336; border-radius: 10px;"
                    " margin-top: 20px; padding: 12px; background: #141724; }"
                ),
                (
                    "QGroupBox::title { subcontrol-origin: margin; left: 18px;"
                    " padding: 0 6px; font-weight: 600; color: #9ca3c7; }"
                ),
                "QWidget#taskCard { background-color: #1c2030; border-radius: 10px; }",
            ]
        )
    )
    return app


class TaskCardWidget(QWidget):
    def __init__(self, task: Task, column_id: str, state: BoardState) -> None:
        super().__init__()
        self.setObjectName("taskCard")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.MinimumExpanding)
        self.task = task
        self.column_id = column_id
        self.state = state
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(8)

        header = QHBoxLayout()
        title = QLabel(self.task.title)
        title.setWordWrap(True)
        title.setStyleSheet("font-size: 12pt; font-weight: 600; background: transparent;")
        header.addWidget(title, 1)
        delete_button = QPushButton("×")
        delete_button.setObjectName("deleteButton")
        delete_button.setToolTip("Delete task")
        delete_button.clicked.connect(self._delete)
        header.addWidget(delete_button)
        layout.addLayout(header)

        if self.task.description:
            description = QLabel(self.task.description)
            description.setWordWrap(True)
            description.setStyleSheet("color: #9ca3c7; font-size: 10pt; background: transparent;")
            layout.addWidget(description)

        meta = QHBoxLayout()
        meta.setSpacing(6)
        category = QLabel(self.task.category or "General")
        category.setStyleSheet(_badge_style(*CATEGORY_COLORS))
        meta.addWidget(category)
        priority = QLabel(self.task.priority.value)
        priority.setStyleSheet(_badge_style(*PRIORITY_COLORS[self.task.priority]))
        meta.addWidget(priority)
        if self.task.due_date:
            due = QLabel(f"Due {self.task.due_date}")
            due.setStyleSheet("color: #9ca3c7; font-size: 9pt; background: transparent;")
            meta.addWidget(due)
        meta.addStretch()
        layout.addLayout(meta)

        move_row = QHBoxLayout()
        move_row.addWidget(QLabel("Move to:"))
        self.move_box = QComboBox()
        for column_id in COLUMN_IDS:
            self.move_box.addItem(COLUMN_TITLES[column_id], column_id)
        self.move_box.setCurrentIndex(self.move_box.findData(self.column_id))
        self.move_box.activated.connect(self._move)
        move_row.addWidget(self.move_box, 1)
        layout.addLayout(move_row)

    def _delete(self) -> None:
        logging.info("Deleting task %s", self.task.title)
        self.state.delete_task(self.column_id, self.task.id)

    def _move(self, index: int) -> None:
        destination = self.move_box.itemData(index)
        if destination:
            self.state.move_task(self.column_id, destination, self.task.id)


class TaskListWidget(QListWidget):
    def __init__(self, column_id: str, state: BoardState) -> None:
        super().__init__()
        self.column_id = column_id
        self.state = state
        self.setObjectName(column_id)
        self.setAcceptDrops(True)
        self.setDragEnabled(True)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.DragDropMode.DragDrop)
        self.setSpacing(6)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasFormat(TASK_MIME_TYPE):
            event.acceptProposedAction()
        else:
            super().dragEnterEvent(event)

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasFormat(TASK_MIME_TYPE):
            event.acceptProposedAction()
        else:
            super().dragMoveEvent(event)

    def dropEvent(self, event) -> None:  # type: ignore[override]
        source = event.source()
        if not isinstance(source, TaskListWidget):
            event.ignore()
            return
        task_ids = [item.data(Qt.ItemDataRole.UserRole) for item in source.selectedItems()]
        # the board redraw rebuilds both lists, so Qt must not move items itself
        event.setDropAction(Qt.DropAction.IgnoreAction)
        event.accept()
        for task_id in task_ids:
            self.state.move_task(source.column_id, self.column_id, task_id)

    def populate(self, column: Column) -> None:
        self.clear()
        for task in column.tasks:
            item = QListWidgetItem()
            item.setData(Qt.ItemDataRole.UserRole, task.id)
            self.addItem(item)
            card = TaskCardWidget(task, self.column_id, self.state)
            item.setSizeHint(card.sizeHint())
            self.setItemWidget(item, card)


class AddTaskForm(QWidget):
    def __init__(self, column_id: str, state: BoardState) -> None:
        super().__init__()
        self.column_id = column_id
        self.state = state
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.open_button = QPushButton("+ Add a task")
        self.open_button.clicked.connect(lambda: self._set_editing(True))
        layout.addWidget(self.open_button)

        self.editor = QWidget()
        editor_layout = QVBoxLayout(self.editor)
        editor_layout.setContentsMargins(0, 0, 0, 0)
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Task Title")
        editor_layout.addWidget(self.title_input)
        self.desc_input = QTextEdit()
        self.desc_input.setPlaceholderText("Task Description")
        self.desc_input.setFixedHeight(80)
        editor_layout.addWidget(self.desc_input)
        buttons = QHBoxLayout()
        add_button = QPushButton("Add")
        add_button.clicked.connect(self._add)
        buttons.addWidget(add_button)
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(lambda: self._set_editing(False))
        buttons.addWidget(cancel_button)
        editor_layout.addLayout(buttons)
        layout.addWidget(self.editor)
        self._set_editing(False)

    def _set_editing(self, editing: bool) -> None:
        self.editor.setVisible(editing)
        self.open_button.setVisible(not editing)
        if editing:
            self.title_input.setFocus()

    def _add(self) -> None:
        title = self.title_input.text()
        description = self.desc_input.toPlainText()
        if not title.strip() or not description.strip():
            return
        self.state.add_task(self.column_id, TaskDraft(title=title, description=description))
        self.title_input.clear()
        self.desc_input.clear()
        self._set_editing(False)


class BoardView(QWidget):
    def __init__(self, state: BoardState, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.state = state
        self.groups: Dict[str, QGroupBox] = {}
        self.columns: Dict[str, TaskListWidget] = {}
        self._build_ui()
        self.state.subscribe(self._schedule_refresh)
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(16)

        heading = QLabel("Project Dashboard")
        heading.setStyleSheet("font-size: 22pt; font-weight: 800;")
        layout.addWidget(heading)
        subheading = QLabel("Manage your tasks with ease.")
        subheading.setStyleSheet("color: #9ca3c7;")
        layout.addWidget(subheading)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Filter tasks by title or description...")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.setMaximumWidth(520)
        self.search_input.textChanged.connect(self.state.set_filter)
        layout.addWidget(self.search_input)

        columns_layout = QHBoxLayout()
        columns_layout.setSpacing(12)
        for column_id in COLUMN_IDS:
            group = QGroupBox()
            group_layout = QVBoxLayout(group)
            group_layout.setContentsMargins(12, 16, 12, 12)
            task_list = TaskListWidget(column_id, self.state)
            group_layout.addWidget(task_list)
            group_layout.addWidget(AddTaskForm(column_id, self.state))
            columns_layout.addWidget(group)
            self.groups[column_id] = group
            self.columns[column_id] = task_list
        layout.addLayout(columns_layout)

    def _schedule_refresh(self) -> None:
        # Cards trigger changes from their own slots; rebuild them on the next
        # event loop tick so we avoid destroying a widget mid-signal.
        QTimer.singleShot(0, self.refresh)

    def refresh(self) -> None:
        visible = self.state.visible_board()
        for column in visible:
            self.groups[column.id].setTitle(f"{column.title} ({len(column.tasks)})")
            self.columns[column.id].populate(column)


class MainWindow(QMainWindow):
    def __init__(self, state: BoardState, snapshots: BoardSnapshotStore) -> None:
        super().__init__()
        self.state = state
        self.snapshots = snapshots
        self.setWindowTitle("Project Dashboard")
        self.resize(1200, 800)
        self.board_view = BoardView(self.state)
        self.setCentralWidget(self.board_view)
        self._create_menus()

    def _create_menus(self) -> None:
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)
        import_action = toolbar.addAction("Import")
        import_action.triggered.connect(self._import_data)
        export_action = toolbar.addAction("Export")
        export_action.triggered.connect(self._export_data)

    def _import_data(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Import board", str(Path.home()), "Board export (*.json)"
        )
        if not path:
            return
        try:
            board = self.snapshots.import_from(Path(path))
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Import failed", str(exc))
            return
        self.state.replace_board(board)

    def _export_data(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export board", str(Path.home() / "taskboard_export.json"), "*.json"
        )
        if not path:
            return
        try:
            self.snapshots.export_to(self.state.board, Path(path))
        except OSError as exc:
            QMessageBox.critical(self, "Export failed", str(exc))
            return
        QMessageBox.information(self, "Export", "Export completed successfully.")


def main() -> None:
    config = AppConfig.load()
    configure_logging(Path(config.log_path), config.log_level)
    logging.info("Starting task board")
    snapshots = BoardSnapshotStore(JsonFileStore(Path(config.data_path)), key=config.storage_key)
    state = BoardState.from_adapter(snapshots)
    app = create_application()
    window = MainWindow(state, snapshots)
    window.show()
    app.exec()


if __name__ == "__main__":
    main()
