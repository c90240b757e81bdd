"""Command palette overlay: search input, category chips and the unified result list."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import (
    QAbstractListModel,
    QEvent,
    QModelIndex,
    QObject,
    QPersistentModelIndex,
    Qt,
    QTimer,
)
from PySide6.QtGui import QKeyEvent, QMouseEvent
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListView,
    QVBoxLayout,
    QWidget,
)

from casefind.models.categories import placeholder_for
from casefind.services.interaction import Key, KeyPress
from casefind.services.result_list import ListItem, Section, SectionName
from casefind.ui.presentation import (
    SECTION_TITLES,
    empty_state_message,
    footer_text,
    present_item,
    results_heading,
)
from casefind.ui.widgets.category_chip import CategoryChip
from casefind.ui.widgets.delegates import PaletteItemDelegate, PaletteRoles

if TYPE_CHECKING:
    from casefind.services.interaction import InteractionStateMachine

_NAMED_KEYS: dict[int, str] = {
    Qt.Key.Key_Escape: Key.ESCAPE,
    Qt.Key.Key_Up: Key.ARROW_UP,
    Qt.Key.Key_Down: Key.ARROW_DOWN,
    Qt.Key.Key_Return: Key.ENTER,
    Qt.Key.Key_Enter: Key.ENTER,
}


def key_press_from_event(event: QKeyEvent) -> KeyPress | None:
    """Translate a Qt key event into a toolkit-neutral KeyPress."""
    modifiers = event.modifiers()
    ctrl = bool(modifiers & Qt.KeyboardModifier.ControlModifier)
    meta = bool(modifiers & Qt.KeyboardModifier.MetaModifier)
    named = _NAMED_KEYS.get(event.key())
    if named is not None:
        return KeyPress(named, ctrl=ctrl, meta=meta)
    text = event.text()
    if event.key() == Qt.Key.Key_K:
        text = "k"
    if len(text) == 1:
        return KeyPress(text, ctrl=ctrl, meta=meta)
    return None


class PaletteListModel(QAbstractListModel):
    """Flat Qt model over the unified list sections."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._items: list[ListItem] = []
        self._headers: dict[int, str] = {}
        self._current = 0
        self._query = ""

    def set_snapshot(
        self,
        sections: tuple[Section, ...],
        current: int,
        results_title: str = "",
        query: str = "",
    ) -> None:
        self.beginResetModel()
        self._query = query
        self._items = [item for section in sections for item in section.items]
        self._headers = {}
        offset = 0
        for section in sections:
            if not section.items:
                continue
            title = SECTION_TITLES[section.name]
            if results_title and section.name is SectionName.RESULTS:
                title = results_title
            self._headers[offset] = title
            offset += len(section)
        self._current = current
        self.endResetModel()

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        return len(self._items)

    def data(
        self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole
    ) -> object:
        if not index.isValid() or index.row() >= len(self._items):
            return None
        row = index.row()
        item = self._items[row]
        if role == Qt.ItemDataRole.DisplayRole:
            return present_item(item).title
        if role == PaletteRoles.PRESENTATION:
            return present_item(item, self._query)
        if role == PaletteRoles.SECTION_HEADER:
            return self._headers.get(row, "")
        if role == PaletteRoles.IS_CURRENT:
            return row == self._current
        return None


class CommandPalette(QWidget):
    """Full-window overlay driven by an InteractionStateMachine."""

    def __init__(self, machine: InteractionStateMachine, parent: QWidget) -> None:
        super().__init__(parent)
        self._machine = machine
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet("CommandPalette { background-color: rgba(0, 0, 0, 26); }")

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 64, 0, 0)
        outer.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        self._frame = QFrame(self)
        self._frame.setObjectName("paletteFrame")
        self._frame.setFixedWidth(720)
        outer.addWidget(self._frame)

        layout = QVBoxLayout(self._frame)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._input = QLineEdit()
        self._input.setObjectName("paletteInput")
        self._input.textEdited.connect(self._machine.set_query)
        self._input.installEventFilter(self)
        layout.addWidget(self._input)

        chips_layout = QHBoxLayout()
        chips_layout.setContentsMargins(20, 10, 20, 10)
        chips_layout.setSpacing(6)
        self._chips: list[CategoryChip] = []
        for position, category in enumerate(machine.categories, start=1):
            chip = CategoryChip(category, position, active=False, parent=self._frame)
            chip.clicked.connect(lambda _checked=False, cid=category.id: self._on_chip(cid))
            self._chips.append(chip)
            chips_layout.addWidget(chip)
        chips_layout.addStretch()
        layout.addLayout(chips_layout)

        self._status = QLabel("")
        self._status.setContentsMargins(20, 6, 20, 6)
        self._status.setWordWrap(True)
        layout.addWidget(self._status)

        self._model = PaletteListModel(self)
        self._list = QListView()
        self._list.setModel(self._model)
        self._list.setItemDelegate(PaletteItemDelegate(self))
        self._list.setMouseTracking(True)
        self._list.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._list.setMinimumHeight(380)
        self._list.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._list.clicked.connect(lambda index: self._machine.select(index.row()))
        layout.addWidget(self._list, stretch=1)

        footer = QLabel(footer_text(len(machine.categories)))
        footer.setObjectName("paletteFooter")
        layout.addWidget(footer)

        machine.on_change = self.render
        machine.on_focus_requested = lambda: QTimer.singleShot(100, self._focus_input)
        self.hide()

    def render(self) -> None:
        """Synchronise widgets with the session."""
        session = self._machine.session
        if not session.is_open:
            self.hide()
            return
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.show()
        self.raise_()

        if self._input.text() != session.query:
            self._input.setText(session.query)
        self._input.setPlaceholderText(placeholder_for(session.active_category))
        for chip in self._chips:
            chip.set_active(chip.category_id == session.active_category)

        sections = self._machine.list_model.sections
        self._model.set_snapshot(
            sections,
            session.selected_index,
            results_heading(session.query, session.total_count),
            session.query,
        )
        if sections:
            self._list.scrollTo(self._model.index(session.selected_index, 0))
            self._status.setText("Searching..." if session.loading else "")
        else:
            self._status.setText(
                empty_state_message(session.query, session.active_category, session.loading)
            )
        self._status.setVisible(bool(self._status.text()))

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self._input and event.type() == QEvent.Type.KeyPress:
            press = key_press_from_event(event)  # type: ignore[arg-type]
            if press is None:
                return False
            if press.digit is not None and self._input.text():
                return False
            if press.key in set(Key) or press.digit is not None or press.is_open_shortcut:
                return self._machine.handle_key(press)
        return super().eventFilter(watched, event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if not self._frame.geometry().contains(event.position().toPoint()):
            self._machine.close()
            return
        super().mousePressEvent(event)

    def _on_chip(self, category_id: str) -> None:
        self._machine.switch_category(category_id)
        self._focus_input()

    def _focus_input(self) -> None:
        self._input.setFocus()
        self._input.selectAll()
