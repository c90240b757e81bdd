"""Tests for the Qt list model and key translation behind the palette."""

from __future__ import annotations

from conftest import make_result
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from casefind.models.actions import quick_actions_for_role
from casefind.services.interaction import Key
from casefind.services.result_list import Section, SectionName
from casefind.ui.palette import PaletteListModel, key_press_from_event
from casefind.ui.presentation import RowPresentation
from casefind.ui.widgets.delegates import PaletteRoles


def _key(
    key: Qt.Key,
    text: str = "",
    modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier,
) -> QKeyEvent:
    return QKeyEvent(QEvent.Type.KeyPress, key, modifiers, text)


def test_list_model_exposes_rows_headers_and_cursor() -> None:
    actions = quick_actions_for_role("helper")
    sections = (
        Section(SectionName.QUICK_ACTIONS, actions),
        Section(SectionName.RECENT, ()),
        Section(SectionName.RESULTS, (make_result("1", title="Familie Müller"),)),
    )
    model = PaletteListModel()
    model.set_snapshot(
        sections, current=1, results_title="Search results · 1 found", query="müller"
    )

    assert model.rowCount() == len(actions) + 1
    first = model.index(0, 0)
    second = model.index(1, 0)
    last = model.index(len(actions), 0)
    assert first.data(PaletteRoles.SECTION_HEADER) == "Quick actions"
    assert second.data(PaletteRoles.SECTION_HEADER) == ""
    assert last.data(PaletteRoles.SECTION_HEADER) == "Search results · 1 found"
    assert second.data(PaletteRoles.IS_CURRENT) is True
    assert first.data(PaletteRoles.IS_CURRENT) is False
    assert isinstance(first.data(PaletteRoles.PRESENTATION), RowPresentation)
    assert first.data(Qt.ItemDataRole.DisplayRole) == actions[0].name
    presented = last.data(PaletteRoles.PRESENTATION)
    assert "background-color" in presented.title_html
    assert last.data(Qt.ItemDataRole.DisplayRole) == "Familie Müller"


def test_key_press_from_event_translates_named_and_text_keys() -> None:
    escape = key_press_from_event(_key(Qt.Key.Key_Escape))
    assert escape is not None
    assert escape.key == Key.ESCAPE

    enter = key_press_from_event(_key(Qt.Key.Key_Return, "\r"))
    assert enter is not None
    assert enter.key == Key.ENTER

    digit = key_press_from_event(_key(Qt.Key.Key_3, "3"))
    assert digit is not None
    assert digit.digit == 3

    shortcut = key_press_from_event(_key(Qt.Key.Key_K, "", Qt.KeyboardModifier.ControlModifier))
    assert shortcut is not None
    assert shortcut.is_open_shortcut

    assert key_press_from_event(_key(Qt.Key.Key_Shift)) is None
