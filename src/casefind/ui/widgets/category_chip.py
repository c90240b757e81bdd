"""Rounded chip button for one search category."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QPushButton, QWidget

from casefind.models.categories import Category
from casefind.ui.theme import COLORS, icon_glyph


class CategoryChip(QPushButton):
    """A compact chip showing a category, its glyph and its digit shortcut."""

    def __init__(
        self,
        category: Category,
        shortcut: int,
        *,
        active: bool,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(f"{icon_glyph(category.icon)} {category.name}  {shortcut}", parent)
        self.category_id = category.id
        self._active = active
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._apply_style()

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        if active == self._active:
            return
        self._active = active
        self._apply_style()

    def _apply_style(self) -> None:
        if self._active:
            self.setStyleSheet(
                "QPushButton { "
                f"background-color: {COLORS['primary']}; color: white; "
                "border: none; border-radius: 8px; padding: 5px 12px; "
                "font-size: 12px; font-weight: 600; }"
            )
            return
        self.setStyleSheet(
            "QPushButton { "
            f"background-color: {COLORS['bg']}; color: {COLORS['text_muted']}; "
            f"border: 1px solid {COLORS['border']}; border-radius: 8px; "
            "padding: 5px 12px; font-size: 12px; font-weight: 500; }"
            "QPushButton:hover { "
            f"border-color: {COLORS['primary']}; color: {COLORS['primary']}; }}"
        )
