"""List delegate for palette rows."""

from __future__ import annotations

from PySide6.QtCore import QModelIndex, QPersistentModelIndex, QRect, QRectF, QSize, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QTextDocument
from PySide6.QtWidgets import QStyle, QStyledItemDelegate, QStyleOptionViewItem

from casefind.ui.presentation import RowPresentation
from casefind.ui.theme import COLORS

_SELECTED_BG = QColor(COLORS["selected_bg"])
_HOVER_BG = QColor("#F3F4F6")
_HEADER_HEIGHT = 26
_ROW_HEIGHT = 60


def _elide_right(text: str, max_width: int, painter: QPainter) -> str:
    return painter.fontMetrics().elidedText(text, Qt.TextElideMode.ElideRight, max_width)


def _draw_line(
    painter: QPainter, rect: QRect, text: str, html: str, font: QFont, color: str
) -> None:
    """Draw one left-aligned, vertically centred line, as rich text when ``html`` is set."""
    painter.setFont(font)
    if not html:
        painter.setPen(QColor(color))
        painter.drawText(
            rect,
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
            _elide_right(text, rect.width(), painter),
        )
        return
    document = QTextDocument()
    document.setDocumentMargin(0)
    document.setDefaultFont(font)
    document.setHtml(f'<span style="color: {color}; white-space: pre;">{html}</span>')
    painter.save()
    top = rect.top() + (rect.height() - document.size().height()) / 2
    painter.translate(rect.left(), top)
    document.drawContents(painter, QRectF(0, 0, rect.width(), document.size().height()))
    painter.restore()


class PaletteRoles:
    """Named Qt UserRole offsets for palette rows."""

    PRESENTATION = Qt.ItemDataRole.UserRole
    SECTION_HEADER = Qt.ItemDataRole.UserRole + 1
    IS_CURRENT = Qt.ItemDataRole.UserRole + 2


class PaletteItemDelegate(QStyledItemDelegate):
    """Palette row: glyph tile, title, subtitle, status badge or shortcut.

    The first row of every section also draws the section heading above it.
    """

    def sizeHint(
        self, option: QStyleOptionViewItem, index: QModelIndex | QPersistentModelIndex
    ) -> QSize:
        header = str(index.data(PaletteRoles.SECTION_HEADER) or "")
        return QSize(option.rect.width(), _ROW_HEIGHT + (_HEADER_HEIGHT if header else 0))

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionViewItem,
        index: QModelIndex | QPersistentModelIndex,
    ) -> None:
        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRect(option.rect)
        family = painter.font().family()

        header = str(index.data(PaletteRoles.SECTION_HEADER) or "")
        if header:
            painter.setPen(QColor(COLORS["text_muted"]))
            painter.setFont(QFont(family, 9, QFont.Weight.DemiBold))
            painter.drawText(
                QRect(rect.left() + 20, rect.top() + 6, rect.width() - 40, 16),
                Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
                header.upper(),
            )
            rect.setTop(rect.top() + _HEADER_HEIGHT)

        row = index.data(PaletteRoles.PRESENTATION)
        if not isinstance(row, RowPresentation):
            painter.restore()
            return

        row_rect = rect.adjusted(8, 2, -8, -2)
        selected = bool(index.data(PaletteRoles.IS_CURRENT))
        if selected:
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(_SELECTED_BG)
            painter.drawRoundedRect(row_rect, 10, 10)
        elif option.state & QStyle.StateFlag.State_MouseOver:
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(_HOVER_BG)
            painter.drawRoundedRect(row_rect, 10, 10)

        tile = QRect(row_rect.left() + 10, row_rect.top() + 8, 40, 40)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(row.accent_bg if selected else "#F3F4F6"))
        painter.drawRoundedRect(tile, 8, 8)
        painter.setPen(QColor(row.accent if selected else COLORS["text_muted"]))
        painter.setFont(QFont(family, 15))
        painter.drawText(tile, Qt.AlignmentFlag.AlignCenter, row.glyph)

        right = row_rect.right() - 12
        if row.shortcut:
            shortcut_rect = QRect(right - 24, row_rect.top() + 18, 24, 20)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor("#F3F4F6"))
            painter.drawRoundedRect(shortcut_rect, 4, 4)
            painter.setPen(QColor(COLORS["text_muted"]))
            painter.setFont(QFont(family, 9))
            painter.drawText(shortcut_rect, Qt.AlignmentFlag.AlignCenter, row.shortcut)
            right = shortcut_rect.left() - 8

        text_left = tile.right() + 12
        subtitle_right = right
        if row.badge is not None:
            label, background, foreground = row.badge
            painter.setFont(QFont(family, 9, QFont.Weight.DemiBold))
            badge_width = painter.fontMetrics().horizontalAdvance(label) + 16
            badge_rect = QRect(right - badge_width, row_rect.top() + 32, badge_width, 18)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(background))
            painter.drawRoundedRect(badge_rect, 9, 9)
            painter.setPen(QColor(foreground))
            painter.drawText(badge_rect, Qt.AlignmentFlag.AlignCenter, label)
            subtitle_right = badge_rect.left() - 8

        _draw_line(
            painter,
            QRect(text_left, row_rect.top() + 9, right - text_left, 20),
            row.title,
            row.title_html,
            QFont(family, 12, QFont.Weight.Medium),
            COLORS["text"],
        )
        _draw_line(
            painter,
            QRect(text_left, row_rect.top() + 31, subtitle_right - text_left, 18),
            row.subtitle,
            row.subtitle_html,
            QFont(family, 10),
            COLORS["text_muted"],
        )
        painter.restore()

