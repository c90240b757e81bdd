"""PySide6 application bootstrap: console window, palette wiring, run_app()."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QCloseEvent, QKeySequence, QResizeEvent, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from casefind.services.container import ServiceContainer
from casefind.services.interaction import KeyPress
from casefind.services.tasks import cancel_all_tasks
from casefind.ui.async_bridge import async_slot, create_event_loop
from casefind.ui.palette import CommandPalette
from casefind.ui.theme import COLORS, build_stylesheet

if TYPE_CHECKING:
    from casefind.config import Config

logger = logging.getLogger(__name__)


class PageRouter:
    """Records navigation requests and shows the current page."""

    def __init__(self, page_label: QLabel, history: QListWidget, status_bar: QStatusBar) -> None:
        self._page_label = page_label
        self._history = history
        self._status_bar = status_bar
        self._current = "/"

    @property
    def current(self) -> str:
        return self._current

    def push(self, path: str) -> None:
        logger.info("Navigating to %s", path)
        self._current = path
        self._page_label.setText(path)
        self._history.insertItem(0, path)
        self._status_bar.showMessage(f"Opened {path}", 2500)


class CaseConsoleWindow(QMainWindow):
    """Console shell hosting the search palette overlay."""

    def __init__(self, config: Config, services: ServiceContainer) -> None:
        super().__init__()
        self._config = config
        self._services: ServiceContainer | None = services
        self._shutdown_in_progress = False

        self.setWindowTitle("Case Console")
        self.setMinimumSize(960, 640)

        # ── Central widget ──
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(12)

        header = QHBoxLayout()
        title = QLabel("Case Console")
        title.setStyleSheet("font-size: 20px; font-weight: 600;")
        header.addWidget(title)
        header.addStretch()
        self._search_button = QPushButton("Search...   Ctrl+K")
        self._search_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self._search_button.setStyleSheet(
            f"QPushButton {{ border: 1px solid {COLORS['border']}; border-radius: 8px;"
            f" padding: 6px 14px; color: {COLORS['text_muted']}; }}"
        )
        header.addWidget(self._search_button)
        layout.addLayout(header)

        self._page_label = QLabel("/")
        self._page_label.setStyleSheet("font-size: 15px; font-family: monospace;")
        layout.addWidget(self._page_label)

        history_title = QLabel("Navigation history")
        history_title.setStyleSheet(f"color: {COLORS['text_muted']};")
        layout.addWidget(history_title)
        self._history = QListWidget()
        layout.addWidget(self._history, stretch=1)

        # ── Status bar ──
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_label = QLabel(f"Role: {config.role}  Backend: {config.base_url}")
        self._status_bar.addPermanentWidget(self._status_label)

        # ── Palette ──
        self._router = PageRouter(self._page_label, self._history, self._status_bar)
        self._machine = services.build_state_machine(self._router)
        self._palette = CommandPalette(self._machine, self)
        self._search_button.clicked.connect(self._machine.open)

        # ── Keyboard shortcuts ──
        self._setup_shortcuts()

        # ── Restore geometry ──
        self._restore_state()

    def _setup_shortcuts(self) -> None:
        """Ctrl+K (Cmd+K on macOS) opens the palette from anywhere in the window."""
        shortcut = QShortcut(QKeySequence("Ctrl+K"), self)
        shortcut.setContext(Qt.ShortcutContext.WindowShortcut)
        shortcut.activated.connect(lambda: self._machine.handle_key(KeyPress("k", ctrl=True)))

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._palette.isVisible():
            self._palette.setGeometry(self.rect())

    def _restore_state(self) -> None:
        """Restore window geometry from QSettings."""
        settings = QSettings("CaseFind", "CaseConsole")
        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)  # type: ignore[arg-type]

    def closeEvent(self, event: QCloseEvent) -> None:
        """Save geometry, then release services before quitting."""
        settings = QSettings("CaseFind", "CaseConsole")
        settings.setValue("geometry", self.saveGeometry())
        settings.sync()

        if self._shutdown_in_progress or self._services is None:
            event.accept()
            return

        self._shutdown_in_progress = True
        event.ignore()
        self._status_bar.showMessage("Shutting down...")
        self._shutdown_and_quit()

    @async_slot
    async def _shutdown_and_quit(self) -> None:
        """Best-effort cleanup before quitting the Qt app."""
        try:
            if self._services is not None:
                await self._services.close()
                self._services = None
            cancel_all_tasks()
        except Exception:
            logger.exception("Error while shutting down services")
        finally:
            app = QApplication.instance()
            if app is not None:
                app.quit()


def run_app(config: Config) -> None:
    """Entry point: create QApplication, event loop, main window, and run."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    app.setApplicationName("Case Console")
    app.setOrganizationName("CaseFind")
    app.setStyleSheet(build_stylesheet())

    loop = create_event_loop(app)

    logger.info("Starting casefind for role %s against %s", config.role, config.base_url)
    services = ServiceContainer.create(config)
    window = CaseConsoleWindow(config, services)
    window.show()

    with loop:
        loop.run_forever()
