"""Demo application: a few text widgets driven by the on-screen keyboard."""

import logging
import sys

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QLineEdit,
    QMainWindow,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from vkeyboard.core.keyboard import VirtualKeyboard
from vkeyboard.core.settings import KeyboardSettings, load_settings
from vkeyboard.ui.keyboard_widget import VirtualKeyboardWidget

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class DemoWindow(QMainWindow):
    """Line edit, label and text edit all subscribed to one keyboard."""

    def __init__(self, settings: KeyboardSettings) -> None:
        super().__init__()
        self.setWindowTitle("Virtual keyboard")

        self.line_edit = QLineEdit()
        self.line_edit.setObjectName("lineEdit")
        self.line_edit.setPlaceholderText("Line edit")

        self.label = QLabel()
        self.label.setObjectName("label")
        self.label.setMinimumHeight(24)

        self.text_edit = QTextEdit()
        self.text_edit.setObjectName("textEdit")

        self.status = QLabel()
        self.status.setAlignment(Qt.AlignRight)

        self.keyboard_widget = VirtualKeyboardWidget(VirtualKeyboard.from_settings(settings))
        for widget in (self.line_edit, self.label, self.text_edit):
            self.keyboard_widget.subscribe(widget)

        self.keyboard_widget.text_added.connect(lambda text: self.status.setText(f"Typed {text!r}"))
        self.keyboard_widget.text_undone.connect(lambda text: self.status.setText(f"Undid {text!r}"))
        self.keyboard_widget.layout_changed.connect(self._on_layout_changed)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self.line_edit)
        layout.addWidget(self.label)
        layout.addWidget(self.text_edit, 1)
        layout.addWidget(self.status)
        layout.addWidget(self.keyboard_widget, 0, Qt.AlignHCenter)
        self.setCentralWidget(central)

    def _on_layout_changed(self) -> None:
        language = self.keyboard_widget.keyboard.current_language
        logger.info("Keyboard language: %s", language.value)
        self.status.setText(language.indicator)


def run() -> None:
    """Load settings and show the demo window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("vkeyboard")

    settings = load_settings()
    window = DemoWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
