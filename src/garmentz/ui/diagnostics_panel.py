# garmentZ diagnostics panel
# Rev 0.2.0

from __future__ import annotations
import logging
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QTextEdit, QPushButton, QLabel

from garmentz.utils.logging_setup import current_log_file

log = logging.getLogger(__name__)

TAIL_BYTES = 200_000


class DiagnosticsPanel(QWidget):
    """Log viewer with manual refresh; shows the tail of the rotating log file."""
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("DiagnosticsPanel")

        layout = QVBoxLayout(self)
        self.path_label = QLabel(self)
        self.text = QTextEdit(self)
        self.text.setReadOnly(True)
        self.text.setLineWrapMode(QTextEdit.NoWrap)

        self.btn_refresh = QPushButton("Tail Log", self)
        self.btn_refresh.clicked.connect(self.refresh)

        bar = QHBoxLayout()
        bar.addWidget(self.path_label, 1)
        bar.addWidget(self.btn_refresh)
        layout.addLayout(bar)
        layout.addWidget(self.text)

        self.refresh()

    def refresh(self):
        path = current_log_file()
        if path is None:
            self.path_label.setText("File logging is not configured.")
            self.text.clear()
            return
        self.path_label.setText(str(path))
        try:
            with open(path, "rb") as f:
                f.seek(0, 2)
                size = f.tell()
                f.seek(max(0, size - TAIL_BYTES))
                data = f.read().decode("utf-8", errors="ignore")
        except OSError as e:
            log.warning("Cannot read log file %s: %s", path, e)
            self.text.setPlainText(f"<error reading log>\n{e}")
            return
        self.text.setPlainText(data)
        self.text.verticalScrollBar().setValue(self.text.verticalScrollBar().maximum())
