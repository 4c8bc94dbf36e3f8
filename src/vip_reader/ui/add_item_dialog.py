"""Add item dialog - Collects a new catalog entry and its files."""

from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QWidget,
)

from vip_reader.core import ItemDraft


class AddItemDialog(QDialog):
    """Form for publishing a new title (authors only)."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Add Item")

        layout = QFormLayout(self)
        self.title_edit = QLineEdit()
        self.author_edit = QLineEdit()
        self.description_edit = QPlainTextEdit()
        self.premium_check = QCheckBox("VIP only")
        self.pages_spin = QSpinBox()
        self.pages_spin.setRange(0, 100000)
        self.pages_spin.setSpecialValueText("Unknown")

        self.cover_path_edit = QLineEdit()
        self.content_path_edit = QLineEdit()

        layout.addRow("Title", self.title_edit)
        layout.addRow("Author", self.author_edit)
        layout.addRow("Description", self.description_edit)
        layout.addRow("Pages", self.pages_spin)
        layout.addRow(self.premium_check)
        layout.addRow("Cover image", self._file_row(self.cover_path_edit, "Images (*.png *.jpg *.jpeg)"))
        layout.addRow("PDF", self._file_row(self.content_path_edit, "PDF files (*.pdf)"))

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    def _file_row(self, path_edit: QLineEdit, file_filter: str) -> QWidget:
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_layout.addWidget(path_edit)
        browse = QPushButton("Browse...")
        browse.clicked.connect(lambda: self._browse(path_edit, file_filter))
        row_layout.addWidget(browse)
        return row

    def _browse(self, path_edit: QLineEdit, file_filter: str):
        path, _ = QFileDialog.getOpenFileName(self, "Choose File", "", file_filter)
        if path:
            path_edit.setText(path)

    def draft(self) -> Optional[ItemDraft]:
        """Build the draft, or None if title or author is missing.

        Raises:
            OSError: if a chosen file cannot be read.
        """
        title = self.title_edit.text().strip()
        author = self.author_edit.text().strip()
        if not title or not author:
            return None

        return ItemDraft(
            title=title,
            author=author,
            description=self.description_edit.toPlainText().strip(),
            is_premium=self.premium_check.isChecked(),
            total_pages=self.pages_spin.value() or None,
            cover=self._read(self.cover_path_edit),
            content=self._read(self.content_path_edit),
        )

    @staticmethod
    def _read(path_edit: QLineEdit) -> Optional[bytes]:
        raw = path_edit.text().strip()
        return Path(raw).read_bytes() if raw else None
