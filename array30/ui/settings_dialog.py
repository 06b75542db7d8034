"""SettingsDialog: display settings for the window front-end."""

from __future__ import annotations

from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QCheckBox, QDoubleSpinBox, QComboBox,
    QPushButton, QDialogButtonBox,
)

from array30.config import DEFAULT_CONFIG, ROOT_TABLE_POSITIONS

POSITION_LABELS = {
    'up': '上方',
    'down': '下方',
    'left': '左側',
    'right': '右側',
}


class SettingsDialog(QDialog):
    """Edits font and root-table settings and saves them via ConfigManager.

    *on_applied* is called after a successful save so the window can
    restyle itself.
    """

    def __init__(self, config=None, on_applied=None, parent=None):
        super().__init__(parent)
        self.config = config
        self.on_applied = on_applied

        self.setWindowTitle("設定")
        self.setMinimumWidth(360)

        self._build_ui()
        self._load_values()

    # -- UI construction ---------------------------------------------------

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self._font_size_spin = QDoubleSpinBox()
        self._font_size_spin.setRange(10.0, 72.0)
        self._font_size_spin.setSingleStep(1.0)
        self._font_size_spin.setDecimals(0)
        form.addRow("字型大小：", self._font_size_spin)

        self._show_table_cb = QCheckBox()
        form.addRow("顯示字根表：", self._show_table_cb)

        self._table_scale_spin = QDoubleSpinBox()
        self._table_scale_spin.setRange(0.1, 2.0)
        self._table_scale_spin.setSingleStep(0.1)
        self._table_scale_spin.setDecimals(1)
        form.addRow("字根表縮放：", self._table_scale_spin)

        self._position_combo = QComboBox()
        for pos in ROOT_TABLE_POSITIONS:
            self._position_combo.addItem(POSITION_LABELS[pos], pos)
        form.addRow("字根表位置：", self._position_combo)

        self._sync_clipboard_cb = QCheckBox()
        form.addRow("上屏時複製到剪貼簿：", self._sync_clipboard_cb)

        layout.addLayout(form)

        btn_layout = QHBoxLayout()
        reset_btn = QPushButton("恢復預設")
        reset_btn.clicked.connect(self._reset_defaults)
        btn_layout.addWidget(reset_btn)
        btn_layout.addStretch()

        button_box = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        btn_layout.addWidget(button_box)

        layout.addLayout(btn_layout)

    # -- value management --------------------------------------------------

    def _set_widgets(self, values: dict) -> None:
        self._font_size_spin.setValue(float(values['font_size']))
        self._show_table_cb.setChecked(bool(values['show_root_table']))
        self._table_scale_spin.setValue(float(values['root_table_scale']))
        self._position_combo.setCurrentIndex(ROOT_TABLE_POSITIONS.index(values['root_table_position']))
        self._sync_clipboard_cb.setChecked(bool(values['sync_clipboard']))

    def _load_values(self) -> None:
        if self.config is None:
            return
        self._set_widgets({key: self.config.get(key, DEFAULT_CONFIG[key]) for key in DEFAULT_CONFIG})

    def _apply_values(self) -> bool:
        if self.config is None:
            return False
        self.config.update({
            'font_size': self._font_size_spin.value(),
            'show_root_table': self._show_table_cb.isChecked(),
            'root_table_scale': self._table_scale_spin.value(),
            'root_table_position': ROOT_TABLE_POSITIONS[self._position_combo.currentIndex()],
            'sync_clipboard': self._sync_clipboard_cb.isChecked(),
        })
        return self.config.save()

    def _reset_defaults(self) -> None:
        self._set_widgets(DEFAULT_CONFIG)

    # -- QDialog overrides -------------------------------------------------

    def accept(self) -> None:
        if self._apply_values() and self.on_applied is not None:
            self.on_applied()
        super().accept()
