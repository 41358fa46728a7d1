"""扫码查询：摄像头识别条码/编号，也可手动输入。"""
from typing import Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QDialog,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_inventory.config import SCAN_POLL_INTERVAL_MS
from pet_inventory.errors import ScannerUnavailableError
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.inventory.models import Pet
from pet_inventory.scanner.decoder import ScanDecoder, resolve_scan


class ScanDialog(QDialog):
    """识别到条码后查找宠物；找到则关闭并通过 pet() 返回。"""

    def __init__(self, inventory: InventoryManager, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._inventory = inventory
        self._pet: Optional[Pet] = None
        self._decoder = ScanDecoder(on_decode=self._on_decode)
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._decoder.poll)
        self.setup_ui()
        self._start_camera()

    def setup_ui(self) -> None:
        self.setWindowTitle("扫码")
        self.setFixedSize(340, 200)
        layout = QVBoxLayout(self)

        self._status = QLabel("正在启动摄像头…")
        self._status.setWordWrap(True)
        layout.addWidget(self._status)

        self._code = QLineEdit()
        self._code.setPlaceholderText("或手动输入条形码 / 产品编号")
        self._code.returnPressed.connect(self._on_manual)
        layout.addWidget(self._code)
        btn_lookup = QPushButton("查询")
        btn_lookup.clicked.connect(self._on_manual)
        layout.addWidget(btn_lookup)
        btn_close = QPushButton("关闭")
        btn_close.clicked.connect(self.reject)
        layout.addWidget(btn_close)

    def _start_camera(self) -> None:
        try:
            self._decoder.open()
        except ScannerUnavailableError as e:
            self._status.setText(f"{e} 可手动输入编号查询。")
            return
        self._status.setText("请将条形码对准摄像头")
        self._timer.start(SCAN_POLL_INTERVAL_MS)

    def _on_decode(self, code: str) -> None:
        self._timer.stop()
        if not self._lookup(code):
            self._start_camera()

    def _on_manual(self) -> None:
        code = self._code.text().strip()
        if code:
            self._lookup(code)

    def _lookup(self, code: str) -> bool:
        pet = resolve_scan(self._inventory, code)
        if pet is None:
            QMessageBox.information(self, "未找到", f"未找到匹配的宠物: {code}")
            return False
        self._pet = pet
        self.accept()
        return True

    def done(self, result: int) -> None:
        self._timer.stop()
        self._decoder.close()
        super().done(result)

    def pet(self) -> Optional[Pet]:
        return self._pet
