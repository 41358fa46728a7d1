"""宠物详情：基本信息、AI 喂养建议、出售/死亡登记与删除。"""
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_inventory.advice.client import AdviceClient
from pet_inventory.advice.worker import AdviceWorker
from pet_inventory.auth.access import AccessController
from pet_inventory.errors import PetInventoryError
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.inventory.models import Pet, PetStatus

STATUS_LABELS = {
    PetStatus.IN_STOCK.value: "在库",
    PetStatus.SOLD.value: "已售",
    PetStatus.DECEASED.value: "死亡",
}


class PetDetailDialog(QDialog):
    """单只宠物详情；修改或删除后发出 petChanged。"""
    petChanged = pyqtSignal(str)  # pet_id

    def __init__(
        self,
        access: AccessController,
        inventory: InventoryManager,
        advice_client: AdviceClient,
        pet: Pet,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._access = access
        self._inventory = inventory
        self._advice_client = advice_client
        self._pet = pet
        self._worker: Optional[AdviceWorker] = None
        self.setup_ui()
        self._request_advice()

    def setup_ui(self) -> None:
        self.setWindowTitle(f"宠物详情 - {self._pet.id}")
        self.setMinimumSize(380, 420)
        layout = QVBoxLayout(self)

        title = QLabel(self._pet.species)
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(title)

        form = QFormLayout()
        form.addRow("产品编号:", QLabel(self._pet.id))
        form.addRow("条形码:", QLabel(self._pet.barcode))
        form.addRow("基因/品种:", QLabel(self._pet.gene or "-"))
        form.addRow("体重:", QLabel(f"{self._pet.weight} kg"))
        form.addRow("投喂日期:", QLabel(self._pet.feeding_date.isoformat()))
        form.addRow("柜号:", QLabel(self._pet.cabinet_id))
        self._status_label = QLabel()
        form.addRow("状态:", self._status_label)
        layout.addLayout(form)

        layout.addWidget(QLabel("AI 喂养建议:"))
        self._advice = QLabel("正在获取喂养建议…")
        self._advice.setWordWrap(True)
        self._advice.setStyleSheet("color: #6D28D9; padding: 6px;")
        layout.addWidget(self._advice)

        row = QHBoxLayout()
        self._btn_sold = QPushButton("标记已售")
        self._btn_sold.clicked.connect(lambda: self._do_transition(PetStatus.SOLD))
        row.addWidget(self._btn_sold)
        self._btn_deceased = QPushButton("标记死亡")
        self._btn_deceased.clicked.connect(lambda: self._do_transition(PetStatus.DECEASED))
        row.addWidget(self._btn_deceased)
        layout.addLayout(row)

        btn_delete = QPushButton("删除记录")
        btn_delete.setStyleSheet("color: #b91c1c;")
        btn_delete.clicked.connect(self._do_delete)
        layout.addWidget(btn_delete)
        btn_close = QPushButton("关闭")
        btn_close.clicked.connect(self.accept)
        layout.addWidget(btn_close)

        self._refresh_status()

    def _refresh_status(self) -> None:
        self._status_label.setText(STATUS_LABELS.get(self._pet.status, self._pet.status))
        in_stock = self._pet.status == PetStatus.IN_STOCK
        self._btn_sold.setEnabled(in_stock)
        self._btn_deceased.setEnabled(in_stock)

    def _request_advice(self) -> None:
        self._worker = AdviceWorker(self._advice_client, self._pet)
        self._worker.finished_text.connect(self._on_advice)
        self._worker.start()

    def _on_advice(self, pet_id: str, text: str) -> None:
        if pet_id == self._pet.id:
            self._advice.setText(text)

    def _session_valid(self) -> bool:
        """修改前重新校验会话；失效则关闭详情，由主界面回到登录。"""
        try:
            self._access.require_session()
        except PetInventoryError as e:
            QMessageBox.warning(self, "会话失效", str(e))
            self.reject()
            return False
        return True

    def _do_transition(self, status: PetStatus) -> None:
        if not self._session_valid():
            return
        try:
            self._pet = self._inventory.transition(self._pet.id, status)
        except PetInventoryError as e:
            QMessageBox.warning(self, "无法变更状态", str(e))
            return
        self._refresh_status()
        self.petChanged.emit(self._pet.id)

    def _do_delete(self) -> None:
        answer = QMessageBox.question(self, "确认", "确认删除该宠物记录？删除后无法恢复。")
        if answer != QMessageBox.StandardButton.Yes:
            return
        if not self._session_valid():
            return
        self._inventory.remove(self._pet.id)
        self.petChanged.emit(self._pet.id)
        self.accept()

    def done(self, result: int) -> None:
        # 关闭前等后台请求结束，避免 QThread 被提前销毁
        if self._worker is not None and self._worker.isRunning():
            self._worker.finished_text.disconnect(self._on_advice)
            self._worker.wait()
        super().done(result)
