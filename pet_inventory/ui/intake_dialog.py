"""宠物入库表单：物种、基因、体重、投喂日期、柜号。"""
from typing import Optional

from PyQt6.QtCore import QDate
from PyQt6.QtWidgets import (
    QDialog,
    QDateEdit,
    QDoubleSpinBox,
    QFormLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_inventory.errors import PetInventoryError
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.inventory.models import Pet


class IntakeDialog(QDialog):
    """填写并登记一只新宠物；物种与柜号必填。"""

    def __init__(self, inventory: InventoryManager, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._inventory = inventory
        self._pet: Optional[Pet] = None
        self.setup_ui()

    def setup_ui(self) -> None:
        self.setWindowTitle("宠物入库")
        self.setFixedSize(360, 280)
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self._species = QLineEdit()
        self._species.setPlaceholderText("例如：玉米蛇")
        form.addRow("物种*:", self._species)
        self._gene = QLineEdit()
        self._gene.setPlaceholderText("例如：白化")
        form.addRow("基因/品种:", self._gene)
        self._weight = QDoubleSpinBox()
        self._weight.setRange(0, 1000)
        self._weight.setDecimals(3)
        self._weight.setSuffix(" kg")
        form.addRow("体重:", self._weight)
        self._feeding_date = QDateEdit(QDate.currentDate())
        self._feeding_date.setCalendarPopup(True)
        self._feeding_date.setDisplayFormat("yyyy-MM-dd")
        form.addRow("投喂日期:", self._feeding_date)
        self._cabinet = QLineEdit()
        self._cabinet.setPlaceholderText("例如：A1")
        form.addRow("柜号*:", self._cabinet)
        layout.addLayout(form)

        btn_save = QPushButton("确认入库")
        btn_save.clicked.connect(self._do_intake)
        layout.addWidget(btn_save)
        btn_cancel = QPushButton("取消")
        btn_cancel.clicked.connect(self.reject)
        layout.addWidget(btn_cancel)

    def _do_intake(self) -> None:
        try:
            self._pet = self._inventory.intake(
                species=self._species.text(),
                gene=self._gene.text(),
                weight=self._weight.value(),
                feeding_date=self._feeding_date.date().toPyDate(),
                cabinet_id=self._cabinet.text(),
            )
        except PetInventoryError as e:
            QMessageBox.warning(self, "提示", str(e))
            return
        self.accept()

    def pet(self) -> Optional[Pet]:
        return self._pet
