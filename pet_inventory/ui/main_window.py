"""主界面：概览、在库/已售/搜索列表，入口按钮（入库、扫码、账号管理、登出）。"""
from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from pet_inventory.advice.client import AdviceClient
from pet_inventory.advice.worker import KeywordWorker
from pet_inventory.auth.access import AccessController
from pet_inventory.auth.models import Account
from pet_inventory.auth.session import SessionManager
from pet_inventory.config import WINDOW_HEIGHT, WINDOW_WIDTH
from pet_inventory.errors import NotAuthenticatedError
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.inventory.models import Pet, PetStatus
from pet_inventory.ui.intake_dialog import IntakeDialog
from pet_inventory.ui.pet_detail import STATUS_LABELS, PetDetailDialog
from pet_inventory.ui.scan_dialog import ScanDialog
from pet_inventory.ui.users_dialog import UserManagementDialog

COLUMNS = ["产品编号", "物种", "基因/品种", "体重(kg)", "投喂日期", "柜号", "状态", "条形码"]


class MainWindow(QWidget):
    """登录后的主窗口；会话失效或点击登出时发出 logoutRequested。"""
    logoutRequested = pyqtSignal()
    closed = pyqtSignal()

    def __init__(
        self,
        sessions: SessionManager,
        access: AccessController,
        inventory: InventoryManager,
        advice_client: AdviceClient,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._sessions = sessions
        self._access = access
        self._inventory = inventory
        self._advice_client = advice_client
        self._account: Optional[Account] = sessions.current_session()
        self._logged_out = False
        self._suggest_worker: Optional[KeywordWorker] = None
        self.setup_ui()
        self._refresh()

    def setup_ui(self) -> None:
        self.setWindowTitle("鸳鸯管家 - 宠物库存")
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self._hello = QLabel()
        self._hello.setStyleSheet("font-size: 18px; font-weight: bold;")
        header.addWidget(self._hello)
        header.addStretch(1)
        btn_logout = QPushButton("登出")
        btn_logout.clicked.connect(self._do_logout)
        header.addWidget(btn_logout)
        layout.addLayout(header)

        self._stats = QLabel()
        self._stats.setStyleSheet("color: #59A8B6;")
        layout.addWidget(self._stats)

        actions = QHBoxLayout()
        btn_intake = QPushButton("宠物入库")
        btn_intake.clicked.connect(self._on_intake)
        actions.addWidget(btn_intake)
        btn_scan = QPushButton("扫码查询")
        btn_scan.clicked.connect(self._on_scan)
        actions.addWidget(btn_scan)
        self._btn_users = QPushButton("账号管理")
        self._btn_users.clicked.connect(self._on_users)
        actions.addWidget(self._btn_users)
        layout.addLayout(actions)

        self._tabs = QTabWidget()
        self._in_stock_table = self._make_table()
        self._sold_table = self._make_table()
        search_page = QWidget()
        search_layout = QVBoxLayout(search_page)
        self._search = QLineEdit()
        self._search.setPlaceholderText("搜索物种、基因、编号或条码")
        self._search.textChanged.connect(self._refresh_search)
        search_layout.addWidget(self._search)
        self._suggestions = QLabel()
        self._suggestions.setStyleSheet("color: gray;")
        search_layout.addWidget(self._suggestions)
        self._btn_suggest = QPushButton("AI 联想热门物种/基因")
        self._btn_suggest.clicked.connect(self._on_suggest)
        search_layout.addWidget(self._btn_suggest)
        self._search_table = self._make_table()
        search_layout.addWidget(self._search_table)
        self._tabs.addTab(self._in_stock_table, "在库")
        self._tabs.addTab(self._sold_table, "已售")
        self._tabs.addTab(search_page, "搜索")
        layout.addWidget(self._tabs)

    def _make_table(self) -> QTableWidget:
        table = QTableWidget(0, len(COLUMNS))
        table.setHorizontalHeaderLabels(COLUMNS)
        table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        table.cellDoubleClicked.connect(lambda row, _col, t=table: self._open_row(t, row))
        return table

    def _fill_table(self, table: QTableWidget, pets: List[Pet]) -> None:
        table.setRowCount(len(pets))
        for row, pet in enumerate(pets):
            values = [
                pet.id,
                pet.species,
                pet.gene,
                f"{pet.weight:g}",
                pet.feeding_date.isoformat(),
                pet.cabinet_id,
                STATUS_LABELS.get(pet.status, pet.status),
                pet.barcode,
            ]
            for col, value in enumerate(values):
                item = QTableWidgetItem(value)
                if col == 0:
                    item.setData(Qt.ItemDataRole.UserRole, pet.id)
                table.setItem(row, col, item)

    def _ensure_session(self) -> bool:
        """每次操作前重新校验会话（账号可能已被屏蔽）。"""
        try:
            self._account = self._access.require_session()
        except NotAuthenticatedError as e:
            QMessageBox.warning(self, "会话失效", str(e))
            self._logged_out = True
            self.logoutRequested.emit()
            return False
        return True

    def _refresh(self) -> None:
        if not self._ensure_session():
            return
        self._hello.setText(f"HELLO, {self._account.username}")
        self._btn_users.setVisible(self._access.can_manage_accounts(self._account))
        counts = self._inventory.summary()
        due = len(self._inventory.list_feeding_due())
        self._stats.setText(
            f"在库 {counts[PetStatus.IN_STOCK.value]} · 已售 {counts[PetStatus.SOLD.value]} · "
            f"死亡 {counts[PetStatus.DECEASED.value]} · 今日待投喂 {due}"
        )
        self._fill_table(self._in_stock_table, self._inventory.list_in_stock())
        self._fill_table(self._sold_table, self._inventory.list_sold())
        self._refresh_search()

    def _refresh_search(self) -> None:
        self._fill_table(self._search_table, self._inventory.search(self._search.text()))

    def _open_row(self, table: QTableWidget, row: int) -> None:
        item = table.item(row, 0)
        if item is None:
            return
        pet = self._inventory.get(item.data(Qt.ItemDataRole.UserRole))
        if pet is not None:
            self._open_pet(pet)

    def _open_pet(self, pet: Pet) -> None:
        if not self._ensure_session():
            return
        dlg = PetDetailDialog(self._access, self._inventory, self._advice_client, pet, self)
        dlg.petChanged.connect(lambda _pet_id: self._refresh())
        dlg.exec()
        self._refresh()

    def _on_intake(self) -> None:
        if not self._ensure_session():
            return
        dlg = IntakeDialog(self._inventory, self)
        if dlg.exec() == IntakeDialog.DialogCode.Accepted:
            self._refresh()
            self._tabs.setCurrentIndex(0)

    def _on_scan(self) -> None:
        if not self._ensure_session():
            return
        dlg = ScanDialog(self._inventory, self)
        if dlg.exec() == ScanDialog.DialogCode.Accepted and dlg.pet():
            self._open_pet(dlg.pet())

    def _on_users(self) -> None:
        if not self._ensure_session():
            return
        UserManagementDialog(self._access, self).exec()
        self._refresh()

    def _on_suggest(self) -> None:
        if self._suggest_worker is not None and self._suggest_worker.isRunning():
            return
        self._btn_suggest.setEnabled(False)
        self._suggestions.setText("正在联想…")
        self._suggest_worker = KeywordWorker(self._advice_client, self._search.text())
        self._suggest_worker.finished_keywords.connect(self._on_keywords)
        self._suggest_worker.start()

    def _on_keywords(self, _query: str, names: list) -> None:
        self._btn_suggest.setEnabled(True)
        self._suggestions.setText("、".join(names) if names else "暂无联想")

    def _do_logout(self) -> None:
        self._sessions.logout()
        self._logged_out = True
        self.logoutRequested.emit()

    def logged_out(self) -> bool:
        return self._logged_out

    def closeEvent(self, event) -> None:
        if self._suggest_worker is not None and self._suggest_worker.isRunning():
            self._suggest_worker.finished_keywords.disconnect(self._on_keywords)
            self._suggest_worker.wait()
        self.closed.emit()
        super().closeEvent(event)
