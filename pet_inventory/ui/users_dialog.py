"""账号管理（仅管理员）：查看员工账号，屏蔽/解封。"""
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_inventory.auth.access import AccessController
from pet_inventory.auth.models import Account, AccountRole
from pet_inventory.errors import PetInventoryError


class UserManagementDialog(QDialog):
    """每个账号一行；管理员账号不显示屏蔽按钮。"""

    def __init__(self, access: AccessController, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._access = access
        self.setup_ui()

    def setup_ui(self) -> None:
        self.setWindowTitle("账号管理")
        self.setMinimumSize(380, 300)
        self._layout = QVBoxLayout(self)
        self._rows = QVBoxLayout()
        self._layout.addLayout(self._rows)
        self._layout.addStretch(1)
        btn_close = QPushButton("关闭")
        btn_close.clicked.connect(self.accept)
        self._layout.addWidget(btn_close)
        self._refresh()

    def _refresh(self) -> None:
        while self._rows.count():
            item = self._rows.takeAt(0)
            if item.layout():
                while item.layout().count():
                    child = item.layout().takeAt(0)
                    if child.widget():
                        child.widget().deleteLater()
            elif item.widget():
                item.widget().deleteLater()
        try:
            accounts = self._access.list_accounts()
        except PetInventoryError as e:
            QMessageBox.warning(self, "无权访问", str(e))
            return
        for account in accounts:
            self._rows.addLayout(self._make_row(account))

    def _make_row(self, account: Account) -> QHBoxLayout:
        row = QHBoxLayout()
        role = "管理员" if account.role == AccountRole.ADMIN else "员工"
        state = "已屏蔽" if account.is_blocked else "正常"
        row.addWidget(QLabel(f"{account.username}（{role}）"))
        row.addWidget(QLabel(state))
        if self._access.can_toggle(account):
            btn = QPushButton("解封" if account.is_blocked else "屏蔽")
            btn.clicked.connect(lambda _=False, account_id=account.id: self._toggle(account_id))
            row.addWidget(btn)
        return row

    def _toggle(self, account_id: str) -> None:
        try:
            self._access.toggle_account_status(account_id)
        except PetInventoryError as e:
            QMessageBox.warning(self, "操作失败", str(e))
            return
        self._refresh()
