"""注册对话框：账号、密码、确认密码。"""
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QLineEdit,
    QPushButton,
    QFormLayout,
    QMessageBox,
    QWidget,
)

from pet_inventory.auth.models import Account
from pet_inventory.auth.session import SessionManager
from pet_inventory.errors import PetInventoryError


class RegisterDialog(QDialog):
    """注册普通员工账号；成功后需回到登录页登录。"""

    def __init__(self, sessions: SessionManager, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._sessions = sessions
        self._user: Optional[Account] = None
        self.setup_ui()

    def setup_ui(self) -> None:
        self.setWindowTitle("注册")
        self.setFixedSize(320, 220)
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self._username = QLineEdit()
        self._username.setPlaceholderText("请输入账号（用于登录）")
        form.addRow("账号:", self._username)
        self._password = QLineEdit()
        self._password.setEchoMode(QLineEdit.EchoMode.Password)
        self._password.setPlaceholderText("请输入密码")
        form.addRow("密码:", self._password)
        self._password2 = QLineEdit()
        self._password2.setEchoMode(QLineEdit.EchoMode.Password)
        self._password2.setPlaceholderText("再次输入密码")
        form.addRow("确认密码:", self._password2)
        layout.addLayout(form)

        btn_register = QPushButton("注册")
        btn_register.clicked.connect(self._do_register)
        layout.addWidget(btn_register)
        btn_back = QPushButton("已有账号? 返回登录")
        btn_back.clicked.connect(self.reject)
        layout.addWidget(btn_back)

    def _do_register(self) -> None:
        password = self._password.text()
        if password != self._password2.text():
            QMessageBox.warning(self, "提示", "两次密码不一致")
            return
        try:
            self._user = self._sessions.register(self._username.text(), password)
        except PetInventoryError as e:
            QMessageBox.warning(self, "注册失败", str(e))
            return
        QMessageBox.information(self, "注册成功", "注册成功，请登录")
        self.accept()

    def user(self) -> Optional[Account]:
        return self._user
