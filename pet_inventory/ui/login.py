"""登录对话框：账号、密码；可跳转注册。"""
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QFormLayout,
    QMessageBox,
    QWidget,
)

from pet_inventory.auth.models import Account
from pet_inventory.auth.session import SessionManager
from pet_inventory.errors import PetInventoryError
from pet_inventory.ui.register import RegisterDialog


class LoginDialog(QDialog):
    """登录：验证通过后会话已持久化，user() 返回当前账号。"""

    def __init__(self, sessions: SessionManager, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._sessions = sessions
        self._user: Optional[Account] = None
        self.setup_ui()

    def setup_ui(self) -> None:
        self.setWindowTitle("鸳鸯管家 - 登录")
        self.setFixedSize(340, 240)
        layout = QVBoxLayout(self)

        title = QLabel("INK YARD · 鸳鸯管家")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        form = QFormLayout()
        self._username = QLineEdit()
        self._username.setPlaceholderText("请输入账号")
        form.addRow("账号:", self._username)
        self._password = QLineEdit()
        self._password.setEchoMode(QLineEdit.EchoMode.Password)
        self._password.setPlaceholderText("请输入密码")
        self._password.returnPressed.connect(self._do_login)
        form.addRow("密码:", self._password)
        layout.addLayout(form)

        btn_login = QPushButton("登录")
        btn_login.clicked.connect(self._do_login)
        layout.addWidget(btn_login)
        btn_register = QPushButton("没有账号? 立即注册")
        btn_register.clicked.connect(self._on_register)
        layout.addWidget(btn_register)
        btn_quit = QPushButton("退出")
        btn_quit.clicked.connect(self.reject)
        layout.addWidget(btn_quit)

    def _do_login(self) -> None:
        username = self._username.text().strip()
        password = self._password.text()
        if not username or not password:
            QMessageBox.warning(self, "提示", "请输入账号和密码")
            return
        try:
            self._user = self._sessions.authenticate(username, password)
        except PetInventoryError as e:
            QMessageBox.warning(self, "登录失败", str(e))
            return
        self.accept()

    def _on_register(self) -> None:
        dlg = RegisterDialog(self._sessions, self)
        if dlg.exec() == QDialog.DialogCode.Accepted and dlg.user():
            # 注册不会自动登录，带回账号方便直接输入密码
            self._username.setText(dlg.user().username)
            self._password.clear()
            self._password.setFocus()

    def user(self) -> Optional[Account]:
        return self._user
