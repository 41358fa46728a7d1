"""登录、注册、主界面与各操作对话框。"""
from pet_inventory.ui.login import LoginDialog
from pet_inventory.ui.register import RegisterDialog
from pet_inventory.ui.main_window import MainWindow

__all__ = [
    "LoginDialog",
    "RegisterDialog",
    "MainWindow",
]
