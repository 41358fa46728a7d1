"""库存管家入口：登录（或恢复上次会话）→ 主界面；登出后回到登录。"""
import logging
import sys

from PyQt6.QtCore import QEventLoop
from PyQt6.QtWidgets import QApplication

from pet_inventory import __version__
from pet_inventory.advice.client import AdviceClient
from pet_inventory.auth.access import AccessController
from pet_inventory.auth.session import SessionManager
from pet_inventory.config import ensure_dirs, setup_logging
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.store.record_store import RecordStore
from pet_inventory.ui.login import LoginDialog
from pet_inventory.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    ensure_dirs()
    app = QApplication(sys.argv)
    app.setApplicationName("鸳鸯管家")
    app.setApplicationVersion(__version__)

    with RecordStore() as store:
        sessions = SessionManager(store)
        access = AccessController(sessions, store)
        inventory = InventoryManager(store)
        advice_client = AdviceClient()
        if not advice_client.configured:
            logger.warning("未配置 GEMINI_API_KEY，喂养建议将显示占位文字")

        while True:
            # 1. 没有有效会话则登录；关闭登录框即退出
            if sessions.current_session() is None:
                login = LoginDialog(sessions)
                if login.exec() != login.DialogCode.Accepted:
                    break

            # 2. 主界面；登出或会话失效后回到登录
            window = MainWindow(sessions, access, inventory, advice_client)
            if window.logged_out():
                continue
            loop = QEventLoop()
            window.logoutRequested.connect(loop.quit)
            window.closed.connect(loop.quit)
            window.show()
            loop.exec()
            if not window.logged_out():
                break  # 直接关闭了主窗口
            window.close()

    sys.exit(0)


if __name__ == "__main__":
    main()
