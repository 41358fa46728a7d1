"""库存管家全局配置与路径。"""
import logging
import os
import sys
from pathlib import Path

# 项目根目录（pet_inventory 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：账号、宠物、当前会话
DATA_DIR = Path(os.environ.get("PET_INVENTORY_DATA_DIR", "") or ROOT_DIR / "data")
STORE_DIR = DATA_DIR / "store"

# 首次启动时写入的管理员账号
SEED_ADMIN_ID = "admin-1"
SEED_ADMIN_USERNAME = "admin"
SEED_ADMIN_PASSWORD = "123"

# 密码哈希（PBKDF2-SHA256）
PASSWORD_HASH_ITERATIONS = 120_000

# 宠物编号 PET-1000 ~ PET-9999
PET_ID_MIN = 1000
PET_ID_MAX = 9999
PET_ID_RANDOM_ATTEMPTS = 64

# 喂养建议（Gemini generateContent）
GEMINI_API_KEY = (os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or "").strip()
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-3-flash-preview")
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
ADVICE_TIMEOUT_SECONDS = 30

# 扫码摄像头
CAMERA_INDEX = 0
SCAN_POLL_INTERVAL_MS = 100

# 主窗口
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 640

LOG_LEVEL = os.environ.get("PET_INVENTORY_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "[宠物库存] %(levelname)s %(name)s: %(message)s"
LOG_HANDLER_NAME = "pet_inventory.stderr"


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, STORE_DIR):
        d.mkdir(parents=True, exist_ok=True)


def setup_logging(level: str = LOG_LEVEL) -> None:
    """日志输出到 stderr，带统一前缀；重复调用不会叠加 handler。"""
    root = logging.getLogger("pet_inventory")
    root.setLevel(getattr(logging, level, logging.INFO))
    if any(h.get_name() == LOG_HANDLER_NAME for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.set_name(LOG_HANDLER_NAME)
    root.addHandler(handler)
