"""记录存储（本地 JSON）：账号列表、宠物列表、当前会话指针。

每次修改都是「读出整个集合 → 内存中变换 → 整个集合写回」，写入是同步的，
返回即已落盘。单进程单写者；多个进程同时写同一目录时后写覆盖先写。
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from pet_inventory.auth.models import Account, AccountRole, AccountStatus
from pet_inventory.auth.passwords import hash_password, new_salt
from pet_inventory.clock import utc_now_iso
from pet_inventory.config import (
    SEED_ADMIN_ID,
    SEED_ADMIN_PASSWORD,
    SEED_ADMIN_USERNAME,
    STORE_DIR,
    ensure_dirs,
)
from pet_inventory.errors import StoreCorruptedError
from pet_inventory.inventory.models import Pet

logger = logging.getLogger(__name__)


class RecordStore:
    """三个独立保存的值：accounts.json、pets.json、session.json。"""
    _accounts_file = "accounts.json"
    _pets_file = "pets.json"
    _session_file = "session.json"

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else STORE_DIR
        if base_dir is None:
            ensure_dirs()
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._seed_admin()

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """写入都是同步落盘的，这里没有缓冲需要刷新。"""
        logger.debug("记录存储关闭: %s", self.base_dir)

    # 文件读写

    def _path(self, name: str) -> Path:
        return self.base_dir / name

    def _read_json(self, name: str, default: Any) -> Any:
        path = self._path(name)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StoreCorruptedError(path, str(e)) from e

    def _write_json(self, name: str, data: Any) -> None:
        """先写同目录临时文件再原子替换，写一半崩溃不会留下残缺集合。"""
        path = self._path(name)
        fd, tmp = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.base_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    # 首次启动

    def _seed_admin(self) -> None:
        if self.load_accounts():
            return
        salt = new_salt()
        admin = Account(
            id=SEED_ADMIN_ID,
            username=SEED_ADMIN_USERNAME,
            password_hash=hash_password(SEED_ADMIN_PASSWORD, salt),
            salt=salt,
            role=AccountRole.ADMIN,
            status=AccountStatus.ACTIVE,
            created_at=utc_now_iso(),
        )
        self.save_accounts([admin])
        logger.info("首次启动，已创建管理员账号 %s", SEED_ADMIN_USERNAME)

    # 账号

    def load_accounts(self) -> List[Account]:
        data = self._read_json(self._accounts_file, [])
        try:
            return [Account.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise StoreCorruptedError(self._path(self._accounts_file), str(e)) from e

    def save_accounts(self, accounts: List[Account]) -> None:
        self._write_json(self._accounts_file, [a.model_dump(mode="json") for a in accounts])

    # 宠物

    def load_pets(self) -> List[Pet]:
        data = self._read_json(self._pets_file, [])
        try:
            return [Pet.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise StoreCorruptedError(self._path(self._pets_file), str(e)) from e

    def save_pets(self, pets: List[Pet]) -> None:
        self._write_json(self._pets_file, [p.model_dump(mode="json") for p in pets])

    # 当前会话

    def load_active_session_account_id(self) -> Optional[str]:
        data = self._read_json(self._session_file, {})
        if not isinstance(data, dict):
            raise StoreCorruptedError(self._path(self._session_file), "期望 JSON 对象")
        return data.get("account_id")

    def save_active_session_account_id(self, account_id: Optional[str]) -> None:
        self._write_json(self._session_file, {"account_id": account_id})
