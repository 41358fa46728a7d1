"""会话管理：登录、注册、登出、当前账号。

当前账号只以 ID 形式持久化，每次 current_session() 都回到账号集合中重新解析，
账号被屏蔽后已打开的会话在下一次取用时即失效。
"""
import logging
import secrets
from typing import TYPE_CHECKING, List, Optional

from pet_inventory.auth.models import Account, AccountRole, AccountStatus
from pet_inventory.auth.passwords import hash_password, new_salt, verify_password
from pet_inventory.clock import utc_now_iso
from pet_inventory.errors import (
    AccountBlockedError,
    InvalidCredentialsError,
    MissingRequiredFieldError,
    UsernameTakenError,
)

if TYPE_CHECKING:
    from pet_inventory.store.record_store import RecordStore

logger = logging.getLogger(__name__)


def _new_account_id(existing: List[Account]) -> str:
    taken = {a.id for a in existing}
    while True:
        account_id = f"u-{secrets.token_hex(8)}"
        if account_id not in taken:
            return account_id


class SessionManager:
    """按用户名精确匹配（区分大小写）验证账号，维护当前会话指针。"""

    def __init__(self, store: "RecordStore"):
        self._store = store

    def authenticate(self, username: str, secret: str) -> Account:
        """登录：成功后持久化当前账号并返回。"""
        username = (username or "").strip()
        account = self.find_by_username(username)
        if account is None or not verify_password(secret or "", account.salt, account.password_hash):
            logger.warning("登录失败: %s", username)
            raise InvalidCredentialsError()
        if account.is_blocked:
            logger.warning("已屏蔽账号尝试登录: %s", username)
            raise AccountBlockedError()
        self._store.save_active_session_account_id(account.id)
        logger.info("登录成功: %s", username)
        return account

    def register(self, username: str, secret: str) -> Account:
        """注册普通员工账号；不会自动登录，需调用方再次 authenticate。"""
        username = (username or "").strip()
        if not username:
            raise MissingRequiredFieldError("username", "请输入账号")
        if not secret:
            raise MissingRequiredFieldError("password", "请输入密码")
        accounts = self._store.load_accounts()
        if any(a.username == username for a in accounts):
            raise UsernameTakenError()
        salt = new_salt()
        account = Account(
            id=_new_account_id(accounts),
            username=username,
            password_hash=hash_password(secret, salt),
            salt=salt,
            role=AccountRole.USER,
            status=AccountStatus.ACTIVE,
            created_at=utc_now_iso(),
        )
        accounts.append(account)
        self._store.save_accounts(accounts)
        logger.info("注册成功: %s (%s)", username, account.id)
        return account

    def logout(self) -> None:
        """无条件清除当前会话，可重复调用。"""
        self._store.save_active_session_account_id(None)

    def current_session(self) -> Optional[Account]:
        """解析当前会话；指针为空、账号已删除或已屏蔽时返回 None。"""
        account_id = self._store.load_active_session_account_id()
        if not account_id:
            return None
        account = self.get_account(account_id)
        if account is None:
            return None
        if account.is_blocked:
            logger.info("账号 %s 已被屏蔽，会话失效", account.username)
            self.logout()
            return None
        return account

    def get_account(self, account_id: str) -> Optional[Account]:
        return next((a for a in self._store.load_accounts() if a.id == account_id), None)

    def find_by_username(self, username: str) -> Optional[Account]:
        return next((a for a in self._store.load_accounts() if a.username == username), None)

    def list_accounts(self) -> List[Account]:
        return self._store.load_accounts()
