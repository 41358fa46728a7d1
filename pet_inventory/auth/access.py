"""权限管控：必须登录才能操作库存与账号，只有管理员可管理账号。"""
import logging
from typing import TYPE_CHECKING, List, Optional

from pet_inventory.auth.models import Account, AccountRole, AccountStatus
from pet_inventory.auth.session import SessionManager
from pet_inventory.errors import NotAuthenticatedError, PermissionDeniedError

if TYPE_CHECKING:
    from pet_inventory.store.record_store import RecordStore

logger = logging.getLogger(__name__)


class AccessController:
    """无状态策略层：每次判断都重新读取当前会话。"""

    def __init__(self, sessions: SessionManager, store: "RecordStore"):
        self._sessions = sessions
        self._store = store

    @staticmethod
    def can_manage_accounts(account: Optional[Account]) -> bool:
        """是否可查看账号管理、屏蔽/解封员工。"""
        return account is not None and account.role == AccountRole.ADMIN

    @staticmethod
    def can_toggle(target: Account) -> bool:
        """管理员账号永远不能被屏蔽，无论由谁操作。"""
        return target.role != AccountRole.ADMIN

    def require_session(self) -> Account:
        """返回当前账号；未登录时抛出 NotAuthenticatedError，界面据此回到登录页。"""
        account = self._sessions.current_session()
        if account is None:
            raise NotAuthenticatedError()
        return account

    def require_admin(self) -> Account:
        account = self.require_session()
        if not self.can_manage_accounts(account):
            logger.warning("非管理员 %s 尝试执行管理操作", account.username)
            raise PermissionDeniedError()
        return account

    def list_accounts(self) -> List[Account]:
        self.require_admin()
        return self._store.load_accounts()

    def toggle_account_status(self, account_id: str) -> Optional[Account]:
        """在 ACTIVE 与 BLOCKED 间切换；目标为管理员或不存在时不做任何修改，返回 None。"""
        operator = self.require_admin()
        accounts = self._store.load_accounts()
        target = next((a for a in accounts if a.id == account_id), None)
        if target is None or not self.can_toggle(target):
            return None
        new_status = AccountStatus.ACTIVE if target.is_blocked else AccountStatus.BLOCKED
        updated = target.model_copy(update={"status": new_status.value})
        self._store.save_accounts([updated if a.id == account_id else a for a in accounts])
        logger.info("%s 将账号 %s 设为 %s", operator.username, updated.username, updated.status)
        return updated
