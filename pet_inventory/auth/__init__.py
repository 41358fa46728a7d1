"""账号、登录会话与权限。"""
from pet_inventory.auth.models import Account, AccountRole, AccountStatus
from pet_inventory.auth.session import SessionManager
from pet_inventory.auth.access import AccessController

__all__ = ["Account", "AccountRole", "AccountStatus", "SessionManager", "AccessController"]
