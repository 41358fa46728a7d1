"""账号数据模型。"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountRole(str, Enum):
    """账号角色：管理员可管理账号，普通员工只能操作库存。"""
    ADMIN = "ADMIN"
    USER = "USER"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class Account(BaseModel):
    """员工账号（账号密码注册，仅保存加盐哈希）。"""
    id: str = Field(..., description="账号唯一 ID，创建后不变")
    username: str = Field(..., description="登录账号，区分大小写且唯一")
    password_hash: str = Field(..., description="密码哈希")
    salt: str = Field(..., description="盐")
    role: AccountRole = Field(AccountRole.USER, description="角色，创建后不变")
    status: AccountStatus = Field(AccountStatus.ACTIVE, description="状态，仅管理员可修改")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")

    model_config = ConfigDict(use_enum_values=True)

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    @property
    def is_blocked(self) -> bool:
        return self.status == AccountStatus.BLOCKED
