"""错误类型：校验、认证、流转、权限、存储与外部协作方。

所有错误都是可恢复的：调用方（界面）捕获 PetInventoryError 并提示用户，
不会改变已持久化的数据。
"""


class PetInventoryError(Exception):
    """库存管家所有错误的基类。"""
    message = "操作失败"

    def __init__(self, message: str = ""):
        super().__init__(message or self.message)


# 输入校验
class ValidationError(PetInventoryError):
    message = "输入不合法"


class MissingRequiredFieldError(ValidationError):
    """必填字段为空。"""

    def __init__(self, field: str, message: str = ""):
        self.field = field
        super().__init__(message or f"请填写必要信息: {field}")


class InvalidFieldError(ValidationError):
    def __init__(self, field: str, message: str = ""):
        self.field = field
        super().__init__(message or f"字段不合法: {field}")


# 认证与注册
class AuthError(PetInventoryError):
    message = "认证失败"


class InvalidCredentialsError(AuthError):
    message = "用户名或密码错误"


class AccountBlockedError(AuthError):
    message = "账号已被屏蔽，请联系管理员"


class UsernameTakenError(AuthError):
    message = "用户名已存在"


# 宠物记录
class NotFoundError(PetInventoryError):
    message = "记录不存在"


class InvalidTransitionError(PetInventoryError):
    message = "当前状态不允许该操作"


class IdSpaceExhaustedError(PetInventoryError):
    message = "宠物编号已用尽"


# 权限
class AccessError(PetInventoryError):
    message = "无权执行该操作"


class NotAuthenticatedError(AccessError):
    message = "请先登录"


class PermissionDeniedError(AccessError):
    message = "仅管理员可执行该操作"


# 存储
class StoreError(PetInventoryError):
    message = "数据存储错误"


class StoreCorruptedError(StoreError):
    def __init__(self, path, reason: str = ""):
        self.path = path
        super().__init__(f"数据文件损坏: {path}" + (f" ({reason})" if reason else ""))


# 外部协作方（扫码、喂养建议）
class CollaboratorError(PetInventoryError):
    message = "外部服务不可用"


class ScannerUnavailableError(CollaboratorError):
    message = "未找到可用的摄像头设备。"
