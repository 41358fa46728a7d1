"""密码加盐哈希与校验。"""
import hashlib
import hmac
import secrets

from pet_inventory.config import PASSWORD_HASH_ITERATIONS


def new_salt() -> str:
    return secrets.token_hex(16)


def hash_password(password: str, salt: str, iterations: int = PASSWORD_HASH_ITERATIONS) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return digest.hex()


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    """常量时间比较，避免按耗时猜测哈希。"""
    return hmac.compare_digest(hash_password(password, salt), password_hash)
