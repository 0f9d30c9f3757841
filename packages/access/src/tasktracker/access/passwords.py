"""口令哈希 -- bcrypt

摘要为标准 modular crypt 格式（$2b$<rounds>$...），轮数编码在摘要内，
调整配置后旧摘要仍可校验。
"""

import bcrypt

from .config import DEFAULT_BCRYPT_ROUNDS

# bcrypt 只使用口令的前 72 字节
_BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """生成加盐口令摘要"""
    return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds)).decode("ascii")


def verify_password(password: str, encoded: str) -> bool:
    """校验口令，格式损坏的摘要一律视为不匹配"""
    try:
        return bcrypt.checkpw(_secret(password), encoded.encode("ascii"))
    except ValueError:
        # 非 bcrypt 摘要或含非 ASCII 字符
        return False
