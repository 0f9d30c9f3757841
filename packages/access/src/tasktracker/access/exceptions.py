"""认证异常体系

token 问题和身份消失都在认证阶段拒绝请求（401），不进入授权。
"""

from tasktracker.core.exceptions import TaskTrackerError


class AuthenticationError(TaskTrackerError):
    """认证阶段基础异常"""

    status_code = 401


class MalformedTokenError(AuthenticationError):
    """签名无效或结构损坏的 token"""

    def __init__(self, message: str = "Incorrect JWT token") -> None:
        super().__init__(message)


class ExpiredTokenError(AuthenticationError):
    """已过期的 token"""

    def __init__(self, message: str = "JWT token expired") -> None:
        super().__init__(message)


class UnknownPrincipalError(AuthenticationError):
    """token 合法，但其身份已不存在（账号被删除等）"""

    def __init__(self, identity: str) -> None:
        super().__init__("Email not registered")
        self.identity = identity


class AuthenticationRequiredError(AuthenticationError):
    """受保护路由缺少 bearer 凭证"""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """登录口令错误"""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class InvalidTokenStateError(TaskTrackerError):
    """为没有角色的身份签发 token"""

    status_code = 500

    def __init__(self, message: str = "User has no roles assigned") -> None:
        super().__init__(message)


class EmailAlreadyExistsError(TaskTrackerError):
    """注册时邮箱已存在"""

    status_code = 400

    def __init__(self, email: str) -> None:
        super().__init__("Email already exists")
        self.email = email
