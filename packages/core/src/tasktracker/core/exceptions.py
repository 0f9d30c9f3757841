"""TaskTracker 异常体系

所有业务拒绝都派生自 TaskTrackerError，并携带对外的 HTTP 状态码。
网关层统一把它们渲染为 {timestamp, status, message}。
"""


class TaskTrackerError(Exception):
    """TaskTracker 基础异常"""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """
        Args:
            message: 面向调用方的错误描述
        """
        super().__init__(message)
        self.message = message


class PermissionDeniedError(TaskTrackerError):
    """授权规则未通过 -- 不产生任何状态变化"""

    status_code = 403

    def __init__(self, message: str = "You don't have permission") -> None:
        super().__init__(message)


class NotFoundError(TaskTrackerError):
    """资源不存在"""

    status_code = 404


class TaskNotFoundError(NotFoundError):
    """任务不存在"""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found with id: {task_id}")
        self.task_id = task_id


class UserNotFoundError(NotFoundError):
    """用户不存在"""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found with id: {user_id}")
        self.user_id = user_id


class InvalidSortError(TaskTrackerError):
    """排序参数非法"""

    status_code = 400


class InvalidChangeSetError(TaskTrackerError):
    """更新变更集非法"""

    status_code = 400
