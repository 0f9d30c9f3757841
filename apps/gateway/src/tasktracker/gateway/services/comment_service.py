"""CommentService -- 评论添加与查询业务逻辑"""

from datetime import UTC, datetime

import structlog
from tasktracker.access import Action, ensure_can_act
from tasktracker.core.exceptions import TaskNotFoundError
from tasktracker.core.models import Comment, Page, PageRequest, Principal
from tasktracker.core.store import StoreGroup

log = structlog.get_logger()


class CommentService:
    """评论业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def _ensure_task(self, principal: Principal, task_id: int, action: Action) -> None:
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        ensure_can_act(principal, task, action)

    async def add_comment(self, principal: Principal, task_id: int, text: str) -> Comment:
        """为任务添加评论（COMMENT）"""
        await self._ensure_task(principal, task_id, Action.COMMENT)
        comment = await self._stores.comment_store.save_comment(
            Comment(
                text=text,
                author=principal.as_ref(),
                task_id=task_id,
                created_date=datetime.now(UTC),
            )
        )
        log.info("comment_added", task_id=task_id, comment_id=comment.id)
        return comment

    async def list_comments(
        self,
        principal: Principal,
        task_id: int,
        page_request: PageRequest,
    ) -> Page[Comment]:
        """分页查询任务评论（READ），按创建时间正序"""
        await self._ensure_task(principal, task_id, Action.READ)
        return await self._stores.comment_store.list_for_task(task_id, page_request)
